"""
流水线阶段定义

职责：
1. 定义各阶段的名称和顺序
2. 各阶段的处理由执行器按名称分派

测试要点：
- test_stage_order: 阶段顺序与数据流一致
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StageEnum(str, Enum):
    """流水线阶段枚举"""
    READ_INPUT = "READ_INPUT"
    RESOLVE_GEOMETRY = "RESOLVE_GEOMETRY"
    SEGMENT_PARAGRAPHS = "SEGMENT_PARAGRAPHS"
    SHAPE_LINES = "SHAPE_LINES"
    FLOW_LINES = "FLOW_LINES"
    EMIT_POSTSCRIPT = "EMIT_POSTSCRIPT"


@dataclass
class PipelineStage:
    """流水线阶段"""
    name: str


# 渲染流水线各阶段（顺序即数据流）
RENDER_STAGES: list[PipelineStage] = [
    PipelineStage(StageEnum.READ_INPUT.value),
    PipelineStage(StageEnum.RESOLVE_GEOMETRY.value),
    PipelineStage(StageEnum.SEGMENT_PARAGRAPHS.value),
    PipelineStage(StageEnum.SHAPE_LINES.value),
    PipelineStage(StageEnum.FLOW_LINES.value),
    PipelineStage(StageEnum.EMIT_POSTSCRIPT.value),
]
