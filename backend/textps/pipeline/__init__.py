"""
流水线模块 - 渲染任务编排与执行

子模块：
- stages: 流水线各阶段定义
- executor: 流水线执行器
"""

from .executor import PipelineExecutor, create_job
from .stages import RENDER_STAGES, PipelineStage, StageEnum

__all__ = [
    "PipelineStage",
    "StageEnum",
    "RENDER_STAGES",
    "PipelineExecutor",
    "create_job",
]
