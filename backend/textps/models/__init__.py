"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- LayoutParameters: 版面参数（几何解析器产出）
- Paragraph / ShapedLine: 段落与已排版行
- PlacementEvent / FlowResult: 分栏引擎输出的放置事件流
- RenderJob: 单次渲染任务
"""

from .events import (
    EndColumn,
    EndPage,
    FlowResult,
    HeaderRule,
    HeaderSlot,
    HeaderText,
    PlaceLine,
    PlacementEvent,
    StartColumn,
    StartPage,
)
from .job import JobProgress, JobStats, JobStatus, RenderJob
from .layout import PAPER_SIZES, Direction, LayoutParameters, Orientation, PaperSize
from .text import FontSpec, Paragraph, Rect, ShapedLine, printable_text

__all__ = [
    "LayoutParameters",
    "PaperSize",
    "PAPER_SIZES",
    "Direction",
    "Orientation",
    "FontSpec",
    "Rect",
    "Paragraph",
    "ShapedLine",
    "printable_text",
    "PlacementEvent",
    "StartPage",
    "StartColumn",
    "PlaceLine",
    "EndColumn",
    "EndPage",
    "HeaderSlot",
    "HeaderText",
    "HeaderRule",
    "FlowResult",
    "RenderJob",
    "JobStatus",
    "JobProgress",
    "JobStats",
]
