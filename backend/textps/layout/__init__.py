"""
排版模块 - 版面几何/段落切分/断行/分栏/页眉

子模块：
- geometry: 配置 → 版面参数；行落点与分隔线几何
- segmenter: 全文 → 段落 → 行
- shaper: 标准字体测量与断行
- flow: 分栏流引擎（核心）
- header: 页眉生成
"""

from .flow import FlowState, LineFlowEngine
from .geometry import GeometryResolver, column_x, divider_span, divider_x, line_anchor
from .header import HeaderComposer
from .segmenter import ParagraphSegmenter
from .shaper import StandardFontShaper

__all__ = [
    "GeometryResolver",
    "ParagraphSegmenter",
    "StandardFontShaper",
    "LineFlowEngine",
    "FlowState",
    "HeaderComposer",
    "column_x",
    "line_anchor",
    "divider_x",
    "divider_span",
]
