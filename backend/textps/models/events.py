"""
放置事件模型 - 分栏引擎与输出器之间的有序契约

事件必须按文档顺序单遍消费，输出器不需要向前查看
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .text import ShapedLine


class StartPage(BaseModel):
    """开始新页（隐含开始第0栏）"""
    kind: Literal["start_page"] = "start_page"
    page_index: int


class StartColumn(BaseModel):
    """页内开始下一栏"""
    kind: Literal["start_column"] = "start_column"
    column_index: int


class PlaceLine(BaseModel):
    """放置一行：y_offset 为放置后栏内累计高度（像素，向下增长）"""
    kind: Literal["place_line"] = "place_line"
    column_index: int
    y_offset: float
    line: ShapedLine


class EndColumn(BaseModel):
    """结束一栏（仅在绘制分隔线时出现）"""
    kind: Literal["end_column"] = "end_column"
    column_index: int


class EndPage(BaseModel):
    """结束页"""
    kind: Literal["end_page"] = "end_page"
    page_index: int


class HeaderSlot(str, Enum):
    """页眉片段位置"""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class HeaderText(BaseModel):
    """页眉文本（绝对坐标，pt，向上增长）"""
    kind: Literal["header_text"] = "header_text"
    slot: HeaderSlot
    x: float
    y: float
    line: ShapedLine


class HeaderRule(BaseModel):
    """页眉分隔线（绝对坐标，pt）"""
    kind: Literal["header_rule"] = "header_rule"
    x_start: float
    x_end: float
    y: float


PlacementEvent = Annotated[
    Union[StartPage, StartColumn, PlaceLine, EndColumn, EndPage, HeaderText, HeaderRule],
    Field(discriminator="kind"),
]


class FlowResult(BaseModel):
    """分栏结果"""
    events: list[PlacementEvent] = Field(default_factory=list)
    page_count: int = 0
    # 超过栏容量、仍被放置的行（输入序号）
    degenerate_lines: list[int] = Field(default_factory=list)

    def of_kind(self, kind: str) -> list[PlacementEvent]:
        """按类型筛选事件"""
        return [e for e in self.events if e.kind == kind]

    @property
    def placed_lines(self) -> list[PlaceLine]:
        return [e for e in self.events if isinstance(e, PlaceLine)]
