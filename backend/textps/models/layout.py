"""
版面模型 - 纸张尺寸与版面参数

单位约定：
- 几何量统一为 PostScript 点（1/72 英寸）
- 行高/游标为排版器像素，仅在 to_pixels/to_points 处换算
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .text import FontSpec


class Direction(str, Enum):
    """书写方向"""
    LTR = "ltr"
    RTL = "rtl"


class Orientation(str, Enum):
    """纸张方向"""
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class PaperSize(BaseModel):
    """标准纸张尺寸（纵向）"""
    name: str
    width: float
    height: float

    model_config = {"frozen": True}


PAPER_SIZES: dict[str, PaperSize] = {
    "a4": PaperSize(name="A4", width=595.28, height=841.89),
    "letter": PaperSize(name="US Letter", width=612, height=792),
    "legal": PaperSize(name="US Legal", width=612, height=1008),
}


class LayoutParameters(BaseModel):
    """版面参数（由几何解析器一次性推导）

    header_height / footer_height 由页眉生成器按页写入，
    其余字段推导后只读。
    """

    # 纸张（已按方向交换）
    page_width: float
    page_height: float

    # 分栏
    num_columns: int = 1
    column_width: float
    column_height: float
    gutter_width: float = 40

    # 边距
    top_margin: float = 36
    bottom_margin: float = 36
    left_margin: float = 36
    right_margin: float = 36

    # 页眉
    header_separation: float = 0
    header_height: float = 0
    footer_height: float = 0

    # 单位换算：1pt = point_to_pixel 像素
    point_to_pixel: float = 1.0

    direction: Direction = Direction.LTR
    orientation: Orientation = Orientation.PORTRAIT
    duplex: bool = True
    tumble: bool = True
    justify: bool = False
    separation_line: bool = True
    draw_header: bool = False
    divider_gutter_multiplier: float = 1.5

    body_font: FontSpec = Field(default_factory=FontSpec)
    header_font: FontSpec = Field(default_factory=lambda: FontSpec(name="Courier-Bold"))
    tab_width: int = 8

    @property
    def pixel_to_point(self) -> float:
        return 1.0 / self.point_to_pixel

    @property
    def landscape(self) -> bool:
        return self.orientation == Orientation.LANDSCAPE

    @property
    def is_rtl(self) -> bool:
        return self.direction == Direction.RTL

    @property
    def column_capacity(self) -> float:
        """栏容量（像素），不取整"""
        return self.column_height * self.point_to_pixel

    @property
    def body_top(self) -> float:
        """正文顶端到纸张上沿的距离"""
        return self.top_margin + self.header_separation

    def to_pixels(self, points: float) -> float:
        return points * self.point_to_pixel

    def to_points(self, pixels: float) -> float:
        return pixels * self.pixel_to_point
