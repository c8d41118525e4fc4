"""
页眉生成器 - 每页左/中/右三段页眉 + 分隔线

- 左：日期时间（本地化 %c）
- 中：文档标题（文件名）
- 右："Page N"

三段共用基线 page_height - top_margin - header_height；
header_height 写回版面参数，供本页分隔线等后续几何使用。
"""

from __future__ import annotations

from datetime import datetime

from ..interfaces import IHeaderComposer, ITextShaper
from ..models import HeaderRule, HeaderSlot, HeaderText, LayoutParameters, PlacementEvent

# 页眉基线下移量 = 页眉行逻辑高度 / 3
HEADER_HEIGHT_DIVISOR = 3.0


class HeaderComposer(IHeaderComposer):
    """页眉生成器实现"""

    def __init__(
        self,
        shaper: ITextShaper,
        title: str,
        timestamp: datetime | None = None,
        date_format: str = "%c",
    ):
        self.shaper = shaper
        self.title = title
        # 整个文档使用同一时间戳，保证各页一致
        self.timestamp = timestamp or datetime.now()
        self.date_format = date_format

    def fragments(self, page_index: int) -> tuple[str, str, str]:
        """(左, 中, 右) 文本"""
        return (
            self.timestamp.strftime(self.date_format),
            self.title,
            f"Page {page_index}",
        )

    def compose(self, layout: LayoutParameters, page_index: int) -> list[PlacementEvent]:
        """生成本页页眉事件"""
        left_text, center_text, right_text = self.fragments(page_index)
        font = layout.header_font

        left = self.shaper.shape_fragment(left_text, font, layout)
        center = self.shaper.shape_fragment(center_text, font, layout)
        right = self.shaper.shape_fragment(right_text, font, layout)

        header_height = layout.to_points(left.height) / HEADER_HEIGHT_DIVISOR
        layout.header_height = header_height

        y_pos = layout.page_height - layout.top_margin - header_height
        rule_y = y_pos - layout.header_separation / 2

        return [
            HeaderText(
                slot=HeaderSlot.LEFT,
                x=layout.left_margin,
                y=y_pos,
                line=left,
            ),
            HeaderText(
                slot=HeaderSlot.CENTER,
                x=(layout.page_width - layout.to_points(center.width)) / 2,
                y=y_pos,
                line=center,
            ),
            HeaderText(
                slot=HeaderSlot.RIGHT,
                x=layout.page_width - layout.right_margin - layout.to_points(right.width),
                y=y_pos,
                line=right,
            ),
            HeaderRule(
                x_start=layout.left_margin,
                x_end=layout.page_width - layout.right_margin,
                y=rule_y,
            ),
        ]
