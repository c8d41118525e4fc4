"""
标准字体排版器 - 文本测量与断行

使用 ReportLab 的标准字体度量（pdfmetrics）计算：
- 文本宽度（stringWidth）
- 行高（字号 × 行距），墨迹高度（ascent - descent）
- 贪心断行：在空白处断开，超宽单词按字符强制断开

所有矩形以排版器像素为单位（1pt = layout.point_to_pixel 像素，取整）。
这里只负责 Latin-1 范围的标准字体，复杂文字整形不在此实现。
"""

from __future__ import annotations

import re

from reportlab.pdfbase import pdfmetrics

from ..interfaces import ITextShaper, ShapingError
from ..models import FontSpec, LayoutParameters, Paragraph, Rect, ShapedLine, printable_text

_TOKEN_RE = re.compile(r"\S+|\s+")


class StandardFontShaper(ITextShaper):
    """基于 ReportLab 标准字体度量的排版器"""

    def __init__(self, line_spacing: float = 1.2):
        self.line_spacing = line_spacing
        self._known_fonts: set[str] = set()

    def shape_paragraph(
        self, paragraph: Paragraph, layout: LayoutParameters
    ) -> list[ShapedLine]:
        """段落断行"""
        font = layout.body_font
        self._ensure_font(font)

        text = paragraph.text.expandtabs(layout.tab_width)
        max_width = layout.column_width
        texts = self._wrap(text, font, max_width)

        lines = []
        last = len(texts) - 1
        for i, line_text in enumerate(texts):
            justify_space = 0.0
            if layout.justify and i < last:
                justify_space = self._justify_space(line_text, font, max_width)

            lines.append(
                self._make_line(
                    line_text,
                    font,
                    layout,
                    force_break_after=paragraph.formfeed and i == last,
                    paragraph_index=paragraph.index,
                    line_index=i,
                    justify_space=justify_space,
                    stretch_to=max_width if justify_space else None,
                )
            )
        return lines

    def shape_fragment(
        self, text: str, font: FontSpec, layout: LayoutParameters
    ) -> ShapedLine:
        """单行片段（不断行）"""
        self._ensure_font(font)
        return self._make_line(text, font, layout)

    def measure(self, text: str, font: FontSpec) -> float:
        """文本宽度（pt），末尾空白不计"""
        return pdfmetrics.stringWidth(printable_text(text.rstrip()), font.name, font.size)

    def _ensure_font(self, font: FontSpec) -> None:
        if font.name in self._known_fonts:
            return
        try:
            pdfmetrics.getFont(font.name)
        except KeyError as e:
            raise ShapingError(f"未知字体: {font.name}") from e
        self._known_fonts.add(font.name)

    def _fits(self, text: str, font: FontSpec, max_width: float) -> bool:
        return self.measure(text, font) <= max_width

    def _wrap(self, text: str, font: FontSpec, max_width: float) -> list[str]:
        """贪心断行；空段落返回一个空行"""
        if not text:
            return [""]

        lines: list[str] = []
        current = ""
        for token in _TOKEN_RE.findall(text):
            if token.isspace() or self._fits(current + token, font, max_width):
                current += token
                continue

            if current.strip():
                lines.append(current.rstrip())
                current = ""

            # 单词放不下：逐字符填充
            for ch in token:
                if current and not self._fits(current + ch, font, max_width):
                    lines.append(current.rstrip())
                    current = ""
                current += ch

        lines.append(current.rstrip())
        return lines

    def _justify_space(self, text: str, font: FontSpec, max_width: float) -> float:
        """两端对齐：把剩余宽度平均分给空格"""
        spaces = text.count(" ")
        if not spaces:
            return 0.0
        slack = max_width - self.measure(text, font)
        return max(slack, 0.0) / spaces

    def _make_line(
        self,
        text: str,
        font: FontSpec,
        layout: LayoutParameters,
        *,
        force_break_after: bool = False,
        paragraph_index: int = 0,
        line_index: int = 0,
        justify_space: float = 0.0,
        stretch_to: float | None = None,
    ) -> ShapedLine:
        width = stretch_to if stretch_to is not None else self.measure(text, font)
        ascent, descent = pdfmetrics.getAscentDescent(font.name, font.size)

        def px(points: float) -> int:
            return round(layout.to_pixels(points))

        logical = Rect(
            x=0,
            y=-px(ascent),
            width=px(width),
            height=px(font.size * self.line_spacing),
        )
        ink = Rect(
            x=0,
            y=-px(ascent),
            width=px(self.measure(text, font)),
            height=px(ascent - descent),
        )
        return ShapedLine(
            text=text,
            logical_rect=logical,
            ink_rect=ink,
            font=font,
            force_break_after=force_break_after,
            paragraph_index=paragraph_index,
            line_index=line_index,
            justify_space=justify_space,
        )
