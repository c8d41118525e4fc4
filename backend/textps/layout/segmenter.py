"""
段落切分器 - 全文 → 段落 → 已排版行

职责：
1. 按 \\n / \\f 切分段落，\\f 结尾的段落标记 formfeed
2. 调用排版器逐段断行
3. 换页段落的最后一行标记 force_break_after

测试要点：
- test_split_newlines: 换行切分与空行保留
- test_formfeed_flag: 换页符标记
- test_trailing_newline: 末尾补换行
- test_force_break_on_last_line: 只有最后一行带换页标记
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..interfaces import IParagraphSegmenter, ITextShaper, ShapingError
from ..models import LayoutParameters, Paragraph, ShapedLine

logger = logging.getLogger(__name__)

PARAGRAPH_BREAKS = ("\n", "\f")


class ParagraphSegmenter(IParagraphSegmenter):
    """段落切分器实现"""

    def __init__(self, shaper: ITextShaper):
        self.shaper = shaper

    def split_paragraphs(self, text: str) -> list[Paragraph]:
        """按换行/换页切分"""
        if text and not text.endswith("\n"):
            text += "\n"

        paragraphs: list[Paragraph] = []
        start = 0
        for pos, ch in enumerate(text):
            if ch not in PARAGRAPH_BREAKS:
                continue
            paragraphs.append(
                Paragraph(
                    start=start,
                    length=pos - start,
                    text=text[start:pos],
                    formfeed=ch == "\f",
                    index=len(paragraphs),
                )
            )
            start = pos + 1

        return paragraphs

    def split_lines(
        self, paragraphs: Sequence[Paragraph], layout: LayoutParameters
    ) -> list[ShapedLine]:
        """逐段断行并拼接"""
        lines: list[ShapedLine] = []
        for para in paragraphs:
            para_lines = self.shaper.shape_paragraph(para, layout)
            if not para_lines:
                raise ShapingError(f"排版器未返回任何行: 段落{para.index}")

            last = para_lines[-1]
            if para.formfeed and not last.force_break_after:
                para_lines[-1] = last.model_copy(update={"force_break_after": True})

            lines.extend(para_lines)

        logger.debug(f"{len(paragraphs)}段 → {len(lines)}行")
        return lines
