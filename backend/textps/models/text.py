"""
文本模型 - 段落/已排版行/字体描述

ShapedLine 由排版器产生并持有，分栏引擎只读引用
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

# Pango风格的族名别名 → PostScript标准字体族
FAMILY_ALIASES: dict[str, str] = {
    "monospace": "Courier",
    "mono": "Courier",
    "courier": "Courier",
    "sans": "Helvetica",
    "sans-serif": "Helvetica",
    "helvetica": "Helvetica",
    "serif": "Times",
    "times": "Times",
}

# (族, 粗体, 斜体) → 标准字体名
_STANDARD_FACES: dict[tuple[str, bool, bool], str] = {
    ("Courier", False, False): "Courier",
    ("Courier", True, False): "Courier-Bold",
    ("Courier", False, True): "Courier-Oblique",
    ("Courier", True, True): "Courier-BoldOblique",
    ("Helvetica", False, False): "Helvetica",
    ("Helvetica", True, False): "Helvetica-Bold",
    ("Helvetica", False, True): "Helvetica-Oblique",
    ("Helvetica", True, True): "Helvetica-BoldOblique",
    ("Times", False, False): "Times-Roman",
    ("Times", True, False): "Times-Bold",
    ("Times", False, True): "Times-Italic",
    ("Times", True, True): "Times-BoldItalic",
}

_SIZE_RE = re.compile(r"^\d+(\.\d+)?$")


def printable_text(text: str) -> str:
    """标准字体按 ISO-8859-1 输出：控制字符与超出 Latin-1 的字符替换为 '?'"""
    return "".join(
        ch if (" " <= ch <= "~" or "\xa0" <= ch <= "\xff") else "?"
        for ch in text
    )


class FontSpec(BaseModel):
    """字体描述"""
    name: str = Field("Courier", description="PostScript字体名")
    size: float = Field(12, description="字号(pt)")

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, desc: str, default_size: float = 12) -> FontSpec:
        """
        解析 "Family [Bold] [Italic] [size]" 形式的字体描述

        例如 "Monospace Bold 12" → Courier-Bold 12pt
        """
        words = desc.split()
        size = default_size
        if words and _SIZE_RE.match(words[-1]):
            size = float(words.pop())

        bold = italic = False
        family_words = []
        for word in words:
            lowered = word.lower()
            if lowered == "bold":
                bold = True
            elif lowered in ("italic", "oblique"):
                italic = True
            else:
                family_words.append(word)

        family = " ".join(family_words) or "Monospace"
        return cls(name=cls.face_name(family, bold, italic), size=size)

    @staticmethod
    def face_name(family: str, bold: bool = False, italic: bool = False) -> str:
        """族名 → 标准字体名；无法识别的族名原样返回"""
        base = FAMILY_ALIASES.get(family.lower(), family)
        return _STANDARD_FACES.get((base, bold, italic), base)


class Rect(BaseModel):
    """矩形（排版器像素单位）"""
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    model_config = {"frozen": True}


class Paragraph(BaseModel):
    """段落（原文区间 + 换页标记）"""
    start: int = Field(..., description="在全文中的起始字符位置")
    length: int = Field(..., description="字符数，可为0（空行）")
    text: str = ""
    formfeed: bool = Field(False, description="段落末尾是否换页")
    index: int = 0

    @property
    def end(self) -> int:
        return self.start + self.length


class ShapedLine(BaseModel):
    """已排版的一行"""
    text: str
    logical_rect: Rect
    ink_rect: Rect
    font: FontSpec = Field(default_factory=FontSpec)
    force_break_after: bool = Field(False, description="放置后强制换栏/换页")
    paragraph_index: int = 0
    line_index: int = 0
    # 两端对齐时每个空格额外增加的宽度（pt）
    justify_space: float = 0.0

    model_config = {"frozen": True}

    @property
    def height(self) -> float:
        """逻辑高度（像素）"""
        return self.logical_rect.height

    @property
    def width(self) -> float:
        """逻辑宽度（像素）"""
        return self.logical_rect.width
