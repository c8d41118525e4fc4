"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(layout_one_column, lines_of):
        lines = lines_of([400, 400, 400])
        result = LineFlowEngine().flow(lines, layout_one_column, draw_header=False)
"""

from __future__ import annotations

import tempfile
import uuid
from datetime import datetime
from pathlib import Path
from typing import Generator, Sequence

import pytest

from textps.config import RenderConfig
from textps.interfaces import ITextShaper
from textps.layout import GeometryResolver
from textps.models import (
    FontSpec,
    LayoutParameters,
    Paragraph,
    Rect,
    RenderJob,
    ShapedLine,
)

FIXED_TIMESTAMP = datetime(2024, 3, 1, 9, 30, 0)


# ============================================================================
# 假排版器
# ============================================================================

def make_line(
    text: str = "x",
    height: float = 100,
    width: float | None = None,
    *,
    force_break_after: bool = False,
    font: FontSpec | None = None,
) -> ShapedLine:
    """构造固定高度的已排版行（像素）"""
    if width is None:
        width = 10 * len(text)
    rect = Rect(x=0, y=-height, width=width, height=height)
    return ShapedLine(
        text=text,
        logical_rect=rect,
        ink_rect=rect,
        font=font or FontSpec(),
        force_break_after=force_break_after,
    )


def make_lines(heights: Sequence[float], formfeed_after: Sequence[int] = ()) -> list[ShapedLine]:
    """按行高列表构造行序列；formfeed_after 中的序号带换页标记"""
    return [
        make_line(f"line {i + 1}", h, force_break_after=i in formfeed_after)
        for i, h in enumerate(heights)
    ]


class FixedHeightShaper(ITextShaper):
    """固定行高假排版器：段落按 '|' 拆成多行，每个字符宽 char_width 像素"""

    def __init__(self, height: float = 100, char_width: float = 10):
        self.height = height
        self.char_width = char_width

    def shape_paragraph(self, paragraph: Paragraph, layout: LayoutParameters) -> list[ShapedLine]:
        parts = paragraph.text.split("|")
        last = len(parts) - 1
        return [
            make_line(
                part,
                self.height,
                self.char_width * len(part),
                force_break_after=paragraph.formfeed and i == last,
                font=layout.body_font,
            )
            for i, part in enumerate(parts)
        ]

    def shape_fragment(self, text: str, font: FontSpec, layout: LayoutParameters) -> ShapedLine:
        return make_line(text, self.height, self.char_width * len(text), font=font)


@pytest.fixture
def fixed_shaper() -> FixedHeightShaper:
    """固定行高（100像素）假排版器"""
    return FixedHeightShaper()


@pytest.fixture
def fixed_timestamp() -> datetime:
    """固定页眉时间戳"""
    return FIXED_TIMESTAMP


@pytest.fixture
def lines_of():
    """行序列工厂：lines_of([400, 400], formfeed_after=[0])"""
    return make_lines


@pytest.fixture
def line_of():
    """单行工厂"""
    return make_line


# ============================================================================
# 版面 Fixtures
# ============================================================================

@pytest.fixture
def default_config() -> RenderConfig:
    """默认渲染配置（A4纵向单栏）"""
    return RenderConfig()


def resolve_layout(**sections) -> LayoutParameters:
    """按分节覆盖项推导版面参数"""
    config = RenderConfig().with_overrides(sections)
    return GeometryResolver().resolve(config)


@pytest.fixture
def layout_factory():
    """版面工厂：layout_factory(page={"columns": 2})"""
    return resolve_layout


@pytest.fixture
def layout_one_column() -> LayoutParameters:
    """Letter 纵向单栏，栏高720pt，1pt = 1像素"""
    return resolve_layout(
        page={"paper": "letter"},
        shaper={"resolution_dpi": 72},
    )


@pytest.fixture
def layout_three_columns() -> LayoutParameters:
    """Letter 纵向三栏，1pt = 1像素"""
    return resolve_layout(
        page={"paper": "letter", "columns": 3},
        shaper={"resolution_dpi": 72},
    )


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_text_path(temp_dir: Path) -> Path:
    """示例文本文件（两段 + 换页 + 一段）"""
    path = temp_dir / "sample.txt"
    path.write_text("first paragraph\nsecond (paragraph)\f\nafter the break\n", encoding="utf-8")
    return path


# ============================================================================
# Job Fixtures
# ============================================================================

@pytest.fixture
def temp_job(sample_text_path: Path, temp_dir: Path) -> RenderJob:
    """临时任务（输入为示例文本，输出到临时目录）"""
    return RenderJob(
        job_id=str(uuid.uuid4()),
        input_path=sample_text_path,
        output_path=temp_dir / "out" / "sample.ps",
    )
