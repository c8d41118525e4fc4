"""
几何解析器 - 由配置推导版面常量

职责：
1. 选择纸张、按横向交换宽高
2. 计算栏宽/栏高、页眉间距、单位换算系数
3. 双面/翻转默认值（随纸张方向）
4. 提供行落点与栏间分隔线的几何计算（输出器复用）

测试要点：
- test_resolve_a4_defaults: A4默认版面
- test_landscape_swap: 横向交换宽高
- test_column_width_invariant: 栏宽恒等式
- test_invalid_geometry: 栏宽/栏高非正、栏数<1、纸张未知
- test_divider_x: 分隔线位置（含旧版非对称公式与RTL镜像）
"""

from __future__ import annotations

import logging

from ..config import RenderConfig
from ..interfaces import ConfigError, IGeometryResolver
from ..models import (
    PAPER_SIZES,
    Direction,
    FontSpec,
    LayoutParameters,
    Orientation,
    ShapedLine,
)

logger = logging.getLogger(__name__)

POINTS_PER_INCH = 72.0

# 纸张方向 → (duplex, tumble) 默认值，可被配置显式覆盖
# 沿用旧版行为：横向与纵向取值相同，保留按方向查表的结构
PRINTER_DEFAULTS: dict[Orientation, tuple[bool, bool]] = {
    Orientation.PORTRAIT: (True, True),
    Orientation.LANDSCAPE: (True, True),
}


class GeometryResolver(IGeometryResolver):
    """几何解析器实现（无状态）"""

    def resolve(self, config: RenderConfig) -> LayoutParameters:
        """配置 → 版面参数"""
        page = config.page

        paper = PAPER_SIZES.get(page.paper.strip().lower())
        if paper is None:
            known = "/".join(PAPER_SIZES)
            raise ConfigError(f"未知纸张: {page.paper}（可选: {known}）")

        if page.columns < 1:
            raise ConfigError(f"栏数必须≥1: {page.columns}")

        try:
            direction = Direction(config.text.direction.strip().lower())
        except ValueError as e:
            raise ConfigError(f"未知书写方向: {config.text.direction}") from e

        if config.shaper.resolution_dpi <= 0:
            raise ConfigError(f"排版器分辨率必须为正: {config.shaper.resolution_dpi}")

        # 横向：交换宽高
        page_width, page_height = paper.width, paper.height
        orientation = Orientation.LANDSCAPE if page.landscape else Orientation.PORTRAIT
        if orientation == Orientation.LANDSCAPE:
            page_width, page_height = page_height, page_width

        duplex_default, tumble_default = PRINTER_DEFAULTS[orientation]
        duplex = config.printer.duplex if config.printer.duplex is not None else duplex_default
        tumble = config.printer.tumble if config.printer.tumble is not None else tumble_default

        header_sep = config.header.separation if config.header.enabled else 0
        total_gutter = 0 if page.columns == 1 else page.gutter_width * (page.columns - 1)

        column_height = page_height - page.top_margin - header_sep - page.bottom_margin
        column_width = (
            page_width - page.left_margin - page.right_margin - total_gutter
        ) / page.columns

        if column_width <= 0:
            raise ConfigError(
                f"栏宽不为正: {column_width:.2f}pt（纸宽{page_width}，栏数{page.columns}）"
            )
        if column_height <= 0:
            raise ConfigError(f"栏高不为正: {column_height:.2f}pt（纸高{page_height}）")

        layout = LayoutParameters(
            page_width=page_width,
            page_height=page_height,
            num_columns=page.columns,
            column_width=column_width,
            column_height=column_height,
            gutter_width=page.gutter_width,
            top_margin=page.top_margin,
            bottom_margin=page.bottom_margin,
            left_margin=page.left_margin,
            right_margin=page.right_margin,
            header_separation=header_sep,
            point_to_pixel=config.shaper.resolution_dpi / POINTS_PER_INCH,
            direction=direction,
            orientation=orientation,
            duplex=duplex,
            tumble=tumble,
            justify=config.text.justify,
            separation_line=config.separator.enabled,
            draw_header=config.header.enabled,
            divider_gutter_multiplier=config.separator.gutter_multiplier,
            body_font=FontSpec.parse(config.fonts.family, default_size=config.fonts.size),
            header_font=FontSpec.parse(config.fonts.header_font),
            tab_width=config.shaper.tab_width,
        )

        logger.info(
            f"版面: {paper.name} {orientation.value} {page_width}x{page_height}pt, "
            f"{page.columns}栏 栏宽{column_width:.2f} 栏高{column_height:.2f}"
        )
        return layout


def column_x(layout: LayoutParameters, column_index: int) -> float:
    """栏左边界x（RTL时栏序镜像，第0栏在最右）"""
    slot = column_index
    if layout.is_rtl:
        slot = layout.num_columns - 1 - column_index
    return layout.left_margin + slot * (layout.column_width + layout.gutter_width)


def line_anchor(
    layout: LayoutParameters, column_index: int, y_offset: float, line: ShapedLine
) -> tuple[float, float]:
    """
    行落点（pt，页面坐标向上增长）

    Args:
        column_index: 栏序号
        y_offset: 栏内累计高度（像素，含本行）
        line: 已排版行（RTL时按行宽右对齐）
    """
    x_pos = column_x(layout, column_index)
    if layout.is_rtl:
        x_pos += layout.column_width - layout.to_points(line.width)

    y_pos = (
        layout.page_height
        - layout.top_margin
        - layout.header_separation
        - layout.to_points(y_offset)
    )
    return x_pos, y_pos


def divider_x(layout: LayoutParameters, column_index: int) -> float:
    """
    第 column_index 栏结束后的分隔线x

    第1条分隔线位于栏间距中点；之后的分隔线沿用旧版公式
    (b + multiplier) * gutter，RTL时分界序号镜像为 num_columns - b。
    """
    boundary = column_index + 1
    if layout.is_rtl:
        boundary = layout.num_columns - boundary

    if boundary == 1:
        gutter_offset = layout.gutter_width / 2
    else:
        gutter_offset = (boundary + layout.divider_gutter_multiplier) * layout.gutter_width

    return layout.left_margin + layout.column_width * boundary + gutter_offset


def divider_span(layout: LayoutParameters) -> tuple[float, float]:
    """分隔线纵向范围 (y_top, y_bottom)，依赖本页已写入的页眉/页脚高度"""
    y_top = (
        layout.page_height
        - layout.top_margin
        - layout.header_height
        - layout.header_separation / 2
    )
    y_bottom = layout.bottom_margin - layout.footer_height
    return y_top, y_bottom
