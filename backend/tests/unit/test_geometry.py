"""
几何解析器单元测试

运行：pytest backend/tests/unit/test_geometry.py -v
"""

import pytest

from textps.config import RenderConfig
from textps.interfaces import ConfigError
from textps.layout import GeometryResolver, column_x, divider_span, divider_x, line_anchor
from textps.models import Direction, Orientation


class TestGeometryResolver:
    """版面参数推导测试"""

    def test_resolve_a4_defaults(self, default_config: RenderConfig):
        """测试A4默认版面"""
        layout = GeometryResolver().resolve(default_config)

        assert layout.page_width == pytest.approx(595.28)
        assert layout.page_height == pytest.approx(841.89)
        assert layout.num_columns == 1
        assert layout.column_width == pytest.approx(595.28 - 72)
        assert layout.column_height == pytest.approx(841.89 - 72)
        assert layout.header_separation == 0
        assert layout.point_to_pixel == pytest.approx(10.0)
        assert layout.pixel_to_point == pytest.approx(0.1)
        assert layout.orientation == Orientation.PORTRAIT

    def test_landscape_swap(self, layout_factory):
        """测试横向交换宽高"""
        layout = layout_factory(page={"paper": "letter", "landscape": True})

        assert layout.page_width == 792
        assert layout.page_height == 612
        assert layout.landscape
        assert layout.column_height == pytest.approx(612 - 72)

    def test_column_width_invariant(self, layout_factory):
        """测试栏宽恒等式"""
        for columns in (1, 2, 3, 5):
            layout = layout_factory(page={"paper": "letter", "columns": columns})
            gutter_total = 0 if columns == 1 else 40 * (columns - 1)
            total = (
                layout.column_width * columns
                + gutter_total
                + layout.left_margin
                + layout.right_margin
            )
            assert total == pytest.approx(layout.page_width)

    def test_header_separation(self, layout_factory):
        """测试页眉开启时的间距"""
        off = layout_factory(page={"paper": "letter"})
        on = layout_factory(page={"paper": "letter"}, header={"enabled": True})

        assert off.header_separation == 0
        assert on.header_separation == 20
        assert on.column_height == pytest.approx(off.column_height - 20)
        assert on.draw_header

    def test_printer_defaults(self, layout_factory):
        """测试双面/翻转默认值与显式覆盖"""
        portrait = layout_factory()
        landscape = layout_factory(page={"landscape": True})
        overridden = layout_factory(page={"landscape": True}, printer={"duplex": False})

        assert portrait.duplex and portrait.tumble
        assert landscape.duplex and landscape.tumble
        assert overridden.duplex is False
        assert overridden.tumble is True

    def test_fonts_from_config(self, layout_factory):
        """测试字体描述解析"""
        layout = layout_factory(fonts={"family": "Sans Bold", "size": 9})

        assert layout.body_font.name == "Helvetica-Bold"
        assert layout.body_font.size == 9
        assert layout.header_font.name == "Courier-Bold"
        assert layout.header_font.size == 12

    def test_rtl_direction(self, layout_factory):
        """测试书写方向"""
        layout = layout_factory(text={"direction": "RTL"})
        assert layout.direction == Direction.RTL
        assert layout.is_rtl

    @pytest.mark.parametrize(
        "sections",
        [
            {"page": {"paper": "b5"}},
            {"page": {"columns": 0}},
            {"page": {"left_margin": 300, "right_margin": 300}},
            {"page": {"top_margin": 500, "bottom_margin": 400}},
            {"page": {"columns": 40}},
            {"text": {"direction": "ttb"}},
            {"shaper": {"resolution_dpi": 0}},
        ],
    )
    def test_invalid_geometry(self, sections):
        """测试非法配置报 ConfigError"""
        config = RenderConfig().with_overrides(sections)
        with pytest.raises(ConfigError):
            GeometryResolver().resolve(config)


class TestColumnGeometry:
    """栏位置/行落点/分隔线测试"""

    def test_column_x_ltr(self, layout_three_columns):
        """测试从左到右的栏位置"""
        width = layout_three_columns.column_width
        assert width == pytest.approx((612 - 72 - 80) / 3)
        assert column_x(layout_three_columns, 0) == pytest.approx(36)
        assert column_x(layout_three_columns, 1) == pytest.approx(36 + width + 40)
        assert column_x(layout_three_columns, 2) == pytest.approx(36 + 2 * (width + 40))

    def test_column_x_rtl_mirror(self, layout_three_columns):
        """测试RTL下第0栏位于LTR第2栏的位置"""
        rtl = layout_three_columns.model_copy(update={"direction": Direction.RTL})

        assert column_x(rtl, 0) == pytest.approx(column_x(layout_three_columns, 2))
        assert column_x(rtl, 1) == pytest.approx(column_x(layout_three_columns, 1))
        assert column_x(rtl, 2) == pytest.approx(column_x(layout_three_columns, 0))

    def test_line_anchor(self, layout_one_column, line_of):
        """测试行落点：y = 纸高 - 上边距 - 页眉间距 - 累计高度"""
        line = line_of("abcdef", height=100)

        x_pos, y_pos = line_anchor(layout_one_column, 0, 100, line)

        assert x_pos == pytest.approx(36)
        assert y_pos == pytest.approx(792 - 36 - 100)

    def test_line_anchor_rtl_right_aligned(self, layout_one_column, line_of):
        """测试RTL行在栏内右对齐"""
        rtl = layout_one_column.model_copy(update={"direction": Direction.RTL})
        line = line_of("abcdef", height=100)  # 60像素 = 60pt

        x_pos, _ = line_anchor(rtl, 0, 100, line)

        assert x_pos == pytest.approx(36 + 540 - 60)

    def test_line_anchor_pixel_scale(self, layout_factory, line_of):
        """测试像素到点的换算（720dpi，10像素/点）"""
        layout = layout_factory(page={"paper": "letter"})
        line = line_of("x", height=144)

        _, y_pos = line_anchor(layout, 0, 288, line)

        assert y_pos == pytest.approx(792 - 36 - 28.8)

    def test_divider_x(self, layout_three_columns):
        """测试分隔线位置（第1条居中，之后沿用旧版公式）"""
        width = layout_three_columns.column_width

        assert divider_x(layout_three_columns, 0) == pytest.approx(36 + width + 20)
        assert divider_x(layout_three_columns, 1) == pytest.approx(36 + 2 * width + 3.5 * 40)

    def test_divider_x_rtl(self, layout_three_columns):
        """测试RTL分界序号镜像"""
        rtl = layout_three_columns.model_copy(update={"direction": Direction.RTL})

        assert divider_x(rtl, 0) == pytest.approx(divider_x(layout_three_columns, 1))
        assert divider_x(rtl, 1) == pytest.approx(divider_x(layout_three_columns, 0))

    def test_divider_multiplier(self, layout_factory):
        """测试分隔线倍数可配置"""
        layout = layout_factory(
            page={"paper": "letter", "columns": 3},
            separator={"gutter_multiplier": 0.5},
        )
        width = layout.column_width
        assert divider_x(layout, 1) == pytest.approx(36 + 2 * width + 2.5 * 40)

    def test_divider_span(self, layout_one_column):
        """测试分隔线纵向范围随页眉高度变化"""
        assert divider_span(layout_one_column) == pytest.approx((756, 36))

        layout_one_column.header_height = 10
        layout_one_column.footer_height = 6
        y_top, y_bottom = divider_span(layout_one_column)
        assert y_top == pytest.approx(746)
        assert y_bottom == pytest.approx(30)
