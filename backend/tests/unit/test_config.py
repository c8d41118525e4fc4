"""
配置加载单元测试

运行：pytest backend/tests/unit/test_config.py -v
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from textps.config import RenderConfig, get_config, reload_config
from textps.config import runtime_config

SAMPLE_YAML = """
render_options:
  page:
    paper:
      default: letter
      desc: 纸张
    columns: 2
    gutter_width: 24
  fonts:
    family: Serif
  header:
    enabled:
      default: true
  printer:
    duplex: false
"""


@pytest.fixture
def yaml_path(temp_dir: Path) -> Path:
    path = temp_dir / "textps.yaml"
    path.write_text(SAMPLE_YAML, encoding="utf-8")
    return path


class TestRenderConfig:
    """渲染配置测试"""

    def test_default_config(self, default_config: RenderConfig):
        """测试默认配置"""
        assert default_config.page.paper == "a4"
        assert default_config.page.columns == 1
        assert default_config.page.gutter_width == 40
        assert default_config.page.top_margin == 36
        assert default_config.fonts.family == "Monospace"
        assert default_config.fonts.header_font == "Monospace Bold 12"
        assert default_config.header.enabled is False
        assert default_config.header.separation == 20
        assert default_config.printer.duplex is None
        assert default_config.separator.gutter_multiplier == 1.5
        assert default_config.shaper.resolution_dpi == 720

    def test_from_yaml(self, yaml_path: Path):
        """测试从YAML加载（支持 {default: 值} 形式）"""
        config = RenderConfig.from_yaml(yaml_path)

        assert config.page.paper == "letter"
        assert config.page.columns == 2
        assert config.page.gutter_width == 24
        assert config.page.left_margin == 36
        assert config.fonts.family == "Serif"
        assert config.header.enabled is True
        assert config.printer.duplex is False
        assert config.printer.tumble is None

    def test_missing_yaml(self, temp_dir: Path):
        """测试配置文件不存在时使用默认值"""
        config = RenderConfig.from_yaml(temp_dir / "missing.yaml")
        assert config.page.paper == "a4"

    def test_repository_yaml(self):
        """测试仓库自带配置与默认值一致"""
        path = Path(__file__).resolve().parents[3] / "config" / "textps.yaml"
        config = RenderConfig.from_yaml(path)

        assert config.page.paper == "a4"
        assert config.text.encoding is None
        assert config.logging.log_level == "WARNING"

    def test_with_overrides(self, default_config: RenderConfig):
        """测试分节覆盖，None 值忽略"""
        config = default_config.with_overrides(
            {"page": {"columns": 3, "paper": None}, "text": {"direction": None}}
        )

        assert config.page.columns == 3
        assert config.page.paper == "a4"
        assert config.text.direction == "ltr"
        assert default_config.page.columns == 1

    def test_with_overrides_invalid(self, default_config: RenderConfig):
        """测试覆盖值类型错误"""
        with pytest.raises(ValidationError):
            default_config.with_overrides({"page": {"columns": "many"}})

    def test_env_override(self, monkeypatch):
        """测试环境变量覆盖"""
        monkeypatch.setenv("TEXTPS_PAGE__COLUMNS", "4")
        monkeypatch.setenv("TEXTPS_HEADER__ENABLED", "true")

        config = RenderConfig()

        assert config.page.columns == 4
        assert config.header.enabled is True

    def test_env_overrides_yaml(self, yaml_path: Path, monkeypatch):
        """测试环境变量优先于YAML文件，且只覆盖对应字段"""
        monkeypatch.setenv("TEXTPS_PAGE__COLUMNS", "5")
        monkeypatch.setenv("TEXTPS_PRINTER__DUPLEX", "true")

        config = RenderConfig.from_yaml(yaml_path)

        assert config.page.columns == 5
        assert config.page.paper == "letter"
        assert config.page.gutter_width == 24
        assert config.printer.duplex is True
        assert config.header.enabled is True

    def test_cli_overrides_env(self, yaml_path: Path, monkeypatch):
        """测试命令行覆盖优先于环境变量"""
        monkeypatch.setenv("TEXTPS_PAGE__COLUMNS", "5")

        config = RenderConfig.from_yaml(yaml_path).with_overrides({"page": {"columns": 2}})

        assert config.page.columns == 2


class TestGlobalConfig:
    """全局配置测试"""

    def test_reload_config(self, yaml_path: Path, monkeypatch):
        """测试重新加载"""
        monkeypatch.setattr(runtime_config, "_config", None)

        config = reload_config(yaml_path)

        assert config.page.columns == 2
        assert get_config() is config
