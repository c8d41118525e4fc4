"""
渲染配置 - 读取 config/textps.yaml

职责：
- 加载纸张/分栏/边距/字体/页眉等排版参数
- 提供环境变量覆盖机制（TEXTPS_PAGE__COLUMNS=2）
- 类型安全的配置访问
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

DEFAULT_CONFIG_PATH = Path("config/textps.yaml")


class PageConfig(BaseModel):
    """纸张与版心配置（单位：PostScript点）"""

    paper: str = "a4"
    landscape: bool = False
    columns: int = 1
    gutter_width: float = 40
    top_margin: float = 36
    bottom_margin: float = 36
    left_margin: float = 36
    right_margin: float = 36


class FontConfig(BaseModel):
    """字体配置"""

    family: str = "Monospace"
    size: float = 12
    header_font: str = "Monospace Bold 12"


class TextConfig(BaseModel):
    """文本方向/对齐/编码"""

    direction: str = "ltr"
    justify: bool = False
    encoding: str | None = None


class HeaderConfig(BaseModel):
    """页眉配置"""

    enabled: bool = False
    separation: float = 20


class PrinterConfig(BaseModel):
    """双面打印配置（None 表示按纸张方向取默认值）"""

    duplex: bool | None = None
    tumble: bool | None = None


class SeparatorConfig(BaseModel):
    """栏间分隔线配置"""

    enabled: bool = True
    # 第2条及以后分隔线的栏间距倍数（沿用旧版公式）
    gutter_multiplier: float = 1.5


class ShaperConfig(BaseModel):
    """排版器配置"""

    # 排版器内部单位：每英寸像素数（1pt = dpi/72 像素）
    resolution_dpi: float = 720.0
    tab_width: int = 8
    # 行距 = 字号 × line_spacing
    line_spacing: float = 1.2


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "WARNING"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class RenderConfig(BaseSettings):
    """渲染配置（支持环境变量覆盖）"""

    page: PageConfig = Field(default_factory=PageConfig)
    fonts: FontConfig = Field(default_factory=FontConfig)
    text: TextConfig = Field(default_factory=TextConfig)
    header: HeaderConfig = Field(default_factory=HeaderConfig)
    printer: PrinterConfig = Field(default_factory=PrinterConfig)
    separator: SeparatorConfig = Field(default_factory=SeparatorConfig)
    shaper: ShaperConfig = Field(default_factory=ShaperConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "TEXTPS_",
        "env_nested_delimiter": "__",
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """优先级：环境变量 > YAML文件（构造参数） > 默认值"""
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RenderConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        options = data.get("render_options", {})

        # 以字典传入，环境变量按字段合并在文件值之上
        return cls(**{name: cls._extract(options, name) for name in cls.model_fields})

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def with_overrides(self, overrides: dict[str, dict[str, Any]]) -> RenderConfig:
        """按分节覆盖（命令行参数优先于文件），值为None的项忽略"""
        updates: dict[str, BaseModel] = {}
        for section, values in overrides.items():
            values = {k: v for k, v in values.items() if v is not None}
            if not values:
                continue
            current: BaseModel = getattr(self, section)
            updates[section] = current.model_validate({**current.model_dump(), **values})
        return self.model_copy(update=updates)


# 全局配置实例
_config: RenderConfig | None = None


def get_config() -> RenderConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RenderConfig.from_yaml(DEFAULT_CONFIG_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RenderConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or DEFAULT_CONFIG_PATH
    _config = RenderConfig.from_yaml(path)
    return _config
