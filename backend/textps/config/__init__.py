"""
配置层 - 加载渲染配置

职责：
- 加载 config/textps.yaml（排版参数）
- 环境变量覆盖（TEXTPS_ 前缀）
- 提供类型安全的配置访问接口
"""

from .runtime_config import (
    DEFAULT_CONFIG_PATH,
    FontConfig,
    HeaderConfig,
    LoggingConfig,
    PageConfig,
    PrinterConfig,
    RenderConfig,
    SeparatorConfig,
    ShaperConfig,
    TextConfig,
    get_config,
    reload_config,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "RenderConfig",
    "PageConfig",
    "FontConfig",
    "TextConfig",
    "HeaderConfig",
    "PrinterConfig",
    "SeparatorConfig",
    "ShaperConfig",
    "LoggingConfig",
    "get_config",
    "reload_config",
]
