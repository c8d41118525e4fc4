"""
命令行入口 - textps

示例：
  textps --columns 2 --header README.txt -o readme.ps
  textps --landscape --paper letter --encoding auto notes.txt > notes.ps
  cat log.txt | textps --rtl --title log
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

import yaml
from pydantic import ValidationError

from . import __version__
from .config import DEFAULT_CONFIG_PATH, RenderConfig
from .interfaces import ConfigError, TextPSError
from .pipeline import PipelineExecutor, create_job

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textps",
        description="Convert plain text to multi-column PostScript.",
    )
    parser.add_argument("input", nargs="?", default=None, help="输入文件（缺省：标准输入）")
    parser.add_argument("-o", "--output", default=None, help="输出文件（缺省：标准输出）")
    parser.add_argument(
        "--config",
        default=str(DEFAULT_CONFIG_PATH),
        help=f"YAML配置文件（默认：{DEFAULT_CONFIG_PATH}）",
    )
    parser.add_argument("--title", default=None, help="文档标题（缺省：输入文件名）")

    page = parser.add_argument_group("page")
    page.add_argument("--paper", default=None, help="纸张: a4/letter/legal")
    page.add_argument("--landscape", action="store_true", default=None, help="横向")
    page.add_argument("--columns", type=int, default=None, help="栏数")
    page.add_argument("--gutter-width", type=float, default=None, help="栏间距（pt）")
    page.add_argument("--top-margin", type=float, default=None, help="上边距（pt）")
    page.add_argument("--bottom-margin", type=float, default=None, help="下边距（pt）")
    page.add_argument("--left-margin", type=float, default=None, help="左边距（pt）")
    page.add_argument("--right-margin", type=float, default=None, help="右边距（pt）")

    text = parser.add_argument_group("text")
    text.add_argument("--font-scale", type=float, default=None, help="正文字号")
    text.add_argument("--family", default=None, help="正文字体族，如 Monospace/Sans/Serif")
    text.add_argument("--rtl", action="store_true", default=None, help="从右到左")
    text.add_argument("--justify", action="store_true", default=None, help="两端对齐")
    text.add_argument("--encoding", default=None, help="输入字符集，auto 表示自动检测")

    output = parser.add_argument_group("output")
    output.add_argument("--header", action="store_true", default=None, help="绘制页眉")
    output.add_argument(
        "--no-separation-line",
        dest="separation_line",
        action="store_false",
        default=None,
        help="不绘制栏间分隔线",
    )
    output.add_argument("--duplex", action=argparse.BooleanOptionalAction, default=None)
    output.add_argument("--tumble", action=argparse.BooleanOptionalAction, default=None)
    output.add_argument("--log-level", default=None, help="日志级别（默认：WARNING）")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def collect_overrides(args: argparse.Namespace) -> dict[str, dict[str, Any]]:
    """命令行参数 → 分节覆盖项（None 表示未指定）"""
    return {
        "page": {
            "paper": args.paper,
            "landscape": args.landscape,
            "columns": args.columns,
            "gutter_width": args.gutter_width,
            "top_margin": args.top_margin,
            "bottom_margin": args.bottom_margin,
            "left_margin": args.left_margin,
            "right_margin": args.right_margin,
        },
        "fonts": {
            "family": args.family,
            "size": args.font_scale,
        },
        "text": {
            "direction": "rtl" if args.rtl else None,
            "justify": args.justify,
            "encoding": args.encoding,
        },
        "header": {"enabled": args.header},
        "printer": {"duplex": args.duplex, "tumble": args.tumble},
        "separator": {"enabled": args.separation_line},
        "logging": {"log_level": args.log_level},
    }


def load_config(config_path: str | Path, overrides: dict[str, dict[str, Any]]) -> RenderConfig:
    """加载配置并应用命令行覆盖；校验失败统一报 ConfigError"""
    try:
        config = RenderConfig.from_yaml(config_path)
        return config.with_overrides(overrides)
    except (ValidationError, yaml.YAMLError) as e:
        raise ConfigError(f"配置无效: {e}") from e


def setup_logging(config: RenderConfig) -> None:
    level = getattr(logging, config.logging.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format=config.logging.log_format,
        stream=sys.stderr,
        force=True,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config, collect_overrides(args))
        setup_logging(config)

        job = create_job(
            input_path=Path(args.input) if args.input else None,
            output_path=Path(args.output) if args.output else None,
            title=args.title,
        )
        PipelineExecutor(config).execute(job)
    except TextPSError as e:
        print(f"textps: {e}", file=sys.stderr)
        return 1

    for flag in job.flags:
        logger.warning(f"告警: {flag}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
