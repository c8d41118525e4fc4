"""
分栏模拟：打印每一行的落点（页/栏/栏内偏移），不生成PostScript。

用于核对分栏结果，例如：
  python tools/simulate_flow.py --input notes.txt --columns 3
  python tools/simulate_flow.py --input notes.txt --columns 2 --rtl --header
"""

import argparse
import sys
from pathlib import Path


def _add_backend_to_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    backend_root = repo_root / "backend"
    if str(backend_root) not in sys.path:
        sys.path.insert(0, str(backend_root))


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Simulate column flow for a text file."
    )
    parser.add_argument("--input", required=True, help="输入文本文件")
    parser.add_argument("--columns", type=int, default=1, help="栏数（默认：1）")
    parser.add_argument("--paper", default="a4", help="纸张（默认：a4）")
    parser.add_argument("--rtl", action="store_true", help="从右到左")
    parser.add_argument("--header", action="store_true", help="绘制页眉")
    parser.add_argument("--encoding", default=None, help="输入字符集")
    args = parser.parse_args()

    _add_backend_to_path()
    from textps.config import RenderConfig  # type: ignore
    from textps.interfaces import TextPSError  # type: ignore
    from textps.layout import (  # type: ignore
        GeometryResolver,
        HeaderComposer,
        LineFlowEngine,
        ParagraphSegmenter,
        StandardFontShaper,
        line_anchor,
    )
    from textps.models import PlaceLine, StartPage  # type: ignore
    from textps.render import TextReader  # type: ignore

    config = RenderConfig().with_overrides({
        "page": {"paper": args.paper, "columns": args.columns},
        "text": {"direction": "rtl" if args.rtl else None},
        "header": {"enabled": args.header},
    })

    try:
        text = TextReader().read(Path(args.input), args.encoding)
        layout = GeometryResolver().resolve(config)
        shaper = StandardFontShaper(line_spacing=config.shaper.line_spacing)
        segmenter = ParagraphSegmenter(shaper)
        lines = segmenter.split_lines(segmenter.split_paragraphs(text), layout)
        composer = HeaderComposer(shaper, args.input) if layout.draw_header else None
        result = LineFlowEngine(composer).flow(lines, layout, layout.draw_header)
    except TextPSError as exc:
        print(f"ERROR {exc}")
        return 1

    print(
        f"layout: {layout.page_width}x{layout.page_height}pt "
        f"columns={layout.num_columns} column={layout.column_width:.2f}x{layout.column_height:.2f} "
        f"capacity={layout.column_capacity:.1f}px"
    )
    page = 0
    for event in result.events:
        if isinstance(event, StartPage):
            page = event.page_index
        elif isinstance(event, PlaceLine):
            x_pos, y_pos = line_anchor(layout, event.column_index, event.y_offset, event.line)
            mark = " <FF>" if event.line.force_break_after else ""
            print(
                f"p{page} c{event.column_index} y={event.y_offset:>8.0f}px "
                f"({x_pos:7.2f},{y_pos:7.2f}) {event.line.text[:40]!r}{mark}"
            )

    print(f"pages={result.page_count} lines={len(lines)} degenerate={result.degenerate_lines}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
