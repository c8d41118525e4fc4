"""
PostScript页数统计（标准库，适用于 textps 输出的 .ps 文件）。

核对三处页数是否一致：
- "%%Page:" 注释个数
- showpage 个数
- 尾部 "%%Pages: N" 声明
"""

from __future__ import annotations

import argparse
import re
from pathlib import Path

_PAGES_RE = re.compile(r"^%%Pages: (\d+)$", re.MULTILINE)


def count_ps_pages(path: Path) -> dict[str, int | None]:
    text = path.read_text(encoding="latin-1")
    declared = _PAGES_RE.findall(text)
    return {
        "page_comments": sum(1 for line in text.splitlines() if line.startswith("%%Page: ")),
        "showpage": len(re.findall(r"\bshowpage\b", text)),
        "declared": int(declared[-1]) if declared else None,
    }


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--ps", required=True)
    args = ap.parse_args()
    counts = count_ps_pages(Path(args.ps))
    print(counts)
    return 0 if len(set(counts.values())) == 1 else 1


if __name__ == "__main__":
    raise SystemExit(main())
