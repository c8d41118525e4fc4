"""
PostScript输出器 - 放置事件流 → DSC PostScript 文档

文档结构：
1. 头部注释：标题、BoundingBox（不随横向旋转）、方向、%%Pages: (atend)
2. Prolog：版面用户参数 + 过程（paps_bop/paps_eop/turnpage/setpagesize/duplex/tumble/字体重编码）
3. Setup：纸张尺寸、双面/翻转、正文与页眉字体
4. 页面：每个 StartPage 一个 %%Page: n n，每个 EndPage 一个 showpage
5. Trailer：%%Pages: N

事件单遍顺序消费；字体选择状态由输出器自身持有，仅在字体变化时输出 setfont。
"""

from __future__ import annotations

import io
import math
from dataclasses import dataclass, field
from typing import TextIO

from .. import __version__
from ..interfaces import EmitError, IOutputEmitter
from ..layout.geometry import divider_span, divider_x, line_anchor
from ..models import (
    EndColumn,
    EndPage,
    FlowResult,
    FontSpec,
    HeaderRule,
    HeaderText,
    LayoutParameters,
    PlaceLine,
    PlacementEvent,
    StartColumn,
    StartPage,
    printable_text,
)

CREATOR = f"textps {__version__}"
REENCODED_SUFFIX = "-ISOLatin1"

PROCEDURES = """\
/inch {72 mul} bind def
/mm {1 inch 25.4 div mul} bind def

% override setpagedevice if it is not defined
/setpagedevice where {
    pop % get rid of its dictionary
    /setpagesize {
       3 dict begin
         /pageheight exch def
         /pagewidth exch def
         /orientation 0 def
         % Exchange pagewidth and pageheight so that pagewidth is bigger
         pagewidth pageheight gt {
             pagewidth
             /pagewidth pageheight def
             /pageheight exch def
             /orientation 3 def
         } if
         2 dict
         dup /PageSize [pagewidth pageheight] put
         dup /Orientation orientation put
         setpagedevice
       end
    } def
}
{
    /setpagesize { pop pop } def
} ifelse
/duplex {
    statusdict /setduplexmode known
    { statusdict begin setduplexmode end } {pop} ifelse
} def
/tumble {
    statusdict /settumble known
   { statusdict begin settumble end } {pop} ifelse
} def
% Turn the page around
/turnpage {
  90 rotate
  0 pageheight neg translate
} def
% /newname /basefont paps_reencode
/paps_reencode {
    findfont dup length dict begin
        { 1 index /FID ne { def } { pop pop } ifelse } forall
        /Encoding ISOLatin1Encoding def
        currentdict
    end
    definefont pop
} def
/paps_bop {  % Beginning of page definitions
    papsdict begin
    gsave
    do_landscape {turnpage} if
    end
} def
/paps_eop {  % End of page cleanups
    grestore
} def
"""


def ps_number(value: float) -> str:
    """数值格式化：两位小数，去掉多余的0"""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def ps_bool(value: bool) -> str:
    return "true" if value else "false"


def ps_string(text: str) -> str:
    """PostScript字符串字面量（Latin-1，八进制转义）"""
    out = []
    for ch in printable_text(text):
        if ch in "()\\":
            out.append("\\" + ch)
        elif ord(ch) > 126:
            out.append(f"\\{ord(ch):03o}")
        else:
            out.append(ch)
    return "(" + "".join(out) + ")"


@dataclass
class EmitterState:
    """输出器状态（单次输出期间持有）"""
    page_open: bool = False
    current_font: FontSpec | None = None
    font_procs: dict[FontSpec, str] = field(default_factory=dict)
    reencoded: set[str] = field(default_factory=set)


class PostScriptEmitter(IOutputEmitter):
    """PostScript输出器实现"""

    def __init__(self, creator: str = CREATOR):
        self.creator = creator

    def render(self, result: FlowResult, layout: LayoutParameters, title: str) -> str:
        """生成完整文档"""
        buf = io.StringIO()
        self.write(result, layout, title, buf)
        return buf.getvalue()

    def write(
        self, result: FlowResult, layout: LayoutParameters, title: str, out: TextIO
    ) -> None:
        """单遍写出"""
        state = EmitterState()

        out.write(self._header_comments(layout, title))
        out.write("%%BeginProlog\n")
        out.write(self._prolog(layout))
        out.write("%%EndProlog\n")
        out.write(self._setup(layout, state))

        for event in result.events:
            out.write(self._emit(event, layout, state))

        if state.page_open:
            raise EmitError("事件流结束时仍有未关闭的页")

        out.write(self._trailer(result.page_count))

    # === 文档级 ===

    def _header_comments(self, layout: LayoutParameters, title: str) -> str:
        # BoundingBox 保持不旋转
        bb_width, bb_height = layout.page_width, layout.page_height
        if layout.landscape:
            bb_width, bb_height = bb_height, bb_width

        # DSC注释只允许单行7位ASCII
        title = " ".join(title.split()).encode("ascii", "replace").decode("ascii")
        return (
            "%!PS-Adobe-3.0\n"
            f"%%Title: {title}\n"
            f"%%Creator: {self.creator}\n"
            "%%Pages: (atend)\n"
            f"%%BoundingBox: 0 0 {math.ceil(bb_width)} {math.ceil(bb_height)}\n"
            f"%%Orientation: {'Landscape' if layout.landscape else 'Portrait'}\n"
            "%%DocumentData: Clean7Bit\n"
            "%%EndComments\n"
        )

    def _prolog(self, layout: LayoutParameters) -> str:
        ytop = layout.page_height - layout.body_top
        return (
            "/papsdict 64 dict def\n"
            "papsdict begin\n"
            "% User settings\n"
            f"/pagewidth {ps_number(layout.page_width)} def\n"
            f"/pageheight {ps_number(layout.page_height)} def\n"
            f"/column_width {ps_number(layout.column_width)} def\n"
            f"/bodyheight {ps_number(layout.column_height)} def\n"
            f"/lmarg {ps_number(layout.left_margin)} def\n"
            f"/ytop {ps_number(ytop)} def\n"
            f"/gutter_width {ps_number(layout.gutter_width)} def\n"
            f"/numcolumns {layout.num_columns} def\n"
            f"/do_separation_line {ps_bool(layout.separation_line)} def\n"
            f"/do_landscape {ps_bool(layout.landscape)} def\n"
            f"/do_tumble {ps_bool(layout.tumble)} def\n"
            f"/do_duplex {ps_bool(layout.duplex)} def\n"
            + PROCEDURES
            + "end\n"
        )

    def _setup(self, layout: LayoutParameters, state: EmitterState) -> str:
        parts = [
            "%%BeginSetup\n",
            "papsdict begin\n",
            "pagewidth pageheight setpagesize\n",
            "do_duplex duplex\n",
            "do_tumble tumble\n",
            self._declare_font(layout.body_font, state),
        ]
        if layout.draw_header:
            parts.append(self._declare_font(layout.header_font, state))
        parts.append("%%EndSetup\n")
        return "".join(parts)

    def _trailer(self, page_count: int) -> str:
        return (
            "%%Trailer\n"
            "end\n"
            f"%%Pages: {page_count}\n"
            "%%EOF\n"
        )

    # === 字体 ===

    def _declare_font(self, font: FontSpec, state: EmitterState) -> str:
        """定义 Latin-1 重编码字体及其缩放实例；已定义则返回空串"""
        if font in state.font_procs:
            return ""
        lines = []
        reencoded = font.name + REENCODED_SUFFIX
        if font.name not in state.reencoded:
            lines.append(f"/{reencoded} /{font.name} paps_reencode\n")
            state.reencoded.add(font.name)

        proc = f"paps_f{len(state.font_procs)}"
        state.font_procs[font] = proc
        lines.append(f"/{proc} /{reencoded} findfont {ps_number(font.size)} scalefont def\n")
        return "".join(lines)

    def _select_font(self, font: FontSpec, state: EmitterState) -> str:
        if state.current_font == font:
            return ""
        declaration = self._declare_font(font, state)
        state.current_font = font
        return f"{declaration}{state.font_procs[font]} setfont\n"

    # === 事件 ===

    def _emit(self, event: PlacementEvent, layout: LayoutParameters, state: EmitterState) -> str:
        if isinstance(event, StartPage):
            if state.page_open:
                raise EmitError(f"第{event.page_index}页开始前上一页未结束")
            state.page_open = True
            # paps_eop 的 grestore 会还原字体
            state.current_font = None
            return f"%%Page: {event.page_index} {event.page_index}\npaps_bop\n"

        if not state.page_open:
            raise EmitError(f"页外事件: {event.kind}")

        if isinstance(event, EndPage):
            state.page_open = False
            return "paps_eop\nshowpage\n"

        if isinstance(event, PlaceLine):
            x_pos, y_pos = line_anchor(layout, event.column_index, event.y_offset, event.line)
            return self._show(event.line.text, event.line.font, x_pos, y_pos,
                              event.line.justify_space, state)

        if isinstance(event, HeaderText):
            return self._show(event.line.text, event.line.font, event.x, event.y, 0.0, state)

        if isinstance(event, HeaderRule):
            return self._stroke(event.x_start, event.y, event.x_end, event.y)

        if isinstance(event, EndColumn):
            x_pos = divider_x(layout, event.column_index)
            y_top, y_bottom = divider_span(layout)
            return self._stroke(x_pos, y_top, x_pos, y_bottom)

        if isinstance(event, StartColumn):
            return ""

        raise EmitError(f"未知事件: {event!r}")

    def _show(
        self,
        text: str,
        font: FontSpec,
        x_pos: float,
        y_pos: float,
        justify_space: float,
        state: EmitterState,
    ) -> str:
        if not text:
            return ""
        out = self._select_font(font, state)
        out += f"{ps_number(x_pos)} {ps_number(y_pos)} moveto "
        if justify_space:
            out += f"{ps_number(justify_space)} 0 32 {ps_string(text)} widthshow\n"
        else:
            out += f"{ps_string(text)} show\n"
        return out

    @staticmethod
    def _stroke(x0: float, y0: float, x1: float, y1: float) -> str:
        return (
            f"{ps_number(x0)} {ps_number(y0)} moveto "
            f"{ps_number(x1)} {ps_number(y1)} lineto 0 setlinewidth stroke\n"
        )
