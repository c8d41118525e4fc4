"""
分栏流引擎 - 逐行决定落点（页/栏/栏内偏移）

状态机（单遍、顺序处理）：
1. 开始：StartPage(1)，需要页眉时紧随页眉事件
2. 每行放置前判断：
   - 溢出：cursor + 行高 >= 栏容量（像素，不取整）
   - 强制换栏：上一行带 force_break_after（换页符的效果延后一行生效）
   二者任一成立只前进一栏；栏用尽则换页
3. PlaceLine(栏, cursor + 行高)，cursor 累加行高
4. 结束：EndPage(最后一页)，返回页数

高于栏容量的行先前进一栏再照常放置（视觉溢出），只记录不报错；
位于栏首时会留下一个空栏或空页。

测试要点：
- test_overflow_breaks_column: 溢出换栏/换页
- test_formfeed_deferred: 换页符在所在行放置之后生效
- test_no_double_advance: 溢出与换页同时成立只前进一次
- test_degenerate_line: 超高行照常放置
- test_balanced_pages: StartPage/EndPage 成对、页码连续
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..interfaces import ConfigError, IFlowEngine, IHeaderComposer
from ..models import (
    EndColumn,
    EndPage,
    FlowResult,
    LayoutParameters,
    PlaceLine,
    PlacementEvent,
    ShapedLine,
    StartColumn,
    StartPage,
)

logger = logging.getLogger(__name__)


@dataclass
class FlowState:
    """分栏状态（单次文档运行期间由引擎独占）"""
    page_index: int = 1
    column_index: int = 0
    cursor: float = 0        # 栏内累计高度（像素，向下增长）
    force_break: bool = False  # 上一行的换页标记


class LineFlowEngine(IFlowEngine):
    """分栏流引擎实现"""

    def __init__(self, header_composer: IHeaderComposer | None = None):
        self.header_composer = header_composer

    def flow(
        self,
        lines: Sequence[ShapedLine],
        layout: LayoutParameters,
        draw_header: bool,
    ) -> FlowResult:
        """执行分栏"""
        if draw_header and self.header_composer is None:
            raise ConfigError("绘制页眉需要提供页眉生成器")

        capacity = layout.column_capacity
        state = FlowState()
        events: list[PlacementEvent] = []
        degenerate: list[int] = []

        self._start_page(events, layout, state.page_index, draw_header)

        for i, line in enumerate(lines):
            height = line.height
            would_overflow = state.cursor + height >= capacity

            if would_overflow or state.force_break:
                self._advance_column(events, layout, state, draw_header)

            if height > capacity:
                logger.warning(
                    f"第{i + 1}行高度{height}超过栏容量{capacity:.1f}，照常放置"
                )
                degenerate.append(i)

            events.append(
                PlaceLine(
                    column_index=state.column_index,
                    y_offset=state.cursor + height,
                    line=line,
                )
            )
            state.cursor += height
            state.force_break = line.force_break_after

        events.append(EndPage(page_index=state.page_index))

        logger.info(f"分栏完成: {len(lines)}行 → {state.page_index}页")
        return FlowResult(
            events=events,
            page_count=state.page_index,
            degenerate_lines=degenerate,
        )

    def _advance_column(
        self,
        events: list[PlacementEvent],
        layout: LayoutParameters,
        state: FlowState,
        draw_header: bool,
    ) -> None:
        """前进一栏；栏用尽时换页"""
        finished = state.column_index
        state.column_index += 1
        state.cursor = 0

        if state.column_index == layout.num_columns:
            events.append(EndPage(page_index=state.page_index))
            state.page_index += 1
            state.column_index = 0
            self._start_page(events, layout, state.page_index, draw_header)
            return

        if layout.separation_line:
            events.append(EndColumn(column_index=finished))
        events.append(StartColumn(column_index=state.column_index))

    def _start_page(
        self,
        events: list[PlacementEvent],
        layout: LayoutParameters,
        page_index: int,
        draw_header: bool,
    ) -> None:
        events.append(StartPage(page_index=page_index))
        if draw_header:
            events.extend(self.header_composer.compose(layout, page_index))
