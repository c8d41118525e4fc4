"""
模块接口契约 - 定义各模块的抽象接口

设计原则：
1. 模块间通过接口通信，不直接依赖具体实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换（例如用固定行高的假排版器测试分栏）

使用方式：
    from textps.interfaces import ITextShaper

    class MyShaper(ITextShaper):
        def shape_paragraph(self, paragraph, layout) -> list[ShapedLine]:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Sequence, TextIO

if TYPE_CHECKING:
    from .config import RenderConfig
    from .models import (
        FlowResult,
        FontSpec,
        LayoutParameters,
        Paragraph,
        PlacementEvent,
        ShapedLine,
    )


# ============================================================================
# 排版模块接口
# ============================================================================

class IGeometryResolver(ABC):
    """几何解析器接口 - 配置 → 版面参数"""

    @abstractmethod
    def resolve(self, config: RenderConfig) -> LayoutParameters:
        """
        由配置推导版面常量（纸张/栏宽/栏高/边距/装订方向）

        Args:
            config: 渲染配置

        Returns:
            版面参数（除页眉高度外只读）

        Raises:
            ConfigError: 纸张未知、栏数<1、栏宽或栏高不为正
        """
        ...


class IParagraphSegmenter(ABC):
    """段落切分器接口 - 原始文本 → 段落序列"""

    @abstractmethod
    def split_paragraphs(self, text: str) -> list[Paragraph]:
        """
        按换行/换页符切分段落

        Args:
            text: 已解码的全文

        Returns:
            有序段落列表，换页符结尾的段落 formfeed=True
        """
        ...

    @abstractmethod
    def split_lines(
        self, paragraphs: Sequence[Paragraph], layout: LayoutParameters
    ) -> list[ShapedLine]:
        """
        段落 → 已排版行（调用外部排版器）

        Args:
            paragraphs: 段落列表
            layout: 版面参数（提供栏宽）

        Returns:
            行序列；换页段落的最后一行 force_break_after=True
        """
        ...


class ITextShaper(ABC):
    """排版器接口 - 文本测量与断行（外部协作方）"""

    @abstractmethod
    def shape_paragraph(
        self, paragraph: Paragraph, layout: LayoutParameters
    ) -> list[ShapedLine]:
        """
        将一个段落断行为若干行

        Args:
            paragraph: 段落
            layout: 版面参数（栏宽、换算系数、对齐方式）

        Returns:
            至少一行（空段落返回一个空行）
        """
        ...

    @abstractmethod
    def shape_fragment(
        self, text: str, font: FontSpec, layout: LayoutParameters
    ) -> ShapedLine:
        """
        测量单行文本片段（不断行），用于页眉

        Args:
            text: 文本片段
            font: 字体
            layout: 版面参数（换算系数）

        Returns:
            单个已排版行
        """
        ...


class IHeaderComposer(ABC):
    """页眉生成器接口"""

    @abstractmethod
    def compose(self, layout: LayoutParameters, page_index: int) -> list[PlacementEvent]:
        """
        生成单页页眉事件（左/中/右三段 + 分隔线）

        副作用：写入 layout.header_height

        Args:
            layout: 版面参数
            page_index: 页码（1起）

        Returns:
            4个放置事件
        """
        ...


class IFlowEngine(ABC):
    """分栏流引擎接口"""

    @abstractmethod
    def flow(
        self,
        lines: Sequence[ShapedLine],
        layout: LayoutParameters,
        draw_header: bool,
    ) -> FlowResult:
        """
        逐行决定落点（页/栏/纵向偏移）

        Args:
            lines: 已排版行序列
            layout: 版面参数
            draw_header: 是否绘制页眉

        Returns:
            放置事件序列 + 总页数
        """
        ...


# ============================================================================
# 输入输出接口
# ============================================================================

class ITextReader(ABC):
    """输入读取器接口"""

    @abstractmethod
    def read(self, source: Path | None, encoding: str | None = None) -> str:
        """
        读取并解码输入文本

        Args:
            source: 文件路径，None 表示标准输入
            encoding: 字符集；None=UTF-8，"auto"=自动检测

        Returns:
            解码后的全文（统一LF换行，末尾保证有换行）

        Raises:
            ConfigError: 字符集名称无效
            InputDecodingError: 字节流无法按字符集解码
        """
        ...


class IOutputEmitter(ABC):
    """输出器接口 - 放置事件 → 页面描述语言"""

    @abstractmethod
    def render(self, result: FlowResult, layout: LayoutParameters, title: str) -> str:
        """
        单遍消费事件流，生成完整文档文本

        Args:
            result: 分栏结果
            layout: 版面参数
            title: 文档标题

        Returns:
            完整文档
        """
        ...

    @abstractmethod
    def write(
        self, result: FlowResult, layout: LayoutParameters, title: str, out: TextIO
    ) -> None:
        """渲染并写出到流"""
        ...


# ============================================================================
# 异常定义
# ============================================================================

class TextPSError(Exception):
    """基础异常"""
    pass


class ConfigError(TextPSError):
    """配置错误（版面几何无效、纸张未知、字符集未知）"""
    pass


class InputDecodingError(TextPSError):
    """输入解码错误"""
    pass


class ShapingError(TextPSError):
    """排版错误（字体未知等）"""
    pass


class EmitError(TextPSError):
    """输出错误"""
    pass
