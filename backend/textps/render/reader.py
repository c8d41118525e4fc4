"""
输入读取器 - 读取文件/标准输入并解码

- 未指定字符集：严格按 UTF-8 解码
- 指定字符集：严格按该字符集解码，名称无效报 ConfigError
- "auto"：chardet 检测，置信度过低时依次尝试常见编码
- 去除BOM、统一换行符为LF、保证末尾换行

任何解码失败都中止整个任务（InputDecodingError），不做部分分页。
"""

from __future__ import annotations

import codecs
import logging
import sys
from pathlib import Path

import chardet

from ..interfaces import ConfigError, InputDecodingError, ITextReader

logger = logging.getLogger(__name__)

AUTO_ENCODING = "auto"
DETECT_SAMPLE_BYTES = 10000
MIN_CONFIDENCE = 0.7
FALLBACK_ENCODINGS = ("utf-8", "gbk", "gb18030", "latin-1")

# 检测结果别名
ENCODING_ALIASES = {
    "ascii": "utf-8",
    "gb2312": "gbk",
}


class TextReader(ITextReader):
    """输入读取器实现"""

    def read(self, source: Path | None, encoding: str | None = None) -> str:
        """读取并解码"""
        if source is None:
            data = sys.stdin.buffer.read()
        else:
            if not source.exists():
                raise ConfigError(f"输入文件不存在: {source}")
            data = source.read_bytes()
        return self.decode(data, encoding)

    def decode(self, data: bytes, encoding: str | None = None) -> str:
        """字节 → 规范化文本"""
        codec = self._resolve_encoding(data, encoding)
        try:
            text = data.decode(codec)
        except UnicodeDecodeError as e:
            raise InputDecodingError(
                f"输入无法按 {codec} 解码: 第{e.start}字节 {data[e.start:e.end]!r}"
            ) from e
        except LookupError as e:
            raise InputDecodingError(f"检测到不支持的字符集: {codec}") from e

        text = text.lstrip("\ufeff")
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        if text and not text.endswith("\n"):
            text += "\n"
        return text

    def detect_encoding(self, data: bytes) -> str:
        """
        检测字符集

        优先使用chardet，置信度过低时依次尝试常见编码。
        """
        result = chardet.detect(data[:DETECT_SAMPLE_BYTES])
        detected = (result.get("encoding") or "utf-8").lower()
        confidence = result.get("confidence") or 0
        encoding = ENCODING_ALIASES.get(detected, detected)

        if confidence < MIN_CONFIDENCE:
            for candidate in FALLBACK_ENCODINGS:
                try:
                    data.decode(candidate)
                except UnicodeDecodeError:
                    continue
                encoding = candidate
                break

        logger.info(f"检测字符集: {encoding}（chardet={detected}, 置信度{confidence:.2f}）")
        return encoding

    def _resolve_encoding(self, data: bytes, encoding: str | None) -> str:
        if encoding is None:
            return "utf-8"
        if encoding.strip().lower() == AUTO_ENCODING:
            return self.detect_encoding(data)
        try:
            return codecs.lookup(encoding.strip()).name
        except LookupError as e:
            raise ConfigError(f"无效的字符集: {encoding}") from e
