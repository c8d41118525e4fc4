"""
输出模块 - 输入读取与PostScript输出

子模块：
- reader: 文件/标准输入读取与字符集转换
- postscript: 放置事件流 → PostScript 文档
"""

from .postscript import PostScriptEmitter, ps_number, ps_string
from .reader import TextReader

__all__ = [
    "TextReader",
    "PostScriptEmitter",
    "ps_number",
    "ps_string",
]
