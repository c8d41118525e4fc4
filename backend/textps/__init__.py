"""
textps 多栏文本分页系统 - 后端核心模块

模块结构：
- config/     渲染配置加载（YAML + 环境变量）
- models/     数据模型定义
- layout/     版面几何/断行/分栏/页眉
- render/     输入读取与PostScript输出
- pipeline/   流水线编排
- cli         命令行入口
"""

__version__ = "0.1.0"
