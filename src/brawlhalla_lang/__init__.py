"""
Brawlhalla 语言文件工具

将游戏 languages/ 目录下各语言的二进制文本资源合并导出为一张 TSV 表：
- 语言声明读取（LanguageTypes.xml）
- 语言文件解码
- 多语言按 StringKey 合并
- 确定性 TSV 导出
"""

__version__ = "0.1.0"
__all__ = ["utils", "core", "cli"]
