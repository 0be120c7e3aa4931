"""
语言导出 - 核心模块使用示例

演示如何在不依赖真实游戏目录的情况下使用 LanguageRegistry、
ReconciliationTable 和 TsvExporter，以及如何对真实安装目录调用 run_export。
"""

import sys
from pathlib import Path

# 添加 src 目录
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from brawlhalla_lang.core import (
    DiagnosticLog, LanguageRegistry, ReconciliationTable, TsvExporter, run_export,
)


def example_in_memory():
    """示例：用内存中的数据代替语言文件"""
    print("=== 内存数据示例 ===\n")

    diagnostics = DiagnosticLog()
    languages = LanguageRegistry(diagnostics).register([
        ("Template", "0"),
        ("English", "1"),
        ("French", "2"),
        ("Anglais", "1"),  # 重复 ID，会被跳过
    ])

    sources = {
        1: [("Greeting", "Hello"), ("Tip", "Press X\nto jump")],
        2: [("Greeting", "Bonjour"), ("Farewell", "Au revoir")],
    }

    table = ReconciliationTable(languages, diagnostics)
    for lang in languages:
        table.ingest(lang.id, sources.get(lang.id, []))

    print(TsvExporter().render(table.snapshot()))
    print(f"\n诊断信息: {diagnostics.counts()}\n")


def example_game_dir(game_dir: str, language_types: str, output: str):
    """示例：导出真实游戏目录"""
    print("=== 游戏目录示例 ===\n")

    result = run_export(game_dir, language_types, output)
    if not result.ok:
        print(f"导出失败: {result.error.message}")
        return

    print(f"语言: {', '.join(lang.name for lang in result.languages)}")
    print(f"字符串数: {len(result.table.rows)}")
    print(f"解码失败: {[lang.name for lang in result.failed_languages]}")
    print(f"输出: {result.output_path} ({result.bytes_written} bytes)")


if __name__ == "__main__":
    example_in_memory()
    if len(sys.argv) == 4:
        example_game_dir(*sys.argv[1:])
