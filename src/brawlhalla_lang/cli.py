#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Brawlhalla 语言文件工具 - 命令行入口

将所有已声明语言的 language.<id>.bin 合并导出为一个 TSV 文件。

用法:
    lang-reader -O <brawlhalla 目录> <LanguageTypes.xml> <输出文件>
    lang-reader --list-languages <LanguageTypes.xml>
    lang-reader --help
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console

from . import __version__
from .core.pipeline import run_export
from .core.registry import register_languages
from .utils.config import ConfigManager
from .utils.language_types import read_language_types
from .utils.logger import FatalConfigError, get_logger, setup_logger
from .utils.ui import show_error, show_languages, show_summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lang-reader",
        description="Export Brawlhalla language files to a single tab-separated table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  lang-reader -O "C:/Program Files (x86)/Steam/steamapps/common/Brawlhalla" LanguageTypes.xml strings.tsv
  lang-reader --list-languages LanguageTypes.xml
        """
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-O", "--output",
        nargs=3,
        metavar=("BRAWLHALLA_DIR", "LANGUAGE_TYPES", "OUTPUT"),
        help="导出: 游戏目录、LanguageTypes.xml 路径、输出 TSV 路径"
    )
    mode.add_argument(
        "--list-languages",
        metavar="LANGUAGE_TYPES",
        help="列出 LanguageTypes.xml 中有效的语言"
    )

    parser.add_argument("--config", help="JSON 配置文件路径（可选）")
    parser.add_argument(
        "--encoding",
        help="输出编码（默认 utf-8；'locale' 表示系统默认编码）"
    )
    parser.add_argument("--log-file", help="日志文件路径（记录全部 DEBUG 信息）")
    parser.add_argument("--plain-log", action="store_true", help="不使用 rich 日志格式")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="输出 DEBUG 日志")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="只输出警告和错误")

    parser.add_argument(
        "--version",
        action="version",
        version=f"lang-reader {__version__}"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """主入口函数"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.output and not args.list_languages:
        parser.print_help()
        return 0

    manager = ConfigManager(Path(args.config) if args.config else None)
    if args.encoding:
        manager.set("encoding", args.encoding)
    config = manager.config

    level = config.log_level_value
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    setup_logger(
        level=level,
        log_file=Path(args.log_file) if args.log_file else None,
        use_rich=not args.plain_log,
    )
    log = get_logger()
    err_console = Console(stderr=True)

    if args.list_languages:
        try:
            declarations = read_language_types(args.list_languages)
        except FatalConfigError as e:
            show_error(e.message, out=err_console)
            return 1
        languages = register_languages(declarations, template_name=config.template_name)
        show_languages(languages)
        return 0

    game_dir, language_types, output = args.output
    with log.timer("Exporting language files"):
        result = run_export(game_dir, language_types, output, config)

    if not result.ok:
        log.debug(f"Export failed: {result.error}")
        show_error(result.error.message, out=err_console)
        return result.exit_code

    if config.show_summary and not args.quiet:
        show_summary(result)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
