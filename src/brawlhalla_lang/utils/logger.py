"""
Unified logging system for the Brawlhalla language tools.

Provides:
- Console logging through rich, or a plain stream handler
- Optional file output
- Timing helper for long operations
- Custom exception hierarchy
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Optional
from contextlib import contextmanager

from rich.logging import RichHandler


# ========================================
# 自定义异常层次结构
# ========================================

class LangReaderError(Exception):
    """语言文件工具基础异常"""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigEntryError(LangReaderError):
    """单个语言声明无效（缺少名称、ID 无效、重复等），可恢复"""

    def __init__(self, message: str, language_name: Optional[str] = None, **kwargs):
        details = {"language_name": language_name, **kwargs}
        super().__init__(message, details)
        self.language_name = language_name


class DecodeError(LangReaderError):
    """语言文件缺失、无法读取或格式错误，可恢复"""

    def __init__(self, message: str, file_path: Optional[Path] = None, **kwargs):
        details = {"file_path": str(file_path) if file_path else None, **kwargs}
        super().__init__(message, details)
        self.file_path = file_path


class OutputError(LangReaderError):
    """输出文件无法打开或写入，致命"""

    def __init__(self, message: str, file_path: Optional[Path] = None, **kwargs):
        details = {"file_path": str(file_path) if file_path else None, **kwargs}
        super().__init__(message, details)
        self.file_path = file_path


class FatalConfigError(LangReaderError):
    """配置文档缺失或结构无效，致命"""

    def __init__(self, message: str, config_path: Optional[Path] = None, **kwargs):
        details = {"config_path": str(config_path) if config_path else None, **kwargs}
        super().__init__(message, details)
        self.config_path = config_path


# ========================================
# 日志类
# ========================================


class LangLogger:
    """Logger wrapper with convenience methods."""

    def __init__(
        self,
        name: str = "brawlhalla_lang",
        level: int = logging.INFO,
        log_file: Optional[Path] = None,
        use_rich: bool = True
    ):
        """
        Initialize logger.

        Args:
            name: Logger name
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional file path for log output
            use_rich: Use rich formatting
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG if log_file else level)
        self.logger.handlers = []  # Clear existing handlers

        # Console handler
        if use_rich:
            console_handler = RichHandler(
                rich_tracebacks=True,
                markup=False,
                show_time=True,
                show_path=False
            )
        else:
            console_handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(formatter)

        console_handler.setLevel(level)
        self.logger.addHandler(console_handler)

        # File handler
        if log_file:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            file_handler.setLevel(logging.DEBUG)  # Log everything to file
            self.logger.addHandler(file_handler)

    def debug(self, msg: str, *args, **kwargs):
        """Log debug message."""
        self.logger.debug(msg, *args, **kwargs)

    @contextmanager
    def timer(self, operation: str, level: int = logging.INFO):
        """
        Context manager for timing operations.

        Usage:
            with logger.timer("Exporting strings"):
                # do work
                pass
        """
        start = time.time()
        self.logger.log(level, f"Starting: {operation}")
        try:
            yield
        finally:
            elapsed = time.time() - start
            self.logger.log(level, f"Completed: {operation} (took {elapsed:.2f}s)")


# Global logger instance
_default_logger: Optional[LangLogger] = None


def get_logger(
    name: str = "brawlhalla_lang",
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    use_rich: bool = True
) -> LangLogger:
    """
    Get or create global logger instance.

    Args:
        name: Logger name
        level: Logging level
        log_file: Optional log file path
        use_rich: Use rich formatting

    Returns:
        LangLogger instance
    """
    global _default_logger
    if _default_logger is None:
        _default_logger = LangLogger(
            name=name,
            level=level,
            log_file=log_file,
            use_rich=use_rich
        )
    return _default_logger


def setup_logger(
    name: str = "brawlhalla_lang",
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    use_rich: bool = True
) -> LangLogger:
    """
    Setup and configure global logger, replacing any existing one.

    Args:
        name: Logger name
        level: Logging level
        log_file: Optional log file path
        use_rich: Use rich formatting

    Returns:
        Configured LangLogger instance
    """
    global _default_logger
    _default_logger = LangLogger(
        name=name,
        level=level,
        log_file=log_file,
        use_rich=use_rich
    )
    return _default_logger
