from .config import ExportConfig, ConfigManager
from .io import ensure_parent_dir, resolve_encoding, read_bytes_file, write_bytes_file
from .language_types import read_language_types, parse_language_types
from .logger import (
    LangLogger, get_logger, setup_logger,
    LangReaderError, ConfigEntryError, DecodeError, OutputError, FatalConfigError,
)

__all__ = [
    # config
    "ExportConfig",
    "ConfigManager",
    # io
    "ensure_parent_dir",
    "resolve_encoding",
    "read_bytes_file",
    "write_bytes_file",
    # language types
    "read_language_types",
    "parse_language_types",
    # logger
    "LangLogger",
    "get_logger",
    "setup_logger",
    # errors
    "LangReaderError",
    "ConfigEntryError",
    "DecodeError",
    "OutputError",
    "FatalConfigError",
]
