"""
Configuration management for the language export.

Settings live in an optional JSON file; anything absent falls back to the
defaults below, which match the layout of a stock Brawlhalla install.
"""

from __future__ import annotations

import codecs
import json
import logging
from pathlib import Path
from typing import Any, Optional
from dataclasses import dataclass, asdict

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ExportConfig:
    """Export configuration settings."""

    # Game tree layout
    languages_dir_name: str = "languages"
    lang_file_pattern: str = "language.{id}.bin"
    template_name: str = "Template"

    # Output settings
    key_column: str = "StringKey"
    encoding: str = "utf-8"
    atomic_write: bool = False

    # UI settings
    log_level: str = "INFO"
    show_summary: bool = True

    def __post_init__(self):
        """Validate field values after initialization."""
        defaults = ExportConfig.__dataclass_fields__
        for name in ("languages_dir_name", "lang_file_pattern", "template_name",
                     "key_column", "encoding"):
            value = getattr(self, name)
            if not isinstance(value, str):
                logger.warning(f"{name} must be a string, got {value!r}, using default")
                setattr(self, name, defaults[name].default)

        if not self._valid_pattern(self.lang_file_pattern):
            logger.warning(
                f"lang_file_pattern must contain '{{id}}' and no other fields, "
                f"got {self.lang_file_pattern!r}, using default"
            )
            self.lang_file_pattern = defaults["lang_file_pattern"].default
        if not self.languages_dir_name:
            logger.warning("languages_dir_name must not be empty, using 'languages'")
            self.languages_dir_name = "languages"
        if not self.key_column:
            logger.warning("key_column must not be empty, using 'StringKey'")
            self.key_column = "StringKey"
        if self.encoding != "locale":
            try:
                codecs.lookup(self.encoding)
            except LookupError:
                logger.warning(f"Unknown encoding {self.encoding!r}, using utf-8")
                self.encoding = "utf-8"
        level = str(self.log_level).upper()
        if level not in _LOG_LEVELS:
            logger.warning(f"Unknown log_level {self.log_level!r}, using INFO")
            level = "INFO"
        self.log_level = level

    @staticmethod
    def _valid_pattern(pattern: str) -> bool:
        try:
            return pattern.format(id=0) != pattern.format(id=1)
        except (KeyError, IndexError, ValueError):
            return False

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


class ConfigManager:
    """Load and save ExportConfig as JSON."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            config_path: Path to config file. When None, defaults are used and
                nothing is persisted.
        """
        self.config_path = Path(config_path) if config_path is not None else None
        self.config = self.load()

    def load(self) -> ExportConfig:
        """Load configuration from file."""
        if self.config_path is None or not self.config_path.exists():
            return ExportConfig()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if not isinstance(data, dict):
                logger.warning(f"Config root must be an object, got {type(data).__name__}, using defaults")
                return ExportConfig()

            # Filter out unknown keys to avoid TypeError
            valid_fields = {f.name for f in ExportConfig.__dataclass_fields__.values()}
            unknown = sorted(k for k in data if k not in valid_fields)
            if unknown:
                logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")
            filtered_data = {k: v for k, v in data.items() if k in valid_fields}

            return ExportConfig(**filtered_data)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Failed to load config: {e}, using defaults")
            return ExportConfig()
        except OSError as e:
            logger.warning(f"Config file I/O error: {e}, using defaults")
            return ExportConfig()

    def save(self) -> bool:
        """Save configuration to file."""
        if self.config_path is None:
            logger.warning("No config path set, nothing saved")
            return False
        try:
            data = asdict(self.config)
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            return True
        except OSError as e:
            logger.error(f"Failed to save config: {e}")
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return getattr(self.config, key, default)

    def set(self, key: str, value: Any) -> bool:
        """Set configuration value."""
        if not hasattr(self.config, key):
            logger.warning(f"Unknown config key: {key}")
            return False
        setattr(self.config, key, value)
        self.config.__post_init__()
        return True
