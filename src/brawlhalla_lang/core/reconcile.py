"""
Reconciliation table

Merges the per-language (key, value) entries into one mapping of
string key -> {language id: value}. One table per export run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence

from .diagnostics import MISSING_VALUE, OVERRIDE, DiagnosticLog
from .registry import LanguageDescriptor

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationRow:
    key: str
    values: dict[int, str] = field(default_factory=dict)

    def value_for(self, lang_id: int) -> str:
        """Value for one language, empty string when the language has none."""
        return self.values.get(lang_id, "")


@dataclass(frozen=True)
class ExportTable:
    """Read-only view handed to the exporter."""

    languages: tuple[LanguageDescriptor, ...]
    rows: Mapping[str, ReconciliationRow]

    def sorted_keys(self) -> list[str]:
        # str ordering is by code point, independent of locale
        return sorted(self.rows)


class ReconciliationTable:
    """Key-indexed merge of all decoded languages."""

    def __init__(
        self,
        languages: Sequence[LanguageDescriptor],
        diagnostics: Optional[DiagnosticLog] = None,
    ):
        self.languages = tuple(languages)
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self._rows: dict[str, ReconciliationRow] = {}
        self._names = {lang.id: lang.name for lang in self.languages}
        self._entry_counts: dict[int, int] = {}

    def ingest(self, lang_id: int, entries: Iterable[tuple[str, str]]) -> int:
        """
        Add one language's entries. A key repeated within the same language
        overwrites the earlier value.

        Returns:
            Number of entries ingested
        """
        name = self._names.get(lang_id, str(lang_id))
        seen: set[str] = set()
        count = 0
        for key, value in entries:
            row = self._rows.get(key)
            if row is None:
                row = self._rows[key] = ReconciliationRow(key)
            if key in seen:
                self.diagnostics.add(
                    OVERRIDE,
                    f"Language {name} has duplicate key {key}. Later value wins",
                    language=name,
                    key=key,
                    level=logging.DEBUG,
                )
            seen.add(key)
            row.values[lang_id] = value
            count += 1
        self._entry_counts[lang_id] = self._entry_counts.get(lang_id, 0) + count
        return count

    def entry_count(self, lang_id: int) -> int:
        """Entries ingested for a language, duplicates included."""
        return self._entry_counts.get(lang_id, 0)

    def missing_keys(self, lang_id: int) -> list[str]:
        return sorted(k for k, row in self._rows.items() if lang_id not in row.values)

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, key: str) -> bool:
        return key in self._rows

    def snapshot(self) -> ExportTable:
        """Record a diagnostic for every gap and return a read-only view."""
        keys = sorted(self._rows)
        missing = {lang.id: 0 for lang in self.languages}
        # key-major order, languages in column order within a key
        for key in keys:
            values = self._rows[key].values
            for lang in self.languages:
                if lang.id not in values:
                    missing[lang.id] += 1
                    self.diagnostics.add(
                        MISSING_VALUE,
                        f"Language {lang.name} is missing value for key {key}. Using empty string.",
                        language=lang.name,
                        key=key,
                        level=logging.DEBUG,
                    )
        for lang in self.languages:
            if missing[lang.id]:
                logger.info(f"Language {lang.name} is missing {missing[lang.id]} of {len(keys)} keys")

        return ExportTable(
            languages=self.languages,
            rows=MappingProxyType(self._rows),
        )
