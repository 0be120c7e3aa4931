"""
Diagnostics collected during an export run.

Every skipped declaration, failed language file, overridden entry and missing
value is recorded here and mirrored to the log. None of these affect whether
the run succeeds.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

# Diagnostic kinds
CONFIG_ENTRY = "config_entry"
DECODE = "decode"
OVERRIDE = "override"
MISSING_VALUE = "missing_value"


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    message: str
    language: Optional[str] = None
    key: Optional[str] = None
    level: int = logging.WARNING


class DiagnosticLog:
    """Ordered collection of diagnostics for one run."""

    def __init__(self):
        self._items: list[Diagnostic] = []

    def add(
        self,
        kind: str,
        message: str,
        language: Optional[str] = None,
        key: Optional[str] = None,
        level: int = logging.WARNING,
    ) -> Diagnostic:
        diag = Diagnostic(kind=kind, message=message, language=language, key=key, level=level)
        self._items.append(diag)
        logger.log(level, message)
        return diag

    def of_kind(self, kind: str) -> list[Diagnostic]:
        return [d for d in self._items if d.kind == kind]

    def counts(self) -> dict[str, int]:
        """Number of diagnostics per kind."""
        return dict(Counter(d.kind for d in self._items))

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
