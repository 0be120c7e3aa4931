"""
Language registry

Turns the raw (name, id string) declarations from LanguageTypes.xml into an
ordered list of LanguageDescriptor. Bad entries are dropped with a diagnostic;
the surviving order becomes the column order of the export.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from ..utils.logger import ConfigEntryError
from .diagnostics import CONFIG_ENTRY, DiagnosticLog

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "Template"
MAX_LANGUAGE_ID = 2**32 - 1

# ASCII whitespace only; "-0" is accepted since it is zero
_ID_RE = re.compile(r"^[ \t\n\v\f\r]*(?:\+?([0-9]+)|-(0+))[ \t\n\v\f\r]*$")


@dataclass(frozen=True)
class LanguageDescriptor:
    """One declared language: display name and numeric id."""

    name: str
    id: int


def parse_language_id(text: Optional[str]) -> Optional[int]:
    """Parse an unsigned 32-bit language id, or return None if it is not one."""
    if text is None:
        return None
    m = _ID_RE.match(text)
    if not m:
        return None
    if m.group(1) is None:
        return 0
    value = int(m.group(1))
    if value > MAX_LANGUAGE_ID:
        return None
    return value


class LanguageRegistry:
    """Validates and deduplicates declared languages, first occurrence wins."""

    def __init__(
        self,
        diagnostics: Optional[DiagnosticLog] = None,
        template_name: str = TEMPLATE_NAME,
    ):
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self.template_name = template_name
        self.languages: list[LanguageDescriptor] = []
        self._names: set[str] = set()
        self._ids: set[int] = set()

    def register(
        self, declarations: Iterable[tuple[Optional[str], Optional[str]]]
    ) -> list[LanguageDescriptor]:
        """
        Register declarations in order.

        Args:
            declarations: (name, id string) pairs; either may be None

        Returns:
            All accepted descriptors so far, in input order
        """
        for name, id_text in declarations:
            if name == self.template_name:
                continue
            try:
                self.languages.append(self._accept(name, id_text))
            except ConfigEntryError as e:
                self.diagnostics.add(CONFIG_ENTRY, e.message, language=e.language_name)

        logger.debug(
            f"Registered {len(self.languages)} languages: "
            + ", ".join(f"{d.name}({d.id})" for d in self.languages)
        )
        return list(self.languages)

    def _accept(self, name: Optional[str], id_text: Optional[str]) -> LanguageDescriptor:
        if name is None:
            raise ConfigEntryError(
                f"Skipping language declaration that is missing a name (id {id_text!r})"
            )
        if name in self._names:
            raise ConfigEntryError(f"Duplicate language name {name}. Skipping", language_name=name)
        if id_text is None:
            raise ConfigEntryError(
                f"Language {name} is missing an id element. Skipping", language_name=name
            )
        lang_id = parse_language_id(id_text)
        if lang_id is None:
            raise ConfigEntryError(
                f"Language {name} has invalid lang id: {id_text}. Skipping.", language_name=name
            )
        if lang_id in self._ids:
            raise ConfigEntryError(
                f"Duplicate language id {lang_id}. Skipping", language_name=name
            )

        self._names.add(name)
        self._ids.add(lang_id)
        return LanguageDescriptor(name=name, id=lang_id)


def register_languages(
    declarations: Iterable[tuple[Optional[str], Optional[str]]],
    diagnostics: Optional[DiagnosticLog] = None,
    template_name: str = TEMPLATE_NAME,
) -> list[LanguageDescriptor]:
    """Validate declarations with a fresh registry."""
    return LanguageRegistry(diagnostics, template_name=template_name).register(declarations)
