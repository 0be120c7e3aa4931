"""
Export pipeline

Registry -> (per language, in registry order) decoder -> reconciliation table
-> TSV exporter.

Per-entry and per-language problems end up as diagnostics. Only a broken
LanguageTypes document (FatalConfigError) or an unwritable destination
(OutputError) stop the run; both are returned on the ExportResult rather than
raised, and the caller decides how to report them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from ..utils.config import ExportConfig
from ..utils.language_types import read_language_types
from ..utils.logger import DecodeError, FatalConfigError, LangReaderError, OutputError
from .decoder import Decoder, LangFileDecoder
from .diagnostics import DECODE, DiagnosticLog
from .exporter import TsvExporter
from .reconcile import ExportTable, ReconciliationTable
from .registry import LanguageDescriptor, LanguageRegistry

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    languages: list[LanguageDescriptor] = field(default_factory=list)
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    table: Optional[ExportTable] = None
    entry_counts: dict[int, int] = field(default_factory=dict)
    failed_languages: list[LanguageDescriptor] = field(default_factory=list)
    output_path: Optional[Path] = None
    bytes_written: int = 0
    error: Optional[LangReaderError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


def build_table(
    languages: Iterable[LanguageDescriptor],
    decoder: Decoder,
    diagnostics: DiagnosticLog,
    failed: Optional[list[LanguageDescriptor]] = None,
) -> ReconciliationTable:
    """Decode and ingest every language in order; failed languages contribute nothing."""
    languages = list(languages)
    table = ReconciliationTable(languages, diagnostics)
    for lang in languages:
        try:
            # materialize first so a failure halfway through ingests nothing
            entries = list(decoder(lang.id))
        except (DecodeError, OSError) as exc:
            message = exc.message if isinstance(exc, DecodeError) else str(exc)
            diagnostics.add(
                DECODE,
                f"Error while decoding language file for {lang.name} (id {lang.id}): {message}. Skipping",
                language=lang.name,
            )
            if failed is not None:
                failed.append(lang)
            continue
        count = table.ingest(lang.id, entries)
        logger.info(f"Loaded {count} entries for {lang.name} (id {lang.id})")
    return table


def export_languages(
    declarations: Iterable[tuple[Optional[str], Optional[str]]],
    decoder: Decoder,
    output_path: str | Path,
    config: Optional[ExportConfig] = None,
) -> ExportResult:
    """
    Run the pipeline over already-read language declarations.

    Args:
        declarations: (name, id string) pairs in document order
        decoder: language id -> (key, value) pairs, raising DecodeError on failure
        output_path: destination of the TSV export
        config: export settings, defaults when None

    Returns:
        ExportResult; ``error`` is set when the output could not be written
    """
    config = config or ExportConfig()
    result = ExportResult(output_path=Path(output_path))

    registry = LanguageRegistry(result.diagnostics, template_name=config.template_name)
    result.languages = registry.register(declarations)
    if not result.languages:
        logger.warning("No usable languages declared; export will only contain keys")

    table = build_table(result.languages, decoder, result.diagnostics, result.failed_languages)
    result.entry_counts = {lang.id: table.entry_count(lang.id) for lang in result.languages}
    result.table = table.snapshot()

    exporter = TsvExporter(
        key_column=config.key_column,
        encoding=config.encoding,
        atomic=config.atomic_write,
    )
    try:
        result.bytes_written = exporter.write(result.table, result.output_path)
    except OutputError as exc:
        result.error = exc
    return result


def run_export(
    game_dir: str | Path,
    language_types_path: str | Path,
    output_path: str | Path,
    config: Optional[ExportConfig] = None,
) -> ExportResult:
    """
    Export every declared language of a game install to one TSV file.

    Args:
        game_dir: game install root containing the languages folder
        language_types_path: path to LanguageTypes.xml
        output_path: destination of the TSV export
        config: export settings, defaults when None
    """
    config = config or ExportConfig()
    languages_dir = Path(game_dir) / config.languages_dir_name
    if not languages_dir.is_dir():
        return ExportResult(
            output_path=Path(output_path),
            error=FatalConfigError(
                f"Given game path does not contain a {config.languages_dir_name} folder",
                config_path=languages_dir,
            ),
        )

    try:
        declarations = read_language_types(language_types_path)
    except FatalConfigError as exc:
        return ExportResult(output_path=Path(output_path), error=exc)

    decoder = LangFileDecoder(languages_dir, pattern=config.lang_file_pattern)
    return export_languages(declarations, decoder, output_path, config)
