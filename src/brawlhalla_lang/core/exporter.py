"""
Tab-separated export of the reconciliation table.

Layout:
    StringKey<TAB>Lang1<TAB>Lang2...
    key1<TAB>value1a<TAB>value1b...

Keys are sorted by code point. Literal newlines inside values are written as
the two characters backslash-n; nothing else is escaped, so a value that
contains a tab will shift the columns after it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from ..utils.io import resolve_encoding, write_bytes_file
from ..utils.logger import OutputError
from .reconcile import ExportTable

logger = logging.getLogger(__name__)

KEY_COLUMN = "StringKey"
COLUMN_SEP = "\t"
ROW_SEP = "\n"
NEWLINE_ESCAPE = "\\n"


def escape_value(value: str) -> str:
    return value.replace("\n", NEWLINE_ESCAPE)


def unescape_value(value: str) -> str:
    """Reverse escape_value for values that had no literal backslash-n of their own."""
    return value.replace(NEWLINE_ESCAPE, "\n")


class TsvExporter:
    """Serialize an ExportTable; never mutates it."""

    def __init__(
        self,
        key_column: str = KEY_COLUMN,
        encoding: str = "utf-8",
        atomic: bool = False,
    ):
        self.key_column = key_column
        self.encoding = encoding
        self.atomic = atomic

    def iter_lines(self, table: ExportTable) -> Iterator[str]:
        yield COLUMN_SEP.join([self.key_column] + [lang.name for lang in table.languages])
        for key in table.sorted_keys():
            row = table.rows[key]
            cells = [key] + [escape_value(row.value_for(lang.id)) for lang in table.languages]
            yield COLUMN_SEP.join(cells)

    def render(self, table: ExportTable) -> str:
        return ROW_SEP.join(self.iter_lines(table))

    def export(self, table: ExportTable) -> bytes:
        """
        Encode the table.

        Raises:
            OutputError: a value cannot be represented in the output encoding
        """
        encoding = resolve_encoding(self.encoding)
        try:
            return self.render(table).encode(encoding)
        except UnicodeEncodeError as exc:
            raise OutputError(
                f"Export cannot be encoded as {encoding}: {exc}", encoding=encoding
            ) from exc

    def write(self, table: ExportTable, path: str | Path) -> int:
        """
        Write the export to a file.

        Returns:
            Bytes written

        Raises:
            OutputError: the destination cannot be opened or written
        """
        p = Path(path)
        data = self.export(table)
        try:
            written = write_bytes_file(p, data, atomic=self.atomic)
        except OSError as exc:
            raise OutputError(
                f"Writing to output path failed with error: {exc}", file_path=p
            ) from exc
        logger.info(f"Wrote {len(table.rows)} keys x {len(table.languages)} languages to {p}")
        return written
