"""
Language file decoder

Decodes ``language.<id>.bin`` resource files into (key, value) string pairs.

File layout:
- 4-byte little-endian header word (not interpreted)
- zlib stream, inflating to:
    uint32 BE  entry count
    entry count times:
        uint16 BE key length,   UTF-8 key bytes
        uint16 BE value length, UTF-8 value bytes

The export pipeline only depends on the decoder contract: a callable taking a
language id and returning a sequence of (key, value) pairs, or raising
DecodeError. Decoding is all-or-nothing per language.
"""

from __future__ import annotations

import io
import logging
import struct
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Sequence

from ..utils.io import read_bytes_file
from ..utils.logger import DecodeError

logger = logging.getLogger(__name__)

HEADER_SIZE = 4

Entries = Sequence[tuple[str, str]]
Decoder = Callable[[int], Entries]


@dataclass
class LangFile:
    header: int
    entries: list[tuple[str, str]] = field(default_factory=list)


def _read_exact(handle: BinaryIO, size: int) -> bytes:
    data = handle.read(size)
    if len(data) != size:
        raise DecodeError(
            f"Unexpected end of data: wanted {size} bytes, got {len(data)}"
        )
    return data


def _read_string(handle: BinaryIO) -> str:
    (length,) = struct.unpack(">H", _read_exact(handle, 2))
    raw = _read_exact(handle, length)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"String is not valid UTF-8: {exc}") from exc


def decode_lang_bytes(data: bytes, source: Optional[Path] = None) -> LangFile:
    """
    Decode the raw bytes of one language file.

    Raises:
        DecodeError: truncated header, bad zlib data, truncated entries or invalid UTF-8
    """
    try:
        if len(data) < HEADER_SIZE:
            raise DecodeError(f"File too short for header ({len(data)} bytes)")
        (header,) = struct.unpack("<I", data[:HEADER_SIZE])

        try:
            payload = zlib.decompress(data[HEADER_SIZE:])
        except zlib.error as exc:
            raise DecodeError(f"Decompression failed: {exc}") from exc

        handle = io.BytesIO(payload)
        (count,) = struct.unpack(">I", _read_exact(handle, 4))
        entries: list[tuple[str, str]] = []
        for _ in range(count):
            key = _read_string(handle)
            value = _read_string(handle)
            entries.append((key, value))

        trailing = len(payload) - handle.tell()
        if trailing:
            logger.debug(f"Ignoring {trailing} trailing bytes after {count} entries")
    except DecodeError as exc:
        if source is not None and exc.file_path is None:
            exc.file_path = source
            exc.details["file_path"] = str(source)
        raise

    return LangFile(header=header, entries=entries)


class LangFileDecoder:
    """Decoder reading ``language.<id>.bin`` files from a languages directory."""

    def __init__(self, languages_dir: str | Path, pattern: str = "language.{id}.bin"):
        self.languages_dir = Path(languages_dir)
        self.pattern = pattern

    def path_for(self, lang_id: int) -> Path:
        return self.languages_dir / self.pattern.format(id=lang_id)

    def load(self, lang_id: int) -> LangFile:
        path = self.path_for(lang_id)
        if not path.is_file():
            raise DecodeError(f"Missing language file (id {lang_id})", file_path=path)
        try:
            data = read_bytes_file(path)
        except OSError as exc:
            raise DecodeError(f"Could not read language file: {exc}", file_path=path) from exc
        return decode_lang_bytes(data, source=path)

    def decode(self, lang_id: int) -> list[tuple[str, str]]:
        return self.load(lang_id).entries

    __call__ = decode
