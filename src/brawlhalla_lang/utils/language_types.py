"""Reader for LanguageTypes.xml, the game's list of declared languages."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from .logger import FatalConfigError

logger = logging.getLogger(__name__)

ROOT_TAG = "LanguageTypes"
ENTRY_TAG = "LanguageType"
NAME_ATTR = "LanguageName"
ID_TAG = "LanguageID"

RawDeclaration = tuple[Optional[str], Optional[str]]


def parse_language_types(root: ET.Element, source: Optional[Path] = None) -> list[RawDeclaration]:
    """
    Pull (name, id string) pairs out of a parsed LanguageTypes document.

    Either half of a pair may be None when the attribute or element is absent;
    validation of the values is left to the registry.
    """
    if root.tag != ROOT_TAG:
        raise FatalConfigError(
            f"Invalid LanguageTypes.xml file given (root element is <{root.tag}>)",
            config_path=source,
        )

    declarations: list[RawDeclaration] = []
    for elem in root.findall(ENTRY_TAG):
        name = elem.get(NAME_ATTR)
        id_elem = elem.find(ID_TAG)
        id_text = "".join(id_elem.itertext()) if id_elem is not None else None
        declarations.append((name, id_text))

    logger.debug(f"Read {len(declarations)} {ENTRY_TAG} elements")
    return declarations


def read_language_types(path: str | Path) -> list[RawDeclaration]:
    """
    Read LanguageTypes.xml from disk.

    Raises:
        FatalConfigError: file missing, unreadable, not XML, or wrong root element
    """
    p = Path(path)
    if not p.is_file():
        raise FatalConfigError("Given LanguageTypes.xml file does not exist", config_path=p)

    try:
        with p.open("rb") as handle:
            tree = ET.parse(handle)
    except ET.ParseError as exc:
        raise FatalConfigError(
            f"Parsing LanguageTypes.xml failed with error: {exc}", config_path=p
        ) from exc
    except OSError as exc:
        raise FatalConfigError(
            f"Reading LanguageTypes.xml failed with error: {exc}", config_path=p
        ) from exc

    return parse_language_types(tree.getroot(), source=p)
