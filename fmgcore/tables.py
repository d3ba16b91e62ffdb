# -*- coding: utf-8 -*-
"""Curated lookup tables (FMG types + language folders).

Both tables are plain text, one entry per line, `/`-separated, with
`#` starting a note:

    11/武器名/WeaponName  # item [DemonsSouls, ...]
    engus/English  # [Bloodborne, ...]

`fmglab catalog key` prints lines in the same layout, so new rows can be
pasted back in.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

from fmgcore.errors import TableFormatError
from fmgcore.records import TypeKey

DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_TYPES_PATH = DATA_DIR / "fmg_types.txt"
DEFAULT_LANGUAGES_PATH = DATA_DIR / "fmg_languages.txt"


def _iter_rows(text: str) -> Iterator[Tuple[int, str]]:
    for lineno, raw in enumerate((text or "").splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if line:
            yield lineno, line


def parse_type_table(text: str, source: str = "<types>") -> Dict[TypeKey, str]:
    """Parse `id/name/Type` rows. Rows with an empty type are placeholders and skipped."""
    out: Dict[TypeKey, str] = {}
    for lineno, line in _iter_rows(text):
        parts = line.split("/")
        if len(parts) != 3:
            raise TableFormatError(f"{source}:{lineno}: expected id/name/Type, got {line!r}")
        raw_id, name, type_id = (p.strip() for p in parts)
        try:
            binder_id = int(raw_id)
        except ValueError:
            raise TableFormatError(f"{source}:{lineno}: bad binder id {raw_id!r}") from None
        if not name:
            raise TableFormatError(f"{source}:{lineno}: empty fmg name")
        if not type_id:
            continue
        key = (binder_id, name)
        if key in out and out[key] != type_id:
            raise TableFormatError(f"{source}:{lineno}: {key} mapped to both {out[key]} and {type_id}")
        out[key] = type_id
    return out


def parse_language_table(text: str, source: str = "<languages>") -> Dict[str, str]:
    out: Dict[str, str] = {}
    for lineno, line in _iter_rows(text):
        parts = line.split("/")
        if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
            raise TableFormatError(f"{source}:{lineno}: expected token/Language, got {line!r}")
        out[parts[0].strip().lower()] = parts[1].strip()
    return out


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise TableFormatError(f"Cannot read table {path}: {e}") from e


def load_type_table(path: Optional[Path] = None) -> Dict[TypeKey, str]:
    p = Path(path) if path else DEFAULT_TYPES_PATH
    return parse_type_table(_read(p), str(p))


def load_language_table(path: Optional[Path] = None) -> Dict[str, str]:
    p = Path(path) if path else DEFAULT_LANGUAGES_PATH
    return parse_language_table(_read(p), str(p))
