# -*- coding: utf-8 -*-
"""Catalog output: JSON artifact (`data` mode) + key table (`key` mode)."""

from __future__ import annotations

import hashlib
import json
from collections import OrderedDict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from fmgcore import __version__
from fmgcore.catalog import FmgCatalog
from fmgcore.classify import category, language
from fmgcore.games import FromSoftGame, game_order
from fmgcore.keys import KeyResolver
from fmgcore.records import FmgRecord, TypeKey

SCHEMA_VERSION = 1
TOOL_NAME = "fmglab catalog"


def table_source(path: Path, rows: int) -> Dict[str, Any]:
    """Identify one curated table: path, parsed row count and content digest."""
    p = Path(path)
    digest = hashlib.sha256(p.read_bytes()).hexdigest()
    return {"path": str(p), "rows": int(rows), "sha256": digest[:16]}


def build_meta(
    *,
    sources: Optional[Dict[str, Any]] = None,
    tables: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    meta: Dict[str, Any] = {
        "schema": SCHEMA_VERSION,
        "generated": datetime.now().astimezone().isoformat(timespec="seconds"),
        "tool": TOOL_NAME,
        "tool_version": __version__,
    }
    if sources:
        meta["sources"] = dict(sources)
    if tables:
        meta["tables"] = dict(tables)
    return meta


def _show_all(values: Iterable[str]) -> str:
    return ", ".join(OrderedDict.fromkeys(values))


class CatalogEmitter:
    """Serialize an FmgCatalog as JSON.

    `include_meta=False` drops the timestamped meta block so identical
    input yields identical bytes.
    """

    def __init__(
        self,
        *,
        include_meta: bool = True,
        sources: Optional[Dict[str, Any]] = None,
        tables: Optional[Dict[str, Any]] = None,
    ):
        self.include_meta = bool(include_meta)
        self.sources = sources or {}
        self.tables = tables or {}

    def document(self, catalog: FmgCatalog) -> Dict[str, Any]:
        doc: Dict[str, Any] = {"schema_version": SCHEMA_VERSION}
        if self.include_meta:
            doc["meta"] = build_meta(sources=self.sources, tables=self.tables)
        doc.update(catalog.to_dict())
        return doc

    def render(self, catalog: FmgCatalog) -> str:
        return json.dumps(self.document(catalog), ensure_ascii=False, indent=2) + "\n"

    def write(self, catalog: FmgCatalog, path: Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(self.render(catalog), encoding="utf-8")
        return out


def load_catalog(path: Path) -> FmgCatalog:
    doc = json.loads(Path(path).read_text(encoding="utf-8"))
    return FmgCatalog.from_dict(doc)


# -----------------------------
# key mode
# -----------------------------


def render_records(records: Iterable[FmgRecord], games: Optional[Iterable[FromSoftGame]] = None) -> List[str]:
    """Per-game raw record listing (game name, then its records).

    Every walked game gets its header line, even when it yielded nothing.
    """
    rows = list(records)
    if games is None:
        games = {r.game for r in rows}
    lines: List[str] = []
    for game in sorted(set(games), key=game_order):
        lines.append(str(game))
        lines.extend(str(r) for r in rows if r.game == game and not r.is_unused)
    return lines


def render_key_table(records: Iterable[FmgRecord], resolver: KeyResolver) -> List[str]:
    """One curated-table row per (binder id, fmg name), unresolved types left blank."""
    by_key: Dict[TypeKey, List[FmgRecord]] = {}
    for r in records:
        if r.is_unused:
            continue
        by_key.setdefault(r.key, []).append(r)

    lines: List[str] = []
    for key in sorted(by_key):
        rows = by_key[key]
        binder_id, name = key
        type_id = resolver.resolve(key) or ""
        note = f"{_show_all(category(r) for r in rows)} [{_show_all(str(r.game) for r in rows)}]"
        lines.append(f"{binder_id}/{name}/{type_id}  # {note}")
    return lines


def render_language_table(records: Iterable[FmgRecord], languages: Mapping[str, str]) -> List[str]:
    by_lang: Dict[str, List[FmgRecord]] = {}
    for r in records:
        by_lang.setdefault(language(r), []).append(r)

    lines: List[str] = []
    for token, rows in by_lang.items():
        name = languages.get(token) or ""
        lines.append(f"{token}/{name}  # [{_show_all(str(r.game) for r in rows)}]")
    return lines


def render_key_summary(
    records: Iterable[FmgRecord],
    resolver: KeyResolver,
    languages: Mapping[str, str],
    games: Optional[Iterable[FromSoftGame]] = None,
) -> str:
    rows = list(records)
    parts = [
        render_records(rows, games),
        render_key_table(rows, resolver),
        render_language_table(rows, languages),
    ]
    return "\n\n".join("\n".join(p) for p in parts) + "\n"
