#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Input signatures for skipping catalog rebuilds when nothing changed."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from fmgcore.games import FromSoftGame
from fmgtools.cli_common import INDEX_DIR

DEFAULT_CACHE_PATH = INDEX_DIR / ".build_cache.json"

# Only these subtrees can hold FMGs.
SCANNED_DIRS = ("msg", "menu")


def load_cache(path: Optional[Path] = None) -> Dict[str, Any]:
    p = path or DEFAULT_CACHE_PATH
    if not p.exists():
        return {}
    try:
        doc = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return doc if isinstance(doc, dict) else {}


def save_cache(cache: Dict[str, Any], path: Optional[Path] = None) -> None:
    p = path or DEFAULT_CACHE_PATH
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(cache, ensure_ascii=False, indent=2), encoding="utf-8")


def file_sig(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        return {"path": None, "exists": False}
    p = Path(path)
    if not p.is_file():
        return {"path": str(p), "exists": False}
    st = p.stat()
    return {"path": str(p), "exists": True, "mtime_ns": int(st.st_mtime_ns), "size": int(st.st_size)}


def files_sig(paths: Iterable[Path], *, label: str = "") -> Dict[str, Any]:
    count = 0
    max_mtime = 0
    total_size = 0
    for p in paths:
        try:
            st = p.stat()
        except OSError:
            continue
        count += 1
        total_size += int(st.st_size)
        max_mtime = max(max_mtime, int(st.st_mtime_ns))
    return {"label": label, "count": count, "max_mtime_ns": max_mtime, "total_size": total_size}


def game_root_sig(root: str) -> Dict[str, Any]:
    base = Path(root).expanduser()
    files = []
    for sub in SCANNED_DIRS:
        d = base / sub
        if d.is_dir():
            files.extend(fp for fp in d.rglob("*") if fp.is_file())
    sig = files_sig(files, label=str(base))
    sig["exists"] = base.is_dir()
    return sig


def inputs_sig(
    roots: Mapping[FromSoftGame, str],
    *,
    types_table: Path,
    languages_table: Path,
    options: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "roots": {str(g): game_root_sig(r) for g, r in roots.items()},
        "types_table": file_sig(types_table),
        "languages_table": file_sig(languages_table),
        "options": dict(options or {}),
    }
