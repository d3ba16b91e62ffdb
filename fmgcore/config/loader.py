#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Run configuration (game roots + curated table overrides).

Precedence: explicit arguments > environment > conf/settings.ini.
A missing settings.ini is fine; the CLI can pass everything.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "conf" / "settings.ini"

ENV_GAME_ROOTS = "FMG_GAME_ROOTS"
ENV_TYPES_TABLE = "FMG_TYPES_TABLE"
ENV_LANGUAGES_TABLE = "FMG_LANGUAGES_TABLE"


@dataclass(frozen=True)
class CatalogConfig:
    game_roots: Tuple[str, ...]
    types_table: Optional[Path]
    languages_table: Optional[Path]
    config_path: Optional[Path]


def _expand(val: Optional[str]) -> Optional[str]:
    if not val:
        return None
    return os.path.expanduser(val.strip())


def _cfg_get(cfg: Optional[configparser.ConfigParser], section: str, key: str) -> str:
    if cfg is None:
        return ""
    return cfg.get(section, key, fallback="").strip()


def load_ini(path: Path) -> Optional[configparser.ConfigParser]:
    if not path.exists():
        return None
    cfg = configparser.ConfigParser()
    # keys like GAME_ROOTS stay upper case
    cfg.optionxform = str  # type: ignore[assignment]
    cfg.read(path, encoding="utf-8")
    return cfg


def _split_lines(val: str) -> List[str]:
    out: List[str] = []
    for line in (val or "").splitlines():
        p = _expand(line)
        if p:
            out.append(p)
    return out


def _split_env(val: str) -> List[str]:
    out: List[str] = []
    for part in (val or "").split(os.pathsep):
        p = _expand(part)
        if p:
            out.append(p)
    return out


def resolve_config(
    *,
    config_path: Path = DEFAULT_CONFIG_PATH,
    game_roots: Optional[Sequence[str]] = None,
    types_table: Optional[str] = None,
    languages_table: Optional[str] = None,
) -> CatalogConfig:
    cfg = load_ini(Path(config_path))

    roots = [r for r in (_expand(x) for x in (game_roots or [])) if r]
    if not roots:
        roots = _split_env(os.environ.get(ENV_GAME_ROOTS, ""))
    if not roots:
        roots = _split_lines(_cfg_get(cfg, "PATHS", "GAME_ROOTS"))

    types_table = (
        _expand(types_table)
        or _expand(os.environ.get(ENV_TYPES_TABLE))
        or _expand(_cfg_get(cfg, "TABLES", "TYPES"))
    )
    languages_table = (
        _expand(languages_table)
        or _expand(os.environ.get(ENV_LANGUAGES_TABLE))
        or _expand(_cfg_get(cfg, "TABLES", "LANGUAGES"))
    )

    return CatalogConfig(
        game_roots=tuple(roots),
        types_table=Path(types_table) if types_table else None,
        languages_table=Path(languages_table) if languages_table else None,
        config_path=Path(config_path) if cfg is not None else None,
    )
