# -*- coding: utf-8 -*-
from __future__ import annotations

import os
from pathlib import Path

from fmgcore.config import resolve_config

INI = """\
[PATHS]
GAME_ROOTS =
    /games/ELDEN RING/Game
    /games/Sekiro

[TABLES]
TYPES = /tables/types.txt
"""


def _ini(tmp_path: Path) -> Path:
    p = tmp_path / "settings.ini"
    p.write_text(INI, encoding="utf-8")
    return p


def test_missing_ini_is_empty(tmp_path):
    cfg = resolve_config(config_path=tmp_path / "nope.ini")
    assert cfg.game_roots == ()
    assert cfg.types_table is None and cfg.languages_table is None
    assert cfg.config_path is None


def test_ini_values(tmp_path):
    cfg = resolve_config(config_path=_ini(tmp_path))
    assert cfg.game_roots == ("/games/ELDEN RING/Game", "/games/Sekiro")
    assert cfg.types_table == Path("/tables/types.txt")
    assert cfg.languages_table is None


def test_env_beats_ini(tmp_path, monkeypatch):
    monkeypatch.setenv("FMG_GAME_ROOTS", os.pathsep.join(["/a/Bloodborne", "/b/DARK SOULS III"]))
    monkeypatch.setenv("FMG_LANGUAGES_TABLE", "/env/langs.txt")
    cfg = resolve_config(config_path=_ini(tmp_path))
    assert cfg.game_roots == ("/a/Bloodborne", "/b/DARK SOULS III")
    assert cfg.languages_table == Path("/env/langs.txt")
    assert cfg.types_table == Path("/tables/types.txt")


def test_arguments_beat_env(tmp_path, monkeypatch):
    monkeypatch.setenv("FMG_GAME_ROOTS", "/a/Bloodborne")
    cfg = resolve_config(config_path=_ini(tmp_path), game_roots=["/c/Sekiro"], types_table="/arg/types.txt")
    assert cfg.game_roots == ("/c/Sekiro",)
    assert cfg.types_table == Path("/arg/types.txt")
