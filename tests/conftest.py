# -*- coding: utf-8 -*-
"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = TESTS_DIR.parent
for p in (PROJECT_ROOT, TESTS_DIR):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from fmg_fixtures import FakeReader  # noqa: E402


@pytest.fixture
def fake_reader() -> FakeReader:
    return FakeReader()


@pytest.fixture(autouse=True)
def _no_env_roots(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("FMG_GAME_ROOTS", "FMG_TYPES_TABLE", "FMG_LANGUAGES_TABLE"):
        monkeypatch.delenv(key, raising=False)
