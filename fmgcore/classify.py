# -*- coding: utf-8 -*-
"""Category + language classification from record paths."""

from __future__ import annotations

from typing import List

from fmgcore.errors import UnknownCategoryError, UnknownLanguageError
from fmgcore.games import FromSoftGame
from fmgcore.records import FmgRecord

CATEGORY_NONE = "none"
CATEGORIES: List[str] = ["item", "menu"]


def category(record: FmgRecord) -> str:
    """Binder category from the binder path (`none` for loose FMGs)."""
    if record.binder_path is None:
        return CATEGORY_NONE
    for cat in CATEGORIES:
        if "/" + cat in record.binder_path:
            return cat
    raise UnknownCategoryError(f"Unknown category in {record}", record)


def language(record: FmgRecord) -> str:
    """Lowercase language folder token.

    Layouts
    - msg/<lang>/...          (language is the 2nd segment)
    - menu/text/<lang>/...    (language is the 3rd segment)
    Demon's Souls keeps Japanese binders directly under msg/.
    """
    path = record.binder_path if record.binder_path is not None else record.path
    parts = path.split("/")
    low = path.lower()
    if low.startswith("msg/"):
        lang = parts[1].lower()
        if record.game == FromSoftGame.DemonsSouls and "msgbnd" in lang:
            lang = "japanese"
        return lang
    if low.startswith("menu/text/"):
        return parts[2].lower()
    raise UnknownLanguageError(f"Unknown language in {record}", record)
