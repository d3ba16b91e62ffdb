# -*- coding: utf-8 -*-
"""Supported game releases and their install-folder tokens."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional


class FromSoftGame(str, Enum):
    DemonsSouls = "DemonsSouls"
    DarkSoulsPtde = "DarkSoulsPtde"
    DarkSoulsRemastered = "DarkSoulsRemastered"
    DarkSouls2 = "DarkSouls2"
    DarkSouls2Sotfs = "DarkSouls2Sotfs"
    Bloodborne = "Bloodborne"
    DarkSouls3 = "DarkSouls3"
    Sekiro = "Sekiro"
    EldenRing = "EldenRing"
    ArmoredCore6 = "ArmoredCore6"
    Nightreign = "Nightreign"

    def __str__(self) -> str:
        return self.value


# Folder name that identifies each game's install root.
GAME_PATH_PARTS: Dict[FromSoftGame, str] = {
    FromSoftGame.DemonsSouls: "Demons Souls",
    FromSoftGame.DarkSoulsPtde: "Dark Souls Prepare to Die Edition",
    FromSoftGame.DarkSoulsRemastered: "DARK SOULS REMASTERED",
    FromSoftGame.DarkSouls2: "Dark Souls II",
    FromSoftGame.DarkSouls2Sotfs: "Dark Souls II Scholar of the First Sin",
    FromSoftGame.Bloodborne: "Bloodborne",
    FromSoftGame.DarkSouls3: "DARK SOULS III",
    FromSoftGame.Sekiro: "Sekiro",
    FromSoftGame.EldenRing: "ELDEN RING",
    FromSoftGame.ArmoredCore6: "ARMORED CORE VI FIRES OF RUBICON",
    FromSoftGame.Nightreign: "ELDEN RING NIGHTREIGN",
}

ALL_GAMES: List[FromSoftGame] = list(FromSoftGame)


def game_order(game: FromSoftGame) -> int:
    return ALL_GAMES.index(game)


def parse_game(raw: str) -> Optional[FromSoftGame]:
    """Accept an enum name or install-folder token (case-insensitive)."""
    key = (raw or "").strip().lower()
    if not key:
        return None
    for game in ALL_GAMES:
        if game.value.lower() == key or GAME_PATH_PARTS[game].lower() == key:
            return game
    return None
