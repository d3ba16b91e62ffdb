# -*- coding: utf-8 -*-
"""Pick a root directory for each game from candidate paths."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from fmgcore.errors import MissingGameRootError
from fmgcore.games import ALL_GAMES, GAME_PATH_PARTS, FromSoftGame

_SEP_RE = re.compile(r"[\\/]")


def _segments(path: str) -> List[str]:
    return [s for s in _SEP_RE.split(str(path or "").lower()) if s]


def match_game_root(
    game: FromSoftGame,
    candidates: Sequence[str],
    *,
    path_parts: Mapping[FromSoftGame, str] = GAME_PATH_PARTS,
) -> Optional[str]:
    part = path_parts[game].lower()
    for cand in candidates:
        if part in _segments(cand):
            return cand
    return None


def resolve_game_roots(
    candidates: Iterable[str],
    games: Optional[Iterable[FromSoftGame]] = None,
    *,
    path_parts: Mapping[FromSoftGame, str] = GAME_PATH_PARTS,
) -> Dict[FromSoftGame, str]:
    """Return {game: root} for every requested game.

    Notes
    - Whole-segment match only ("ELDEN RING" never matches "ELDEN RING NIGHTREIGN").
    - First matching candidate wins.
    """
    cands = [str(c) for c in candidates if str(c or "").strip()]
    out: Dict[FromSoftGame, str] = {}
    for game in games if games is not None else ALL_GAMES:
        root = match_game_root(game, cands, path_parts=path_parts)
        if root is None:
            raise MissingGameRootError(
                f"Path for {game} not provided: path part \"{path_parts[game]}\" not found"
            )
        out[game] = root
    return out
