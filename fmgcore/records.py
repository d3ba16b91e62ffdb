# -*- coding: utf-8 -*-
"""FMG record model + builders."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from fmgcore.games import FromSoftGame

FMG_EXT = ".fmg"

# (binder id, fmg name)
TypeKey = Tuple[int, str]

_SEP_RE = re.compile(r"[\\/]")


def is_fmg_name(path: str) -> bool:
    return str(path or "").lower().endswith(FMG_EXT)


def fmg_name(path: str) -> str:
    """Basename without extension; binder entry names use either separator."""
    base = _SEP_RE.split(str(path or ""))[-1]
    if not is_fmg_name(base):
        raise ValueError(f"Not an FMG path: {path}")
    return base[: -len(FMG_EXT)]


@dataclass(frozen=True)
class FmgRecord:
    game: FromSoftGame
    path: str
    name: str
    binder_path: Optional[str] = None
    binder_id: int = -1

    @property
    def key(self) -> TypeKey:
        return (self.binder_id, self.name)

    @property
    def is_unused(self) -> bool:
        return self.name.endswith("_00")

    def __str__(self) -> str:
        if self.binder_path is None:
            return f"{self.game} {self.path}"
        return f"{self.game} {self.binder_path} {self.binder_id}:{self.path}"


def loose_record(game: FromSoftGame, rel_path: str) -> FmgRecord:
    return FmgRecord(game=game, path=rel_path, name=fmg_name(rel_path))


def entry_record(game: FromSoftGame, binder_path: str, entry_name: str, entry_id: int) -> FmgRecord:
    return FmgRecord(
        game=game,
        path=entry_name,
        name=fmg_name(entry_name),
        binder_path=binder_path,
        binder_id=int(entry_id),
    )
