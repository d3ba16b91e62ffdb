# -*- coding: utf-8 -*-
"""FMG catalog model + aggregation (core).

The catalog is built once per run from walker records and handed to
consumers explicitly (emitters, lookups); nothing here is cached globally.

Per game it holds:
- by_type: FmgType -> key info (category, base type, fmg name, binder id)
- overrides: base FmgType -> variant FmgTypes, newest first
- by_fmg_name / by_binder_id: reverse indices
- to_language / from_language: folder token <-> FmgLanguage
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from fmgcore.classify import category, language
from fmgcore.errors import ConflictingTypeMappingError, UnresolvedResourceError
from fmgcore.games import FromSoftGame, game_order
from fmgcore.keys import KeyResolver, base_type
from fmgcore.records import FmgRecord

logger = logging.getLogger(__name__)

UNSPECIFIED = "Unspecified"

# Global Steam releases lack the Japanese folder; keep the language addressable.
SYNTHETIC_LANGUAGES: Dict[FromSoftGame, List[str]] = {
    FromSoftGame.DarkSouls2: ["japanese"],
    FromSoftGame.DarkSouls2Sotfs: ["japanese"],
}


def _dedup(items: Iterable[str]) -> List[str]:
    out: List[str] = []
    seen = set()
    for x in items:
        if x in seen:
            continue
        out.append(x)
        seen.add(x)
    return out


@dataclass(frozen=True)
class FmgKeyInfo:
    game: FromSoftGame
    category: str
    type: str
    base_type: str
    fmg_name: str
    binder_id: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "type": self.type,
            "base_type": self.base_type,
            "fmg_name": self.fmg_name,
            "binder_id": int(self.binder_id),
        }

    @classmethod
    def from_dict(cls, game: FromSoftGame, doc: Mapping[str, Any]) -> "FmgKeyInfo":
        return cls(
            game=game,
            category=str(doc["category"]),
            type=str(doc["type"]),
            base_type=str(doc["base_type"]),
            fmg_name=str(doc["fmg_name"]),
            binder_id=int(doc["binder_id"]),
        )


@dataclass
class FmgGameInfo:
    game: FromSoftGame
    by_type: Dict[str, FmgKeyInfo] = field(default_factory=dict)
    overrides: Dict[str, List[str]] = field(default_factory=dict)
    by_fmg_name: Dict[str, List[str]] = field(default_factory=dict)
    by_binder_id: Dict[int, List[str]] = field(default_factory=dict)
    to_language: Dict[str, Optional[str]] = field(default_factory=dict)

    @property
    def from_language(self) -> Dict[str, str]:
        """FmgLanguage -> folder token (first token in sorted order wins)."""
        out: Dict[str, str] = {}
        for token in sorted(self.to_language):
            lang = self.to_language[token]
            if lang is not None and lang not in out:
                out[lang] = token
        return dict(sorted(out.items()))

    def lookup(self, type_id: str) -> Optional[FmgKeyInfo]:
        """Most specific entry for `type_id`: overrides newest-first, then the type itself."""
        for variant in self.overrides.get(type_id, []):
            if variant in self.by_type:
                return self.by_type[variant]
        return self.by_type.get(type_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "by_type": {k: v.to_dict() for k, v in self.by_type.items()},
            "overrides": {k: list(v) for k, v in self.overrides.items()},
            "by_fmg_name": {k: list(v) for k, v in self.by_fmg_name.items()},
            "by_binder_id": {str(k): list(v) for k, v in self.by_binder_id.items()},
            "to_language": dict(self.to_language),
            "from_language": self.from_language,
        }

    @classmethod
    def from_dict(cls, game: FromSoftGame, doc: Mapping[str, Any]) -> "FmgGameInfo":
        return cls(
            game=game,
            by_type={k: FmgKeyInfo.from_dict(game, v) for k, v in (doc.get("by_type") or {}).items()},
            overrides={k: list(v) for k, v in (doc.get("overrides") or {}).items()},
            by_fmg_name={k: list(v) for k, v in (doc.get("by_fmg_name") or {}).items()},
            by_binder_id={int(k): list(v) for k, v in (doc.get("by_binder_id") or {}).items()},
            to_language=dict(doc.get("to_language") or {}),
        )


@dataclass
class FmgCatalog:
    games: Dict[FromSoftGame, FmgGameInfo]
    languages: List[str]
    types: List[str]

    def game(self, game: FromSoftGame) -> Optional[FmgGameInfo]:
        return self.games.get(game)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "languages": list(self.languages),
            "types": list(self.types),
            "games": {g.value: info.to_dict() for g, info in self.games.items()},
        }

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "FmgCatalog":
        games: Dict[FromSoftGame, FmgGameInfo] = {}
        for raw, info in (doc.get("games") or {}).items():
            game = FromSoftGame(raw)
            games[game] = FmgGameInfo.from_dict(game, info)
        return cls(
            games=games,
            languages=list(doc.get("languages") or [UNSPECIFIED]),
            types=list(doc.get("types") or [UNSPECIFIED]),
        )


class CatalogAggregator:
    """Build an FmgCatalog from walker records.

    Fails fast: an unresolvable key or two different key infos for one
    FmgType in the same game abort the build.
    """

    def __init__(self, resolver: KeyResolver, languages: Mapping[str, str]):
        self.resolver = resolver
        self.languages: Dict[str, str] = {str(k).lower(): v for k, v in languages.items()}

    def canonical_language(self, token: str) -> Optional[str]:
        return self.languages.get(token.lower())

    def key_info(self, record: FmgRecord) -> FmgKeyInfo:
        type_id = self.resolver.resolve(record.key)
        if type_id is None:
            raise UnresolvedResourceError(f"Unrecognized FMG {record}", record)
        return FmgKeyInfo(
            game=record.game,
            category=category(record),
            type=type_id,
            base_type=base_type(type_id),
            fmg_name=record.name,
            binder_id=record.binder_id,
        )

    def build_game(self, game: FromSoftGame, records: Iterable[FmgRecord]) -> FmgGameInfo:
        by_type: Dict[str, FmgKeyInfo] = {}
        overrides: Dict[str, List[str]] = {}
        by_fmg_name: Dict[str, List[str]] = {}
        by_binder_id: Dict[int, List[str]] = {}
        to_language: Dict[str, Optional[str]] = {}

        for record in records:
            if record.game != game or record.is_unused:
                continue
            info = self.key_info(record)
            existing = by_type.get(info.type)
            if existing is not None and existing != info:
                raise ConflictingTypeMappingError(
                    f"Mismatched key info for {info.type} in {game}: {info} vs {existing}",
                    record,
                )
            by_type[info.type] = info
            if info.type != info.base_type:
                overrides.setdefault(info.base_type, []).append(info.type)
            by_fmg_name.setdefault(record.name, []).append(info.type)
            if record.binder_id >= 0:
                by_binder_id.setdefault(record.binder_id, []).append(info.type)
            token = language(record)
            to_language[token] = self.canonical_language(token)

        for token in SYNTHETIC_LANGUAGES.get(game, []):
            to_language[token] = self.canonical_language(token)

        unnamed = sorted(t for t, lang in to_language.items() if lang is None)
        if unnamed:
            logger.warning("%s: no FmgLanguage for folder(s) %s", game, ", ".join(unnamed))

        return FmgGameInfo(
            game=game,
            by_type=dict(sorted(by_type.items())),
            overrides={k: _dedup(reversed(v)) for k, v in sorted(overrides.items())},
            by_fmg_name={k: _dedup(v) for k, v in sorted(by_fmg_name.items())},
            by_binder_id={k: _dedup(v) for k, v in sorted(by_binder_id.items())},
            to_language=dict(sorted(to_language.items())),
        )

    def build(self, records: Iterable[FmgRecord], games: Optional[Iterable[FromSoftGame]] = None) -> FmgCatalog:
        rows = list(records)
        if games is None:
            games = {r.game for r in rows}
        ordered = sorted(set(games), key=game_order)

        out: Dict[FromSoftGame, FmgGameInfo] = {}
        seen_types = set()
        for game in ordered:
            info = self.build_game(game, rows)
            seen_types.update(info.by_type)
            out[game] = info

        return FmgCatalog(
            games=out,
            languages=[UNSPECIFIED] + sorted(set(self.languages.values())),
            types=[UNSPECIFIED] + sorted(set(self.resolver.known_types()) | seen_types),
        )
