# -*- coding: utf-8 -*-
"""(binder id, fmg name) -> FmgType resolution."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Mapping, Optional, Set

from fmgcore.records import TypeKey

# Order matters: first suffix with a single candidate wins.
SUFFIXES: List[str] = ["_DLC1", "_DLC2", "_Patch", "_dlc01", "_dlc02"]
SUFFIX_REWRITE: Dict[str, str] = {"_dlc01": "_DLC1", "_dlc02": "_DLC2"}


def base_type(type_id: str) -> str:
    """Strip a DLC/patch suffix: `WeaponName_DLC1` -> `WeaponName`."""
    for suffix in SUFFIXES:
        if type_id.endswith(suffix):
            return type_id[: -len(suffix)]
    return type_id


def _single(candidates: Optional[Set[str]]) -> Optional[str]:
    if candidates and len(candidates) == 1:
        (found,) = candidates
        return found
    return None


class KeyResolver:
    """Curated lookup first, suffix inference second.

    Names match exactly first, then case-insensitively; the case-insensitive
    pass only answers when it is unambiguous. Inference only fires when the
    shortened fmg name maps to exactly one distinct curated type (any binder
    id). Ambiguous or unknown names stay unresolved.
    """

    def __init__(self, table: Mapping[TypeKey, str]):
        self.table: Dict[TypeKey, str] = dict(table)
        self._table_lower: Dict[TypeKey, Set[str]] = defaultdict(set)
        self._types_by_name: Dict[str, Set[str]] = defaultdict(set)
        self._types_by_lower_name: Dict[str, Set[str]] = defaultdict(set)
        for (binder_id, name), type_id in self.table.items():
            self._table_lower[(binder_id, name.lower())].add(type_id)
            self._types_by_name[name].add(type_id)
            self._types_by_lower_name[name.lower()].add(type_id)

    def lookup(self, key: TypeKey) -> Optional[str]:
        found = self.table.get(key)
        if found is not None:
            return found
        binder_id, name = key
        return _single(self._table_lower.get((binder_id, name.lower())))

    def _candidates(self, short: str) -> Optional[Set[str]]:
        exact = self._types_by_name.get(short)
        if exact:
            return exact
        return self._types_by_lower_name.get(short.lower())

    def infer(self, key: TypeKey) -> Optional[str]:
        _, name = key
        for suffix in SUFFIXES:
            if not name.endswith(suffix.lower()):
                continue
            found = _single(self._candidates(name[: -len(suffix)]))
            if found is not None:
                return found + SUFFIX_REWRITE.get(suffix, suffix)
        return None

    def resolve(self, key: TypeKey) -> Optional[str]:
        return self.lookup(key) or self.infer(key)

    def known_types(self) -> List[str]:
        return sorted(set(self.table.values()))
