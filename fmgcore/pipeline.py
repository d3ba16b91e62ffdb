# -*- coding: utf-8 -*-
"""One catalog run: config -> roots -> records -> catalog.

`CatalogRun` is built once per invocation and passed to whatever consumes
it (CLI modes, tests); there is no module-level catalog cache.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from fmgcore.binder import ArchiveReader
from fmgcore.catalog import CatalogAggregator, FmgCatalog
from fmgcore.config import CatalogConfig
from fmgcore.emit import render_key_summary, table_source
from fmgcore.games import FromSoftGame
from fmgcore.keys import KeyResolver
from fmgcore.paths import resolve_game_roots
from fmgcore.records import FmgRecord
from fmgcore.tables import DEFAULT_LANGUAGES_PATH, DEFAULT_TYPES_PATH, load_language_table, load_type_table
from fmgcore.walker import FmgWalker

logger = logging.getLogger(__name__)


@dataclass
class CatalogRun:
    roots: Dict[FromSoftGame, str]
    records: List[FmgRecord]
    resolver: KeyResolver
    languages: Dict[str, str]
    types_path: Path = DEFAULT_TYPES_PATH
    languages_path: Path = DEFAULT_LANGUAGES_PATH

    @property
    def games(self) -> List[FromSoftGame]:
        return list(self.roots)

    def build_catalog(self) -> FmgCatalog:
        aggregator = CatalogAggregator(self.resolver, self.languages)
        return aggregator.build(self.records, self.games)

    def key_summary(self) -> str:
        return render_key_summary(self.records, self.resolver, self.languages, self.games)

    def table_sources(self) -> Dict[str, Any]:
        return {
            "types": table_source(self.types_path, len(self.resolver.table)),
            "languages": table_source(self.languages_path, len(self.languages)),
        }


def prepare_run(
    config: CatalogConfig,
    *,
    games: Optional[Iterable[FromSoftGame]] = None,
    reader: Optional[ArchiveReader] = None,
    silent: bool = False,
) -> CatalogRun:
    """Resolve roots, load curated tables and walk every game.

    Root resolution happens first so a missing game fails before any I/O.
    """
    roots = resolve_game_roots(config.game_roots, games)
    types_path = Path(config.types_table or DEFAULT_TYPES_PATH)
    languages_path = Path(config.languages_table or DEFAULT_LANGUAGES_PATH)
    resolver = KeyResolver(load_type_table(types_path))
    languages = load_language_table(languages_path)
    logger.debug("curated tables: %d types, %d languages", len(resolver.table), len(languages))

    walker = FmgWalker(reader, silent=silent)
    records = walker.walk(roots)
    return CatalogRun(
        roots=roots,
        records=records,
        resolver=resolver,
        languages=languages,
        types_path=types_path,
        languages_path=languages_path,
    )
