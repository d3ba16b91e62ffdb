#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Build the FMG catalog from game install folders.

Modes
- key:  raw record listing + key table (curated-table row format, unknown
        types left blank) + language folder table. Used to update
        fmgcore/data/*.txt when a game or patch adds FMGs.
- data: full JSON catalog (stdout, or --out PATH).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from fmgcore.config import DEFAULT_CONFIG_PATH, resolve_config
from fmgcore.emit import CatalogEmitter
from fmgcore.errors import FmgCatalogError
from fmgcore.games import FromSoftGame, parse_game
from fmgcore.paths import resolve_game_roots
from fmgcore.pipeline import prepare_run
from fmgcore.tables import DEFAULT_LANGUAGES_PATH, DEFAULT_TYPES_PATH
from fmgtools.build_cache import file_sig, inputs_sig, load_cache, save_cache
from fmgtools.cli_common import console, setup_logging

CACHE_KEY = "fmg_catalog"


def _parse_games(p: argparse.ArgumentParser, raw: List[str]) -> Optional[List[FromSoftGame]]:
    if not raw:
        return None
    games: List[FromSoftGame] = []
    for val in raw:
        game = parse_game(val)
        if game is None:
            p.error(f"unknown game: {val}")
        games.append(game)
    return games


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="fmglab catalog", description="Scan game folders and build the FMG catalog.")
    p.add_argument("mode", choices=["key", "data"], help="key = key table summary, data = full catalog")
    p.add_argument("roots", nargs="*", help="Game install roots (default from FMG_GAME_ROOTS / settings.ini)")
    p.add_argument("--game", action="append", default=[], help="Only these games (repeatable; enum name or folder name)")
    p.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="Settings ini path")
    p.add_argument("--types", default=None, help="Override curated type table")
    p.add_argument("--languages", default=None, help="Override curated language table")
    p.add_argument("--out", default=None, help="Write the data-mode catalog here instead of stdout")
    p.add_argument("--no-meta", action="store_true", help="Omit the timestamped meta block")
    p.add_argument("--force", action="store_true", help="Rebuild --out even if inputs are unchanged")
    p.add_argument("--verbose", action="store_true", help="Debug logging")
    p.add_argument("--silent", action="store_true", help="Warnings only")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    setup_logging(verbose=bool(args.verbose), silent=bool(args.silent))
    games = _parse_games(p, args.game)

    config = resolve_config(
        config_path=Path(args.config),
        game_roots=args.roots,
        types_table=args.types,
        languages_table=args.languages,
    )

    try:
        roots = resolve_game_roots(config.game_roots, games)

        out_path = Path(args.out).resolve() if (args.out and args.mode == "data") else None
        sig = None
        cache = {}
        if out_path is not None:
            sig = inputs_sig(
                roots,
                types_table=config.types_table or DEFAULT_TYPES_PATH,
                languages_table=config.languages_table or DEFAULT_LANGUAGES_PATH,
                options={"no_meta": bool(args.no_meta)},
            )
            cache = load_cache()
            entry = cache.get(CACHE_KEY) or {}
            if not args.force and entry.get("signature") == sig and entry.get("output") == file_sig(out_path):
                console.print("✅ FMG catalog up-to-date; skip rebuild")
                return 0

        run = prepare_run(config, games=games, silent=bool(args.silent))

        if args.mode == "key":
            sys.stdout.write(run.key_summary())
            return 0

        catalog = run.build_catalog()
        emitter = CatalogEmitter(
            include_meta=not args.no_meta,
            sources={str(g): r for g, r in run.roots.items()},
            tables=run.table_sources(),
        )
        if out_path is None:
            sys.stdout.write(emitter.render(catalog))
            return 0

        emitter.write(catalog, out_path)
        cache[CACHE_KEY] = {"signature": sig, "output": file_sig(out_path)}
        save_cache(cache)
        console.print(f"✅ FMG catalog written: {out_path} ({len(catalog.games)} games, {len(catalog.types) - 1} types)")
        return 0
    except FmgCatalogError as e:
        console.print(f"[red]❌ {type(e).__name__}: {e}[/red]")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
