#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from rich.panel import Panel
from rich.table import Table

from fmgcore.config import DEFAULT_CONFIG_PATH, resolve_config
from fmgcore.errors import TableFormatError
from fmgcore.games import ALL_GAMES, GAME_PATH_PARTS
from fmgcore.paths import match_game_root
from fmgcore.tables import DEFAULT_LANGUAGES_PATH, DEFAULT_TYPES_PATH, load_language_table, load_type_table
from fmgtools.cli_common import PROJECT_ROOT, console, env_hint, file_info, human_mtime, human_size


def _status(level: str) -> str:
    if level == "PASS":
        return "[green]PASS[/green]"
    if level == "WARN":
        return "[yellow]WARN[/yellow]"
    return "[red]FAIL[/red]"


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="fmglab doctor", description="Fmg-Lab Doctor (config + tables + game roots)")
    p.add_argument("roots", nargs="*", help="Game install roots (default from FMG_GAME_ROOTS / settings.ini)")
    p.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="Settings ini path")
    p.add_argument("--enforce", action="store_true", help="exit non-zero on failures (CI)")
    p.add_argument("--strict", action="store_true", help="treat WARN as FAIL (only when --enforce)")
    args = p.parse_args(argv)

    env_name, env_kind = env_hint()
    console.print(Panel(f"[bold cyan]Fmg-Lab Doctor[/bold cyan]\nEnv: {env_name} ({env_kind})", border_style="cyan"))

    table = Table(title="Health Checks", box=None, show_header=True, header_style="bold cyan")
    table.add_column("Check", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Details", style="dim")
    table.add_column("Fix Hint", style="green")

    fail = 0
    warn = 0

    # 1) settings.ini (optional)
    config_path = Path(args.config)
    if config_path.is_file():
        table.add_row("settings.ini", _status("PASS"), str(config_path), "")
    else:
        table.add_row("settings.ini", _status("WARN"), f"{config_path} (missing)", "Optional: copy conf/settings.example.ini")
        warn += 1

    config = resolve_config(config_path=config_path, game_roots=args.roots)

    # 2) curated tables
    types_path = config.types_table or DEFAULT_TYPES_PATH
    langs_path = config.languages_table or DEFAULT_LANGUAGES_PATH
    for label, path, loader in (
        ("type table", types_path, load_type_table),
        ("language table", langs_path, load_language_table),
    ):
        info = file_info(path)
        try:
            rows = loader(path)
        except TableFormatError as e:
            table.add_row(label, _status("FAIL"), str(e), "Fix the offending line")
            fail += 1
            continue
        details = f"{len(rows)} rows | {human_mtime(info['mtime'])} | {human_size(info['size'])}"
        table.add_row(label, _status("PASS"), details, "")

    # 3) game roots
    if not config.game_roots:
        table.add_row("game roots", _status("WARN"), "none configured", "Pass roots or set FMG_GAME_ROOTS / [PATHS] GAME_ROOTS")
        warn += 1
    for game in ALL_GAMES:
        root = match_game_root(game, config.game_roots)
        if root is None:
            table.add_row(str(game), _status("WARN"), f"no root with \"{GAME_PATH_PARTS[game]}\"", "Add its install folder")
            warn += 1
        elif not Path(root).expanduser().is_dir():
            table.add_row(str(game), _status("WARN"), f"{root} (not a directory)", "Check the path")
            warn += 1
        else:
            table.add_row(str(game), _status("PASS"), root, "")

    console.print(table)
    console.print(f"[dim]Root: {PROJECT_ROOT} | Summary: FAIL={fail}, WARN={warn}[/dim]")

    if not args.enforce:
        return 0
    if fail:
        return 2
    if args.strict and warn:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
