#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Unified CLI dispatcher for Fmg-Lab."""

from __future__ import annotations

import importlib
import sys
from typing import List, Optional

from rich.table import Table

from fmgtools.cli_common import console
from fmgtools.registry import find_tool, get_tools


def _print_tools() -> None:
    table = Table(title="Fmg-Lab tools", box=None, header_style="bold cyan")
    table.add_column("Alias", style="bold")
    table.add_column("Type", style="dim")
    table.add_column("Description")
    table.add_column("Usage", style="green")
    for tool in get_tools():
        table.add_row(tool["alias"], tool["type"], tool["desc"], tool["usage"])
    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(argv) if argv is not None else list(sys.argv[1:])
    alias = argv[0] if argv else None
    if not alias or alias in ("list", "-h", "--help"):
        _print_tools()
        return 0

    tool = find_tool(alias)
    if tool is None:
        console.print(f"[red]Unknown tool: {alias}[/red]")
        _print_tools()
        return 2

    module = importlib.import_module(tool["module"])
    return int(module.main(argv[1:]) or 0)


if __name__ == "__main__":
    raise SystemExit(main())
