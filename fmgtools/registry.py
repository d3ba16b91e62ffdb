#!/usr/bin/env python3
"""Fmg-Lab tool registry."""

from typing import Dict, List, Optional

TOOLS = [
    {
        "module": "fmgtools.build_fmg_catalog",
        "alias": "catalog",
        "desc": "Scan game folders and print the key table or the FMG catalog",
        "usage": "fmglab catalog <key|data> [ROOT ...] [--game G] [--out PATH] [--no-meta]",
        "type": "Dev",
    },
    {
        "module": "fmgtools.doctor",
        "alias": "doctor",
        "desc": "Config, curated table and game root health check",
        "usage": "fmglab doctor [ROOT ...] [--enforce] [--strict]",
        "type": "CLI",
    },
]


def get_tools() -> List[Dict[str, str]]:
    return TOOLS


def find_tool(alias: str) -> Optional[Dict[str, str]]:
    key = str(alias or "").strip()
    for tool in TOOLS:
        if tool["alias"] == key or tool["module"].rsplit(".", 1)[-1] == key:
            return tool
    return None
