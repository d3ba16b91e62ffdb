# -*- coding: utf-8 -*-
"""Game folder walker (core).

Finds every FMG under a game root, either as a loose file or as an entry of
a (possibly DCX-compressed) binder, and turns it into an `FmgRecord`.

Notes
- Relative paths are always forward-slash, relative to the game root.
- Per-game packaging quirks live in `GAME_EXCLUDES`; add a rule there
  instead of branching in the walk itself.
- Binders the reader does not recognize are skipped, not reported.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from fmgcore.binder import ArchiveReader, BinderReader
from fmgcore.errors import BadPathPrefixError
from fmgcore.games import ALL_GAMES, FromSoftGame
from fmgcore.records import FmgRecord, entry_record, is_fmg_name, loose_record

logger = logging.getLogger(__name__)

ExcludeRule = Tuple[str, Callable[[str], bool]]

SKIP_DIR_NAMES = ("vanilla",)
SKIP_DIR_SUBSTRINGS = ("dcx",)
SKIP_DIR_PREFIXES = ("old_patch",)

INCLUDE_PREFIXES = ("msg", "menu/text")

GLOBAL_EXCLUDES: List[ExcludeRule] = [
    ("sample binder", lambda rel: rel.endswith("sample.msgbnd.dcx")),
    ("sellregion binder", lambda rel: rel.endswith("sellregion.msgbnd.dcx")),
    ("ngword binder", lambda rel: rel.endswith("ngword.msgbnd.dcx")),
]


def _under_japanese(rel: str) -> bool:
    return "/japanese/" in rel


GAME_EXCLUDES: Dict[FromSoftGame, List[ExcludeRule]] = {
    # both .msgbnd and .msgbnd.dcx ship; keep the compressed one
    FromSoftGame.DemonsSouls: [("uncompressed msgbnd", lambda rel: rel.endswith("msgbnd"))],
    FromSoftGame.DarkSouls3: [("dlc1 msgbnd", lambda rel: "dlc1.msgbnd" in rel)],
    FromSoftGame.EldenRing: [("non-dlc02 msgbnd", lambda rel: "_dlc02.msgbnd" not in rel)],
    # jpnjp holds the Japanese text in these two
    FromSoftGame.Bloodborne: [("japanese folder", _under_japanese)],
    FromSoftGame.Sekiro: [("japanese folder", _under_japanese)],
}


def skip_dir(name: str) -> bool:
    if name in SKIP_DIR_NAMES:
        return True
    if any(s in name for s in SKIP_DIR_SUBSTRINGS):
        return True
    return name.startswith(SKIP_DIR_PREFIXES)


def is_candidate(rel: str) -> bool:
    return rel.lower().startswith(INCLUDE_PREFIXES)


def is_sidecar(rel: str) -> bool:
    return rel.endswith(".txt") and rel.startswith("msg")


class FmgWalker:
    """Depth-first FMG discovery over one or more game roots.

    Parameters
    - reader: ArchiveReader used for DCX + binder decoding (default BinderReader).
    - excludes: per-game rule table (default GAME_EXCLUDES).
    - silent: suppress per-game info lines.
    """

    def __init__(
        self,
        reader: Optional[ArchiveReader] = None,
        *,
        excludes: Optional[Mapping[FromSoftGame, List[ExcludeRule]]] = None,
        silent: bool = False,
    ):
        self.reader: ArchiveReader = reader if reader is not None else BinderReader()
        self.excludes = dict(GAME_EXCLUDES if excludes is None else excludes)
        self.silent = bool(silent)

    def _log(self, msg: str, *args) -> None:
        if not self.silent:
            logger.info(msg, *args)

    # --------------------------------------------------------
    # Filters
    # --------------------------------------------------------

    def exclusion(self, game: FromSoftGame, rel: str) -> Optional[str]:
        """Return the name of the first rule dropping `rel`, if any."""
        for label, rule in list(self.excludes.get(game, [])) + GLOBAL_EXCLUDES:
            if rule(rel):
                return label
        return None

    # --------------------------------------------------------
    # Walk
    # --------------------------------------------------------

    def walk(self, roots: Mapping[FromSoftGame, str]) -> List[FmgRecord]:
        out: List[FmgRecord] = []
        for game in ALL_GAMES:
            if game in roots:
                out.extend(self.walk_game(game, roots[game]))
        return out

    def walk_game(self, game: FromSoftGame, root: str) -> List[FmgRecord]:
        base = Path(os.path.abspath(os.path.expanduser(str(root))))
        out: List[FmgRecord] = []
        self._walk_dir(base, base, game, out)
        self._log("%s: %d FMGs under %s", game, len(out), base)
        return out

    def _walk_dir(self, d: Path, base: Path, game: FromSoftGame, out: List[FmgRecord]) -> None:
        if skip_dir(d.name):
            logger.debug("skip dir %s", d)
            return

        children = sorted(d.iterdir(), key=lambda p: p.name)
        for path in children:
            if not path.is_file():
                continue
            try:
                rel = path.relative_to(base).as_posix()
            except ValueError:
                raise BadPathPrefixError(f"Bad prefix {path} (expected under {base})") from None
            if is_sidecar(rel):
                continue
            out.extend(self.process_file(game, rel, path))

        for path in children:
            if path.is_dir():
                self._walk_dir(path, base, game, out)

    def process_file(self, game: FromSoftGame, rel: str, path: Path) -> Iterable[FmgRecord]:
        """Records for one file (empty when filtered out or not a binder)."""
        if not is_candidate(rel):
            return []
        reason = self.exclusion(game, rel)
        if reason:
            logger.debug("%s: drop %s (%s)", game, rel, reason)
            return []

        if rel.endswith("bnd.dcx"):
            data = path.read_bytes()
            if not self.reader.is_compressed(data):
                return []
            data = self.reader.decompress(data)
        elif rel.endswith("bnd"):
            data = path.read_bytes()
        else:
            if is_fmg_name(rel):
                return [loose_record(game, rel)]
            return []

        entries = self.reader.try_parse_container(data)
        if entries is None:
            logger.debug("%s: %s is not a recognized binder", game, rel)
            return []

        records: List[FmgRecord] = []
        for ent in entries:
            if not is_fmg_name(ent.name):
                logger.debug("%s: %s entry %s is not an FMG", game, rel, ent.name)
                continue
            records.append(entry_record(game, rel, ent.name, ent.id))
        return records
