# -*- coding: utf-8 -*-
from __future__ import annotations

from pathlib import Path

import pytest

from fmg_fixtures import build_bnd4, build_dcx, fake_binder, fake_dcx, write_file
from fmgcore.errors import UnsupportedCompressionError
from fmgcore.games import FromSoftGame
from fmgcore.records import FmgRecord
from fmgcore.walker import FmgWalker, is_candidate, skip_dir

ER = FromSoftGame.EldenRing


@pytest.fixture
def root(tmp_path) -> Path:
    p = tmp_path / "Game"
    p.mkdir()
    return p


def _walk(reader, root: Path, game: FromSoftGame = ER):
    return FmgWalker(reader, silent=True).walk_game(game, str(root))


def test_global_exclusion_never_reads_the_file(root, fake_reader):
    write_file(root, "msg/engus/sample.msgbnd.dcx", fake_dcx(fake_binder([(1, "a.fmg")])))
    assert _walk(fake_reader, root, FromSoftGame.DarkSouls3) == []
    assert fake_reader.calls == []


def test_binder_entries_become_records(root, fake_reader):
    data = fake_dcx(fake_binder([(11, "WeaponName.fmg"), (310, "WeaponName_dlc01.fmg")]))
    write_file(root, "msg/engus/item_dlc02.msgbnd.dcx", data)
    records = _walk(fake_reader, root)
    assert records == [
        FmgRecord(ER, "WeaponName.fmg", "WeaponName", "msg/engus/item_dlc02.msgbnd.dcx", 11),
        FmgRecord(ER, "WeaponName_dlc01.fmg", "WeaponName_dlc01", "msg/engus/item_dlc02.msgbnd.dcx", 310),
    ]
    assert fake_reader.calls == ["is_compressed", "decompress", "try_parse_container"]


def test_elden_ring_keeps_only_dlc02_binders(root, fake_reader):
    write_file(root, "msg/engus/item.msgbnd.dcx", fake_dcx(fake_binder([(11, "WeaponName.fmg")])))
    write_file(root, "msg/engus/item_dlc01.msgbnd.dcx", fake_dcx(fake_binder([(11, "WeaponName.fmg")])))
    write_file(root, "msg/engus/item_dlc02.msgbnd.dcx", fake_dcx(fake_binder([(11, "WeaponName.fmg")])))
    records = _walk(fake_reader, root)
    assert [r.binder_path for r in records] == ["msg/engus/item_dlc02.msgbnd.dcx"]


def test_game_specific_rules(root, fake_reader):
    write_file(root, "msg/japanese/item.msgbnd.dcx", fake_dcx(fake_binder([(11, "a.fmg")])))
    write_file(root, "msg/jpnjp/item.msgbnd.dcx", fake_dcx(fake_binder([(11, "a.fmg")])))
    records = _walk(fake_reader, root, FromSoftGame.Sekiro)
    assert [r.binder_path for r in records] == ["msg/jpnjp/item.msgbnd.dcx"]

    walker = FmgWalker(fake_reader)
    assert walker.exclusion(FromSoftGame.DemonsSouls, "msg/na_english/item.msgbnd") == "uncompressed msgbnd"
    assert walker.exclusion(FromSoftGame.DemonsSouls, "msg/na_english/item.msgbnd.dcx") is None
    assert walker.exclusion(FromSoftGame.DarkSouls3, "msg/engus/item_dlc1.msgbnd.dcx") == "dlc1 msgbnd"
    assert walker.exclusion(FromSoftGame.DarkSouls3, "msg/engus/item_dlc2.msgbnd.dcx") is None


def test_skipped_directories(root, fake_reader):
    payload = fake_dcx(fake_binder([(11, "a.fmg")]))
    for d in ("vanilla", "old_patch_1.03", "msgbnd_dcx"):
        write_file(root, f"msg/engus/{d}/item_dlc02.msgbnd.dcx", payload)
    assert _walk(fake_reader, root) == []
    assert skip_dir("vanilla") and skip_dir("old_patch") and not skip_dir("engus")


def test_loose_fmg_and_sidecars(root, fake_reader):
    write_file(root, "menu/text/english/itemname.fmg", b"")
    write_file(root, "msg/readme.txt", b"notes")
    write_file(root, "other/itemname.fmg", b"")
    records = _walk(fake_reader, root, FromSoftGame.DarkSouls2)
    assert records == [FmgRecord(FromSoftGame.DarkSouls2, "menu/text/english/itemname.fmg", "itemname")]
    assert fake_reader.calls == []


def test_unrecognized_and_non_fmg_entries_are_skipped(root, fake_reader):
    write_file(root, "msg/engus/item_dlc02.msgbnd", b"not a binder")
    write_file(root, "msg/engus/menu_dlc02.msgbnd", fake_binder([(1, "font.ccm"), (2, "Dialog.fmg")]))
    records = _walk(fake_reader, root)
    assert [(r.binder_path, r.name) for r in records] == [("msg/engus/menu_dlc02.msgbnd", "Dialog")]


def test_uncompressed_dcx_named_file_is_ignored(root, fake_reader):
    write_file(root, "msg/engus/item_dlc02.msgbnd.dcx", fake_binder([(1, "a.fmg")]))
    assert _walk(fake_reader, root) == []
    assert fake_reader.calls == ["is_compressed"]


def test_files_before_subdirectories(root, fake_reader):
    write_file(root, "menu/text/english/b.fmg", b"")
    write_file(root, "menu/text/english/a/z.fmg", b"")
    write_file(root, "menu/text/english/c.fmg", b"")
    names = [r.name for r in _walk(fake_reader, root, FromSoftGame.DarkSouls2)]
    assert names == ["b", "c", "z"]


def test_walk_orders_games(root, fake_reader):
    ds2 = root / "ds2"
    sotfs = root / "sotfs"
    write_file(ds2, "menu/text/english/a.fmg", b"")
    write_file(sotfs, "menu/text/english/a.fmg", b"")
    roots = {FromSoftGame.DarkSouls2Sotfs: str(sotfs), FromSoftGame.DarkSouls2: str(ds2)}
    records = FmgWalker(fake_reader, silent=True).walk(roots)
    assert [r.game for r in records] == [FromSoftGame.DarkSouls2, FromSoftGame.DarkSouls2Sotfs]


def test_real_reader_end_to_end(root):
    data = build_dcx(build_bnd4([(11, "N:\\GR\\msg\\engUS\\WeaponName.fmg")]))
    write_file(root, "msg/engus/item_dlc02.msgbnd.dcx", data)
    records = FmgWalker(silent=True).walk_game(ER, str(root))
    assert [(r.binder_id, r.name) for r in records] == [(11, "WeaponName")]


def test_unsupported_compression_is_fatal(root):
    write_file(root, "msg/engus/item_dlc02.msgbnd.dcx", build_dcx(b"x", scheme=b"KRAK"))
    with pytest.raises(UnsupportedCompressionError):
        FmgWalker(silent=True).walk_game(ER, str(root))


def test_candidate_prefixes():
    assert is_candidate("msg/engus/item.msgbnd.dcx")
    assert is_candidate("Menu/Text/english/a.fmg")
    assert not is_candidate("param/gameparam.parambnd.dcx")
