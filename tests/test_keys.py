# -*- coding: utf-8 -*-
from __future__ import annotations

from fmgcore.keys import KeyResolver, base_type
from fmgcore.tables import load_type_table


def test_curated_lookup_wins():
    r = KeyResolver(load_type_table())
    assert r.resolve((11, "WeaponName")) == "WeaponName"
    assert r.resolve((310, "WeaponName_dlc01")) == "WeaponName_DLC1"
    assert r.resolve((11, "武器名")) == "WeaponName"


def test_suffix_inference_rewrites_lowercase_dlc():
    r = KeyResolver({(11, "WeaponName"): "WeaponName"})
    assert r.lookup((310, "WeaponName_dlc01")) is None
    assert r.resolve((310, "WeaponName_dlc01")) == "WeaponName_DLC1"
    assert r.resolve((410, "WeaponName_dlc02")) == "WeaponName_DLC2"
    assert base_type("WeaponName_DLC1") == "WeaponName"


def test_suffix_inference_other_suffixes():
    r = KeyResolver({(11, "武器名"): "WeaponName"})
    assert r.resolve((211, "武器名_dlc1")) == "WeaponName_DLC1"
    assert r.resolve((115, "武器名_patch")) == "WeaponName_Patch"


def test_inference_needs_one_distinct_candidate():
    r = KeyResolver({(11, "Foo"): "A", (12, "Foo"): "B", (21, "Bar"): "C", (22, "Bar"): "C"})
    assert r.resolve((99, "Foo_dlc01")) is None
    assert r.resolve((99, "Bar_dlc01")) == "C_DLC1"
    assert r.resolve((99, "Baz_dlc01")) is None
    assert r.resolve((99, "Baz")) is None


def test_resolution_is_deterministic():
    table = {(11, "Foo"): "A", (3, "Bar"): "B"}
    first = [KeyResolver(table).resolve((9, "Foo_dlc02")) for _ in range(3)]
    assert first == ["A_DLC2"] * 3
    assert KeyResolver(table).known_types() == ["A", "B"]


def test_base_type():
    assert base_type("WeaponName_Patch") == "WeaponName"
    assert base_type("WeaponName_DLC2") == "WeaponName"
    assert base_type("WeaponName") == "WeaponName"


def test_lowercase_record_name_resolves():
    r = KeyResolver(load_type_table())
    assert r.resolve((310, "weaponname_dlc01")) == "WeaponName_DLC1"
    # inference also falls back to the case-insensitive name index
    assert r.resolve((999, "weaponname_dlc01")) == "WeaponName_DLC1"


def test_exact_case_wins_over_case_insensitive_match():
    r = KeyResolver({(11, "Name"): "A", (11, "name"): "B"})
    assert r.resolve((11, "Name")) == "A"
    assert r.resolve((11, "name")) == "B"
    # NAME matches both rows once lowercased
    assert r.resolve((11, "NAME")) is None
