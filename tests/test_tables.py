"""Tests for move-source table parsing and lookup."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from conftest import (
    DEOXYS,
    FUSION_BOLT,
    PICHU,
    PIKACHU,
    QUICK_ATTACK,
    SWEET_KISS,
    THUNDER_PUNCH,
    THUNDER_WAVE,
    THUNDERBOLT,
    THUNDERSHOCK,
    ZORUA,
)
from move_legality import (
    EvoCriteria,
    LearnMethod,
    LearnOption,
    MoveSourceType,
    VersionGroup,
    load_default_registry,
    load_registry,
    parse_registry,
)
from move_legality.config import TABLES_ENV
from move_legality.data.tables import flag_move
from move_legality.errors import NotReadyError, TableFormatError
from move_legality.observability import metrics


@pytest.fixture
def clean_default_registry(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(TABLES_ENV, raising=False)
    load_default_registry.cache_clear()
    yield
    load_default_registry.cache_clear()


def test_registry_indexes_every_version_group(tables) -> None:
    assert len(tables) == 5
    assert set(tables.groups) == {VersionGroup.HGSS, VersionGroup.PT, VersionGroup.DP, VersionGroup.B2W2, VersionGroup.BW}
    assert VersionGroup.SV not in tables
    assert tables.get(VersionGroup.SV) is None
    assert tables.max_move_id == FUSION_BOLT


def test_lookup_by_species_and_form(tables) -> None:
    b2w2 = tables.get(VersionGroup.B2W2)
    assert b2w2.try_get(PIKACHU, 1) is not None
    assert b2w2.try_get(ZORUA, 0) is None
    assert len(b2w2) == 9
    assert b2w2.try_get(DEOXYS, 3).form_count == 4
    assert b2w2.get_egg_moves(PICHU, 0) == {SWEET_KISS, 417}
    assert b2w2.get_egg_moves(ZORUA, 0) == frozenset()
    assert b2w2.get_level_up_moves(PIKACHU, 0) == {THUNDERSHOCK, QUICK_ATTACK}


def test_entry_defaults_and_lowest_level(payload) -> None:
    payload["version_groups"]["BW"].append({"species": 1, "level_up": [[THUNDER_WAVE, 30], [THUNDER_WAVE, 12]]})
    entry = parse_registry(payload).get(VersionGroup.BW).try_get(1, 0)
    assert entry.form_count == 1
    assert entry.base_friendship == 70
    assert entry.get_level(THUNDER_WAVE) == 12
    assert entry.get_level(THUNDERBOLT) is None


def test_level_up_is_checked_before_machine_and_tutor(tables) -> None:
    bw = tables.get(VersionGroup.BW)
    entry = bw.try_get(PIKACHU, 0)
    ready = EvoCriteria(PIKACHU, level_max=30)
    early = EvoCriteria(PIKACHU, level_max=15)

    assert bw.get_can_learn(entry, ready, THUNDERBOLT, MoveSourceType.ALL, LearnOption.CURRENT) is LearnMethod.LEVEL_UP
    assert bw.get_can_learn(entry, early, THUNDERBOLT, MoveSourceType.ALL, LearnOption.CURRENT) is LearnMethod.MACHINE
    assert bw.get_can_learn(entry, early, THUNDERBOLT, MoveSourceType.ALL, LearnOption.AT_ANY_TIME) is LearnMethod.LEVEL_UP
    assert bw.get_can_learn(entry, ready, THUNDERBOLT, MoveSourceType.TUTOR, LearnOption.CURRENT) is LearnMethod.NONE

    b2w2 = tables.get(VersionGroup.B2W2)
    tutor_entry = b2w2.try_get(PIKACHU, 0)
    assert b2w2.get_can_learn(tutor_entry, ready, THUNDER_PUNCH, MoveSourceType.ALL, LearnOption.CURRENT) is LearnMethod.TUTOR


def test_table_mask_respects_types(tables) -> None:
    b2w2 = tables.get(VersionGroup.B2W2)
    mask = [False] * 600
    b2w2.get_all_moves(mask, EvoCriteria(PICHU, level_max=1), MoveSourceType.LEVEL_UP, LearnOption.CURRENT)
    assert mask[THUNDERSHOCK] and not mask[QUICK_ATTACK] and not mask[SWEET_KISS]

    b2w2.get_all_moves(mask, EvoCriteria(PICHU, level_max=1), MoveSourceType.EGG, LearnOption.CURRENT)
    assert mask[SWEET_KISS]


def test_flag_move_ignores_out_of_range_ids() -> None:
    mask = [False] * 3
    flag_move(mask, 2)
    flag_move(mask, 3)
    flag_move(mask, -1)
    assert mask == [False, False, True]


@pytest.mark.parametrize(
    "payload_value",
    [
        [],
        {"groups": {}},
        {"version_groups": {"XYZ": []}},
        {"version_groups": {"BW": {"species": 1}}},
        {"version_groups": {"BW": [{"form": 0}]}},
        {"version_groups": {"BW": ["not an object"]}},
        {"version_groups": {"BW": [{"species": 1, "machine": [-4]}]}},
        {"version_groups": {"BW": [{"species": 1, "machine": 5}]}},
        {"version_groups": {"BW": [{"species": 1, "level_up": [[33, 101]]}]}},
        {"version_groups": {"BW": [{"species": 1, "level_up": [[33]]}]}},
        {"version_groups": {"BW": [{"species": 1, "form_count": 0}]}},
        {"version_groups": {"BW": [{"species": 1, "base_friendship": 300}]}},
        {"version_groups": {"BW": [{"species": 1}, {"species": 1, "form": 0}]}},
    ],
)
def test_malformed_payloads_raise_table_format_error(payload_value) -> None:
    with pytest.raises(TableFormatError) as excinfo:
        parse_registry(payload_value)
    assert excinfo.value.category == "table_format_error"


def test_entry_errors_carry_location_context() -> None:
    with pytest.raises(TableFormatError) as excinfo:
        parse_registry({"version_groups": {"BW": [{"species": 1}, {"species": "abc"}]}})
    assert excinfo.value.context == {"version_group": "BW", "index": 1}
    assert excinfo.value.remediation


def test_load_registry_reads_json_file(tmp_path: Path, payload) -> None:
    path = tmp_path / "tables.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    registry = load_registry(path)
    assert len(registry) == 5
    assert registry.get(VersionGroup.BW).try_get(ZORUA, 0) is not None


def test_load_registry_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(TableFormatError) as excinfo:
        load_registry(path)
    assert excinfo.value.context == {"path": str(path)}


@pytest.mark.usefixtures("clean_default_registry")
def test_default_registry_requires_configuration() -> None:
    with pytest.raises(NotReadyError) as excinfo:
        load_default_registry()
    assert "MOVE_LEGALITY_TABLES" in excinfo.value.remediation


@pytest.mark.usefixtures("clean_default_registry")
def test_default_registry_is_loaded_once(tmp_path: Path, payload, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "tables.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    monkeypatch.setenv(TABLES_ENV, str(path))

    first = load_default_registry()
    assert load_default_registry() is first
    assert load_default_registry.cache_info().hits == 1
    assert metrics.snapshot()["gauges"]["move_legality_tables_loaded"] == 5.0
