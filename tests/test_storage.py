from __future__ import annotations

import json
from pathlib import Path

import pytest

from tower_stack_rl.game import BEST_SCORE_KEY, JsonFileScoreStore, MemoryScoreStore, ScoreStoreError


def test_memory_store_defaults_to_zero() -> None:
    assert MemoryScoreStore().load(BEST_SCORE_KEY) == 0


@pytest.mark.parametrize("raw", ["abc", None, -5, "", True, [1]])
def test_memory_store_unparseable_values_load_as_zero(raw: object) -> None:
    assert MemoryScoreStore({BEST_SCORE_KEY: raw}).load(BEST_SCORE_KEY) == 0


def test_memory_store_accepts_numeric_strings() -> None:
    assert MemoryScoreStore({BEST_SCORE_KEY: " 42 "}).load(BEST_SCORE_KEY) == 42


def test_memory_store_round_trip_and_call_log() -> None:
    store = MemoryScoreStore()
    store.save(BEST_SCORE_KEY, 320)
    assert store.load(BEST_SCORE_KEY) == 320
    assert store.save_calls == [(BEST_SCORE_KEY, 320)]


def test_store_does_not_enforce_monotonicity() -> None:
    store = MemoryScoreStore({BEST_SCORE_KEY: 500})
    store.save(BEST_SCORE_KEY, 10)
    assert store.load(BEST_SCORE_KEY) == 10


def test_json_store_missing_file_is_zero(tmp_path: Path) -> None:
    assert JsonFileScoreStore(tmp_path / "none.json").load(BEST_SCORE_KEY) == 0


def test_json_store_corrupt_file_is_zero(tmp_path: Path) -> None:
    path = tmp_path / "scores.json"
    path.write_text("{not json", encoding="utf-8")
    assert JsonFileScoreStore(path).load(BEST_SCORE_KEY) == 0


def test_json_store_non_object_is_zero(tmp_path: Path) -> None:
    path = tmp_path / "scores.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert JsonFileScoreStore(path).load(BEST_SCORE_KEY) == 0


def test_json_store_bad_value_is_zero(tmp_path: Path) -> None:
    path = tmp_path / "scores.json"
    path.write_text(json.dumps({BEST_SCORE_KEY: "lots"}), encoding="utf-8")
    assert JsonFileScoreStore(path).load(BEST_SCORE_KEY) == 0


def test_json_store_round_trip_keeps_other_keys(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "scores.json"
    store = JsonFileScoreStore(path)
    store.save("other", 7)
    store.save(BEST_SCORE_KEY, 320)
    assert store.load(BEST_SCORE_KEY) == 320
    assert JsonFileScoreStore(path).load("other") == 7
    assert json.loads(path.read_text(encoding="utf-8")) == {"other": 7, BEST_SCORE_KEY: 320}
    assert [p.name for p in path.parent.iterdir()] == ["scores.json"]


def test_json_store_write_failure_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonFileScoreStore(blocker / "scores.json")
    with pytest.raises(ScoreStoreError):
        store.save(BEST_SCORE_KEY, 1)
