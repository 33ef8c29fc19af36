from __future__ import annotations

from dataclasses import replace

import pytest

from tower_stack_rl.game import (
    BEST_SCORE_KEY,
    Block,
    GameEvent,
    GameSettings,
    MemoryScoreStore,
    TowerStackGame,
)


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def move_current_to(game: TowerStackGame, x: float, z: float | None = None) -> Block:
    """Teleport the sliding block so a following place() is deterministic."""
    cur = game.current_block
    assert cur is not None
    position = cur.position.copy()
    position[0] = x
    if z is not None:
        position[2] = z
    game.current_block = replace(cur, position=position)
    return game.current_block


def align_current(game: TowerStackGame, dx: float = 0.0) -> Block:
    top = game.blocks[-1]
    return move_current_to(game, top.x + dx, top.z)


@pytest.fixture()
def settings() -> GameSettings:
    return GameSettings()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(10_000.0)


@pytest.fixture()
def store() -> MemoryScoreStore:
    return MemoryScoreStore()


@pytest.fixture()
def game(settings: GameSettings, store: MemoryScoreStore, clock: FakeClock) -> TowerStackGame:
    return TowerStackGame(settings=settings, store=store, clock=clock, seed=1234)


@pytest.fixture()
def events(game: TowerStackGame) -> list[GameEvent]:
    received: list[GameEvent] = []
    game.subscribe(received.append)
    return received


@pytest.fixture()
def key() -> str:
    return BEST_SCORE_KEY
