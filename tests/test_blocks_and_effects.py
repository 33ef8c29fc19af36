from __future__ import annotations

import random

import numpy as np
import pytest

from tower_stack_rl.game import (
    Block,
    BlockSimulator,
    GameSettings,
    ParticleKind,
    ParticleLifecycleManager,
    make_base_block,
)


def _moving(x: float, direction: int = 1, speed: float = 2.0) -> Block:
    return Block(
        id="m",
        position=(x, 0.25, 0.0),
        size=(2.0, 0.5, 2.0),
        color="#fff",
        is_moving=True,
        direction=direction,
        speed=speed,
    )


@pytest.fixture()
def sim(settings: GameSettings) -> BlockSimulator:
    return BlockSimulator(settings)


def test_advance_moves_along_direction(sim: BlockSimulator) -> None:
    moved = sim.advance(_moving(0.0), 0.5)
    assert moved.x == pytest.approx(1.0)
    assert moved.direction == 1
    back = sim.advance(_moving(0.0, direction=-1), 0.25)
    assert back.x == pytest.approx(-0.5)


def test_advance_reflects_before_crossing_bound(sim: BlockSimulator) -> None:
    block = _moving(3.9)
    bounced = sim.advance(block, 0.1)  # would land on 4.1
    assert bounced.direction == -1
    assert bounced.x == pytest.approx(3.9)
    after = sim.advance(bounced, 0.1)
    assert after.x == pytest.approx(3.7)


def test_advance_reflects_on_left_bound(sim: BlockSimulator) -> None:
    bounced = sim.advance(_moving(-3.95, direction=-1), 0.1)
    assert bounced.direction == 1
    assert bounced.x == pytest.approx(-3.95)


def test_landing_exactly_on_bound_is_allowed(sim: BlockSimulator) -> None:
    moved = sim.advance(_moving(3.0, speed=1.0), 1.0)
    assert moved.x == pytest.approx(4.0)
    assert moved.direction == 1


def test_stationary_block_is_untouched(sim: BlockSimulator, settings: GameSettings) -> None:
    base = make_base_block(settings)
    assert sim.advance(base, 1.0) is base


def test_advance_leaves_original_block_alone(sim: BlockSimulator) -> None:
    block = _moving(0.0)
    sim.advance(block, 1.0)
    assert block.x == 0.0


def test_block_vectors_are_read_only(settings: GameSettings) -> None:
    base = make_base_block(settings)
    with pytest.raises(ValueError):
        base.position[0] = 1.0
    with pytest.raises(ValueError):
        base.size[1] = 2.0


def test_base_block_geometry(settings: GameSettings) -> None:
    base = make_base_block(settings)
    np.testing.assert_allclose(base.position, (0.0, -0.25, 0.0))
    np.testing.assert_allclose(base.size, (2.0, 0.5, 2.0))
    assert base.is_placed and not base.is_moving
    assert base.direction == 0


def test_spawn_starts_at_an_edge_heading_inward(sim: BlockSimulator, settings: GameSettings) -> None:
    base = make_base_block(settings)
    for seed in range(20):
        block = sim.spawn(3, base, random.Random(seed))
        assert abs(block.x) == pytest.approx(settings.travel_bound)
        assert block.direction == (-1 if block.x > 0 else 1)
        assert block.y == pytest.approx(base.y + settings.block_height)
        assert block.z == pytest.approx(base.z)
        np.testing.assert_allclose(block.size, base.size)
        assert block.speed == pytest.approx(2.6)
        assert block.color == settings.colors[3]
        assert block.is_moving and not block.is_placed


def test_spawn_uses_both_sides(sim: BlockSimulator, settings: GameSettings) -> None:
    base = make_base_block(settings)
    rng = random.Random(7)
    sides = {sim.spawn(0, base, rng).direction for _ in range(50)}
    assert sides == {-1, 1}


def test_spawn_is_reproducible_with_same_seed(sim: BlockSimulator, settings: GameSettings) -> None:
    base = make_base_block(settings)
    a = [sim.spawn(i, base, random.Random(99)) for i in range(3)]
    b = [sim.spawn(i, base, random.Random(99)) for i in range(3)]
    assert [(blk.id, blk.x) for blk in a] == [(blk.id, blk.x) for blk in b]


def test_spawn_inherits_shrunken_footprint(sim: BlockSimulator) -> None:
    last = Block(id="p", position=(0.3, 0.75, -0.1), size=(1.2, 0.5, 0.8), color="#fff", is_placed=True)
    block = sim.spawn(2, last, random.Random(0))
    np.testing.assert_allclose(block.size, (1.2, 0.5, 0.8))
    assert block.z == pytest.approx(-0.1)


def test_particle_durations() -> None:
    pm = ParticleLifecycleManager()
    assert pm.spawn(ParticleKind.PERFECT, (0, 0, 0), 0).duration == 2000
    assert pm.spawn(ParticleKind.PLACE, (0, 0, 0), 0).duration == 1000
    assert pm.spawn(ParticleKind.FALL, (0, 0, 0), 0).duration == 1000


@pytest.mark.parametrize("kind", list(ParticleKind))
def test_particle_expires_exactly_at_duration(kind: ParticleKind) -> None:
    pm = ParticleLifecycleManager()
    t0 = 5_000.0
    p = pm.spawn(kind, (1.0, 2.0, 3.0), t0)
    assert pm.expire([p], t0 + p.duration - 1) == [p]
    assert pm.expire([p], t0 + p.duration) == []


def test_particle_position_is_a_copy() -> None:
    source = np.array([1.0, 2.0, 3.0])
    p = ParticleLifecycleManager.spawn(ParticleKind.PLACE, source, 0)
    source[0] = 99.0
    assert p.position[0] == 1.0


def test_particle_age_fraction() -> None:
    p = ParticleLifecycleManager.spawn(ParticleKind.PLACE, (0, 0, 0), 1000)
    assert p.age(1000) == 0.0
    assert p.age(1500) == pytest.approx(0.5)
    assert p.age(5000) == 1.0


def test_cap_keeps_newest() -> None:
    pm = ParticleLifecycleManager()
    particles = [pm.spawn(ParticleKind.PLACE, (0, 0, 0), t) for t in (30, 10, 20, 40)]
    kept = pm.cap(particles, 2)
    assert sorted(p.start_time for p in kept) == [30, 40]
    assert pm.cap(particles, 10) == particles
