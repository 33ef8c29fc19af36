from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Iterable

import numpy as np

from .rules import speed_for
from .settings import GameSettings


Vector = np.ndarray


def vec3(values: Iterable[float]) -> Vector:
    """Read-only float64 copy of a 3-component vector."""
    v = np.array(list(values), dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"expected 3 components, got shape {v.shape}")
    v.setflags(write=False)
    return v


@dataclass(frozen=True, eq=False)
class Block:
    """Rectangular prism, either placed on the tower or still sliding.

    `position` is the prism center and `size` its (width, height, depth)
    extents. Both are stored as read-only arrays so a placed block can never
    be nudged after it is committed.
    """

    id: str
    position: Vector
    size: Vector
    color: str
    is_moving: bool = False
    direction: int = 0
    speed: float = 0.0
    is_placed: bool = False
    perfect_alignment: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", vec3(self.position))
        object.__setattr__(self, "size", vec3(self.size))

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def z(self) -> float:
        return float(self.position[2])

    @property
    def width(self) -> float:
        return float(self.size[0])

    @property
    def depth(self) -> float:
        return float(self.size[2])

    @property
    def min_x(self) -> float:
        return self.x - self.width / 2

    @property
    def max_x(self) -> float:
        return self.x + self.width / 2

    @property
    def min_z(self) -> float:
        return self.z - self.depth / 2

    @property
    def max_z(self) -> float:
        return self.z + self.depth / 2


def make_base_block(settings: GameSettings) -> Block:
    h = settings.block_height
    return Block(
        id="base-block",
        position=(0.0, -h / 2, 0.0),
        size=(settings.base_width, h, settings.base_depth),
        color=settings.base_color,
        is_moving=False,
        direction=0,
        speed=0.0,
        is_placed=True,
        perfect_alignment=True,
    )


class BlockSimulator:
    """Kinematic motion and spawning for the sliding block."""

    def __init__(self, settings: GameSettings) -> None:
        self.settings = settings

    def advance(self, block: Block, delta_time: float) -> Block:
        if not block.is_moving or block.direction == 0:
            return block
        new_x = block.x + block.direction * block.speed * delta_time
        bound = self.settings.travel_bound
        if new_x > bound or new_x < -bound:
            # Bounce this tick, move on the next one
            return replace(block, direction=-block.direction)
        position = block.position.copy()
        position[0] = new_x
        return replace(block, position=position)

    def spawn(self, level: int, last_block: Block, rng: random.Random) -> Block:
        s = self.settings
        side = rng.choice((-1, 1))
        return Block(
            id=f"block-{level}-{rng.getrandbits(32):08x}",
            position=(side * s.travel_bound, last_block.y + s.block_height, last_block.z),
            size=last_block.size,
            color=s.color_for_level(level),
            is_moving=True,
            direction=-side,
            speed=speed_for(level, s),
            is_placed=False,
            perfect_alignment=False,
        )
