from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


DEFAULT_COLORS: Tuple[str, ...] = (
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FFEAA7",
    "#DDA0DD", "#98D8C8", "#F7DC6F", "#BB8FCE", "#85C1E9",
)


@dataclass(frozen=True)
class GameSettings:
    """Tunable constants for one engine instance.

    Validated once at construction; an invalid combination raises ValueError
    so the engine never builds degenerate geometry later on.
    """

    base_speed: float = 2.0
    speed_increase: float = 0.2
    max_speed: float = 8.0
    block_height: float = 0.5
    perfect_threshold: float = 0.1
    colors: Tuple[str, ...] = DEFAULT_COLORS
    travel_bound: float = 4.0  # half arena width
    base_width: float = 2.0
    base_depth: float = 2.0
    base_color: str = "#34495e"
    max_particles: int = 100

    def __post_init__(self) -> None:
        # Accept any sequence but keep the stored palette immutable
        object.__setattr__(self, "colors", tuple(self.colors))
        if len(self.colors) == 0:
            raise ValueError("colors must contain at least one entry")
        if self.block_height <= 0:
            raise ValueError(f"block_height must be positive, got {self.block_height}")
        if self.base_width <= 0 or self.base_depth <= 0:
            raise ValueError("base footprint must be positive")
        if self.travel_bound <= 0:
            raise ValueError(f"travel_bound must be positive, got {self.travel_bound}")
        if self.base_speed <= 0:
            raise ValueError(f"base_speed must be positive, got {self.base_speed}")
        if self.speed_increase < 0:
            raise ValueError(f"speed_increase must be non-negative, got {self.speed_increase}")
        if self.max_speed < self.base_speed:
            raise ValueError("max_speed must not be lower than base_speed")
        if self.perfect_threshold < 0:
            raise ValueError(f"perfect_threshold must be non-negative, got {self.perfect_threshold}")
        if self.max_particles < 1:
            raise ValueError(f"max_particles must be at least 1, got {self.max_particles}")

    def color_for_level(self, level: int) -> str:
        return self.colors[level % len(self.colors)]
