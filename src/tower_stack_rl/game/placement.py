from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .blocks import Block, Vector, vec3
from .settings import GameSettings


@dataclass(frozen=True, eq=False)
class PlacementOutcome:
    """Footprint the current block commits to, plus how it was classified."""

    position: Vector
    size: Vector
    perfect: bool
    overlap_x: float
    overlap_z: float
    alignment_error: float


def axis_overlap(a_min: float, a_max: float, b_min: float, b_max: float) -> float:
    return max(0.0, min(a_max, b_max) - max(a_min, b_min))


def footprint_overlap(a: Block, b: Block) -> Tuple[float, float]:
    """(x, z) intersection extents of two blocks seen from above."""
    return (
        axis_overlap(a.min_x, a.max_x, b.min_x, b.max_x),
        axis_overlap(a.min_z, a.max_z, b.min_z, b.max_z),
    )


def alignment_error(last: Block, current: Block) -> float:
    return abs(current.x - last.x) + abs(current.z - last.z)


class PlacementResolver:
    """Decides what the moving block turns into when it is dropped.

    Pure: returns a PlacementOutcome, or None when the footprints do not
    overlap (the caller decides that means game over).
    """

    def __init__(self, settings: GameSettings) -> None:
        self.settings = settings

    def resolve(self, last: Block, current: Block) -> Optional[PlacementOutcome]:
        overlap_x, overlap_z = footprint_overlap(last, current)
        if overlap_x <= 0 or overlap_z <= 0:
            return None

        error = alignment_error(last, current)
        if error < self.settings.perfect_threshold:
            return PlacementOutcome(
                position=current.position,
                size=current.size,
                perfect=True,
                overlap_x=overlap_x,
                overlap_z=overlap_z,
                alignment_error=error,
            )

        center_x = (max(last.min_x, current.min_x) + min(last.max_x, current.max_x)) / 2
        center_z = (max(last.min_z, current.min_z) + min(last.max_z, current.max_z)) / 2
        return PlacementOutcome(
            position=vec3((center_x, current.y, center_z)),
            size=vec3((overlap_x, self.settings.block_height, overlap_z)),
            perfect=False,
            overlap_x=overlap_x,
            overlap_z=overlap_z,
            alignment_error=error,
        )

    @staticmethod
    def kept_area_ratio(last: Block, outcome: PlacementOutcome) -> float:
        """Fraction of the previous footprint area that survived the drop."""
        before = last.width * last.depth
        after = float(np.prod(outcome.size[[0, 2]]))
        return after / before if before > 0 else 0.0
