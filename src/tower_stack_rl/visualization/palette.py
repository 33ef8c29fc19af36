from __future__ import annotations

from typing import Tuple

Color = Tuple[int, int, int]

BACKGROUND: Color = (30, 30, 36)
PARTICLE_COLORS = {
    "perfect": (255, 204, 0),
    "place": (51, 204, 255),
    "fall": (255, 77, 77),
}


def hex_to_rgb(value: str) -> Color:
    """'#4ECDC4' -> (78, 205, 196). Falls back to light grey on bad input."""
    v = value.lstrip("#")
    if len(v) == 3:
        v = "".join(c * 2 for c in v)
    try:
        return int(v[0:2], 16), int(v[2:4], 16), int(v[4:6], 16)
    except ValueError:
        return 200, 200, 200


def faded(color: Color, alpha: float, background: Color = BACKGROUND) -> Color:
    a = min(1.0, max(0.0, alpha))
    return tuple(int(round(c * a + b * (1.0 - a))) for c, b in zip(color, background))  # type: ignore[return-value]
