from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from tower_stack_rl.game import Block, GameSettings, Snapshot

PixelRect = Tuple[int, int, int, int]  # left, top, width, height


@dataclass
class SideView:
    """Front-on (x/y) projection of the tower into a pixel viewport.

    The camera keeps the top of the tower a few units below the upper edge,
    so tall towers scroll instead of leaving the screen.
    """

    settings: GameSettings
    width_px: int = 240
    height_px: int = 320
    headroom: float = 3.0

    @property
    def scale(self) -> float:
        span = 2 * (self.settings.travel_bound + self.settings.base_width)
        return self.width_px / span

    def camera_top(self, snapshot: Snapshot) -> float:
        visible = self.height_px / self.scale
        return max(visible - 1.0, snapshot.tower_height + self.headroom)

    def to_px(self, x: float, y: float, top: float) -> Tuple[int, int]:
        px = int(round(self.width_px / 2 + x * self.scale))
        py = int(round((top - y) * self.scale))
        return px, py

    def block_rect(self, block: Block, top: float) -> PixelRect:
        h = float(block.size[1])
        left, upper = self.to_px(block.min_x, block.y + h / 2, top)
        right, lower = self.to_px(block.max_x, block.y - h / 2, top)
        return left, upper, max(1, right - left), max(1, lower - upper)

    def clip(self, rect: PixelRect) -> PixelRect | None:
        left, top, w, h = rect
        x0, y0 = max(0, left), max(0, top)
        x1, y1 = min(self.width_px, left + w), min(self.height_px, top + h)
        if x1 <= x0 or y1 <= y0:
            return None
        return x0, y0, x1 - x0, y1 - y0
