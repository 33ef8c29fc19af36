from __future__ import annotations

from typing import Optional

import pygame

from tower_stack_rl.game import GameSettings, Phase, Snapshot
from .palette import BACKGROUND, PARTICLE_COLORS, faded, hex_to_rgb
from .projection import SideView


class Renderer:
    """Draws engine snapshots; never touches the engine itself."""

    def __init__(self, settings: GameSettings, width: int = 360, height: int = 540, hud_height: int = 60) -> None:
        self.view = SideView(settings, width_px=width, height_px=height)
        self.hud_height = hud_height
        self._font: Optional[pygame.font.Font] = None

    @property
    def window_size(self) -> tuple[int, int]:
        return self.view.width_px, self.view.height_px + self.hud_height

    def _tower_surface(self, snapshot: Snapshot, now: float) -> pygame.Surface:
        view = self.view
        surf = pygame.Surface((view.width_px, view.height_px))
        surf.fill(BACKGROUND)
        top = view.camera_top(snapshot)

        blocks = list(snapshot.blocks)
        if snapshot.current_block is not None:
            blocks.append(snapshot.current_block)
        for block in blocks:
            rect = view.clip(view.block_rect(block, top))
            if rect is None:
                continue
            pygame.draw.rect(surf, hex_to_rgb(block.color), pygame.Rect(*rect))
            if block.perfect_alignment and block.is_placed:
                pygame.draw.rect(surf, (255, 255, 255), pygame.Rect(*rect), 1)

        # Markers rise and fade over their lifetime
        for particle in snapshot.particles:
            age = particle.age(now)
            x, y = view.to_px(float(particle.position[0]), float(particle.position[1]) + 2.0 * age, top)
            color = faded(PARTICLE_COLORS[particle.kind.value], 1.0 - age)
            pygame.draw.circle(surf, color, (x, y), 6 if particle.kind.value == "perfect" else 4)
        return surf

    def _hud_lines(self, snapshot: Snapshot) -> list[str]:
        if snapshot.phase is Phase.MENU:
            return [f"Best {snapshot.best_score}", "SPACE to start"]
        if snapshot.phase is Phase.GAME_OVER:
            return [f"Game over - score {snapshot.score}  best {snapshot.best_score}", "SPACE to retry, R for menu"]
        lines = [f"Score {snapshot.score}  Level {snapshot.level}  Best {snapshot.best_score}"]
        if snapshot.phase is Phase.PAUSED:
            lines.append("Paused - P to resume")
        elif snapshot.perfect_streak > 0:
            lines.append(f"Perfect x{snapshot.perfect_streak}")
        return lines

    def draw(self, screen: pygame.Surface, snapshot: Snapshot, now: float) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 26)
        screen.fill((10, 10, 14))
        for i, line in enumerate(self._hud_lines(snapshot)):
            text = self._font.render(line, True, (230, 230, 230))
            screen.blit(text, (10, 8 + i * 24))
        screen.blit(self._tower_surface(snapshot, now), (0, self.hud_height))
        pygame.display.flip()
