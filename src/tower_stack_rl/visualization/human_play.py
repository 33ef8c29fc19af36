from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict

import pygame

from tower_stack_rl.game import GameEvent, Intent, JsonFileScoreStore, Phase, TowerStackGame
from tower_stack_rl.logging_config import LEVEL_NAMES, setup_logging
from .renderer import Renderer

logger = logging.getLogger(__name__)

DEFAULT_STORE = Path.home() / ".tower_stack_rl" / "scores.json"

KEY_TO_INTENT: Dict[int, Intent] = {
    pygame.K_SPACE: Intent.PLACE,
    pygame.K_r: Intent.RESET,
}


def intent_for_key(key: int, phase: Phase) -> Intent | None:
    if key == pygame.K_p:
        if phase is Phase.PLAYING:
            return Intent.PAUSE
        if phase is Phase.PAUSED:
            return Intent.RESUME
        return None
    if key == pygame.K_SPACE and phase in (Phase.MENU, Phase.GAME_OVER):
        return Intent.START
    return KEY_TO_INTENT.get(key)


def _log_event(event: GameEvent) -> None:
    # Stand-in for the audio collaborator
    logger.info(f"[audio] {event.type.value}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Tower Stack with the keyboard")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--store", type=Path, default=DEFAULT_STORE, help="Best score JSON file")
    p.add_argument("--log-level", default="INFO", type=str.upper, choices=LEVEL_NAMES)
    p.add_argument("--log-file", default=None, help="Append logs to this file")
    p.add_argument("--fps", type=int, default=60)
    return p


def run() -> None:
    args = build_parser().parse_args()
    setup_logging(args.log_level, log_file=args.log_file)

    game = TowerStackGame(store=JsonFileScoreStore(args.store), seed=args.seed)
    game.subscribe(_log_event)
    renderer = Renderer(game.settings)

    pygame.init()
    try:
        screen = pygame.display.set_mode(renderer.window_size)
        pygame.display.set_caption("Tower Stack - Human Play")
        clock = pygame.time.Clock()

        running = True
        while running:
            delta = clock.tick(args.fps) / 1000.0

            # Intents are applied between ticks, never during one
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                        continue
                    intent = intent_for_key(event.key, game.phase)
                    if intent is not None:
                        game.dispatch(intent)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    game.dispatch(Intent.PLACE)

            game.tick(delta)
            renderer.draw(screen, game.snapshot(), game.clock())
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
