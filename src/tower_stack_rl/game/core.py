from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Callable, List, Optional, Tuple

from .blocks import Block, BlockSimulator, make_base_block
from .effects import ParticleEffect, ParticleKind, ParticleLifecycleManager
from .events import EventBus, GameEventType, Listener
from .phases import Phase, PhaseMachine
from .placement import PlacementResolver
from .rules import ScoringRules
from .settings import GameSettings
from .storage import BEST_SCORE_KEY, MemoryScoreStore, ScoreStore, ScoreStoreError

logger = logging.getLogger(__name__)


class Intent(IntEnum):
    START = 0
    PAUSE = 1
    RESUME = 2
    RESET = 3
    PLACE = 4


Clock = Callable[[], float]


def wall_clock_ms() -> float:
    return time.time() * 1000.0


@dataclass(frozen=True, eq=False)
class Snapshot:
    """Read-only view of a session handed to renderers and agents."""

    phase: Phase
    score: int
    level: int
    perfect_streak: int
    best_score: int
    blocks: Tuple[Block, ...]
    current_block: Optional[Block]
    particles: Tuple[ParticleEffect, ...]
    tower_height: float


class TowerStackGame:
    """Session owner and the only thing that mutates it.

    Drivers call `tick` once per frame and route intents between ticks,
    either through the named methods or `dispatch`. Intents that make no
    sense in the current phase are ignored.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        rules: Optional[ScoringRules] = None,
        store: Optional[ScoreStore] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
        seed: Optional[int] = None,
        score_key: str = BEST_SCORE_KEY,
    ) -> None:
        self.settings = settings or GameSettings()
        self.rules = rules or ScoringRules()
        self.store: ScoreStore = store if store is not None else MemoryScoreStore()
        self.rng = rng or random.Random(seed)
        self.clock: Clock = clock or wall_clock_ms
        self.score_key = score_key

        self.simulator = BlockSimulator(self.settings)
        self.resolver = PlacementResolver(self.settings)
        self.particle_manager = ParticleLifecycleManager()
        self.bus = EventBus()
        self.phases = PhaseMachine(self.bus)

        self.score = 0
        self.level = 0
        self.perfect_streak = 0
        self.best_score = self.store.load(self.score_key)
        self.blocks: List[Block] = []
        self.current_block: Optional[Block] = None
        self.particles: List[ParticleEffect] = []

    @property
    def phase(self) -> Phase:
        return self.phases.phase

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.bus.subscribe(listener)

    def _clear_session(self) -> None:
        self.score = 0
        self.level = 0
        self.perfect_streak = 0
        self.blocks = []
        self.current_block = None
        self.particles = []

    # Intents

    def start(self) -> None:
        if self.phase not in (Phase.MENU, Phase.GAME_OVER):
            logger.debug(f"Ignoring start while {self.phase.value}")
            return
        # The session must be complete before PLAYING listeners run
        self._clear_session()
        base = make_base_block(self.settings)
        self.blocks = [base]
        self.current_block = self.simulator.spawn(0, base, self.rng)
        self.phases.send("start_game")
        logger.debug("Session started")

    def pause(self) -> None:
        if not self.phases.try_send("pause_game"):
            logger.debug(f"Ignoring pause while {self.phase.value}")

    def resume(self) -> None:
        if not self.phases.try_send("resume_game"):
            logger.debug(f"Ignoring resume while {self.phase.value}")

    def reset(self) -> None:
        self.phases.try_send("reset_game")
        self._clear_session()
        logger.debug("Session reset")

    def place(self) -> None:
        current = self.current_block
        if self.phase is not Phase.PLAYING or current is None or not current.is_moving:
            logger.debug(f"Ignoring place while {self.phase.value}")
            return

        last = self.blocks[-1]
        outcome = self.resolver.resolve(last, current)
        if outcome is None:
            self._end_session(current)
            return

        placed = replace(
            current,
            position=outcome.position,
            size=outcome.size,
            is_moving=False,
            direction=0,
            is_placed=True,
            perfect_alignment=outcome.perfect,
        )
        points = self.rules.points_for(outcome.perfect, self.perfect_streak)
        self.perfect_streak = self.rules.next_streak(outcome.perfect, self.perfect_streak)
        self.score += points
        self.level += 1
        self.blocks.append(placed)

        kind = ParticleKind.PERFECT if outcome.perfect else ParticleKind.PLACE
        self.particles.append(self.particle_manager.spawn(kind, placed.position, self.clock()))
        self.particles = self.particle_manager.cap(self.particles, self.settings.max_particles)

        self.current_block = self.simulator.spawn(self.level, placed, self.rng)
        logger.debug(
            f"Placed level {self.level} perfect={outcome.perfect} "
            f"error={outcome.alignment_error:.3f} points={points}"
        )

        self.bus.publish(
            GameEventType.BLOCK_PLACED,
            block=placed,
            points=points,
            score=self.score,
            level=self.level,
            perfect=outcome.perfect,
            kept_area=PlacementResolver.kept_area_ratio(last, outcome),
        )
        if outcome.perfect:
            self.bus.publish(GameEventType.PERFECT_PLACED, block=placed, streak=self.perfect_streak)

    def tick(self, delta_time: float) -> None:
        if self.phase is not Phase.PLAYING:
            return
        if self.current_block is not None and delta_time > 0:
            self.current_block = self.simulator.advance(self.current_block, delta_time)
        self.particles = self.particle_manager.expire(self.particles, self.clock())

    def dispatch(self, intent: Intent) -> None:
        handlers = {
            Intent.START: self.start,
            Intent.PAUSE: self.pause,
            Intent.RESUME: self.resume,
            Intent.RESET: self.reset,
            Intent.PLACE: self.place,
        }
        try:
            handler = handlers[Intent(intent)]
        except ValueError:
            raise ValueError(f"Unknown intent: {intent!r}") from None
        handler()

    def _end_session(self, missed: Block) -> None:
        previous_best = self.best_score
        self.best_score = max(self.score, previous_best)
        self.current_block = None
        new_best = self.best_score > previous_best

        # Persist before any listener runs; a failure is re-raised once GAME_OVER is announced
        save_error: Optional[ScoreStoreError] = None
        if new_best:
            try:
                self.store.save(self.score_key, self.best_score)
            except ScoreStoreError as exc:
                logger.error(f"Could not save best score {self.best_score}: {exc}")
                save_error = exc

        self.phases.send("end_game")
        logger.info(f"Game over at level {self.level} with score {self.score} (best {self.best_score})")
        self.bus.publish(
            GameEventType.GAME_OVER,
            score=self.score,
            best_score=self.best_score,
            new_best=new_best,
            saved=new_best and save_error is None,
            missed_block=missed,
        )
        if save_error is not None:
            raise save_error

    # Views

    def tower_height(self) -> float:
        if not self.blocks:
            return 0.0
        top = self.blocks[-1]
        return top.y + self.settings.block_height / 2

    def snapshot(self) -> Snapshot:
        return Snapshot(
            phase=self.phase,
            score=self.score,
            level=self.level,
            perfect_streak=self.perfect_streak,
            best_score=self.best_score,
            blocks=tuple(self.blocks),
            current_block=self.current_block,
            particles=tuple(self.particles),
            tower_height=self.tower_height(),
        )
