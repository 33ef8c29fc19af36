"""Game module for Tower Stack RL.

Exports the simulation engine and supporting pieces:
- GameSettings: Immutable tuning constants
- ScoringRules / speed_for: Points, streaks and the speed curve
- Block / BlockSimulator: Block type, sliding motion and spawning
- PlacementResolver: Footprint overlap and perfect-hit classification
- ParticleLifecycleManager: Time-windowed effect markers
- PhaseMachine / Phase: Session lifecycle transitions
- ScoreStore backends: Best-score persistence
- TowerStackGame: Session owner driven by ticks and intents
"""

from .settings import GameSettings
from .rules import ScoringRules, speed_for
from .blocks import Block, BlockSimulator, make_base_block, vec3
from .placement import PlacementOutcome, PlacementResolver, axis_overlap, footprint_overlap
from .effects import ParticleEffect, ParticleKind, ParticleLifecycleManager, PARTICLE_DURATIONS
from .events import EventBus, GameEvent, GameEventType
from .phases import Phase, PhaseMachine
from .storage import BEST_SCORE_KEY, JsonFileScoreStore, MemoryScoreStore, ScoreStore, ScoreStoreError
from .core import Intent, Snapshot, TowerStackGame

__all__ = [
    "GameSettings",
    "ScoringRules",
    "speed_for",
    "Block",
    "BlockSimulator",
    "make_base_block",
    "vec3",
    "PlacementOutcome",
    "PlacementResolver",
    "axis_overlap",
    "footprint_overlap",
    "ParticleEffect",
    "ParticleKind",
    "ParticleLifecycleManager",
    "PARTICLE_DURATIONS",
    "EventBus",
    "GameEvent",
    "GameEventType",
    "Phase",
    "PhaseMachine",
    "BEST_SCORE_KEY",
    "JsonFileScoreStore",
    "MemoryScoreStore",
    "ScoreStore",
    "ScoreStoreError",
    "Intent",
    "Snapshot",
    "TowerStackGame",
]
