from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Sequence

from .blocks import Vector, vec3


class ParticleKind(Enum):
    PERFECT = "perfect"
    PLACE = "place"
    FALL = "fall"  # reserved, nothing spawns it yet


# Milliseconds each marker stays alive
PARTICLE_DURATIONS: Dict[ParticleKind, float] = {
    ParticleKind.PERFECT: 2000.0,
    ParticleKind.PLACE: 1000.0,
    ParticleKind.FALL: 1000.0,
}


@dataclass(frozen=True, eq=False)
class ParticleEffect:
    id: str
    position: Vector
    kind: ParticleKind
    start_time: float
    duration: float

    def age(self, now: float) -> float:
        """Elapsed fraction of the lifetime, clamped to [0, 1]."""
        if self.duration <= 0:
            return 1.0
        return min(1.0, max(0.0, (now - self.start_time) / self.duration))

    def is_alive(self, now: float) -> bool:
        return now - self.start_time < self.duration


class ParticleLifecycleManager:
    """Spawns and expires cosmetic markers. Holds no state of its own."""

    @staticmethod
    def spawn(kind: ParticleKind, position: Iterable[float], now: float) -> ParticleEffect:
        return ParticleEffect(
            id=f"particle-{uuid.uuid4().hex}",
            position=vec3(position),
            kind=kind,
            start_time=float(now),
            duration=PARTICLE_DURATIONS[kind],
        )

    @staticmethod
    def expire(particles: Iterable[ParticleEffect], now: float) -> List[ParticleEffect]:
        return [p for p in particles if p.is_alive(now)]

    @staticmethod
    def cap(particles: Sequence[ParticleEffect], limit: int) -> List[ParticleEffect]:
        """Keep only the `limit` most recently spawned markers."""
        if len(particles) <= limit:
            return list(particles)
        newest = sorted(particles, key=lambda p: p.start_time)[-limit:]
        keep = {p.id for p in newest}
        return [p for p in particles if p.id in keep]
