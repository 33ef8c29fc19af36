from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, List, Mapping

logger = logging.getLogger(__name__)


class GameEventType(Enum):
    BLOCK_PLACED = "block_placed"
    PERFECT_PLACED = "perfect_placed"
    GAME_OVER = "game_over"
    MUSIC_SHOULD_PLAY = "music_should_play"
    MUSIC_SHOULD_STOP = "music_should_stop"


@dataclass(frozen=True)
class GameEvent:
    type: GameEventType
    payload: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        # Listeners share one event; they get a read-only view of a private copy
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))


Listener = Callable[[GameEvent], None]


class EventBus:
    """Synchronous fan-out of engine events to collaborators (audio, UI)."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event_type: GameEventType, **payload: Any) -> GameEvent:
        event = GameEvent(type=event_type, payload=payload)
        logger.debug(f"Event {event_type.value}: {payload}")
        for listener in list(self._listeners):
            listener(event)
        return event
