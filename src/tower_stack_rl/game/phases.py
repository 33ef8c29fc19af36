from __future__ import annotations

from enum import Enum

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from .events import EventBus, GameEventType


class Phase(Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class PhaseMachine(StateMachine):
    """Guards session phase transitions.

    The engine performs the actual session mutation; this machine only says
    whether a transition is legal and announces entering/leaving PLAYING so
    audio collaborators can start and stop music.
    """

    menu = State("Menu", value=Phase.MENU, initial=True)
    playing = State("Playing", value=Phase.PLAYING)
    paused = State("Paused", value=Phase.PAUSED)
    game_over = State("Game over", value=Phase.GAME_OVER)

    start_game = menu.to(playing) | game_over.to(playing)
    pause_game = playing.to(paused)
    resume_game = paused.to(playing)
    end_game = playing.to(game_over)
    reset_game = (
        menu.to(menu)
        | playing.to(menu)
        | paused.to(menu)
        | game_over.to(menu)
    )

    def __init__(self, bus: EventBus) -> None:
        self.bus = bus
        super().__init__()

    @property
    def phase(self) -> Phase:
        return Phase(self.current_state.value)

    def try_send(self, event: str) -> bool:
        """Fire `event`; returns False instead of raising when it is illegal here."""
        try:
            self.send(event)
        except TransitionNotAllowed:
            return False
        return True

    def on_enter_playing(self) -> None:
        self.bus.publish(GameEventType.MUSIC_SHOULD_PLAY)

    def on_exit_playing(self) -> None:
        self.bus.publish(GameEventType.MUSIC_SHOULD_STOP)
