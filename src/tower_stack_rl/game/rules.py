from __future__ import annotations

from dataclasses import dataclass

from .settings import GameSettings


@dataclass
class ScoringRules:
    base_points: int = 10
    perfect_points: int = 50
    streak_bonus: int = 10

    def points_for(self, is_perfect: bool, streak_before: int) -> int:
        if is_perfect:
            return self.perfect_points + streak_before * self.streak_bonus
        return self.base_points

    @staticmethod
    def next_streak(is_perfect: bool, streak: int) -> int:
        # A single miss wipes the whole streak
        return streak + 1 if is_perfect else 0


def speed_for(level: int, settings: GameSettings) -> float:
    return min(settings.base_speed + level * settings.speed_increase, settings.max_speed)
