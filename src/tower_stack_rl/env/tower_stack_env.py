from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tower_stack_rl.game import GameSettings, MemoryScoreStore, Phase, ScoringRules, TowerStackGame
from tower_stack_rl.visualization.palette import BACKGROUND, hex_to_rgb
from tower_stack_rl.visualization.projection import SideView


OBS_SIZE = 10


def _observe(game: TowerStackGame) -> np.ndarray:
    obs = np.zeros((OBS_SIZE,), dtype=np.float32)
    cur = game.current_block
    if cur is not None:
        obs[0:6] = (cur.x, cur.z, cur.direction, cur.speed, cur.width, cur.depth)
    if game.blocks:
        top = game.blocks[-1]
        obs[6:10] = (top.x, top.z, top.width, top.depth)
    return obs


class TowerStackEnv(gym.Env):
    """Learn when to drop the sliding block.

    Actions:
      0: Wait (let the block keep sliding)
      1: Place

    Each step applies the action and then advances the engine by
    `frame_time` seconds of simulated time, so episodes are independent of
    wall-clock speed.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    ACT_WAIT = 0
    ACT_PLACE = 1

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        rules: Optional[ScoringRules] = None,
        render_mode: Optional[str] = None,
        frame_time: float = 1.0 / 30.0,
        max_episode_steps: int = 5000,
        score_weight: float = 0.1,
        step_penalty: float = 0.0,
        terminal_penalty: float = -1.0,
    ) -> None:
        super().__init__()
        self.render_mode = render_mode
        self.frame_time = float(frame_time)
        self.max_episode_steps = int(max_episode_steps)
        self.score_weight = float(score_weight)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)

        self._sim_time_ms = 0.0
        self.game = TowerStackGame(
            settings=settings,
            rules=rules,
            store=MemoryScoreStore(),
            clock=lambda: self._sim_time_ms,
        )

        self.observation_space = spaces.Box(low=-np.inf, high=np.inf, shape=(OBS_SIZE,), dtype=np.float32)
        self.action_space = spaces.Discrete(2)

        self._steps = 0
        self._view = SideView(self.game.settings)

    def _get_info(self) -> Dict[str, Any]:
        top = self.game.blocks[-1] if self.game.blocks else None
        return {
            "score": self.game.score,
            "level": self.game.level,
            "perfect_streak": self.game.perfect_streak,
            "best_score": self.game.best_score,
            "last_perfect": bool(top.perfect_alignment) if top is not None and self.game.level > 0 else False,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self._sim_time_ms = 0.0
        self._steps = 0
        self.game.reset()
        self.game.start()
        return _observe(self.game), self._get_info()

    def step(self, action: int):
        action = int(action)
        score_before = self.game.score

        if action == self.ACT_PLACE:
            self.game.place()
        self._sim_time_ms += self.frame_time * 1000.0
        self.game.tick(self.frame_time)
        self._steps += 1

        terminated = self.game.phase is Phase.GAME_OVER
        truncated = (not terminated) and self._steps >= self.max_episode_steps

        reward_components: Dict[str, float] = {
            "score": self.score_weight * float(self.game.score - score_before),
            "step": self.step_penalty,
        }
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        reward = float(sum(reward_components.values()))

        info = self._get_info()
        info["reward_components"] = reward_components
        return _observe(self.game), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        view = self._view
        snapshot = self.game.snapshot()
        top = view.camera_top(snapshot)
        img = np.zeros((view.height_px, view.width_px, 3), dtype=np.uint8)
        img[:, :, :] = BACKGROUND
        blocks = list(snapshot.blocks)
        if snapshot.current_block is not None:
            blocks.append(snapshot.current_block)
        for block in blocks:
            rect = view.clip(view.block_rect(block, top))
            if rect is None:
                continue
            x, y, w, h = rect
            img[y : y + h, x : x + w, :] = hex_to_rgb(block.color)
        return img

    def close(self) -> None:
        pass
