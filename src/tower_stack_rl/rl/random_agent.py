from __future__ import annotations

import logging
from typing import Optional

import gymnasium as gym

import tower_stack_rl.env  # noqa: F401

logger = logging.getLogger(__name__)


def run_random(steps: int = 200, seed: Optional[int] = None, place_probability: float = 0.05) -> float:
    """Play TowerStack-v0 with a coin-flip policy and return the summed reward.

    Placing on every frame would end each episode immediately, so the agent
    only drops the block with `place_probability`.
    """
    env = gym.make("TowerStack-v0")
    obs, info = env.reset(seed=seed)
    rng = env.unwrapped.np_random
    total_reward = 0.0
    episodes = 0
    try:
        for _ in range(steps):
            action = 1 if rng.random() < place_probability else 0
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += float(reward)
            if terminated or truncated:
                episodes += 1
                logger.debug(f"Episode {episodes} ended with score {info['score']}")
                obs, info = env.reset()
    finally:
        env.close()
    logger.info(f"Random agent total reward: {total_reward:.2f} over {episodes} finished episodes")
    return total_reward


if __name__ == "__main__":  # pragma: no cover
    from tower_stack_rl.logging_config import setup_logging

    setup_logging()
    run_random()
