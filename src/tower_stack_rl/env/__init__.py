"""Gymnasium environments for Tower Stack RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the wait/place timing environment
register(
    id="TowerStack-v0",
    entry_point="tower_stack_rl.env.tower_stack_env:TowerStackEnv",
)

__all__ = ["TowerStack-v0"]
