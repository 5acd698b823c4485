"""Gymnasium view of a curriculum maze.

The environment exposes the same local perception the tabular agent
uses, but as an array: the colours of the 3x3 neighbourhood around the
agent. Cells outside the grid are black.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from ..agent.actions import Action
from ..maze.builder import build_maze
from ..maze.factory import NodeFactory
from ..maze.maze import Maze
from ..rendering import maze_to_rgb

if TYPE_CHECKING:  # pragma: no cover
    from ..config import TrainingConfig

_ACTIONS = tuple(Action)


class MazeEnv(gym.Env):
    """Single-agent maze walk with discrete moves.

    Actions are ``0..3`` for Up, Right, Down, Left. Moving into a wall or
    off the grid keeps the agent in place and yields
    ``invalid_action_reward``; any other move yields the reward of the
    entered cell. The episode terminates on the end cell and is truncated
    after ``max_episode_steps`` steps when a limit is given.
    """

    metadata = {"render_modes": ["rgb_array"]}

    @classmethod
    def from_config(
        cls,
        config: "TrainingConfig",
        *,
        max_episode_steps: Optional[int] = None,
        invalid_action_reward: float = -1.0,
        render_mode: Optional[str] = None,
    ) -> "MazeEnv":
        """Build the environment on the initial corridor described by ``config``."""

        node_factory = NodeFactory(
            config.way_node_reward,
            config.end_node_reward,
            config.number_of_way_colors,
            config.number_of_wall_colors,
            config.generated_way_colors_seed,
            config.generated_wall_colors_seed,
            config.used_way_colors_seed,
            config.used_wall_colors_seed,
            config.min_wall_way_brightness_difference,
        )
        maze = build_maze(config.initial_path_length, config.horizontal, node_factory)
        return cls(
            maze,
            max_episode_steps=max_episode_steps,
            invalid_action_reward=invalid_action_reward,
            render_mode=render_mode,
        )

    def __init__(
        self,
        maze: Maze,
        *,
        max_episode_steps: Optional[int] = None,
        invalid_action_reward: float = -1.0,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        if max_episode_steps is not None and max_episode_steps <= 0:
            raise ValueError("max_episode_steps has to be greater than 0.")
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render mode: {render_mode!r}")

        self.maze = maze
        self.max_episode_steps = max_episode_steps
        self.invalid_action_reward = float(invalid_action_reward)
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(len(_ACTIONS))
        self.observation_space = spaces.Box(low=0, high=255, shape=(3, 3, 3), dtype=np.uint8)

        self.position = maze.start
        self.steps = 0

    def _observation(self) -> np.ndarray:
        obs = np.zeros((3, 3, 3), dtype=np.uint8)
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                node = self.maze.neighbor(self.position, dx, dy)
                if node is not None:
                    obs[dx + 1, dy + 1] = node.color
        return obs

    def _info(self) -> Dict[str, Any]:
        return {"state": self.maze.state_of(self.position), "position": self.position.position}

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.position = self.maze.start
        self.steps = 0
        return self._observation(), self._info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action!r}")

        move = _ACTIONS[int(action)]
        target = self.maze.neighbor(self.position, *move.offset)
        if target is None or not target.is_passable:
            reward = self.invalid_action_reward
        else:
            self.position = target
            reward = float(target.reward)

        self.steps += 1
        terminated = self.position == self.maze.end
        truncated = (
            not terminated and self.max_episode_steps is not None and self.steps >= self.max_episode_steps
        )
        return self._observation(), reward, terminated, truncated, self._info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        return maze_to_rgb(self.maze, agent=self.position)
