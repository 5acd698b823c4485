from __future__ import annotations

from typing import TYPE_CHECKING, List

from .actions import Action
from .policies import ExplorationPolicy
from .q_table import QTable

if TYPE_CHECKING:  # pragma: no cover
    from ..maze.maze import Maze
    from ..maze.node import Node


class Agent:
    """Tabular Q-learning agent walking a :class:`Maze`.

    The agent perceives only the state string of the cell it stands on, so
    cells that look alike share Q-values. Per-episode counters
    (``actions_taken`` and ``total_reward``) are cleared by
    :meth:`reset_for_episode`; the Q-table survives episodes and levels
    unless :meth:`reset_q_table` is called.
    """

    def __init__(
        self,
        maze: "Maze",
        policy: ExplorationPolicy,
        alpha: float,
        gamma: float,
        q_init: float,
    ) -> None:
        self.maze = maze
        self.position: Node = maze.start
        self.policy = policy
        self.alpha = float(alpha)
        self.gamma = float(gamma)
        self.q_init = float(q_init)
        self.q_table = QTable(q_init)
        self.actions_taken = 0
        self.total_reward = 0.0

    @property
    def state(self) -> str:
        return self.maze.state_of(self.position)

    def create_actions(self, node: "Node") -> List[Action]:
        """Moves from ``node`` that land on a passable cell."""

        actions = []
        for action in Action:
            neighbor = self.maze.neighbor(node, *action.offset)
            if neighbor is not None and neighbor.is_passable:
                actions.append(action)
        return actions

    def _ensure_entry(self, node: "Node", state: str) -> bool:
        if self.q_table.state_exists(state):
            return True
        self.q_table.add_entry(state, self.create_actions(node))
        return False

    def do_action(self) -> Action:
        """Choose, perform and learn from a single move.

        Returns the action taken. The Q-value of the state just left is
        updated with ``Q += alpha * (reward + gamma * max Q(next) - Q)``,
        where an unseen next state counts as ``q_init``.
        """

        old_state = self.state
        self._ensure_entry(self.position, old_state)

        action = self.policy.choose_action(old_state, self.q_table)
        self.position = self.maze.neighbor(self.position, *action.offset)
        reward = self.position.reward

        self.actions_taken += 1
        self.total_reward += reward

        old_q_value = self.q_table.get(old_state, action)
        new_state = self.state
        if self._ensure_entry(self.position, new_state):
            highest_next = self.q_table.highest_value(new_state)
        else:
            highest_next = self.q_init

        new_q_value = old_q_value + self.alpha * (reward + self.gamma * highest_next - old_q_value)
        self.q_table.set(old_state, action, new_q_value)

        self.policy.post_processing(old_state, action, old_q_value, new_state, self.q_table)
        return action

    def reset_for_episode(self, maze: "Maze") -> None:
        self.maze = maze
        self.position = maze.start
        self.actions_taken = 0
        self.total_reward = 0.0

    def reset_q_table(self) -> None:
        self.q_table.clear()

    def __repr__(self) -> str:
        return (
            f"Agent(position={self.position.position}, actions_taken={self.actions_taken}, "
            f"total_reward={self.total_reward}, policy={self.policy!r})"
        )
