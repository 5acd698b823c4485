"""Episode-stop and level-change criteria.

A criterion inspects a running :class:`~maze_curriculum.training.Training`
through its read-only accessors (``maze``, ``agent``, ``episode`` and
``optimal_actions``, the current shortest-path length) and reports
whether it is met. The controller asks the configured criteria in order
and the first one met wins.

Stateful level-change criteria count well-performed episodes; the
controller calls :meth:`Criterion.reset` on every criterion when a level
changes.
"""

from __future__ import annotations

import abc
from typing import Dict

from .errors import ConfigurationError


class Criterion(abc.ABC):
    @abc.abstractmethod
    def is_met(self, training) -> bool:
        ...

    def reset(self) -> None:
        """Forget any accumulated state (default: nothing to forget)."""

    @property
    def label(self) -> str:
        return type(self).__name__

    def parameters(self) -> Dict[str, object]:
        return {}

    def __repr__(self) -> str:
        args = ", ".join(f"{key} = {value}" for key, value in self.parameters().items())
        return f"{type(self).__name__}({args})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.parameters() == other.parameters()

    def __hash__(self) -> int:
        return hash((type(self).__name__, tuple(sorted(self.parameters().items()))))


# ---------------------------------------------------------------------------
# Episode stop
# ---------------------------------------------------------------------------
class EndStateReached(Criterion):
    def is_met(self, training) -> bool:
        return training.agent.position == training.maze.end

    @property
    def label(self) -> str:
        return "End State Reached"


class MaxActionsReached(Criterion):
    def __init__(self, max_actions: int) -> None:
        if max_actions <= 0:
            raise ConfigurationError(f"Parameter [max_actions] = {max_actions} has to be greater than 0.")
        self.max_actions = int(max_actions)

    def parameters(self) -> Dict[str, object]:
        return {"max_actions": self.max_actions}

    def is_met(self, training) -> bool:
        return training.agent.actions_taken == self.max_actions

    @property
    def label(self) -> str:
        return f"Max Actions Reached ({self.max_actions} Actions)"


class AgentExceedsOptimalPathPercentage(Criterion):
    """Met once the agent used more than ``opt * (1 + percentage)`` actions."""

    def __init__(self, percentage_of_extra_actions: float) -> None:
        if percentage_of_extra_actions < 0:
            raise ConfigurationError(
                f"Parameter [percentage_of_extra_actions] = {percentage_of_extra_actions} "
                "has to be greater equal than 0."
            )
        self.percentage_of_extra_actions = float(percentage_of_extra_actions)

    def parameters(self) -> Dict[str, object]:
        return {"percentage_of_extra_actions": self.percentage_of_extra_actions}

    def is_met(self, training) -> bool:
        optimal = training.optimal_actions
        return training.agent.actions_taken > optimal + optimal * self.percentage_of_extra_actions

    @property
    def label(self) -> str:
        return f"Exceeded Optimal Path ({self.percentage_of_extra_actions * 100}%)"


class AgentExceedsOptimalPathStatic(Criterion):
    def __init__(self, number_of_extra_actions: int) -> None:
        if number_of_extra_actions < 0:
            raise ConfigurationError(
                f"Parameter [number_of_extra_actions] = {number_of_extra_actions} has to be greater equal than 0."
            )
        self.number_of_extra_actions = int(number_of_extra_actions)

    def parameters(self) -> Dict[str, object]:
        return {"number_of_extra_actions": self.number_of_extra_actions}

    def is_met(self, training) -> bool:
        return training.agent.actions_taken > training.optimal_actions + self.number_of_extra_actions

    @property
    def label(self) -> str:
        return f"Exceeded Optimal Path ({self.number_of_extra_actions} Actions)"


# ---------------------------------------------------------------------------
# Level change
# ---------------------------------------------------------------------------
class MaxEpisodesReached(Criterion):
    def __init__(self, number_of_episodes: int) -> None:
        if number_of_episodes < 0:
            raise ConfigurationError(
                f"Parameter [number_of_episodes] = {number_of_episodes} has to be greater equal than 0."
            )
        self.number_of_episodes = int(number_of_episodes)

    def parameters(self) -> Dict[str, object]:
        return {"number_of_episodes": self.number_of_episodes}

    def is_met(self, training) -> bool:
        return training.episode == self.number_of_episodes

    @property
    def label(self) -> str:
        return f"Max Episodes Reached ({self.number_of_episodes} Episodes)"


class _PerformanceAchieved(Criterion):
    """Counts episodes finished within ``_maximum_actions(opt)`` actions.

    Met on the call where the count reaches ``number_of_considered_episodes``.
    The episodes need not be consecutive.
    """

    def __init__(self, number_of_considered_episodes: int) -> None:
        if number_of_considered_episodes <= 0:
            raise ConfigurationError(
                f"Parameter [number_of_considered_episodes] = {number_of_considered_episodes} "
                "has to be greater than 0."
            )
        self.number_of_considered_episodes = int(number_of_considered_episodes)
        self.well_performed_episodes = 0

    @abc.abstractmethod
    def _maximum_actions(self, optimal: int) -> int:
        ...

    def is_met(self, training) -> bool:
        if training.agent.actions_taken <= self._maximum_actions(training.optimal_actions):
            self.well_performed_episodes += 1
        return self.well_performed_episodes == self.number_of_considered_episodes

    def reset(self) -> None:
        self.well_performed_episodes = 0


class PerformanceAchievedPercentageTolerance(_PerformanceAchieved):
    def __init__(self, number_of_considered_episodes: int, percentage_tolerance: float) -> None:
        super().__init__(number_of_considered_episodes)
        if percentage_tolerance < 0:
            raise ConfigurationError(
                f"Parameter [percentage_tolerance] = {percentage_tolerance} has to be greater equal than 0."
            )
        self.percentage_tolerance = float(percentage_tolerance)

    def parameters(self) -> Dict[str, object]:
        return {
            "number_of_considered_episodes": self.number_of_considered_episodes,
            "percentage_tolerance": self.percentage_tolerance,
        }

    def _maximum_actions(self, optimal: int) -> int:
        return optimal + int(optimal * self.percentage_tolerance)

    @property
    def label(self) -> str:
        return (
            f"Performance Achieved Percentage ({self.percentage_tolerance}%, "
            f"{self.number_of_considered_episodes} Episodes)"
        )


class PerformanceAchievedStaticTolerance(_PerformanceAchieved):
    def __init__(self, number_of_considered_episodes: int, number_of_tolerance_actions: int) -> None:
        super().__init__(number_of_considered_episodes)
        if number_of_tolerance_actions < 0:
            raise ConfigurationError(
                f"Parameter [number_of_tolerance_actions] = {number_of_tolerance_actions} "
                "has to be greater equal than 0."
            )
        self.number_of_tolerance_actions = int(number_of_tolerance_actions)

    def parameters(self) -> Dict[str, object]:
        return {
            "number_of_considered_episodes": self.number_of_considered_episodes,
            "number_of_tolerance_actions": self.number_of_tolerance_actions,
        }

    def _maximum_actions(self, optimal: int) -> int:
        return optimal + self.number_of_tolerance_actions

    @property
    def label(self) -> str:
        return (
            f"Performance Achieved ({self.number_of_tolerance_actions} Actions, "
            f"{self.number_of_considered_episodes} Episodes)"
        )
