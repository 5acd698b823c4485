"""Configuration objects for maze curriculum training.

:class:`TrainingConfig` carries every setting of a run as already
constructed components (policy, criteria, operators), so the training
core never parses anything. :meth:`TrainingConfig.from_dict` turns a
plain mapping, typically loaded from YAML, into such a config by
resolving component names through :mod:`maze_curriculum.registry`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .agent.policies import ExplorationPolicy
from .analysis.complexity import ComplexityFunction, default_complexity
from .criteria import Criterion
from .errors import ConfigurationError
from .maze.builder import validate_build_parameters
from .maze.factory import validate_parameters
from .operators.base import MazeOperator
from .registry import EPISODE_CRITERION, LEVEL_CRITERION, OPERATOR, POLICY, build_component

_COMPLEXITY_FUNCTIONS: Dict[str, ComplexityFunction] = {
    "default": default_complexity,
}


@dataclass
class TrainingConfig:
    """Settings of a single curriculum training run.

    Rewards, Q-learning parameters and seeds are plain values; the
    exploration policy, the ordered criteria lists and the maze operators
    are ready-made instances. Criteria are consulted in list order and
    the first one met wins.
    """

    exploration_policy: ExplorationPolicy
    episode_stopping_criteria: List[Criterion]
    level_change_criteria: List[Criterion]
    maze_operators: List[MazeOperator]
    training_name: str = "training"
    initial_q_value: float = 0.0
    way_node_reward: float = -0.05
    end_node_reward: float = 1.0
    q_learning_alpha: float = 0.1
    q_learning_gamma: float = 0.9
    start_each_level_with_empty_q_table: bool = False
    number_of_levels: int = 5
    delta: float = 10.0
    change_maze_seed: int = 0
    horizontal: bool = True
    initial_path_length: int = 5
    number_of_way_colors: int = 1
    number_of_wall_colors: int = 1
    generated_way_colors_seed: int = 0
    generated_wall_colors_seed: int = 0
    used_way_colors_seed: int = 0
    used_wall_colors_seed: int = 0
    min_wall_way_brightness_difference: float = 200.0
    complexity_function: ComplexityFunction = field(default=default_complexity)

    def validate(self) -> None:
        """Raise :class:`ConfigurationError` on the first invalid setting."""

        if self.number_of_levels < 1:
            raise ConfigurationError("number_of_levels has to be at least 1.")
        if self.delta <= 0:
            raise ConfigurationError("delta has to be greater than 0.")
        if self.q_learning_alpha <= 0:
            raise ConfigurationError("q_learning_alpha has to be greater than 0.")
        if self.q_learning_gamma < 0:
            raise ConfigurationError("q_learning_gamma has to be greater equal than 0.")
        if not isinstance(self.exploration_policy, ExplorationPolicy):
            raise ConfigurationError("exploration_policy has to be an ExplorationPolicy instance.")
        if not self.episode_stopping_criteria:
            raise ConfigurationError("At least one episode stopping criterion is required.")
        if not self.level_change_criteria:
            raise ConfigurationError("At least one level change criterion is required.")
        if not self.maze_operators:
            raise ConfigurationError("At least one maze operator is required.")
        validate_build_parameters(self.initial_path_length)
        validate_parameters(
            self.number_of_way_colors,
            self.number_of_wall_colors,
            self.min_wall_way_brightness_difference,
        )

    def scalar_settings(self) -> Dict[str, Any]:
        """Every plain (non-component) setting, for printing run summaries."""

        skip = {
            "exploration_policy",
            "episode_stopping_criteria",
            "level_change_criteria",
            "maze_operators",
            "complexity_function",
        }
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name not in skip}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrainingConfig":
        """Build a config from a plain mapping.

        Components are given either as a bare registry name or as a
        mapping with a ``name`` key plus constructor arguments::

            exploration_policy: {name: epsilon_greedy, epsilon: 0.2, seed: 7}
            episode_stopping_criteria: [end_state_reached, {name: max_actions_reached, max_actions: 200}]
        """

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

        kwargs: Dict[str, Any] = dict(data)
        for key in ("exploration_policy", "episode_stopping_criteria", "level_change_criteria", "maze_operators"):
            if key not in kwargs:
                raise ConfigurationError(f"Missing configuration key: {key}")

        kwargs["exploration_policy"] = _build_entry(POLICY, kwargs["exploration_policy"])
        kwargs["episode_stopping_criteria"] = _build_list(EPISODE_CRITERION, kwargs["episode_stopping_criteria"])
        kwargs["level_change_criteria"] = _build_list(LEVEL_CRITERION, kwargs["level_change_criteria"])
        kwargs["maze_operators"] = _build_list(OPERATOR, kwargs["maze_operators"])
        if "complexity_function" in kwargs:
            kwargs["complexity_function"] = _complexity_function(kwargs["complexity_function"])

        return cls(**kwargs)


def _build_entry(kind: str, entry: Any) -> Any:
    if isinstance(entry, str):
        name, params = entry, {}
    elif isinstance(entry, Mapping):
        params = dict(entry)
        name = params.pop("name", None)
        if not isinstance(name, str):
            raise ConfigurationError(f"{kind} entry needs a 'name': {entry!r}")
    else:
        raise ConfigurationError(f"Invalid {kind} entry: {entry!r}")
    try:
        return build_component(kind, name, **params)
    except KeyError as exc:
        raise ConfigurationError(str(exc.args[0])) from exc
    except TypeError as exc:
        raise ConfigurationError(f"Invalid arguments for {kind} {name!r}: {exc}") from exc


def _build_list(kind: str, entries: Any) -> List[Any]:
    if isinstance(entries, (str, Mapping)) or not isinstance(entries, (list, tuple)):
        raise ConfigurationError(f"Expected a list of {kind} entries, got {entries!r}")
    return [_build_entry(kind, entry) for entry in entries]


def _complexity_function(value: Any) -> ComplexityFunction:
    if callable(value):
        return value
    if isinstance(value, str) and value.lower() in _COMPLEXITY_FUNCTIONS:
        return _COMPLEXITY_FUNCTIONS[value.lower()]
    raise ConfigurationError(f"Unsupported complexity function: {value!r}")


@dataclass
class PathConfig:
    """Resolved filesystem locations for the artefacts of a run.

    Only the CLI writes files; the training core itself keeps everything
    in memory.
    """

    project_root: Path
    outputs_root: Path


def make_default_paths(project_root: Path, outputs_root: Optional[Path] = None) -> PathConfig:
    """Construct a ``PathConfig`` rooted at ``<project_root>/outputs``.

    The caller is responsible for creating the directories on disk when
    needed; this function only computes paths.
    """

    if outputs_root is None:
        outputs_root = project_root / "outputs"
    return PathConfig(project_root=project_root, outputs_root=outputs_root)
