"""Component registry for maze curriculum runs.

Configuration files refer to exploration policies, criteria and maze
operators by short lower-case names. This module maps those names to the
implementing classes plus default constructor arguments, so that the
configuration layer stays declarative.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Type

from .agent.policies import (
    DecreasingEpsilonPolicy,
    EpsilonFirstPolicy,
    EpsilonGreedyPolicy,
    GreedyPolicy,
    RandomPolicy,
    SoftmaxPolicy,
    VDBEPolicy,
)
from .criteria import (
    AgentExceedsOptimalPathPercentage,
    AgentExceedsOptimalPathStatic,
    EndStateReached,
    MaxActionsReached,
    MaxEpisodesReached,
    PerformanceAchievedPercentageTolerance,
    PerformanceAchievedStaticTolerance,
)
from .operators import ChangeOptimalPathOperator, DeadEndOperator, NewPathOperator, ResizeOperator

POLICY = "policy"
EPISODE_CRITERION = "episode_criterion"
LEVEL_CRITERION = "level_criterion"
OPERATOR = "operator"


@dataclass
class ComponentSpec:
    """Specification for a single named component."""

    cls: Type[Any]
    default_kwargs: Dict[str, Any] = field(default_factory=dict)


_POLICIES: Dict[str, ComponentSpec] = {
    "greedy": ComponentSpec(GreedyPolicy, {"seed": 0}),
    "random": ComponentSpec(RandomPolicy, {"seed": 0}),
    "epsilon_greedy": ComponentSpec(EpsilonGreedyPolicy, {"epsilon": 0.1, "seed": 0}),
    "decreasing_epsilon": ComponentSpec(
        DecreasingEpsilonPolicy, {"epsilon": 1.0, "reducing_factor": 0.98, "seed": 0}
    ),
    "epsilon_first": ComponentSpec(
        EpsilonFirstPolicy,
        {"explore_epsilon": 1.0, "exploit_epsilon": 0.0, "exploration_actions": 1000, "seed": 0},
    ),
    # Softmax needs enough digits to tell close Q-values apart.
    "softmax": ComponentSpec(SoftmaxPolicy, {"temperature": 1.0, "precision": 30, "seed": 0}),
    "vdbe": ComponentSpec(VDBEPolicy, {"inverse_sensitivity": 1.0, "epsilon": 0.5, "seed": 0}),
}

_EPISODE_CRITERIA: Dict[str, ComponentSpec] = {
    "end_state_reached": ComponentSpec(EndStateReached),
    "max_actions_reached": ComponentSpec(MaxActionsReached, {"max_actions": 1000}),
    "agent_exceeds_optimal_path_percentage": ComponentSpec(
        AgentExceedsOptimalPathPercentage, {"percentage_of_extra_actions": 10.0}
    ),
    "agent_exceeds_optimal_path_static": ComponentSpec(
        AgentExceedsOptimalPathStatic, {"number_of_extra_actions": 100}
    ),
}

_LEVEL_CRITERIA: Dict[str, ComponentSpec] = {
    "max_episodes_reached": ComponentSpec(MaxEpisodesReached, {"number_of_episodes": 100}),
    "performance_achieved_percentage_tolerance": ComponentSpec(
        PerformanceAchievedPercentageTolerance,
        {"number_of_considered_episodes": 5, "percentage_tolerance": 0.1},
    ),
    "performance_achieved_static_tolerance": ComponentSpec(
        PerformanceAchievedStaticTolerance,
        {"number_of_considered_episodes": 5, "number_of_tolerance_actions": 2},
    ),
}

_OPERATORS: Dict[str, ComponentSpec] = {
    "resize": ComponentSpec(ResizeOperator, {"cost_per_dimension": 1.0, "seed": 0}),
    "new_path": ComponentSpec(
        NewPathOperator, {"min_path_len": 4, "max_path_len": 10, "cost_per_node": 1.0, "seed": 0}
    ),
    "dead_end": ComponentSpec(
        DeadEndOperator,
        {"min_path_len": 2, "max_path_len": 6, "cost_per_node": 1.0, "preference": 0.5, "seed": 0},
    ),
    "change_optimal_path": ComponentSpec(ChangeOptimalPathOperator, {"cost_per_increase": 1.0, "seed": 0}),
}

_REGISTRIES: Dict[str, Dict[str, ComponentSpec]] = {
    POLICY: _POLICIES,
    EPISODE_CRITERION: _EPISODE_CRITERIA,
    LEVEL_CRITERION: _LEVEL_CRITERIA,
    OPERATOR: _OPERATORS,
}


def component_names(kind: str):
    if kind not in _REGISTRIES:
        raise KeyError(f"Unsupported component kind: {kind!r}")
    return sorted(_REGISTRIES[kind])


def get_component_spec(kind: str, name: str) -> ComponentSpec:
    if kind not in _REGISTRIES:
        raise KeyError(f"Unsupported component kind: {kind!r}")
    key = name.lower()
    registry = _REGISTRIES[kind]
    if key not in registry:
        raise KeyError(f"Unsupported {kind}: {name!r}")
    return registry[key]


def build_component(kind: str, name: str, **kwargs: Any) -> Any:
    """Instantiate the component registered as ``name`` under ``kind``.

    ``kwargs`` override the registered defaults. Constructor validation
    applies, so bad parameters raise
    :class:`~maze_curriculum.errors.ConfigurationError`.
    """

    spec = get_component_spec(kind, name)
    merged: Dict[str, Any] = dict(spec.default_kwargs)
    merged.update(kwargs)
    return spec.cls(**merged)
