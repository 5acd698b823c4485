import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[2]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from maze_curriculum.criteria import (
    AgentExceedsOptimalPathPercentage,
    AgentExceedsOptimalPathStatic,
    EndStateReached,
    MaxActionsReached,
    MaxEpisodesReached,
    PerformanceAchievedPercentageTolerance,
    PerformanceAchievedStaticTolerance,
)
from maze_curriculum.errors import ConfigurationError


def _training(actions_taken: int = 0, optimal_actions: int = 10, episode: int = 1, at_end: bool = False):
    """Stand-in exposing only what criteria read from a running training."""

    end = object()
    position = end if at_end else object()
    return SimpleNamespace(
        agent=SimpleNamespace(position=position, actions_taken=actions_taken),
        maze=SimpleNamespace(end=end),
        optimal_actions=optimal_actions,
        episode=episode,
    )


def test_end_state_reached() -> None:
    criterion = EndStateReached()
    assert criterion.is_met(_training(at_end=True))
    assert not criterion.is_met(_training())
    assert criterion.label == "End State Reached"


def test_max_actions_reached() -> None:
    criterion = MaxActionsReached(20)
    assert not criterion.is_met(_training(actions_taken=19))
    assert criterion.is_met(_training(actions_taken=20))
    assert criterion.label == "Max Actions Reached (20 Actions)"


def test_exceeds_optimal_path_percentage() -> None:
    criterion = AgentExceedsOptimalPathPercentage(0.5)
    assert not criterion.is_met(_training(actions_taken=15, optimal_actions=10))
    assert criterion.is_met(_training(actions_taken=16, optimal_actions=10))
    assert criterion.label == "Exceeded Optimal Path (50.0%)"


def test_exceeds_optimal_path_static() -> None:
    criterion = AgentExceedsOptimalPathStatic(3)
    assert not criterion.is_met(_training(actions_taken=13, optimal_actions=10))
    assert criterion.is_met(_training(actions_taken=14, optimal_actions=10))


def test_max_episodes_reached() -> None:
    criterion = MaxEpisodesReached(4)
    assert not criterion.is_met(_training(episode=3))
    assert criterion.is_met(_training(episode=4))
    assert criterion.label == "Max Episodes Reached (4 Episodes)"


def test_performance_static_tolerance_counts_good_episodes() -> None:
    """Good episodes need not be consecutive; reset starts over."""

    criterion = PerformanceAchievedStaticTolerance(2, 1)
    assert not criterion.is_met(_training(actions_taken=11, optimal_actions=10))
    assert not criterion.is_met(_training(actions_taken=30, optimal_actions=10))
    assert criterion.well_performed_episodes == 1
    assert criterion.is_met(_training(actions_taken=10, optimal_actions=10))

    criterion.reset()
    assert criterion.well_performed_episodes == 0
    assert not criterion.is_met(_training(actions_taken=10, optimal_actions=10))


def test_performance_percentage_tolerance_truncates_allowance() -> None:
    # 10 + int(10 * 0.15) = 11 actions allowed
    criterion = PerformanceAchievedPercentageTolerance(1, 0.15)
    assert not criterion.is_met(_training(actions_taken=12, optimal_actions=10))
    assert criterion.is_met(_training(actions_taken=11, optimal_actions=10))
    assert criterion.label == "Performance Achieved Percentage (0.15%, 1 Episodes)"


@pytest.mark.parametrize(
    "factory",
    [
        lambda: MaxActionsReached(0),
        lambda: AgentExceedsOptimalPathPercentage(-0.1),
        lambda: AgentExceedsOptimalPathStatic(-1),
        lambda: MaxEpisodesReached(-1),
        lambda: PerformanceAchievedStaticTolerance(0, 1),
        lambda: PerformanceAchievedPercentageTolerance(3, -1.0),
    ],
)
def test_invalid_parameters_raise(factory) -> None:
    with pytest.raises(ConfigurationError):
        factory()


def test_criteria_compare_by_parameters() -> None:
    assert MaxActionsReached(5) == MaxActionsReached(5)
    assert MaxActionsReached(5) != MaxActionsReached(6)
    assert MaxActionsReached(5) != MaxEpisodesReached(5)
    assert len({EndStateReached(), EndStateReached()}) == 1
