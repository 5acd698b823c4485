import sys
from pathlib import Path

import pytest
import yaml

_REPO_ROOT = Path(__file__).resolve().parents[2]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from maze_curriculum.agent import EpsilonGreedyPolicy, GreedyPolicy, SoftmaxPolicy
from maze_curriculum.analysis import default_complexity
from maze_curriculum.config import TrainingConfig, make_default_paths
from maze_curriculum.criteria import EndStateReached, MaxActionsReached, MaxEpisodesReached
from maze_curriculum.errors import ConfigurationError
from maze_curriculum.operators import DeadEndOperator, ResizeOperator
from maze_curriculum.paths import level_image_path, q_table_path, run_dir
from maze_curriculum.registry import (
    OPERATOR,
    POLICY,
    build_component,
    component_names,
    get_component_spec,
)


def _minimal() -> dict:
    return {
        "exploration_policy": "greedy",
        "episode_stopping_criteria": ["end_state_reached"],
        "level_change_criteria": [{"name": "max_episodes_reached", "number_of_episodes": 3}],
        "maze_operators": ["resize"],
    }


def test_registry_lists_every_policy() -> None:
    assert component_names(POLICY) == [
        "decreasing_epsilon",
        "epsilon_first",
        "epsilon_greedy",
        "greedy",
        "random",
        "softmax",
        "vdbe",
    ]
    assert component_names(OPERATOR) == ["change_optimal_path", "dead_end", "new_path", "resize"]


def test_build_component_merges_defaults() -> None:
    policy = build_component(POLICY, "epsilon_greedy", seed=7)
    assert isinstance(policy, EpsilonGreedyPolicy)
    assert policy.epsilon == 0.1
    assert policy.seed == 7

    operator = build_component(OPERATOR, "DEAD_END", preference=1.0)
    assert isinstance(operator, DeadEndOperator)
    assert operator.preference == 1.0


def test_unknown_component_raises_key_error() -> None:
    with pytest.raises(KeyError):
        get_component_spec(POLICY, "boltzmann")
    with pytest.raises(KeyError):
        get_component_spec("planner", "greedy")


def test_from_dict_builds_components() -> None:
    cfg = TrainingConfig.from_dict(_minimal())
    assert isinstance(cfg.exploration_policy, GreedyPolicy)
    assert cfg.episode_stopping_criteria == [EndStateReached()]
    assert cfg.level_change_criteria == [MaxEpisodesReached(3)]
    assert cfg.maze_operators == [ResizeOperator(1.0, 0)]
    assert cfg.complexity_function is default_complexity
    cfg.validate()


def test_from_dict_accepts_component_mappings() -> None:
    data = _minimal()
    data["exploration_policy"] = {"name": "softmax", "temperature": 0.5, "precision": 20, "seed": 3}
    data["episode_stopping_criteria"] = ["end_state_reached", {"name": "max_actions_reached", "max_actions": 25}]
    data["delta"] = 4.0
    cfg = TrainingConfig.from_dict(data)
    assert isinstance(cfg.exploration_policy, SoftmaxPolicy)
    assert cfg.exploration_policy.precision == 20
    assert cfg.episode_stopping_criteria[1] == MaxActionsReached(25)
    assert cfg.delta == 4.0


@pytest.mark.parametrize(
    "mutate",
    [
        lambda d: d.update(unknown_key=1),
        lambda d: d.pop("maze_operators"),
        lambda d: d.update(exploration_policy="boltzmann"),
        lambda d: d.update(exploration_policy={"epsilon": 0.1}),
        lambda d: d.update(maze_operators="resize"),
        lambda d: d.update(maze_operators=[{"name": "resize", "cost": 1.0}]),
        lambda d: d.update(maze_operators=[{"name": "resize", "cost_per_dimension": 0}]),
        lambda d: d.update(complexity_function="fancy"),
    ],
)
def test_from_dict_rejects_bad_input(mutate) -> None:
    data = _minimal()
    mutate(data)
    with pytest.raises(ConfigurationError):
        TrainingConfig.from_dict(data)


@pytest.mark.parametrize(
    "override",
    [
        {"number_of_levels": 0},
        {"delta": 0.0},
        {"q_learning_alpha": 0.0},
        {"q_learning_gamma": -0.5},
        {"initial_path_length": 1},
        {"number_of_way_colors": 0},
        {"min_wall_way_brightness_difference": 256},
        {"episode_stopping_criteria": []},
    ],
)
def test_validate_rejects_bad_settings(override) -> None:
    cfg = TrainingConfig.from_dict(_minimal())
    for key, value in override.items():
        setattr(cfg, key, value)
    with pytest.raises(ConfigurationError):
        cfg.validate()


def test_example_config_loads() -> None:
    with (_REPO_ROOT / "configs" / "example.yaml").open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    cfg = TrainingConfig.from_dict(data)
    cfg.validate()
    assert cfg.training_name == "example"
    assert len(cfg.maze_operators) == 4
    assert "exploration_policy" not in cfg.scalar_settings()
    assert cfg.scalar_settings()["number_of_levels"] == 4


def test_output_paths(tmp_path: Path) -> None:
    paths = make_default_paths(tmp_path)
    assert paths.outputs_root == tmp_path / "outputs"
    assert run_dir(paths, "demo") == tmp_path / "outputs" / "demo"
    assert level_image_path(paths, "demo", 3) == tmp_path / "outputs" / "demo" / "mazes" / "level_003.png"
    assert q_table_path(paths, "demo").name == "q_table.csv"
    assert make_default_paths(tmp_path, tmp_path / "x").outputs_root == tmp_path / "x"
