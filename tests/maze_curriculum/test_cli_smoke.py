import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest
import yaml

# Ensure src is importable as package root for maze_curriculum
_REPO_ROOT = Path(__file__).resolve().parents[2]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from maze_curriculum.cli.train_cli import main


def _write_config(tmp_path: Path, **overrides) -> Path:
    data = {
        "training_name": "smoke",
        "exploration_policy": {"name": "epsilon_greedy", "epsilon": 0.2, "seed": 1},
        "episode_stopping_criteria": ["end_state_reached", {"name": "max_actions_reached", "max_actions": 100}],
        "level_change_criteria": [{"name": "max_episodes_reached", "number_of_episodes": 3}],
        "maze_operators": [{"name": "resize", "cost_per_dimension": 1.0, "seed": 2}],
        "number_of_levels": 2,
        "delta": 2.0,
        "initial_path_length": 3,
    }
    data.update(overrides)
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


@pytest.mark.smoke
def test_train_cli_writes_artefacts(tmp_path: Path, capsys) -> None:
    """Run a two-level curriculum end to end and check the written files."""

    config = _write_config(tmp_path)
    out = tmp_path / "out"

    status = main(["--config", str(config), "--output", str(out), "--plot", "--q-table"])

    assert status == 0
    assert (out / "smoke" / "mazes" / "level_001.png").is_file()
    assert (out / "smoke" / "mazes" / "level_002.png").is_file()
    csv_text = (out / "smoke" / "q_table.csv").read_text(encoding="utf-8")
    assert csv_text.startswith("State;Up;Right;Down;Left")

    stdout = capsys.readouterr().out
    assert "[maze_curriculum] Training complete after 2 level(s)." in stdout


@pytest.mark.smoke
def test_train_cli_level_override(tmp_path: Path, capsys) -> None:
    config = _write_config(tmp_path)
    status = main(["--config", str(config), "--output", str(tmp_path / "out"), "--levels", "1"])
    assert status == 0
    assert "Training complete after 1 level(s)." in capsys.readouterr().out
    assert not (tmp_path / "out" / "smoke" / "mazes").exists()


@pytest.mark.smoke
def test_train_cli_reports_exhausted_curriculum(tmp_path: Path, capsys) -> None:
    config = _write_config(tmp_path, maze_operators=["change_optimal_path"])
    status = main(["--config", str(config), "--output", str(tmp_path / "out")])
    assert status == 1
    assert "Training aborted at level 1" in capsys.readouterr().out


@pytest.mark.smoke
def test_train_cli_rejects_bad_config(tmp_path: Path) -> None:
    config = _write_config(tmp_path, exploration_policy="boltzmann")
    with pytest.raises(SystemExit):
        main(["--config", str(config)])
