"""Command-line entrypoint for curriculum maze training."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..config import TrainingConfig, make_default_paths
from ..errors import ConfigurationError, CurriculumExhaustedError
from ..paths import level_image_path, q_table_path, run_dir
from ..rendering import save_maze_image
from ..training import EventRecorder, LoggingEventSink, MultiSink, Training
from ..training.events import TRAINING_ABORTED
from ..training.records import LevelRecord


def _load_config(path: Path) -> Dict[str, Any]:
    """Load a YAML training config file."""

    if not path.is_file():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML config at {path} must contain a mapping at the top level.")
    return data


def _print_summary(cfg: TrainingConfig, out_dir: Path) -> None:
    print("[maze_curriculum] Training configuration:")
    for key, value in cfg.scalar_settings().items():
        print(f"  {key:<36}: {value}")
    print(f"  {'exploration_policy':<36}: {cfg.exploration_policy!r}")
    print(f"  {'episode_stopping_criteria':<36}: {[c.label for c in cfg.episode_stopping_criteria]}")
    print(f"  {'level_change_criteria':<36}: {[c.label for c in cfg.level_change_criteria]}")
    print(f"  {'maze_operators':<36}: {cfg.maze_operators!r}")
    print(f"  {'output':<36}: {out_dir}")


def _print_levels(records: List[LevelRecord]) -> None:
    print("[maze_curriculum] Levels:")
    print(f"  {'level':>5} {'size':>7} {'optimal':>8} {'episodes':>9} {'avg actions':>12} {'complexity':>11}")
    for record in records:
        size = f"{record.maze.rows}x{record.maze.cols}"
        print(
            f"  {record.level:>5} {size:>7} {record.optimal_actions:>8} {len(record.episodes):>9} "
            f"{record.average_actions:>12.2f} {record.complexity:>11.2f}"
        )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Train a Q-learning agent on a growing maze curriculum")
    parser.add_argument("--config", type=str, required=True, help="YAML config file describing the run")
    parser.add_argument("--levels", type=int, default=None, help="Override number_of_levels")
    parser.add_argument("--seed", type=int, default=None, help="Override change_maze_seed")
    parser.add_argument("--output", type=str, default=None, help="Output root (default: ./outputs)")
    parser.add_argument("--plot", action="store_true", help="Write one PNG per level")
    parser.add_argument("--q-table", action="store_true", help="Write the final Q-table as CSV")
    parser.add_argument(
        "--log-level",
        type=str,
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging level for training events",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    cfg_data = _load_config(Path(args.config))

    # CLI flags take precedence over YAML values.
    if args.levels is not None:
        cfg_data["number_of_levels"] = args.levels
    if args.seed is not None:
        cfg_data["change_maze_seed"] = args.seed

    project_root = Path.cwd()
    outputs_root = Path(args.output) if args.output is not None else None
    paths = make_default_paths(project_root, outputs_root)

    recorder = EventRecorder()
    try:
        cfg = TrainingConfig.from_dict(cfg_data)
        training = Training(cfg, event_sink=MultiSink(LoggingEventSink(), recorder))
    except ConfigurationError as exc:
        parser.error(str(exc))

    out_dir = run_dir(paths, cfg.training_name)
    _print_summary(cfg, out_dir)

    status = 0
    try:
        training.run()
    except CurriculumExhaustedError as exc:
        print(f"[maze_curriculum] Training aborted at level {training.level}: {exc}")
        status = 1

    records = training.records
    _print_levels(records)
    if not recorder.of_kind(TRAINING_ABORTED):
        print(f"[maze_curriculum] Training complete after {len(records)} level(s).")

    if args.plot:
        for record in records:
            image = save_maze_image(
                record.maze,
                level_image_path(paths, cfg.training_name, record.level),
                highlight=record.maze.shortest_path(),
                title=f"Level {record.level} (complexity {record.complexity:.2f})",
            )
            print(f"[maze_curriculum] Wrote {image}")

    if args.q_table:
        csv_path = q_table_path(paths, cfg.training_name)
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        with csv_path.open("w", encoding="utf-8", newline="") as f:
            training.agent.q_table.write_csv(f)
        print(f"[maze_curriculum] Wrote {csv_path}")

    return status


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
