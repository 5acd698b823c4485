"""Path helpers for maze curriculum runs.

All writeable paths are rooted under ``PathConfig.outputs_root`` and
grouped per training name.
"""

from __future__ import annotations

from pathlib import Path

from .config import PathConfig


def run_dir(paths: PathConfig, training_name: str) -> Path:
    """Return the directory holding every artefact of one run."""

    return paths.outputs_root / training_name


def level_image_path(paths: PathConfig, training_name: str, level: int) -> Path:
    """Return the PNG path for the maze of ``level``."""

    return run_dir(paths, training_name) / "mazes" / f"level_{level:03d}.png"


def q_table_path(paths: PathConfig, training_name: str) -> Path:
    return run_dir(paths, training_name) / "q_table.csv"
