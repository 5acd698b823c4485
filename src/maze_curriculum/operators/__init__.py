"""Budgeted maze operators used to build the next curriculum level."""

from .base import MazeOperator, is_valid_new_way, is_valid_path_end
from .change_optimal_path import ChangeOptimalPathOperator
from .dead_end import DeadEndOperator
from .new_path import NewPathOperator
from .resize import ResizeOperator

__all__ = [
    "ChangeOptimalPathOperator",
    "DeadEndOperator",
    "MazeOperator",
    "NewPathOperator",
    "ResizeOperator",
    "is_valid_new_way",
    "is_valid_path_end",
]
