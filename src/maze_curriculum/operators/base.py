"""Common protocol and helpers for maze operators.

Every operator works in two phases. :meth:`MazeOperator.estimate_cost`
searches for a change that fits the budget and stages it, returning its
cost (``0`` when nothing fits). :meth:`MazeOperator.change_maze` then
applies the staged change and clears it. Calling ``change_maze``
without a staged change is a no-op that returns ``False``.
"""

from __future__ import annotations

import abc
import random
from typing import TYPE_CHECKING, Collection, Dict, Iterable

if TYPE_CHECKING:  # pragma: no cover
    from ..maze.maze import Maze
    from ..maze.node import Node


class MazeOperator(abc.ABC):
    """Budgeted, randomised maze mutation."""

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self.random = random.Random(seed)

    @abc.abstractmethod
    def estimate_cost(self, maze: "Maze", allowed_cost: float) -> float:
        """Stage a change costing at most ``allowed_cost``; return its cost."""

    @abc.abstractmethod
    def change_maze(self, maze: "Maze") -> bool:
        """Apply the staged change. Return ``False`` if none was staged."""

    def describe_change(self) -> str:
        """Short human-readable description of the staged change."""

        return type(self).__name__

    def parameters(self) -> Dict[str, object]:
        return {"seed": self.seed}

    def __repr__(self) -> str:
        args = ", ".join(f"{key}={value!r}" for key, value in self.parameters().items())
        return f"{type(self).__name__}({args})"

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.parameters() == other.parameters()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, tuple(self.parameters().items())))


def is_valid_new_way(
    node: "Node",
    predecessor: "Node",
    visited: Collection["Node"],
    maze: "Maze",
    allow_passable_neighbors: bool = False,
) -> bool:
    """Whether ``node`` may be carved as the next cell after ``predecessor``.

    The node must be an unvisited wall cell off the border, adjacent to an
    already visited ``predecessor``. None of its other direct neighbours
    may be visited, nor passable unless ``allow_passable_neighbors`` is set.
    """

    if node in visited or node.is_passable:
        return False
    neighbors = maze.direct_neighbors(node)
    if predecessor not in neighbors:
        return False
    if maze.is_border(node):
        return False
    for neighbor in neighbors:
        if neighbor == predecessor:
            continue
        if neighbor.is_passable and not allow_passable_neighbors:
            return False
        if neighbor in visited:
            return False
    return predecessor in visited


def is_valid_path_end(
    node: "Node",
    predecessor: "Node",
    visited: Collection["Node"],
    maze: "Maze",
    targets: Iterable["Node"],
) -> bool:
    """Whether ``node`` can close a new corridor onto one of ``targets``.

    Besides ``predecessor`` the node must have exactly one passable
    neighbour, and that neighbour has to be one of ``targets``.
    """

    if not is_valid_new_way(node, predecessor, visited, maze, allow_passable_neighbors=True):
        return False
    others = [n for n in maze.passable_neighbors(node) if n != predecessor]
    return len(others) == 1 and others[0] in set(targets)
