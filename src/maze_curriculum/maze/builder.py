"""Initial maze construction."""

from __future__ import annotations

from typing import List

from ..errors import ConfigurationError
from .factory import NodeFactory
from .maze import Maze
from .node import Node


def validate_build_parameters(initial_path_length: int) -> None:
    if initial_path_length < 2:
        raise ConfigurationError("initial_path_length must be at least 2.")


def build_maze(initial_path_length: int, horizontal: bool, node_factory: NodeFactory) -> Maze:
    """Build a straight corridor from start to end, walled in on all sides.

    A horizontal maze is ``3 x (initial_path_length + 2)`` with the start
    at ``(1, 1)`` and the end at ``(1, initial_path_length)``; a vertical
    maze is the transpose.
    """

    validate_build_parameters(initial_path_length)

    start = node_factory.build_start_node()
    end = node_factory.build_end_node()
    length = initial_path_length + 2
    rows, cols = (3, length) if horizontal else (length, 3)

    grid: List[List[Node]] = []
    for x in range(rows):
        row: List[Node] = []
        for y in range(cols):
            # Position along the corridor and across it.
            along, across = (y, x) if horizontal else (x, y)
            if across == 1 and along == 1:
                row.append(start)
            elif across == 1 and along == length - 2:
                row.append(end)
            elif across == 1 and 1 < along < length - 2:
                row.append(node_factory.build_way_node())
            else:
                row.append(node_factory.build_wall_node())
        grid.append(row)
    return Maze(node_factory, grid, start, end)


_PLACEHOLDER = (
    "#####",
    "#PSP#",
    "###P#",
    "#PPP#",
    "#P#P#",
    "#E###",
    "#####",
)


def placeholder_maze(node_factory: NodeFactory) -> Maze:
    """Small fixed 7x5 maze with one dead end, used as a display stand-in."""

    return Maze.from_ascii(node_factory, _PLACEHOLDER)
