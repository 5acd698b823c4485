"""Grow the maze to the right and downwards.

The end node always sits next to the bottom-right corner. Growing the
grid turns the old end into a way node and extends a straight corridor
into the new columns (then the new rows) with the end node moved to its
far side. Every other new cell is a wall.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional

from ..errors import ConfigurationError, InvalidMazeError
from ..maze.node import NodeType
from .base import MazeOperator

if TYPE_CHECKING:  # pragma: no cover
    from ..maze.maze import Maze
    from ..maze.node import Node

Grid = List[List[Optional["Node"]]]


def _existing(grid: Grid, x: int, y: int) -> "Node":
    node = grid[x][y]
    if node is None:
        raise InvalidMazeError(f"No node at ({x}, {y}) next to the end node.")
    return node


class ResizeOperator(MazeOperator):
    """Cost is ``(rows added + columns added) * cost_per_dimension``.

    Nothing is staged for mazes whose end node is not at
    ``(rows - 2, cols - 2)``.
    """

    def __init__(self, cost_per_dimension: float, seed: int) -> None:
        if cost_per_dimension <= 0:
            raise ConfigurationError("cost_per_dimension must be greater than 0.")
        super().__init__(seed)
        self.cost_per_dimension = float(cost_per_dimension)
        self.x_increase = 0
        self.y_increase = 0

    def parameters(self) -> Dict[str, object]:
        return {"cost_per_dimension": self.cost_per_dimension, "seed": self.seed}

    def describe_change(self) -> str:
        return f"Resize (rows += {self.x_increase}, cols += {self.y_increase})"

    def estimate_cost(self, maze: "Maze", allowed_cost: float) -> float:
        max_increase = int(allowed_cost / self.cost_per_dimension)
        if max_increase <= 0 or maze.end.position != (maze.rows - 2, maze.cols - 2):
            self.x_increase = 0
            self.y_increase = 0
            return 0.0

        total = 1 + self.random.randrange(max_increase)
        # Which dimension gets its share drawn first.
        if self.random.randrange(2) == 0:
            self.x_increase = 1 + self.random.randrange(total)
            rest = total - self.x_increase
            self.y_increase = 0 if rest == 0 else 1 + self.random.randrange(rest)
        else:
            self.y_increase = 1 + self.random.randrange(total)
            rest = total - self.y_increase
            self.x_increase = 0 if rest == 0 else 1 + self.random.randrange(rest)
        return total * self.cost_per_dimension

    def change_maze(self, maze: "Maze") -> bool:
        if self.x_increase == 0 and self.y_increase == 0:
            return False

        old_rows, old_cols = maze.rows, maze.cols
        grid: Grid = [[None] * (old_cols + self.y_increase) for _ in range(old_rows + self.x_increase)]
        for x in range(old_rows):
            for y in range(old_cols):
                grid[x][y] = maze.node_at(x, y)

        self._extend_columns(maze, grid)
        self._extend_rows(maze, grid)
        maze.replace_grid(grid)  # type: ignore[arg-type]

        self.x_increase = 0
        self.y_increase = 0
        return True

    def _extend_columns(self, maze: "Maze", grid: Grid) -> None:
        if self.y_increase <= 0:
            return
        factory = maze.node_factory
        old_end = maze.end
        ex, ey = old_end.x, old_end.y
        cols = len(grid[0])

        factory.change_node_to_type(old_end, NodeType.PASSABLE)
        right = _existing(grid, ex, ey + 1)
        factory.change_node_to_type(right, NodeType.PASSABLE)
        if self.y_increase == 1:
            factory.change_node_to_end(right)
            maze.end = right

        for x in range(ex + 2):
            for y in range(ey + 2, cols):
                if x == ex and y == cols - 2:
                    node = factory.build_end_node()
                    maze.end = node
                elif x == ex and y != cols - 1:
                    node = factory.build_way_node()
                else:
                    node = factory.build_wall_node()
                node.x, node.y = x, y
                grid[x][y] = node

    def _extend_rows(self, maze: "Maze", grid: Grid) -> None:
        if self.x_increase <= 0:
            return
        factory = maze.node_factory
        old_end = maze.end
        ex, ey = old_end.x, old_end.y
        rows = len(grid)

        factory.change_node_to_type(old_end, NodeType.PASSABLE)
        below = _existing(grid, ex + 1, ey)
        factory.change_node_to_type(below, NodeType.PASSABLE)
        if self.x_increase == 1:
            factory.change_node_to_end(below)
            maze.end = below

        for x in range(ex + 2, rows):
            for y in range(ey + 2):
                if x == rows - 2 and y == ey:
                    node = factory.build_end_node()
                    maze.end = node
                elif x != rows - 1 and y == ey:
                    node = factory.build_way_node()
                else:
                    node = factory.build_wall_node()
                node.x, node.y = x, y
                grid[x][y] = node
