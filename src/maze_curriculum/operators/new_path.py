"""Carve an alternative corridor between two cells of the optimal path.

A randomised depth-first search starts next to a cell of the optimal
path and tunnels through walls. A candidate corridor is only kept when
both of its ends border the optimal path and it is strictly longer than
the current shortest connection between those two border cells, so
adding it never shortens the optimal path.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional, Set

from ..analysis.paths import shortest_path
from ..errors import ConfigurationError
from ..maze.node import NodeType
from .base import MazeOperator, is_valid_new_way, is_valid_path_end

if TYPE_CHECKING:  # pragma: no cover
    from ..maze.maze import Maze
    from ..maze.node import Node

NUM_OF_PATHS_TO_FIND = 20


class NewPathOperator(MazeOperator):
    def __init__(self, min_path_len: int, max_path_len: int, cost_per_node: float, seed: int) -> None:
        if cost_per_node <= 0:
            raise ConfigurationError("cost_per_node must be greater than 0.")
        if min_path_len <= 3:
            raise ConfigurationError("min_path_len must be greater than 3.")
        if max_path_len < min_path_len:
            raise ConfigurationError("max_path_len must be greater than or equal to min_path_len.")
        super().__init__(seed)
        self.min_path_len = min_path_len
        self.max_path_len = max_path_len
        self.cost_per_node = float(cost_per_node)
        self.path: Optional[List[Node]] = None

    def parameters(self) -> Dict[str, object]:
        return {
            "min_path_len": self.min_path_len,
            "max_path_len": self.max_path_len,
            "cost_per_node": self.cost_per_node,
            "seed": self.seed,
        }

    def describe_change(self) -> str:
        return f"New path (length = {len(self.path or ())})"

    def change_maze(self, maze: "Maze") -> bool:
        if not self.path:
            self.path = None
            return False
        for node in self.path:
            maze.node_factory.change_node_to_type(node, NodeType.PASSABLE)
        self.path = None
        return True

    def estimate_cost(self, maze: "Maze", allowed_cost: float) -> float:
        self.path = None
        if self.min_path_len * self.cost_per_node > allowed_cost:
            return 0.0

        this_max = min(int(allowed_cost / self.cost_per_node), self.max_path_len)
        optimal = shortest_path(maze)
        on_path = set(optimal)
        origins = list(optimal)
        self.random.shuffle(origins)

        candidates: List[List[Node]] = []
        for origin in origins:
            path = self.search_from(origin, maze, this_max, on_path)
            if self.min_path_len <= len(path) <= self.max_path_len:
                first = self._connector(path[0], maze, on_path)
                last = self._connector(path[-1], maze, on_path)
                if first is not None and last is not None:
                    if len(path) > len(shortest_path(maze, first, last)):
                        candidates.append(path)
            if len(candidates) >= NUM_OF_PATHS_TO_FIND:
                break

        if not candidates:
            return 0.0
        self.path = candidates[self.random.randrange(len(candidates))]
        return len(self.path) * self.cost_per_node

    def search_from(self, origin: "Node", maze: "Maze", max_len: int, on_path: Set["Node"]) -> List["Node"]:
        """Corridor cells found from ``origin`` (which itself is excluded).

        Returns an empty list when the corridor is shorter than
        ``min_path_len``.
        """

        visited: List[Node] = []
        path = self._search(origin, visited, maze, 0, max_len, on_path)
        path = [node for node in path if node != origin]
        if len(path) < self.min_path_len:
            return []
        return path

    def _search(
        self,
        start: "Node",
        visited: List["Node"],
        maze: "Maze",
        depth: int,
        max_len: int,
        on_path: Set["Node"],
    ) -> List["Node"]:
        # ``visited`` is shared by the whole search, failed branches included.
        visited.append(start)

        neighbors = maze.direct_neighbors(start)
        self.random.shuffle(neighbors)
        branches: List[List[Node]] = []
        for node in neighbors:
            if depth < max_len - 1 and node not in visited and is_valid_new_way(node, start, visited, maze):
                branch = self._search(node, visited, maze, depth + 1, max_len, on_path)
                branches.append(branch)
                if len(branch) == max_len:
                    break

        if not branches:
            if depth + 1 < self.min_path_len:
                return []
            for node in maze.direct_neighbors(start):
                if is_valid_path_end(node, start, visited, maze, on_path):
                    return [start, node]
            return []

        longest = max(branches, key=len)
        if not longest:
            return []
        return [start] + longest

    @staticmethod
    def _connector(node: "Node", maze: "Maze", on_path: Set["Node"]) -> Optional["Node"]:
        for neighbor in maze.direct_neighbors(node):
            if neighbor in on_path:
                return neighbor
        return None
