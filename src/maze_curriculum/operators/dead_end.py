"""Carve a dead-end branch off an existing passable cell."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Deque, Dict, List, Optional

from ..analysis.loops import parallel_route_nodes
from ..analysis.paths import shortest_path
from ..errors import ConfigurationError
from ..maze.node import NodeType
from .base import MazeOperator, is_valid_new_way

if TYPE_CHECKING:  # pragma: no cover
    from ..maze.maze import Maze
    from ..maze.node import Node

NUM_OF_DEAD_ENDS_TO_FIND = 20


class DeadEndOperator(MazeOperator):
    """Randomised depth-first carving of a branch with no far-end exit.

    Branch roots are drawn either from the optimal path and parallel
    routes, or from the remaining passable cells. When both pools are
    non-empty, a root comes from the optimal/parallel pool with
    probability ``preference`` (more precisely, when a uniform draw is
    below it).
    """

    def __init__(
        self,
        min_path_len: int,
        max_path_len: int,
        cost_per_node: float,
        preference: float,
        seed: int,
    ) -> None:
        if cost_per_node <= 0:
            raise ConfigurationError("cost_per_node must be greater than 0.")
        if not 0 <= preference <= 1:
            raise ConfigurationError("preference must be in [0, 1].")
        if min_path_len < 0 or max_path_len < min_path_len:
            raise ConfigurationError("Need 0 <= min_path_len <= max_path_len.")
        super().__init__(seed)
        self.min_path_len = min_path_len
        self.max_path_len = max_path_len
        self.cost_per_node = float(cost_per_node)
        self.preference = float(preference)
        self.dead_end: Optional[List[Node]] = None

    def parameters(self) -> Dict[str, object]:
        return {
            "min_path_len": self.min_path_len,
            "max_path_len": self.max_path_len,
            "cost_per_node": self.cost_per_node,
            "preference": self.preference,
            "seed": self.seed,
        }

    def describe_change(self) -> str:
        return f"Dead end (length = {len(self.dead_end or ())})"

    def change_maze(self, maze: "Maze") -> bool:
        if not self.dead_end:
            self.dead_end = None
            return False
        for node in self.dead_end:
            maze.node_factory.change_node_to_type(node, NodeType.PASSABLE)
        self.dead_end = None
        return True

    def estimate_cost(self, maze: "Maze", allowed_cost: float) -> float:
        self.dead_end = None
        if self.min_path_len * self.cost_per_node > allowed_cost:
            return 0.0

        this_max = min(int(allowed_cost / self.cost_per_node), self.max_path_len)

        preferred = [n for n in dict.fromkeys(shortest_path(maze) + parallel_route_nodes(maze)) if n != maze.end]
        preferred_set = set(preferred)
        others = [n for n in maze.passable_nodes() if n != maze.end and n not in preferred_set]
        self.random.shuffle(others)
        self.random.shuffle(preferred)
        other_pool: Deque[Node] = deque(others)
        preferred_pool: Deque[Node] = deque(preferred)

        candidates: List[List[Node]] = []
        while (other_pool or preferred_pool) and len(candidates) < NUM_OF_DEAD_ENDS_TO_FIND:
            if not other_pool:
                root = preferred_pool.popleft()
            elif not preferred_pool:
                root = other_pool.popleft()
            elif self.random.random() >= self.preference:
                root = other_pool.popleft()
            else:
                root = preferred_pool.popleft()

            branch = self.search_from(root, maze, this_max)
            # Empty branches would cost nothing and change nothing.
            if branch and len(branch) >= self.min_path_len:
                candidates.append(branch)

        if not candidates:
            return 0.0
        self.dead_end = candidates[self.random.randrange(len(candidates))]
        return len(self.dead_end) * self.cost_per_node

    def search_from(self, root: "Node", maze: "Maze", max_len: int) -> List["Node"]:
        visited: List[Node] = [root]
        branch = [node for node in self._search(root, visited, maze, -1, max_len) if node != root]
        if len(branch) < self.min_path_len:
            return []
        return branch

    def _search(self, start: "Node", visited: List["Node"], maze: "Maze", depth: int, max_len: int) -> List["Node"]:
        if depth == max_len:
            return []
        visited.append(start)

        neighbors = maze.direct_neighbors(start)
        self.random.shuffle(neighbors)
        branches: List[List[Node]] = []
        for node in neighbors:
            if node not in visited and is_valid_new_way(node, start, visited, maze):
                branch = self._search(node, visited, maze, depth + 1, max_len)
                branches.append(branch)
                if len(branch) == max_len:
                    break

        if branches:
            return [start] + max(branches, key=len)
        return [start]
