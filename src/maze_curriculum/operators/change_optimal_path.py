"""Force a detour by walling off one cell of the optimal path."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

from ..analysis.loops import parallel_route_nodes
from ..analysis.paths import shortest_path, shortest_path_length
from ..errors import ConfigurationError, NoPathError
from ..maze.node import IMPASSABLE_REWARD, NodeType
from .base import MazeOperator

if TYPE_CHECKING:  # pragma: no cover
    from ..maze.maze import Maze
    from ..maze.node import Node


class ChangeOptimalPathOperator(MazeOperator):
    """Block a corridor cell shared by the optimal path and a parallel route.

    Only cells with exactly two passable neighbours qualify, so blocking
    one reroutes the optimal path over the parallel route instead of
    cutting the maze in two. Cost is the resulting increase in optimal
    path length times ``cost_per_increase``.
    """

    def __init__(self, cost_per_increase: float, seed: int) -> None:
        if cost_per_increase <= 0:
            raise ConfigurationError("cost_per_increase must be greater than 0.")
        super().__init__(seed)
        self.cost_per_increase = float(cost_per_increase)
        self.node_to_block: Optional[Node] = None

    def parameters(self) -> Dict[str, object]:
        return {"cost_per_increase": self.cost_per_increase, "seed": self.seed}

    def describe_change(self) -> str:
        return f"Change optimal path (block {self.node_to_block!r})"

    def change_maze(self, maze: "Maze") -> bool:
        if self.node_to_block is None:
            return False
        maze.node_factory.change_node_to_type(self.node_to_block, NodeType.IMPASSABLE)
        self.node_to_block = None
        return True

    def estimate_cost(self, maze: "Maze", allowed_cost: float) -> float:
        self.node_to_block = None

        route_nodes = set(parallel_route_nodes(maze))
        blockable = [
            node
            for node in shortest_path(maze)
            if node in route_nodes and len(maze.passable_neighbors(node)) == 2
        ]
        self.random.shuffle(blockable)

        for node in blockable:
            increase = self.length_increase(maze, node)
            cost = increase * self.cost_per_increase
            if cost <= allowed_cost and increase > 0:
                self.node_to_block = node
                return cost
        return 0.0

    @staticmethod
    def length_increase(maze: "Maze", node: "Node") -> float:
        """How much longer the optimal path gets if ``node`` is blocked.

        The node is blocked only provisionally; its type, reward and colour
        are restored afterwards.
        """

        if node == maze.start or node == maze.end:
            return float("inf")

        before = shortest_path_length(maze)
        saved = (node.node_type, node.reward)
        node.set_type(NodeType.IMPASSABLE, IMPASSABLE_REWARD)
        try:
            after = shortest_path_length(maze)
        except NoPathError:
            return float("inf")
        finally:
            node.set_type(*saved)
        return float(after - before)
