"""Scalar difficulty score of a maze.

The default score adds three parts:

* one point per action on the optimal path;
* half a point per parallel-route cell that is not on the optimal path;
* the complexity of every dead-end branch hanging off the optimal path
  or a parallel route. Plain branch cells count one point, junctions
  count three (three exits) or four (four exits) and are weighted up by
  ``exp(0.25 * depth)``, where ``depth`` is the number of junctions met
  earlier on the same branch.
"""

from __future__ import annotations

import math
from collections import deque
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Set

from .loops import parallel_route_nodes
from .paths import shortest_path

if TYPE_CHECKING:  # pragma: no cover
    from ..maze.maze import Maze
    from ..maze.node import Node

ComplexityFunction = Callable[["Maze"], float]

COMPLEXITY_PER_OPTIMAL_ACTION = 1.0
COMPLEXITY_PARALLEL_ROUTE_NODE = 0.5
COMPLEXITY_DEAD_END_NODE = 1.0
COMPLEXITY_THREE_WAY_JUNCTION = 3.0
COMPLEXITY_FOUR_WAY_JUNCTION = 4.0


def default_complexity(maze: "Maze") -> float:
    path = shortest_path(maze)
    route_nodes = parallel_route_nodes(maze)
    return (
        _optimal_path_complexity(path)
        + _parallel_route_complexity(route_nodes, path)
        + _dead_end_complexity(maze, list(dict.fromkeys(path + route_nodes)))
    )


def _optimal_path_complexity(path) -> float:
    return (len(path) - 1) * COMPLEXITY_PER_OPTIMAL_ACTION


def _parallel_route_complexity(route_nodes, path) -> float:
    on_path = set(path)
    return sum(1 for node in route_nodes if node not in on_path) * COMPLEXITY_PARALLEL_ROUTE_NODE


def _dead_end_complexity(maze: "Maze", network: List["Node"]) -> float:
    route_network = set(network)
    complexity = 0.0
    for node in network:
        for neighbor in maze.passable_neighbors(node):
            if neighbor not in route_network:
                complexity += _branch_complexity(maze, neighbor, route_network)
    return complexity


def _branch_complexity(maze: "Maze", start: "Node", ignore: Set["Node"]) -> float:
    """Breadth-first walk of one branch; loops inside it are cut where
    two walks meet."""

    complexity = 0.0
    queue = deque([start])
    visited: Set[Node] = {start}
    depth: Dict[Node, int] = {}
    predecessor: Dict[Node, Optional[Node]] = {start: None}

    while queue:
        node = queue.popleft()
        parent = predecessor[node]
        current_depth = depth[parent] if parent is not None else -1
        exits = len(maze.passable_neighbors(node))
        if exits > 2:
            current_depth += 1
        depth[node] = current_depth
        complexity += _node_complexity(exits, current_depth)

        for neighbor in maze.passable_neighbors(node):
            if neighbor in visited or neighbor in ignore:
                continue
            queue.append(neighbor)
            visited.add(neighbor)
            predecessor[neighbor] = node

    return complexity


def _node_complexity(exits: int, depth: int) -> float:
    factor = math.exp(depth * 0.25)
    if exits == 3:
        return COMPLEXITY_THREE_WAY_JUNCTION * factor
    if exits == 4:
        return COMPLEXITY_FOUR_WAY_JUNCTION * factor
    return COMPLEXITY_DEAD_END_NODE
