"""Shortest-path queries over the passable part of a maze.

Edge cost is the negated reward of the node being entered, so with the
usual negative step rewards the optimal path is also the one that
maximises the collected reward. The search stops as soon as the end
node is relaxed; operators re-run it on every cost estimate.
"""

from __future__ import annotations

import heapq
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from ..errors import NoPathError

if TYPE_CHECKING:  # pragma: no cover
    from ..maze.maze import Maze
    from ..maze.node import Node


def dijkstra(maze: "Maze", start: "Node", end: "Node") -> Dict["Node", "Node"]:
    """Return the predecessor map of a Dijkstra search from ``start``.

    Among unvisited nodes with equal distance the one that comes first
    in row-major order is expanded first.

    Raises
    ------
    NoPathError
        If ``end`` cannot be reached from ``start``.
    """

    cols = maze.cols
    distances: Dict[Node, float] = {start: 0.0}
    predecessors: Dict[Node, Node] = {}
    visited = set()
    frontier: List[Tuple[float, int, Node]] = [(0.0, start.x * cols + start.y, start)]

    while frontier:
        dist, _, u = heapq.heappop(frontier)
        if u in visited:
            continue
        visited.add(u)

        for v in maze.passable_neighbors(u):
            if v in visited:
                continue
            alternative = dist - v.reward
            if alternative < distances.get(v, float("inf")):
                distances[v] = alternative
                predecessors[v] = u
                heapq.heappush(frontier, (alternative, v.x * cols + v.y, v))
            if v == end:
                return predecessors

    raise NoPathError(f"There is no path from {start!r} to {end!r}.")


def shortest_path(maze: "Maze", start: Optional["Node"] = None, end: Optional["Node"] = None) -> List["Node"]:
    """Nodes of the optimal path, ``start`` and ``end`` included."""

    start = maze.start if start is None else start
    end = maze.end if end is None else end
    if start == end:
        return [start]

    predecessors = dijkstra(maze, start, end)
    path = [end]
    node = end
    while node in predecessors:
        node = predecessors[node]
        path.append(node)
    path.reverse()
    return path


def shortest_path_length(maze: "Maze", start: Optional["Node"] = None, end: Optional["Node"] = None) -> int:
    """Number of actions needed along the optimal path."""

    return len(shortest_path(maze, start, end)) - 1


def optimal_reward(maze: "Maze") -> float:
    """Reward collected on the optimal path (the start cell is not entered)."""

    return sum(node.reward for node in shortest_path(maze)[1:])
