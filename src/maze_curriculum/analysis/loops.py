"""Loop and parallel-route detection.

Both searches are depth-first walks over passable cells that never step
straight back to the cell they came from; revisiting a cell that is
still on the current walk closes a cycle. The walks keep an explicit
frame stack instead of recursing, so large mazes do not hit the
interpreter's recursion limit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

from .paths import shortest_path

if TYPE_CHECKING:  # pragma: no cover
    from ..maze.maze import Maze
    from ..maze.node import Node


def _unique(nodes: Iterable["Node"]) -> List["Node"]:
    seen: Set[Node] = set()
    result: List[Node] = []
    for node in nodes:
        if node not in seen:
            seen.add(node)
            result.append(node)
    return result


def loop_nodes(maze: "Maze") -> List["Node"]:
    """All cells lying on any cycle reachable from the start node."""

    found: List[Node] = []
    finished: Set[Node] = set()
    path: List[Node] = [maze.start]
    position: Dict[Node, int] = {maze.start: 0}
    frames: List[Tuple[Node, Iterator[Node], Optional[Node]]] = [
        (maze.start, iter(maze.passable_neighbors(maze.start)), None)
    ]

    while frames:
        node, neighbors, previous = frames[-1]
        for neighbor in neighbors:
            if neighbor == previous or neighbor in finished:
                continue
            if neighbor in position:
                found.extend(path[position[neighbor]:])
                continue
            position[neighbor] = len(path)
            path.append(neighbor)
            frames.append((neighbor, iter(maze.passable_neighbors(neighbor)), node))
            break
        else:
            finished.add(node)
            frames.pop()
            path.pop()
            del position[node]

    return _unique(found)


def _cycles_from(maze: "Maze", origin: "Node", allowed: Set["Node"]) -> List[List["Node"]]:
    cycles: List[List[Node]] = []
    path: List[Node] = [origin]
    position: Dict[Node, int] = {origin: 0}
    frames: List[Tuple[Node, Iterator[Node], Optional[Node]]] = [
        (origin, iter(maze.passable_neighbors(origin)), None)
    ]

    while frames:
        node, neighbors, previous = frames[-1]
        for neighbor in neighbors:
            if neighbor == previous or neighbor not in allowed:
                continue
            if neighbor in position:
                cycles.append(path[position[neighbor]:])
                continue
            position[neighbor] = len(path)
            path.append(neighbor)
            frames.append((neighbor, iter(maze.passable_neighbors(neighbor)), node))
            break
        else:
            frames.pop()
            path.pop()
            del position[node]

    return cycles


def loops(maze: "Maze") -> List[List["Node"]]:
    """All simple cycles of the maze, each reported once."""

    nodes = loop_nodes(maze)
    allowed = set(nodes)
    seen: Set[FrozenSet[Node]] = set()
    result: List[List[Node]] = []
    for origin in nodes:
        for cycle in _cycles_from(maze, origin, allowed):
            key = frozenset(cycle)
            if key not in seen:
                seen.add(key)
                result.append(cycle)
    return result


def parallel_routes(maze: "Maze") -> List[List["Node"]]:
    """Cycles touching the optimal path at two or more distinct cells."""

    on_path = set(shortest_path(maze))
    routes = []
    for cycle in loops(maze):
        touching = sum(
            1 for node in cycle if any(neighbor in on_path for neighbor in maze.passable_neighbors(node))
        )
        if touching >= 2:
            routes.append(cycle)
    return routes


def parallel_route_nodes(maze: "Maze") -> List["Node"]:
    return _unique(node for route in parallel_routes(maze) for node in route)
