import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[2]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from maze_curriculum.analysis import (
    default_complexity,
    loop_nodes,
    loops,
    optimal_reward,
    parallel_route_nodes,
    parallel_routes,
    shortest_path,
    shortest_path_length,
)
from maze_curriculum.errors import NoPathError
from maze_curriculum.maze import Maze, NodeFactory

PARALLEL_ROUTE_MAZE = [
    "######",
    "#S####",
    "#PPPE#",
    "#P#P##",
    "#PPP##",
    "######",
]

LOOP_POSITIONS = {(2, 1), (2, 2), (2, 3), (3, 3), (4, 3), (4, 2), (4, 1), (3, 1)}


def _maze(rows) -> Maze:
    return Maze.from_ascii(NodeFactory(-0.05, 0, 1, 1, 0, 0, 0, 0, 200), rows)


def test_shortest_path_on_parallel_route_maze() -> None:
    maze = _maze(PARALLEL_ROUTE_MAZE)
    path = shortest_path(maze)
    assert [n.position for n in path] == [(1, 1), (2, 1), (2, 2), (2, 3), (2, 4)]
    assert shortest_path_length(maze) == 4
    assert maze.shortest_path_length() == 4
    assert optimal_reward(maze) == pytest.approx(-0.15)


def test_shortest_path_between_explicit_nodes() -> None:
    maze = _maze(PARALLEL_ROUTE_MAZE)
    start = maze.node_at(4, 1)
    assert shortest_path_length(maze, start, maze.end) == 4
    assert shortest_path(maze, start, start) == [start]


def test_unreachable_end_raises() -> None:
    maze = _maze(["#####", "#S#E#", "#####"])
    with pytest.raises(NoPathError):
        shortest_path(maze)


def test_corridor_has_no_loops() -> None:
    maze = _maze(["#######", "#SPPPE#", "#######"])
    assert loop_nodes(maze) == []
    assert loops(maze) == []
    assert parallel_routes(maze) == []


def test_loop_detection() -> None:
    maze = _maze(PARALLEL_ROUTE_MAZE)
    assert {n.position for n in loop_nodes(maze)} == LOOP_POSITIONS

    cycles = loops(maze)
    assert len(cycles) == 1
    assert {n.position for n in cycles[0]} == LOOP_POSITIONS


def test_parallel_routes_touch_optimal_path() -> None:
    maze = _maze(PARALLEL_ROUTE_MAZE)
    routes = parallel_routes(maze)
    assert len(routes) == 1
    assert {n.position for n in parallel_route_nodes(maze)} == LOOP_POSITIONS


def test_loop_away_from_optimal_path_is_not_a_parallel_route() -> None:
    """A cycle reached through a side corridor is a detour, not a route."""

    maze = _maze(
        [
            "#######",
            "#SPPPE#",
            "###P###",
            "##PPP##",
            "##P#P##",
            "##PPP##",
            "#######",
        ]
    )
    assert len(loops(maze)) == 1
    assert parallel_routes(maze) == []


def test_complexity_of_corridor_is_its_length() -> None:
    maze = _maze(["#######", "#SPPPE#", "#######"])
    assert default_complexity(maze) == pytest.approx(4.0)


def test_complexity_counts_parallel_route_cells() -> None:
    # 4 optimal actions + 5 route cells off the path at 0.5 each
    maze = _maze(PARALLEL_ROUTE_MAZE)
    assert default_complexity(maze) == pytest.approx(6.5)


def test_complexity_counts_dead_end_cells() -> None:
    maze = _maze(["#####", "#SPE#", "##P##", "##P##", "#####"])
    assert default_complexity(maze) == pytest.approx(2.0 + 2.0)


def test_complexity_weights_junctions() -> None:
    maze = _maze(["#######", "#SPPPE#", "###P###", "##PPP##", "#######"])
    # 4 optimal actions, branch: corridor cell 1, three-way junction 3,
    # two dead-end tips 1 each
    assert default_complexity(maze) == pytest.approx(4.0 + 1.0 + 3.0 + 1.0 + 1.0)
