import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[2]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from maze_curriculum.agent import Action, Agent, GreedyPolicy
from maze_curriculum.maze import Maze, NodeFactory, build_maze


def _factory() -> NodeFactory:
    return NodeFactory(-0.05, 0, 1, 1, 0, 0, 0, 0, 200)


def _two_cell_maze() -> Maze:
    """3x3 maze whose only passable cells are the centre and its right
    neighbour, with rewards -4 and -5."""

    factory = _factory()
    grid = [[factory.build_wall_node() for _ in range(3)] for _ in range(3)]
    center = factory.build_start_node(-4.0)
    right = factory.build_way_node(-5.0)
    grid[1][1] = center
    grid[1][2] = right
    return Maze(factory, grid, center, right)


def test_create_actions_lists_passable_moves() -> None:
    maze = build_maze(4, True, _factory())
    agent = Agent(maze, GreedyPolicy(0), 0.1, 0.9, 0.0)
    assert agent.create_actions(maze.start) == [Action.RIGHT]
    assert agent.create_actions(maze.node_at(1, 2)) == [Action.RIGHT, Action.LEFT]
    assert agent.create_actions(maze.node_at(0, 0)) == []


def test_q_learning_update_sequence() -> None:
    """With alpha = gamma = 1 each update equals reward + max Q(next)."""

    maze = _two_cell_maze()
    agent = Agent(maze, GreedyPolicy(12345), 1.0, 1.0, 0.0)
    center_state = maze.state_of(maze.start)
    right_state = maze.state_of(maze.end)
    assert center_state != right_state

    assert agent.do_action() is Action.RIGHT
    assert agent.q_table.get(center_state, Action.RIGHT) == -5.0
    assert agent.q_table.get(right_state, Action.LEFT) == 0.0

    assert agent.do_action() is Action.LEFT
    assert agent.q_table.get(right_state, Action.LEFT) == -9.0

    assert agent.do_action() is Action.RIGHT
    assert agent.q_table.get(center_state, Action.RIGHT) == -14.0

    assert agent.actions_taken == 3
    assert agent.total_reward == -14.0
    assert agent.position == maze.end


def test_learning_rate_and_discount_are_applied() -> None:
    maze = _two_cell_maze()
    agent = Agent(maze, GreedyPolicy(0), 0.5, 0.5, 1.0)
    agent.do_action()
    # 1 + 0.5 * (-5 + 0.5 * 1 - 1)
    assert agent.q_table.get(maze.state_of(maze.start), Action.RIGHT) == pytest.approx(-1.75)


def test_reset_for_episode_keeps_q_table() -> None:
    maze = build_maze(4, True, _factory())
    agent = Agent(maze, GreedyPolicy(0), 0.1, 0.9, 0.0)
    agent.do_action()
    agent.do_action()
    entries = len(agent.q_table)

    other = maze.copy()
    agent.reset_for_episode(other)
    assert agent.maze is other
    assert agent.position is other.start
    assert agent.actions_taken == 0
    assert agent.total_reward == 0.0
    assert len(agent.q_table) == entries

    agent.reset_q_table()
    assert len(agent.q_table) == 0
