"""Single maze cells.

A :class:`Node` is a plain record: position, type, reward and colour.
It deliberately holds no reference to the maze it lives in; all
neighbourhood queries go through :class:`~maze_curriculum.maze.maze.Maze`,
which owns the grid and does the index arithmetic.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple

Color = Tuple[int, int, int]

IMPASSABLE_REWARD = float("-inf")


class NodeType(Enum):
    PASSABLE = "PASSABLE"
    IMPASSABLE = "IMPASSABLE"

    @property
    def letter(self) -> str:
        """One-letter code used in state strings and text renderings."""

        return self.value[0]


# Marker used for Moore neighbours that fall outside the grid.
BORDER_MARKER = NodeType.IMPASSABLE.letter


class Node:
    """One cell of a maze.

    Equality and hashing use the grid position only, so a node compares
    equal to its counterpart in a copied maze.
    """

    __slots__ = ("x", "y", "node_type", "reward", "color")

    def __init__(self, node_type: NodeType, reward: float, color: Color, x: int = -1, y: int = -1) -> None:
        self.node_type = node_type
        self.reward = reward
        self.color = color
        self.x = x
        self.y = y

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def is_passable(self) -> bool:
        return self.node_type is NodeType.PASSABLE

    def set_type(self, node_type: NodeType, reward: float) -> None:
        self.node_type = node_type
        self.reward = reward

    def describe(self) -> str:
        """Encode type and colour, e.g. ``P[r=240,g=251,b=233]``."""

        r, g, b = self.color
        return f"{self.node_type.letter}[r={r},g={g},b={b}]"

    def copy(self) -> "Node":
        return Node(self.node_type, self.reward, self.color, self.x, self.y)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Node):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __repr__(self) -> str:
        return f"Node({self.x}, {self.y}, {self.node_type.name}, reward={self.reward})"
