"""The maze grid.

``Maze`` owns a rectangular grid of :class:`Node` records addressed as
``grid[x][y]`` where ``x`` is the row and ``y`` the column. "Up" is
``x - 1`` and "right" is ``y + 1``. Nodes never point back to their
maze, so every neighbourhood query is answered here with bounds-checked
index arithmetic.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence

from ..analysis.paths import shortest_path, shortest_path_length
from ..errors import InvalidMazeError
from .factory import NodeFactory
from .node import BORDER_MARKER, Node, NodeType

# Clockwise Moore neighbourhood starting at "up", as (dx, dy).
_STATE_OFFSETS = ((-1, 0), (-1, 1), (0, 1), (1, 1), (1, 0), (1, -1), (0, -1), (-1, -1))
# Direct neighbours in the order left, up, right, down.
_DIRECT_OFFSETS = ((0, -1), (-1, 0), (0, 1), (1, 0))

_ASCII_WALL = "#"
_ASCII_WAY = "P"
_ASCII_START = "S"
_ASCII_END = "E"


class Maze:
    """Rectangular grid with a distinguished start and end node."""

    def __init__(self, node_factory: NodeFactory, grid: Sequence[Sequence[Node]], start: Node, end: Node) -> None:
        self.node_factory = node_factory
        self.start = start
        self.end = end
        self._grid: List[List[Node]] = []
        self.replace_grid(grid)

    @classmethod
    def from_ascii(cls, node_factory: NodeFactory, rows: Iterable[str]) -> "Maze":
        """Build a maze from text rows.

        ``#`` is a wall, ``P`` (or ``.``) a way node, ``S`` the start and
        ``E`` the end. Nodes are built row by row, left to right, so the
        colours drawn from ``node_factory`` are reproducible.
        """

        grid: List[List[Node]] = []
        start: Optional[Node] = None
        end: Optional[Node] = None
        for line in rows:
            row: List[Node] = []
            for char in line.strip():
                if char == _ASCII_WALL:
                    node = node_factory.build_wall_node()
                elif char in (_ASCII_WAY, "."):
                    node = node_factory.build_way_node()
                elif char == _ASCII_START:
                    if start is not None:
                        raise InvalidMazeError("Maze text has more than one 'S'.")
                    node = start = node_factory.build_start_node()
                elif char == _ASCII_END:
                    if end is not None:
                        raise InvalidMazeError("Maze text has more than one 'E'.")
                    node = end = node_factory.build_end_node()
                else:
                    raise InvalidMazeError(f"Unknown maze character {char!r}")
                row.append(node)
            grid.append(row)
        if start is None or end is None:
            raise InvalidMazeError("Maze text needs exactly one 'S' and one 'E'.")
        return cls(node_factory, grid, start, end)

    # ------------------------------------------------------------------
    # Grid management
    # ------------------------------------------------------------------
    def replace_grid(self, grid: Sequence[Sequence[Node]]) -> None:
        """Install ``grid`` and renumber every node to its new position."""

        if len(grid) < 2 or len(grid[0]) < 2:
            raise InvalidMazeError("A maze needs at least 2x2 nodes.")
        width = len(grid[0])
        if any(len(row) != width for row in grid):
            raise InvalidMazeError("All maze rows must have the same length.")

        new_grid = [list(row) for row in grid]
        for x, row in enumerate(new_grid):
            for y, node in enumerate(row):
                node.x = x
                node.y = y
        self._grid = new_grid

    def copy(self) -> "Maze":
        """Deep-copy the grid; the node factory (and its RNGs) is shared."""

        grid = [[node.copy() for node in row] for row in self._grid]
        return Maze(
            self.node_factory,
            grid,
            grid[self.start.x][self.start.y],
            grid[self.end.x][self.end.y],
        )

    @property
    def rows(self) -> int:
        return len(self._grid)

    @property
    def cols(self) -> int:
        return len(self._grid[0])

    def node_at(self, x: int, y: int) -> Optional[Node]:
        if 0 <= x < len(self._grid) and 0 <= y < len(self._grid[0]):
            return self._grid[x][y]
        return None

    def __iter__(self) -> Iterator[Node]:
        for row in self._grid:
            yield from row

    def passable_nodes(self) -> List[Node]:
        return [node for node in self if node.is_passable]

    # ------------------------------------------------------------------
    # Neighbourhood
    # ------------------------------------------------------------------
    def neighbor(self, node: Node, dx: int, dy: int) -> Optional[Node]:
        return self.node_at(node.x + dx, node.y + dy)

    def direct_neighbors(self, node: Node) -> List[Node]:
        """Existing neighbours in the order left, up, right, down."""

        found = (self.node_at(node.x + dx, node.y + dy) for dx, dy in _DIRECT_OFFSETS)
        return [n for n in found if n is not None]

    def passable_neighbors(self, node: Node) -> List[Node]:
        return [n for n in self.direct_neighbors(node) if n.is_passable]

    def is_border(self, node: Node) -> bool:
        return node.x in (0, self.rows - 1) or node.y in (0, self.cols - 1)

    def state_of(self, node: Node) -> str:
        """Perceptual state: the eight Moore neighbours, clockwise from up."""

        parts = []
        for dx, dy in _STATE_OFFSETS:
            neighbor = self.node_at(node.x + dx, node.y + dy)
            parts.append(BORDER_MARKER if neighbor is None else neighbor.describe())
        return "|".join(parts)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------
    def shortest_path(self) -> List[Node]:
        return shortest_path(self, self.start, self.end)

    def shortest_path_length(self) -> int:
        return shortest_path_length(self, self.start, self.end)

    def to_text(self, highlight: Iterable[Node] = ()) -> str:
        """Render as the rows accepted by :meth:`from_ascii`.

        Highlighted nodes are written in lower case (``*`` for walls).
        """

        marked = set(highlight)
        lines = []
        for row in self._grid:
            chars = []
            for node in row:
                if node is self.start:
                    char = _ASCII_START
                elif node is self.end:
                    char = _ASCII_END
                elif node.node_type is NodeType.IMPASSABLE:
                    char = _ASCII_WALL
                else:
                    char = _ASCII_WAY
                if node in marked:
                    char = "*" if char == _ASCII_WALL else char.lower()
                chars.append(char)
            lines.append("".join(chars))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Maze({self.rows}x{self.cols}, start={self.start.position}, end={self.end.position})"
