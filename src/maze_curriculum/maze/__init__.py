"""Maze graph: cells, colour palettes, the grid and its initial layout."""

from .builder import build_maze, placeholder_maze
from .factory import NodeFactory, brightness, find_colors
from .maze import Maze
from .node import IMPASSABLE_REWARD, Color, Node, NodeType

__all__ = [
    "Color",
    "IMPASSABLE_REWARD",
    "Maze",
    "Node",
    "NodeFactory",
    "NodeType",
    "brightness",
    "build_maze",
    "find_colors",
    "placeholder_maze",
]
