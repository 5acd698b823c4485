"""Image rendering of mazes with numpy and matplotlib."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional, Union

import matplotlib.pyplot as plt
import numpy as np

if TYPE_CHECKING:  # pragma: no cover
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

    from .maze.maze import Maze
    from .maze.node import Node

START_MARKER_COLOR = "tab:green"
END_MARKER_COLOR = "tab:red"
AGENT_MARKER_COLOR = "tab:blue"
HIGHLIGHT_COLOR = "tab:orange"


def maze_to_rgb(maze: "Maze", agent: Optional["Node"] = None) -> np.ndarray:
    """Return the cell colours as a ``(rows, cols, 3)`` ``uint8`` array.

    If ``agent`` is given its cell is painted pure blue.
    """

    image = np.zeros((maze.rows, maze.cols, 3), dtype=np.uint8)
    for node in maze:
        image[node.x, node.y] = node.color
    if agent is not None:
        image[agent.x, agent.y] = (0, 0, 255)
    return image


def plot_maze(
    maze: "Maze",
    ax: Optional["Axes"] = None,
    highlight: Optional[Iterable["Node"]] = None,
    title: Optional[str] = None,
) -> "Figure":
    """Draw ``maze`` with start, end and optional highlighted cells marked."""

    if ax is None:
        fig, ax = plt.subplots(figsize=(max(2.0, maze.cols * 0.4), max(2.0, maze.rows * 0.4)))
    else:
        fig = ax.figure

    ax.imshow(maze_to_rgb(maze), interpolation="nearest")
    if highlight is not None:
        cells = list(highlight)
        if cells:
            ax.scatter([n.y for n in cells], [n.x for n in cells], s=12, c=HIGHLIGHT_COLOR, marker="o")
    ax.scatter([maze.start.y], [maze.start.x], s=40, c=START_MARKER_COLOR, marker="s", label="start")
    ax.scatter([maze.end.y], [maze.end.x], s=40, c=END_MARKER_COLOR, marker="*", label="end")

    ax.set_xticks([])
    ax.set_yticks([])
    if title is not None:
        ax.set_title(title)
    return fig


def save_maze_image(
    maze: "Maze",
    path: Union[str, Path],
    *,
    highlight: Optional[Iterable["Node"]] = None,
    title: Optional[str] = None,
    dpi: int = 100,
) -> Path:
    """Render ``maze`` to a PNG at ``path`` and return the path."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig = plot_maze(maze, highlight=highlight, title=title)
    fig.savefig(path, dpi=dpi)
    plt.close(fig)
    return path
