"""Construction and re-typing of maze cells.

The :class:`NodeFactory` owns two colour palettes: dark "wall" colours
and bright "way" colours, separated by a configurable minimum HSP
brightness gap. Two kinds of seeded generators are involved:

* the *generation* seeds decide which colours exist in each palette;
* the *usage* seeds decide which palette colour a newly built (or
  re-typed) node receives.

Keeping them apart lets palette composition and per-cell appearance be
varied independently while staying reproducible.
"""

from __future__ import annotations

import math
import random
from typing import List, Optional, Sequence

from ..errors import ConfigurationError, PaletteExhaustedError
from .node import IMPASSABLE_REWARD, Color, Node, NodeType

# Consecutive failed draws after which palette generation gives up.
MAX_COLOR_TRIES = 10_000_000


def brightness(color: Color) -> float:
    """HSP brightness, see http://alienryderflex.com/hsp.html."""

    r, g, b = color
    return math.sqrt(0.299 * r * r + 0.587 * g * g + 0.114 * b * b)


def find_colors(number_of_colors: int, lower_bound: float, upper_bound: float, seed: int) -> List[Color]:
    """Rejection-sample ``number_of_colors`` distinct colours.

    Each channel is drawn from ``0..254``; a colour is accepted when its
    brightness lies in ``[lower_bound, upper_bound]`` and it is not yet in
    the palette.

    Raises
    ------
    PaletteExhaustedError
        If :data:`MAX_COLOR_TRIES` consecutive draws are rejected.
    """

    if not 0 <= lower_bound <= 255:
        raise ConfigurationError(f"lower_bound={lower_bound} is not in [0, 255]")
    if not 0 <= upper_bound <= 255:
        raise ConfigurationError(f"upper_bound={upper_bound} is not in [0, 255]")
    if lower_bound > upper_bound:
        raise ConfigurationError(f"lower_bound={lower_bound} must not exceed upper_bound={upper_bound}")

    rng = random.Random(seed)
    colors: List[Color] = []
    tries = 1
    while len(colors) < number_of_colors:
        if tries == MAX_COLOR_TRIES:
            raise PaletteExhaustedError(
                "Could not find enough colors. Reduce the number of colors or "
                "min_wall_way_brightness_difference."
            )
        color = (rng.randrange(255), rng.randrange(255), rng.randrange(255))
        if lower_bound <= brightness(color) <= upper_bound and color not in colors:
            colors.append(color)
            tries = 1
        else:
            tries += 1
    return colors


def validate_parameters(
    number_of_way_colors: int,
    number_of_wall_colors: int,
    min_wall_way_brightness_difference: float,
) -> None:
    if number_of_way_colors <= 0 or number_of_wall_colors <= 0:
        raise ConfigurationError("number_of_way_colors and number_of_wall_colors must be greater than 0.")
    if not 0 <= min_wall_way_brightness_difference <= 255:
        raise ConfigurationError("min_wall_way_brightness_difference is not in [0, 255].")


class NodeFactory:
    """Builds nodes and switches them between passable and impassable."""

    def __init__(
        self,
        action_reward: float,
        end_reward: float,
        number_of_way_colors: int,
        number_of_wall_colors: int,
        generated_way_colors_seed: int,
        generated_wall_colors_seed: int,
        used_way_colors_seed: int,
        used_wall_colors_seed: int,
        min_wall_way_brightness_difference: float,
    ) -> None:
        validate_parameters(number_of_way_colors, number_of_wall_colors, min_wall_way_brightness_difference)

        self.action_reward = float(action_reward)
        self.end_reward = float(end_reward)

        self._used_way_random = random.Random(used_way_colors_seed)
        self._used_wall_random = random.Random(used_wall_colors_seed)

        brightness_range = (255.0 - min_wall_way_brightness_difference) / 2.0
        self.wall_colors: Sequence[Color] = tuple(
            find_colors(number_of_wall_colors, 0, brightness_range, generated_wall_colors_seed)
        )
        self.way_colors: Sequence[Color] = tuple(
            find_colors(number_of_way_colors, 255 - brightness_range, 255, generated_way_colors_seed)
        )

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------
    def _way_color(self) -> Color:
        return self.way_colors[self._used_way_random.randrange(len(self.way_colors))]

    def _wall_color(self) -> Color:
        return self.wall_colors[self._used_wall_random.randrange(len(self.wall_colors))]

    def build_wall_node(self, reward: Optional[float] = None) -> Node:
        return Node(NodeType.IMPASSABLE, IMPASSABLE_REWARD if reward is None else reward, self._wall_color())

    def build_way_node(self, reward: Optional[float] = None) -> Node:
        return Node(NodeType.PASSABLE, self.action_reward if reward is None else reward, self._way_color())

    def build_start_node(self, reward: Optional[float] = None) -> Node:
        return self.build_way_node(reward)

    def build_end_node(self, reward: Optional[float] = None) -> Node:
        return Node(NodeType.PASSABLE, self.end_reward if reward is None else reward, self._way_color())

    # ------------------------------------------------------------------
    # Re-typing
    # ------------------------------------------------------------------
    def looks_like_way(self, node: Node) -> bool:
        return node.color in self.way_colors

    def looks_like_wall(self, node: Node) -> bool:
        return node.color in self.wall_colors

    def change_node_to_type(self, node: Node, node_type: NodeType) -> None:
        """Update reward and, only when it does not fit already, colour."""

        if node_type is NodeType.PASSABLE:
            node.set_type(NodeType.PASSABLE, self.action_reward)
            if not self.looks_like_way(node):
                node.color = self._way_color()
        else:
            node.set_type(NodeType.IMPASSABLE, IMPASSABLE_REWARD)
            if not self.looks_like_wall(node):
                node.color = self._wall_color()

    def change_node_to_end(self, node: Node) -> None:
        node.set_type(NodeType.PASSABLE, self.end_reward)
        if not self.looks_like_way(node):
            node.color = self._way_color()
