"""Curriculum driver: spend a cost budget on maze operators.

A level change asks the configured operators, in random order, for
changes whose estimated cost still fits into what is left of ``delta``.
An operator that cannot help (zero estimate, over budget, or a failing
``change_maze``) is dropped for the rest of the level change. A
successful resize re-admits every operator, since the enlarged maze may
now offer room they lacked before.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..operators.resize import ResizeOperator

if TYPE_CHECKING:  # pragma: no cover
    from ..maze.maze import Maze
    from ..operators.base import MazeOperator

logger = logging.getLogger(__name__)


def change_maze(
    maze: "Maze",
    operators: Sequence["MazeOperator"],
    delta: float,
    rng: random.Random,
    changes: Optional[List[str]] = None,
) -> float:
    """Mutate ``maze`` in place and return the cost actually spent.

    Parameters
    ----------
    maze:
        Maze to mutate.
    operators:
        Candidate operators; the sequence itself is not modified.
    delta:
        Budget for this level change.
    rng:
        Level-change generator used to pick the next operator.
    changes:
        If given, receives a description of every applied change, in order.

    Returns
    -------
    float
        Sum of the costs of all applied changes; ``0`` means no operator
        could make progress.
    """

    current = 0.0
    available: List[MazeOperator] = list(operators)

    while current < delta and available:
        operator = available[rng.randrange(len(available))]
        cost = operator.estimate_cost(maze, delta - current)
        if cost > 0 and current + cost <= delta:
            description = operator.describe_change()
            if not operator.change_maze(maze):
                available.remove(operator)
                continue
            current += cost
            logger.debug("Applied %s for cost %s", description, cost)
            if changes is not None:
                changes.append(description)
            if isinstance(operator, ResizeOperator):
                available = list(operators)
        else:
            available.remove(operator)

    return current
