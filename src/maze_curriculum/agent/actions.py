from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Tuple


class Action(Enum):
    """Agent moves, in canonical order (used to sort tie candidates)."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def offset(self) -> Tuple[int, int]:
        return _OFFSETS[self]


_OFFSETS = {
    Action.UP: (-1, 0),
    Action.RIGHT: (0, 1),
    Action.DOWN: (1, 0),
    Action.LEFT: (0, -1),
}


def sorted_actions(actions: Iterable[Action]) -> List[Action]:
    return sorted(actions, key=lambda action: action.value)
