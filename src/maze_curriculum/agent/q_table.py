"""Tabular action values keyed by perceptual state strings."""

from __future__ import annotations

import csv
import io
import logging
from typing import Dict, Iterable, Mapping, TextIO, Union

from ..errors import UnknownStateError
from .actions import Action

logger = logging.getLogger(__name__)

CSV_HEADER = ("State", "Up", "Right", "Down", "Left")
MISSING_VALUE = "NaN"


class QTable:
    """``state -> {action -> value}``.

    Entries are created in bulk, one state at a time, pre-populated with
    ``init_value``. Reading or writing a value for a state or action that
    was never added raises :class:`UnknownStateError`.
    """

    def __init__(self, init_value: float) -> None:
        self.init_value = float(init_value)
        self._table: Dict[str, Dict[Action, float]] = {}

    def copy(self) -> "QTable":
        other = QTable(self.init_value)
        other._table = {state: dict(values) for state, values in self._table.items()}
        return other

    def add_entry(self, state: str, actions: Union[Iterable[Action], Mapping[Action, float]]) -> bool:
        """Add ``state`` with the given actions; ``False`` if it already exists.

        ``actions`` is either a collection of actions (initialised to
        ``init_value``) or a mapping of explicit values.
        """

        if state in self._table:
            logger.warning("State <%s> already exists in the Q-table; no entry was added.", state)
            return False
        if isinstance(actions, Mapping):
            self._table[state] = {action: float(value) for action, value in actions.items()}
        else:
            self._table[state] = {action: self.init_value for action in actions}
        return True

    def _values(self, state: str, action: Action) -> Dict[Action, float]:
        values = self._table.get(state)
        if values is None:
            raise UnknownStateError(f"State <{state}> is not in the Q-table (action {action.name}).")
        if action not in values:
            raise UnknownStateError(f"Action {action.name} is unknown for state <{state}>.")
        return values

    def get(self, state: str, action: Action) -> float:
        return self._values(state, action)[action]

    def set(self, state: str, action: Action, value: float) -> None:
        self._values(state, action)[action] = float(value)

    def actions(self, state: str) -> Dict[Action, float]:
        """Copy of the action values recorded for ``state``."""

        if state not in self._table:
            raise UnknownStateError(f"State <{state}> is not in the Q-table.")
        return dict(self._table[state])

    def highest_value(self, state: str) -> float:
        values = self.actions(state)
        if not values:
            raise UnknownStateError(f"State <{state}> has no actions.")
        return max(values.values())

    def state_exists(self, state: str) -> bool:
        return state in self._table

    def action_exists(self, state: str, action: Action) -> bool:
        return action in self._table.get(state, {})

    def states(self):
        return self._table.keys()

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, state: object) -> bool:
        return state in self._table

    def clear(self) -> None:
        self._table.clear()

    def write_csv(self, stream: TextIO) -> None:
        """Write ``State;Up;Right;Down;Left`` rows, ``NaN`` for missing actions."""

        writer = csv.writer(stream, delimiter=";", lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for state, values in self._table.items():
            cells = [repr(values[action]) if action in values else MISSING_VALUE for action in Action]
            writer.writerow([state] + cells)

    def to_csv(self) -> str:
        buffer = io.StringIO()
        self.write_csv(buffer)
        return buffer.getvalue()
