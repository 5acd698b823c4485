import io
import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[2]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from maze_curriculum.agent import Action, QTable, sorted_actions
from maze_curriculum.errors import UnknownStateError


def test_add_entry_initialises_values() -> None:
    table = QTable(0.25)
    assert table.add_entry("s", [Action.UP, Action.LEFT])
    assert table.actions("s") == {Action.UP: 0.25, Action.LEFT: 0.25}
    assert table.state_exists("s") and "s" in table
    assert table.action_exists("s", Action.UP)
    assert not table.action_exists("s", Action.DOWN)
    assert not table.action_exists("other", Action.UP)
    assert len(table) == 1


def test_add_entry_with_explicit_values() -> None:
    table = QTable(0.0)
    table.add_entry("s", {Action.RIGHT: 1.5, Action.DOWN: -2})
    assert table.get("s", Action.RIGHT) == 1.5
    assert table.highest_value("s") == 1.5


def test_duplicate_entry_is_rejected_with_warning(caplog) -> None:
    table = QTable(0.0)
    table.add_entry("s", [Action.UP])
    table.set("s", Action.UP, 3.0)
    with caplog.at_level("WARNING"):
        assert not table.add_entry("s", [Action.UP, Action.DOWN])
    assert "already exists" in caplog.text
    assert table.actions("s") == {Action.UP: 3.0}


def test_unknown_state_or_action_raises() -> None:
    table = QTable(0.0)
    table.add_entry("s", [Action.UP])
    with pytest.raises(UnknownStateError):
        table.get("missing", Action.UP)
    with pytest.raises(UnknownStateError):
        table.set("s", Action.DOWN, 1.0)
    with pytest.raises(UnknownStateError):
        table.actions("missing")


def test_actions_returns_a_copy() -> None:
    table = QTable(0.0)
    table.add_entry("s", [Action.UP])
    table.actions("s")[Action.UP] = 10.0
    assert table.get("s", Action.UP) == 0.0


def test_copy_and_clear() -> None:
    table = QTable(0.0)
    table.add_entry("s", [Action.UP])
    clone = table.copy()
    clone.set("s", Action.UP, 2.0)
    assert table.get("s", Action.UP) == 0.0

    table.clear()
    assert len(table) == 0
    assert len(clone) == 1


def test_csv_export() -> None:
    table = QTable(0.0)
    table.add_entry("a|b", {Action.UP: 1.0, Action.LEFT: -0.5})
    lines = table.to_csv().splitlines()
    assert lines[0] == "State;Up;Right;Down;Left"
    assert lines[1] == "a|b;1.0;NaN;NaN;-0.5"

    buffer = io.StringIO()
    table.write_csv(buffer)
    assert buffer.getvalue() == table.to_csv()


def test_sorted_actions_uses_canonical_order() -> None:
    assert sorted_actions([Action.LEFT, Action.UP, Action.DOWN]) == [Action.UP, Action.DOWN, Action.LEFT]
    assert Action.UP.offset == (-1, 0)
    assert Action.RIGHT.offset == (0, 1)
