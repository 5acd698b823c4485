import logging
import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[2]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from maze_curriculum.agent import EpsilonGreedyPolicy, GreedyPolicy
from maze_curriculum.config import TrainingConfig
from maze_curriculum.criteria import EndStateReached, MaxActionsReached, MaxEpisodesReached
from maze_curriculum.errors import ConfigurationError, CurriculumExhaustedError
from maze_curriculum.operators import ChangeOptimalPathOperator, ResizeOperator
from maze_curriculum.training import EventRecorder, LoggingEventSink, Training, TrainingEvent
from maze_curriculum.training.events import (
    EPISODE_STOPPED,
    LEVEL_CHANGED,
    LEVEL_STARTED,
    MAZE_CHANGED,
    TRAINING_ABORTED,
    TRAINING_FINISHED,
)


def _config(**overrides) -> TrainingConfig:
    params = dict(
        exploration_policy=EpsilonGreedyPolicy(0.1, 42),
        episode_stopping_criteria=[EndStateReached(), MaxActionsReached(50)],
        level_change_criteria=[MaxEpisodesReached(2)],
        maze_operators=[ResizeOperator(1.0, 3)],
        number_of_levels=3,
        delta=2.0,
        initial_path_length=3,
        q_learning_alpha=0.5,
        q_learning_gamma=0.9,
    )
    params.update(overrides)
    return TrainingConfig(**params)


def test_run_finishes_after_configured_levels() -> None:
    recorder = EventRecorder()
    training = Training(_config(), event_sink=recorder)
    training.init_simulation()
    assert training.progress() == 0.0

    steps = 0
    while training.do_step():
        steps += 1
        assert not training.finished
    assert training.finished
    assert not training.aborted
    assert training.level == 3
    assert training.progress() == 1.0
    # no more work once finished
    assert not training.do_step()

    records = training.records
    assert [r.level for r in records] == [1, 2, 3]
    assert all(len(r.episodes) == 2 for r in records)
    assert all(r.finished for r in records)
    assert records[0].optimal_actions == 2
    assert records[0].optimal_actions < records[1].optimal_actions < records[2].optimal_actions
    assert steps + 1 == sum(e.actions for r in records for e in r.episodes)

    assert len(recorder.of_kind(LEVEL_STARTED)) == 3
    assert len(recorder.of_kind(LEVEL_CHANGED)) == 2
    assert len(recorder.of_kind(MAZE_CHANGED)) == 2
    assert len(recorder.of_kind(EPISODE_STOPPED)) == 6
    assert len(recorder.of_kind(TRAINING_FINISHED)) == 1


def test_level_change_is_announced_before_new_level_starts() -> None:
    recorder = EventRecorder()
    Training(_config(), event_sink=recorder).run()
    kinds = [event.kind for event in recorder]
    first_change = kinds.index(LEVEL_CHANGED)
    assert kinds[first_change + 1] == LEVEL_STARTED
    assert kinds[first_change + 2] == MAZE_CHANGED
    assert recorder.of_kind(LEVEL_CHANGED)[0].data["previous"] == 1


def test_maze_changed_event_lists_applied_changes() -> None:
    recorder = EventRecorder()
    Training(_config(), event_sink=recorder).run()
    for event in recorder.of_kind(MAZE_CHANGED):
        changes = event.data["changes"]
        assert changes
        assert all(change.startswith("Resize") for change in changes)


def test_run_after_init_keeps_single_first_level() -> None:
    training = Training(_config())
    training.init_simulation()
    records = training.run()
    assert [r.level for r in records] == [1, 2, 3]


def test_identical_configs_give_identical_runs() -> None:
    first = Training(_config()).run()
    second = Training(_config()).run()
    assert [r.maze.to_text() for r in first] == [r.maze.to_text() for r in second]
    assert [[e.actions for e in r.episodes] for r in first] == [[e.actions for e in r.episodes] for r in second]


def test_level_record_keeps_its_own_maze() -> None:
    training = Training(_config())
    records = training.run()
    assert records[0].maze is not training.maze
    assert (records[0].maze.rows, records[0].maze.cols) == (3, 5)
    assert records[0].complexity == pytest.approx(2.0)


def test_empty_q_table_per_level() -> None:
    training = Training(_config(start_each_level_with_empty_q_table=True))
    training.init_simulation()
    while training.level == 1:
        assert training.do_step()
    assert len(training.agent.q_table) == 0


def test_q_table_survives_level_change_by_default() -> None:
    training = Training(_config())
    training.init_simulation()
    while training.level == 1:
        assert training.do_step()
    assert len(training.agent.q_table) > 0


def test_exhausted_curriculum_aborts() -> None:
    recorder = EventRecorder()
    training = Training(
        _config(
            maze_operators=[ChangeOptimalPathOperator(1.0, 0)],
            level_change_criteria=[MaxEpisodesReached(1)],
            exploration_policy=GreedyPolicy(0),
        ),
        event_sink=recorder,
    )
    with pytest.raises(CurriculumExhaustedError):
        training.run()
    assert training.aborted
    assert not training.finished
    assert training.level == 1
    assert len(recorder.of_kind(TRAINING_ABORTED)) == 1
    assert not training.do_step()


def test_single_level_run_never_changes_maze() -> None:
    recorder = EventRecorder()
    records = Training(_config(number_of_levels=1), event_sink=recorder).run()
    assert len(records) == 1
    assert recorder.of_kind(LEVEL_CHANGED) == []


def test_state_is_unavailable_before_init() -> None:
    training = Training(_config())
    with pytest.raises(RuntimeError):
        training.maze
    with pytest.raises(RuntimeError):
        training.agent


def test_invalid_config_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        Training(_config(number_of_levels=0))
    with pytest.raises(ConfigurationError):
        Training(_config(maze_operators=[]))


def test_logging_sink_levels(caplog) -> None:
    sink = LoggingEventSink()
    with caplog.at_level(logging.DEBUG, logger="maze_curriculum.training"):
        sink(TrainingEvent(kind=TRAINING_ABORTED, level=2, episode=5, message="stuck"))
        sink(TrainingEvent(kind=EPISODE_STOPPED, level=2, episode=5, message="done"))
    levels = [record.levelno for record in caplog.records]
    assert levels == [logging.ERROR, logging.DEBUG]
    assert "[level 2 | episode 5] stuck" in caplog.text


def test_unknown_event_kind_is_rejected() -> None:
    with pytest.raises(ValueError):
        TrainingEvent(kind="nope", level=1, episode=1, message="")
