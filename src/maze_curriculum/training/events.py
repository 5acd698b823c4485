"""Structured training notifications.

The :class:`~maze_curriculum.training.controller.Training` controller never
logs directly; it hands :class:`TrainingEvent` objects to an injected sink.
Any callable accepting one event is a sink. Two are shipped here: one
forwarding to :mod:`logging` and one collecting events in memory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

LEVEL_STARTED = "level_started"
EPISODE_STOPPED = "episode_stopped"
CRITERION_TRIGGERED = "criterion_triggered"
LEVEL_CHANGED = "level_changed"
MAZE_CHANGED = "maze_changed"
TRAINING_FINISHED = "training_finished"
TRAINING_ABORTED = "training_aborted"

EVENT_KINDS = (
    LEVEL_STARTED,
    EPISODE_STOPPED,
    CRITERION_TRIGGERED,
    LEVEL_CHANGED,
    MAZE_CHANGED,
    TRAINING_FINISHED,
    TRAINING_ABORTED,
)


@dataclass(frozen=True)
class TrainingEvent:
    kind: str
    level: int
    episode: int
    message: str
    data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.kind not in EVENT_KINDS:
            raise ValueError(f"Unknown training event kind: {self.kind!r}")


EventSink = Callable[[TrainingEvent], None]


def null_sink(event: TrainingEvent) -> None:
    return None


class LoggingEventSink:
    """Forward events to a :mod:`logging` logger.

    Aborts are errors, level and maze changes are info, everything that
    happens once per episode is debug.
    """

    _LEVELS: Dict[str, int] = {
        LEVEL_STARTED: logging.INFO,
        EPISODE_STOPPED: logging.DEBUG,
        CRITERION_TRIGGERED: logging.DEBUG,
        LEVEL_CHANGED: logging.INFO,
        MAZE_CHANGED: logging.INFO,
        TRAINING_FINISHED: logging.INFO,
        TRAINING_ABORTED: logging.ERROR,
    }

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger if logger is not None else logging.getLogger("maze_curriculum.training")

    def __call__(self, event: TrainingEvent) -> None:
        self.logger.log(
            self._LEVELS[event.kind],
            "[level %d | episode %d] %s",
            event.level,
            event.episode,
            event.message,
        )


class EventRecorder:
    """Keep every event in memory, in order of arrival."""

    def __init__(self) -> None:
        self.events: List[TrainingEvent] = []

    def __call__(self, event: TrainingEvent) -> None:
        self.events.append(event)

    def __iter__(self) -> Iterator[TrainingEvent]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    def of_kind(self, kind: str) -> List[TrainingEvent]:
        return [event for event in self.events if event.kind == kind]


class MultiSink:
    def __init__(self, *sinks: EventSink) -> None:
        self.sinks = list(sinks)

    def __call__(self, event: TrainingEvent) -> None:
        for sink in self.sinks:
            sink(event)
