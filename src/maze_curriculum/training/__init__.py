"""Training loop: curriculum driver, controller, events and records."""

from .controller import Training
from .curriculum import change_maze
from .events import EventRecorder, EventSink, LoggingEventSink, MultiSink, TrainingEvent
from .records import EpisodeRecord, LevelRecord

__all__ = [
    # Controller
    "Training",
    "change_maze",
    # Events
    "EventRecorder",
    "EventSink",
    "LoggingEventSink",
    "MultiSink",
    "TrainingEvent",
    # Records
    "EpisodeRecord",
    "LevelRecord",
]
