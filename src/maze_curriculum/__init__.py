"""maze_curriculum: tabular Q-learning on a maze curriculum.

A run starts the agent on a straight corridor. Whenever the agent has
mastered a level, budgeted maze operators add parallel routes, dead ends,
extra rows and columns, or forced detours to build the next level. Every
change keeps the maze solvable.

Subpackages (``maze``, ``analysis``, ``operators``, ``agent``,
``training``, ``envs``, ``cli``) are importable as normal; the names
below are the stable entry points.
"""

from .agent import Action, Agent, ExplorationPolicy, QTable
from .config import PathConfig, TrainingConfig, make_default_paths
from .criteria import Criterion
from .errors import (
    ConfigurationError,
    CurriculumExhaustedError,
    InvalidMazeError,
    NoPathError,
    PaletteExhaustedError,
    UnknownStateError,
)
from .envs import MazeEnv
from .maze import Maze, Node, NodeFactory, NodeType, build_maze
from .operators import MazeOperator
from .registry import build_component, get_component_spec
from .training import EventRecorder, LoggingEventSink, Training, TrainingEvent, change_maze

__all__ = [
    # Configuration and paths
    "TrainingConfig",
    "PathConfig",
    "make_default_paths",
    "build_component",
    "get_component_spec",
    # Maze
    "Maze",
    "Node",
    "NodeFactory",
    "NodeType",
    "build_maze",
    "MazeOperator",
    # Agent
    "Action",
    "Agent",
    "ExplorationPolicy",
    "QTable",
    "Criterion",
    # Training
    "Training",
    "TrainingEvent",
    "EventRecorder",
    "LoggingEventSink",
    "change_maze",
    # Environment
    "MazeEnv",
    # Errors
    "ConfigurationError",
    "CurriculumExhaustedError",
    "InvalidMazeError",
    "NoPathError",
    "PaletteExhaustedError",
    "UnknownStateError",
]
