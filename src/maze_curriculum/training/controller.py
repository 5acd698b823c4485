"""Level/episode state machine driving a curriculum run.

A run starts at level 1, episode 1 on a straight corridor. Every
:meth:`Training.do_step` performs exactly one agent action and then:

* asks the episode-stopping criteria (in order) whether the episode is
  over;
* if it is, asks the level-change criteria whether the level is over;
* on a level change, either finishes the run (last level) or mutates a
  copy of the maze with the curriculum driver and installs it;
* puts the agent back on the start node for the next episode.

A level change on which no operator makes progress aborts the run with
:class:`~maze_curriculum.errors.CurriculumExhaustedError`.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, List, Optional

from ..agent.agent import Agent
from ..analysis.paths import optimal_reward
from ..errors import CurriculumExhaustedError
from ..maze.builder import build_maze
from ..maze.factory import NodeFactory
from .curriculum import change_maze
from .events import (
    CRITERION_TRIGGERED,
    EPISODE_STOPPED,
    LEVEL_CHANGED,
    LEVEL_STARTED,
    MAZE_CHANGED,
    TRAINING_ABORTED,
    TRAINING_FINISHED,
    EventSink,
    TrainingEvent,
    null_sink,
)
from .records import EpisodeRecord, LevelRecord

if TYPE_CHECKING:  # pragma: no cover
    from ..config import TrainingConfig
    from ..criteria import Criterion
    from ..maze.maze import Maze


class Training:
    """Owns the live maze and agent of a curriculum run.

    Parameters
    ----------
    config:
        Fully constructed configuration; validated here.
    event_sink:
        Callable receiving every :class:`TrainingEvent`. Defaults to a
        sink that drops them.
    """

    def __init__(self, config: "TrainingConfig", event_sink: Optional[EventSink] = None) -> None:
        config.validate()
        self._config = config
        self._sink: EventSink = event_sink if event_sink is not None else null_sink
        self._operator_random = random.Random(config.change_maze_seed)

        self._maze: Optional[Maze] = None
        self._agent: Optional[Agent] = None
        self._level = 1
        self._episode = 1
        self._finished = False
        self._aborted = False
        self._optimal_actions: Optional[int] = None
        self._records: List[LevelRecord] = []
        self._episode_record: Optional[EpisodeRecord] = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def config(self) -> "TrainingConfig":
        return self._config

    @property
    def maze(self) -> "Maze":
        if self._maze is None:
            raise RuntimeError("Training has not been initialised; call init_simulation() first.")
        return self._maze

    @property
    def agent(self) -> Agent:
        if self._agent is None:
            raise RuntimeError("Training has not been initialised; call init_simulation() first.")
        return self._agent

    @property
    def level(self) -> int:
        return self._level

    @property
    def episode(self) -> int:
        return self._episode

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def aborted(self) -> bool:
        return self._aborted

    @property
    def records(self) -> List[LevelRecord]:
        return list(self._records)

    @property
    def optimal_actions(self) -> int:
        """Shortest start-to-end path length of the live maze."""

        if self._optimal_actions is None:
            self._optimal_actions = self.maze.shortest_path_length()
        return self._optimal_actions

    def progress(self) -> float:
        """Fraction of levels completed, in ``[0, 1]``."""

        if self._finished:
            return 1.0
        return (self._level - 1) / self._config.number_of_levels

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------
    def init_simulation(self) -> None:
        cfg = self._config
        node_factory = NodeFactory(
            cfg.way_node_reward,
            cfg.end_node_reward,
            cfg.number_of_way_colors,
            cfg.number_of_wall_colors,
            cfg.generated_way_colors_seed,
            cfg.generated_wall_colors_seed,
            cfg.used_way_colors_seed,
            cfg.used_wall_colors_seed,
            cfg.min_wall_way_brightness_difference,
        )
        self._install_maze(build_maze(cfg.initial_path_length, cfg.horizontal, node_factory))
        self._agent = Agent(
            self.maze,
            cfg.exploration_policy,
            cfg.q_learning_alpha,
            cfg.q_learning_gamma,
            cfg.initial_q_value,
        )

    def run(self) -> List[LevelRecord]:
        """Step until the run finishes and return the level records.

        Initialises the run first unless :meth:`init_simulation` was already
        called.
        """

        if self._maze is None:
            self.init_simulation()
        while self.do_step():
            pass
        return self.records

    def do_step(self) -> bool:
        """Perform one agent action; ``False`` once there is no more work."""

        if self._finished or self._aborted:
            return False
        agent = self.agent

        level_record = self._current_level_record()
        episode_record = self._current_episode_record(level_record)

        agent.do_action()
        episode_record.actions = agent.actions_taken
        episode_record.total_reward = agent.total_reward

        stop = self._first_met(self._config.episode_stopping_criteria)
        if stop is None:
            return True

        episode_record.stop_criterion = stop.label
        self._emit(CRITERION_TRIGGERED, f"{stop.label} triggered", criterion=stop.label)
        self._emit(
            EPISODE_STOPPED,
            f"Episode finished after {agent.actions_taken} actions",
            actions=agent.actions_taken,
            total_reward=agent.total_reward,
            criterion=stop.label,
        )
        self._episode_record = None

        change = self._first_met(self._config.level_change_criteria)
        if change is not None:
            level_record.level_criterion = change.label
            self._emit(CRITERION_TRIGGERED, f"{change.label} triggered", criterion=change.label)

            if self._level == self._config.number_of_levels:
                self._finished = True
                self._emit(TRAINING_FINISHED, "Training has been finished", levels=self._level)
                return False

            self._change_level()
        else:
            self._episode += 1

        agent.reset_for_episode(self.maze)
        for criterion in self._config.episode_stopping_criteria:
            criterion.reset()
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _change_level(self) -> None:
        cfg = self._config
        for criterion in cfg.level_change_criteria:
            criterion.reset()
        if cfg.start_each_level_with_empty_q_table:
            self.agent.reset_q_table()

        candidate = self.maze.copy()
        changes: List[str] = []
        spent = change_maze(candidate, cfg.maze_operators, cfg.delta, self._operator_random, changes)
        if spent <= 0:
            self._aborted = True
            message = "Training stopped because no maze operator could be used on the current maze."
            self._emit(TRAINING_ABORTED, message, delta=cfg.delta)
            raise CurriculumExhaustedError(message)

        previous = self._level
        self._level += 1
        self._episode = 1
        self._emit(LEVEL_CHANGED, f"Level {previous} finished, starting level {self._level}", previous=previous)
        self._install_maze(candidate)
        self._emit(
            MAZE_CHANGED,
            f"Complexity of new maze: {self._records[-1].complexity}",
            cost=spent,
            complexity=self._records[-1].complexity,
            changes=changes,
        )

    def _install_maze(self, maze: "Maze") -> None:
        self._maze = maze
        self._optimal_actions = None
        self._records.append(
            LevelRecord(
                level=self._level,
                maze=maze.copy(),
                optimal_actions=self.optimal_actions,
                optimal_reward=optimal_reward(maze),
                complexity=self._config.complexity_function(maze),
            )
        )
        self._emit(
            LEVEL_STARTED,
            f"Level {self._level} started on a {maze.rows}x{maze.cols} maze",
            optimal_actions=self.optimal_actions,
        )

    def _current_level_record(self) -> LevelRecord:
        return self._records[-1]

    def _current_episode_record(self, level_record: LevelRecord) -> EpisodeRecord:
        if self._episode_record is None:
            self._episode_record = EpisodeRecord(episode=self._episode)
            level_record.episodes.append(self._episode_record)
        return self._episode_record

    def _first_met(self, criteria: List["Criterion"]) -> Optional["Criterion"]:
        for criterion in criteria:
            if criterion.is_met(self):
                return criterion
        return None

    def _emit(self, kind: str, message: str, **data) -> None:
        self._sink(TrainingEvent(kind=kind, level=self._level, episode=self._episode, message=message, data=data))
