"""In-memory per-level and per-episode training statistics."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:  # pragma: no cover
    from ..maze.maze import Maze


@dataclass
class EpisodeRecord:
    episode: int
    actions: int = 0
    total_reward: float = 0.0
    stop_criterion: Optional[str] = None


@dataclass
class LevelRecord:
    """Statistics of one curriculum level.

    ``maze`` is a private copy taken when the level started, so later
    mutations of the live maze do not leak into the record.
    """

    level: int
    maze: "Maze"
    optimal_actions: int
    optimal_reward: float
    complexity: float
    episodes: List[EpisodeRecord] = field(default_factory=list)
    level_criterion: Optional[str] = None

    @property
    def finished(self) -> bool:
        return self.level_criterion is not None

    @property
    def average_actions(self) -> float:
        if not self.episodes:
            return 0.0
        return sum(e.actions for e in self.episodes) / len(self.episodes)

    @property
    def average_reward(self) -> float:
        if not self.episodes:
            return 0.0
        return sum(e.total_reward for e in self.episodes) / len(self.episodes)

    def stop_criterion_counts(self) -> Dict[str, int]:
        return dict(Counter(e.stop_criterion for e in self.episodes if e.stop_criterion is not None))
