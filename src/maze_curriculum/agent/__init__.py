"""Q-learning agent, its Q-table and the exploration policies it can use."""

from .actions import Action, sorted_actions
from .agent import Agent
from .policies import (
    DecreasingEpsilonPolicy,
    EpsilonFirstPolicy,
    EpsilonGreedyPolicy,
    ExplorationPolicy,
    GreedyPolicy,
    RandomPolicy,
    SoftmaxPolicy,
    VDBEPolicy,
)
from .q_table import QTable

__all__ = [
    # Core
    "Action",
    "Agent",
    "QTable",
    "sorted_actions",
    # Policies
    "DecreasingEpsilonPolicy",
    "EpsilonFirstPolicy",
    "EpsilonGreedyPolicy",
    "ExplorationPolicy",
    "GreedyPolicy",
    "RandomPolicy",
    "SoftmaxPolicy",
    "VDBEPolicy",
]
