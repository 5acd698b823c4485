"""Structural analysis of mazes: optimal path, loops, parallel routes and
the complexity score derived from them."""

from .complexity import ComplexityFunction, default_complexity
from .loops import loop_nodes, loops, parallel_route_nodes, parallel_routes
from .paths import dijkstra, optimal_reward, shortest_path, shortest_path_length

__all__ = [
    "ComplexityFunction",
    "default_complexity",
    "dijkstra",
    "loop_nodes",
    "loops",
    "optimal_reward",
    "parallel_route_nodes",
    "parallel_routes",
    "shortest_path",
    "shortest_path_length",
]
