from .maze_env import MazeEnv

__all__ = ["MazeEnv"]
