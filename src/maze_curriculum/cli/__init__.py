"""CLI entrypoints for maze_curriculum.

The training CLI lives in ``maze_curriculum.cli.train_cli``. It is not
imported here so that ``python -m maze_curriculum.cli.train_cli`` does
not warn about the module already being loaded via
``maze_curriculum.cli``.
"""

__all__: list[str] = []
