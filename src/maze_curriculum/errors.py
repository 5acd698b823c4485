"""Exception types raised by ``maze_curriculum``.

Every error derives from a builtin exception so that callers which only
care about the broad category (``ValueError``, ``KeyError``,
``RuntimeError``) can keep catching those.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """A component was constructed with out-of-range parameters."""


class InvalidMazeError(ValueError):
    """A maze grid is malformed (e.g. smaller than 2x2)."""


class NoPathError(ValueError):
    """No passable path connects the requested start and end nodes."""


class UnknownStateError(KeyError):
    """A Q-value was requested for a state or action never added."""


class PaletteExhaustedError(RuntimeError):
    """Colour rejection sampling could not fill a palette."""


class CurriculumExhaustedError(RuntimeError):
    """No maze operator could make progress on a level change."""
