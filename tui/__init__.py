"""Terminal views for the battle logger."""

from .theme import DEFAULT_THEME, PLAIN_THEME, Theme
from .viewer import BattleViewer

__all__ = ["BattleViewer", "DEFAULT_THEME", "PLAIN_THEME", "Theme"]
