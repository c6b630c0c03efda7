"""
Interactive battle viewer.

A prompt loop over the stored battles, newest first:
  j / k  next / previous battle (wraps around)
  s      toggle statistics view
  a      toggle analytics dashboard
  r      reload battles from the database
  q      quit
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Callable

from battlelog.analytics import compute
from battlelog.database import Database
from battlelog.models import Battle

from .dashboard import recent_battles_frame, render_dashboard
from .theme import Theme, DEFAULT_THEME
from .views import calculate_stats, render_battle_detail, render_stats

logger = logging.getLogger(__name__)

MODE_DETAIL = "detail"
MODE_STATS = "stats"
MODE_ANALYTICS = "analytics"

HELP = "Controls: [J/K] Navigate | [S] Stats | [A] Analytics | [R] Reload | [Q] Quit"


class BattleViewer:
    """State and key handling for the terminal viewer."""

    def __init__(
        self,
        db: Database,
        player_tag: str,
        theme: Theme = DEFAULT_THEME,
        target_trophies: int = 7000,
        now: datetime | None = None,
    ):
        self.db = db
        self.player_tag = player_tag
        self.theme = theme
        self.target_trophies = target_trophies
        self.now = now
        self.battles: list[Battle] = []
        self.current_idx = 0
        self.mode = MODE_DETAIL
        self.status = "Loading battles..."

    def load(self):
        try:
            self.battles = self.db.get_battles_for_player(self.player_tag)
        except sqlite3.Error as exc:
            logger.error(f"Error loading battles: {exc}")
            self.status = f"Error loading battles: {exc}"
            return

        self.current_idx = 0
        if self.battles:
            self.status = f"Loaded {len(self.battles)} battles for player {self.player_tag}"
        else:
            self.status = f"No battles found for player {self.player_tag}"

    def handle_key(self, key: str) -> bool:
        """Apply one key press. Returns False when the viewer should exit."""
        key = key.strip().lower()

        if key == "q":
            return False
        if key == "j" and self.battles:
            self.current_idx = (self.current_idx + 1) % len(self.battles)
        elif key == "k" and self.battles:
            self.current_idx = (self.current_idx - 1) % len(self.battles)
        elif key == "s":
            self.mode = MODE_DETAIL if self.mode == MODE_STATS else MODE_STATS
            self.status = f"Switched to {self.mode} view"
        elif key == "a":
            self.mode = MODE_DETAIL if self.mode == MODE_ANALYTICS else MODE_ANALYTICS
            self.status = f"Switched to {self.mode} view"
        elif key == "r":
            self.load()
        return True

    def render(self) -> str:
        theme = self.theme
        parts = [theme.title.render("=== Clash Royale Battle Logger ==="), ""]

        if not self.battles:
            parts += [theme.status.render(self.status), "", theme.help.render("Press 'R' to reload, 'Q' to quit")]
            return "\n".join(parts)

        if self.mode == MODE_STATS:
            parts.append(render_stats(calculate_stats(self.battles), theme))
        elif self.mode == MODE_ANALYTICS:
            analytics = compute(self.battles, self.player_tag, self.target_trophies, now=self.now)
            recent = recent_battles_frame(self.battles, self.player_tag)
            parts.append(render_dashboard(analytics, theme, recent_battles=recent))
        else:
            battle = self.battles[self.current_idx]
            parts.append(render_battle_detail(battle, self.current_idx, len(self.battles), theme))

        parts += ["", theme.status.render(self.status), theme.help.render(HELP)]
        return "\n".join(parts)

    def run(
        self,
        read_key: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ):
        self.load()
        while True:
            write(self.render())
            try:
                key = read_key("> ")
            except (EOFError, KeyboardInterrupt):
                break
            if not self.handle_key(key):
                break
