# battlelog/analytics/performance.py
"""Overall performance: win rate, three-crown rate, trophies and streaks."""

from __future__ import annotations

from ..models import Battle
from .resolver import is_loss, is_win, percentage, resolve, resolved_battles
from .schemas import OverallStats


def compute_streaks(battles: list[Battle], player_tag: str) -> tuple[int, int]:
    """Walk back from the latest battle.

    Returns (current_streak, longest_win_streak). The current streak is
    positive for consecutive wins ending at the latest battle and negative
    for consecutive losses. Ties and unresolvable battles are ignored.
    """
    current = 0
    current_open = True
    longest = 0
    run = 0

    for battle in reversed(battles):
        pair = resolve(battle, player_tag)
        if pair is None:
            continue
        me, opponent = pair

        if is_win(me.crowns, opponent.crowns):
            run += 1
            longest = max(longest, run)
            if current_open:
                if current >= 0:
                    current += 1
                else:
                    current_open = False
        elif is_loss(me.crowns, opponent.crowns):
            run = 0
            if current_open:
                if current <= 0:
                    current -= 1
                else:
                    current_open = False

    return current, longest


def compute_overall(battles: list[Battle], player_tag: str) -> OverallStats:
    """Career totals over `battles` (oldest first)."""
    stats = OverallStats()
    running = 0

    for _battle, me, opponent in resolved_battles(battles, player_tag):
        stats.total_battles += 1
        if is_win(me.crowns, opponent.crowns):
            stats.wins += 1
            if me.crowns == 3:
                stats.three_crown_wins += 1
        elif is_loss(me.crowns, opponent.crowns):
            stats.losses += 1

        running += me.trophy_change
        stats.peak_trophies = max(stats.peak_trophies, running)

    stats.total_trophy_gain = running
    stats.current_trophies = running
    stats.win_rate = percentage(stats.wins, stats.total_battles)
    stats.three_crown_rate = percentage(stats.three_crown_wins, stats.wins)
    stats.current_streak, stats.longest_win_streak = compute_streaks(battles, player_tag)
    return stats
