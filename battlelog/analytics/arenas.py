# battlelog/analytics/arenas.py
"""Per-arena performance in first-seen order."""

from __future__ import annotations

from ..models import Battle
from .resolver import is_win, percentage, resolved_battles
from .schemas import ArenaStats


def compute_arenas(battles: list[Battle], player_tag: str) -> list[ArenaStats]:
    by_arena: dict[str, ArenaStats] = {}
    three_crown_wins: dict[str, int] = {}
    trophy_totals: dict[str, int] = {}

    for battle, me, opponent in resolved_battles(battles, player_tag):
        name = battle.arena.name
        if not name:
            continue

        stats = by_arena.get(name)
        if stats is None:
            stats = by_arena[name] = ArenaStats(arena_name=name)
            three_crown_wins[name] = 0
            trophy_totals[name] = 0

        stats.battles += 1
        trophy_totals[name] += me.trophy_change
        if is_win(me.crowns, opponent.crowns):
            stats.wins += 1
            if me.crowns == 3:
                three_crown_wins[name] += 1

    current_arena = battles[-1].arena.name if battles else ""

    for name, stats in by_arena.items():
        stats.win_rate = percentage(stats.wins, stats.battles)
        stats.avg_trophy_gain = trophy_totals[name] / stats.battles
        if stats.wins:
            stats.three_crown_rate = three_crown_wins[name] / stats.wins * 100
        stats.is_current = name == current_arena

    return list(by_arena.values())
