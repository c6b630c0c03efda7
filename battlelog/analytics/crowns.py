# battlelog/analytics/crowns.py
"""Crown outcomes: averages, result distributions and aggression."""

from __future__ import annotations

from collections import Counter

from ..models import Battle
from .resolver import is_loss, is_win, percentage, resolved_battles
from .schemas import CrownStats

# Wins where the player took all three crowns.
AGGRESSIVE_WIN_TYPES = ("3-0", "3-1", "3-2")


def outcome_key(my_crowns: int, opponent_crowns: int) -> str:
    return f"{my_crowns}-{opponent_crowns}"


def compute_crowns(battles: list[Battle], player_tag: str) -> CrownStats:
    stats = CrownStats()
    win_types: Counter[str] = Counter()
    loss_types: Counter[str] = Counter()
    taken = 0
    conceded = 0
    total = 0

    for _battle, me, opponent in resolved_battles(battles, player_tag):
        total += 1
        taken += me.crowns
        conceded += opponent.crowns
        key = outcome_key(me.crowns, opponent.crowns)
        if is_win(me.crowns, opponent.crowns):
            win_types[key] += 1
        elif is_loss(me.crowns, opponent.crowns):
            loss_types[key] += 1

    if total:
        stats.avg_crowns_taken = taken / total
        stats.avg_crowns_conceded = conceded / total

    stats.win_types = dict(sorted(win_types.items()))
    stats.loss_types = dict(sorted(loss_types.items()))

    wins = sum(win_types.values())
    aggressive = sum(win_types[k] for k in AGGRESSIVE_WIN_TYPES)
    stats.aggression_score = percentage(aggressive, wins)
    return stats
