# battlelog/analytics/elixir.py
"""Elixir leak in wins versus losses."""

from __future__ import annotations

from ..models import Battle
from .resolver import is_loss, is_win, resolved_battles
from .schemas import ElixirStats

# A loss with more leaked elixir than this counts as a high-leak loss.
HIGH_LEAK_THRESHOLD = 2.0


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def compute_elixir(battles: list[Battle], player_tag: str) -> ElixirStats:
    stats = ElixirStats()
    win_leaks: list[float] = []
    loss_leaks: list[float] = []

    for _battle, me, opponent in resolved_battles(battles, player_tag):
        if me.elixir_leaked is None:
            continue
        if is_win(me.crowns, opponent.crowns):
            win_leaks.append(me.elixir_leaked)
        elif is_loss(me.crowns, opponent.crowns):
            loss_leaks.append(me.elixir_leaked)
            stats.max_leak_in_loss = max(stats.max_leak_in_loss, me.elixir_leaked)
            if me.elixir_leaked > HIGH_LEAK_THRESHOLD:
                stats.high_leak_losses += 1

    stats.avg_leak_wins = _mean(win_leaks)
    stats.avg_leak_losses = _mean(loss_leaks)

    if stats.avg_leak_losses > stats.avg_leak_wins:
        diff = stats.avg_leak_losses - stats.avg_leak_wins
        stats.leak_improvement = f"You leak {diff:.1f} more elixir in losses than in wins."
    else:
        stats.leak_improvement = "Your elixir management is consistent across wins and losses."
    return stats
