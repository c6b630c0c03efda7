# battlelog/analytics/loss_insights.py
"""Loss insights: what losses have in common, and the current losing run."""

from __future__ import annotations

from ..models import Battle
from .elixir import HIGH_LEAK_THRESHOLD
from .resolver import is_loss, resolve, resolved_battles
from .schemas import LossInsights

# Share of losses above which a pattern is called out.
HIGH_LEAK_NOTE_SHARE = 0.5
CLOSE_LOSS_NOTE_SHARE = 0.4


def is_close_loss(my_crowns: int, opponent_crowns: int) -> bool:
    """A 0-1 loss, or a loss in which the player still took a crown."""
    if opponent_crowns == 1 and my_crowns == 0:
        return True
    return opponent_crowns > my_crowns > 0


def recent_loss_streak(battles: list[Battle], player_tag: str) -> int:
    streak = 0
    for battle in reversed(battles):
        pair = resolve(battle, player_tag)
        if pair is None:
            continue
        me, opponent = pair
        if not is_loss(me.crowns, opponent.crowns):
            break
        streak += 1
    return streak


def compute_loss_insights(battles: list[Battle], player_tag: str) -> LossInsights:
    insights = LossInsights()

    for _battle, me, opponent in resolved_battles(battles, player_tag):
        if not is_loss(me.crowns, opponent.crowns):
            continue
        insights.total_losses += 1
        if me.elixir_leaked is not None and me.elixir_leaked > HIGH_LEAK_THRESHOLD:
            insights.high_elixir_leak_losses += 1
        if is_close_loss(me.crowns, opponent.crowns):
            insights.one_crown_defense_losses += 1

    if insights.total_losses:
        leak_share = insights.high_elixir_leak_losses / insights.total_losses
        if leak_share > HIGH_LEAK_NOTE_SHARE:
            insights.common_notes.append(
                f"{int(leak_share * 100)}% of losses occur with high elixir leak (>2.0)."
            )
        close_share = insights.one_crown_defense_losses / insights.total_losses
        if close_share > CLOSE_LOSS_NOTE_SHARE:
            insights.common_notes.append(
                f"{int(close_share * 100)}% of losses are close (decided by one crown)."
            )

    insights.recent_loss_streak = recent_loss_streak(battles, player_tag)
    return insights
