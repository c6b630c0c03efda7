# battlelog/analytics/projection.py
"""Trophy projection: how many battles and days to reach a target.

Model:
- Expected trophies per battle = wr * AVG_WIN_GAIN + (1 - wr) * AVG_LOSS_COST
- Battles needed = ceil(trophies needed / expected gain)
- Days needed = ceil(battles needed / battles played per day)

The target is treated as unreachable at a win rate of 50% or below.
"""

from __future__ import annotations

import math

from ..models import Battle
from .recent_form import compute_session
from .resolver import parse_battle_time, resolved_battles
from .schemas import TrophyProjection

AVG_WIN_GAIN = 30.0
AVG_LOSS_COST = -25.0
MIN_VIABLE_WIN_RATE = 0.5

NEVER = "Never at this rate"


def estimate_battles_needed(trophies_needed: int, win_rate: float) -> int | None:
    """Battles to gain `trophies_needed` at `win_rate` (a fraction), or None if unreachable."""
    if win_rate <= MIN_VIABLE_WIN_RATE:
        return None
    gain = win_rate * AVG_WIN_GAIN + (1 - win_rate) * AVG_LOSS_COST
    if gain <= 0:
        return None
    return math.ceil(trophies_needed / gain)


def battles_per_day(battles: list[Battle]) -> float:
    """Average battles per day between the earliest and latest parseable timestamps.

    With fewer than two parseable timestamps, or a span under one day, the
    number of battles is taken as the daily rate.
    """
    times = [t for t in (parse_battle_time(b.battle_time) for b in battles) if t is not None]
    if not times:
        return 0.0
    if len(times) < 2:
        return float(len(battles))

    span_days = (max(times) - min(times)).total_seconds() / 86400
    if span_days < 1:
        return float(len(battles))
    return len(battles) / span_days


def format_days(days: int | None) -> str:
    if days is None or days < 0:
        return NEVER
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    return f"In {days} days"


def compute_projection(
    battles: list[Battle], player_tag: str, target_trophies: int
) -> TrophyProjection:
    resolved = list(resolved_battles(battles, player_tag))
    if not resolved:
        return TrophyProjection()

    current = sum(me.trophy_change for _battle, me, _opponent in resolved)
    if target_trophies <= current:
        return TrophyProjection(target_trophies=target_trophies, already_reached=True)

    projection = TrophyProjection(target_trophies=target_trophies)
    projection.realistic_wr = compute_session(battles, player_tag, 50).win_rate
    projection.optimistic_wr = compute_session(battles, player_tag, 20).win_rate
    projection.pessimistic_wr = compute_session(battles, player_tag, len(battles)).win_rate

    projection.battles_needed = estimate_battles_needed(
        target_trophies - current, projection.realistic_wr / 100
    )

    per_day = battles_per_day([battle for battle, _me, _opponent in resolved])
    if projection.battles_needed is None or per_day <= 0:
        projection.days_needed = None
    else:
        projection.days_needed = math.ceil(projection.battles_needed / per_day)

    projection.estimated_date = format_days(projection.days_needed)
    return projection
