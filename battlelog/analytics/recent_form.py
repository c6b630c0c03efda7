# battlelog/analytics/recent_form.py
"""Recent form: the last 10 / 20 / 50 battles and today's session."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from ..models import Battle
from .resolver import is_win, parse_battle_time, percentage, resolved_battles
from .schemas import RecentForm, SessionStats

logger = logging.getLogger(__name__)


def summarize_session(battles: list[Battle], player_tag: str) -> SessionStats:
    """Wins, win rate and trophy movement over the resolvable battles given."""
    session = SessionStats()
    for _battle, me, opponent in resolved_battles(battles, player_tag):
        session.battles += 1
        if is_win(me.crowns, opponent.crowns):
            session.wins += 1
        session.trophy_change += me.trophy_change

    session.win_rate = percentage(session.wins, session.battles)
    if session.battles:
        session.avg_trophy_per_battle = session.trophy_change / session.battles
    return session


def compute_session(battles: list[Battle], player_tag: str, n: int) -> SessionStats:
    """Summary of the `n` latest battles (clipped to what exists)."""
    if n <= 0:
        return SessionStats()
    return summarize_session(battles[-n:], player_tag)


def start_of_day(now: datetime) -> datetime:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def compute_today_session(
    battles: list[Battle], player_tag: str, now: datetime | None = None
) -> SessionStats:
    """Battles since 00:00 UTC of `now`'s day, walking back from the latest."""
    day_start = start_of_day(now or datetime.now(timezone.utc))

    todays: list[Battle] = []
    for battle in reversed(battles):
        played_at = parse_battle_time(battle.battle_time)
        if played_at is None:
            logger.debug(f"Skipping battle with unparsable time {battle.battle_time!r}")
            continue
        if played_at < day_start:
            break
        todays.append(battle)

    todays.reverse()
    return summarize_session(todays, player_tag)


def compute_recent_form(
    battles: list[Battle], player_tag: str, now: datetime | None = None
) -> RecentForm:
    return RecentForm(
        last10=compute_session(battles, player_tag, 10),
        last20=compute_session(battles, player_tag, 20),
        last50=compute_session(battles, player_tag, 50),
        today=compute_today_session(battles, player_tag, now=now),
    )
