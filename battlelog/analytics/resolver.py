# battlelog/analytics/resolver.py
"""Participant resolution and the small helpers every aggregator shares.

A battle is *resolvable* when the tracked player's tag appears in it. The
primary adversary is the first participant on the opposite side, which is
`opponent[0]` for normal battle log data.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, Iterator, Optional

from ..models import Battle, Participant

logger = logging.getLogger(__name__)

# API timestamps look like 20250101T120000.000Z
BATTLE_TIME_FORMATS = ("%Y%m%dT%H%M%S.%fZ", "%Y%m%dT%H%M%SZ")


def find_my_participant(battle: Battle, player_tag: str) -> Optional[Participant]:
    """Return the tracked player's participant record, searching team then opponent."""
    for participant in battle.team:
        if participant.tag == player_tag:
            return participant
    for participant in battle.opponent:
        if participant.tag == player_tag:
            return participant
    return None


def primary_opponent(battle: Battle, player_tag: str) -> Optional[Participant]:
    """First participant on the side the tracked player is not on."""
    if any(p.tag == player_tag for p in battle.team):
        return battle.opponent[0] if battle.opponent else None
    if any(p.tag == player_tag for p in battle.opponent):
        return battle.team[0] if battle.team else None
    return None


def resolve(battle: Battle, player_tag: str) -> Optional[tuple[Participant, Participant]]:
    """(me, adversary) or None when the battle cannot be scored for this player."""
    me = find_my_participant(battle, player_tag)
    if me is None:
        return None
    opponent = primary_opponent(battle, player_tag)
    if opponent is None:
        return None
    return me, opponent


def resolved_battles(
    battles: Iterable[Battle], player_tag: str
) -> Iterator[tuple[Battle, Participant, Participant]]:
    """Yield (battle, me, adversary) for each resolvable battle, preserving order."""
    for battle in battles:
        pair = resolve(battle, player_tag)
        if pair is not None:
            yield battle, pair[0], pair[1]


def is_win(my_crowns: int, opponent_crowns: int) -> bool:
    return my_crowns > opponent_crowns


def is_loss(my_crowns: int, opponent_crowns: int) -> bool:
    return my_crowns < opponent_crowns


def percentage(part: float, whole: float) -> float:
    """part / whole * 100, or 0.0 when whole is zero."""
    if not whole:
        return 0.0
    return part / whole * 100


def parse_battle_time(value: str) -> Optional[datetime]:
    """Parse an API battle timestamp into an aware UTC datetime, or None."""
    if not value:
        return None
    for fmt in BATTLE_TIME_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Unparsable battle time: {value!r}")
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
