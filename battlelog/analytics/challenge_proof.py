# battlelog/analytics/challenge_proof.py
"""Challenge proof: progress made since the first stored battle."""

from __future__ import annotations

from datetime import datetime

from ..models import Battle, Card
from .resolver import is_win, parse_battle_time, percentage, resolved_battles
from .schemas import ChallengeProof

DECK_CHANGED = "Deck has changed"


def decks_match(first: list[Card], second: list[Card]) -> bool:
    """Same size and every card of `second` appears (by name) in `first`."""
    if len(first) != len(second):
        return False
    names = {card.name for card in first}
    return all(card.name in names for card in second)


def format_day(moment: datetime) -> str:
    """E.g. 'Jan 2, 2006'."""
    return f"{moment:%b} {moment.day}, {moment.year}"


def compute_challenge_proof(battles: list[Battle], player_tag: str) -> ChallengeProof:
    resolved = list(resolved_battles(battles, player_tag))
    if not resolved:
        return ChallengeProof()

    first_battle, first_me, _ = resolved[0]
    _, last_me, _ = resolved[-1]

    proof = ChallengeProof()
    proof.start_arena = first_battle.arena.name
    proof.start_trophies = first_me.starting_trophies
    proof.current_trophies = last_me.starting_trophies + last_me.trophy_change
    proof.trophies_gained = proof.current_trophies - proof.start_trophies
    proof.battles_since_start = len(resolved)

    wins = sum(1 for _b, me, opponent in resolved if is_win(me.crowns, opponent.crowns))
    proof.win_rate_since_start = percentage(wins, len(resolved))

    card_names: set[str] = set()
    for _battle, me, _opponent in resolved:
        card_names.update(card.name for card in me.cards)
    proof.unique_cards_used = len(card_names)

    if decks_match(first_me.cards, last_me.cards):
        started = parse_battle_time(first_battle.battle_time)
        proof.deck_unchanged_since = format_day(started) if started else first_battle.battle_time
    else:
        proof.deck_unchanged_since = DECK_CHANGED

    proof.milestone_message = (
        f"From {proof.start_arena} to {proof.current_trophies} trophies: "
        f"a {proof.trophies_gained:+d} journey."
    )
    return proof
