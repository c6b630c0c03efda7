# battlelog/analytics/card_impact.py
"""Card impact: win rate per card level for the cards of the current deck.

Only cards in the latest deck are tracked. Cards that were played earlier
and have since left the deck are ignored.
"""

from __future__ import annotations

from ..models import Battle, Card
from .resolver import is_win, percentage, resolve, resolved_battles
from .schemas import CardImpact, LevelPerformance, UpgradeWindow


def latest_deck(battles: list[Battle], player_tag: str) -> list[Card]:
    """Deck of the latest resolvable battle."""
    for battle in reversed(battles):
        pair = resolve(battle, player_tag)
        if pair is not None:
            return pair[0].cards
    return []


def find_card(deck: list[Card], name: str) -> Card | None:
    for card in deck:
        if card.name == name:
            return card
    return None


def since_last_upgrade(
    battles: list[Battle], player_tag: str, card_name: str, current_level: int
) -> UpgradeWindow:
    """Battles played with the card at `current_level`, counted from the first such battle.

    Later battles at a different level are skipped, not used as a cut-off.
    """
    window = UpgradeWindow()
    wins = 0

    for _battle, me, opponent in resolved_battles(battles, player_tag):
        card = find_card(me.cards, card_name)
        if card is not None and card.level == current_level:
            window.battles += 1
            if is_win(me.crowns, opponent.crowns):
                wins += 1

    window.win_rate = percentage(wins, window.battles)
    return window


def compute_card_impact(battles: list[Battle], player_tag: str) -> list[CardImpact]:
    deck = latest_deck(battles, player_tag)
    impacts: dict[str, CardImpact] = {}
    for card in deck:
        impacts.setdefault(card.name, CardImpact(card_name=card.name, current_level=card.level))

    for _battle, me, opponent in resolved_battles(battles, player_tag):
        won = is_win(me.crowns, opponent.crowns)
        for card in me.cards:
            impact = impacts.get(card.name)
            if impact is None:
                continue
            bucket = impact.battles_at_level.setdefault(card.level, LevelPerformance())
            bucket.battles += 1
            if won:
                bucket.wins += 1

    for impact in impacts.values():
        for bucket in impact.battles_at_level.values():
            bucket.win_rate = percentage(bucket.wins, bucket.battles)
        impact.battles_at_level = dict(sorted(impact.battles_at_level.items()))
        impact.since_last_upgrade = since_last_upgrade(
            battles, player_tag, impact.card_name, impact.current_level
        )

    return list(impacts.values())
