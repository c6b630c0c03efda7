"""Battle factories shared by the test suite.

Every factory takes keyword overrides so a test only spells out the fields
it cares about.
"""

from datetime import datetime, timedelta, timezone

from battlelog.models import (
    LADDER_GAME_MODE_ID,
    Arena,
    Battle,
    Card,
    GameMode,
    Participant,
)

ME = "#ME123"
OPPONENT = "#OPP456"

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

DEFAULT_DECK = [
    "Knight", "Archers", "Fireball", "Hog Rider",
    "Musketeer", "Zap", "Ice Spirit", "Cannon",
]
OPPONENT_DECK = [
    "Giant", "Witch", "Arrows", "Mini P.E.K.K.A",
    "Baby Dragon", "Goblin Gang", "Skeletons", "Tesla",
]

_card_ids: dict[str, int] = {}


def card_id(name: str) -> int:
    """Stable id per card name within a test run."""
    return _card_ids.setdefault(name, 26000000 + len(_card_ids))


def api_time(moment: datetime) -> str:
    return moment.strftime("%Y%m%dT%H%M%S.000Z")


def make_card(name: str = "Knight", level: int = 11, **overrides) -> Card:
    data = dict(
        id=card_id(name),
        name=name,
        level=level,
        max_level=14,
        rarity="common",
        elixir_cost=3,
    )
    data.update(overrides)
    return Card(**data)


def make_deck(names=None, level: int = 11, levels=None) -> list[Card]:
    """Eight cards at `level`; `levels` maps card name -> level for exceptions."""
    levels = levels or {}
    return [make_card(name, levels.get(name, level)) for name in (names or DEFAULT_DECK)]


def make_participant(tag: str = ME, **overrides) -> Participant:
    data = dict(
        tag=tag,
        name="Me" if tag == ME else "Opponent",
        starting_trophies=5000,
        trophy_change=0,
        crowns=0,
        elixir_leaked=None,
        cards=make_deck(DEFAULT_DECK if tag == ME else OPPONENT_DECK),
        support_cards=[],
    )
    data.update(overrides)
    return Participant(**data)


def make_battle(
    my_crowns: int = 1,
    opp_crowns: int = 0,
    *,
    index: int = 0,
    when: datetime = None,
    arena: str = "Legendary Arena",
    arena_id: int = 54000000,
    trophy_change: int = None,
    starting_trophies: int = 5000,
    elixir_leaked: float = None,
    cards=None,
    opp_cards=None,
    battle_type: str = "PvP",
    game_mode_id: int = LADDER_GAME_MODE_ID,
    me_tag: str = ME,
) -> Battle:
    """One 1v1 battle between ME and OPPONENT, `index` hours after BASE_TIME."""
    if trophy_change is None:
        if my_crowns > opp_crowns:
            trophy_change = 30
        elif my_crowns < opp_crowns:
            trophy_change = -25
        else:
            trophy_change = 0

    me = make_participant(
        me_tag,
        crowns=my_crowns,
        trophy_change=trophy_change,
        starting_trophies=starting_trophies,
        elixir_leaked=elixir_leaked,
    )
    if cards is not None:
        me.cards = cards
    opponent = make_participant(
        OPPONENT,
        crowns=opp_crowns,
        trophy_change=-trophy_change,
        starting_trophies=starting_trophies,
    )
    if opp_cards is not None:
        opponent.cards = opp_cards

    return Battle(
        battle_time=api_time(when or BASE_TIME + timedelta(hours=index)),
        battle_type=battle_type,
        arena=Arena(id=arena_id, name=arena),
        game_mode=GameMode(id=game_mode_id, name="Ladder"),
        team=[me],
        opponent=[opponent],
    )


RESULT_CROWNS = {"W": (1, 0), "L": (0, 1), "T": (1, 1)}


def make_history(results: str, start: int = 0, **overrides) -> list[Battle]:
    """Chronological battles from a string like 'WWLT' (win/loss/tie)."""
    battles = []
    for offset, result in enumerate(results):
        my_crowns, opp_crowns = RESULT_CROWNS[result]
        battles.append(make_battle(my_crowns, opp_crowns, index=start + offset, **overrides))
    return battles
