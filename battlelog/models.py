"""
Battle data types.

Dataclasses for one battle log entry as returned by the Clash Royale API
and as read back from the local SQLite store. `from_dict` accepts the API's
camelCase JSON; `to_dict` produces the same shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

# Ladder (trophy road) game mode. Only PvP battles in this mode are stored.
LADDER_GAME_MODE_ID = 72000006
LADDER_BATTLE_TYPE = "PvP"


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass
class Arena:
    id: int = 0
    name: str = ""

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> Arena:
        data = data or {}
        return cls(id=_as_int(data.get("id")), name=str(data.get("name") or ""))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass
class GameMode:
    id: int = 0
    name: str = ""

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> GameMode:
        data = data or {}
        return cls(id=_as_int(data.get("id")), name=str(data.get("name") or ""))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass
class Card:
    """A card as it was played in one battle.

    `level` is the level in that battle, so the same card id shows up with
    different levels over a player's history.
    """
    id: int
    name: str
    level: int = 0
    max_level: int = 0
    rarity: str = ""
    elixir_cost: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Card:
        return cls(
            id=_as_int(data.get("id")),
            name=str(data.get("name") or ""),
            level=_as_int(data.get("level")),
            max_level=_as_int(data.get("maxLevel")),
            rarity=str(data.get("rarity") or ""),
            elixir_cost=_as_int(data.get("elixirCost")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "level": self.level,
            "maxLevel": self.max_level,
            "rarity": self.rarity,
            "elixirCost": self.elixir_cost,
        }


@dataclass
class Participant:
    """One player's side of a battle."""
    tag: str
    name: str = ""
    starting_trophies: int = 0
    trophy_change: int = 0
    crowns: int = 0
    elixir_leaked: Optional[float] = None  # absent on some entries
    cards: list[Card] = field(default_factory=list)
    support_cards: list[Card] = field(default_factory=list)

    @property
    def final_trophies(self) -> int:
        return self.starting_trophies + self.trophy_change

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Participant:
        leaked = data.get("elixirLeaked")
        return cls(
            tag=str(data.get("tag") or ""),
            name=str(data.get("name") or ""),
            starting_trophies=_as_int(data.get("startingTrophies")),
            trophy_change=_as_int(data.get("trophyChange")),
            crowns=_as_int(data.get("crowns")),
            elixir_leaked=float(leaked) if leaked is not None else None,
            cards=[Card.from_dict(c) for c in data.get("cards") or []],
            support_cards=[Card.from_dict(c) for c in data.get("supportCards") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "tag": self.tag,
            "name": self.name,
            "startingTrophies": self.starting_trophies,
            "trophyChange": self.trophy_change,
            "crowns": self.crowns,
            "cards": [c.to_dict() for c in self.cards],
            "supportCards": [c.to_dict() for c in self.support_cards],
        }
        if self.elixir_leaked is not None:
            result["elixirLeaked"] = self.elixir_leaked
        return result


@dataclass
class Battle:
    """One battle log entry. `battle_time` is the API timestamp and the battle's key."""
    battle_time: str
    battle_type: str = ""
    arena: Arena = field(default_factory=Arena)
    game_mode: GameMode = field(default_factory=GameMode)
    team: list[Participant] = field(default_factory=list)
    opponent: list[Participant] = field(default_factory=list)

    @property
    def is_ladder(self) -> bool:
        return self.battle_type == LADDER_BATTLE_TYPE and self.game_mode.id == LADDER_GAME_MODE_ID

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Battle:
        return cls(
            battle_time=str(data.get("battleTime") or ""),
            battle_type=str(data.get("type") or ""),
            arena=Arena.from_dict(data.get("arena")),
            game_mode=GameMode.from_dict(data.get("gameMode")),
            team=[Participant.from_dict(p) for p in data.get("team") or []],
            opponent=[Participant.from_dict(p) for p in data.get("opponent") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "battleTime": self.battle_time,
            "type": self.battle_type,
            "arena": self.arena.to_dict(),
            "gameMode": self.game_mode.to_dict(),
            "team": [p.to_dict() for p in self.team],
            "opponent": [p.to_dict() for p in self.opponent],
        }
