# battlelog/analytics/schemas.py
"""Data models for battle analytics outputs.

All models are:
- Deterministic (same battles in, same numbers out)
- JSON-serializable via to_dict() / to_json()
- Zero-valued by default, so an empty history yields a usable result

Rates are percentages in [0, 100].
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any
import json


def _r(value: float | None, digits: int = 2) -> float | None:
    return None if value is None else round(value, digits)


@dataclass
class OverallStats:
    """Career totals over every resolvable battle."""
    total_battles: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0
    three_crown_wins: int = 0
    three_crown_rate: float = 0.0
    current_streak: int = 0  # +N wins in a row, -N losses in a row
    longest_win_streak: int = 0
    total_trophy_gain: int = 0
    current_trophies: int = 0  # relative to the first stored battle
    peak_trophies: int = 0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["win_rate"] = _r(self.win_rate)
        data["three_crown_rate"] = _r(self.three_crown_rate)
        return data


@dataclass
class SessionStats:
    """Summary of one window of battles."""
    battles: int = 0
    wins: int = 0
    win_rate: float = 0.0
    trophy_change: int = 0
    avg_trophy_per_battle: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["win_rate"] = _r(self.win_rate)
        data["avg_trophy_per_battle"] = _r(self.avg_trophy_per_battle)
        return data


@dataclass
class RecentForm:
    last10: SessionStats = field(default_factory=SessionStats)
    last20: SessionStats = field(default_factory=SessionStats)
    last50: SessionStats = field(default_factory=SessionStats)
    today: SessionStats = field(default_factory=SessionStats)

    def to_dict(self) -> dict[str, Any]:
        return {
            "last10": self.last10.to_dict(),
            "last20": self.last20.to_dict(),
            "last50": self.last50.to_dict(),
            "today": self.today.to_dict(),
        }


@dataclass
class ArenaStats:
    arena_name: str
    battles: int = 0
    wins: int = 0
    win_rate: float = 0.0
    avg_trophy_gain: float = 0.0
    three_crown_rate: float | None = None  # undefined without wins
    is_current: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "arena_name": self.arena_name,
            "battles": self.battles,
            "wins": self.wins,
            "win_rate": _r(self.win_rate),
            "avg_trophy_gain": _r(self.avg_trophy_gain),
            "three_crown_rate": _r(self.three_crown_rate),
            "is_current": self.is_current,
        }


@dataclass
class TrophyProjection:
    """Estimate of the road to a trophy target.

    battles_needed / days_needed are None when the target is unreachable at
    the realistic win rate.
    """
    target_trophies: int = 0
    battles_needed: int | None = 0
    days_needed: int | None = 0
    realistic_wr: float = 0.0  # last 50
    optimistic_wr: float = 0.0  # last 20
    pessimistic_wr: float = 0.0  # career
    estimated_date: str = ""
    already_reached: bool = False

    @property
    def horizon(self) -> str:
        if self.already_reached:
            return "Already there"
        return self.estimated_date

    def to_dict(self) -> dict[str, Any]:
        return {
            "target_trophies": self.target_trophies,
            "battles_needed": self.battles_needed,
            "days_needed": self.days_needed,
            "realistic_wr": _r(self.realistic_wr),
            "optimistic_wr": _r(self.optimistic_wr),
            "pessimistic_wr": _r(self.pessimistic_wr),
            "estimated_date": self.estimated_date,
            "horizon": self.horizon,
        }


@dataclass
class ElixirStats:
    avg_leak_wins: float = 0.0
    avg_leak_losses: float = 0.0
    max_leak_in_loss: float = 0.0
    high_leak_losses: int = 0  # leak > 2.0
    leak_improvement: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "avg_leak_wins": _r(self.avg_leak_wins),
            "avg_leak_losses": _r(self.avg_leak_losses),
            "max_leak_in_loss": _r(self.max_leak_in_loss),
            "high_leak_losses": self.high_leak_losses,
            "leak_improvement": self.leak_improvement,
        }


@dataclass
class CrownStats:
    avg_crowns_taken: float = 0.0
    avg_crowns_conceded: float = 0.0
    win_types: dict[str, int] = field(default_factory=dict)  # "3-1" -> count
    loss_types: dict[str, int] = field(default_factory=dict)
    aggression_score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "avg_crowns_taken": _r(self.avg_crowns_taken),
            "avg_crowns_conceded": _r(self.avg_crowns_conceded),
            "win_types": dict(self.win_types),
            "loss_types": dict(self.loss_types),
            "aggression_score": _r(self.aggression_score),
        }


@dataclass
class LevelPerformance:
    battles: int = 0
    wins: int = 0
    win_rate: float = 0.0


@dataclass
class UpgradeWindow:
    battles: int = 0
    win_rate: float = 0.0


@dataclass
class CardImpact:
    """How one card of the current deck performed at each level."""
    card_name: str
    current_level: int = 0
    battles_at_level: dict[int, LevelPerformance] = field(default_factory=dict)
    since_last_upgrade: UpgradeWindow = field(default_factory=UpgradeWindow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "card_name": self.card_name,
            "current_level": self.current_level,
            "battles_at_level": {
                str(level): {
                    "battles": perf.battles,
                    "wins": perf.wins,
                    "win_rate": _r(perf.win_rate),
                }
                for level, perf in self.battles_at_level.items()
            },
            "since_last_upgrade": {
                "battles": self.since_last_upgrade.battles,
                "win_rate": _r(self.since_last_upgrade.win_rate),
            },
        }


@dataclass
class LossInsights:
    total_losses: int = 0
    high_elixir_leak_losses: int = 0
    one_crown_defense_losses: int = 0  # close losses
    common_notes: list[str] = field(default_factory=list)
    recent_loss_streak: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ChallengeProof:
    """Evidence of progress since the first stored battle."""
    start_arena: str = ""
    start_trophies: int = 0
    current_trophies: int = 0
    battles_since_start: int = 0
    trophies_gained: int = 0
    win_rate_since_start: float = 0.0
    unique_cards_used: int = 0
    deck_unchanged_since: str = ""
    milestone_message: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["win_rate_since_start"] = _r(self.win_rate_since_start)
        return data


@dataclass
class Analytics:
    """Full analytics snapshot for one player. Recomputed on every call."""
    overall: OverallStats = field(default_factory=OverallStats)
    recent: RecentForm = field(default_factory=RecentForm)
    arenas: list[ArenaStats] = field(default_factory=list)
    projection: TrophyProjection = field(default_factory=TrophyProjection)
    elixir: ElixirStats = field(default_factory=ElixirStats)
    crowns: CrownStats = field(default_factory=CrownStats)
    cards: list[CardImpact] = field(default_factory=list)
    losses: LossInsights = field(default_factory=LossInsights)
    challenge: ChallengeProof = field(default_factory=ChallengeProof)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall": self.overall.to_dict(),
            "recent": self.recent.to_dict(),
            "arenas": [a.to_dict() for a in self.arenas],
            "projection": self.projection.to_dict(),
            "elixir": self.elixir.to_dict(),
            "crowns": self.crowns.to_dict(),
            "cards": [c.to_dict() for c in self.cards],
            "losses": self.losses.to_dict(),
            "challenge": self.challenge.to_dict(),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
