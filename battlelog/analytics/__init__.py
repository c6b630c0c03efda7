"""Battle Analytics.

Deterministic aggregators over a player's stored battle history.

Modules:
- schemas: Data models for all analytics outputs (JSON-serializable)
- resolver: Find the tracked player and the adversary in a battle
- performance: Career win rate, three-crown rate, trophies, streaks
- recent_form: Last 10 / 20 / 50 battles and today's session
- arenas: Per-arena performance
- projection: Battles and days to a trophy target
- elixir: Elixir leak in wins vs losses
- crowns: Crown averages and outcome distributions
- card_impact: Win rate per card level for the current deck
- loss_insights: Common traits of losses
- challenge_proof: Progress since the first stored battle
- aggregator: Compose all modules into one Analytics snapshot
"""

from .schemas import (
    Analytics,
    ArenaStats,
    CardImpact,
    ChallengeProof,
    CrownStats,
    ElixirStats,
    LossInsights,
    OverallStats,
    RecentForm,
    SessionStats,
    TrophyProjection,
)
from .aggregator import compute, compute_for_player

__all__ = [
    "Analytics",
    "ArenaStats",
    "CardImpact",
    "ChallengeProof",
    "CrownStats",
    "ElixirStats",
    "LossInsights",
    "OverallStats",
    "RecentForm",
    "SessionStats",
    "TrophyProjection",
    "compute",
    "compute_for_player",
]
