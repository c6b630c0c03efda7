# battlelog/analytics/aggregator.py
"""Analytics Aggregator: compose every module into one Analytics snapshot.

This is the main entry point for the analytics pipeline.

Pipeline:
Battle log (API)
 └─▶ SQLite store (database.py)
     └─▶ Chronological battle list
         └─▶ Aggregators (this package)
             └─▶ Analytics (terminal dashboard / JSON report)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from .arenas import compute_arenas
from .card_impact import compute_card_impact
from .challenge_proof import compute_challenge_proof
from .crowns import compute_crowns
from .elixir import compute_elixir
from .loss_insights import compute_loss_insights
from .performance import compute_overall
from .projection import compute_projection
from .recent_form import compute_recent_form
from .schemas import Analytics

if TYPE_CHECKING:
    from ..database import Database
    from ..models import Battle

logger = logging.getLogger(__name__)


def compute(
    battles: list[Battle],
    my_tag: str,
    target_trophies: int,
    now: datetime | None = None,
) -> Analytics:
    """Compute the full analytics snapshot for `my_tag`.

    Args:
        battles: Battles in any order; sorted oldest first here.
        my_tag: Tracked player's tag, e.g. '#ABC123'.
        target_trophies: Trophy goal for the projection.
        now: Reference time for today's session (defaults to current UTC time).
    """
    if not battles:
        return Analytics()

    ordered = sorted(battles, key=lambda b: b.battle_time)

    return Analytics(
        overall=compute_overall(ordered, my_tag),
        recent=compute_recent_form(ordered, my_tag, now=now),
        arenas=compute_arenas(ordered, my_tag),
        projection=compute_projection(ordered, my_tag, target_trophies),
        elixir=compute_elixir(ordered, my_tag),
        crowns=compute_crowns(ordered, my_tag),
        cards=compute_card_impact(ordered, my_tag),
        losses=compute_loss_insights(ordered, my_tag),
        challenge=compute_challenge_proof(ordered, my_tag),
    )


def compute_for_player(
    db: Database,
    my_tag: str,
    target_trophies: int,
    now: datetime | None = None,
) -> Analytics:
    """Load the player's stored battles and compute analytics over them."""
    battles = db.get_battles_for_player(my_tag)
    logger.info(f"Computing analytics for {my_tag} over {len(battles)} battles")
    return compute(battles, my_tag, target_trophies, now=now)
