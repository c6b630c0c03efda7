"""Fetch a player's battle log and persist the ladder battles."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import asdict, dataclass
from typing import Any, Iterable

from .database import Database
from .models import Battle
from .royale_api import RoyaleClient

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    fetched: int = 0
    saved: int = 0
    skipped: int = 0  # not a ladder battle
    failed: int = 0  # storage error, logged and skipped

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def save_battles(db: Database, battles: Iterable[Battle]) -> SyncResult:
    """Insert each battle. A storage error on one battle does not stop the rest."""
    result = SyncResult()
    for battle in battles:
        result.fetched += 1
        try:
            if db.insert_battle(battle):
                result.saved += 1
            else:
                result.skipped += 1
        except sqlite3.Error as exc:
            result.failed += 1
            logger.error(f"Could not save battle {battle.battle_time}: {exc}")
    return result


def sync_player(client: RoyaleClient, db: Database, player_tag: str) -> SyncResult:
    """Fetch the battle log for `player_tag` and store it. API errors propagate."""
    battles = client.fetch_battle_log(player_tag)
    result = save_battles(db, battles)
    logger.info(
        f"Sync for {player_tag}: {result.saved} saved, "
        f"{result.skipped} skipped, {result.failed} failed"
    )
    return result
