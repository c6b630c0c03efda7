"""
SQLite battle store.

Normalized tables for arenas, game modes, players, cards, battles and the
per-battle participant and deck rows. Battles are keyed by their API
timestamp, so re-syncing the same battle log is idempotent.
"""

import logging
import sqlite3
from pathlib import Path
from typing import List, Optional, Union

from .models import Arena, Battle, Card, GameMode, Participant

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "battles.db"

ROLE_TEAM = "team"
ROLE_OPPONENT = "opponent"


class Database:
    """SQLite database wrapper. Opens a short-lived connection per operation."""

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        self.db_path = Path(db_path or DEFAULT_DB_PATH)
        self._init_schema()

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection with optimizations."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA synchronous=NORMAL")
        conn.execute("PRAGMA temp_store=MEMORY")
        return conn

    def _init_schema(self):
        """Initialize database schema."""
        conn = self._get_connection()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS arenas (
                    id INTEGER PRIMARY KEY,
                    name TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS gamemodes (
                    id INTEGER PRIMARY KEY,
                    name TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS players (
                    tag TEXT PRIMARY KEY,
                    name TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS cards (
                    id INTEGER PRIMARY KEY,
                    name TEXT NOT NULL,
                    max_level INTEGER,
                    rarity TEXT,
                    elixir_cost INTEGER
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS battles (
                    battle_time TEXT PRIMARY KEY,  -- API timestamp, e.g. 20250101T120000.000Z
                    type TEXT NOT NULL,
                    arena_id INTEGER NOT NULL,
                    gamemode_id INTEGER NOT NULL,
                    FOREIGN KEY(arena_id) REFERENCES arenas(id),
                    FOREIGN KEY(gamemode_id) REFERENCES gamemodes(id)
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS battle_participants (
                    battle_time TEXT NOT NULL,
                    player_tag TEXT NOT NULL,
                    role TEXT NOT NULL,  -- 'team' or 'opponent'
                    position INTEGER NOT NULL DEFAULT 0,
                    starting_trophies INTEGER,
                    trophy_change INTEGER,
                    crowns INTEGER,
                    elixir_leaked REAL,  -- NULL when the API omits it
                    PRIMARY KEY(battle_time, player_tag),
                    FOREIGN KEY(battle_time) REFERENCES battles(battle_time) ON DELETE CASCADE,
                    FOREIGN KEY(player_tag) REFERENCES players(tag)
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS battle_decks (
                    battle_time TEXT NOT NULL,
                    player_tag TEXT NOT NULL,
                    card_id INTEGER NOT NULL,
                    position INTEGER NOT NULL DEFAULT 0,
                    level INTEGER,
                    is_support INTEGER NOT NULL DEFAULT 0,
                    PRIMARY KEY(battle_time, player_tag, card_id),
                    FOREIGN KEY(battle_time) REFERENCES battles(battle_time) ON DELETE CASCADE,
                    FOREIGN KEY(card_id) REFERENCES cards(id)
                )
            """)

            conn.execute("CREATE INDEX IF NOT EXISTS idx_participants_player ON battle_participants(player_tag)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_decks_battle ON battle_decks(battle_time, player_tag)")

            conn.commit()
        finally:
            conn.close()

    # ─── Writes ───

    def insert_battle(self, battle: Battle) -> bool:
        """
        Persist one battle with all participants and decks.

        Only ladder battles (PvP in the ladder game mode) are stored. Returns
        True when the battle was written, False when it was filtered out.
        Reference rows (arena, mode, player, card) are inserted once and never
        updated; participant and deck rows are replaced on re-insert.
        """
        if not battle.is_ladder:
            logger.debug(
                f"Skipping {battle.battle_type} battle {battle.battle_time} "
                f"(game mode {battle.game_mode.id})"
            )
            return False

        conn = self._get_connection()
        try:
            conn.execute(
                "INSERT OR IGNORE INTO arenas (id, name) VALUES (?, ?)",
                (battle.arena.id, battle.arena.name),
            )
            conn.execute(
                "INSERT OR IGNORE INTO gamemodes (id, name) VALUES (?, ?)",
                (battle.game_mode.id, battle.game_mode.name),
            )
            conn.execute(
                """
                INSERT OR IGNORE INTO battles (battle_time, type, arena_id, gamemode_id)
                VALUES (?, ?, ?, ?)
                """,
                (battle.battle_time, battle.battle_type, battle.arena.id, battle.game_mode.id),
            )

            for role, side in ((ROLE_TEAM, battle.team), (ROLE_OPPONENT, battle.opponent)):
                for position, participant in enumerate(side):
                    self._insert_participant(conn, battle.battle_time, role, position, participant)

            conn.commit()
            return True
        finally:
            # Closing without commit discards a half-written battle.
            conn.close()

    def _insert_participant(
        self,
        conn: sqlite3.Connection,
        battle_time: str,
        role: str,
        position: int,
        participant: Participant,
    ):
        conn.execute(
            "INSERT OR IGNORE INTO players (tag, name) VALUES (?, ?)",
            (participant.tag, participant.name),
        )
        conn.execute(
            """
            INSERT OR REPLACE INTO battle_participants (
                battle_time, player_tag, role, position,
                starting_trophies, trophy_change, crowns, elixir_leaked
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                battle_time,
                participant.tag,
                role,
                position,
                participant.starting_trophies,
                participant.trophy_change,
                participant.crowns,
                participant.elixir_leaked,
            ),
        )

        deck = [(card, 0) for card in participant.cards]
        deck += [(card, 1) for card in participant.support_cards]
        for slot, (card, is_support) in enumerate(deck):
            conn.execute(
                """
                INSERT OR IGNORE INTO cards (id, name, max_level, rarity, elixir_cost)
                VALUES (?, ?, ?, ?, ?)
                """,
                (card.id, card.name, card.max_level, card.rarity, card.elixir_cost),
            )
            conn.execute(
                """
                INSERT OR REPLACE INTO battle_decks (
                    battle_time, player_tag, card_id, position, level, is_support
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (battle_time, participant.tag, card.id, slot, card.level, is_support),
            )

    # ─── Reads ───

    def get_battles_for_player(self, player_tag: str) -> List[Battle]:
        """All stored battles in which `player_tag` took part, newest first."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """
                SELECT b.battle_time, b.type,
                       a.id AS arena_id, a.name AS arena_name,
                       g.id AS gamemode_id, g.name AS gamemode_name
                FROM battles b
                JOIN arenas a ON a.id = b.arena_id
                JOIN gamemodes g ON g.id = b.gamemode_id
                JOIN battle_participants bp ON bp.battle_time = b.battle_time
                WHERE bp.player_tag = ?
                ORDER BY b.battle_time DESC
                """,
                (player_tag,),
            )
            battles = []
            for row in cursor.fetchall():
                battle = Battle(
                    battle_time=row["battle_time"],
                    battle_type=row["type"],
                    arena=Arena(id=row["arena_id"], name=row["arena_name"]),
                    game_mode=GameMode(id=row["gamemode_id"], name=row["gamemode_name"]),
                )
                battle.team = self._load_participants(conn, battle.battle_time, ROLE_TEAM)
                battle.opponent = self._load_participants(conn, battle.battle_time, ROLE_OPPONENT)
                battles.append(battle)
            return battles
        finally:
            conn.close()

    def _load_participants(self, conn: sqlite3.Connection, battle_time: str, role: str) -> List[Participant]:
        cursor = conn.execute(
            """
            SELECT bp.player_tag, p.name, bp.starting_trophies, bp.trophy_change,
                   bp.crowns, bp.elixir_leaked
            FROM battle_participants bp
            JOIN players p ON p.tag = bp.player_tag
            WHERE bp.battle_time = ? AND bp.role = ?
            ORDER BY bp.position
            """,
            (battle_time, role),
        )
        participants = []
        for row in cursor.fetchall():
            participant = Participant(
                tag=row["player_tag"],
                name=row["name"],
                starting_trophies=row["starting_trophies"] or 0,
                trophy_change=row["trophy_change"] or 0,
                crowns=row["crowns"] or 0,
                elixir_leaked=row["elixir_leaked"],
            )
            participant.cards, participant.support_cards = self._load_deck(
                conn, battle_time, participant.tag
            )
            participants.append(participant)
        return participants

    def _load_deck(self, conn: sqlite3.Connection, battle_time: str, player_tag: str):
        cursor = conn.execute(
            """
            SELECT c.id, c.name, c.max_level, c.rarity, c.elixir_cost,
                   bd.level, bd.is_support
            FROM battle_decks bd
            JOIN cards c ON c.id = bd.card_id
            WHERE bd.battle_time = ? AND bd.player_tag = ?
            ORDER BY bd.position
            """,
            (battle_time, player_tag),
        )
        cards: List[Card] = []
        support: List[Card] = []
        for row in cursor.fetchall():
            card = Card(
                id=row["id"],
                name=row["name"],
                level=row["level"] or 0,
                max_level=row["max_level"] or 0,
                rarity=row["rarity"] or "",
                elixir_cost=row["elixir_cost"] or 0,
            )
            (support if row["is_support"] else cards).append(card)
        return cards, support

    def get_battle_count(self, player_tag: str) -> int:
        """Number of stored battles for `player_tag`."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT COUNT(*) FROM battle_participants WHERE player_tag = ?",
                (player_tag,),
            )
            return cursor.fetchone()[0]
        finally:
            conn.close()


# Singleton instance
_db_instance: Optional[Database] = None


def get_db(db_path: Optional[Union[str, Path]] = None) -> Database:
    """Get the shared database instance, reopening it if a different path is asked for."""
    global _db_instance
    if _db_instance is None or (db_path is not None and Path(db_path) != _db_instance.db_path):
        _db_instance = Database(db_path)
    return _db_instance
