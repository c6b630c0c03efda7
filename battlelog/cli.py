"""
Command line entry point.

    battlelog fetch               fetch the battle log and store ladder battles
    battlelog view                interactive terminal viewer
    battlelog report [--json]     print the analytics dashboard or JSON
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .analytics import compute
from .config import Settings, get_settings, normalize_player_tag
from .database import get_db
from .exceptions import BattlelogError
from .logging_setup import configure_logging
from .royale_api import RoyaleClient
from .sync import sync_player
from tui.dashboard import recent_battles_frame, render_dashboard
from tui.theme import DEFAULT_THEME, PLAIN_THEME, Theme
from tui.viewer import BattleViewer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="battlelog",
        description="Clash Royale battle logger: fetch, store and analyze your ladder battles",
    )
    parser.add_argument("--db", default=None, help="SQLite DB path (default: DB_PATH or battles.db)")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR (default: LOG_LEVEL)")

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_fetch = sub.add_parser("fetch", help="Fetch the latest battles from the API and store them")
    p_fetch.add_argument("--tag", default=None, help="Player tag (default: PLAYERTAG)")

    p_view = sub.add_parser("view", help="Browse stored battles interactively")
    p_view.add_argument("--tag", default=None, help="Player tag (default: PLAYERTAG)")
    p_view.add_argument("--no-color", action="store_true", help="Disable ANSI colours")

    p_report = sub.add_parser("report", help="Print analytics for the stored battles")
    p_report.add_argument("--tag", default=None, help="Player tag (default: PLAYERTAG)")
    p_report.add_argument("--target", type=int, default=None, help="Trophy target (default: TARGET_TROPHIES)")
    p_report.add_argument("--json", action="store_true", help="Print the analytics as JSON")
    p_report.add_argument("--no-color", action="store_true", help="Disable ANSI colours")

    return parser


def _player_tag(args: argparse.Namespace, settings: Settings) -> str:
    if args.tag:
        return normalize_player_tag(args.tag)
    return settings.require_player_tag()


def _theme(no_color: bool) -> Theme:
    if no_color or not sys.stdout.isatty():
        return PLAIN_THEME
    return DEFAULT_THEME


def cmd_fetch(args: argparse.Namespace, settings: Settings) -> int:
    tag = _player_tag(args, settings)
    client = RoyaleClient.from_settings(settings)
    db = get_db(args.db or settings.db_path)

    print(f"📡 Fetching battle log for {tag}...")
    result = sync_player(client, db, tag)
    print(
        f"✓ {result.fetched} fetched, {result.saved} saved, "
        f"{result.skipped} skipped (not ladder), {result.failed} failed"
    )
    return 0


def cmd_view(args: argparse.Namespace, settings: Settings) -> int:
    tag = _player_tag(args, settings)
    db = get_db(args.db or settings.db_path)
    viewer = BattleViewer(db, tag, theme=_theme(args.no_color), target_trophies=settings.target_trophies)
    viewer.run()
    return 0


def cmd_report(args: argparse.Namespace, settings: Settings) -> int:
    tag = _player_tag(args, settings)
    target = args.target if args.target is not None else settings.target_trophies
    db = get_db(args.db or settings.db_path)

    battles = db.get_battles_for_player(tag)
    analytics = compute(battles, tag, target)

    if args.json:
        print(analytics.to_json())
    else:
        recent = recent_battles_frame(battles, tag)
        print(render_dashboard(analytics, _theme(args.no_color), recent_battles=recent))
    return 0


COMMANDS = {
    "fetch": cmd_fetch,
    "view": cmd_view,
    "report": cmd_report,
}


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    try:
        return COMMANDS[args.cmd](args, settings)
    except BattlelogError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"❌ {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
