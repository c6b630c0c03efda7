"""
Analytics dashboard: prints every Analytics section as plain text.

Tabular sections are built as pandas DataFrames and printed with
DataFrame.to_string.
"""

from __future__ import annotations

import pandas as pd

from battlelog.analytics.challenge_proof import DECK_CHANGED
from battlelog.analytics.resolver import is_loss, is_win, resolved_battles
from battlelog.analytics.schemas import Analytics, ArenaStats, CardImpact
from battlelog.models import Battle

from .theme import Theme, DEFAULT_THEME
from .views import format_battle_time

BANNER = "=" * 40


def _section(title: str, theme: Theme) -> list[str]:
    return ["", BANNER, theme.header.render(title), BANNER]


def _deck_line(deck_unchanged_since: str) -> str:
    if deck_unchanged_since == DECK_CHANGED:
        return DECK_CHANGED
    return f"Deck unchanged since {deck_unchanged_since}"


def _pct(value: float | None) -> str:
    return "-" if value is None else f"{value:.1f}%"


def arenas_frame(arenas: list[ArenaStats]) -> pd.DataFrame:
    rows = [
        {
            "Arena": arena.arena_name,
            "Battles": arena.battles,
            "Wins": arena.wins,
            "Win %": _pct(arena.win_rate),
            "Avg Trophies": f"{arena.avg_trophy_gain:+.1f}",
            "3-Crown %": _pct(arena.three_crown_rate),
            "Current": "*" if arena.is_current else "",
        }
        for arena in arenas
    ]
    return pd.DataFrame(rows, columns=["Arena", "Battles", "Wins", "Win %", "Avg Trophies", "3-Crown %", "Current"])


def cards_frame(cards: list[CardImpact]) -> pd.DataFrame:
    rows = []
    for impact in cards:
        at_current = impact.battles_at_level.get(impact.current_level)
        rows.append({
            "Card": impact.card_name,
            "Level": impact.current_level,
            "Levels Seen": ", ".join(str(level) for level in impact.battles_at_level),
            "Battles @ Lvl": at_current.battles if at_current else 0,
            "Win % @ Lvl": _pct(at_current.win_rate if at_current else 0.0),
            "Since Upgrade": impact.since_last_upgrade.battles,
            "Since Upgrade Win %": _pct(impact.since_last_upgrade.win_rate),
        })
    return pd.DataFrame(rows, columns=[
        "Card", "Level", "Levels Seen", "Battles @ Lvl", "Win % @ Lvl",
        "Since Upgrade", "Since Upgrade Win %",
    ])


def recent_battles_frame(battles: list[Battle], player_tag: str, limit: int = 10) -> pd.DataFrame:
    """The `limit` latest resolvable battles, newest last."""
    rows = []
    for battle, me, opponent in resolved_battles(battles, player_tag):
        if is_win(me.crowns, opponent.crowns):
            result = "win"
        elif is_loss(me.crowns, opponent.crowns):
            result = "loss"
        else:
            result = "draw"
        rows.append({
            "battle_time": battle.battle_time,
            "Time": format_battle_time(battle.battle_time),
            "Arena": battle.arena.name,
            "Opponent": opponent.name,
            "Result": result,
            "Crowns": f"{me.crowns}-{opponent.crowns}",
            "Trophies": f"{me.trophy_change:+d}",
        })
    columns = ["Time", "Arena", "Opponent", "Result", "Crowns", "Trophies"]
    if not rows:
        return pd.DataFrame(columns=columns)
    df = pd.DataFrame(rows).sort_values("battle_time")
    return df.tail(limit)[columns]


def render_dashboard(
    analytics: Analytics,
    theme: Theme = DEFAULT_THEME,
    recent_battles: pd.DataFrame | None = None,
) -> str:
    overall = analytics.overall
    lines = [theme.title.render("=== Clash Royale Analytics ===")]

    # ===== OVERALL =====
    lines += _section("OVERALL PERFORMANCE", theme)
    if overall.total_battles == 0:
        lines.append("No battles recorded yet. Run `battlelog fetch` first.")
        return "\n".join(lines)

    streak = overall.current_streak
    streak_text = f"{streak} win(s)" if streak > 0 else f"{-streak} loss(es)" if streak < 0 else "none"
    lines += [
        f"Battles: {overall.total_battles}",
        f"Wins: {theme.team.render(str(overall.wins))} "
        f"({theme.win_rate_style(overall.win_rate).render(f'{overall.win_rate:.1f}%')})",
        f"Losses: {theme.opponent.render(str(overall.losses))}",
        f"Three-crown wins: {overall.three_crown_wins} ({overall.three_crown_rate:.1f}% of wins)",
        f"Trophy change: {theme.trophy.render(f'{overall.total_trophy_gain:+d}')}"
        f" (peak {overall.peak_trophies:+d})",
        f"Current streak: {streak_text}",
        f"Longest win streak: {overall.longest_win_streak}",
    ]

    # ===== RECENT FORM =====
    lines += _section("RECENT FORM", theme)
    for label, session in (
        ("Last 10", analytics.recent.last10),
        ("Last 20", analytics.recent.last20),
        ("Last 50", analytics.recent.last50),
        ("Today", analytics.recent.today),
    ):
        lines.append(
            f"{label:8s} {session.battles:3d} battles, "
            f"{theme.win_rate_style(session.win_rate).render(f'{session.win_rate:5.1f}%')} win, "
            f"{session.trophy_change:+5d} trophies ({session.avg_trophy_per_battle:+.1f}/battle)"
        )

    # ===== ARENAS =====
    if analytics.arenas:
        lines += _section("ARENAS", theme)
        lines.append(arenas_frame(analytics.arenas).to_string(index=False))

    # ===== PROJECTION =====
    projection = analytics.projection
    lines += _section(f"ROAD TO {projection.target_trophies} TROPHIES", theme)
    if projection.already_reached:
        lines.append(projection.horizon)
    else:
        needed = projection.battles_needed
        lines += [
            f"Win rate: realistic {projection.realistic_wr:.1f}% | "
            f"optimistic {projection.optimistic_wr:.1f}% | pessimistic {projection.pessimistic_wr:.1f}%",
            f"Battles needed: {needed if needed is not None else 'n/a'}",
            f"ETA: {projection.horizon}",
        ]

    # ===== ELIXIR & CROWNS =====
    elixir = analytics.elixir
    crowns = analytics.crowns
    lines += _section("ELIXIR & CROWNS", theme)
    lines += [
        f"Avg leak in wins: {elixir.avg_leak_wins:.2f} | in losses: {elixir.avg_leak_losses:.2f}"
        f" | worst loss: {elixir.max_leak_in_loss:.2f}",
        f"High-leak losses: {elixir.high_leak_losses}",
        elixir.leak_improvement,
        f"Crowns per battle: {crowns.avg_crowns_taken:.2f} taken, {crowns.avg_crowns_conceded:.2f} conceded",
        "Wins by score: " + (", ".join(f"{k} x{v}" for k, v in crowns.win_types.items()) or "-"),
        "Losses by score: " + (", ".join(f"{k} x{v}" for k, v in crowns.loss_types.items()) or "-"),
        f"Aggression: {crowns.aggression_score:.1f}% of wins are three-crown",
    ]

    # ===== CARDS =====
    if analytics.cards:
        lines += _section("CURRENT DECK BY LEVEL", theme)
        lines.append(cards_frame(analytics.cards).to_string(index=False))

    # ===== LOSSES =====
    losses = analytics.losses
    lines += _section("LOSS INSIGHTS", theme)
    lines += [
        f"Losses: {losses.total_losses} (high leak: {losses.high_elixir_leak_losses},"
        f" close: {losses.one_crown_defense_losses})",
        f"Current losing streak: {losses.recent_loss_streak}",
    ]
    lines += [f"  • {note}" for note in losses.common_notes]

    # ===== CHALLENGE =====
    challenge = analytics.challenge
    lines += _section("CHALLENGE PROOF", theme)
    lines += [
        theme.crown.render(challenge.milestone_message),
        f"Start: {challenge.start_arena} at {challenge.start_trophies} trophies",
        f"Now: {challenge.current_trophies} trophies after {challenge.battles_since_start} battles"
        f" ({challenge.win_rate_since_start:.1f}% win)",
        f"Unique cards used: {challenge.unique_cards_used}",
        _deck_line(challenge.deck_unchanged_since),
    ]

    # ===== RECENT BATTLES =====
    if recent_battles is not None and not recent_battles.empty:
        lines += _section(f"RECENT BATTLES (Last {len(recent_battles)})", theme)
        lines.append(recent_battles.to_string(index=False))

    return "\n".join(lines)
