"""
Battle detail and statistics views.

These views read a battle from the first team participant's point of view,
which is the tracked player for battles fetched from that player's log.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from battlelog.analytics.resolver import parse_battle_time, percentage
from battlelog.models import Battle, Card, Participant

from .theme import Theme, DEFAULT_THEME

RULE = "─"
MAX_LISTED_CARDS = 8

VICTORY = "Victory"
LOSS = "Loss"
DRAW = "Draw"


def format_battle_time(raw: str) -> str:
    """'20251011T082308.000Z' -> '2025-10-11 08:23'. Unparsable input is returned as-is."""
    moment = parse_battle_time(raw)
    if moment is None:
        return raw
    return moment.strftime("%Y-%m-%d %H:%M")


def _lead_crowns(side: list[Participant]) -> int:
    return side[0].crowns if side else 0


def battle_result(battle: Battle) -> str:
    team_crowns = _lead_crowns(battle.team)
    opponent_crowns = _lead_crowns(battle.opponent)
    if team_crowns > opponent_crowns:
        return VICTORY
    if team_crowns < opponent_crowns:
        return LOSS
    return DRAW


def make_progress_bar(percent: float, width: int) -> str:
    filled = int(percent / 100 * width)
    filled = max(0, min(filled, width))
    return "█" * filled + "░" * (width - filled)


# ─── Battle detail ───

def _roster_lines(side: list[Participant], theme: Theme) -> list[str]:
    lines = []
    for player in side:
        lines.append(
            f"  - {theme.player.render(player.name)} ({theme.info.render(player.tag)})"
            f" | Crowns: {theme.crown.render(str(player.crowns))}"
            f" | Trophies: {theme.trophy.render(f'{player.trophy_change:+d}')}"
        )
    return lines


def _card_list(title: str, cards: list[Card], theme: Theme) -> list[str]:
    lines = ["", theme.header.render(title)]
    for card in cards[:MAX_LISTED_CARDS]:
        lines.append(f"  • {theme.card.render(card.name)} (Lvl {card.level})")
    return lines


def _deck_matchup(team_cards: list[Card], opponent_cards: list[Card], theme: Theme) -> list[str]:
    lines = ["", theme.header.render("Deck Matchup:")]
    for i, card in enumerate(team_cards):
        other = opponent_cards[i] if i < len(opponent_cards) else None
        left = theme.card.render(f"{card.name:<20} {f'Lvl {card.level}':<8}")
        right = ""
        if other is not None:
            right = theme.opponent.render(f"{other.name:<20} {f'Lvl {other.level}':<8}")
        lines.append(f"{left} │ {right}".rstrip())
    return lines


def render_battle_detail(battle: Battle, index: int, total: int, theme: Theme = DEFAULT_THEME) -> str:
    """Full view of one battle. `index` is zero-based."""
    result = battle_result(battle)
    result_style = {VICTORY: theme.team, LOSS: theme.opponent}.get(result, theme.header)

    lines = [
        theme.battle_header.render(f"Battle {index + 1} of {total}"),
        result_style.render(f"Result: {result}"),
        theme.info.render(f"Time: {format_battle_time(battle.battle_time)}"),
        theme.info.render(f"Type: {battle.battle_type}"),
        theme.info.render(f"Arena: {battle.arena.name}"),
        theme.info.render(f"Game Mode: {battle.game_mode.name}"),
        "",
        theme.team.render("Team:"),
        *_roster_lines(battle.team, theme),
        "",
        theme.opponent.render("Opponent:"),
        *_roster_lines(battle.opponent, theme),
    ]

    team_lead = battle.team[0] if battle.team else None
    opponent_lead = battle.opponent[0] if battle.opponent else None

    if team_lead and opponent_lead and team_lead.cards and opponent_lead.cards:
        lines += _deck_matchup(team_lead.cards, opponent_lead.cards, theme)
    else:
        if team_lead and team_lead.cards:
            lines += _card_list("Team Cards:", team_lead.cards, theme)
        if opponent_lead and opponent_lead.cards:
            lines += _card_list("Opponent Cards:", opponent_lead.cards, theme)

    if team_lead and team_lead.support_cards:
        lines += _card_list("Team Support Cards:", team_lead.support_cards, theme)
    if opponent_lead and opponent_lead.support_cards:
        lines += _card_list("Opponent Support Cards:", opponent_lead.support_cards, theme)

    return "\n".join(lines)


# ─── Statistics ───

@dataclass
class ArenaRecord:
    wins: int = 0
    losses: int = 0
    total: int = 0

    @property
    def win_rate(self) -> float:
        return percentage(self.wins, self.total)


@dataclass
class BattleStats:
    total_battles: int = 0
    total_wins: int = 0
    total_losses: int = 0
    win_rate: float = 0.0
    avg_crowns_won: float = 0.0
    avg_crowns_lost: float = 0.0
    avg_trophy_gain: float = 0.0
    avg_trophy_loss: float = 0.0
    arenas: dict[str, ArenaRecord] = field(default_factory=dict)  # first-seen order


def calculate_stats(battles: list[Battle]) -> BattleStats:
    """Win/loss statistics read from team[0] vs opponent[0] crowns."""
    stats = BattleStats()
    crowns_won = 0
    crowns_lost = 0
    trophy_gain = 0
    trophy_loss = 0

    for battle in battles:
        stats.total_battles += 1
        record = stats.arenas.setdefault(battle.arena.name, ArenaRecord())
        record.total += 1

        team_crowns = _lead_crowns(battle.team)
        opponent_crowns = _lead_crowns(battle.opponent)

        if team_crowns > opponent_crowns:
            stats.total_wins += 1
            record.wins += 1
            crowns_won += team_crowns
            trophy_gain += max(battle.team[0].trophy_change, 0)
        elif team_crowns < opponent_crowns:
            stats.total_losses += 1
            record.losses += 1
            if battle.team:
                crowns_lost += team_crowns
                trophy_loss += min(battle.team[0].trophy_change, 0)

    stats.win_rate = percentage(stats.total_wins, stats.total_battles)
    if stats.total_wins:
        stats.avg_crowns_won = crowns_won / stats.total_wins
        stats.avg_trophy_gain = trophy_gain / stats.total_wins
    if stats.total_losses:
        stats.avg_crowns_lost = crowns_lost / stats.total_losses
        stats.avg_trophy_loss = trophy_loss / stats.total_losses
    return stats


def render_stats(stats: BattleStats, theme: Theme = DEFAULT_THEME) -> str:
    rate_style = theme.win_rate_style(stats.win_rate)
    lines = [
        theme.battle_header.render("BATTLE STATISTICS"),
        "",
        theme.header.render("Overall Performance"),
        RULE * 40,
        f"Win Rate:        {rate_style.render(f'{stats.win_rate:.1f}%'.ljust(6))} "
        f"{make_progress_bar(stats.win_rate, 15)}",
        f"Wins:            {theme.team.render(str(stats.total_wins))}",
        f"Losses:          {theme.opponent.render(str(stats.total_losses))}",
        f"Total Battles:   {theme.info.render(str(stats.total_battles))}",
        "",
        theme.header.render("Performance Metrics"),
        RULE * 40,
        f"Avg Crowns Won:  {theme.team.render(f'{stats.avg_crowns_won:.2f}')}",
        f"Avg Crowns Lost: {theme.opponent.render(f'{stats.avg_crowns_lost:.2f}')}",
        f"Avg Trophy Gain: {theme.team.render(f'{stats.avg_trophy_gain:.1f}')}",
        f"Avg Trophy Loss: {theme.opponent.render(f'{stats.avg_trophy_loss:.1f}')}",
        "",
        theme.header.render("Arena Performance (Win Rate)"),
        RULE * 65,
        f"{'Arena':<20} {'Win Rate':<10} {'%':<8} Record (W-L)",
    ]
    for name, record in stats.arenas.items():
        lines.append(
            f"{theme.info.render(f'{name:<20}')} "
            f"{make_progress_bar(record.win_rate, 10)} "
            f"{theme.win_rate_style(record.win_rate).render(f'{record.win_rate:.1f}%'.ljust(8))} "
            f"{theme.info.render(f'{record.wins}-{record.losses}')}"
        )
    return "\n".join(lines)
