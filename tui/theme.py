"""
Terminal colour theme.

A Theme maps each UI role to an ANSI style. Views receive the theme as an
argument; PLAIN_THEME renders text unchanged (for pipes and --no-color).
"""

from __future__ import annotations

from dataclasses import dataclass

RESET = "\033[0m"


@dataclass(frozen=True)
class Style:
    """ANSI SGR parameters, e.g. '1;38;2;255;215;0'. Empty means no styling."""
    codes: str = ""

    def render(self, text: str) -> str:
        if not self.codes:
            return text
        return f"\033[{self.codes}m{text}{RESET}"


def rgb(hex_color: str, bold: bool = False, italic: bool = False) -> Style:
    """Truecolor foreground style from '#RRGGBB'."""
    value = hex_color.lstrip("#")
    red, green, blue = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    codes = []
    if bold:
        codes.append("1")
    if italic:
        codes.append("3")
    codes.append(f"38;2;{red};{green};{blue}")
    return Style(";".join(codes))


@dataclass(frozen=True)
class Theme:
    title: Style = Style()
    battle_header: Style = Style()
    header: Style = Style()
    info: Style = Style()
    team: Style = Style()
    opponent: Style = Style()
    player: Style = Style()
    crown: Style = Style()
    trophy: Style = Style()
    status: Style = Style()
    help: Style = Style()
    card: Style = Style()

    def win_rate_style(self, win_rate: float) -> Style:
        """Green at 60%+, neutral at 50%+, red below."""
        if win_rate >= 60:
            return self.team
        if win_rate >= 50:
            return self.info
        return self.opponent


DEFAULT_THEME = Theme(
    title=rgb("#FFD700", bold=True),  # gold
    battle_header=rgb("#40E0D0", bold=True),  # turquoise
    header=rgb("#FF69B4", bold=True),  # hot pink
    info=rgb("#FFA07A"),  # light salmon
    team=rgb("#98FB98", bold=True),  # pale green
    opponent=rgb("#FF6347", bold=True),  # tomato
    player=rgb("#F0E68C"),  # khaki
    crown=rgb("#FFD700", bold=True),
    trophy=rgb("#4169E1", bold=True),  # royal blue
    status=rgb("#87CEEB", italic=True),  # sky blue
    help=rgb("#D3D3D3", italic=True),  # light gray
    card=rgb("#DDA0DD"),  # plum
)

PLAIN_THEME = Theme()
