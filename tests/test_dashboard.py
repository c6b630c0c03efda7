"""
Tests for the analytics dashboard and its pandas tables.
"""

import unittest
from datetime import timedelta

from battlelog.analytics import Analytics, compute
from tui.dashboard import arenas_frame, cards_frame, recent_battles_frame, render_dashboard
from tui.theme import PLAIN_THEME

from helpers import BASE_TIME, ME, make_battle, make_history


class TestFrames(unittest.TestCase):

    def test_arenas_frame(self):
        battles = [make_battle(0, 1, index=0, arena="Spell Valley"), make_battle(3, 0, index=1)]
        analytics = compute(battles, ME, 7000, now=BASE_TIME)
        df = arenas_frame(analytics.arenas)

        self.assertEqual(list(df["Arena"]), ["Spell Valley", "Legendary Arena"])
        self.assertEqual(list(df["3-Crown %"]), ["-", "100.0%"])
        self.assertEqual(list(df["Current"]), ["", "*"])

    def test_cards_frame(self):
        analytics = compute(make_history("WL"), ME, 7000, now=BASE_TIME)
        df = cards_frame(analytics.cards)

        self.assertEqual(len(df), 8)
        self.assertEqual(df.iloc[0]["Card"], "Knight")
        self.assertEqual(df.iloc[0]["Win % @ Lvl"], "50.0%")

    def test_recent_battles_newest_last(self):
        battles = make_history("L" * 5 + "W" * 10)
        df = recent_battles_frame(list(reversed(battles)), ME, limit=10)

        self.assertEqual(len(df), 10)
        self.assertEqual(set(df["Result"]), {"win"})
        self.assertEqual(df.iloc[-1]["Time"], "2025-01-02 02:00")

    def test_recent_battles_empty(self):
        df = recent_battles_frame([], ME)
        self.assertTrue(df.empty)
        self.assertIn("Result", df.columns)


class TestRenderDashboard(unittest.TestCase):

    def test_empty_history(self):
        output = render_dashboard(Analytics(), PLAIN_THEME)
        self.assertIn("No battles recorded yet", output)

    def test_all_sections(self):
        battles = make_history("WWLWLW")
        analytics = compute(battles, ME, 7000, now=BASE_TIME + timedelta(hours=8))
        output = render_dashboard(analytics, PLAIN_THEME, recent_battles=recent_battles_frame(battles, ME))

        for title in ("OVERALL PERFORMANCE", "RECENT FORM", "ARENAS", "ROAD TO 7000 TROPHIES",
                      "ELIXIR & CROWNS", "CURRENT DECK BY LEVEL", "LOSS INSIGHTS",
                      "CHALLENGE PROOF", "RECENT BATTLES (Last 6)"):
            self.assertIn(title, output)
        self.assertIn("Current streak: 1 win(s)", output)
        self.assertIn("Legendary Arena", output)
        self.assertNotIn("\033[", output)

    def test_target_already_reached(self):
        analytics = compute(make_history("WW"), ME, 10, now=BASE_TIME)
        output = render_dashboard(analytics, PLAIN_THEME)
        self.assertIn("Already there", output)


if __name__ == "__main__":
    unittest.main()
