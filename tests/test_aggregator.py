"""
Tests for the analytics composer.
"""

import json
import unittest
from datetime import timedelta

from battlelog.analytics import Analytics, compute, compute_for_player

from helpers import BASE_TIME, ME, make_battle, make_history


class FakeDatabase:
    def __init__(self, battles):
        self.battles = battles
        self.requested = []

    def get_battles_for_player(self, player_tag):
        self.requested.append(player_tag)
        return list(reversed(self.battles))


class TestCompute(unittest.TestCase):

    def test_empty_input_gives_zero_snapshot(self):
        self.assertEqual(compute([], ME, 7000), Analytics())

    def test_input_order_does_not_matter(self):
        """Newest-first input is sorted chronologically before aggregation."""
        battles = make_history("WWLW")
        forward = compute(battles, ME, 7000, now=BASE_TIME)
        backward = compute(list(reversed(battles)), ME, 7000, now=BASE_TIME)

        self.assertEqual(forward, backward)
        self.assertEqual(forward.overall.current_streak, 1)
        self.assertEqual(forward.overall.longest_win_streak, 2)

    def test_every_section_populated(self):
        battles = make_history("WWLWL") + [make_battle(3, 0, index=5, elixir_leaked=1.0)]
        analytics = compute(battles, ME, 7000, now=BASE_TIME + timedelta(hours=6))

        self.assertEqual(analytics.overall.total_battles, 6)
        self.assertEqual(analytics.recent.today.battles, 6)
        self.assertEqual(len(analytics.arenas), 1)
        self.assertEqual(analytics.projection.target_trophies, 7000)
        self.assertEqual(len(analytics.cards), 8)
        self.assertEqual(analytics.losses.total_losses, 2)
        self.assertEqual(analytics.challenge.battles_since_start, 6)

    def test_json_output(self):
        analytics = compute(make_history("WLL"), ME, 7000, now=BASE_TIME)
        data = json.loads(analytics.to_json())

        self.assertEqual(
            list(data),
            ["overall", "recent", "arenas", "projection", "elixir", "crowns", "cards", "losses", "challenge"],
        )
        self.assertEqual(data["overall"]["win_rate"], 33.33)
        self.assertEqual(data["arenas"][0]["three_crown_rate"], 0.0)
        self.assertEqual(data["projection"]["horizon"], "Never at this rate")
        self.assertIn("11", data["cards"][0]["battles_at_level"])


class TestComputeForPlayer(unittest.TestCase):

    def test_loads_from_database(self):
        db = FakeDatabase(make_history("WWW"))
        analytics = compute_for_player(db, ME, 7000, now=BASE_TIME)

        self.assertEqual(db.requested, [ME])
        self.assertEqual(analytics.overall.wins, 3)
        self.assertEqual(analytics.overall.current_streak, 3)


if __name__ == "__main__":
    unittest.main()
