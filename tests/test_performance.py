"""
Tests for overall performance: win rate, three-crown rate, trophies, streaks.
"""

import unittest

from battlelog.analytics.performance import compute_overall, compute_streaks

from helpers import ME, make_battle, make_history


class TestComputeOverall(unittest.TestCase):

    def test_ties_stay_in_win_rate_denominator(self):
        """(3,0), (1,2), (2,2): one win, one loss, one tie."""
        battles = [make_battle(3, 0, index=0), make_battle(1, 2, index=1), make_battle(2, 2, index=2)]
        stats = compute_overall(battles, ME)

        self.assertEqual(stats.total_battles, 3)
        self.assertEqual(stats.wins, 1)
        self.assertEqual(stats.losses, 1)
        self.assertAlmostEqual(stats.win_rate, 100 / 3)

    def test_three_crown_rate_is_share_of_wins(self):
        battles = [make_battle(3, 0, index=0), make_battle(1, 0, index=1), make_battle(0, 1, index=2)]
        stats = compute_overall(battles, ME)

        self.assertEqual(stats.three_crown_wins, 1)
        self.assertEqual(stats.three_crown_rate, 50.0)

    def test_three_crown_rate_without_wins(self):
        stats = compute_overall(make_history("LL"), ME)
        self.assertEqual(stats.three_crown_rate, 0.0)

    def test_peak_and_current_trophies(self):
        deltas = [30, -25, 30, -60]
        battles = [
            make_battle(1 if d > 0 else 0, 0 if d > 0 else 1, index=i, trophy_change=d)
            for i, d in enumerate(deltas)
        ]
        stats = compute_overall(battles, ME)

        self.assertEqual(stats.peak_trophies, 35)
        self.assertEqual(stats.current_trophies, -25)
        self.assertEqual(stats.total_trophy_gain, -25)

    def test_peak_never_below_zero(self):
        stats = compute_overall(make_history("LL"), ME)
        self.assertEqual(stats.peak_trophies, 0)
        self.assertEqual(stats.current_trophies, -50)

    def test_foreign_battles_excluded(self):
        battles = make_history("WW") + [make_battle(index=5, me_tag="#OTHER")]
        stats = compute_overall(battles, ME)
        self.assertEqual(stats.total_battles, 2)

    def test_empty(self):
        stats = compute_overall([], ME)
        self.assertEqual(stats.total_battles, 0)
        self.assertEqual(stats.win_rate, 0.0)
        self.assertEqual(stats.current_streak, 0)


class TestStreaks(unittest.TestCase):

    def test_current_streak_ends_at_first_flip(self):
        """[W, W, L, W] oldest to newest: current +1, longest 2."""
        self.assertEqual(compute_streaks(make_history("WWLW"), ME), (1, 2))

    def test_losing_streak_is_negative(self):
        self.assertEqual(compute_streaks(make_history("WLLL"), ME), (-3, 1))

    def test_ties_neither_extend_nor_break(self):
        self.assertEqual(compute_streaks(make_history("WWTW"), ME), (3, 3))
        self.assertEqual(compute_streaks(make_history("LTL"), ME), (-2, 0))

    def test_longest_run_found_anywhere(self):
        self.assertEqual(compute_streaks(make_history("WWWWLWL"), ME), (-1, 4))


if __name__ == "__main__":
    unittest.main()
