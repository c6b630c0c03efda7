"""
Tests for per-arena performance.
"""

import unittest

from battlelog.analytics.arenas import compute_arenas

from helpers import ME, make_battle


class TestComputeArenas(unittest.TestCase):

    def setUp(self):
        self.battles = [
            make_battle(3, 0, index=0, arena="Spell Valley"),
            make_battle(0, 1, index=1, arena="Spell Valley"),
            make_battle(0, 2, index=2, arena="Builder's Workshop"),
            make_battle(1, 0, index=3, arena="Spell Valley"),
            make_battle(0, 1, index=4, arena="Builder's Workshop"),
        ]

    def test_first_seen_order(self):
        names = [a.arena_name for a in compute_arenas(self.battles, ME)]
        self.assertEqual(names, ["Spell Valley", "Builder's Workshop"])

    def test_per_arena_numbers(self):
        spell_valley = compute_arenas(self.battles, ME)[0]

        self.assertEqual(spell_valley.battles, 3)
        self.assertEqual(spell_valley.wins, 2)
        self.assertAlmostEqual(spell_valley.win_rate, 200 / 3)
        self.assertAlmostEqual(spell_valley.avg_trophy_gain, (30 - 25 + 30) / 3)
        self.assertEqual(spell_valley.three_crown_rate, 50.0)

    def test_three_crown_rate_undefined_without_wins(self):
        workshop = compute_arenas(self.battles, ME)[1]
        self.assertEqual(workshop.wins, 0)
        self.assertIsNone(workshop.three_crown_rate)

    def test_current_arena_is_last_battle(self):
        arenas = compute_arenas(self.battles, ME)
        self.assertEqual([a.is_current for a in arenas], [False, True])

    def test_empty_arena_name_skipped(self):
        battles = self.battles + [make_battle(1, 0, index=9, arena="")]
        arenas = compute_arenas(battles, ME)
        self.assertEqual(len(arenas), 2)
        self.assertFalse(any(a.is_current for a in arenas))


if __name__ == "__main__":
    unittest.main()
