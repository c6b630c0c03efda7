"""
Tests for card impact by level.
"""

import unittest

from battlelog.analytics.card_impact import compute_card_impact, since_last_upgrade

from helpers import DEFAULT_DECK, ME, make_battle, make_deck


def _impact(impacts, name):
    return next(i for i in impacts if i.card_name == name)


class TestCardImpact(unittest.TestCase):

    def setUp(self):
        self.battles = [
            make_battle(1, 0, index=0, cards=make_deck(levels={"Knight": 10})),
            make_battle(0, 1, index=1, cards=make_deck(levels={"Knight": 10})),
            make_battle(1, 0, index=2, cards=make_deck(levels={"Knight": 11})),
            make_battle(2, 1, index=3, cards=make_deck(levels={"Knight": 11})),
        ]

    def test_tracks_latest_deck_in_order(self):
        impacts = compute_card_impact(self.battles, ME)
        self.assertEqual([i.card_name for i in impacts], DEFAULT_DECK)

    def test_buckets_per_level(self):
        knight = _impact(compute_card_impact(self.battles, ME), "Knight")

        self.assertEqual(knight.current_level, 11)
        self.assertEqual(list(knight.battles_at_level), [10, 11])
        self.assertEqual(knight.battles_at_level[10].battles, 2)
        self.assertEqual(knight.battles_at_level[10].win_rate, 50.0)
        self.assertEqual(knight.battles_at_level[11].wins, 2)
        self.assertEqual(knight.since_last_upgrade.battles, 2)
        self.assertEqual(knight.since_last_upgrade.win_rate, 100.0)

    def test_since_last_upgrade_counts_non_contiguous_battles(self):
        battles = [
            make_battle(1, 0, index=0, cards=make_deck(levels={"Knight": 11})),
            make_battle(0, 1, index=1, cards=make_deck(levels={"Knight": 10})),
            make_battle(0, 1, index=2, cards=make_deck(levels={"Knight": 11})),
        ]
        window = since_last_upgrade(battles, ME, "Knight", 11)
        self.assertEqual(window.battles, 2)
        self.assertEqual(window.win_rate, 50.0)

    def test_cards_no_longer_in_deck_are_ignored(self):
        old_deck = make_deck(["Goblin Barrel"] + DEFAULT_DECK[1:])
        battles = [make_battle(1, 0, index=0, cards=old_deck)] + self.battles
        impacts = compute_card_impact(battles, ME)

        self.assertNotIn("Goblin Barrel", [i.card_name for i in impacts])
        self.assertEqual(_impact(impacts, "Archers").battles_at_level[11].battles, 5)

    def test_empty(self):
        self.assertEqual(compute_card_impact([], ME), [])


if __name__ == "__main__":
    unittest.main()
