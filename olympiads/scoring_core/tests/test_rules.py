"""
Tests for scoring rule helpers.
"""

import unittest

from olympiads.scoring_core.rules import (
    EVENT_TYPE_LABELS,
    SCORING_RULE_LABELS,
    EventType,
    NumericRank,
    PerWin,
    PlacementTable,
    RuleKind,
    auto_placement_table,
    default_rule_for,
    describe_rule,
    parse_placement_table,
    placement_rule_from_text,
)


class PlacementTableTests(unittest.TestCase):
    def test_points_for_position(self):
        table = PlacementTable([5, 3])
        self.assertEqual(table.points_for_position(0), 5)
        self.assertEqual(table.points_for_position(1), 3)
        self.assertEqual(table.points_for_position(2), 0)
        self.assertEqual(table.points_for_position(-1), 0)

    def test_numeric_rank_points_for_position(self):
        rule = NumericRank(True, [4, 2])
        self.assertEqual(rule.points_for_position(1), 2)
        self.assertEqual(rule.points_for_position(2), 0)

    def test_auto_table(self):
        self.assertEqual(auto_placement_table(5).table, [4, 3, 2, 1, 0])
        self.assertEqual(auto_placement_table(1).table, [0])
        self.assertEqual(auto_placement_table(0).table, [0])

    def test_parse_table(self):
        self.assertEqual(parse_placement_table("5, 3,2 ,1"), [5, 3, 2, 1])
        self.assertEqual(parse_placement_table("10,x,,4"), [10, 4])
        self.assertEqual(parse_placement_table(""), [])
        self.assertEqual(parse_placement_table(None), [])

    def test_placement_rule_from_text(self):
        self.assertEqual(placement_rule_from_text("5,3,2"), PlacementTable([5, 3, 2]))
        with self.assertRaises(ValueError):
            placement_rule_from_text("a, b")
        with self.assertRaises(ValueError):
            placement_rule_from_text("")

    def test_default_rule_for(self):
        self.assertEqual(default_rule_for(EventType.DUEL_1V1), PerWin(3))
        self.assertEqual(default_rule_for(EventType.EQUIPE), PerWin(3))
        self.assertEqual(
            default_rule_for(EventType.CLASSEMENT, 3), PlacementTable([2, 1, 0])
        )


class DescribeRuleTests(unittest.TestCase):
    def test_describe(self):
        self.assertEqual(describe_rule(PlacementTable([5, 3, 2])), "Barème: 5, 3, 2")
        self.assertEqual(describe_rule(PerWin(3)), "3 pts/victoire")
        self.assertEqual(
            describe_rule(NumericRank(higher_is_better=True)), "Score élevé = meilleur"
        )
        self.assertEqual(
            describe_rule(NumericRank(higher_is_better=False)), "Score bas = meilleur"
        )

    def test_labels_cover_every_kind(self):
        self.assertEqual(set(EVENT_TYPE_LABELS), set(EventType))
        self.assertEqual(set(SCORING_RULE_LABELS), set(RuleKind))
        self.assertEqual(PerWin(1).kind, RuleKind.PER_WIN)


if __name__ == "__main__":
    unittest.main()
