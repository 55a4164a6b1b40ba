"""
Tests for olympiad structures and point aggregation.
"""

import unittest

from olympiads.scoring_core.results import Classement, Duel, team_game
from olympiads.scoring_core.rules import (
    EventType,
    PerWin,
    PlacementTable,
)
from olympiads.scoring_core.structure import (
    DEFAULT_ACTIVITIES,
    Activity,
    EventInstance,
    Match,
    Olympiad,
    aggregate_points,
)


def make_instance(instance_id, rule, *results, template_id="act-1"):
    matches = [Match(f"{instance_id}-m{i}", i, r) for i, r in enumerate(results)]
    return EventInstance(
        instance_id, template_id, "Event", EventType.CLASSEMENT, rule, matches=matches
    )


class AggregationTests(unittest.TestCase):
    def test_no_instances(self):
        self.assertEqual(aggregate_points([]), {})

    def test_instance_without_matches(self):
        self.assertEqual(aggregate_points([make_instance("e1", PerWin(3))]), {})

    def test_each_instance_uses_its_own_rule(self):
        darts = make_instance("e1", PlacementTable([5, 3, 2]), Classement(["p1", "p2", "p3"]))
        duels = make_instance(
            "e2", PerWin(3), Duel("p3", "p1"), Duel("p3", "p2")
        )
        self.assertEqual(
            aggregate_points([darts, duels]), {"p1": 5, "p2": 3, "p3": 8}
        )

    def test_mismatched_instances_register_nobody(self):
        instance = make_instance("e1", PerWin(3), Classement(["p1", "p2"]))
        self.assertEqual(aggregate_points([instance]), {})

    def test_team_games_accumulate(self):
        instance = make_instance(
            "e1",
            PerWin(4),
            team_game(["a", "b"], ["c", "d"]),
            team_game(["a", "c"], ["b", "d"]),
        )
        self.assertEqual(
            aggregate_points([instance]), {"a": 8, "b": 4, "c": 4, "d": 0}
        )


class ImmutabilityTests(unittest.TestCase):
    def test_add_match_returns_new_instance(self):
        instance = make_instance("e1", PerWin(3))
        match = Match("m1", 1, Duel("p1", "p2"))

        updated = instance.add_match(match)

        self.assertEqual(instance.matches, [])
        self.assertEqual(updated.matches, [match])
        self.assertEqual(updated.results(), [Duel("p1", "p2")])

    def test_remove_match(self):
        instance = make_instance("e1", PerWin(3), Duel("p1", "p2"), Duel("p2", "p1"))
        updated = instance.remove_match("e1-m0")
        self.assertEqual([m.id for m in updated.matches], ["e1-m1"])
        self.assertEqual(len(instance.matches), 2)

    def test_olympiad_event_updates(self):
        olympiad = Olympiad("o1", "Summer", ["p1", "p2"])
        instance = make_instance("e1", PerWin(3))

        with_event = olympiad.add_event_instance(instance)
        self.assertEqual(olympiad.event_instances, [])
        self.assertIs(with_event.event_instance("e1"), instance)

        played = instance.add_match(Match("m1", 1, Duel("p1", "p2")))
        replaced = with_event.replace_event_instance(played)
        self.assertEqual(replaced.num_matches, 1)
        self.assertEqual(with_event.num_matches, 0)

        self.assertEqual(replaced.remove_event_instance("e1").event_instances, [])
        self.assertIsNone(replaced.event_instance("missing"))

    def test_instances_of_activity(self):
        olympiad = Olympiad(
            "o1",
            "Summer",
            event_instances=[
                make_instance("e1", PerWin(3), template_id="act-a"),
                make_instance("e2", PerWin(3), template_id="act-b"),
                make_instance("e3", PerWin(3), template_id="act-a"),
            ],
        )
        self.assertEqual([e.id for e in olympiad.instances_of("act-a")], ["e1", "e3"])
        self.assertEqual(olympiad.instances_of("act-c"), [])


class ActivityTemplateTests(unittest.TestCase):
    def test_instantiate_clones_template_settings(self):
        activity = Activity("act-1", "Darts", EventType.CLASSEMENT, PlacementTable([5, 3]))
        instance = activity.instantiate("e1", player_count=4)

        self.assertEqual(instance.template_id, "act-1")
        self.assertEqual(instance.name, "Darts")
        self.assertEqual(instance.type, EventType.CLASSEMENT)
        self.assertEqual(instance.rule, PlacementTable([5, 3]))
        self.assertIsNone(instance.team_size)
        self.assertEqual(instance.matches, [])

    def test_instantiate_with_rule_override(self):
        activity = Activity("act-1", "Darts", EventType.CLASSEMENT, PlacementTable([5, 3]))
        instance = activity.instantiate("e1", rule=PlacementTable([1]))
        self.assertEqual(instance.rule, PlacementTable([1]))
        self.assertEqual(activity.default_rule, PlacementTable([5, 3]))

    def test_instantiate_without_default_rule(self):
        ranking = Activity("act-1", "Race", EventType.CLASSEMENT)
        self.assertEqual(
            ranking.instantiate("e1", player_count=3).rule, PlacementTable([2, 1, 0])
        )

        duel = Activity("act-2", "Chess", EventType.DUEL_1V1)
        self.assertEqual(duel.instantiate("e2").rule, PerWin(3))

    def test_team_size_only_for_team_events(self):
        volley = Activity("act-1", "Volley", EventType.EQUIPE, PerWin(4))
        self.assertEqual(volley.instantiate("e1").team_size, 2)
        self.assertEqual(volley.instantiate("e2", team_size=3).team_size, 3)

        darts = Activity("act-2", "Darts", EventType.CLASSEMENT, PlacementTable([1]))
        self.assertIsNone(darts.instantiate("e3", team_size=3).team_size)

    def test_default_activities(self):
        by_id = {a.id: a for a in DEFAULT_ACTIVITIES}
        self.assertEqual(
            sorted(by_id),
            ["act-babyfoot", "act-course", "act-flechettes", "act-petanque", "act-volley"],
        )
        self.assertEqual(by_id["act-babyfoot"].default_rule, PerWin(3))
        self.assertEqual(by_id["act-volley"].default_rule, PerWin(4))
        self.assertEqual(
            by_id["act-course"].default_rule, PlacementTable([10, 7, 5, 3, 2, 1])
        )
        self.assertEqual(by_id["act-petanque"].default_type, EventType.EQUIPE)


if __name__ == "__main__":
    unittest.main()
