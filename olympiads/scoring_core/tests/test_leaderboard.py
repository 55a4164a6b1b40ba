"""
Tests for leaderboards and the three aggregation scopes.
"""

import unittest
from collections import Counter

from olympiads.scoring_core.builder import OlympiadBuilder
from olympiads.scoring_core.leaderboard import (
    LeaderboardEntry,
    activity_leaderboard,
    build_leaderboard,
    global_activity_leaderboard,
    leaderboard_points,
    olympiad_leaderboard,
)
from olympiads.scoring_core.rules import EventType, NumericRank, PerWin, PlacementTable
from olympiads.scoring_core.tests.test_utils import create_sample_builder


class BuildLeaderboardTests(unittest.TestCase):
    def test_sorted_by_points_descending(self):
        board = build_leaderboard({"p1": 2, "p2": 9, "p3": 5})
        self.assertEqual([e.player_id for e in board], ["p2", "p3", "p1"])
        self.assertEqual([e.points for e in board], [9, 5, 2])

    def test_ties_ordered_by_player_id_and_share_rank(self):
        board = build_leaderboard({"p3": 4, "p1": 4, "p2": 7, "p4": 1})
        self.assertEqual(
            board,
            [
                LeaderboardEntry("p2", 7, 1),
                LeaderboardEntry("p1", 4, 2),
                LeaderboardEntry("p3", 4, 2),
                LeaderboardEntry("p4", 1, 4),
            ],
        )

    def test_seeded_roster_with_no_matches(self):
        board = build_leaderboard({}, ["p2", "p1"])
        self.assertEqual(
            board, [LeaderboardEntry("p1", 0, 1), LeaderboardEntry("p2", 0, 1)]
        )

    def test_seed_merges_with_tally(self):
        board = build_leaderboard({"p1": 3, "p9": 1}, ["p1", "p2"])
        self.assertEqual(leaderboard_points(board), {"p1": 3, "p2": 0, "p9": 1})
        self.assertEqual(len(board), 3)

    def test_empty(self):
        self.assertEqual(build_leaderboard({}), [])

    def test_no_duplicates(self):
        board = build_leaderboard({"p1": 3, "p2": 1}, ["p1", "p1", "p2", "p3"])
        counts = Counter(e.player_id for e in board)
        self.assertEqual(set(counts.values()), {1})
        self.assertEqual(len(board), 3)


class OlympiadLeaderboardTests(unittest.TestCase):
    def test_sample_olympiad(self):
        builder = create_sample_builder()
        board = olympiad_leaderboard(builder.build())

        self.assertEqual(
            [(builder.name_of(e.player_id), e.points) for e in board],
            [("Alice", 8), ("Bob", 7), ("Charlie", 5), ("Diane", 4)],
        )

    def test_roster_without_matches(self):
        builder = OlympiadBuilder().players("Alice", "Bob")
        board = olympiad_leaderboard(builder.build())
        self.assertEqual(leaderboard_points(board), {"p1": 0, "p2": 0})
        self.assertEqual([e.player_id for e in board], ["p1", "p2"])

    def test_players_outside_roster_still_score(self):
        builder = OlympiadBuilder().players("Alice").guest("Zoe")
        builder.activity("Chess", EventType.DUEL_1V1, PerWin(2))
        builder.event("Chess").duel("Zoe", "Alice")

        board = olympiad_leaderboard(builder.build())
        self.assertEqual(leaderboard_points(board), {"p1": 0, "p2": 2})

    def test_numeric_events_only_score_when_enabled(self):
        builder = OlympiadBuilder().players("Alice", "Bob")
        builder.activity(
            "Shot put", EventType.SCORE_NUM, NumericRank(higher_is_better=True, table=[4, 1])
        )
        builder.event("Shot put").scores(("Alice", 11.2), ("Bob", 12.9))
        olympiad = builder.build()

        self.assertEqual(
            leaderboard_points(olympiad_leaderboard(olympiad)), {"p1": 0, "p2": 0}
        )
        self.assertEqual(
            leaderboard_points(olympiad_leaderboard(olympiad, score_numeric=True)),
            {"p1": 1, "p2": 4},
        )

    def test_leaderboard_is_read_only(self):
        builder = create_sample_builder()
        olympiad = builder.build()
        before = olympiad.num_matches

        first = olympiad_leaderboard(olympiad)
        second = olympiad_leaderboard(olympiad)

        self.assertEqual(first, second)
        self.assertEqual(olympiad.num_matches, before)


class ActivityLeaderboardTests(unittest.TestCase):
    def test_only_counts_matching_instances(self):
        builder = create_sample_builder()
        board = activity_leaderboard(builder.build(), builder.activity_id("Babyfoot"))

        self.assertEqual(
            [(builder.name_of(e.player_id), e.points, e.rank) for e in board],
            [("Alice", 3, 1), ("Charlie", 3, 1), ("Bob", 0, 3), ("Diane", 0, 3)],
        )

    def test_several_instances_of_one_activity(self):
        builder = OlympiadBuilder().players("Alice", "Bob", "Charlie")
        builder.activity("Darts", EventType.CLASSEMENT, PlacementTable([5, 3, 2]))
        builder.event("Darts").ranking("Alice", "Bob", "Charlie")
        builder.event("Darts", rule=PlacementTable([1, 10])).ranking("Charlie", "Alice")

        board = activity_leaderboard(builder.build(), builder.activity_id("Darts"))
        self.assertEqual(leaderboard_points(board), {"p1": 15, "p2": 3, "p3": 3})

    def test_unknown_activity_lists_roster(self):
        builder = create_sample_builder()
        board = activity_leaderboard(builder.build(), "act-unknown")
        self.assertEqual([e.points for e in board], [0, 0, 0, 0])


class GlobalActivityLeaderboardTests(unittest.TestCase):
    def setUp(self):
        builder = OlympiadBuilder("Spring").players("Alice", "Bob", "Charlie")
        builder.activity("Babyfoot", EventType.DUEL_1V1, PerWin(3))
        builder.activity("Darts", EventType.CLASSEMENT, PlacementTable([5, 3, 2]))
        builder.event("Babyfoot").duel("Alice", "Bob")
        builder.event("Darts").ranking("Charlie", "Bob", "Alice")

        builder.olympiad("Summer", "Bob", "Diane", "Eve")
        builder.event("Babyfoot", rule=PerWin(2)).duel("Bob", "Diane").duel("Eve", "Bob")

        builder.olympiad("Autumn", "Fanny")
        self.builder = builder
        self.olympiads = builder.build_all()
        self.babyfoot = builder.activity_id("Babyfoot")

    def test_only_participants_are_listed(self):
        board = global_activity_leaderboard(self.olympiads, self.babyfoot)
        self.assertEqual(
            [(self.builder.name_of(e.player_id), e.points) for e in board],
            [("Alice", 3), ("Bob", 2), ("Eve", 2), ("Diane", 0)],
        )

    def test_equals_sum_of_per_olympiad_tallies(self):
        expected = Counter()
        for olympiad in self.olympiads:
            expected.update(
                leaderboard_points(activity_leaderboard(olympiad, self.babyfoot))
            )

        global_points = leaderboard_points(
            global_activity_leaderboard(self.olympiads, self.babyfoot)
        )
        for player_id, points in global_points.items():
            self.assertEqual(points, expected[player_id])
        # Roster players who never played are seeded locally but not globally
        self.assertNotIn(self.builder.player_id("Charlie"), global_points)
        self.assertNotIn(self.builder.player_id("Fanny"), global_points)

    def test_no_olympiads(self):
        self.assertEqual(global_activity_leaderboard([], self.babyfoot), [])


class SortPropertyTests(unittest.TestCase):
    def test_points_never_increase(self):
        tallies = [
            {},
            {"a": 1},
            {"a": 1, "b": 1, "c": 1},
            {"a": 5, "b": 0, "c": 12, "d": 5, "e": 7},
            {str(i): (i * 7) % 11 for i in range(30)},
        ]
        for tally in tallies:
            board = build_leaderboard(tally)
            self.assertEqual(len(board), len(tally))
            for above, below in zip(board, board[1:]):
                self.assertGreaterEqual(above.points, below.points)
                self.assertLessEqual(above.rank, below.rank)


if __name__ == "__main__":
    unittest.main()
