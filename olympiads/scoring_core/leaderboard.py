"""
Leaderboards for olympiads.

Turns point tallies into ranked leaderboards, and provides the three
scopes a leaderboard can be computed over:

- the whole olympiad, every event instance counted
- one activity within one olympiad
- one activity across any number of olympiads

Leaderboards are sorted by points, highest first. Players with equal
points share a rank and are listed by ascending player id.
"""

from typing import Dict, Iterable, List, Optional
from dataclasses import dataclass

from olympiads.scoring_core.evaluator import PointsMap
from olympiads.scoring_core.structure import Olympiad, aggregate_points


@dataclass(frozen=True)
class LeaderboardEntry:
    """A player's line on a leaderboard."""

    player_id: str
    points: int
    rank: int = 1


def build_leaderboard(
    points: PointsMap, seed_player_ids: Optional[Iterable[str]] = None
) -> List[LeaderboardEntry]:
    """
    Build a sorted leaderboard from a points tally.

    Args:
        points: Mapping from player id to accumulated points
        seed_player_ids: Optional roster; every listed player appears on the
            leaderboard, with 0 points if they have not scored

    Returns:
        Entries sorted by points descending, then player id ascending
    """
    merged: Dict[str, int] = {}
    if seed_player_ids is not None:
        for player_id in seed_player_ids:
            merged[player_id] = 0
    for player_id, player_points in points.items():
        merged[player_id] = merged.get(player_id, 0) + player_points

    ordered = sorted(merged.items(), key=lambda item: (-item[1], item[0]))

    leaderboard = []
    rank = 0
    previous_points = None
    for index, (player_id, player_points) in enumerate(ordered, start=1):
        if player_points != previous_points:
            rank = index
            previous_points = player_points
        leaderboard.append(LeaderboardEntry(player_id, player_points, rank))

    return leaderboard


def olympiad_leaderboard(
    olympiad: Olympiad, score_numeric: bool = False
) -> List[LeaderboardEntry]:
    """Overall leaderboard of one olympiad, every roster player included."""
    points = aggregate_points(olympiad.event_instances, score_numeric)
    return build_leaderboard(points, olympiad.player_ids)


def activity_leaderboard(
    olympiad: Olympiad, activity_id: str, score_numeric: bool = False
) -> List[LeaderboardEntry]:
    """Leaderboard of one activity within one olympiad, roster included."""
    points = aggregate_points(olympiad.instances_of(activity_id), score_numeric)
    return build_leaderboard(points, olympiad.player_ids)


def global_activity_leaderboard(
    olympiads: Iterable[Olympiad], activity_id: str, score_numeric: bool = False
) -> List[LeaderboardEntry]:
    """Leaderboard of one activity across olympiads.

    Nobody is seeded: only players registered by a qualifying match appear.
    """
    instances = [
        instance
        for olympiad in olympiads
        for instance in olympiad.instances_of(activity_id)
    ]
    return build_leaderboard(aggregate_points(instances, score_numeric))


def leaderboard_points(leaderboard: Iterable[LeaderboardEntry]) -> PointsMap:
    """Flatten a leaderboard back into a player id -> points mapping."""
    return {entry.player_id: entry.points for entry in leaderboard}
