"""
Scoring rule evaluation.

Applies one scoring rule to one match result. The effect depends on the
combination of result shape and rule kind:

    classement  + placement_table   table[position] to each listed player
    duel_1v1    + per_win           points to the winner, loser registered
    equipe      + per_win           points to each winner, losers registered
    score_num   + numeric_rank      only when numeric scoring is enabled

Every other combination leaves the points unchanged. A score sheet must
never fail because an event's rule does not fit its results.
"""

from typing import Dict, List, Tuple

from olympiads.scoring_core.rules import (
    ScoringRule,
    PlacementTable,
    PerWin,
    NumericRank,
)
from olympiads.scoring_core.results import (
    EventResult,
    Classement,
    Duel,
    TeamResult,
    NumericScore,
)


PointsMap = Dict[str, int]


def _register(points: PointsMap, player_id: str) -> None:
    """Make sure a player is present in the tally without changing their points."""
    points.setdefault(player_id, 0)


def _award(points: PointsMap, player_id: str, amount: int) -> None:
    _register(points, player_id)
    points[player_id] += amount


def rank_numeric_entries(result: NumericScore, higher_is_better: bool) -> List[Tuple[str, int]]:
    """Rank numeric entries, returning (player_id, 0-based position) pairs.

    Equal values share the better position, so two players tied for first
    both get position 0 and the next player gets position 2.
    """
    ordered = sorted(
        result.entries, key=lambda entry: entry.value, reverse=higher_is_better
    )

    ranking = []
    previous_value = None
    position = 0
    for index, entry in enumerate(ordered):
        if previous_value is None or entry.value != previous_value:
            position = index
            previous_value = entry.value
        ranking.append((entry.player_id, position))
    return ranking


def apply_rule(
    points: PointsMap,
    rule: ScoringRule,
    result: EventResult,
    score_numeric: bool = False,
) -> PointsMap:
    """Return a new tally with the points of one match result added.

    Args:
        points: The running tally, left untouched
        rule: The scoring rule of the event the match belongs to
        result: The recorded match result
        score_numeric: Score numeric results against numeric_rank rules.
            Off by default, numeric results then never score.

    Returns:
        A new PointsMap
    """
    updated = dict(points)

    if isinstance(result, Classement):
        if isinstance(rule, PlacementTable):
            for position, player_id in enumerate(result.order):
                _award(updated, player_id, rule.points_for_position(position))
    elif isinstance(result, Duel):
        if isinstance(rule, PerWin):
            _register(updated, result.winner)
            _register(updated, result.loser)
            updated[result.winner] += rule.points_per_player
    elif isinstance(result, TeamResult):
        if isinstance(rule, PerWin):
            for player_id in result.winner_team.players:
                _award(updated, player_id, rule.points_per_player)
            for player_id in result.loser_team.players:
                _register(updated, player_id)
    elif isinstance(result, NumericScore):
        if score_numeric and isinstance(rule, NumericRank):
            for player_id, position in rank_numeric_entries(
                result, rule.higher_is_better
            ):
                _award(updated, player_id, rule.points_for_position(position))

    return updated
