"""
Scoring rules for olympiad events.

A scoring rule decides how many points a recorded match is worth. Every
event instance carries its own copy of a rule, usually cloned from the
activity template it was created from.

There are exactly three kinds of rule:
- placement tables, indexed by finishing position
- a flat number of points for each player on the winning side
- numeric ranking, which ranks raw scores before applying a table
"""

from typing import List, Optional, Union
from dataclasses import dataclass, field
from enum import Enum


class EventType(Enum):
    """The shape of the results an event records."""

    CLASSEMENT = "classement"
    DUEL_1V1 = "duel_1v1"
    EQUIPE = "equipe"
    SCORE_NUM = "score_num"


class RuleKind(Enum):
    """Tag of a scoring rule."""

    PLACEMENT_TABLE = "placement_table"
    PER_WIN = "per_win"
    NUMERIC_RANK = "numeric_rank"


def _points_at(table: List[int], position: int) -> int:
    if 0 <= position < len(table):
        return table[position]
    return 0


@dataclass(frozen=True)
class PlacementTable:
    """Points by finishing position (0-based). Positions past the end score 0."""

    table: List[int] = field(default_factory=list)

    kind = RuleKind.PLACEMENT_TABLE

    def points_for_position(self, position: int) -> int:
        """Return the points awarded for a 0-based finishing position."""
        return _points_at(self.table, position)


@dataclass(frozen=True)
class PerWin:
    """Flat points for every player on the winning side."""

    points_per_player: int

    kind = RuleKind.PER_WIN


@dataclass(frozen=True)
class NumericRank:
    """Rank raw numeric scores, then score the ranking with a table."""

    higher_is_better: bool
    table: List[int] = field(default_factory=list)

    kind = RuleKind.NUMERIC_RANK

    def points_for_position(self, position: int) -> int:
        """Return the points awarded for a 0-based rank among the scores."""
        return _points_at(self.table, position)


ScoringRule = Union[PlacementTable, PerWin, NumericRank]


# Rules used by the default activity catalogue
DEFAULT_PLACEMENT_TABLE = PlacementTable([5, 3, 2, 1, 0])

RACE_PLACEMENT_TABLE = PlacementTable([10, 7, 5, 3, 2, 1])

# Default points per win when an activity is added without an explicit rule
DEFAULT_POINTS_PER_WIN = 3


EVENT_TYPE_LABELS = {
    EventType.CLASSEMENT: "Classement",
    EventType.DUEL_1V1: "Duel 1v1",
    EventType.EQUIPE: "Équipe",
    EventType.SCORE_NUM: "Score numérique",
}

SCORING_RULE_LABELS = {
    RuleKind.PLACEMENT_TABLE: "Barème par place",
    RuleKind.PER_WIN: "Points par victoire",
    RuleKind.NUMERIC_RANK: "Classement numérique",
}


def auto_placement_table(player_count: int) -> PlacementTable:
    """Build a descending table for a roster: n-1 points for first, down to 0.

    A roster of zero players is treated as one player.
    """
    count = max(1, player_count)
    return PlacementTable([max(count - 1 - idx, 0) for idx in range(count)])


def parse_placement_table(text: Optional[str]) -> List[int]:
    """Parse a comma-separated list of points, dropping anything not an integer."""
    if not text:
        return []

    values = []
    for part in text.split(","):
        part = part.strip()
        try:
            values.append(int(part))
        except ValueError:
            continue
    return values


def placement_rule_from_text(text: Optional[str]) -> PlacementTable:
    """Build a placement table rule from text such as "5, 3, 2".

    Raises ValueError when no points can be read from the text.
    """
    table = parse_placement_table(text)
    if not table:
        raise ValueError(f"Invalid placement table: {text!r}")
    return PlacementTable(table)


def default_rule_for(
    event_type: EventType, player_count: int = 0
) -> ScoringRule:
    """Pick the rule an event of this type gets when none is configured."""
    if event_type in (EventType.DUEL_1V1, EventType.EQUIPE):
        return PerWin(points_per_player=DEFAULT_POINTS_PER_WIN)
    return auto_placement_table(player_count)


def describe_rule(rule: ScoringRule) -> str:
    """Return the short French description shown next to an event."""
    if isinstance(rule, PlacementTable):
        return "Barème: " + ", ".join(str(points) for points in rule.table)
    elif isinstance(rule, PerWin):
        return f"{rule.points_per_player} pts/victoire"
    elif isinstance(rule, NumericRank):
        return f"Score {'élevé' if rule.higher_is_better else 'bas'} = meilleur"
    raise TypeError(f"Unknown scoring rule: {rule!r}")
