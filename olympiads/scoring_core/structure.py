"""
Olympiad structures and point aggregation.

This module provides a simple, immutable representation of olympiads:
- Players and activity templates
- Event instances, one per activity scheduled in an olympiad
- Matches recorded for an event instance
- Aggregation of matches into a points tally

All structures are snapshots. Updates return new objects and leave
their source untouched, so the same snapshot can be scored any number of times.
"""

from typing import Iterable, List, Optional
from dataclasses import dataclass, field, replace

from olympiads.scoring_core.evaluator import PointsMap, apply_rule
from olympiads.scoring_core.results import EventResult
from olympiads.scoring_core.rules import (
    DEFAULT_PLACEMENT_TABLE,
    RACE_PLACEMENT_TABLE,
    EventType,
    PerWin,
    ScoringRule,
    default_rule_for,
)


# Team size used for team events when none is given
DEFAULT_TEAM_SIZE = 2


@dataclass(frozen=True)
class Player:
    """A player. The engine only ever uses the id."""

    id: str
    name: str
    user_id: str = "local"
    linked_user_id: Optional[str] = None


@dataclass(frozen=True)
class Match:
    """One recorded round of an event. Never edited, only deleted."""

    id: str
    created_at: int
    result: EventResult


@dataclass(frozen=True)
class EventInstance:
    """An activity as scheduled within one olympiad, with its own rule copy."""

    id: str
    template_id: str
    name: str
    type: EventType
    rule: ScoringRule
    team_size: Optional[int] = None
    matches: List[Match] = field(default_factory=list)

    def results(self) -> List[EventResult]:
        """Results of all matches, in recorded order."""
        return [match.result for match in self.matches]

    def add_match(self, match: Match) -> "EventInstance":
        """Return a new EventInstance with the match appended (immutable pattern)."""
        return replace(self, matches=self.matches + [match])

    def remove_match(self, match_id: str) -> "EventInstance":
        return replace(
            self, matches=[m for m in self.matches if m.id != match_id]
        )


@dataclass(frozen=True)
class Activity:
    """A reusable activity template, e.g. darts or table football."""

    id: str
    name: str
    default_type: EventType
    default_rule: Optional[ScoringRule] = None
    supported_types: Optional[List[EventType]] = None

    def instantiate(
        self,
        instance_id: str,
        player_count: int = 0,
        rule: Optional[ScoringRule] = None,
        team_size: Optional[int] = None,
    ) -> EventInstance:
        """Clone this template into a new, empty event instance.

        The instance gets its own rule: the one given, else the template's
        default, else a default for the event type sized to the roster.
        Only team events keep a team size.
        """
        if rule is None:
            rule = self.default_rule or default_rule_for(
                self.default_type, player_count
            )

        if self.default_type == EventType.EQUIPE:
            team_size = team_size or DEFAULT_TEAM_SIZE
        else:
            team_size = None

        return EventInstance(
            id=instance_id,
            template_id=self.id,
            name=self.name,
            type=self.default_type,
            rule=rule,
            team_size=team_size,
        )


@dataclass(frozen=True)
class Olympiad:
    """A multi-activity competition with a fixed roster."""

    id: str
    title: str
    player_ids: List[str] = field(default_factory=list)
    event_instances: List[EventInstance] = field(default_factory=list)
    owner_id: str = ""
    created_at: int = 0

    def event_instance(self, instance_id: str) -> Optional[EventInstance]:
        for instance in self.event_instances:
            if instance.id == instance_id:
                return instance
        return None

    def instances_of(self, activity_id: str) -> List[EventInstance]:
        """Event instances created from the given activity template."""
        return [e for e in self.event_instances if e.template_id == activity_id]

    def add_event_instance(self, instance: EventInstance) -> "Olympiad":
        """Return a new Olympiad with the event instance appended."""
        return replace(self, event_instances=self.event_instances + [instance])

    def remove_event_instance(self, instance_id: str) -> "Olympiad":
        return replace(
            self,
            event_instances=[e for e in self.event_instances if e.id != instance_id],
        )

    def replace_event_instance(self, instance: EventInstance) -> "Olympiad":
        """Return a new Olympiad with the instance of the same id swapped in."""
        return replace(
            self,
            event_instances=[
                instance if e.id == instance.id else e for e in self.event_instances
            ],
        )

    @property
    def num_matches(self) -> int:
        return sum(len(e.matches) for e in self.event_instances)


def aggregate_points(
    event_instances: Iterable[EventInstance], score_numeric: bool = False
) -> PointsMap:
    """Fold every match of the given event instances into a fresh tally.

    Matches are applied instance by instance, in stored order, each with the
    rule of the instance it belongs to. No instances means an empty tally.
    """
    points: PointsMap = {}
    for instance in event_instances:
        for result in instance.results():
            points = apply_rule(points, instance.rule, result, score_numeric)
    return points


# Activities every new scoreboard starts with
DEFAULT_ACTIVITIES = [
    Activity("act-babyfoot", "Babyfoot", EventType.DUEL_1V1, PerWin(3)),
    Activity(
        "act-flechettes", "Fléchettes", EventType.CLASSEMENT, DEFAULT_PLACEMENT_TABLE
    ),
    Activity("act-volley", "Volley", EventType.EQUIPE, PerWin(4)),
    Activity("act-course", "Course", EventType.CLASSEMENT, RACE_PLACEMENT_TABLE),
    Activity("act-petanque", "Pétanque", EventType.EQUIPE, PerWin(3)),
]
