"""
Builder for creating olympiad structures with a fluent API.

Players, activities and events are referred to by name; the builder hands
out ids and keeps the name mappings. It can build several olympiads that
share the same players and activities, which is what cross-olympiad
leaderboards need.

    builder = OlympiadBuilder("Summer")
    builder.players("Alice", "Bob", "Charlie")
    builder.activity("Darts", EventType.CLASSEMENT, PlacementTable([5, 3, 2]))
    builder.event("Darts").ranking("Alice", "Bob", "Charlie")
    olympiad = builder.build()
"""

from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import replace

from olympiads.scoring_core.results import (
    Classement,
    Duel,
    EventResult,
    NumericScore,
    ScoreEntry,
    Team,
    TeamResult,
)
from olympiads.scoring_core.rules import EventType, ScoringRule
from olympiads.scoring_core.structure import (
    Activity,
    EventInstance,
    Match,
    Olympiad,
    Player,
)


class OlympiadBuilder:
    """Builder for creating olympiad snapshots easily."""

    def __init__(self, title: str = "Olympiad"):
        self.name_to_id: Dict[str, str] = {}
        self.activities: Dict[str, Activity] = {}
        self.olympiads: List[Olympiad] = []
        self.current: Olympiad = self._new_olympiad(title)
        self.current_event: Optional[EventInstance] = None
        self._next_event_id = 1
        self._next_match_id = 1

    def _new_olympiad(self, title: str) -> Olympiad:
        return Olympiad(id=f"o{len(self.olympiads) + 1}", title=title)

    def _get_or_create_player_id(self, name: str) -> str:
        if name not in self.name_to_id:
            self.name_to_id[name] = f"p{len(self.name_to_id) + 1}"
        return self.name_to_id[name]

    def player_id(self, name: str) -> str:
        """Id of a named player. Raises ValueError for unknown names."""
        if name not in self.name_to_id:
            raise ValueError(f"Player not found: {name}")
        return self.name_to_id[name]

    def activity_id(self, name: str) -> str:
        if name not in self.activities:
            raise ValueError(f"Activity not found: {name}")
        return self.activities[name].id

    def name_of(self, player_id: str) -> str:
        """Display name of a player id, the id itself when unknown."""
        for name, pid in self.name_to_id.items():
            if pid == player_id:
                return name
        return player_id

    @property
    def player_list(self) -> List[Player]:
        return [Player(pid, name) for name, pid in self.name_to_id.items()]

    # Roster and catalogue

    def player(self, name: str) -> "OlympiadBuilder":
        """Add a player to the current olympiad's roster."""
        player_id = self._get_or_create_player_id(name)
        if player_id not in self.current.player_ids:
            self.current = replace(
                self.current, player_ids=self.current.player_ids + [player_id]
            )
        return self

    def players(self, *names: str) -> "OlympiadBuilder":
        for name in names:
            self.player(name)
        return self

    def guest(self, name: str) -> "OlympiadBuilder":
        """Register a player who is not on the current roster."""
        self._get_or_create_player_id(name)
        return self

    def activity(
        self,
        name: str,
        default_type: EventType,
        default_rule: Optional[ScoringRule] = None,
    ) -> "OlympiadBuilder":
        """Register an activity template."""
        if name not in self.activities:
            activity_id = f"act-{len(self.activities) + 1}"
            self.activities[name] = Activity(
                activity_id, name, default_type, default_rule
            )
        return self

    # Events and matches

    def event(
        self,
        activity_name: str,
        rule: Optional[ScoringRule] = None,
        team_size: Optional[int] = None,
    ) -> "OlympiadBuilder":
        """Schedule an instance of an activity; later matches are recorded on it."""
        activity = self.activities.get(activity_name)
        if activity is None:
            raise ValueError(f"Activity not found: {activity_name}")

        instance = activity.instantiate(
            f"e{self._next_event_id}",
            player_count=len(self.current.player_ids),
            rule=rule,
            team_size=team_size,
        )
        self._next_event_id += 1

        self.current = self.current.add_event_instance(instance)
        self.current_event = instance
        return self

    def add_result(self, result: EventResult) -> "OlympiadBuilder":
        """Record a match with the given result on the current event."""
        if self.current_event is None:
            raise ValueError("No event selected: call event() first")

        match = Match(f"m{self._next_match_id}", self._next_match_id, result)
        self._next_match_id += 1

        self.current_event = self.current_event.add_match(match)
        self.current = self.current.replace_event_instance(self.current_event)
        return self

    def ranking(self, *names: str) -> "OlympiadBuilder":
        """Record a finishing order, best first."""
        return self.add_result(Classement([self.player_id(n) for n in names]))

    def duel(self, winner: str, loser: str) -> "OlympiadBuilder":
        return self.add_result(Duel(self.player_id(winner), self.player_id(loser)))

    def team_game(
        self, winners: Sequence[str], losers: Sequence[str]
    ) -> "OlympiadBuilder":
        """Record a team game between two lists of named players."""
        return self.add_result(
            TeamResult(
                Team([self.player_id(n) for n in winners]),
                Team([self.player_id(n) for n in losers]),
            )
        )

    def scores(self, *entries: Tuple[str, float]) -> "OlympiadBuilder":
        """Record raw numeric scores as (name, value) pairs."""
        return self.add_result(
            NumericScore([ScoreEntry(self.player_id(n), v) for n, v in entries])
        )

    # Olympiads

    def olympiad(self, title: str, *player_names: str) -> "OlympiadBuilder":
        """Finish the current olympiad and start a new one."""
        self.olympiads.append(self.current)
        self.current = self._new_olympiad(title)
        self.current_event = None
        return self.players(*player_names)

    def build(self) -> Olympiad:
        """Return the olympiad being built."""
        return self.current

    def build_all(self) -> List[Olympiad]:
        """Return every olympiad built so far, the current one last."""
        return self.olympiads + [self.current]
