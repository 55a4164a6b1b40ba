"""
Scoreboard store operations.

OlympiadStore is the application layer over a snapshot repository: every
operation loads the current state, builds a new state with the change
applied and saves it. Structures are never modified in place.

Mutations that target an unknown olympiad or event instance leave the
state untouched, and blank names or titles are ignored.
"""

import logging
from typing import Callable, List, Optional
from dataclasses import replace

from django.conf import settings
from django.utils import timezone
from django.utils.crypto import get_random_string

from olympiads.scoring_core.leaderboard import (
    LeaderboardEntry,
    activity_leaderboard,
    global_activity_leaderboard,
    olympiad_leaderboard,
)
from olympiads.scoring_core.results import EventResult
from olympiads.scoring_core.rules import (
    DEFAULT_PLACEMENT_TABLE,
    EventType,
    PlacementTable,
    ScoringRule,
    placement_rule_from_text,
)
from olympiads.scoring_core.structure import (
    Activity,
    EventInstance,
    Match,
    Olympiad,
    Player,
)
from olympiads.scoring_core.summary import summarize_result
from olympiads.scoreboard.repository import SnapshotRepository
from olympiads.scoreboard.snapshot import StoreState

logger = logging.getLogger(__name__)

ID_LENGTH = 8


def generate_id() -> str:
    return get_random_string(ID_LENGTH)


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(timezone.now().timestamp() * 1000)


def _check_rule(rule: ScoringRule) -> None:
    if isinstance(rule, PlacementTable) and not rule.table:
        raise ValueError("A placement table needs at least one entry")


class OlympiadStore:
    """Players, activities and olympiads, backed by a snapshot repository."""

    def __init__(
        self,
        repository: SnapshotRepository,
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], int] = now_ms,
        score_numeric: Optional[bool] = None,
    ):
        self.repository = repository
        self.id_factory = id_factory
        self.clock = clock
        if score_numeric is None:
            score_numeric = getattr(settings, "OLYMPIADS_SCORE_NUMERIC_RESULTS", False)
        self.score_numeric = score_numeric

    @property
    def state(self) -> StoreState:
        return self.repository.load()

    def _save(self, state: StoreState) -> StoreState:
        self.repository.save(state)
        return state

    def _update_olympiad(
        self, olympiad_id: str, change: Callable[[Olympiad], Olympiad]
    ) -> Optional[Olympiad]:
        state = self.state
        olympiad = state.olympiad(olympiad_id)
        if olympiad is None:
            logger.debug("Ignoring update of unknown olympiad %s", olympiad_id)
            return None

        updated = change(olympiad)
        self._save(
            replace(
                state,
                olympiads=[updated if o.id == olympiad_id else o for o in state.olympiads],
            )
        )
        return updated

    def _update_event_instance(
        self,
        olympiad_id: str,
        instance_id: str,
        change: Callable[[EventInstance], EventInstance],
    ) -> Optional[EventInstance]:
        olympiad = self.state.olympiad(olympiad_id)
        instance = olympiad.event_instance(instance_id) if olympiad else None
        if instance is None:
            logger.debug(
                "Ignoring update of unknown event %s in olympiad %s",
                instance_id,
                olympiad_id,
            )
            return None

        updated = change(instance)
        self._update_olympiad(olympiad_id, lambda o: o.replace_event_instance(updated))
        return updated

    # Players

    def add_player(self, name: str) -> Optional[Player]:
        name = name.strip()
        if not name:
            logger.debug("Ignoring player with a blank name")
            return None

        player = Player(self.id_factory(), name)
        state = self.state
        self._save(replace(state, players=state.players + [player]))
        logger.info("Added player %s (%s)", player.name, player.id)
        return player

    def remove_player(self, player_id: str) -> None:
        state = self.state
        self._save(
            replace(state, players=[p for p in state.players if p.id != player_id])
        )

    # Activities

    def add_activity(
        self,
        name: str,
        default_type: EventType,
        default_rule: Optional[ScoringRule] = None,
    ) -> Optional[Activity]:
        """Add an activity template. Without a rule it scores 5, 3, 2, 1, 0 by place."""
        name = name.strip()
        if not name:
            logger.debug("Ignoring activity with a blank name")
            return None

        activity = Activity(
            self.id_factory(),
            name,
            default_type,
            default_rule or DEFAULT_PLACEMENT_TABLE,
        )
        state = self.state
        self._save(replace(state, activities=state.activities + [activity]))
        logger.info("Added activity %s (%s)", activity.name, activity.id)
        return activity

    def remove_activity(self, activity_id: str) -> None:
        state = self.state
        self._save(
            replace(
                state, activities=[a for a in state.activities if a.id != activity_id]
            )
        )

    # Olympiads

    def create_olympiad(self, title: str, player_ids: List[str]) -> str:
        """Create an olympiad and make it current. Returns "" when nothing was created."""
        title = title.strip()
        if not title or not player_ids:
            logger.debug("Ignoring olympiad without a title or players")
            return ""

        olympiad = Olympiad(
            id=self.id_factory(),
            title=title,
            player_ids=list(player_ids),
            created_at=self.clock(),
        )
        state = self.state
        self._save(
            replace(
                state,
                olympiads=state.olympiads + [olympiad],
                current_olympiad_id=olympiad.id,
            )
        )
        logger.info("Created olympiad %s (%s)", olympiad.title, olympiad.id)
        return olympiad.id

    def remove_olympiad(self, olympiad_id: str) -> None:
        state = self.state
        current = state.current_olympiad_id
        self._save(
            replace(
                state,
                olympiads=[o for o in state.olympiads if o.id != olympiad_id],
                current_olympiad_id=None if current == olympiad_id else current,
            )
        )

    def set_current_olympiad(self, olympiad_id: Optional[str] = None) -> None:
        self._save(replace(self.state, current_olympiad_id=olympiad_id))

    @property
    def current_olympiad(self) -> Optional[Olympiad]:
        state = self.state
        if state.current_olympiad_id is None:
            return None
        return state.olympiad(state.current_olympiad_id)

    # Event instances

    def add_event_instance(
        self,
        olympiad_id: str,
        template_id: str,
        name: str,
        type: EventType,
        rule: ScoringRule,
        team_size: Optional[int] = None,
    ) -> Optional[EventInstance]:
        """Add an event instance. Raises ValueError for an empty placement table."""
        _check_rule(rule)
        instance = EventInstance(
            id=self.id_factory(),
            template_id=template_id,
            name=name,
            type=type,
            rule=rule,
            team_size=team_size,
        )
        if self._update_olympiad(olympiad_id, lambda o: o.add_event_instance(instance)):
            logger.info("Added event %s to olympiad %s", instance.name, olympiad_id)
            return instance
        return None

    def add_activity_to_olympiad(
        self,
        olympiad_id: str,
        activity_id: str,
        rule: Optional[ScoringRule] = None,
        team_size: Optional[int] = None,
        table_text: Optional[str] = None,
    ) -> Optional[EventInstance]:
        """Schedule an activity in an olympiad, cloning the template's settings.

        A placement table may be given as text (e.g. "5, 3, 2") instead of
        a rule. Raises ValueError when the table has no entries.
        """
        if table_text is not None:
            rule = placement_rule_from_text(table_text)
        if rule is not None:
            _check_rule(rule)

        state = self.state
        activity = state.activity(activity_id)
        olympiad = state.olympiad(olympiad_id)
        if activity is None or olympiad is None:
            logger.debug(
                "Ignoring unknown activity %s or olympiad %s", activity_id, olympiad_id
            )
            return None

        instance = activity.instantiate(
            self.id_factory(),
            player_count=len(olympiad.player_ids),
            rule=rule,
            team_size=team_size,
        )
        self._update_olympiad(olympiad_id, lambda o: o.add_event_instance(instance))
        logger.info("Added event %s to olympiad %s", instance.name, olympiad_id)
        return instance

    def remove_event_instance(self, olympiad_id: str, instance_id: str) -> None:
        self._update_olympiad(
            olympiad_id, lambda o: o.remove_event_instance(instance_id)
        )

    # Matches

    def add_match(
        self, olympiad_id: str, instance_id: str, result: EventResult
    ) -> Optional[Match]:
        match = Match(self.id_factory(), self.clock(), result)
        if not self._update_event_instance(
            olympiad_id, instance_id, lambda e: e.add_match(match)
        ):
            return None

        logger.info("Recorded match %s on event %s", match.id, instance_id)
        roster = set(self.state.olympiad(olympiad_id).player_ids)
        outsiders = [p for p in result.participants() if p not in roster]
        if outsiders:
            # Still scored, they just are not seeded on the olympiad leaderboard
            logger.warning(
                "Match %s names players outside the roster: %s",
                match.id,
                ", ".join(outsiders),
            )
        return match

    def remove_match(self, olympiad_id: str, instance_id: str, match_id: str) -> None:
        self._update_event_instance(
            olympiad_id, instance_id, lambda e: e.remove_match(match_id)
        )

    # Leaderboards

    def olympiad_leaderboard(self, olympiad_id: str) -> List[LeaderboardEntry]:
        olympiad = self.state.olympiad(olympiad_id)
        if olympiad is None:
            return []
        return olympiad_leaderboard(olympiad, self.score_numeric)

    def activity_leaderboard(
        self, olympiad_id: str, activity_id: str
    ) -> List[LeaderboardEntry]:
        olympiad = self.state.olympiad(olympiad_id)
        if olympiad is None:
            return []
        return activity_leaderboard(olympiad, activity_id, self.score_numeric)

    def global_activity_leaderboard(self, activity_id: str) -> List[LeaderboardEntry]:
        return global_activity_leaderboard(
            self.state.olympiads, activity_id, self.score_numeric
        )

    def match_summaries(self, olympiad_id: str, instance_id: str) -> List[str]:
        """One line per recorded match of an event, oldest first."""
        state = self.state
        olympiad = state.olympiad(olympiad_id)
        instance = olympiad.event_instance(instance_id) if olympiad else None
        if instance is None:
            return []
        return [summarize_result(r, state.player_name) for r in instance.results()]
