"""
Transform stored snapshots to scoring_core structure representation.

The hosted backend hands over plain JSON data in camelCase:

    {
        "players": [{"id", "name", "userId"}],
        "activities": [{"id", "name", "defaultType", "defaultRule"}],
        "olympiads": [{"id", "title", "playerIds", "eventInstances": [...]}],
        "currentOlympiadId": "..."
    }

This module converts that data into the immutable scoring_core
structures and back. Malformed data raises SnapshotError naming the path
of the offending value; unknown extra keys are ignored.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from olympiads.scoring_core.results import (
    Classement,
    Duel,
    EventResult,
    NumericScore,
    ResultKind,
    ScoreEntry,
    Team,
    TeamResult,
)
from olympiads.scoring_core.rules import (
    EventType,
    NumericRank,
    PerWin,
    PlacementTable,
    RuleKind,
    ScoringRule,
)
from olympiads.scoring_core.structure import (
    DEFAULT_ACTIVITIES,
    Activity,
    EventInstance,
    Match,
    Olympiad,
    Player,
)


class SnapshotError(ValueError):
    """Raised when snapshot data does not have the expected shape."""


@dataclass(frozen=True)
class StoreState:
    """Everything the scoreboard stores: players, activities, olympiads."""

    players: List[Player] = field(default_factory=list)
    activities: List[Activity] = field(default_factory=lambda: list(DEFAULT_ACTIVITIES))
    olympiads: List[Olympiad] = field(default_factory=list)
    current_olympiad_id: Optional[str] = None

    def olympiad(self, olympiad_id: str) -> Optional[Olympiad]:
        for olympiad in self.olympiads:
            if olympiad.id == olympiad_id:
                return olympiad
        return None

    def activity(self, activity_id: str) -> Optional[Activity]:
        for activity in self.activities:
            if activity.id == activity_id:
                return activity
        return None

    def player_name(self, player_id: str) -> str:
        """Display name for a player id; the id itself for unknown players."""
        for player in self.players:
            if player.id == player_id:
                return player.name
        return player_id


def _require(data: Any, key: str, path: str) -> Any:
    if not isinstance(data, dict):
        raise SnapshotError(f"{path}: expected an object, got {type(data).__name__}")
    if key not in data:
        raise SnapshotError(f"{path}: missing '{key}'")
    return data[key]


def _list(data: Any, key: str, path: str) -> list:
    value = _require(data, key, path)
    if not isinstance(value, list):
        raise SnapshotError(f"{path}.{key}: expected a list")
    return value


def _int(value: Any, path: str) -> int:
    # bool is an int subclass but never a valid points value
    if isinstance(value, bool) or not isinstance(value, int):
        raise SnapshotError(f"{path}: expected an integer, got {value!r}")
    return value


def _bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise SnapshotError(f"{path}: expected true or false, got {value!r}")
    return value


def _timestamp(value: Any, path: str) -> int:
    """Milliseconds since the epoch; missing timestamps read as 0."""
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SnapshotError(f"{path}: expected a timestamp in milliseconds, got {value!r}")
    return int(value)


def _ints(values: Any, path: str) -> List[int]:
    if not isinstance(values, list):
        raise SnapshotError(f"{path}: expected a list of integers")
    return [_int(v, f"{path}[{i}]") for i, v in enumerate(values)]


def _event_type(value: Any, path: str) -> EventType:
    try:
        return EventType(value)
    except ValueError:
        raise SnapshotError(f"{path}: unknown event type {value!r}")


# Rules


def rule_from_dict(data: Any, path: str = "rule") -> ScoringRule:
    """Convert a stored scoring rule."""
    kind = _require(data, "kind", path)
    if kind == RuleKind.PLACEMENT_TABLE.value:
        return PlacementTable(_ints(_require(data, "table", path), f"{path}.table"))
    elif kind == RuleKind.PER_WIN.value:
        return PerWin(
            _int(_require(data, "pointsPerPlayer", path), f"{path}.pointsPerPlayer")
        )
    elif kind == RuleKind.NUMERIC_RANK.value:
        return NumericRank(
            _bool(
                _require(data, "higherIsBetter", path), f"{path}.higherIsBetter"
            ),
            _ints(_require(data, "table", path), f"{path}.table"),
        )
    raise SnapshotError(f"{path}: unknown rule kind {kind!r}")


def rule_to_dict(rule: ScoringRule) -> Dict[str, Any]:
    if isinstance(rule, PlacementTable):
        return {"kind": rule.kind.value, "table": list(rule.table)}
    elif isinstance(rule, PerWin):
        return {"kind": rule.kind.value, "pointsPerPlayer": rule.points_per_player}
    elif isinstance(rule, NumericRank):
        return {
            "kind": rule.kind.value,
            "higherIsBetter": rule.higher_is_better,
            "table": list(rule.table),
        }
    raise TypeError(f"Unknown scoring rule: {rule!r}")


# Results


def _team(data: Any, path: str) -> Team:
    return Team([str(p) for p in _list(data, "players", path)])


def result_from_dict(data: Any, path: str = "result") -> EventResult:
    """Convert a stored match result."""
    kind = _require(data, "kind", path)
    if kind == ResultKind.CLASSEMENT.value:
        return Classement([str(p) for p in _list(data, "order", path)])
    elif kind == ResultKind.DUEL_1V1.value:
        return Duel(str(_require(data, "winner", path)), str(_require(data, "loser", path)))
    elif kind == ResultKind.EQUIPE.value:
        return TeamResult(
            _team(_require(data, "winnerTeam", path), f"{path}.winnerTeam"),
            _team(_require(data, "loserTeam", path), f"{path}.loserTeam"),
        )
    elif kind == ResultKind.SCORE_NUM.value:
        entries = []
        for i, entry in enumerate(_list(data, "entries", path)):
            entry_path = f"{path}.entries[{i}]"
            value = _require(entry, "value", entry_path)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise SnapshotError(f"{entry_path}.value: expected a number")
            entries.append(ScoreEntry(str(_require(entry, "playerId", entry_path)), value))
        return NumericScore(entries)
    raise SnapshotError(f"{path}: unknown result kind {kind!r}")


def result_to_dict(result: EventResult) -> Dict[str, Any]:
    if isinstance(result, Classement):
        return {"kind": result.kind.value, "order": list(result.order)}
    elif isinstance(result, Duel):
        return {"kind": result.kind.value, "winner": result.winner, "loser": result.loser}
    elif isinstance(result, TeamResult):
        return {
            "kind": result.kind.value,
            "winnerTeam": {"players": list(result.winner_team.players)},
            "loserTeam": {"players": list(result.loser_team.players)},
        }
    elif isinstance(result, NumericScore):
        return {
            "kind": result.kind.value,
            "entries": [
                {"playerId": e.player_id, "value": e.value} for e in result.entries
            ],
        }
    raise TypeError(f"Unknown result: {result!r}")


# Olympiads


def event_instance_from_dict(data: Any, path: str = "eventInstance") -> EventInstance:
    instance_id = str(_require(data, "id", path))

    matches = []
    for i, match in enumerate(data.get("matches") or []):
        match_path = f"{path}.matches[{i}]"
        matches.append(
            Match(
                id=str(_require(match, "id", match_path)),
                created_at=_timestamp(match.get("createdAt"), f"{match_path}.createdAt"),
                result=result_from_dict(
                    _require(match, "result", match_path), f"{match_path}.result"
                ),
            )
        )

    team_size = data.get("teamSize")
    return EventInstance(
        id=instance_id,
        template_id=str(_require(data, "templateId", path)),
        name=str(_require(data, "name", path)),
        type=_event_type(_require(data, "type", path), f"{path}.type"),
        rule=rule_from_dict(_require(data, "rule", path), f"{path}.rule"),
        team_size=None if team_size is None else _int(team_size, f"{path}.teamSize"),
        matches=matches,
    )


def event_instance_to_dict(instance: EventInstance) -> Dict[str, Any]:
    data = {
        "id": instance.id,
        "templateId": instance.template_id,
        "name": instance.name,
        "type": instance.type.value,
        "rule": rule_to_dict(instance.rule),
        "matches": [
            {
                "id": match.id,
                "createdAt": match.created_at,
                "result": result_to_dict(match.result),
            }
            for match in instance.matches
        ],
    }
    if instance.team_size is not None:
        data["teamSize"] = instance.team_size
    return data


def olympiad_from_dict(data: Any, path: str = "olympiad") -> Olympiad:
    """Convert a stored olympiad, with its event instances and matches."""
    return Olympiad(
        id=str(_require(data, "id", path)),
        title=str(_require(data, "title", path)),
        player_ids=[str(p) for p in _list(data, "playerIds", path)],
        event_instances=[
            event_instance_from_dict(e, f"{path}.eventInstances[{i}]")
            for i, e in enumerate(data.get("eventInstances") or [])
        ],
        owner_id=str(data.get("ownerId") or ""),
        created_at=_timestamp(data.get("createdAt"), f"{path}.createdAt"),
    )


def olympiad_to_dict(olympiad: Olympiad) -> Dict[str, Any]:
    return {
        "id": olympiad.id,
        "ownerId": olympiad.owner_id,
        "title": olympiad.title,
        "createdAt": olympiad.created_at,
        "playerIds": list(olympiad.player_ids),
        "eventInstances": [event_instance_to_dict(e) for e in olympiad.event_instances],
    }


# Players and activities


def player_from_dict(data: Any, path: str = "player") -> Player:
    return Player(
        id=str(_require(data, "id", path)),
        name=str(_require(data, "name", path)),
        user_id=str(data.get("userId") or "local"),
        linked_user_id=data.get("linkedUserId"),
    )


def player_to_dict(player: Player) -> Dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "userId": player.user_id,
        "linkedUserId": player.linked_user_id,
    }


def activity_from_dict(data: Any, path: str = "activity") -> Activity:
    default_rule = data.get("defaultRule") if isinstance(data, dict) else None
    supported = data.get("supportedTypes") if isinstance(data, dict) else None
    return Activity(
        id=str(_require(data, "id", path)),
        name=str(_require(data, "name", path)),
        default_type=_event_type(
            _require(data, "defaultType", path), f"{path}.defaultType"
        ),
        default_rule=(
            None
            if default_rule is None
            else rule_from_dict(default_rule, f"{path}.defaultRule")
        ),
        supported_types=(
            None
            if supported is None
            else [
                _event_type(t, f"{path}.supportedTypes[{i}]")
                for i, t in enumerate(supported)
            ]
        ),
    )


def activity_to_dict(activity: Activity) -> Dict[str, Any]:
    data = {
        "id": activity.id,
        "name": activity.name,
        "defaultType": activity.default_type.value,
    }
    if activity.default_rule is not None:
        data["defaultRule"] = rule_to_dict(activity.default_rule)
    if activity.supported_types is not None:
        data["supportedTypes"] = [t.value for t in activity.supported_types]
    return data


# Whole state


def state_from_dict(data: Any) -> StoreState:
    """Convert a full snapshot. Missing activities fall back to the defaults."""
    if not isinstance(data, dict):
        raise SnapshotError(f"snapshot: expected an object, got {type(data).__name__}")

    activities = data.get("activities")
    return StoreState(
        players=[
            player_from_dict(p, f"players[{i}]")
            for i, p in enumerate(data.get("players") or [])
        ],
        activities=(
            list(DEFAULT_ACTIVITIES)
            if activities is None
            else [
                activity_from_dict(a, f"activities[{i}]")
                for i, a in enumerate(activities)
            ]
        ),
        olympiads=[
            olympiad_from_dict(o, f"olympiads[{i}]")
            for i, o in enumerate(data.get("olympiads") or [])
        ],
        current_olympiad_id=data.get("currentOlympiadId"),
    )


def state_to_dict(state: StoreState) -> Dict[str, Any]:
    return {
        "players": [player_to_dict(p) for p in state.players],
        "activities": [activity_to_dict(a) for a in state.activities],
        "olympiads": [olympiad_to_dict(o) for o in state.olympiads],
        "currentOlympiadId": state.current_olympiad_id,
    }
