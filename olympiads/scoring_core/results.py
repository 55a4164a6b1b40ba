"""
Match results.

A result records the outcome of one round of an event. It comes in one of
four shapes, matching the event types: a full finishing order, a duel, a
team game and a list of raw numeric scores.
"""

from typing import List, Union
from dataclasses import dataclass, field
from enum import Enum


class ResultKind(Enum):
    """Tag of a match result."""

    CLASSEMENT = "classement"
    DUEL_1V1 = "duel_1v1"
    EQUIPE = "equipe"
    SCORE_NUM = "score_num"


@dataclass(frozen=True)
class Classement:
    """Full finishing order, best first."""

    order: List[str] = field(default_factory=list)

    kind = ResultKind.CLASSEMENT

    def participants(self) -> List[str]:
        return list(self.order)


@dataclass(frozen=True)
class Duel:
    """A one-on-one game with a winner and a loser."""

    winner: str
    loser: str

    kind = ResultKind.DUEL_1V1

    def participants(self) -> List[str]:
        return [self.winner, self.loser]


@dataclass(frozen=True)
class Team:
    players: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class TeamResult:
    """A game between two teams. The teams are expected to be disjoint."""

    winner_team: Team
    loser_team: Team

    kind = ResultKind.EQUIPE

    def participants(self) -> List[str]:
        return list(self.winner_team.players) + list(self.loser_team.players)


@dataclass(frozen=True)
class ScoreEntry:
    player_id: str
    value: float


@dataclass(frozen=True)
class NumericScore:
    """One raw numeric score per player (times, distances, points...)."""

    entries: List[ScoreEntry] = field(default_factory=list)

    kind = ResultKind.SCORE_NUM

    def participants(self) -> List[str]:
        return [entry.player_id for entry in self.entries]


EventResult = Union[Classement, Duel, TeamResult, NumericScore]


def team_game(winners: List[str], losers: List[str]) -> TeamResult:
    """Create a team result from two lists of player ids."""
    return TeamResult(Team(list(winners)), Team(list(losers)))


def numeric_scores(*entries) -> NumericScore:
    """Create a numeric result from (player_id, value) pairs."""
    return NumericScore([ScoreEntry(player_id, value) for player_id, value in entries])
