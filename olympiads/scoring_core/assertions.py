"""
Fluent assertion interface for testing leaderboards.

    assert_leaderboard(board, builder.name_to_id).player("Alice").points(5).rank(1)
    assert_leaderboard(board, builder.name_to_id).order("Alice", "Bob").length(2)

Failures raise the built-in AssertionError for proper test framework
integration.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass

from olympiads.scoring_core.leaderboard import LeaderboardEntry


@dataclass
class LeaderboardAssertion:
    """Fluent interface for asserting a whole leaderboard."""

    leaderboard: List[LeaderboardEntry]
    name_to_id: Optional[Dict[str, str]] = None

    def _id(self, name: str) -> str:
        if self.name_to_id is None:
            return name
        if name not in self.name_to_id:
            raise AssertionError(f"Player '{name}' not found in builder")
        return self.name_to_id[name]

    def _name(self, player_id: str) -> str:
        for name, pid in (self.name_to_id or {}).items():
            if pid == player_id:
                return name
        return player_id

    def length(self, expected: int) -> "LeaderboardAssertion":
        """Assert the number of entries."""
        if len(self.leaderboard) != expected:
            raise AssertionError(
                f"Expected {expected} leaderboard entries, got {len(self.leaderboard)}"
            )
        return self

    def order(self, *names: str) -> "LeaderboardAssertion":
        """Assert the leaderboard starts with these players, in this order."""
        actual = [self._name(e.player_id) for e in self.leaderboard[: len(names)]]
        if actual != list(names):
            raise AssertionError(f"Expected order {list(names)}, got {actual}")
        return self

    def excludes(self, name: str) -> "LeaderboardAssertion":
        """Assert a player is not on the leaderboard."""
        player_id = self._id(name)
        if any(e.player_id == player_id for e in self.leaderboard):
            raise AssertionError(f"{name} should not be on the leaderboard")
        return self

    def is_sorted(self) -> "LeaderboardAssertion":
        """Assert points never increase down the leaderboard."""
        for above, below in zip(self.leaderboard, self.leaderboard[1:]):
            if above.points < below.points:
                raise AssertionError(
                    f"{self._name(below.player_id)} ({below.points}) is listed after "
                    f"{self._name(above.player_id)} ({above.points})"
                )
        return self

    def player(self, name: str) -> "EntryAssertion":
        """Select a player by name for assertions."""
        player_id = self._id(name)
        for entry in self.leaderboard:
            if entry.player_id == player_id:
                return EntryAssertion(self.leaderboard, self.name_to_id, name, entry)
        raise AssertionError(f"{name} is not on the leaderboard")


@dataclass
class EntryAssertion(LeaderboardAssertion):
    """Assertions for one player's entry."""

    player_name: str = ""
    entry: Optional[LeaderboardEntry] = None

    def points(self, expected: int) -> "EntryAssertion":
        """Assert the total points."""
        if self.entry.points != expected:
            raise AssertionError(
                f"{self.player_name} expected {expected} points, got {self.entry.points}"
            )
        return self

    def rank(self, expected: int) -> "EntryAssertion":
        if self.entry.rank != expected:
            raise AssertionError(
                f"{self.player_name} expected rank {expected}, got {self.entry.rank}"
            )
        return self

    def position(self, expected: int) -> "EntryAssertion":
        """Assert the 1-based line the player is listed on."""
        actual = self.leaderboard.index(self.entry) + 1
        if actual != expected:
            raise AssertionError(
                f"{self.player_name} expected position {expected}, got {actual}"
            )
        return self


def assert_leaderboard(
    leaderboard: List[LeaderboardEntry], name_to_id: Optional[Dict[str, str]] = None
) -> LeaderboardAssertion:
    """Start a fluent assertion chain on a leaderboard."""
    return LeaderboardAssertion(leaderboard, name_to_id)
