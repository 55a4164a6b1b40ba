"""
Test utilities for creating olympiad structures easily.

These utilities create pure scoring_core structures without database
dependencies, making it easy to test scoring and leaderboards.
"""

from olympiads.scoring_core.builder import OlympiadBuilder
from olympiads.scoring_core.rules import EventType, PerWin, PlacementTable


def create_sample_builder() -> OlympiadBuilder:
    """A four player olympiad with one darts round, two duels and a team game.

    Darts (5, 3, 2): Alice, Bob, Charlie, Diane
    Babyfoot (3 per win): Alice beats Bob, Charlie beats Alice
    Volley (4 per win): Bob & Diane beat Alice & Charlie

    Totals: Alice 8, Bob 7, Charlie 5, Diane 4
    """
    builder = OlympiadBuilder("Summer")
    builder.players("Alice", "Bob", "Charlie", "Diane")
    builder.activity("Darts", EventType.CLASSEMENT, PlacementTable([5, 3, 2]))
    builder.activity("Babyfoot", EventType.DUEL_1V1, PerWin(3))
    builder.activity("Volley", EventType.EQUIPE, PerWin(4))

    builder.event("Darts").ranking("Alice", "Bob", "Charlie", "Diane")
    builder.event("Babyfoot").duel("Alice", "Bob").duel("Charlie", "Alice")
    builder.event("Volley").team_game(["Bob", "Diane"], ["Alice", "Charlie"])
    return builder
