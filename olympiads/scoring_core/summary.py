"""One-line, human readable summaries of match results."""

from typing import Callable

from olympiads.scoring_core.results import (
    EventResult,
    Classement,
    Duel,
    TeamResult,
)


PODIUM_MEDALS = ("🥇", "🥈", "🥉")

# Shown for podium places nobody finished in
MISSING_NAME = "?"


def summarize_result(result: EventResult, name_of: Callable[[str], str]) -> str:
    """
    Describe a result in one line.

    Args:
        result: The match result
        name_of: Maps a player id to a display name

    Returns:
        The summary, or an empty string for numeric results
    """
    if isinstance(result, Classement):
        podium = [name_of(player_id) for player_id in result.order[:3]]
        podium += [MISSING_NAME] * (3 - len(podium))
        return " ".join(
            f"{medal} {name}" for medal, name in zip(PODIUM_MEDALS, podium)
        )
    elif isinstance(result, Duel):
        return f"{name_of(result.winner)} bat {name_of(result.loser)}"
    elif isinstance(result, TeamResult):
        winners = " & ".join(name_of(p) for p in result.winner_team.players)
        losers = " & ".join(name_of(p) for p in result.loser_team.players)
        return f"{winners} battent {losers}"
    return ""
