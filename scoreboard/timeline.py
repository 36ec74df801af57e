from typing import Iterable, List

from scoreboard.match_session import MatchSession
from scoreboard.match_setup import MatchSetup
from scoreboard.models import MatchSnapshot


def build_match_timeline(setup: MatchSetup, teams: Iterable[int]) -> List[MatchSnapshot]:
    """
    Replays a match from scratch using the scoring team of each rally.
    Returns the snapshot after each accepted point, stopping at match end.
    Does NOT mutate external state.
    """

    session = MatchSession(setup)

    timeline: List[MatchSnapshot] = []

    for team in teams:
        timeline.append(session.apply_point(team))

        if session.match.is_finished:
            break

    return timeline
