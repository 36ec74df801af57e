import logging
from typing import Callable, Optional

from scoreboard.config import MAX_POINTS, POINTS_TO_WIN, SETS_TO_WIN, WIN_BY
from scoreboard.exceptions import InvalidTeamIndexError
from scoreboard.models import MatchState, PointOutcome

logger = logging.getLogger(__name__)


def validate_team(team) -> int:
    if not isinstance(team, int) or isinstance(team, bool) or team not in (0, 1):
        raise InvalidTeamIndexError(team)
    return team


class MatchScoreEngine:
    """
    Rally-point score engine for one badminton match.

    Responsibilities:
    - Apply point-scored events
    - Close sets (21 win-by-2, hard cap at 30)
    - Close the match at 2 sets won (best of 3)
    - Reject every point once the match is decided
    """

    def __init__(
        self,
        match: Optional[MatchState] = None,
        on_match_end: Optional[Callable[[int], None]] = None,
    ):
        self.match = match if match is not None else MatchState()
        self.on_match_end = on_match_end

    # =========================================================
    # PUBLIC API
    # =========================================================

    def apply_point(self, team: int) -> PointOutcome:
        """
        Award one rally to `team`.

        Set and match closure are evaluated in the same call, so the
        caller never sees a closed set whose match result is pending.
        """
        validate_team(team)

        if self.match.is_finished:
            logger.debug("Ignoring point for team %d: match already won", team)
            return PointOutcome(team=team, accepted=False,
                                match_winner=self.match.match_winner)

        scores = self.match.scores
        scores[team].points += 1
        logger.debug(
            "Point team %d -> %d-%d (set %d)",
            team, scores[0].points, scores[1].points, self.match.current_set,
        )

        if not self._is_set_won(team):
            return PointOutcome(team=team, accepted=True)

        self._finalize_set(team)

        if self._is_match_won(team):
            self._finalize_match(team)
        else:
            self.match.current_set += 1

        return PointOutcome(
            team=team,
            accepted=True,
            set_closed=True,
            match_winner=self.match.match_winner,
        )

    def decrement_point(self, team: int) -> bool:
        """
        Manual score correction. Never closes or reopens a set.

        Returns False when the team is already at zero.
        """
        validate_team(team)

        score = self.match.scores[team]
        if score.points <= 0:
            return False

        score.points -= 1
        logger.debug("Corrected team %d down to %d", team, score.points)
        return True

    # =========================================================
    # SET LOGIC
    # =========================================================

    def _is_set_won(self, team: int) -> bool:
        own = self.match.scores[team].points
        other = self.match.scores[1 - team].points

        if own == MAX_POINTS:
            return True

        return own >= POINTS_TO_WIN and own >= other + WIN_BY

    def _finalize_set(self, team: int):
        scores = self.match.scores
        logger.info(
            "Set %d won by team %d (%d-%d)",
            self.match.current_set, team,
            scores[team].points, scores[1 - team].points,
        )

        scores[team].sets_won.append(1)
        scores[1 - team].sets_won.append(0)

        scores[0].points = 0
        scores[1].points = 0

    # =========================================================
    # MATCH LOGIC
    # =========================================================

    def _is_match_won(self, team: int) -> bool:
        return self.match.scores[team].sets_count >= SETS_TO_WIN

    def _finalize_match(self, team: int):
        self.match.match_winner = team
        logger.info("Match won by team %d", team)

        if self.on_match_end is not None:
            self.on_match_end(team)
