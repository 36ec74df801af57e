class ScoreboardError(Exception):
    """Base class for scoreboard errors."""


class InvalidTeamIndexError(ScoreboardError, ValueError):
    def __init__(self, team) -> None:
        super().__init__(f"Invalid team index: {team!r} (expected 0 or 1)")
        self.team = team


class InvalidPlayerIndexError(ScoreboardError, ValueError):
    def __init__(self, player, player_count: int) -> None:
        super().__init__(
            f"Invalid player index: {player!r} "
            f"(expected 0..{player_count - 1})"
        )
        self.player = player


class InconsistentRoleStateError(ScoreboardError, AssertionError):
    """Zero or several players hold a role that must be unique."""


class MatchTypeError(ScoreboardError):
    """Operation not available for this match type."""


class InvalidPlayersError(ScoreboardError, ValueError):
    pass


class MatchFinishedError(ScoreboardError):
    pass
