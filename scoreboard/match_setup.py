from dataclasses import dataclass, field
from typing import List, Sequence

from scoreboard.engine import validate_team
from scoreboard.exceptions import InvalidPlayersError
from scoreboard.models import MatchType


def get_team_display_name(team: int, players: Sequence[str], match_type: MatchType) -> str:
    validate_team(team)

    if match_type is MatchType.SINGLES:
        return players[team]
    return f"{players[2 * team]} / {players[2 * team + 1]}"


@dataclass
class MatchSetup:
    """
    Who plays, and whether it is singles or doubles.

    Doubles order: team 0 right-court player, team 0 left-court player,
    then the same for team 1.
    """
    match_type: MatchType = MatchType.SINGLES
    players: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.match_type = MatchType(self.match_type)
        self.validate()

    def validate(self):
        expected = self.match_type.player_count

        if len(self.players) != expected:
            raise InvalidPlayersError(
                f"{self.match_type.value} needs {expected} players, got {len(self.players)}"
            )

        names = []
        for i, name in enumerate(self.players):
            if not isinstance(name, str) or not name.strip():
                raise InvalidPlayersError(f"Player {i + 1} name is empty")
            names.append(name.strip())

        self.players = names

    @property
    def is_doubles(self) -> bool:
        return self.match_type is MatchType.DOUBLES

    def team_display_name(self, team: int) -> str:
        return get_team_display_name(team, self.players, self.match_type)

    def winner_label(self, team: int) -> str:
        validate_team(team)

        if not self.is_doubles:
            return self.players[team]
        return f"{self.players[2 * team]} and {self.players[2 * team + 1]}"

    def match_end_message(self, team: int) -> str:
        return f"{self.winner_label(team)} won the match!"
