from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class MatchType(str, Enum):
    SINGLES = "singles"
    DOUBLES = "doubles"

    @property
    def player_count(self) -> int:
        return 2 if self is MatchType.SINGLES else 4


class Court(str, Enum):
    LEFT = "left"
    RIGHT = "right"

    def opposite(self) -> "Court":
        return Court.RIGHT if self is Court.LEFT else Court.LEFT

    @staticmethod
    def for_points(points: int) -> "Court":
        """Service court for a score: even -> right, odd -> left."""
        return Court.RIGHT if points % 2 == 0 else Court.LEFT


class Role(str, Enum):
    SERVER = "server"
    RECEIVER = "receiver"
    NONE = "none"


@dataclass
class TeamScore:
    points: int = 0
    # one entry per completed set: 1 = won, 0 = lost
    sets_won: List[int] = field(default_factory=list)

    @property
    def sets_count(self) -> int:
        return sum(1 for s in self.sets_won if s == 1)


@dataclass
class MatchState:
    match_type: MatchType = MatchType.SINGLES
    scores: List[TeamScore] = field(
        default_factory=lambda: [TeamScore(), TeamScore()]
    )
    current_set: int = 1
    serving_team: int = 0
    match_winner: Optional[int] = None

    @property
    def is_finished(self) -> bool:
        return self.match_winner is not None


@dataclass
class PlayerPosition:
    court: Court
    role: Role = Role.NONE


# --- EVENT RESULTS ---

@dataclass(frozen=True)
class PointOutcome:
    team: int
    accepted: bool
    set_closed: bool = False
    match_winner: Optional[int] = None


@dataclass(frozen=True)
class MatchSnapshot:
    rally_index: int
    set_number: int
    points: Tuple[int, int]
    sets_won: Tuple[Tuple[int, ...], Tuple[int, ...]]
    serving_team: int
    match_winner: Optional[int]
    positions: Tuple[PlayerPosition, ...] = ()
    server: Optional[int] = None
    receiver: Optional[int] = None

    @property
    def is_finished(self) -> bool:
        return self.match_winner is not None

    @property
    def sets_count(self) -> Tuple[int, int]:
        return (
            sum(1 for s in self.sets_won[0] if s == 1),
            sum(1 for s in self.sets_won[1] if s == 1),
        )
