import logging
from typing import List, Sequence, Tuple

from scoreboard.config import MAX_SETS
from scoreboard.engine import validate_team
from scoreboard.exceptions import InconsistentRoleStateError, InvalidPlayerIndexError
from scoreboard.models import Court, PlayerPosition, Role, TeamScore

logger = logging.getLogger(__name__)

DOUBLES_PLAYERS = 4


def validate_player(player, player_count: int = DOUBLES_PLAYERS) -> int:
    if not isinstance(player, int) or isinstance(player, bool) or player not in range(player_count):
        raise InvalidPlayerIndexError(player, player_count)
    return player


def team_of(player: int) -> int:
    return player // 2


def teammate_of(player: int) -> int:
    return player ^ 1


def opening_serving_team(set_number: int, scores: Sequence[TeamScore]) -> int:
    """
    Set 1 -> team 0, set 2 -> team 1, set 3 -> the team with more sets
    won so far (team 0 on a tie).
    """
    if set_number == 1:
        return 0
    if set_number == 2:
        return 1
    return 1 if scores[1].sets_count > scores[0].sets_count else 0


class DoublesRotationEngine:
    """
    Server, receiver and service court of the four doubles players.

    Team 0 holds players 0 and 1, team 1 holds players 2 and 3. The state
    is rebuilt by `initialize_for_set` at every set start and advanced by
    `on_point_scored` after the score engine has applied the point.
    """

    def __init__(self):
        self.positions: List[PlayerPosition] = []
        self.serving_team = 0
        self.set_number = 0

    # =========================================================
    # SET INITIALIZATION
    # =========================================================

    def initialize_for_set(
        self, set_number: int, scores: Sequence[TeamScore]
    ) -> List[PlayerPosition]:
        if set_number not in range(1, MAX_SETS + 1):
            raise ValueError(f"Invalid set number: {set_number}")

        serving = opening_serving_team(set_number, scores)
        receiving = 1 - serving

        # even index of each pair opens on the right
        positions = [PlayerPosition(court=Court.RIGHT), PlayerPosition(court=Court.LEFT),
                     PlayerPosition(court=Court.RIGHT), PlayerPosition(court=Court.LEFT)]
        positions[2 * serving].role = Role.SERVER
        positions[2 * receiving].role = Role.RECEIVER

        self.positions = positions
        self.serving_team = serving
        self.set_number = set_number

        logger.debug("Set %d rotation initialised, team %d serves", set_number, serving)
        return self.positions

    # =========================================================
    # POINT TRANSITION
    # =========================================================

    def on_point_scored(self, scoring_team: int, scores: Sequence[TeamScore]):
        """
        Advance rotation after `scoring_team` won a rally.

        `scores` must already include the point.
        """
        validate_team(scoring_team)
        self._require_initialized()

        if scoring_team == self.serving_team:
            self._hold_service(scores[scoring_team].points)
        else:
            self._change_service(scoring_team, scores[scoring_team].points)

    def _hold_service(self, points: int):
        server = self.current_server()
        self._swap_with_teammate(server)

        if self.positions[server].court is not Court.for_points(points):
            self._swap_with_teammate(server)

        receiver = self.current_receiver()
        self._place(receiver, self.positions[server].court.opposite())

        logger.debug(
            "Team %d holds service: player %d serves from %s",
            self.serving_team, server, self.positions[server].court.value,
        )

    def _change_service(self, scoring_team: int, points: int):
        old_server = self.current_server()
        old_receiver = self.current_receiver()

        new_server = teammate_of(old_receiver)
        new_receiver = old_server

        for position in self.positions:
            position.role = Role.NONE
        self.positions[new_server].role = Role.SERVER
        self.positions[new_receiver].role = Role.RECEIVER
        self.serving_team = scoring_team

        self._place(new_server, Court.for_points(points))
        self._place(new_receiver, self.positions[new_server].court.opposite())

        logger.debug(
            "Service over to team %d: player %d serves from %s, player %d receives",
            scoring_team, new_server, self.positions[new_server].court.value, new_receiver,
        )

    def _swap_with_teammate(self, player: int):
        mate = teammate_of(player)
        a, b = self.positions[player], self.positions[mate]
        a.court, b.court = b.court, a.court

    def _place(self, player: int, court: Court):
        if self.positions[player].court is not court:
            self._swap_with_teammate(player)

    # =========================================================
    # QUERIES
    # =========================================================

    def current_server(self) -> int:
        return self._unique_holder(Role.SERVER)

    def current_receiver(self) -> int:
        return self._unique_holder(Role.RECEIVER)

    def court_of(self, player: int) -> Court:
        validate_player(player)
        self._require_initialized()
        return self.positions[player].court

    def role_of(self, player: int) -> Role:
        validate_player(player)
        self._require_initialized()
        return self.positions[player].role

    def is_serving(self, player: int) -> bool:
        return self.role_of(player) is Role.SERVER

    def is_receiving(self, player: int) -> bool:
        return self.role_of(player) is Role.RECEIVER

    def snapshot_positions(self) -> Tuple[PlayerPosition, ...]:
        return tuple(PlayerPosition(court=p.court, role=p.role) for p in self.positions)

    def _unique_holder(self, role: Role) -> int:
        self._require_initialized()

        holders = [i for i, p in enumerate(self.positions) if p.role is role]
        if len(holders) != 1:
            raise InconsistentRoleStateError(
                f"Expected exactly one {role.value}, found {holders}"
            )
        return holders[0]

    def _require_initialized(self):
        if not self.positions:
            raise RuntimeError("Rotation not initialised for a set")
