import logging
from copy import deepcopy
from typing import Callable, Dict, List, Optional

from scoreboard.engine import MatchScoreEngine, validate_team
from scoreboard.exceptions import MatchFinishedError, MatchTypeError
from scoreboard.match_setup import MatchSetup
from scoreboard.models import Court, MatchSnapshot, MatchState
from scoreboard.rotation import DoublesRotationEngine, validate_player

logger = logging.getLogger(__name__)


class MatchSession:
    """
    Single local match session.

    Responsibilities:
    - Own one MatchScoreEngine and, for doubles, one DoublesRotationEngine
    - Apply point events atomically (score, set, match, rotation)
    - Store timeline snapshots
    - Bulk replay / export point events
    - Notify the caller once when the match is won
    """

    def __init__(
        self,
        setup: MatchSetup,
        on_match_end: Optional[Callable[[int], None]] = None,
    ):
        self.setup = setup
        self.on_match_end = on_match_end
        self._start()

    def _start(self):
        self._engine = MatchScoreEngine(MatchState(match_type=self.setup.match_type))
        self._rotation: Optional[DoublesRotationEngine] = None
        self._timeline: List[MatchSnapshot] = []
        self._events: List[int] = []

        if self.setup.is_doubles:
            self._rotation = DoublesRotationEngine()
            self._rotation.initialize_for_set(1, self.match.scores)
            self.match.serving_team = self._rotation.serving_team

        self._snapshot = self._build_snapshot()

    @property
    def match(self) -> MatchState:
        return self._engine.match

    @property
    def rotation(self) -> Optional[DoublesRotationEngine]:
        return self._rotation

    # ---------------------------------------------------------
    # Core API
    # ---------------------------------------------------------

    def apply_point(self, team: int) -> MatchSnapshot:
        """
        Award a rally to `team` and return the resulting snapshot.

        Once the match is won the call is ignored and the previous
        snapshot is returned unchanged.
        """
        outcome = self._engine.apply_point(team)

        if not outcome.accepted:
            return self._snapshot

        if self._rotation is not None:
            if not outcome.set_closed:
                self._rotation.on_point_scored(team, self.match.scores)
            elif outcome.match_winner is None:
                self._rotation.initialize_for_set(self.match.current_set, self.match.scores)
            self.match.serving_team = self._rotation.serving_team

        self._events.append(team)
        self._snapshot = self._build_snapshot()
        self._timeline.append(self._snapshot)

        if outcome.match_winner is not None:
            self._notify_match_end(outcome.match_winner)

        return self._snapshot

    def decrement_point(self, team: int) -> MatchSnapshot:
        """
        Manual correction. Rotation is left untouched, so it may no
        longer match the corrected score.
        """
        if self._engine.decrement_point(team):
            self._snapshot = self._build_snapshot()
        return self._snapshot

    def toggle_server(self) -> MatchSnapshot:
        if self.setup.is_doubles:
            raise MatchTypeError("Serving team follows the rotation in doubles")

        self.match.serving_team = 1 - self.match.serving_team
        logger.debug("Serving team changed to %d", self.match.serving_team)

        self._snapshot = self._build_snapshot()
        return self._snapshot

    # ---------------------------------------------------------
    # Queries
    # ---------------------------------------------------------

    def current_server(self) -> int:
        if self._rotation is not None:
            return self._rotation.current_server()
        return self.match.serving_team

    def current_receiver(self) -> int:
        if self._rotation is not None:
            return self._rotation.current_receiver()
        return 1 - self.match.serving_team

    def court_of(self, player: int) -> Optional[Court]:
        if self._rotation is not None:
            return self._rotation.court_of(player)

        validate_player(player, self.setup.match_type.player_count)
        return None

    def is_serving(self, player: int) -> bool:
        validate_player(player, self.setup.match_type.player_count)
        return self.current_server() == player

    def is_receiving(self, player: int) -> bool:
        validate_player(player, self.setup.match_type.player_count)
        return self.current_receiver() == player

    def team_display_name(self, team: int) -> str:
        return self.setup.team_display_name(team)

    def snapshot(self) -> MatchSnapshot:
        return self._snapshot

    def get_timeline(self) -> List[MatchSnapshot]:
        return deepcopy(self._timeline)

    # ---------------------------------------------------------
    # Bulk replay
    # ---------------------------------------------------------

    def load_events(self, events: List, strict: bool = False) -> List[MatchSnapshot]:
        """
        Replay point events from scratch.

        Accepts team indices or {"team": t} dicts.
        Atomic: if any event fails -> no state mutation.
        With strict=True a point after the match end is an error,
        otherwise it is ignored.
        """
        if not isinstance(events, list):
            raise ValueError("events must be a list")

        # Convert first (validation stage)
        teams = []
        for e in events:
            if isinstance(e, dict):
                if "team" not in e:
                    raise ValueError("invalid event format")
                e = e["team"]
            teams.append(validate_team(e))

        # Replay on a scratch session, no notifications
        temp = MatchSession(self.setup)

        for idx, team in enumerate(teams):
            if strict and temp.match.is_finished:
                raise MatchFinishedError(
                    f"Point added after match finished at index {idx}"
                )
            temp.apply_point(team)

        # If everything succeeds -> commit
        self._engine = temp._engine
        self._rotation = temp._rotation
        self._timeline = temp._timeline
        self._events = temp._events
        self._snapshot = temp._snapshot

        if self.match.is_finished:
            self._notify_match_end(self.match.match_winner)

        return deepcopy(self._timeline)

    def export_events(self) -> List[Dict]:
        return [{"team": team} for team in self._events]

    def reset(self):
        """Start a new match with the same players."""
        self._start()

    # ---------------------------------------------------------
    # Internals
    # ---------------------------------------------------------

    def _notify_match_end(self, winner: int):
        logger.info("Match over: %s", self.setup.match_end_message(winner))

        if self.on_match_end is not None:
            self.on_match_end(winner)

    def _build_snapshot(self) -> MatchSnapshot:
        scores = self.match.scores

        return MatchSnapshot(
            rally_index=len(self._events),
            set_number=self.match.current_set,
            points=(scores[0].points, scores[1].points),
            sets_won=(tuple(scores[0].sets_won), tuple(scores[1].sets_won)),
            serving_team=self.match.serving_team,
            match_winner=self.match.match_winner,
            positions=self._rotation.snapshot_positions() if self._rotation else (),
            server=self.current_server(),
            receiver=self.current_receiver(),
        )
