from typing import List

from scoreboard.config import BEST_OF
from scoreboard.match_setup import MatchSetup
from scoreboard.models import MatchSnapshot, Role


class ScoreboardRenderer:

    def __init__(self, setup: MatchSetup, name_width: int = 24):
        self.setup = setup
        self.name_width = name_width

    def render(self, state: MatchSnapshot) -> str:
        return "\n".join(self.render_lines(state))

    def render_lines(self, state: MatchSnapshot) -> List[str]:
        lines = [self._team_line(state, team) for team in (0, 1)]

        lines.append(f"Set {state.set_number} • Best of {BEST_OF}")

        if state.positions:
            lines.extend(self._player_lines(state))

        # If match finished
        if state.is_finished:
            lines.append(self.setup.match_end_message(state.match_winner))

        return lines

    # ----------------------------------------------------
    # LINES
    # ----------------------------------------------------

    def _team_line(self, state: MatchSnapshot, team: int) -> str:
        marker = "*" if state.serving_team == team and not state.is_finished else " "
        name = self.setup.team_display_name(team)
        sets = state.sets_count[team]

        return f"{marker} {name:<{self.name_width}} {state.points[team]:>2}  Sets: {sets}"

    def _player_lines(self, state: MatchSnapshot) -> List[str]:
        lines = []

        for index, position in enumerate(state.positions):
            name = self.setup.players[index]
            role = "" if position.role is Role.NONE else f" ({position.role.value})"
            lines.append(f"  {name:<{self.name_width}} {position.court.value:<5}{role}")

        return lines
