import argparse
import logging
import sys

from render.renderer import ScoreboardRenderer
from scoreboard.config import LOG_LEVEL, normalize_log_level
from scoreboard.exceptions import ScoreboardError
from scoreboard.match_session import MatchSession
from scoreboard.match_setup import MatchSetup
from scoreboard.models import MatchType


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Replay a badminton match and print the scoreboard.")
    parser.add_argument("--doubles", action="store_true", help="four players instead of two")
    parser.add_argument("--players", nargs="+", required=True, help="player names, team 0 first")
    parser.add_argument("--points", default="", help="scoring team per rally, e.g. 0110")
    parser.add_argument("--log-level", default=LOG_LEVEL)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=normalize_log_level(args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        setup = MatchSetup(
            match_type=MatchType.DOUBLES if args.doubles else MatchType.SINGLES,
            players=args.players,
        )
        teams = [int(c) for c in args.points if not c.isspace()]

        session = MatchSession(setup)
        session.load_events(teams)

    except (ScoreboardError, ValueError) as e:
        print(f"❌ INVALID INPUT: {e}", file=sys.stderr)
        return 2

    print(ScoreboardRenderer(setup).render(session.snapshot()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
