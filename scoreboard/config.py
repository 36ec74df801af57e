import logging
import os

# Rally-point badminton, fixed rules
POINTS_TO_WIN = 21
WIN_BY = 2
MAX_POINTS = 30
BEST_OF = 3
SETS_TO_WIN = 2
MAX_SETS = 3


def normalize_log_level(val):
    """
    Normalize a log level name:
      - defaults to WARNING when unset/empty
      - upper-cases the name
      - unknown names fall back to WARNING
    """
    val = (val or "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(val), int):
        return "WARNING"
    return val


LOG_LEVEL = normalize_log_level(os.getenv("SCOREBOARD_LOG_LEVEL"))
