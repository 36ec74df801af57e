import pytest

from scoreboard.exceptions import (
    InvalidPlayerIndexError,
    InvalidTeamIndexError,
    MatchFinishedError,
    MatchTypeError,
)
from scoreboard.match_session import MatchSession
from scoreboard.match_setup import MatchSetup
from scoreboard.models import Court, MatchType


# ---------------------------------------------------------
# Helpers
# ---------------------------------------------------------

def singles(on_match_end=None):
    return MatchSession(MatchSetup(MatchType.SINGLES, ["Alice", "Bob"]), on_match_end=on_match_end)


def doubles(on_match_end=None):
    setup = MatchSetup(MatchType.DOUBLES, ["Ann", "Bea", "Cat", "Dee"])
    return MatchSession(setup, on_match_end=on_match_end)


def make_events(sequence):
    """
    sequence = "0101..."
    """
    return [{"team": int(t)} for t in sequence]


# ---------------------------------------------------------
# Validation branches
# ---------------------------------------------------------

def test_events_must_be_list():
    session = singles()

    with pytest.raises(ValueError):
        session.load_events("not_a_list")


def test_invalid_event_format_missing_key():
    session = singles()

    with pytest.raises(ValueError):
        session.load_events([{"winner": 0}])


def test_invalid_team_atomic():
    session = singles()
    session.load_events(make_events("00"))

    with pytest.raises(InvalidTeamIndexError):
        session.load_events([0, 1, 2])

    assert session.snapshot().points == (2, 0)
    assert len(session.get_timeline()) == 2


# ---------------------------------------------------------
# Snapshots
# ---------------------------------------------------------

def test_initial_snapshot():
    snapshot = singles().snapshot()

    assert snapshot.rally_index == 0
    assert snapshot.set_number == 1
    assert snapshot.points == (0, 0)
    assert snapshot.serving_team == 0
    assert snapshot.match_winner is None
    assert snapshot.positions == ()


def test_singles_first_set_scenario():
    session = singles()

    for _ in range(21):
        snapshot = session.apply_point(0)

    assert snapshot.sets_won == ((1,), (0,))
    assert snapshot.points == (0, 0)
    assert snapshot.set_number == 2
    assert snapshot.rally_index == 21


def test_snapshot_is_immutable():
    session = singles()

    first = session.apply_point(0)
    session.apply_point(0)

    assert first.points == (1, 0)


# ---------------------------------------------------------
# Match end
# ---------------------------------------------------------

def test_point_after_match_end_is_ignored():
    winners = []
    session = singles(on_match_end=winners.append)

    for _ in range(42):
        session.apply_point(1)

    final = session.snapshot()
    ignored = session.apply_point(0)

    assert ignored == final
    assert final.match_winner == 1
    assert len(session.get_timeline()) == 42
    assert winners == [1]


def test_bo3_match_completion():
    session = singles()

    timeline = session.load_events(make_events("0" * 42))

    assert timeline[-1].sets_count == (2, 0)
    assert timeline[-1].is_finished


def test_strict_replay_rejects_extra_point():
    session = singles()

    with pytest.raises(MatchFinishedError):
        session.load_events(make_events("0" * 43), strict=True)

    assert session.get_timeline() == []


def test_lenient_replay_drops_extra_point():
    winners = []
    session = singles(on_match_end=winners.append)

    session.load_events(make_events("0" * 43))

    assert len(session.export_events()) == 42
    assert winners == [0]


# ---------------------------------------------------------
# Corrections
# ---------------------------------------------------------

def test_decrement_at_zero_is_noop():
    session = doubles()
    before = session.snapshot()

    after = session.decrement_point(0)

    assert after == before


def test_decrement_leaves_rotation_alone():
    session = doubles()
    session.apply_point(0)  # server moves to the left
    positions = session.snapshot().positions

    snapshot = session.decrement_point(0)

    assert snapshot.points == (0, 0)
    assert snapshot.positions == positions
    assert session.court_of(0) is Court.LEFT
    assert session.export_events() == [{"team": 0}]


# ---------------------------------------------------------
# Serving
# ---------------------------------------------------------

def test_toggle_server_singles():
    session = singles()

    snapshot = session.toggle_server()

    assert snapshot.serving_team == 1
    assert snapshot.points == (0, 0)
    assert session.current_server() == 1
    assert session.current_receiver() == 0


def test_singles_serve_not_changed_by_scoring():
    session = singles()

    session.apply_point(1)

    assert session.snapshot().serving_team == 0


def test_toggle_server_doubles_rejected():
    session = doubles()

    with pytest.raises(MatchTypeError):
        session.toggle_server()


def test_singles_queries():
    session = singles()

    assert session.is_serving(0)
    assert session.is_receiving(1)
    assert session.court_of(0) is None

    with pytest.raises(InvalidPlayerIndexError):
        session.court_of(2)


def test_doubles_service_over():
    session = doubles()

    snapshot = session.apply_point(1)

    assert snapshot.serving_team == 1
    assert snapshot.server == 3
    assert snapshot.receiver == 0
    assert session.is_serving(3)
    assert session.court_of(3) is Court.LEFT


def test_doubles_new_set_reinitializes_rotation():
    session = doubles()

    for _ in range(19):
        session.apply_point(0)
    session.apply_point(1)
    snapshot = session.apply_point(0)  # 20-1, service back with team 0
    assert snapshot.set_number == 1
    assert snapshot.serving_team == 0
    snapshot = session.apply_point(0)  # set closes at 21-1

    assert snapshot.set_number == 2
    assert snapshot.serving_team == 1
    assert snapshot.server == 2
    assert snapshot.receiver == 0
    assert [p.court for p in snapshot.positions] == [
        Court.RIGHT, Court.LEFT, Court.RIGHT, Court.LEFT
    ]


def test_team_display_name():
    assert singles().team_display_name(1) == "Bob"
    assert doubles().team_display_name(0) == "Ann / Bea"


# ---------------------------------------------------------
# Replay / export / reset
# ---------------------------------------------------------

def test_replay_deterministic():
    events = make_events("0110100111")

    t1 = doubles().load_events(events)
    t2 = doubles().load_events(events)

    assert t1 == t2


def test_export_events_roundtrip():
    session = doubles()

    events = make_events("011")
    session.load_events(events)

    assert session.export_events() == events


def test_load_accepts_plain_indices():
    session = singles()

    timeline = session.load_events([0, 1, 1])

    assert timeline[-1].points == (1, 2)


def test_reset_clears_state():
    session = doubles()
    session.load_events(make_events("1101"))

    session.reset()

    assert session.get_timeline() == []
    assert session.snapshot().server == 0

    timeline = session.load_events(make_events("11"))
    assert timeline[-1].points == (0, 2)
