import pytest

from scorekeeper.schemas import Side
from scorekeeper.scoring import tennis


def _games(state, sides, game_format, match_format="best-of-3"):
    for side in sides:
        state = tennis.award_point(state, side, match_format, game_format)
    return state


def test_tiebreak8_straight_win():
    state = tennis.initialize("best-of-3", "tiebreak-8")
    assert state.sets[0].is_tiebreak is True

    state = _games(state, "A" * 7, "tiebreak-8")
    assert state.winner is None
    assert state.is_match_point is True

    state = _games(state, "A", "tiebreak-8")
    assert state.winner is Side.A
    assert (state.games_a, state.games_b) == (8, 0)
    assert (state.points_a, state.points_b) == (0, 0)
    assert state.is_match_point is False and state.is_set_point is False

    record = state.sets[0]
    assert record.is_completed is True
    assert (record.games_a, record.games_b) == (8, 0)


def test_tiebreak10_requires_two_game_margin():
    state = tennis.initialize("best-of-3", "tiebreak-10")
    state = _games(state, "AB" * 9, "tiebreak-10")
    assert (state.games_a, state.games_b) == (9, 9)
    assert state.is_match_point is True

    state = _games(state, "A", "tiebreak-10")
    assert (state.games_a, state.games_b) == (10, 9)
    assert state.winner is None

    state = _games(state, "A", "tiebreak-10")
    assert state.winner is Side.A
    assert (state.sets[0].games_a, state.sets[0].games_b) == (11, 9)


def test_tiebreak8_running_games_mirrored_on_record():
    state = tennis.initialize("best-of-3", "tiebreak-8")
    state = _games(state, "ABB", "tiebreak-8")
    record = state.sets[0]
    assert (record.games_a, record.games_b) == (1, 2)
    assert record.is_completed is False
    assert state.current_set == 1


@pytest.mark.parametrize(
    "sides, expected",
    [
        ("A" * 6, False),
        ("A" * 6 + "B" * 7, True),
        ("A" * 7 + "B" * 7, True),
        ("B" * 6 + "A" * 7, True),
    ],
    ids=["six-love", "six-seven", "seven-all", "seven-six"],
)
def test_tiebreak8_match_point_flag(sides, expected):
    state = _games(tennis.initialize("best-of-3", "tiebreak-8"), sides, "tiebreak-8")
    assert state.winner is None
    assert state.is_match_point is expected


def test_tiebreak8_from_seven_six():
    state = _games(tennis.initialize("best-of-3", "tiebreak-8"), "A" * 7 + "B" * 6, "tiebreak-8")
    state = _games(state, "A", "tiebreak-8")
    assert state.winner is Side.A
    assert (state.games_a, state.games_b) == (8, 6)


@pytest.mark.parametrize("match_format", ["best-of-3", "best-of-5"])
def test_tiebreak_formats_ignore_match_format(match_format):
    state = tennis.initialize(match_format, "tiebreak-10")
    state = _games(state, "B" * 10, "tiebreak-10", match_format)
    assert state.winner is Side.B
    assert len(state.sets) == 1
    # The one "set" is not credited to the sets counters.
    assert (state.sets_a, state.sets_b) == (0, 0)


def test_tiebreak_format_ignores_points_after_win():
    state = _games(tennis.initialize("best-of-3", "tiebreak-8"), "A" * 8, "tiebreak-8")
    assert tennis.award_point(state, "B", "best-of-3", "tiebreak-8") is state
