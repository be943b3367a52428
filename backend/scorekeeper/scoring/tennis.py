"""Tennis scoring engine.
Tracks points → games → sets → match with the 6-6 tiebreak, plus the
tiebreak-8 / tiebreak-10 formats that play the whole match in games.

Every function takes a frozen ``MatchScore`` and returns a new one; the
engine keeps no state between calls."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .. import config
from ..exceptions import InvalidFinalScore, InvalidScore
from ..schemas import (
    Advantage,
    Deuce,
    GameFormat,
    MatchFormat,
    MatchScore,
    SetRecord,
    Side,
    parse_game_format,
    parse_match_format,
    parse_side,
)
from ..services.validation import (
    ValidationError,
    check_score,
    validate_final_games,
    validate_set_scores,
)

logger = logging.getLogger(__name__)

POINTS_SEQUENCE = (0, 15, 30, 40)
GAMES_TO_WIN_SET = 6
TIEBREAK_TO_WIN = 7


def _formats(match_format: Any, game_format: Any) -> Tuple[MatchFormat, GameFormat]:
    mf = parse_match_format(
        match_format if match_format is not None else config.DEFAULT_MATCH_FORMAT
    )
    gf = parse_game_format(
        game_format if game_format is not None else config.DEFAULT_GAME_FORMAT
    )
    return mf, gf


def sets_to_win(match_format: Any = None) -> int:
    mf, _ = _formats(match_format, None)
    return mf.sets_to_win


def target_games(game_format: Any = None) -> int:
    """Games needed to win: the set length for regular play, else the match length."""
    _, gf = _formats(None, game_format)
    return gf.target_games


def _key(field: str, side: Side) -> str:
    return f"{field}_{side.value.lower()}"


def _replace_record(score: MatchScore, record: SetRecord) -> MatchScore:
    return score.model_copy(update={"sets": score.sets[:-1] + (record,)})


def _mirror_games(score: MatchScore) -> MatchScore:
    record = score.sets[-1].model_copy(
        update={"games_a": score.games_a, "games_b": score.games_b}
    )
    return _replace_record(score, record)


def initialize(match_format: Any = None, game_format: Any = None) -> MatchScore:
    """Return a zeroed score with the first set open."""
    _, gf = _formats(match_format, game_format)
    first = SetRecord(set_number=1, is_tiebreak=gf.is_direct_games)
    return MatchScore(sets=(first,))


def validate(score: MatchScore, game_format: Any = None) -> bool:
    _, gf = _formats(None, game_format)
    try:
        check_score(score, gf)
    except ValidationError as exc:
        logger.debug("Score failed validation: %s", exc.detail)
        return False
    return True


def award_point(
    score: MatchScore,
    side: Any,
    match_format: Any = None,
    game_format: Any = None,
) -> MatchScore:
    """Award one point (one game in the tiebreak formats) to ``side``.

    A decided match is returned unchanged. Unknown sides or formats raise
    ``InvalidSide`` / ``InvalidFormat``; with ``STRICT_SNAPSHOTS`` on, a
    snapshot that fails validation raises ``InvalidScore``.
    """
    side = parse_side(side)
    mf, gf = _formats(match_format, game_format)

    # Stop processing if the match is already decided.
    if score.winner is not None:
        logger.debug(
            "Match already won by %s; ignoring point for %s",
            score.winner.value,
            side.value,
        )
        return score

    if config.STRICT_SNAPSHOTS:
        try:
            check_score(score, gf)
        except ValidationError as exc:
            logger.warning("Refusing to score on an invalid snapshot: %s", exc.detail)
            raise InvalidScore(exc.detail) from exc

    if not score.sets:
        first = SetRecord(
            set_number=score.current_set,
            games_a=score.games_a,
            games_b=score.games_b,
            is_tiebreak=gf.is_direct_games,
        )
        score = score.model_copy(update={"sets": (first,)})

    if gf.is_direct_games:
        return _award_direct_game(score, side, gf)
    if score.sets[-1].is_tiebreak:
        return _award_tiebreak_point(score, side, mf)
    return _award_regular_point(score, side, mf)


def _award_direct_game(score: MatchScore, side: Side, gf: GameFormat) -> MatchScore:
    target = gf.target_games
    games = score.games(side) + 1
    score = _mirror_games(score.model_copy(update={_key("games", side): games}))
    opp_games = score.games(side.opponent)

    if games >= target and games - opp_games >= 2:
        logger.info(
            "%s match won by %s %d-%d", gf.value, side.value, score.games_a, score.games_b
        )
        record = score.sets[-1].model_copy(update={"is_completed": True})
        return _replace_record(score, record).model_copy(
            update={"winner": side, "is_match_point": False, "is_set_point": False}
        )

    # One game from the target while level or ahead; not a full lookahead.
    on_brink = any(
        score.games(s) >= target - 1 and score.games(s) >= score.games(s.opponent)
        for s in Side
    )
    return score.model_copy(update={"is_match_point": on_brink})


def _award_tiebreak_point(score: MatchScore, side: Side, mf: MatchFormat) -> MatchScore:
    record = score.sets[-1]
    won = record.tiebreak_points(side) + 1
    lost = record.tiebreak_points(side.opponent)
    record = record.model_copy(
        update={_key("tiebreak", side): won, _key("tiebreak", side.opponent): lost}
    )
    score = _replace_record(score, record)

    if won >= TIEBREAK_TO_WIN and won - lost >= 2:
        logger.debug("Tiebreak won by %s %d-%d", side.value, won, lost)
        # The set goes down as 7-6; tiebreak points never touch the games.
        score = score.model_copy(update={_key("games", side): score.games(side) + 1})
        return _win_set(_mirror_games(score), side, mf)
    return score


def _award_regular_point(score: MatchScore, side: Side, mf: MatchFormat) -> MatchScore:
    state = score.game_state

    if isinstance(state, Advantage):
        if state.side is side:
            return _win_game(score, side, mf)
        return score.model_copy(update={"is_deuce": True, "advantage": None})
    if isinstance(state, Deuce):
        return score.model_copy(update={"is_deuce": True, "advantage": side})

    won = score.points(side)
    if won < POINTS_SEQUENCE[-1]:
        following = next(p for p in POINTS_SEQUENCE if p > won)
        return score.model_copy(update={_key("points", side): following})
    if score.points(side.opponent) >= POINTS_SEQUENCE[-1]:
        # Reaching deuce hands the advantage straight to the point winner.
        logger.debug("Deuce in set %d; advantage %s", score.current_set, side.value)
        return score.model_copy(update={"is_deuce": True, "advantage": side})
    return _win_game(score, side, mf)


def _win_game(score: MatchScore, side: Side, mf: MatchFormat) -> MatchScore:
    games = score.games(side) + 1
    score = score.model_copy(
        update={
            "points_a": 0,
            "points_b": 0,
            "is_deuce": False,
            "advantage": None,
            _key("games", side): games,
        }
    )
    score = _mirror_games(score)
    logger.debug(
        "Game %s; set %d stands %d-%d",
        side.value,
        score.current_set,
        score.games_a,
        score.games_b,
    )

    if games >= GAMES_TO_WIN_SET and games - score.games(side.opponent) >= 2:
        return _win_set(score, side, mf)
    if score.games_a == GAMES_TO_WIN_SET and score.games_b == GAMES_TO_WIN_SET:
        return _start_tiebreak(score)
    return _update_status(score, mf)


def _start_tiebreak(score: MatchScore) -> MatchScore:
    # Set/match point flags carry over from 6-5 unchanged.
    logger.debug("Set %d reached 6-6; starting tiebreak", score.current_set)
    record = score.sets[-1].model_copy(
        update={"is_tiebreak": True, "tiebreak_a": 0, "tiebreak_b": 0}
    )
    return _replace_record(score, record)


def _win_set(score: MatchScore, side: Side, mf: MatchFormat) -> MatchScore:
    record = score.sets[-1].model_copy(update={"is_completed": True})
    sets = score.sets_won(side) + 1
    score = _replace_record(score, record).model_copy(update={_key("sets", side): sets})
    logger.info(
        "Set %d won by %s %d-%d", score.current_set, side.value, record.games_a, record.games_b
    )

    if sets >= mf.sets_to_win:
        logger.info("Match won by %s, %d-%d in sets", side.value, score.sets_a, score.sets_b)
        return score.model_copy(
            update={"winner": side, "is_match_point": False, "is_set_point": False}
        )

    next_set = score.current_set + 1
    score = score.model_copy(
        update={
            "current_set": next_set,
            "games_a": 0,
            "games_b": 0,
            "points_a": 0,
            "points_b": 0,
            "is_deuce": False,
            "advantage": None,
            "sets": score.sets + (SetRecord(set_number=next_set),),
        }
    )
    return _update_status(score, mf)


def _update_status(score: MatchScore, mf: MatchFormat) -> MatchScore:
    """Recompute the set point / match point flags.

    A side is on set point with at least 5 games and no fewer than the
    opponent; on match point when additionally one set from victory.
    """
    if score.winner is not None:
        return score.model_copy(update={"is_match_point": False, "is_set_point": False})

    on_set_point = {
        s: score.games(s) >= 5 and score.games(s) >= score.games(s.opponent) for s in Side
    }
    on_match_point = any(
        on_set_point[s] and score.sets_won(s) == mf.sets_to_win - 1 for s in Side
    )
    return score.model_copy(
        update={
            "is_set_point": any(on_set_point.values()),
            "is_match_point": on_match_point,
        }
    )


def point_label(score: MatchScore, side: Any) -> str:
    """Return the scoreboard label for ``side`` in the running game."""
    side = parse_side(side)
    state = score.game_state
    if isinstance(state, Deuce):
        return "DEUCE"
    if isinstance(state, Advantage):
        return "AD" if state.side is side else "40"
    return str(score.points(side))


def format_score(score: MatchScore) -> str:
    """Render a score line such as ``6-4 6-6(3-2)`` or ``6-4 2-1 | 30-15``."""
    parts = []
    for record in score.sets:
        text = f"{record.games_a}-{record.games_b}"
        if record.tiebreak_a is not None or record.tiebreak_b is not None:
            text += f"({record.tiebreak_points(Side.A)}-{record.tiebreak_points(Side.B)})"
        parts.append(text)
    line = " ".join(parts) or f"{score.games_a}-{score.games_b}"

    record = score.current_record
    if score.winner is not None or (record is not None and record.is_tiebreak):
        return line
    return f"{line} | {point_label(score, Side.A)}-{point_label(score, Side.B)}"


def summary(score: MatchScore) -> Dict:
    return {
        "points": {"A": score.points_a, "B": score.points_b},
        "games": {"A": score.games_a, "B": score.games_b},
        "sets": {"A": score.sets_a, "B": score.sets_b},
        "currentSet": score.current_set,
        "isDeuce": score.is_deuce,
        "advantage": score.advantage.value if score.advantage else None,
        "isSetPoint": score.is_set_point,
        "isMatchPoint": score.is_match_point,
        "winner": score.winner.value if score.winner else None,
    }


def replay(
    points: Iterable[Any],
    match_format: Any = None,
    game_format: Any = None,
    score: Optional[MatchScore] = None,
) -> MatchScore:
    """Apply a logged sequence of point winners, starting from ``score``."""
    mf, gf = _formats(match_format, game_format)
    score = score if score is not None else initialize(mf, gf)
    for side in points:
        score = award_point(score, side, mf, gf)
    return score


def record_sets(
    set_scores: Sequence[Any], match_format: Any = None
) -> Tuple[List[Side], MatchScore]:
    """Generate the points that reproduce regular-format set results.

    ``set_scores`` is a sequence of ``(games_A, games_B)`` pairs. Returns the
    generated point winners and the score after applying them all.
    """
    mf, gf = _formats(match_format, GameFormat.REGULAR)
    results = validate_set_scores(set_scores, max_sets=mf.sets_to_win * 2 - 1)
    score = initialize(mf, gf)
    points: List[Side] = []

    def play(side: Side, count: int) -> None:
        nonlocal score
        for _ in range(count):
            if score.winner is not None:
                raise ValidationError("Set results continue after the match was decided.")
            points.append(side)
            score = award_point(score, side, mf, gf)

    for ga, gb in results:
        winner = Side.A if ga > gb else Side.B
        loser = winner.opponent
        win_games, lose_games = max(ga, gb), min(ga, gb)

        # Alternate games so the set cannot end before the final tally.
        for _ in range(lose_games):
            play(winner, 4)
            play(loser, 4)
        if win_games == 7 and lose_games == 6:
            play(winner, TIEBREAK_TO_WIN)
        else:
            for _ in range(win_games - lose_games):
                play(winner, 4)

    return points, score


def record_final_score(games_a: Any, games_b: Any, game_format: Any = None) -> MatchScore:
    """Build the completed one-set score for a directly entered result."""
    _, gf = _formats(None, game_format)
    try:
        a, b = validate_final_games(games_a, games_b, gf)
    except ValidationError as exc:
        raise InvalidFinalScore(exc.detail) from exc

    winner = Side.A if a > b else Side.B
    record = SetRecord(
        set_number=1,
        games_a=a,
        games_b=b,
        is_tiebreak=gf.is_direct_games,
        is_completed=True,
    )
    logger.info("Recorded final %s score %d-%d for %s", gf.value, a, b, winner.value)
    return MatchScore(
        games_a=a,
        games_b=b,
        sets_a=1 if winner is Side.A else 0,
        sets_b=1 if winner is Side.B else 0,
        sets=(record,),
        winner=winner,
    )
