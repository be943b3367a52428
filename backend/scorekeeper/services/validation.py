from typing import Any, List, Optional, Sequence, Tuple

from ..schemas import GameFormat, MatchScore, Side

VALID_POINTS = (0, 15, 30, 40)


class ValidationError(Exception):
    """Raised when a score snapshot or submitted result is invalid."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def _as_int(value: Any, label: str) -> int:
    # Reject booleans explicitly (bool is a subclass of int in Python)
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be an integer (not a boolean).")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer.")


def is_regular_set_result(winner_games: int, loser_games: int) -> bool:
    """Return ``True`` for a completed regular set: 6-0..6-4, 7-5 or 7-6."""
    if winner_games == 6:
        return 0 <= loser_games <= 4
    if winner_games == 7:
        return loser_games in (5, 6)
    return False


def validate_set_scores(
    sets: Sequence[Any],
    *,
    max_sets: Optional[int] = 5,
) -> List[Tuple[int, int]]:
    """Validate a list of regular-format set results.

    Rules:
    - At least one set is required
    - Number of sets must be <= ``max_sets`` (if provided)
    - Each set must be a pair ``(A, B)``
    - ``A`` and ``B`` must be integers >= 0 (booleans are rejected)
    - Ties are not allowed
    - The pair must be a finished set (6-x with x <= 4, 7-5 or 7-6)

    Returns the normalized ``(A, B)`` tuples.
    """

    if not isinstance(sets, Sequence) or isinstance(sets, (str, bytes)) or len(sets) == 0:
        raise ValidationError("At least one set is required.")
    if max_sets is not None and len(sets) > max_sets:
        raise ValidationError(f"Too many sets. Max allowed is {max_sets}.")

    normalized: List[Tuple[int, int]] = []
    for i, s in enumerate(sets, start=1):
        if not isinstance(s, Sequence) or isinstance(s, (str, bytes)) or len(s) != 2:
            raise ValidationError(f"Set #{i} must be a pair of games (A, B).")

        a = _as_int(s[0], f"Set #{i} games")
        b = _as_int(s[1], f"Set #{i} games")

        if a < 0 or b < 0:
            raise ValidationError(f"Set #{i} games must be >= 0.")
        if a == b:
            raise ValidationError(f"Set #{i} cannot be a tie.")
        if not is_regular_set_result(max(a, b), min(a, b)):
            raise ValidationError(f"Set #{i} ({a}-{b}) is not a finished set score.")
        normalized.append((a, b))

    return normalized


def validate_final_games(games_a: Any, games_b: Any, game_format: GameFormat) -> Tuple[int, int]:
    """Validate a directly entered final result for a one-set match.

    Tiebreak formats need the winner at or above the target with a two game
    margin; past the target the margin must be exactly two, since the match
    stops as soon as it is reached. Regular format accepts a finished set.
    """

    a = _as_int(games_a, "Games")
    b = _as_int(games_b, "Games")
    if a < 0 or b < 0:
        raise ValidationError("Games must be >= 0.")
    if a == b:
        raise ValidationError("A final score cannot be a tie.")

    high, low = max(a, b), min(a, b)
    if game_format.is_direct_games:
        target = game_format.target_games
        if high < target:
            raise ValidationError(f"The winner must reach {target} games.")
        if high - low < 2:
            raise ValidationError("The winner must lead by at least 2 games.")
        if high > target and high - low != 2:
            raise ValidationError(
                f"A score of {a}-{b} cannot happen: play stops once a side "
                f"reaches {target} games with a 2 game lead."
            )
    elif not is_regular_set_result(high, low):
        raise ValidationError(f"{a}-{b} is not a finished set score.")

    return a, b


def check_score(score: MatchScore, game_format: GameFormat) -> None:
    """Raise ``ValidationError`` describing the first problem in ``score``."""

    for side in Side:
        if score.points(side) < 0:
            raise ValidationError(f"Points for side {side.value} must be >= 0.")
        if score.games(side) < 0:
            raise ValidationError(f"Games for side {side.value} must be >= 0.")
        if score.sets_won(side) < 0:
            raise ValidationError(f"Sets for side {side.value} must be >= 0.")
    if score.current_set < 1:
        raise ValidationError("Current set must be >= 1.")

    last = len(score.sets)
    for i, record in enumerate(score.sets, start=1):
        if record.games_a < 0 or record.games_b < 0:
            raise ValidationError(f"Set #{i} games must be >= 0.")
        if record.tiebreak_points(Side.A) < 0 or record.tiebreak_points(Side.B) < 0:
            raise ValidationError(f"Set #{i} tiebreak points must be >= 0.")
        if i < last and not record.is_completed:
            raise ValidationError(f"Set #{i} is still open but is not the current set.")

    # Point fields are unused by the tiebreak formats.
    if game_format.is_direct_games:
        return None

    if score.points_a not in VALID_POINTS or score.points_b not in VALID_POINTS:
        if not score.is_deuce and score.advantage is None:
            raise ValidationError(
                f"Points must be one of {', '.join(str(p) for p in VALID_POINTS)}."
            )

    return None
