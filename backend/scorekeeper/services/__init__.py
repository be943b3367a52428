"""Internal application services (pure helpers, no I/O)."""

from .validation import (
    ValidationError,
    check_score,
    validate_final_games,
    validate_set_scores,
)

__all__ = [
    "ValidationError",
    "check_score",
    "validate_final_games",
    "validate_set_scores",
]
