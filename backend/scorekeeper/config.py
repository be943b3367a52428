import logging
import os

from .schemas import GameFormat, MatchFormat

logger = logging.getLogger(__name__)

MATCH_FORMATS = tuple(f.value for f in MatchFormat)
GAME_FORMATS = tuple(f.value for f in GameFormat)


def _canon_choice(env_var, choices, default):
    """
    Normalize a format name read from the environment:
      - defaults to ``default`` when unset/empty
      - lower-cases and strips surrounding whitespace
      - falls back to ``default`` (with a warning) for unknown values
    """
    raw = os.getenv(env_var)
    val = (raw or "").strip().lower()
    if not val:
        return default
    if val not in choices:
        logger.warning(
            "%s must be one of %s (got %r); defaulting to %s",
            env_var,
            ", ".join(choices),
            raw,
            default,
        )
        return default
    return val


def _canon_flag(env_var, default=True):
    raw = os.getenv(env_var)
    if raw is None or not raw.strip():
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "yes", "on"}:
        return True
    if val in {"0", "false", "no", "off"}:
        return False
    logger.warning(
        "%s is not a valid boolean (got %r); defaulting to %s", env_var, raw, default
    )
    return default


DEFAULT_MATCH_FORMAT = _canon_choice(
    "SCORING_DEFAULT_MATCH_FORMAT", MATCH_FORMATS, MatchFormat.BEST_OF_3.value
)
DEFAULT_GAME_FORMAT = _canon_choice(
    "SCORING_DEFAULT_GAME_FORMAT", GAME_FORMATS, GameFormat.REGULAR.value
)

# Refuse snapshots that fail validation instead of scoring on top of them.
STRICT_SNAPSHOTS = _canon_flag("SCORING_STRICT_SNAPSHOTS", default=True)
