from enum import Enum
from typing import Any, Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import InvalidFormat, InvalidSide


class Side(str, Enum):
    A = "A"
    B = "B"

    @property
    def opponent(self) -> "Side":
        return Side.B if self is Side.A else Side.A


class MatchFormat(str, Enum):
    BEST_OF_3 = "best-of-3"
    BEST_OF_5 = "best-of-5"

    @property
    def sets_to_win(self) -> int:
        return 3 if self is MatchFormat.BEST_OF_5 else 2


class GameFormat(str, Enum):
    REGULAR = "regular"
    TIEBREAK_8 = "tiebreak-8"
    TIEBREAK_10 = "tiebreak-10"

    @property
    def is_direct_games(self) -> bool:
        """Tiebreak formats play the whole match as one set counted in games."""
        return self is not GameFormat.REGULAR

    @property
    def target_games(self) -> int:
        if self is GameFormat.TIEBREAK_8:
            return 8
        if self is GameFormat.TIEBREAK_10:
            return 10
        return 6


# Legacy score documents name the sides after the teams.
_SIDE_ALIASES = {"a": Side.A, "b": Side.B, "team1": Side.A, "team2": Side.B}


def parse_side(value: Any) -> Side:
    if isinstance(value, Side):
        return value
    if isinstance(value, str):
        side = _SIDE_ALIASES.get(value.strip().lower())
        if side is not None:
            return side
    raise InvalidSide(value)


def parse_match_format(value: Any) -> MatchFormat:
    if isinstance(value, MatchFormat):
        return value
    if isinstance(value, str):
        try:
            return MatchFormat(value.strip().lower())
        except ValueError:
            pass
    raise InvalidFormat("match format", value, tuple(f.value for f in MatchFormat))


def parse_game_format(value: Any) -> GameFormat:
    if isinstance(value, GameFormat):
        return value
    if isinstance(value, str):
        try:
            return GameFormat(value.strip().lower())
        except ValueError:
            pass
    raise InvalidFormat("game format", value, tuple(f.value for f in GameFormat))


# Tagged views over the flat flags stored in a score document.


class PointsInPlay(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["points"] = "points"
    a: int = 0
    b: int = 0


class Deuce(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["deuce"] = "deuce"


class Advantage(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["advantage"] = "advantage"
    side: Side


GameState = Union[PointsInPlay, Deuce, Advantage]


class RegularPlay(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["regular"] = "regular"


class TiebreakPlay(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["tiebreak"] = "tiebreak"
    a: int = 0
    b: int = 0


SetState = Union[RegularPlay, TiebreakPlay]


class SetRecord(BaseModel):
    """One played set. Only the last record of a score may still be open."""

    set_number: int = Field(alias="setNumber")
    games_a: int = Field(default=0, alias="team1Games")
    games_b: int = Field(default=0, alias="team2Games")
    tiebreak_a: Optional[int] = Field(default=None, alias="team1Tiebreak")
    tiebreak_b: Optional[int] = Field(default=None, alias="team2Tiebreak")
    is_tiebreak: bool = Field(default=False, alias="isTiebreak")
    is_completed: bool = Field(default=False, alias="isCompleted")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def games(self, side: Side) -> int:
        return self.games_a if side is Side.A else self.games_b

    def tiebreak_points(self, side: Side) -> int:
        value = self.tiebreak_a if side is Side.A else self.tiebreak_b
        return value or 0

    @property
    def state(self) -> SetState:
        if self.is_tiebreak:
            return TiebreakPlay(a=self.tiebreak_a or 0, b=self.tiebreak_b or 0)
        return RegularPlay()


class MatchScore(BaseModel):
    """Full score snapshot of one match.

    Field aliases follow the persisted score documents (``team1Points``,
    ``isDeuce``, ...) so a stored document loads with ``model_validate`` and
    ``to_document`` writes it back unchanged. Instances are frozen; the
    scoring engine always returns a new snapshot.
    """

    points_a: int = Field(default=0, alias="team1Points")
    points_b: int = Field(default=0, alias="team2Points")
    games_a: int = Field(default=0, alias="team1Games")
    games_b: int = Field(default=0, alias="team2Games")
    sets_a: int = Field(default=0, alias="team1Sets")
    sets_b: int = Field(default=0, alias="team2Sets")
    current_set: int = Field(default=1, alias="currentSet")
    sets: Tuple[SetRecord, ...] = ()
    is_deuce: bool = Field(default=False, alias="isDeuce")
    advantage: Optional[Side] = None
    is_match_point: bool = Field(default=False, alias="isMatchPoint")
    is_set_point: bool = Field(default=False, alias="isSetPoint")
    winner: Optional[Side] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("advantage", "winner", mode="before")
    @classmethod
    def _parse_side(cls, value: Any) -> Optional[Side]:
        if value is None or value == "":
            return None
        try:
            return parse_side(value)
        except InvalidSide as exc:
            # Reported as a document validation error, not a request error.
            raise ValueError(f"side must be 'A' or 'B' (got {value!r})") from exc

    def points(self, side: Side) -> int:
        return self.points_a if side is Side.A else self.points_b

    def games(self, side: Side) -> int:
        return self.games_a if side is Side.A else self.games_b

    def sets_won(self, side: Side) -> int:
        return self.sets_a if side is Side.A else self.sets_b

    @property
    def current_record(self) -> Optional[SetRecord]:
        return self.sets[-1] if self.sets else None

    @property
    def is_finished(self) -> bool:
        return self.winner is not None

    @property
    def game_state(self) -> GameState:
        if self.advantage is not None:
            return Advantage(side=self.advantage)
        if self.is_deuce:
            return Deuce()
        return PointsInPlay(a=self.points_a, b=self.points_b)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
