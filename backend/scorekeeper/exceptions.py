from pydantic import BaseModel
from typing import Any, Optional


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    instance: Optional[str] = None
    code: str


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        status_code: int,
        title: str,
        *,
        code: str,
        detail: str | None = None,
        type_: str = "about:blank",
    ) -> None:
        super().__init__(detail or title)
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code

    def to_problem(self, instance: str | None = None) -> ProblemDetail:
        """Render the exception the way the match service reports it to clients."""

        return ProblemDetail(
            type=self.type,
            title=self.title,
            detail=self.detail,
            status=self.status_code,
            instance=instance,
            code=self.code,
        )


class InvalidSide(DomainException):
    def __init__(self, value: Any) -> None:
        super().__init__(
            status_code=400,
            title="Invalid side",
            detail=f"point winner must be 'A' or 'B' (got {value!r})",
            code="invalid_side",
        )
        self.value = value


class InvalidFormat(DomainException):
    def __init__(self, kind: str, value: Any, allowed: tuple[str, ...]) -> None:
        super().__init__(
            status_code=400,
            title="Invalid format",
            detail=f"{kind} must be one of {', '.join(allowed)} (got {value!r})",
            code="invalid_format",
        )
        self.kind = kind
        self.value = value


class InvalidScore(DomainException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=422,
            title="Invalid score",
            detail=detail,
            code="invalid_score",
        )


class InvalidFinalScore(DomainException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=422,
            title="Invalid final score",
            detail=detail,
            code="invalid_final_score",
        )
