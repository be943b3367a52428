from scorekeeper.exceptions import (
    DomainException,
    InvalidFormat,
    InvalidScore,
    InvalidSide,
    ProblemDetail,
)


def test_invalid_side_problem_detail():
    exc = InvalidSide("team3")
    problem = exc.to_problem(instance="/matches/m1/score")
    assert problem == ProblemDetail(
        title="Invalid side",
        detail="point winner must be 'A' or 'B' (got 'team3')",
        status=400,
        instance="/matches/m1/score",
        code="invalid_side",
    )
    assert problem.model_dump()["type"] == "about:blank"


def test_domain_exception_message():
    exc = InvalidScore("Current set must be >= 1.")
    assert isinstance(exc, DomainException)
    assert str(exc) == "Current set must be >= 1."
    assert exc.status_code == 422


def test_invalid_format_carries_kind_and_value():
    exc = InvalidFormat("match format", "best-of-7", ("best-of-3", "best-of-5"))
    assert exc.code == "invalid_format"
    assert exc.value == "best-of-7"
    assert "best-of-3, best-of-5" in exc.detail
