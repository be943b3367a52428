"""Scoring engines for the supported match formats."""

from . import tennis

__all__ = [
    "tennis",
]
