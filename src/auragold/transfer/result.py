"""Result type returned by the normalizers.

Normalizers never raise on bad input. They return ``Valid(value)`` or
``Invalid(error)``; the error names the first offending location, e.g.
``payload.ledgers[1].records[4].grams``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class NormalizationError:
    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    error: NormalizationError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Valid[T], Invalid]


def invalid(path: str, reason: str) -> Invalid:
    return Invalid(NormalizationError(path=path, reason=reason))