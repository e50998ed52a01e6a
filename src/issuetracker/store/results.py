"""Explicit outcomes for repository writes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class Outcome(StrEnum):
    """What happened to a write against the store."""

    OK = "ok"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Result of an update or delete.

    ``value`` is set only for OK results that return a row; ``error`` only
    for FAILED results.
    """

    outcome: Outcome
    value: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> StoreResult[T]:
        return cls(Outcome.OK, value=value)

    @classmethod
    def not_found(cls) -> StoreResult[T]:
        return cls(Outcome.NOT_FOUND)

    @classmethod
    def failed(cls, error: str) -> StoreResult[T]:
        return cls(Outcome.FAILED, error=error)

    @property
    def succeeded(self) -> bool:
        return self.outcome is Outcome.OK

    @property
    def is_not_found(self) -> bool:
        return self.outcome is Outcome.NOT_FOUND

    @property
    def is_failed(self) -> bool:
        return self.outcome is Outcome.FAILED

    def __bool__(self) -> bool:
        return self.succeeded
