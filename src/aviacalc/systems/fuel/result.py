"""Explicit success/failure values returned by the fuel engine and form.

Calculations never raise for bad input; they return either ``Ok(value)`` or
``Err(kind, message)`` and the caller decides how to present a failure.

Typical usage:
    outcome = compute_fuel_balance(calc_input)
    if outcome.is_ok():
        show(outcome.unwrap())
    else:
        alert(outcome.message)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(Enum):
    """Failure categories."""

    FORMAT = "format"  # a duration or numeric field cannot be parsed
    MISSING_FIELD = "missing_field"  # a required field is empty
    INVALID_ARGUMENT = "invalid_argument"  # engine input non-finite or out of range


class CalculationError(Exception):
    """Raised by Err.unwrap() for callers that prefer exceptions.

    Attributes:
        kind: ErrorKind of the failed calculation.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome.

    Attributes:
        kind: Failure category.
        message: Human-readable explanation suitable for an alert.
    """

    kind: ErrorKind
    message: str

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise CalculationError(self.kind, self.message)


Result = Ok[T] | Err
