"""Per-field validators for the tip splitter form.

Each validator takes raw field text, sanitizes it, parses it and checks it
against the fixed bounds in ``tipsplit.config``. Nothing here mutates state;
the orchestrator decides what to do with the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from tipsplit.config import (
    MAX_BILL,
    MAX_CUSTOM_TIP,
    MAX_PEOPLE,
    MIN_BILL,
    MIN_CUSTOM_TIP,
    MIN_PEOPLE,
)
from tipsplit.sanitize import (
    decimal_only,
    numeric_only,
    parse_decimal_prefix,
    parse_int_prefix,
)

T = TypeVar("T")

CENTS = Decimal("0.01")
WHOLE = Decimal("1")


class InvalidReason(str, Enum):
    """Why a value was rejected."""

    EMPTY = "empty"  # Nothing parseable left after sanitizing
    BELOW_MIN = "below-min"
    ABOVE_MAX = "above-max"
    INVALID = "invalid"  # Undifferentiated failure (custom tip)


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Outcome of validating one raw field value.

    Exactly one of ``value`` (when ``ok``) or ``reason`` (when not) is set.
    """

    ok: bool
    value: Optional[T] = None
    reason: Optional[InvalidReason] = None

    @classmethod
    def success(cls, value: T) -> "ValidationResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: InvalidReason) -> "ValidationResult[T]":
        return cls(ok=False, reason=reason)


def round_money(value: Decimal) -> Decimal:
    """Round to cents, halves away from zero."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def validate_bill(raw: Any) -> ValidationResult[Decimal]:
    """Validate the bill amount.

    Fails with EMPTY when nothing parses, BELOW_MIN under 1.00 and
    ABOVE_MAX over 100000.00. Accepted values are rounded to cents.
    """
    amount = parse_decimal_prefix(decimal_only(raw))
    if amount is None:
        return ValidationResult.failure(InvalidReason.EMPTY)
    if amount < MIN_BILL:
        return ValidationResult.failure(InvalidReason.BELOW_MIN)
    if amount > MAX_BILL:
        return ValidationResult.failure(InvalidReason.ABOVE_MAX)
    return ValidationResult.success(round_money(amount))


def validate_people(raw: Any) -> ValidationResult[int]:
    """Validate the number of people (an integer between 1 and 100)."""
    count = parse_int_prefix(numeric_only(raw))
    if count is None:
        return ValidationResult.failure(InvalidReason.EMPTY)
    if count < MIN_PEOPLE:
        return ValidationResult.failure(InvalidReason.BELOW_MIN)
    if count > MAX_PEOPLE:
        return ValidationResult.failure(InvalidReason.ABOVE_MAX)
    return ValidationResult.success(count)


def validate_custom_tip(raw: Any) -> ValidationResult[int]:
    """Validate a free-form tip percentage.

    Every failure is reported as INVALID; the form zeroes the tip instead of
    showing an error. Accepted values are rounded to the nearest integer.
    """
    percent = parse_decimal_prefix(decimal_only(raw))
    if percent is None or not (MIN_CUSTOM_TIP <= percent <= MAX_CUSTOM_TIP):
        return ValidationResult.failure(InvalidReason.INVALID)
    return ValidationResult.success(int(percent.quantize(WHOLE, rounding=ROUND_HALF_UP)))
