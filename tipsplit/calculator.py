"""Per-person tip and total calculation."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from tipsplit.config import DEFAULT_CURRENCY_SYMBOL
from tipsplit.validators import round_money

ZERO = Decimal("0.00")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class SplitResult:
    """Derived per-person amounts, rounded to cents."""

    tip_per_person: Decimal = ZERO
    total_per_person: Decimal = ZERO


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 0.1 from dragging binary noise into the sum
    return Decimal(str(value))


def calculate_split(bill_amount: Any, tip_percent: Any, number_of_people: Any) -> SplitResult:
    """Split a bill and its tip evenly.

    A missing or zero bill, or zero people, gives a zero split. Rounding to
    cents happens once, on the final values.

    Example:
        >>> calculate_split(100, 20, 4)
        SplitResult(tip_per_person=Decimal('5.00'), total_per_person=Decimal('30.00'))
    """
    bill = _to_decimal(bill_amount)
    people = _to_decimal(number_of_people)
    tip = _to_decimal(tip_percent)

    if not bill or not people:
        return SplitResult()

    total_tip = bill * tip / HUNDRED
    tip_per_person = total_tip / people
    total_per_person = bill / people + tip_per_person

    return SplitResult(
        tip_per_person=round_money(tip_per_person),
        total_per_person=round_money(total_per_person),
    )


def format_money(value: Decimal, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Render an amount with two decimals, e.g. ``$12.50``."""
    return f"{symbol}{round_money(_to_decimal(value))}"
