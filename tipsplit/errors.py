"""Maps field validity onto an error indicator."""

from __future__ import annotations

from typing import Any, Iterable

from tipsplit.ports import ErrorIndicatorPort
from tipsplit.validators import ValidationResult


def present_validation(indicator: ErrorIndicatorPort, result: ValidationResult[Any], message: str) -> None:
    """Show ``message`` for a failed result, hide the indicator otherwise."""
    if result.ok:
        indicator.hide()
    else:
        indicator.show(message)


def hide_all(indicators: Iterable[ErrorIndicatorPort]) -> None:
    for indicator in indicators:
        indicator.hide()
