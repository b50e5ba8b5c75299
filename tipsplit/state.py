"""Canonical form state and its observable container.

The container is the only owner of ``FormState``. Callers read immutable
snapshots and write through ``set_state``/``reset``, which notify every
subscribed observer synchronously, in registration order, before returning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from decimal import Decimal
from typing import Any, Callable

from tipsplit.config import MIN_PEOPLE

logger = logging.getLogger(__name__)

Observer = Callable[["FormState"], None]


@dataclass(frozen=True)
class FormState:
    """Committed values of the three form inputs.

    Attributes:
        bill_amount: 0 when unset, otherwise within the bill bounds (cents)
        tip_percent: 0 when unset, a preset value, or an integral custom tip
        number_of_people: Always within the people bounds; defaults to 1
    """

    bill_amount: Decimal = Decimal("0")
    tip_percent: Decimal = Decimal("0")
    number_of_people: int = MIN_PEOPLE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (for logging and debugging)."""
        return {
            "bill_amount": str(self.bill_amount),
            "tip_percent": str(self.tip_percent),
            "number_of_people": self.number_of_people,
        }


DEFAULT_STATE = FormState()

_FIELD_NAMES = frozenset(f.name for f in fields(FormState))


class StateContainer:
    """Holds the current ``FormState`` and notifies observers of every commit.

    No validation happens here: ``set_state`` is the trusted commit point and
    callers must have validated already. Observers must not call
    ``set_state`` while being notified.
    """

    def __init__(self, initial: FormState | None = None) -> None:
        self._state = initial or DEFAULT_STATE
        self._observers: list[Observer] = []

    def get_state(self) -> FormState:
        """Return the current snapshot. FormState is frozen, so it cannot be edited in place."""
        return self._state

    def set_state(self, **changes: Any) -> None:
        """Merge the named fields into the state and notify observers.

        Raises:
            TypeError: If a name is not a FormState field
        """
        unknown = set(changes) - _FIELD_NAMES
        if unknown:
            raise TypeError(f"Unknown FormState field(s): {', '.join(sorted(unknown))}")
        self._state = replace(self._state, **changes)
        logger.debug("State updated: %s", self._state.to_dict())
        self._notify()

    def reset(self, full: FormState | None = None) -> None:
        """Replace the whole state at once and notify observers exactly once."""
        self._state = full or DEFAULT_STATE
        logger.debug("State reset: %s", self._state.to_dict())
        self._notify()

    def subscribe(self, observer: Observer) -> None:
        """Register an observer for every subsequent commit."""
        self._observers.append(observer)

    def should_enable_reset(self) -> bool:
        """True when any field holds a non-default committed value."""
        state = self._state
        return (
            state.bill_amount > 0
            or state.tip_percent > 0
            or state.number_of_people > MIN_PEOPLE
        )

    def _notify(self) -> None:
        snapshot = self._state
        for observer in list(self._observers):
            observer(snapshot)
