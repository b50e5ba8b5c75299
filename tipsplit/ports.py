"""Ports the orchestrator uses to reach the presentation layer.

Any surface (the terminal UI in ``tipsplit.tui``, or in-memory fakes in
tests) implements these protocols.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, Sequence

from tipsplit.calculator import SplitResult


class TextFieldPort(Protocol):
    def get_text(self) -> str: ...
    def set_text(self, text: str) -> None: ...


class ErrorIndicatorPort(Protocol):
    def show(self, message: str) -> None: ...
    def hide(self) -> None: ...


class ResetControlPort(Protocol):
    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable the reset control; disabled also means the "empty" look."""
        ...


class ResultDisplayPort(Protocol):
    def show_result(self, split: SplitResult) -> None: ...


class TipPresetPort(Protocol):
    """One preset tip selector, e.g. the "15%" button."""

    @property
    def value(self) -> str: ...

    def is_selected(self) -> bool: ...
    def set_selected(self, selected: bool) -> None: ...


class TimerPort(Protocol):
    """Port for delayed callbacks - enables deterministic testing."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        """Run ``callback`` after ``delay_ms``; returns a handle for ``cancel``."""
        ...

    def cancel(self, handle: Any) -> None: ...


@dataclass
class FormView:
    """Everything the orchestrator touches on the presentation side."""

    bill: TextFieldPort
    people: TextFieldPort
    custom_tip: TextFieldPort
    bill_error: ErrorIndicatorPort
    people_error: ErrorIndicatorPort
    reset_control: ResetControlPort
    result_display: ResultDisplayPort
    presets: Sequence[TipPresetPort] = field(default_factory=list)
