"""Pytest configuration and fixtures."""

from __future__ import annotations

from typing import Any, Callable, Sequence

import pytest

from tipsplit.calculator import SplitResult
from tipsplit.config import DEFAULT_PRESETS
from tipsplit.orchestrator import FormOrchestrator
from tipsplit.ports import FormView
from tipsplit.state import StateContainer


class FakeTimer:
    """Manually advanced timer: nothing fires until ``advance`` is called."""

    def __init__(self) -> None:
        self.now = 0
        self._next_id = 0
        self._pending: dict[int, tuple[int, Callable[[], None]]] = {}
        self.cancelled: list[int] = []

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> int:
        self._next_id += 1
        self._pending[self._next_id] = (self.now + delay_ms, callback)
        return self._next_id

    def cancel(self, handle: int) -> None:
        self.cancelled.append(handle)
        self._pending.pop(handle, None)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def advance(self, ms: int) -> None:
        """Move the clock forward, firing due callbacks in deadline order."""
        self.now += ms
        while True:
            due = sorted(
                (deadline, handle)
                for handle, (deadline, _) in self._pending.items()
                if deadline <= self.now
            )
            if not due:
                return
            _, handle = due[0]
            _, callback = self._pending.pop(handle)
            callback()


class FakeTextField:
    def __init__(self, text: str = "") -> None:
        self.text = text
        self.writes: list[str] = []

    def get_text(self) -> str:
        return self.text

    def set_text(self, text: str) -> None:
        self.writes.append(text)
        self.text = text


class FakeErrorIndicator:
    def __init__(self) -> None:
        self.visible = False
        self.message = ""

    def show(self, message: str) -> None:
        self.visible = True
        self.message = message

    def hide(self) -> None:
        self.visible = False
        self.message = ""


class FakeResetControl:
    def __init__(self) -> None:
        self.enabled: bool | None = None

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled


class FakeResultDisplay:
    def __init__(self) -> None:
        self.history: list[SplitResult] = []

    @property
    def latest(self) -> SplitResult:
        return self.history[-1]

    def show_result(self, split: SplitResult) -> None:
        self.history.append(split)


class FakePreset:
    def __init__(self, value: str) -> None:
        self._value = value
        self.selected = False

    @property
    def value(self) -> str:
        return self._value

    def is_selected(self) -> bool:
        return self.selected

    def set_selected(self, selected: bool) -> None:
        self.selected = selected


def make_view(presets: Sequence[Any] = DEFAULT_PRESETS) -> FormView:
    return FormView(
        bill=FakeTextField(),
        people=FakeTextField(),
        custom_tip=FakeTextField(),
        bill_error=FakeErrorIndicator(),
        people_error=FakeErrorIndicator(),
        reset_control=FakeResetControl(),
        result_display=FakeResultDisplay(),
        presets=[FakePreset(str(p)) for p in presets],
    )


@pytest.fixture
def timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture
def container() -> StateContainer:
    return StateContainer()


@pytest.fixture
def view() -> FormView:
    return make_view()


@pytest.fixture
def orchestrator(container: StateContainer, view: FormView, timer: FakeTimer) -> FormOrchestrator:
    return FormOrchestrator(container, view, timer)

