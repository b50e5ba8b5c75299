"""prompt_toolkit controls that implement the form's presentation ports."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import BufferControl
from prompt_toolkit.layout.controls import UIContent, UIControl
from prompt_toolkit.mouse_events import MouseEvent, MouseEventType

from tipsplit.calculator import SplitResult, format_money
from tipsplit.config import DEFAULT_CURRENCY_SYMBOL


class Field:
    """An editable text field of the form.

    ``set_text`` rewrites the buffer without reporting an edit, the same way
    a programmatic value change does not count as user input.
    """

    def __init__(
        self,
        name: str,
        label: str,
        *,
        help_text: str = "",
        on_edit: Callable[[str], None] | None = None,
    ):
        self.name = name
        self.label = label
        self.help_text = help_text
        self.on_edit = on_edit
        self.buffer = Buffer(name=name, multiline=False)
        self._programmatic = False
        self.buffer.on_text_changed += self._on_text_changed

    def get_text(self) -> str:
        return self.buffer.text

    def set_text(self, text: str) -> None:
        if text == self.buffer.text:
            return
        self._programmatic = True
        try:
            self.buffer.set_document(
                Document(text, cursor_position=len(text)), bypass_readonly=True
            )
        finally:
            self._programmatic = False

    def _on_text_changed(self, buffer: Buffer) -> None:
        if self._programmatic or self.on_edit is None:
            return
        self.on_edit(buffer.text)


class ErrorLabel:
    """Field-level error message; empty when hidden."""

    def __init__(self) -> None:
        self.message = ""
        self.visible = False

    def show(self, message: str) -> None:
        self.message = message
        self.visible = True

    def hide(self) -> None:
        self.message = ""
        self.visible = False


class ResultPanel:
    """Holds the latest split and renders it as formatted text."""

    def __init__(self, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL) -> None:
        self.currency_symbol = currency_symbol
        self.split = SplitResult()

    def show_result(self, split: SplitResult) -> None:
        self.split = split

    def get_lines(self) -> list[tuple[str, str]]:
        tip = format_money(self.split.tip_per_person, self.currency_symbol)
        total = format_money(self.split.total_per_person, self.currency_symbol)
        return [
            ("class:result-label", "  Tip Amount / person   "),
            ("class:result-value", f"{tip:>12}\n"),
            ("class:result-label", "  Total / person        "),
            ("class:result-value", f"{total:>12}\n"),
        ]


class ClickableBufferControl(BufferControl):
    """BufferControl that notifies when it receives focus via click."""

    def __init__(
        self,
        buffer: Buffer,
        focus_idx: int,
        on_focus: Callable[[int], None],
        **kwargs: Any,
    ):
        super().__init__(buffer=buffer, focusable=True, **kwargs)
        self.focus_idx = focus_idx
        self.on_focus = on_focus

    def mouse_handler(self, mouse_event: MouseEvent) -> Any:
        if mouse_event.event_type == MouseEventType.MOUSE_UP:
            self.on_focus(self.focus_idx)
        # Let parent handle the rest (cursor positioning, selection, etc.)
        return super().mouse_handler(mouse_event)


class TipPresetControl(UIControl):
    """One preset tip button, e.g. ``15%``.

    Clicking reports a selection; Enter and Space are reported as key
    presses so the orchestrator can decide whether they select.
    """

    def __init__(
        self,
        value: str,
        on_click: Callable[["TipPresetControl"], None],
        on_key: Callable[["TipPresetControl", str], None],
    ):
        self._value = value
        self.on_click = on_click
        self.on_key = on_key
        self._selected = False
        self._hover = False
        self.has_focus: Callable[[], bool] = lambda: False

    @property
    def value(self) -> str:
        return self._value

    def is_selected(self) -> bool:
        return self._selected

    def set_selected(self, selected: bool) -> None:
        self._selected = selected

    def create_content(self, width: int, height: int) -> UIContent:
        if self._selected:
            style = "class:preset.selected"
        elif self._hover or self.has_focus():
            style = "class:preset.hover"
        else:
            style = "class:preset"
        text = f" {self._value}% "

        def get_line(i: int) -> list[tuple[str, str]]:
            if i == 0:
                return [(style, text)]
            return []

        return UIContent(get_line=get_line, line_count=1)

    def mouse_handler(self, mouse_event: MouseEvent) -> None:
        if mouse_event.event_type == MouseEventType.MOUSE_UP:
            self.on_click(self)
        elif mouse_event.event_type == MouseEventType.MOUSE_MOVE:
            self._hover = True
        else:
            self._hover = False

    def is_focusable(self) -> bool:
        return True

    def get_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("enter")
        def confirm(event: Any) -> None:
            self.on_key(self, "enter")

        @kb.add("space")
        def space(event: Any) -> None:
            self.on_key(self, "space")

        return kb


class ResetButtonControl(UIControl):
    """The reset button; ignores activation while disabled."""

    def __init__(self, handler: Callable[[], None], text: str = "RESET"):
        self.text = text
        self.handler = handler
        self.enabled = False
        self._hover = False

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def activate(self) -> None:
        if self.enabled:
            self.handler()

    def create_content(self, width: int, height: int) -> UIContent:
        if not self.enabled:
            style = "class:button.empty"
        elif self._hover:
            style = "class:button.hover"
        else:
            style = "class:button"

        def get_line(i: int) -> list[tuple[str, str]]:
            if i == 0:
                return [(style, f" {self.text} ")]
            return []

        return UIContent(get_line=get_line, line_count=1)

    def mouse_handler(self, mouse_event: MouseEvent) -> None:
        if mouse_event.event_type == MouseEventType.MOUSE_UP:
            self.activate()
        elif mouse_event.event_type == MouseEventType.MOUSE_MOVE:
            self._hover = True
        else:
            self._hover = False

    def is_focusable(self) -> bool:
        return True

    def get_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("enter")
        @kb.add("space")
        def press(event: Any) -> None:
            self.activate()

        return kb


class AsyncioTimer:
    """Timer port backed by the running asyncio loop.

    ``after_fire`` runs after every callback; the app uses it to repaint,
    since timer callbacks do not come from a key press.
    """

    def __init__(self, after_fire: Callable[[], None] | None = None) -> None:
        self.after_fire = after_fire

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()

        def fire() -> None:
            callback()
            if self.after_fire is not None:
                self.after_fire()

        return loop.call_later(delay_ms / 1000, fire)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()
