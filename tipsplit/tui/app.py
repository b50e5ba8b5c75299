"""Full-screen prompt_toolkit application for splitting a bill.

All inputs and results are visible on one screen. Tab/Shift+Tab move between
the bill, the preset tips, the custom tip, the people count and the reset
button; the mouse works too. Leaving a text field normalizes it.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Union

from prompt_toolkit import Application
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import (
    FormattedTextControl,
    HSplit,
    Layout,
    VSplit,
    Window,
)
from prompt_toolkit.layout.dimension import Dimension as D
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame

from tipsplit.events import (
    BillBlurred,
    BillEdited,
    CustomTipBlurred,
    CustomTipEdited,
    PeopleBlurred,
    PeopleEdited,
    ResetRequested,
    TipPresetChosen,
    TipPresetFocused,
    TipPresetKeyPressed,
)
from tipsplit.logging_config import setup_logging
from tipsplit.orchestrator import FormOrchestrator
from tipsplit.ports import FormView, TimerPort
from tipsplit.state import StateContainer
from tipsplit.tui.settings import TUISettings, get_settings
from tipsplit.tui.widgets import (
    AsyncioTimer,
    ClickableBufferControl,
    ErrorLabel,
    Field,
    ResetButtonControl,
    ResultPanel,
    TipPresetControl,
)

logger = logging.getLogger(__name__)

# Application style
STYLE = Style.from_dict({
    "title": "bold bg:#005f87 #ffffff",
    "section-header": "bold underline #00af00",
    "field-label": "#d7d700",
    "field-input": "bg:#1e1e1e #ffffff",
    "field-input.focused": "bg:#2a2a2a #ffffff",
    "field-input.invalid": "bg:#3a1515 #ff6666",
    "field-help": "#808080 italic",
    "error": "bold #ff0000",
    "preset": "bg:#404040 #ffffff",
    "preset.hover": "bg:#005f87 #ffffff bold",
    "preset.selected": "bg:#00af87 #000000 bold",
    "result-label": "#d0d0d0",
    "result-value": "bold #00ff00",
    "button": "bg:#0087af #ffffff bold",
    "button.hover": "bg:#005f87 #ffffff bold",
    "button.empty": "bg:#303030 #606060",
    "status-bar": "bg:#005f87 #ffffff",
})

FocusTarget = Union[Field, TipPresetControl, ResetButtonControl]


class TipSplitterApp:
    """Full-screen tip splitter.

    Tab/Shift+Tab to move between inputs, Enter/Space to pick a preset,
    Ctrl+R to reset, Ctrl+Q to quit.
    """

    def __init__(
        self,
        settings: TUISettings | None = None,
        timer: TimerPort | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.app: Application | None = None
        self.current_focus_idx = 0
        self.status_message = "Enter the bill, pick a tip and the number of people"

        self.bill_field = Field(
            "bill", "Bill",
            help_text="Amount between 1.00 and 100,000.00",
            on_edit=lambda text: self.orchestrator.dispatch(BillEdited(text)),
        )
        self.custom_tip_field = Field(
            "custom_tip", "Custom",
            help_text="Any whole percentage from 1 to 100",
            on_edit=lambda text: self.orchestrator.dispatch(CustomTipEdited(text)),
        )
        self.people_field = Field(
            "people", "Number of People",
            help_text="Between 1 and 100",
            on_edit=lambda text: self.orchestrator.dispatch(PeopleEdited(text)),
        )
        self.bill_error = ErrorLabel()
        self.people_error = ErrorLabel()
        self.presets = [
            TipPresetControl(value, on_click=self._on_preset_click, on_key=self._on_preset_key)
            for value in self.settings.presets
        ]
        self.reset_button = ResetButtonControl(self._on_reset)
        self.result_panel = ResultPanel(self.settings.currency_symbol)

        # Tab order
        self.focus_order: list[FocusTarget] = [
            self.bill_field,
            *self.presets,
            self.custom_tip_field,
            self.people_field,
            self.reset_button,
        ]
        self._windows: dict[int, Window] = {}

        self.view = FormView(
            bill=self.bill_field,
            people=self.people_field,
            custom_tip=self.custom_tip_field,
            bill_error=self.bill_error,
            people_error=self.people_error,
            reset_control=self.reset_button,
            result_display=self.result_panel,
            presets=self.presets,
        )
        self.container = StateContainer()
        self.orchestrator = FormOrchestrator(
            self.container,
            self.view,
            timer or AsyncioTimer(after_fire=self._invalidate),
        )

    def run(self) -> None:
        """Run the full-screen application."""
        self.app = Application(
            layout=self._create_layout(),
            key_bindings=self._create_bindings(),
            style=STYLE,
            full_screen=True,
            mouse_support=True,
        )
        logger.info("Starting tip splitter with presets %s", self.settings.presets)
        self.app.run()

    # ------------------------------------------------------------------
    # Focus handling
    # ------------------------------------------------------------------

    def _focused(self) -> FocusTarget:
        return self.focus_order[self.current_focus_idx]

    def move_focus(self, new_idx: int, *, announce: bool = True) -> None:
        """Move focus, blurring the field being left.

        Args:
            new_idx: Index into ``focus_order``
            announce: Report focus arrival on a preset (keyboard navigation).
                Pointer clicks report a selection instead.
        """
        new_idx %= len(self.focus_order)
        if new_idx == self.current_focus_idx:
            return

        self._blur(self._focused())
        self.current_focus_idx = new_idx
        target = self._focused()

        if self.app is not None and new_idx in self._windows:
            self.app.layout.focus(self._windows[new_idx])

        if announce and isinstance(target, TipPresetControl):
            self.orchestrator.dispatch(TipPresetFocused(target.value))

    def _blur(self, target: FocusTarget) -> None:
        if target is self.bill_field:
            self.orchestrator.dispatch(BillBlurred())
        elif target is self.people_field:
            self.orchestrator.dispatch(PeopleBlurred())
        elif target is self.custom_tip_field:
            self.orchestrator.dispatch(CustomTipBlurred())

    def _on_preset_click(self, preset: TipPresetControl) -> None:
        self.move_focus(self.focus_order.index(preset), announce=False)
        self.orchestrator.dispatch(TipPresetChosen(preset.value))

    def _on_preset_key(self, preset: TipPresetControl, key: str) -> None:
        self.orchestrator.dispatch(TipPresetKeyPressed(preset.value, key))

    def _on_reset(self) -> None:
        self.orchestrator.dispatch(ResetRequested())
        self.status_message = "Form reset"

    def _invalidate(self) -> None:
        if self.app is not None:
            self.app.invalidate()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _create_layout(self) -> Layout:
        """Build the single-screen layout."""
        title = Window(
            content=FormattedTextControl(
                FormattedText([("class:title", "  SPLITTER  ")])
            ),
            height=1,
            style="class:title",
        )

        preset_windows = []
        for preset in self.presets:
            idx = self.focus_order.index(preset)
            window = Window(content=preset, width=len(preset.value) + 3, height=1)
            preset.has_focus = lambda i=idx: self.current_focus_idx == i
            self._windows[idx] = window
            preset_windows.append(window)

        inputs = HSplit([
            self._create_field_row(self.bill_field, self.bill_error),
            Window(height=1),
            Window(
                content=FormattedTextControl(
                    FormattedText([("class:section-header", "Select Tip %")])
                ),
                height=1,
            ),
            VSplit(
                [*preset_windows, self._create_text_window(self.custom_tip_field, width=10)],
                padding=1,
            ),
            Window(height=1),
            self._create_field_row(self.people_field, self.people_error),
        ])

        reset_idx = self.focus_order.index(self.reset_button)
        reset_window = Window(content=self.reset_button, height=1, width=D(min=9))
        self._windows[reset_idx] = reset_window

        results = HSplit([
            Window(content=FormattedTextControl(self.result_panel.get_lines), height=2),
            Window(height=1),
            reset_window,
        ])

        root = HSplit([
            title,
            Frame(inputs, title="Inputs"),
            Frame(results, title="Per person"),
            Window(
                content=FormattedTextControl(self._get_status_bar),
                height=1,
                style="class:status-bar",
            ),
        ])
        return Layout(root, focused_element=self._windows[self.current_focus_idx])

    def _create_text_window(self, field: Field, width: Any = None) -> Window:
        idx = self.focus_order.index(field)
        error = {
            id(self.bill_field): self.bill_error,
            id(self.people_field): self.people_error,
        }.get(id(field))

        def get_style() -> str:
            if error is not None and error.visible:
                return "class:field-input.invalid"
            if self.current_focus_idx == idx:
                return "class:field-input.focused"
            return "class:field-input"

        window = Window(
            content=ClickableBufferControl(
                buffer=field.buffer,
                focus_idx=idx,
                on_focus=self._on_field_click,
            ),
            style=get_style,
            height=1,
            width=width or D(weight=1),
        )
        self._windows[idx] = window
        return window

    def _create_field_row(self, field: Field, error: ErrorLabel) -> HSplit:
        """Label with error message on one line, input below, help under it."""
        def get_label() -> FormattedText:
            parts = [("class:field-label", field.label)]
            if error.visible:
                parts.append(("class:error", f"  {error.message}"))
            return FormattedText(parts)

        return HSplit([
            Window(content=FormattedTextControl(get_label), height=1),
            self._create_text_window(field),
            Window(
                content=FormattedTextControl(
                    FormattedText([("class:field-help", field.help_text)])
                ),
                height=1,
            ),
        ])

    def _on_field_click(self, focus_idx: int) -> None:
        self.move_focus(focus_idx)

    def _get_status_bar(self) -> FormattedText:
        """Get status bar content with keyboard shortcut hints."""
        shortcuts = "Tab:Next  Shift+Tab:Prev  Ctrl+R:Reset  Ctrl+Q:Quit"
        return FormattedText([
            ("class:status-bar", f"  {self.status_message}  │  {shortcuts}  ")
        ])

    def _create_bindings(self) -> KeyBindings:
        """Create key bindings."""
        kb = KeyBindings()

        @kb.add("c-q")
        def quit_(event):
            """Quit the application."""
            event.app.exit()

        @kb.add("c-r")
        def reset_(event):
            """Reset the form (only when there is something to reset)."""
            self.reset_button.activate()

        @kb.add("tab")
        def next_field_(event):
            """Move to next input."""
            self.move_focus(self.current_focus_idx + 1)

        @kb.add("s-tab")
        def prev_field_(event):
            """Move to previous input."""
            self.move_focus(self.current_focus_idx - 1)

        return kb


def run_app(settings_path: str | None = None) -> None:
    """Run the tip splitter with settings from ``settings_path`` or the project root."""
    if settings_path is not None and not Path(settings_path).exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")
    settings = get_settings(reload=True, path=Path(settings_path) if settings_path else None)
    TipSplitterApp(settings=settings).run()


def main() -> None:
    """Main entry point for the TUI application."""
    parser = argparse.ArgumentParser(
        description="Tip Splitter - split a bill and tip between people",
    )
    parser.add_argument(
        "--settings", "-s",
        help="Path to a .tip-splitter.yaml settings file",
    )
    parser.add_argument(
        "--log-file",
        help="Write JSON logs to this file (the screen is never used for logs)",
    )
    args = parser.parse_args()

    setup_logging(log_file=Path(args.log_file) if args.log_file else None, console=False)
    run_app(settings_path=args.settings)


if __name__ == "__main__":
    main()
