"""Input orchestration for the tip splitter form.

``FormOrchestrator`` turns input events into field rewrites, error
indicator changes and state commits. Every commit goes through the
``StateContainer``; the orchestrator's own observer then recomputes the split
and refreshes the reset control, so the display always matches the state.

Field rules:
- Bill and people: text is sanitized on every edit, validation of the edit
  is debounced, and leaving the field normalizes the text and commits.
- Tip: a preset selection and a custom percentage exclude each other.
  Selecting a preset clears the custom text; typing a custom tip deselects
  every preset. An invalid custom tip silently commits 0.
- Reset: restores the defaults in a single commit.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable

from tipsplit.calculator import calculate_split
from tipsplit.config import DEBOUNCE_DELAY_MS, ERROR_MESSAGES, MIN_PEOPLE
from tipsplit.debounce import Debouncer
from tipsplit.errors import hide_all, present_validation
from tipsplit.events import (
    ACTIVATION_KEYS,
    BillBlurred,
    BillEdited,
    CustomTipBlurred,
    CustomTipEdited,
    FormEvent,
    PeopleBlurred,
    PeopleEdited,
    ResetRequested,
    TipPresetChosen,
    TipPresetFocused,
    TipPresetKeyPressed,
)
from tipsplit.exceptions import FormEventError
from tipsplit.logging_config import get_logger
from tipsplit.ports import FormView, TimerPort, TipPresetPort
from tipsplit.sanitize import decimal_only, numeric_only, parse_decimal_prefix
from tipsplit.state import DEFAULT_STATE, FormState, StateContainer
from tipsplit.validators import validate_bill, validate_custom_tip, validate_people

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class FormOrchestrator:
    """Applies input events to the view and the state container.

    Args:
        container: Owner of the committed form state
        view: Presentation ports (text fields, error indicators, presets, ...)
        timer: Timer used to debounce bill and people edits
        debounce_ms: Debounce delay, fixed by ``DEBOUNCE_DELAY_MS`` in the app
    """

    def __init__(
        self,
        container: StateContainer,
        view: FormView,
        timer: TimerPort,
        debounce_ms: int = DEBOUNCE_DELAY_MS,
    ) -> None:
        self.container = container
        self.view = view
        # Field-scoped loggers tag every record with ``field`` for the JSON log
        self._bill_log = get_logger(__name__, extra={"field": "bill"})
        self._people_log = get_logger(__name__, extra={"field": "people"})
        self._tip_log = get_logger(__name__, extra={"field": "tip"})
        self._bill_debounce = Debouncer(timer, debounce_ms, name="bill")
        self._people_debounce = Debouncer(timer, debounce_ms, name="people")
        self._handlers: dict[type, Callable[..., None]] = {
            BillEdited: self._on_bill_edited,
            BillBlurred: self._on_bill_blurred,
            PeopleEdited: self._on_people_edited,
            PeopleBlurred: self._on_people_blurred,
            TipPresetChosen: self._on_preset_chosen,
            TipPresetKeyPressed: self._on_preset_key,
            TipPresetFocused: self._on_preset_focused,
            CustomTipEdited: self._on_custom_tip_edited,
            CustomTipBlurred: self._on_custom_tip_blurred,
            ResetRequested: self._on_reset,
        }

        container.subscribe(self._on_state_changed)
        self._render()

    def dispatch(self, event: FormEvent) -> None:
        """Apply one input event.

        Raises:
            FormEventError: If the event type has no transition
        """
        handler = self._handlers.get(type(event))
        if handler is None:
            raise FormEventError(
                "No transition for event", event_type=type(event).__name__
            )
        handler(event)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _on_state_changed(self, state: FormState) -> None:
        split = calculate_split(
            state.bill_amount, state.tip_percent, state.number_of_people
        )
        self.view.result_display.show_result(split)
        self.view.reset_control.set_enabled(self.container.should_enable_reset())

    def _render(self) -> None:
        """Refresh derived output for transitions that commit nothing."""
        self._on_state_changed(self.container.get_state())

    # ------------------------------------------------------------------
    # Bill
    # ------------------------------------------------------------------

    def _on_bill_edited(self, event: BillEdited) -> None:
        cleaned = decimal_only(event.raw)
        if cleaned != event.raw:
            self.view.bill.set_text(cleaned)
        self._bill_debounce.call(self._validate_bill_edit)

    def _validate_bill_edit(self) -> None:
        result = validate_bill(self.view.bill.get_text())
        present_validation(self.view.bill_error, result, ERROR_MESSAGES["bill"])
        if not result.ok:
            self._bill_log.debug("Edit rejected: %s", result.reason.value)
            self._render()
            return
        self.container.set_state(bill_amount=result.value)

    def _on_bill_blurred(self, event: BillBlurred) -> None:
        self._bill_debounce.cancel()
        text = self.view.bill.get_text()
        result = validate_bill(text)
        if result.ok:
            amount = result.value
            self.view.bill.set_text(f"{amount:.2f}")
        else:
            amount = ZERO
            self.view.bill.set_text("")
        self.view.bill_error.hide()

        if not self.view.people.get_text():
            self.view.people.set_text(str(MIN_PEOPLE))

        self.container.set_state(bill_amount=amount)

    # ------------------------------------------------------------------
    # People
    # ------------------------------------------------------------------

    def _on_people_edited(self, event: PeopleEdited) -> None:
        cleaned = numeric_only(event.raw)
        if cleaned != event.raw:
            self.view.people.set_text(cleaned)
        self._people_debounce.call(self._validate_people_edit)

    def _validate_people_edit(self) -> None:
        result = validate_people(self.view.people.get_text())
        present_validation(self.view.people_error, result, ERROR_MESSAGES["people"])
        if not result.ok:
            self._people_log.debug("Edit rejected: %s", result.reason.value)
            self._render()
            return
        self.container.set_state(number_of_people=result.value)

    def _on_people_blurred(self, event: PeopleBlurred) -> None:
        self._people_debounce.cancel()
        text = self.view.people.get_text()
        result = validate_people(text)
        count = result.value if result.ok else MIN_PEOPLE
        self.view.people.set_text(str(count))
        self.view.people_error.hide()
        self.container.set_state(number_of_people=count)

    # ------------------------------------------------------------------
    # Tip presets
    # ------------------------------------------------------------------

    def _find_preset(self, value: str) -> TipPresetPort | None:
        for preset in self.view.presets:
            if preset.value == value:
                return preset
        return None

    def _select_preset(self, value: str) -> None:
        self.view.custom_tip.set_text("")
        for preset in self.view.presets:
            preset.set_selected(preset.value == value)

        percent = parse_decimal_prefix(value)
        if percent is None:
            self._tip_log.warning("Preset %r is not a number; committing 0", value)
            percent = ZERO
        self.container.set_state(tip_percent=percent)

    def _on_preset_chosen(self, event: TipPresetChosen) -> None:
        self._select_preset(event.value)

    def _on_preset_key(self, event: TipPresetKeyPressed) -> None:
        if event.key not in ACTIVATION_KEYS:
            return
        self._select_unless_selected(event.value)

    def _on_preset_focused(self, event: TipPresetFocused) -> None:
        self._select_unless_selected(event.value)

    def _select_unless_selected(self, value: str) -> None:
        preset = self._find_preset(value)
        if preset is not None and preset.is_selected():
            return
        self._select_preset(value)

    # ------------------------------------------------------------------
    # Custom tip
    # ------------------------------------------------------------------

    def _on_custom_tip_edited(self, event: CustomTipEdited) -> None:
        for preset in self.view.presets:
            preset.set_selected(False)

        result = validate_custom_tip(event.raw)
        if not result.ok:
            self._tip_log.debug("Custom tip %r invalid; tip zeroed", event.raw)
            self.container.set_state(tip_percent=ZERO)
            return
        self.container.set_state(tip_percent=Decimal(result.value))

    def _on_custom_tip_blurred(self, event: CustomTipBlurred) -> None:
        text = self.view.custom_tip.get_text()
        # Empty means "no custom tip yet", not "zero tip"
        if not text.strip():
            self.view.custom_tip.set_text("")
            self._render()
            return

        result = validate_custom_tip(text)
        if result.ok:
            self.view.custom_tip.set_text(str(result.value))
            self.container.set_state(tip_percent=Decimal(result.value))
        else:
            self.view.custom_tip.set_text("")
            self.container.set_state(tip_percent=ZERO)

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def _on_reset(self, event: ResetRequested) -> None:
        self._bill_debounce.cancel()
        self._people_debounce.cancel()

        for text_field in (self.view.bill, self.view.people, self.view.custom_tip):
            text_field.set_text("")
        for preset in self.view.presets:
            preset.set_selected(False)
        hide_all((self.view.bill_error, self.view.people_error))

        logger.info("Form reset")
        self.container.reset(DEFAULT_STATE)
