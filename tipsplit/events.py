"""Input events the orchestrator reacts to.

The presentation layer translates its own callbacks (buffer changes, focus
moves, key presses, clicks) into these and hands them to
``FormOrchestrator.dispatch``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class BillEdited:
    raw: str


@dataclass(frozen=True)
class BillBlurred:
    pass


@dataclass(frozen=True)
class PeopleEdited:
    raw: str


@dataclass(frozen=True)
class PeopleBlurred:
    pass


@dataclass(frozen=True)
class TipPresetChosen:
    """The preset's selection changed to selected (click or native toggle)."""

    value: str


@dataclass(frozen=True)
class TipPresetKeyPressed:
    """A key was pressed while a preset had focus.

    Only the activation keys select; the control does not report a selection
    change for them on its own.
    """

    value: str
    key: str


@dataclass(frozen=True)
class TipPresetFocused:
    """Keyboard focus arrived on a preset; it gets selected if it is not already."""

    value: str


@dataclass(frozen=True)
class CustomTipEdited:
    raw: str


@dataclass(frozen=True)
class CustomTipBlurred:
    pass


@dataclass(frozen=True)
class ResetRequested:
    pass


FormEvent = Union[
    BillEdited,
    BillBlurred,
    PeopleEdited,
    PeopleBlurred,
    TipPresetChosen,
    TipPresetKeyPressed,
    TipPresetFocused,
    CustomTipEdited,
    CustomTipBlurred,
    ResetRequested,
]

# Key names (prompt_toolkit spelling) that activate a focused preset
ACTIVATION_KEYS = frozenset({"enter", "space"})
