"""Reactive tip splitter form engine.

Validates bill, tip and people inputs, keeps a single observable form state
and derives the per-person tip and total from it. The terminal front end
lives in ``tipsplit.tui``.
"""

__version__ = "1.0.0"
