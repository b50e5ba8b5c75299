"""Fixed domain constants for the tip splitter form.

These bounds are part of the form's contract and are not read from settings
files or the environment. Presentation preferences (preset values, currency
symbol) live in ``tipsplit.tui.settings`` instead.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Final

MIN_BILL: Final = Decimal("1.00")
MAX_BILL: Final = Decimal("100000.00")

MIN_PEOPLE: Final = 1
MAX_PEOPLE: Final = 100

MIN_CUSTOM_TIP: Final = Decimal("1")
MAX_CUSTOM_TIP: Final = Decimal("100")

# Live-edit validation delay for the bill and people fields (milliseconds)
DEBOUNCE_DELAY_MS: Final = 300

DEFAULT_PRESETS: Final = (5, 10, 15, 25, 50)
DEFAULT_CURRENCY_SYMBOL: Final = "$"

# One range message per field; the reason (empty/below/above) is not shown
ERROR_MESSAGES: Final[dict[str, str]] = {
    "bill": f"(1–{int(MAX_BILL):,})",
    "people": f"(1–{MAX_PEOPLE})",
}
