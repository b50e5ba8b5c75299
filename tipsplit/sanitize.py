"""Character filters and lenient number parsing for raw field text."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

_NON_DIGIT = re.compile(r"[^0-9]")
_NON_DECIMAL = re.compile(r"[^0-9.]")
_DECIMAL_PREFIX = re.compile(r"\d*(?:\.\d*)?")
_INT_PREFIX = re.compile(r"\d+")


def numeric_only(value: Any) -> str:
    """Drop every character outside ``0-9``."""
    return _NON_DIGIT.sub("", str(value))


def decimal_only(value: Any) -> str:
    """Drop every character outside ``0-9`` and ``.``.

    Repeated dots are kept; ``parse_decimal_prefix`` decides what they mean.
    """
    return _NON_DECIMAL.sub("", str(value))


def parse_decimal_prefix(text: str) -> Decimal | None:
    """Parse the longest leading ``digits[.digits]`` run of ``text``.

    Returns None when that run contains no digit. Trailing characters are
    ignored, so ``"12.3.4"`` parses as ``12.3``.
    """
    match = _DECIMAL_PREFIX.match(text.strip())
    token = match.group(0) if match else ""
    if not any(ch.isdigit() for ch in token):
        return None
    if token.startswith("."):
        token = "0" + token
    return Decimal(token.rstrip(".") or "0")


def parse_int_prefix(text: str) -> int | None:
    """Parse the leading digits of ``text`` as an int, or None if there are none."""
    match = _INT_PREFIX.match(text.strip())
    if match is None:
        return None
    return int(match.group(0))
