"""
Locale display helpers for decimals in report cells.

Defaults to en_US; `set_locale` switches the locale for the whole process.
"""

from __future__ import annotations

from typing import Optional

from babel import numbers
from babel.core import UnknownLocaleError

LOCALE = "en_US"


def set_locale(locale_str: str = "en_US") -> None:
    global LOCALE
    try:
        # Validate by formatting a simple number
        numbers.format_decimal(1.0, locale=locale_str)
        LOCALE = locale_str
    except (UnknownLocaleError, ValueError):
        LOCALE = "en_US"


def fmt_decimal(value: Optional[float], digits: Optional[int] = None) -> str:
    if value is None:
        return ""
    fmt = None
    if digits is not None:
        fmt = "0" if digits == 0 else "0." + ("0" * digits)
    return numbers.format_decimal(value, format=fmt, locale=LOCALE)
