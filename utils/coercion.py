"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Type coercion utilities for turning loosely typed decoder output into the
optional numbers the activity model expects.
"""

from __future__ import annotations

import math
from typing import List, Optional


def safe_float_optional(value: object) -> Optional[float]:
    """Safely convert a value to float, returning None on failure.

    Handles None, empty strings, "NaN", and math.nan by returning None.

    Args:
        value: Value to convert

    Returns:
        Optional[float]: Converted value or None if conversion fails
    """
    if isinstance(value, bool):
        return None
    try:
        if value in (None, "", "NaN"):
            return None
        result = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_int_optional(value: object) -> Optional[int]:
    """Safely convert a value to int, returning None on failure.

    Converts via float first to handle string representations of floats.
    """
    result = safe_float_optional(value)
    if result is None or math.isinf(result):
        return None
    return int(round(result))


def safe_float_list(values: object) -> List[Optional[float]]:
    """Coerce a sequence element-wise, keeping None for unusable entries."""
    if not isinstance(values, (list, tuple)):
        return []
    return [safe_float_optional(item) for item in values]


def safe_int_list(values: object) -> List[Optional[int]]:
    if not isinstance(values, (list, tuple)):
        return []
    return [safe_int_optional(item) for item in values]
