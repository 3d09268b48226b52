"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Unit systems and conversion of stored metric values for display.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, Optional, Protocol

from streamlit.logger import get_logger

from utils.time import speed_to_pace

logger = get_logger(__name__)

PLACEHOLDER = "-"
METERS_PER_MILE = 1609.34

# Factors to multiply a stored value with to get the display unit.
_FACTORS: Dict[tuple[str, str], float] = {
    ("m", "km"): 1.0 / 1000.0,
    ("m", "mi"): 1.0 / METERS_PER_MILE,
    ("m", "ft"): 3.28084,
    ("m/s", "km/h"): 3.6,
    ("m/s", "mph"): 2.23694,
    ("mm", "cm"): 0.1,
    ("mm", "in"): 1.0 / 25.4,
}


class UnknownUnitSystemError(ValueError):
    """Raised when a report is requested for an unsupported unit system."""


class UnitSystem(str, Enum):
    METRIC = "metric"
    STATUTE = "statute"

    @classmethod
    def parse(cls, value: object) -> "UnitSystem":
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        try:
            return cls(text)
        except ValueError:
            logger.error("Unknown unit system %r", value)
            raise UnknownUnitSystemError(f"Unknown unit system {value!r}") from None


class MeasuredRecord(Protocol):
    def get(self, name: str) -> Optional[float]: ...

    def get_as(self, name: str, unit: str) -> Optional[float]: ...


def convert(value: float, from_unit: str, to_unit: str) -> float:
    if from_unit == to_unit:
        return float(value)
    try:
        factor = _FACTORS[(from_unit, to_unit)]
    except KeyError:
        raise ValueError(f"Cannot convert {from_unit} to {to_unit}") from None
    return float(value) * factor


class UnitConverter:
    """Formats record fields in the active unit system."""

    def __init__(self, unit_system: UnitSystem | str):
        self.unit_system = UnitSystem.parse(unit_system)

    def local_value(
        self,
        record: MeasuredRecord,
        field: str,
        fmt: str,
        units: Mapping[UnitSystem, str],
    ) -> str:
        unit = units[self.unit_system]
        value = record.get_as(field, unit)
        if value is None:
            return PLACEHOLDER
        # Formats without a %s slot show the bare number.
        if "%s" in fmt:
            return fmt % (value, unit)
        return fmt % value

    def pace(self, record: MeasuredRecord, field: str, show_unit: bool = True) -> str:
        speed = record.get(field)
        if self.unit_system is UnitSystem.METRIC:
            return f"{speed_to_pace(speed)}{' min/km' if show_unit else ''}"
        if self.unit_system is UnitSystem.STATUTE:
            return f"{speed_to_pace(speed, METERS_PER_MILE)}{' min/mi' if show_unit else ''}"
        logger.error("Unknown unit system %r", self.unit_system)
        raise UnknownUnitSystemError(f"Unknown unit system {self.unit_system!r}")


DISTANCE_UNITS = {UnitSystem.METRIC: "km", UnitSystem.STATUTE: "mi"}
SPEED_UNITS = {UnitSystem.METRIC: "km/h", UnitSystem.STATUTE: "mph"}
ELEVATION_UNITS = {UnitSystem.METRIC: "m", UnitSystem.STATUTE: "ft"}
STRIDE_UNITS = {UnitSystem.METRIC: "m", UnitSystem.STATUTE: "ft"}
OSCILLATION_UNITS = {UnitSystem.METRIC: "cm", UnitSystem.STATUTE: "in"}
