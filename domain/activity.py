"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Parsed activity records as handed over by the activity loader.

Every record stores values in metric units (m, m/s, mm) and knows which unit
each field uses, so callers can ask for a value already converted to the unit
they want to display.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional

from haversine import Unit, haversine

from utils.units import convert


class Sport(str, Enum):
    RUNNING = "running"
    CYCLING = "cycling"
    MULTISPORT = "multisport"
    OTHER = "other"

    @classmethod
    def parse(cls, value: object) -> "Sport":
        text = str(value or "").strip().lower()
        for sport in cls:
            if sport.value == text:
                return sport
        return cls.OTHER

    @property
    def is_running(self) -> bool:
        return self in (Sport.RUNNING, Sport.MULTISPORT)


class FieldRecord:
    """Base for records whose fields carry a stored unit."""

    FIELD_UNITS: ClassVar[Dict[str, str]] = {}

    def get(self, name: str) -> Optional[float]:
        return getattr(self, name, None)

    def get_as(self, name: str, unit: str) -> Optional[float]:
        value = self.get(name)
        if value is None:
            return None
        stored = self.FIELD_UNITS.get(name)
        if stored is None:
            raise KeyError(f"Field {name!r} has no stored unit")
        return convert(value, stored, unit)


_INTERVAL_UNITS = {
    "total_distance": "m",
    "avg_speed": "m/s",
    "max_speed": "m/s",
    "total_ascent": "m",
    "total_descent": "m",
    "avg_stride_length": "m",
    "avg_vertical_oscillation": "mm",
}


@dataclass(frozen=True)
class Record(FieldRecord):
    timestamp: Optional[dt.datetime] = None
    heart_rate: Optional[int] = None
    position_lat: Optional[float] = None
    position_long: Optional[float] = None
    distance: Optional[float] = None
    speed: Optional[float] = None

    FIELD_UNITS: ClassVar[Dict[str, str]] = {"distance": "m", "speed": "m/s"}

    @property
    def has_position(self) -> bool:
        return self.position_lat is not None and self.position_long is not None


@dataclass(frozen=True)
class Lap(FieldRecord):
    total_timer_time: Optional[float] = None
    total_distance: Optional[float] = None
    avg_speed: Optional[float] = None
    max_speed: Optional[float] = None
    avg_running_cadence: Optional[int] = None
    avg_fractional_cadence: Optional[float] = None
    avg_cadence: Optional[int] = None
    avg_stride_length: Optional[float] = None
    avg_heart_rate: Optional[int] = None
    max_heart_rate: Optional[int] = None
    total_ascent: Optional[float] = None
    total_descent: Optional[float] = None

    FIELD_UNITS: ClassVar[Dict[str, str]] = _INTERVAL_UNITS


@dataclass(frozen=True)
class Session(FieldRecord):
    timestamp: Optional[dt.datetime] = None
    total_distance: Optional[float] = None
    total_timer_time: Optional[float] = None
    avg_speed: Optional[float] = None
    max_speed: Optional[float] = None
    total_ascent: Optional[float] = None
    total_descent: Optional[float] = None
    total_calories: Optional[int] = None
    avg_heart_rate: Optional[int] = None
    max_heart_rate: Optional[int] = None
    avg_running_cadence: Optional[int] = None
    avg_cadence: Optional[int] = None
    avg_stride_length: Optional[float] = None
    avg_vertical_oscillation: Optional[float] = None
    vertical_ratio: Optional[float] = None
    avg_stance_time: Optional[float] = None
    avg_gct_balance: Optional[float] = None
    total_training_effect: Optional[float] = None
    nec_lat: Optional[float] = None
    nec_long: Optional[float] = None
    swc_lat: Optional[float] = None
    swc_long: Optional[float] = None
    time_in_hr_zone: Optional[List[Optional[float]]] = None
    laps: List[Lap] = field(default_factory=list)

    FIELD_UNITS: ClassVar[Dict[str, str]] = _INTERVAL_UNITS

    def has_geo_data(self) -> bool:
        return None not in (self.nec_lat, self.nec_long, self.swc_lat, self.swc_long)


@dataclass(frozen=True)
class HeartRateZoneTable:
    # Only type 18 tables describe the session zones.
    type: Optional[int] = None
    heart_rate_zones: List[Optional[int]] = field(default_factory=list)
    time_in_hr_zone: List[Optional[float]] = field(default_factory=list)


@dataclass(frozen=True)
class PhysiologicalMetrics:
    aerobic_training_effect: Optional[float] = None
    anaerobic_training_effect: Optional[float] = None


@dataclass(frozen=True)
class HrvSample:
    # Beat-to-beat intervals in seconds; the device pads with nulls.
    time: List[Optional[float]] = field(default_factory=list)


@dataclass(frozen=True)
class Activity(FieldRecord):
    sport: Sport = Sport.OTHER
    note: Optional[str] = None
    sessions: List[Session] = field(default_factory=list)
    records: List[Record] = field(default_factory=list)
    heart_rate_zones: List[HeartRateZoneTable] = field(default_factory=list)
    physiological_metrics: List[PhysiologicalMetrics] = field(default_factory=list)
    recovery_info: Optional[float] = None
    recovery_hr: Optional[int] = None
    ending_hr: Optional[int] = None
    recovery_time: Optional[float] = None
    hrv: List[HrvSample] = field(default_factory=list)

    FIELD_UNITS: ClassVar[Dict[str, str]] = {"total_gps_distance": "m"}

    @property
    def session(self) -> Optional[Session]:
        return self.sessions[0] if self.sessions else None

    @property
    def total_gps_distance(self) -> Optional[float]:
        """Distance in meters summed over consecutive positioned records."""
        points = [(r.position_lat, r.position_long) for r in self.records if r.has_position]
        if len(points) < 2:
            return None
        return sum(
            haversine(a, b, unit=Unit.METERS) for a, b in zip(points, points[1:])
        )
