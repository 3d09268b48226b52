"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Heart rate zones of an activity session.

Depending on the age of the device an activity carries explicit zone tables
with boundaries, only a per-session time-in-zone histogram, or nothing. The
source is resolved once with `resolve_zone_source`; both `has_hr_zones` and
`gather_hr_zones` go through it so they always agree.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

from streamlit.logger import get_logger

from domain.activity import Activity, HeartRateZoneTable, Record
from services.hr_zone_detector import GARMIN_ZONES, detect_zones

logger = get_logger(__name__)

SESSION_ZONE_TABLE_TYPE = 18
ZONE_NAMES = ["Warm Up", "Easy", "Aerobic", "Threshold", "Maximum"]

HeartRate = Union[int, float, str, None]
ZoneDetector = Callable[[Sequence[Record], Sequence[Optional[float]]], List[Optional[int]]]


class ZoneSource(Enum):
    EXPLICIT = "explicit"
    RECONSTRUCTED = "reconstructed"
    ABSENT = "absent"


@dataclass(frozen=True)
class HRZone:
    index: int
    low: HeartRate
    high: HeartRate
    time_in_zone: float
    percent_in_zone: float

    @property
    def name(self) -> str:
        return ZONE_NAMES[self.index]


def _explicit_table(activity: Activity) -> Optional[HeartRateZoneTable]:
    for table in activity.heart_rate_zones:
        if (
            table.type == SESSION_ZONE_TABLE_TYPE
            and table.heart_rate_zones
            and table.time_in_hr_zone
        ):
            return table
    return None


def _explicit_total(table: HeartRateZoneTable) -> float:
    # Index 0 is never displayed but still counts towards the recorded time.
    return float(sum(t for t in table.time_in_hr_zone if t is not None))


def _explicit_is_complete(table: HeartRateZoneTable) -> bool:
    return (
        len(table.heart_rate_zones) > GARMIN_ZONES
        and len(table.time_in_hr_zone) > GARMIN_ZONES
    )


def _histogram(activity: Activity) -> Optional[List[Optional[float]]]:
    session = activity.session
    if session is None or not session.time_in_hr_zone:
        return None
    return list(session.time_in_hr_zone)


def _histogram_total(histogram: Optional[List[Optional[float]]]) -> Optional[float]:
    """Total of zones 1..5, or None unless all five are recorded and positive."""
    if not histogram:
        return None
    # Zones past 5 exist in the file but are not shown on the device.
    secs = [s for s in histogram[1 : GARMIN_ZONES + 1] if s is not None]
    total = float(sum(secs))
    if len(secs) != GARMIN_ZONES or total <= 0.0:
        return None
    return total


def resolve_zone_source(activity: Activity) -> ZoneSource:
    table = _explicit_table(activity)
    if table is not None:
        if _explicit_is_complete(table) and _explicit_total(table) > 0.0:
            return ZoneSource.EXPLICIT
        return ZoneSource.ABSENT
    if _histogram_total(_histogram(activity)) is not None:
        return ZoneSource.RECONSTRUCTED
    return ZoneSource.ABSENT


def has_hr_zones(activity: Activity) -> bool:
    return resolve_zone_source(activity) is not ZoneSource.ABSENT


def gather_hr_zones(
    activity: Activity, detector: ZoneDetector = detect_zones
) -> List[HRZone]:
    source = resolve_zone_source(activity)
    logger.debug("Heart rate zone source: %s", source.value)
    if source is ZoneSource.EXPLICIT:
        return _explicit_zones(_explicit_table(activity))  # type: ignore[arg-type]
    if source is ZoneSource.RECONSTRUCTED:
        return _reconstructed_zones(activity, detector)
    return []


def _explicit_zones(table: HeartRateZoneTable) -> List[HRZone]:
    total = _explicit_total(table)
    boundaries = table.heart_rate_zones
    zones = []
    for i in range(GARMIN_ZONES):
        tiz = float(table.time_in_hr_zone[i + 1] or 0.0)
        zones.append(HRZone(i, boundaries[i], boundaries[i + 1], tiz, tiz / total * 100.0))
    return zones


def _reconstructed_zones(activity: Activity, detector: ZoneDetector) -> List[HRZone]:
    session = activity.session
    histogram = _histogram(activity)
    total = _histogram_total(histogram)
    if session is None or histogram is None or total is None:
        return []

    prefix = (histogram + [None] * (GARMIN_ZONES + 1))[: GARMIN_ZONES + 1]
    hr_mins = list(detector(activity.records, prefix))
    hr_mins += [None] * (GARMIN_ZONES + 1 - len(hr_mins))

    zones = []
    for i in range(GARMIN_ZONES):
        low = hr_mins[i + 1]
        if i == GARMIN_ZONES - 1:
            high: HeartRate = session.max_heart_rate if session.max_heart_rate is not None else "-"
        else:
            upper = hr_mins[i + 2]
            high = "-" if not upper else upper - 1
        tiz = float(histogram[i + 1])  # type: ignore[arg-type]
        zones.append(HRZone(i, low, high, tiz, tiz / total * 100.0))
    return zones
