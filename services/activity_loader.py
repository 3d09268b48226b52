"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Build an `Activity` from decoder output exported as JSON.

Keys follow the FIT message field names (sessions, laps, records,
heart_rate_zones, physiological_metrics, hrv). Unknown keys are ignored and
unusable values become None so a partial export still yields a report.
"""

from __future__ import annotations

import datetime as dt
import json
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
from streamlit.logger import get_logger

from domain.activity import (
    Activity,
    HeartRateZoneTable,
    HrvSample,
    Lap,
    PhysiologicalMetrics,
    Record,
    Session,
    Sport,
)
from utils.coercion import (
    safe_float_list,
    safe_float_optional,
    safe_int_list,
    safe_int_optional,
)

logger = get_logger(__name__)

_LAP_FLOATS = (
    "total_timer_time",
    "total_distance",
    "avg_speed",
    "max_speed",
    "avg_fractional_cadence",
    "avg_stride_length",
    "total_ascent",
    "total_descent",
)
_LAP_INTS = ("avg_running_cadence", "avg_cadence", "avg_heart_rate", "max_heart_rate")
_SESSION_FLOATS = (
    "total_distance",
    "total_timer_time",
    "avg_speed",
    "max_speed",
    "total_ascent",
    "total_descent",
    "avg_stride_length",
    "avg_vertical_oscillation",
    "vertical_ratio",
    "avg_stance_time",
    "avg_gct_balance",
    "total_training_effect",
    "nec_lat",
    "nec_long",
    "swc_lat",
    "swc_long",
)
_SESSION_INTS = (
    "total_calories",
    "avg_heart_rate",
    "max_heart_rate",
    "avg_running_cadence",
    "avg_cadence",
)


def parse_timestamp(value: object) -> Optional[dt.datetime]:
    if value in (None, ""):
        return None
    if isinstance(value, dt.datetime):
        return value
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError):
        return None
    if pd.isna(ts):
        return None
    return ts.to_pydatetime()


def _dicts(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    items = data.get(key) or []
    if not isinstance(items, list):
        logger.debug("Ignoring %s: expected a list", key)
        return []
    rows = [item for item in items if isinstance(item, dict)]
    if len(rows) != len(items):
        logger.debug("Skipped %d malformed %s entries", len(items) - len(rows), key)
    return rows


def _numbers(row: Dict[str, Any], floats: tuple, ints: tuple) -> Dict[str, Any]:
    values: Dict[str, Any] = {name: safe_float_optional(row.get(name)) for name in floats}
    values.update({name: safe_int_optional(row.get(name)) for name in ints})
    return values


def lap_from_dict(row: Dict[str, Any]) -> Lap:
    return Lap(**_numbers(row, _LAP_FLOATS, _LAP_INTS))


def session_from_dict(row: Dict[str, Any]) -> Session:
    time_in_zone = row.get("time_in_hr_zone")
    return Session(
        timestamp=parse_timestamp(row.get("timestamp")),
        time_in_hr_zone=safe_float_list(time_in_zone) if time_in_zone is not None else None,
        laps=[lap_from_dict(lap) for lap in _dicts(row, "laps")],
        **_numbers(row, _SESSION_FLOATS, _SESSION_INTS),
    )


def record_from_dict(row: Dict[str, Any]) -> Record:
    return Record(
        timestamp=parse_timestamp(row.get("timestamp")),
        heart_rate=safe_int_optional(row.get("heart_rate")),
        position_lat=safe_float_optional(row.get("position_lat")),
        position_long=safe_float_optional(row.get("position_long")),
        distance=safe_float_optional(row.get("distance")),
        speed=safe_float_optional(row.get("speed")),
    )


def activity_from_dict(data: Dict[str, Any]) -> Activity:
    sessions = [session_from_dict(row) for row in _dicts(data, "sessions")]
    # Laps exported at the top level belong to the first session.
    top_laps = [lap_from_dict(row) for row in _dicts(data, "laps")]
    if top_laps and sessions and not sessions[0].laps:
        sessions[0] = replace(sessions[0], laps=top_laps)

    note = data.get("note")
    activity = Activity(
        sport=Sport.parse(data.get("sport")),
        note=str(note) if note else None,
        sessions=sessions,
        records=[record_from_dict(row) for row in _dicts(data, "records")],
        heart_rate_zones=[
            HeartRateZoneTable(
                type=safe_int_optional(row.get("type")),
                heart_rate_zones=safe_int_list(row.get("heart_rate_zones")),
                time_in_hr_zone=safe_float_list(row.get("time_in_hr_zone")),
            )
            for row in _dicts(data, "heart_rate_zones")
        ],
        physiological_metrics=[
            PhysiologicalMetrics(
                aerobic_training_effect=safe_float_optional(row.get("aerobic_training_effect")),
                anaerobic_training_effect=safe_float_optional(row.get("anaerobic_training_effect")),
            )
            for row in _dicts(data, "physiological_metrics")
        ],
        recovery_info=safe_float_optional(data.get("recovery_info")),
        recovery_hr=safe_int_optional(data.get("recovery_hr")),
        ending_hr=safe_int_optional(data.get("ending_hr")),
        recovery_time=safe_float_optional(data.get("recovery_time")),
        hrv=[HrvSample(time=safe_float_list(row.get("time"))) for row in _dicts(data, "hrv")],
    )
    logger.debug(
        "Loaded %s activity: %d sessions, %d records",
        activity.sport.value,
        len(activity.sessions),
        len(activity.records),
    )
    return activity


def load_activity(path: str | Path) -> Activity:
    path = Path(path)
    with path.open(encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return activity_from_dict(data)
