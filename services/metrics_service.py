"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Derived session and lap statistics as display strings.

Every optional field renders as the "-" placeholder when absent; compound
rows that need several values are omitted or shown as "-" instead of raising.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import List, Mapping, Optional

from streamlit.logger import get_logger

from domain.activity import Activity, Lap, Session, Sport
from services.hrv_analyzer import HrvAnalyzer
from utils.formatting import fmt_decimal
from utils.time import secs_to_dhms, secs_to_hms
from utils.units import (
    DISTANCE_UNITS,
    ELEVATION_UNITS,
    OSCILLATION_UNITS,
    PLACEHOLDER,
    SPEED_UNITS,
    STRIDE_UNITS,
    UnitConverter,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class MetricRow:
    label: str
    value: str


@dataclass(frozen=True)
class LapRow:
    index: int
    duration: str
    distance: str
    speed: str
    stride: str
    cadence: str
    avg_hr: str
    max_hr: str

    def cells(self) -> List[object]:
        return [
            self.index,
            self.duration,
            self.distance,
            self.speed,
            self.stride,
            self.cadence,
            self.avg_hr,
            self.max_hr,
        ]


def _fmt_timestamp(value: Optional[dt.datetime]) -> str:
    if value is None:
        return PLACEHOLDER
    return value.strftime("%Y-%m-%d %H:%M:%S %z").strip()


def _bpm(value: Optional[float]) -> str:
    return f"{value} bpm" if value is not None else PLACEHOLDER


def _doubled(value: Optional[float], unit: str) -> str:
    # Devices record strides or pedal strokes per leg.
    return f"{round(2 * value)} {unit}" if value is not None else PLACEHOLDER


def _minutes(value: Optional[float]) -> str:
    return secs_to_dhms(value * 60) if value is not None else PLACEHOLDER


class MetricsService:
    def __init__(
        self,
        activity: Activity,
        converter: UnitConverter,
        custom_fields: Optional[Mapping[str, object]] = None,
    ):
        self.activity = activity
        self.converter = converter
        self.custom_fields = dict(custom_fields or {})

    @property
    def session(self) -> Session:
        return self.activity.session or Session()

    # ------------------------------------------------------------------
    # Session
    def session_rows(self) -> List[MetricRow]:
        session = self.session
        sport = self.activity.sport
        cv = self.converter
        rows = [
            MetricRow("Type:", str(self.custom_fields.get("type") or PLACEHOLDER)),
            MetricRow("Sub Type:", str(self.custom_fields.get("sub_type") or PLACEHOLDER)),
            MetricRow("Date:", _fmt_timestamp(session.timestamp)),
            MetricRow("Distance:", cv.local_value(session, "total_distance", "%.2f %s", DISTANCE_UNITS)),
        ]
        if session.has_geo_data():
            rows.append(
                MetricRow(
                    "GPS Data based Distance:",
                    cv.local_value(self.activity, "total_gps_distance", "%.2f %s", DISTANCE_UNITS),
                )
            )
        rows.append(MetricRow("Time:", secs_to_hms(session.total_timer_time)))
        rows.append(MetricRow("Avg. Speed:", cv.local_value(session, "avg_speed", "%.1f %s", SPEED_UNITS)))
        if sport.is_running:
            rows.append(MetricRow("Avg. Pace:", cv.pace(session, "avg_speed")))
        rows.extend(
            [
                MetricRow("Total Ascent:", cv.local_value(session, "total_ascent", "%.0f %s", ELEVATION_UNITS)),
                MetricRow("Total Descent:", cv.local_value(session, "total_descent", "%.0f %s", ELEVATION_UNITS)),
                MetricRow(
                    "Calories:",
                    f"{session.total_calories} kCal" if session.total_calories is not None else PLACEHOLDER,
                ),
                MetricRow("Avg. HR:", _bpm(session.avg_heart_rate)),
                MetricRow("Max. HR:", _bpm(session.max_heart_rate)),
            ]
        )
        if sport.is_running:
            rows.extend(self._running_rows(session))
        if sport is Sport.CYCLING:
            rows.append(MetricRow("Avg. Cadence:", _doubled(session.avg_cadence, "rpm")))
        rows.extend(self.training_effect_rows())
        rows.extend(self.recovery_rows())
        hrv = self.hrv_row()
        if hrv is not None:
            rows.append(hrv)
        return rows

    def _running_rows(self, session: Session) -> List[MetricRow]:
        cv = self.converter
        balance = session.avg_gct_balance
        return [
            MetricRow("Avg. Run Cadence:", _doubled(session.avg_running_cadence, "spm")),
            MetricRow(
                "Avg. Stride Length:",
                cv.local_value(session, "avg_stride_length", "%.2f %s", STRIDE_UNITS),
            ),
            MetricRow(
                "Avg. Vertical Oscillation:",
                cv.local_value(session, "avg_vertical_oscillation", "%.1f %s", OSCILLATION_UNITS),
            ),
            MetricRow(
                "Vertical Ratio:",
                f"{session.vertical_ratio}%" if session.vertical_ratio is not None else PLACEHOLDER,
            ),
            MetricRow(
                "Avg. Ground Contact Time:",
                f"{round(session.avg_stance_time)} ms" if session.avg_stance_time is not None else PLACEHOLDER,
            ),
            MetricRow(
                "Avg. Ground Contact Time Balance:",
                f"{balance:g}% L / {round(100.0 - balance, 2)}% R" if balance is not None else PLACEHOLDER,
            ),
        ]

    def training_effect_rows(self) -> List[MetricRow]:
        metrics = self.activity.physiological_metrics
        if metrics:
            latest = metrics[-1]
            rows = []
            if latest.anaerobic_training_effect is not None:
                rows.append(
                    MetricRow("Anaerobic Training Effect:", fmt_decimal(latest.anaerobic_training_effect, 1))
                )
            if latest.aerobic_training_effect is not None:
                rows.append(
                    MetricRow("Aerobic Training Effect:", fmt_decimal(latest.aerobic_training_effect, 1))
                )
            return rows
        if self.session.total_training_effect is not None:
            return [MetricRow("Aerobic Training Effect:", fmt_decimal(self.session.total_training_effect, 1))]
        return []

    def recovery_rows(self) -> List[MetricRow]:
        activity = self.activity
        rec_hr = activity.recovery_hr
        end_hr = activity.ending_hr
        if rec_hr is not None and end_hr is not None:
            recovery_hr = f"{rec_hr} bpm [{end_hr - rec_hr} bpm]"
        else:
            recovery_hr = PLACEHOLDER
        return [
            MetricRow("Ignored Recovery Time:", _minutes(activity.recovery_info)),
            MetricRow("Recovery HR:", recovery_hr),
            MetricRow("Suggested Recovery Time:", _minutes(activity.recovery_time)),
        ]

    def hrv_row(self) -> Optional[MetricRow]:
        intervals = [t for sample in self.activity.hrv for t in sample.time if t is not None]
        hrv = HrvAnalyzer(intervals)
        if not hrv.has_hrv_data():
            return None
        score = hrv.one_sigma()
        if score is None:
            logger.debug("HRV data present but no window could be scored")
            return None
        return MetricRow("HRV Score:", fmt_decimal(score, 1))

    # ------------------------------------------------------------------
    # Laps
    def lap_speed_label(self) -> str:
        return "Avg. Pace" if self.activity.sport is Sport.RUNNING else "Avg. Speed"

    def lap_rows(self) -> List[LapRow]:
        return [self._lap_row(idx, lap) for idx, lap in enumerate(self.session.laps, start=1)]

    def _lap_row(self, index: int, lap: Lap) -> LapRow:
        cv = self.converter
        if self.activity.sport is Sport.RUNNING:
            speed = cv.pace(lap, "avg_speed", False)
        else:
            speed = cv.local_value(lap, "avg_speed", "%.1f", SPEED_UNITS)
        if lap.avg_running_cadence is not None and lap.avg_fractional_cadence is not None:
            cadence = fmt_decimal(2 * lap.avg_running_cadence + (2 * lap.avg_fractional_cadence) / 100.0, 1)
        else:
            cadence = ""
        return LapRow(
            index=index,
            duration=secs_to_hms(lap.total_timer_time),
            distance=cv.local_value(lap, "total_distance", "%.2f", DISTANCE_UNITS),
            speed=speed,
            stride=cv.local_value(lap, "avg_stride_length", "%.2f", STRIDE_UNITS),
            cadence=cadence,
            avg_hr="" if lap.avg_heart_rate is None else str(lap.avg_heart_rate),
            max_hr="" if lap.max_heart_rate is None else str(lap.max_heart_rate),
        )
