"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Human readable summary of one activity as plain text or HTML.
"""

from __future__ import annotations

from typing import List, Mapping, Optional

from domain.activity import Activity
from services.hr_zones_service import HRZone, gather_hr_zones, has_hr_zones
from services.metrics_service import MetricsService
from utils.table import HtmlDocument, Table, ViewFrame
from utils.time import secs_to_hms
from utils.units import UnitConverter, UnitSystem

FRAME_WIDTH = 600

LAP_COLUMNS = 8
ZONE_COLUMN_ALIGNMENT = ["right", "left", "right", "right", "right", "right"]


class ActivitySummary:
    def __init__(
        self,
        activity: Activity,
        unit_system: UnitSystem | str,
        custom_fields: Optional[Mapping[str, object]] = None,
    ):
        self.activity = activity
        self.custom_fields = dict(custom_fields or {})
        self.name = str(self.custom_fields.get("name") or "")
        self.converter = UnitConverter(unit_system)
        self.metrics = MetricsService(activity, self.converter, self.custom_fields)

    def to_text(self) -> str:
        text = self.summary().to_text() + "\n"
        if self.activity.note:
            text += self.note().to_text() + "\n"
        text += self.laps().to_text()
        if has_hr_zones(self.activity):
            text += "\n" + self.hr_zones().to_text()
        return text

    def __str__(self) -> str:
        return self.to_text()

    def to_html(self, doc: HtmlDocument) -> None:
        ViewFrame("activity", f"Activity: {self.name}", FRAME_WIDTH, self.summary()).to_html(doc)
        if self.activity.note:
            ViewFrame("note", "Note", FRAME_WIDTH, self.note(), True).to_html(doc)
        ViewFrame("laps", "Laps", FRAME_WIDTH, self.laps(), True).to_html(doc)
        if has_hr_zones(self.activity):
            ViewFrame("hr_zones", "Heart Rate Zones", FRAME_WIDTH, self.hr_zones(), True).to_html(doc)

    # ------------------------------------------------------------------
    # Sections
    def note(self) -> Table:
        t = Table()
        t.enable_frame(False)
        t.body()
        t.row([self.activity.note])
        return t

    def summary(self) -> Table:
        t = Table()
        t.enable_frame(False)
        t.body()
        for metric in self.metrics.session_rows():
            t.row([metric.label, metric.value])
        return t

    def laps(self) -> Table:
        t = Table()
        t.head()
        t.row(
            [
                "Lap",
                "Duration",
                "Distance",
                self.metrics.lap_speed_label(),
                "Stride",
                "Cadence",
                "Avg. HR",
                "Max. HR",
            ]
        )
        t.set_column_attributes([{"halign": "right"}] * LAP_COLUMNS)
        t.body()
        for lap in self.metrics.lap_rows():
            t.row(lap.cells())
        return t

    def hr_zones(self, zones: Optional[List[HRZone]] = None) -> Table:
        t = Table()
        t.head()
        t.row(["Zone", "Exertion", "Min. HR [bpm]", "Max. HR [bpm]", "Time in Zone", "% of Time in Zone"])
        t.set_column_attributes([{"halign": align} for align in ZONE_COLUMN_ALIGNMENT])
        t.body()
        for zone in gather_hr_zones(self.activity) if zones is None else zones:
            t.cell(zone.index + 1)
            t.cell(zone.name)
            t.cell("-" if zone.low is None else zone.low)
            t.cell("-" if zone.high is None else zone.high)
            t.cell(secs_to_hms(zone.time_in_zone))
            t.cell(f"{zone.percent_in_zone:.0f}%")
            t.new_row()
        return t
