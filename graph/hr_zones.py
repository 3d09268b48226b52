"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later
"""

from __future__ import annotations

from typing import Optional, Sequence

import altair as alt
import pandas as pd

from services.hr_zones_service import HRZone
from utils.coercion import safe_float_optional

DEFAULT_ZONE_COLORS = [
    "#3b82f6",
    "#22c55e",
    "#eab308",
    "#f97316",
    "#ef4444",
]


def zones_frame(zones: Sequence[HRZone]) -> pd.DataFrame:
    rows = [
        {
            "zone": zone.index + 1,
            "zone_label": f"Z{zone.index + 1}",
            "exertion": zone.name,
            "hr_min": safe_float_optional(zone.low),
            "hr_max": safe_float_optional(zone.high),
            "time_minutes": zone.time_in_zone / 60.0,
            "pct_time": zone.percent_in_zone,
        }
        for zone in zones
    ]
    return pd.DataFrame(
        rows,
        columns=["zone", "zone_label", "exertion", "hr_min", "hr_max", "time_minutes", "pct_time"],
    )


def render_zone_time_bars(zones: Sequence[HRZone]) -> Optional[alt.Chart]:
    working = zones_frame(zones)
    if working.empty:
        return None
    zone_domain = working["zone_label"].tolist()
    zone_scale = alt.Scale(domain=zone_domain, range=DEFAULT_ZONE_COLORS[: len(zone_domain)])

    return (
        alt.Chart(working)
        .mark_bar()
        .encode(
            y=alt.Y("zone_label:N", title="Zone", sort=zone_domain),
            x=alt.X("time_minutes:Q", title="Time (min)"),
            color=alt.Color("zone_label:N", title="Zone", scale=zone_scale),
            tooltip=[
                alt.Tooltip("exertion:N", title="Exertion"),
                alt.Tooltip("time_minutes:Q", title="Time (min)", format=".1f"),
                alt.Tooltip("pct_time:Q", title="% of time", format=".0f"),
                alt.Tooltip("hr_min:Q", title="Min. HR", format=".0f"),
                alt.Tooltip("hr_max:Q", title="Max. HR", format=".0f"),
            ],
        )
        .properties(height=220)
    )
