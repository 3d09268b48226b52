"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Infer heart-rate zone minimums from raw samples.

Older devices only record how many seconds were spent in each zone, not the
zone boundaries. The boundaries can be recovered by building a histogram of
seconds spent at each heart rate and cutting it from the top so that the
time above each cut matches the recorded time in the zones above it.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
from streamlit.logger import get_logger

from domain.activity import Record

logger = get_logger(__name__)

GARMIN_ZONES = 5
# Sampling gaps longer than this are not attributed to any heart rate.
MAX_SAMPLE_GAP_SEC = 10.0


def heart_rate_histogram(records: Sequence[Record]) -> pd.Series:
    """Seconds spent at each heart rate, indexed by bpm in descending order."""
    frame = pd.DataFrame(
        {
            "timestamp": [r.timestamp for r in records],
            "hr": [r.heart_rate for r in records],
        }
    )
    frame = frame.dropna(subset=["timestamp", "hr"])
    if len(frame) < 2:
        return pd.Series(dtype=float)
    frame["timestamp"] = pd.to_datetime(frame["timestamp"], utc=True)
    frame = frame.sort_values("timestamp")
    frame["dt"] = frame["timestamp"].diff().dt.total_seconds()
    frame = frame[(frame["dt"] > 0) & (frame["dt"] <= MAX_SAMPLE_GAP_SEC)]
    if frame.empty:
        return pd.Series(dtype=float)
    frame["hr"] = frame["hr"].round().astype(int)
    return frame.groupby("hr")["dt"].sum().sort_index(ascending=False)


def detect_zones(
    records: Sequence[Record], secs_in_zones: Sequence[Optional[float]]
) -> List[Optional[int]]:
    """Return [lowest hr, zone 1 min, ..., zone 5 min] for the given samples."""
    if len(secs_in_zones) != GARMIN_ZONES + 1:
        raise ValueError(f"secs_in_zones must have {GARMIN_ZONES + 1} elements")

    zone_mins: List[Optional[int]] = [None] * (GARMIN_ZONES + 1)
    histogram = heart_rate_histogram(records)
    if histogram.empty:
        logger.debug("No heart rate samples usable for zone detection")
        return zone_mins

    rates = histogram.index.to_numpy()
    cumulative = np.cumsum(histogram.to_numpy())
    zone_mins[0] = int(rates.min())

    secs = [float(s or 0.0) for s in secs_in_zones]
    upper_bound: Optional[int] = None
    for zone in range(GARMIN_ZONES, 0, -1):
        if secs[zone] <= 0:
            continue
        target = sum(secs[zone:])
        # Minimums must stay strictly below the zone above.
        mask = np.ones(len(rates), dtype=bool) if upper_bound is None else rates < upper_bound
        if not mask.any():
            break
        offsets = np.abs(cumulative[mask] - target)
        best = int(rates[mask][int(np.argmin(offsets))])
        zone_mins[zone] = best
        upper_bound = best

    logger.debug("Detected zone minimums %s", zone_mins)
    return zone_mins
