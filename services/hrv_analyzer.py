"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Heart rate variability score from beat-to-beat (R-R) intervals.

The score of a window is 20 * ln(RMSSD in ms), which maps typical resting
values into a 0..100 range. Over a whole activity, windows of
`WINDOW_SEC` seconds are scored and the one-sigma score is the 15.87th
percentile of those scores, i.e. mean minus one standard deviation for a
normally distributed series.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

import numpy as np
from streamlit.logger import get_logger

logger = get_logger(__name__)

WINDOW_SEC = 120.0
MIN_INTERVALS = 32
MIN_INTERVAL_SEC = 0.25
MAX_INTERVAL_SEC = 2.0
ONE_SIGMA_PERCENTILE = 15.87


class HrvAnalyzer:
    def __init__(self, intervals: Iterable[Optional[float]]):
        values = np.array([float(v) for v in intervals if v is not None], dtype=float)
        plausible = (values >= MIN_INTERVAL_SEC) & (values <= MAX_INTERVAL_SEC)
        self.intervals = values[plausible]
        logger.debug(
            "HRV analysis over %d of %d intervals", self.intervals.size, values.size
        )

    def has_hrv_data(self) -> bool:
        return (
            self.intervals.size >= MIN_INTERVALS
            and float(self.intervals.sum()) >= WINDOW_SEC
        )

    @staticmethod
    def hrv_score(intervals: np.ndarray) -> Optional[float]:
        if intervals.size < 2:
            return None
        diffs_ms = np.diff(intervals) * 1000.0
        rmssd = math.sqrt(float(np.mean(diffs_ms**2)))
        if rmssd <= 0:
            return None
        return 20.0 * math.log(rmssd)

    def window_scores(self) -> np.ndarray:
        """Score every window starting at each beat that fits in the series."""
        ends = np.cumsum(self.intervals)
        starts = ends - self.intervals
        stops = np.searchsorted(ends, starts + WINDOW_SEC, side="left")
        scores = []
        for first, last in zip(range(self.intervals.size), stops):
            if last >= self.intervals.size:
                break
            score = self.hrv_score(self.intervals[first : last + 1])
            if score is not None:
                scores.append(score)
        return np.array(scores, dtype=float)

    def one_sigma(self) -> Optional[float]:
        if not self.has_hrv_data():
            return None
        scores = self.window_scores()
        if scores.size == 0:
            return None
        return float(np.percentile(scores, ONE_SIGMA_PERCENTILE))
