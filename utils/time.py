"""Duration and pace helpers for report cells."""

from __future__ import annotations

from typing import Optional


def secs_to_hms(secs: Optional[float]) -> str:
    if secs is None:
        return "-"
    total = int(round(secs))
    minutes, s = divmod(total, 60)
    h, m = divmod(minutes, 60)
    return f"{h}:{m:02d}:{s:02d}"


def secs_to_dhms(secs: Optional[float]) -> str:
    if secs is None:
        return "-"
    total = int(round(secs))
    days, rest = divmod(total, 86400)
    hms = secs_to_hms(rest)
    return f"{days}d {hms}" if days > 0 else hms


def speed_to_pace(speed: Optional[float], distance: float = 1000.0) -> str:
    """Return M:SS per `distance` meters for a speed in m/s."""
    if speed is None or speed <= 0.01:
        return "-:--"
    minutes, seconds = divmod(int(round(distance / speed)), 60)
    return f"{minutes}:{seconds:02d}"
