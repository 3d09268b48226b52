import datetime as dt
import sys
from pathlib import Path

import pytest

# Ensure project root is importable for tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


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

START = dt.datetime(2025, 3, 2, 8, 0, 0, tzinfo=dt.timezone.utc)


def step_records(rates, seconds_each=60, start=START):
    """One-second records holding each heart rate for `seconds_each` seconds."""
    records = []
    t = 0
    for hr in rates:
        for _ in range(seconds_each):
            records.append(Record(timestamp=start + dt.timedelta(seconds=t), heart_rate=hr))
            t += 1
    return records


@pytest.fixture
def laps():
    return [
        Lap(
            total_timer_time=300,
            total_distance=1000.0,
            avg_speed=3.3333,
            avg_running_cadence=80,
            avg_fractional_cadence=50.0,
            avg_stride_length=1.25,
            avg_heart_rate=150,
            max_heart_rate=162,
        ),
        Lap(
            total_timer_time=280,
            total_distance=1000.0,
            avg_speed=3.5714,
            avg_running_cadence=None,
            avg_stride_length=None,
            avg_heart_rate=None,
            max_heart_rate=None,
        ),
    ]


@pytest.fixture
def running_session(laps):
    return Session(
        timestamp=START,
        total_distance=10000.0,
        total_timer_time=3000.0,
        avg_speed=3.3333,
        max_speed=4.5,
        total_ascent=120.0,
        total_descent=118.0,
        total_calories=650,
        avg_heart_rate=152,
        max_heart_rate=181,
        avg_running_cadence=80,
        avg_stride_length=1.25,
        avg_vertical_oscillation=85.0,
        vertical_ratio=7.8,
        avg_stance_time=245.4,
        avg_gct_balance=37,
        total_training_effect=3.1,
        laps=laps,
    )


@pytest.fixture
def running_activity(running_session):
    return Activity(
        sport=Sport.RUNNING,
        sessions=[running_session],
        recovery_info=30,
        recovery_hr=55,
        ending_hr=70,
        recovery_time=1800,
    )


@pytest.fixture
def explicit_zone_table():
    return HeartRateZoneTable(
        type=18,
        heart_rate_zones=[100, 120, 140, 155, 170, 190],
        time_in_hr_zone=[30.0, 600.0, 900.0, 1200.0, 300.0, 0.0],
    )


@pytest.fixture
def hrv_samples():
    # Alternating intervals give a constant 50 ms successive difference.
    beats = [0.80 if i % 2 == 0 else 0.85 for i in range(400)]
    return [HrvSample(time=beats[i : i + 5] + [None]) for i in range(0, len(beats), 5)]


@pytest.fixture
def physiological_metrics():
    return [
        PhysiologicalMetrics(aerobic_training_effect=2.0, anaerobic_training_effect=0.5),
        PhysiologicalMetrics(aerobic_training_effect=3.4, anaerobic_training_effect=1.2),
    ]


@pytest.fixture
def make_records():
    return step_records
