"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later
"""

from __future__ import annotations

from dataclasses import replace

from domain.activity import Activity, Lap, Session, Sport
from services.metrics_service import MetricsService
from utils.units import UnitConverter, UnitSystem


def _rows(activity, unit_system=UnitSystem.METRIC, custom_fields=None):
    service = MetricsService(activity, UnitConverter(unit_system), custom_fields)
    return {row.label: row.value for row in service.session_rows()}


def _labels(activity):
    service = MetricsService(activity, UnitConverter(UnitSystem.METRIC))
    return [row.label for row in service.session_rows()]


def test_running_session_rows(running_activity):
    rows = _rows(running_activity, custom_fields={"type": "Running", "sub_type": "Street"})

    assert rows["Type:"] == "Running"
    assert rows["Sub Type:"] == "Street"
    assert rows["Date:"] == "2025-03-02 08:00:00 +0000"
    assert rows["Distance:"] == "10.00 km"
    assert rows["Time:"] == "0:50:00"
    assert rows["Avg. Speed:"] == "12.0 km/h"
    assert rows["Avg. Pace:"] == "5:00 min/km"
    assert rows["Total Ascent:"] == "120 m"
    assert rows["Calories:"] == "650 kCal"
    assert rows["Avg. HR:"] == "152 bpm"
    assert rows["Max. HR:"] == "181 bpm"
    assert rows["Avg. Run Cadence:"] == "160 spm"
    assert rows["Avg. Stride Length:"] == "1.25 m"
    assert rows["Avg. Vertical Oscillation:"] == "8.5 cm"
    assert rows["Vertical Ratio:"] == "7.8%"
    assert rows["Avg. Ground Contact Time:"] == "245 ms"
    assert rows["Avg. Ground Contact Time Balance:"] == "37% L / 63.0% R"
    assert "Avg. Cadence:" not in rows
    assert "GPS Data based Distance:" not in rows


def test_ground_contact_balance_with_fractional_share(running_activity):
    session = replace(running_activity.session, avg_gct_balance=49.87)
    rows = _rows(replace(running_activity, sessions=[session]))
    assert rows["Avg. Ground Contact Time Balance:"] == "49.87% L / 50.13% R"


def test_statute_session_rows(running_activity):
    rows = _rows(running_activity, UnitSystem.STATUTE)
    assert rows["Distance:"] == "6.21 mi"
    assert rows["Avg. Pace:"] == "8:03 min/mi"
    assert rows["Total Ascent:"] == "394 ft"
    assert rows["Avg. Stride Length:"] == "4.10 ft"


def test_row_order_starts_with_identity_and_ends_with_recovery(running_activity):
    labels = _labels(running_activity)
    assert labels[:4] == ["Type:", "Sub Type:", "Date:", "Distance:"]
    assert labels[-3:] == ["Ignored Recovery Time:", "Recovery HR:", "Suggested Recovery Time:"]


def test_missing_fields_render_placeholders():
    activity = Activity(sport=Sport.RUNNING, sessions=[Session()])
    rows = _rows(activity)
    for label in (
        "Type:",
        "Date:",
        "Distance:",
        "Avg. Speed:",
        "Calories:",
        "Avg. HR:",
        "Max. HR:",
        "Avg. Run Cadence:",
        "Vertical Ratio:",
        "Avg. Ground Contact Time:",
        "Avg. Ground Contact Time Balance:",
        "Ignored Recovery Time:",
        "Recovery HR:",
        "Suggested Recovery Time:",
    ):
        assert rows[label] == "-", label
    assert rows["Avg. Pace:"] == "-:-- min/km"
    assert "HRV Score:" not in rows
    assert not any("Training Effect" in label for label in rows)


def test_activity_without_session_still_summarizes():
    rows = _rows(Activity(sport=Sport.OTHER))
    assert rows["Distance:"] == "-"
    assert rows["Time:"] == "-"


def test_cycling_cadence_row():
    activity = Activity(sport=Sport.CYCLING, sessions=[Session(avg_cadence=45)])
    rows = _rows(activity)
    assert rows["Avg. Cadence:"] == "90 rpm"
    assert "Avg. Pace:" not in rows
    assert "Avg. Run Cadence:" not in rows


def test_multisport_gets_running_rows():
    activity = Activity(sport=Sport.MULTISPORT, sessions=[Session(avg_running_cadence=81)])
    rows = _rows(activity)
    assert rows["Avg. Run Cadence:"] == "162 spm"
    assert "Avg. Pace:" in rows


def test_gps_distance_row_only_with_geo_data(running_activity, make_records):
    session = replace(running_activity.session, nec_lat=48.9, nec_long=2.4, swc_lat=48.8, swc_long=2.3)
    records = [
        replace(r, position_lat=48.85 + i * 0.001, position_long=2.35)
        for i, r in enumerate(make_records([140], seconds_each=11))
    ]
    activity = replace(running_activity, sessions=[session], records=records)
    rows = _rows(activity)
    # 10 steps of 0.001 degree latitude are about 1.11 km.
    assert rows["GPS Data based Distance:"] == "1.11 km"


def test_gps_distance_row_without_positions(running_activity):
    session = replace(running_activity.session, nec_lat=48.9, nec_long=2.4, swc_lat=48.8, swc_long=2.3)
    rows = _rows(replace(running_activity, sessions=[session]))
    assert rows["GPS Data based Distance:"] == "-"


def test_training_effect_prefers_latest_physiological_metrics(running_activity, physiological_metrics):
    activity = replace(running_activity, physiological_metrics=physiological_metrics)
    rows = _rows(activity)
    assert rows["Anaerobic Training Effect:"] == "1.2"
    assert rows["Aerobic Training Effect:"] == "3.4"
    labels = _labels(activity)
    assert labels.index("Anaerobic Training Effect:") < labels.index("Aerobic Training Effect:")


def test_training_effect_emits_only_present_values(running_activity):
    from domain.activity import PhysiologicalMetrics

    activity = replace(
        running_activity,
        physiological_metrics=[PhysiologicalMetrics(aerobic_training_effect=2.8)],
    )
    rows = _rows(activity)
    assert rows["Aerobic Training Effect:"] == "2.8"
    assert "Anaerobic Training Effect:" not in rows


def test_training_effect_falls_back_to_session_total(running_activity):
    rows = _rows(running_activity)
    assert rows["Aerobic Training Effect:"] == "3.1"
    assert "Anaerobic Training Effect:" not in rows


def test_recovery_rows(running_activity):
    rows = _rows(running_activity)
    assert rows["Ignored Recovery Time:"] == "0:30:00"
    assert rows["Recovery HR:"] == "55 bpm [15 bpm]"
    assert rows["Suggested Recovery Time:"] == "1d 6:00:00"


def test_recovery_hr_needs_both_values(running_activity):
    assert _rows(replace(running_activity, ending_hr=None))["Recovery HR:"] == "-"
    assert _rows(replace(running_activity, recovery_hr=None))["Recovery HR:"] == "-"


def test_hrv_score_row(running_activity, hrv_samples):
    rows = _rows(replace(running_activity, hrv=hrv_samples))
    assert rows["HRV Score:"] == "78.2"
    assert _labels(replace(running_activity, hrv=hrv_samples))[-1] == "HRV Score:"


def test_lap_rows_for_running(running_activity):
    service = MetricsService(running_activity, UnitConverter(UnitSystem.METRIC))
    assert service.lap_speed_label() == "Avg. Pace"
    first, second = service.lap_rows()

    assert first.cells() == [1, "0:05:00", "1.00", "5:00", "1.25", "161.0", "150", "162"]
    assert second.index == 2
    assert second.speed == "4:40"
    assert second.stride == "-"
    assert second.cadence == ""
    assert second.avg_hr == ""
    assert second.max_hr == ""


def test_lap_rows_show_speed_for_other_sports():
    lap = Lap(total_timer_time=600, total_distance=5000.0, avg_speed=8.3333)
    activity = Activity(sport=Sport.CYCLING, sessions=[Session(laps=[lap])])
    service = MetricsService(activity, UnitConverter(UnitSystem.STATUTE))
    assert service.lap_speed_label() == "Avg. Speed"
    (row,) = service.lap_rows()
    assert row.speed == "18.6"
    assert row.distance == "3.11"
