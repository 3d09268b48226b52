from graph.hr_zones import render_zone_time_bars, zones_frame
from services.hr_zones_service import HRZone


def test_zones_frame_handles_placeholders():
    zones = [HRZone(0, 100, 119, 600.0, 50.0), HRZone(1, 120, "-", 600.0, 50.0)]
    frame = zones_frame(zones)
    assert frame["zone_label"].tolist() == ["Z1", "Z2"]
    assert frame["time_minutes"].tolist() == [10.0, 10.0]
    assert frame["hr_max"].isna().tolist() == [False, True]


def test_render_zone_time_bars():
    assert render_zone_time_bars([]) is None
    chart = render_zone_time_bars([HRZone(i, 100 + 10 * i, 109 + 10 * i, 60.0, 20.0) for i in range(5)])
    assert chart is not None
    mark = chart.to_dict()["mark"]
    assert (mark["type"] if isinstance(mark, dict) else mark) == "bar"
