import json

import streamlit as st
from streamlit.logger import get_logger

from graph.hr_zones import render_zone_time_bars
from persistence.runtime_config import RuntimeConfig
from services.activity_loader import activity_from_dict
from services.activity_summary_service import ActivitySummary
from services.hr_zones_service import gather_hr_zones, has_hr_zones
from utils.config import load_config
from utils.formatting import set_locale
from utils.table import PAGE_STYLE, HtmlDocument
from utils.units import UnitSystem

logger = get_logger(__name__)


def _unit_selector(runtime: RuntimeConfig) -> UnitSystem:
    options = [unit.value for unit in UnitSystem]
    current = runtime.unit_system().value
    choice = st.sidebar.radio("Unit system", options, index=options.index(current))
    if choice != current:
        runtime.set_option("unit_system", choice)
    return UnitSystem.parse(choice)


def main():
    st.set_page_config(page_title="Activity Summary", layout="wide")
    cfg = load_config()
    set_locale(cfg.locale)
    runtime = RuntimeConfig(cfg.data_dir)
    unit_system = cfg.unit_system or _unit_selector(runtime)

    st.title("Activity Summary")
    uploaded = st.file_uploader("Activity export (JSON)", type=["json"])
    if uploaded is None:
        st.caption("Upload an activity exported by the decoder to see its summary.")
        return

    try:
        data = json.loads(uploaded.getvalue().decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        st.error(f"Cannot read {uploaded.name}: {exc}")
        return
    if not isinstance(data, dict):
        st.error(f"Cannot read {uploaded.name}: expected a JSON object")
        return
    activity = activity_from_dict(data)
    logger.debug("Rendering %s in %s units", uploaded.name, unit_system.value)

    custom_fields = {
        "name": data.get("name") or uploaded.name,
        "type": data.get("type") or activity.sport.value,
        "sub_type": data.get("sub_type"),
    }
    doc = HtmlDocument()
    ActivitySummary(activity, unit_system, custom_fields).to_html(doc)
    st.markdown(f"<style>{PAGE_STYLE}</style>{doc.to_html()}", unsafe_allow_html=True)

    if has_hr_zones(activity):
        chart = render_zone_time_bars(gather_hr_zones(activity))
        if chart is not None:
            st.subheader("Time in Heart Rate Zones")
            st.altair_chart(chart, use_container_width=True)


if __name__ == "__main__":
    main()
