"""Print the summary of an exported activity as text or HTML."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from persistence.runtime_config import RuntimeConfig
from services.activity_loader import load_activity
from services.activity_summary_service import ActivitySummary
from utils.config import load_config
from utils.formatting import set_locale
from utils.table import HtmlDocument
from utils.units import UnitSystem


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize one sport activity.")
    parser.add_argument("activity", help="Activity exported as JSON.")
    parser.add_argument("--html", action="store_true", help="Write an HTML page instead of text.")
    parser.add_argument(
        "--units",
        choices=[unit.value for unit in UnitSystem],
        help="Unit system; saved as the new default.",
    )
    parser.add_argument("--name", help="Activity name (default: file name).")
    parser.add_argument("--type", dest="activity_type", help="Activity type label.")
    parser.add_argument("--sub-type", dest="sub_type", help="Activity sub type label.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    ns = parse_args(argv)
    cfg = load_config()
    set_locale(cfg.locale)
    runtime = RuntimeConfig(cfg.data_dir)
    if ns.units:
        runtime.set_option("unit_system", ns.units)
    unit_system = UnitSystem.parse(ns.units) if ns.units else cfg.unit_system or runtime.unit_system()

    path = Path(ns.activity)
    try:
        activity = load_activity(path)
    except (OSError, ValueError) as exc:
        print(f"Cannot load activity {path}: {exc}", file=sys.stderr)
        return 1

    custom_fields = {
        "name": ns.name or path.stem,
        "type": ns.activity_type or activity.sport.value,
        "sub_type": ns.sub_type,
    }
    summary = ActivitySummary(activity, unit_system, custom_fields)
    if ns.html:
        doc = HtmlDocument()
        summary.to_html(doc)
        sys.stdout.write(doc.page(f"Activity: {custom_fields['name']}"))
    else:
        sys.stdout.write(summary.to_text())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
