#!/usr/bin/env python3
"""
Export the project timeline (inferred dates + status) to an .xlsx workbook.

Usage:
  python -m scripts.export_timeline
  python -m scripts.export_timeline --user-id 12345678 --out outputs/timeline.xlsx
"""

from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

from monday_dash.client import MondayClient
from monday_dash.config import load_settings, require_env
from monday_dash.dashboard import load_timeline
from monday_dash.excel_writer import write_timeline_workbook


def main() -> None:
    load_dotenv()

    ap = argparse.ArgumentParser(prog="export_timeline", description="Export project timeline to Excel")
    ap.add_argument("--user-id", help="Only boards this user owns or subscribes to")
    ap.add_argument("--out", help="Output path (must be under outputs/). If omitted, auto-generates.")
    args = ap.parse_args()

    require_env("MONDAY_API_TOKEN")
    client = MondayClient.from_settings(load_settings())

    if args.out:
        out_path = Path(args.out)
        if not out_path.is_relative_to(Path("outputs")):
            raise RuntimeError("Output path must be under outputs/")
    else:
        suffix = f"_user_{args.user_id}" if args.user_id else ""
        out_path = Path("outputs") / f"timeline{suffix}_{date.today().isoformat()}.xlsx"

    chart = load_timeline(client, args.user_id)
    write_timeline_workbook(chart, out_path)

    legend = chart["legend"]
    print(f"Generated {out_path}")
    print(", ".join(f"{status}={count}" for status, count in legend.items()))


if __name__ == "__main__":
    main()
