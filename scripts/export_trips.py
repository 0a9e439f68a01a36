#!/usr/bin/env python3
"""Export stored trips to CSV or PDF and print a short summary."""

from __future__ import annotations

import argparse
import logging
import sqlite3
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from angler_finance import analytics, budgets, db, export
from angler_finance.errors import ExportError
from angler_finance.formatting import format_amount, format_percent
from angler_finance.settings_storage import load_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--format", choices=["csv", "pdf"], default="csv", help="artifact type to write")
    parser.add_argument("--db", type=Path, default=None, help="record store path")
    parser.add_argument("--settings", type=Path, default=None, help="settings file path")
    parser.add_argument("--out-dir", type=Path, default=None, help="directory for the artifact")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def summary_lines(trips, settings, now: datetime) -> List[str]:
    currency = settings.currency
    dashboard = analytics.dashboard_summary(trips, now.date())
    report = budgets.evaluate_budgets(trips, settings.budgets, now.date())
    lines = [
        f"Trips: {len(trips)}",
        f"Spent this year: {format_amount(dashboard.total_spent_this_year, currency)}",
        f"Earned this year: {format_amount(dashboard.total_earned_this_year, currency)}",
        f"Net cost this year: {format_amount(dashboard.net_cost_this_year, currency)}",
    ]
    if settings.budgets.monthly_budget > 0:
        lines.append(f"Monthly budget used: {format_percent(report.monthly_progress)}")
    if settings.budgets.yearly_budget > 0:
        lines.append(f"Yearly budget used: {format_percent(report.yearly_progress)}")
    if settings.budgets.income_goal > 0:
        lines.append(f"Income goal reached: {format_percent(report.income_progress)}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings(args.settings)
    now = datetime.now()

    try:
        db.init_db(args.db)
        trips = db.fetch_trips(db_path=args.db)
        if args.format == "csv":
            path = export.export_csv(trips, export_dir=args.out_dir, now=now)
        else:
            path = export.export_full_pdf(trips, settings.currency, export_dir=args.out_dir, now=now)
    except (ExportError, sqlite3.Error, OSError) as exc:
        print(f"Export failed: {exc}", file=sys.stderr)
        return 1

    for line in summary_lines(trips, settings, now):
        print(line)
    print(f"Wrote {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
