from datetime import date

import pytest

from angler_finance import analytics
from angler_finance.errors import InvalidDataError, NoDataError
from angler_finance.formatting import Currency, CurrencySetting, format_amount
from angler_finance.models import Trip
from angler_finance.pdf_report import PAGE_BREAK_Y, build_full_report, build_trip_summary, render_pdf

NOW = date(2025, 6, 1)


def _trips():
    return [
        Trip(date=date(2025, 3, 1), location_name="Lake Tahoe", fuel=60, bait=40, income_from_sale=150),
        Trip(date=date(2025, 5, 20), location_name="Clear Lake", fuel=20, income_from_sale=10.5),
        Trip(date=None, location_name="", food=5),
    ]


def test_full_report_layout():
    document = build_full_report(_trips(), now=NOW)
    texts = document.texts()
    assert texts[:7] == [
        "My Fishing Finances 2025",
        "Summary",
        "Total Trips: 3",
        "Total Expenses: 125 $",
        "Total Income: 160.50 $",
        "Net Balance: 35.50 $",
        "All Trips",
    ]
    assert texts[7:] == [
        "May 20, 2025 - Clear Lake - -9.50 $",
        "Mar 1, 2025 - Lake Tahoe - 50 $",
        "Unknown Date - Unknown Location - -5 $",
    ]
    assert len(document.pages) == 1
    assert (document.width, document.height) == (612, 792)


def test_full_report_positions():
    page = build_full_report(_trips(), now=NOW).pages[0]
    title, summary = page.lines[0], page.lines[1]
    assert (title.x, title.y, title.size, title.font) == (50, 50, 28, "Helvetica-Bold")
    assert summary.y == 100
    assert page.lines[2].y == 130
    # four detail lines, a gap, then the trip list heading
    assert page.lines[6].y == 130 + 4 * 25 + 20
    assert page.lines[7].y == page.lines[6].y + 30


def test_full_report_uses_currency():
    texts = build_full_report(_trips(), CurrencySetting(Currency.EUR), now=NOW).texts()
    assert "Total Expenses: 125 €" in texts


def test_full_report_paginates():
    trips = [Trip(date=date(2025, 1, 1), location_name=f"Spot {i}", fuel=1) for i in range(60)]
    document = build_full_report(trips, now=NOW)
    assert len(document.pages) > 1
    trip_lines = [line for page in document.pages for line in page.lines if line.text.startswith("Jan 1, 2025")]
    assert len(trip_lines) == 60
    for page in document.pages:
        for line in page.lines:
            assert line.y <= PAGE_BREAK_Y + 20
    assert document.pages[1].lines[0].y == 50


def test_full_report_no_data():
    with pytest.raises(NoDataError):
        build_full_report([], now=NOW)


def test_trip_summary_layout():
    trip = Trip(date=date(2024, 3, 1), location_name="Lake Tahoe", fuel=60, bait=40, income_from_sale=150)
    document = build_trip_summary(trip)
    assert document.texts() == [
        "Fishing Trip Summary",
        "Location: Lake Tahoe",
        "Date: Mar 1, 2024",
        "Total Expenses: 100 $",
        "Income: 150 $",
        "Net Balance: 50 $",
    ]
    assert document.pages[0].lines[0].size == 24
    assert [line.y for line in document.pages[0].lines] == [50, 90, 120, 150, 180, 210]


def test_trip_summary_handles_missing_fields():
    texts = build_trip_summary(Trip()).texts()
    assert "Location: Unknown Location" in texts
    assert "Date: Unknown Date" in texts


def test_render_pdf_bytes():
    payload = render_pdf(build_full_report(_trips(), now=NOW))
    assert payload.startswith(b"%PDF")
    assert len(payload) > 500


def test_summary_matches_dashboard_for_current_year():
    trips = _trips()[:2]
    texts = build_full_report(trips, now=NOW).texts()
    summary = analytics.dashboard_summary(trips, NOW)
    assert f"Net Balance: {format_amount(-summary.net_cost_this_year)}" in texts
    assert f"Total Expenses: {format_amount(summary.total_spent_this_year)}" in texts


def test_trip_rejects_infinite_amounts():
    with pytest.raises(ValueError):
        Trip(date=date(2025, 1, 1), fuel=float("inf"))


def test_reports_reject_non_finite_amounts():
    trip = Trip(date=date(2025, 1, 1), location_name="Pier", fuel=10)
    trip.fuel = float("inf")
    with pytest.raises(InvalidDataError):
        build_full_report([trip], now=NOW)
    with pytest.raises(InvalidDataError):
        build_trip_summary(trip)
