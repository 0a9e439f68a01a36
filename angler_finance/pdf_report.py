"""Page layout and PDF rendering for trip reports.

Reports are laid out first as a :class:`ReportDocument`, a list of pages
holding positioned text lines, and only then rendered to PDF bytes with
ReportLab.  Layout coordinates are measured in points from the top-left
corner of the page, with ``y`` growing downwards; :func:`render_pdf`
flips them into ReportLab's bottom-left origin.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from datetime import date
from io import BytesIO
from typing import List, Optional, Sequence

from reportlab.pdfgen import canvas

from . import analytics
from .config import PAGE_HEIGHT, PAGE_WIDTH
from .errors import InvalidDataError, NoDataError
from .formatting import CurrencySetting, format_amount
from .models import Trip

MARGIN_X = 50
TOP_Y = 50
PAGE_BREAK_Y = 750

TITLE_FONT = "Helvetica-Bold"
HEADING_FONT = "Helvetica-Bold"
BODY_FONT = "Helvetica"


@dataclass(frozen=True)
class TextLine:
    text: str
    x: float
    y: float
    font: str
    size: float


@dataclass
class ReportPage:
    lines: List[TextLine] = field(default_factory=list)

    def texts(self) -> List[str]:
        return [line.text for line in self.lines]


@dataclass
class ReportDocument:
    title: str
    pages: List[ReportPage] = field(default_factory=list)
    width: float = PAGE_WIDTH
    height: float = PAGE_HEIGHT

    def texts(self) -> List[str]:
        return [text for page in self.pages for text in page.texts()]


class _Cursor:
    """Tracks the write position and starts new pages on demand."""

    def __init__(self, document: ReportDocument) -> None:
        self.document = document
        self.y: float = TOP_Y
        self.new_page()

    def new_page(self) -> None:
        self.document.pages.append(ReportPage())
        self.y = TOP_Y

    def write(self, text: str, font: str, size: float, advance: float) -> None:
        self.document.pages[-1].lines.append(TextLine(text, MARGIN_X, self.y, font, size))
        self.y += advance


def _check_amounts(trips: Sequence[Trip]) -> None:
    for trip in trips:
        for name, value in (
            ("total_expenses", trip.total_expenses),
            ("income_from_sale", trip.income_from_sale),
        ):
            if not math.isfinite(value):
                raise InvalidDataError(f"{name} of trip {trip.id} is not a finite number: {value!r}")


def trip_line(trip: Trip, currency: Optional[CurrencySetting] = None) -> str:
    return f"{trip.formatted_date} - {trip.location_display_name} - {format_amount(trip.net_balance, currency)}"


def build_full_report(
    trips: Sequence[Trip],
    currency: Optional[CurrencySetting] = None,
    now: Optional[date] = None,
) -> ReportDocument:
    """Lay out the all-trips report.

    Page one opens with the title and a summary block; the trip list
    follows and spills onto further pages whenever the cursor passes
    the bottom threshold.  Summary figures come from
    :func:`analytics.collection_totals` so they match the dashboard.

    Raises:
        NoDataError: if ``trips`` is empty
    """
    if not trips:
        raise NoDataError()
    _check_amounts(trips)
    year = (now or date.today()).year
    totals = analytics.collection_totals(trips)

    document = ReportDocument(title=f"My Fishing Finances {year}")
    cursor = _Cursor(document)
    cursor.write(document.title, TITLE_FONT, 28, 50)

    cursor.write("Summary", HEADING_FONT, 18, 30)
    for detail in (
        f"Total Trips: {totals.trip_count}",
        f"Total Expenses: {format_amount(totals.total_expenses, currency)}",
        f"Total Income: {format_amount(totals.total_income, currency)}",
        f"Net Balance: {format_amount(totals.net_balance, currency)}",
    ):
        cursor.write(detail, BODY_FONT, 14, 25)
    cursor.y += 20

    cursor.write("All Trips", HEADING_FONT, 18, 30)
    for trip in analytics.sort_trips_by_date(trips):
        if cursor.y > PAGE_BREAK_Y:
            cursor.new_page()
        cursor.write(trip_line(trip, currency), BODY_FONT, 14, 20)
    return document


def build_trip_summary(trip: Trip, currency: Optional[CurrencySetting] = None) -> ReportDocument:
    """Lay out the one-page summary for a single trip."""
    _check_amounts([trip])
    document = ReportDocument(title="Fishing Trip Summary")
    cursor = _Cursor(document)
    cursor.write(document.title, TITLE_FONT, 24, 40)
    for detail in (
        f"Location: {trip.location_display_name}",
        f"Date: {trip.formatted_date}",
        f"Total Expenses: {format_amount(trip.total_expenses, currency)}",
        f"Income: {format_amount(trip.income_from_sale, currency)}",
        f"Net Balance: {format_amount(trip.net_balance, currency)}",
    ):
        cursor.write(detail, BODY_FONT, 16, 30)
    return document


def render_pdf(document: ReportDocument) -> bytes:
    """Render a laid-out document to PDF bytes."""
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(document.width, document.height))
    pdf.setTitle(document.title)
    for page in document.pages:
        for line in page.lines:
            pdf.setFont(line.font, line.size)
            # layout y is the top of the text; ReportLab wants the baseline
            pdf.drawString(line.x, document.height - line.y - line.size, line.text)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()
