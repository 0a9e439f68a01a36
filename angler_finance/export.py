"""CSV and PDF export of trip records.

Exports are written to the export directory (the system temp directory
by default) under timestamped names.  The consumer shares or saves the
file and then calls :func:`remove_export`; anything left behind is swept
by :func:`cleanup_old_exports` once it is more than a day old.

The CSV format deliberately avoids quoting: commas inside free-text
cells are replaced with semicolons and line breaks with spaces, so every
row splits into exactly 15 fields on a plain comma split.
"""

from __future__ import annotations

import logging
import numbers
import threading
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np

from . import analytics
from .config import EXPORT_MAX_AGE, EXPORT_SUFFIXES, get_export_dir
from .errors import InvalidDataError, NoDataError, WriteFailedError
from .formatting import CurrencySetting
from .models import Trip
from .pdf_report import build_full_report, build_trip_summary, render_pdf

logger = logging.getLogger(__name__)

CSV_HEADER = [
    'Date',
    'Location',
    'Fuel',
    'Bait',
    'License',
    'Boat Rental',
    'Food',
    'Other Expenses',
    'Total Expenses',
    'Income',
    'Net Balance',
    'Fish Caught',
    'Weather',
    'Temperature',
    'Notes',
]

CSV_PREFIX = 'Fishing_Trips_Export_'
FULL_PDF_PREFIX = 'My_Fishing_Finances_'
TRIP_PDF_PREFIX = 'trip_summary_'
EXPORT_PREFIXES = (CSV_PREFIX, FULL_PDF_PREFIX, TRIP_PDF_PREFIX)


# ---------------------------------------------------------------------------
# CSV serialization
# ---------------------------------------------------------------------------


def _text_cell(value: Optional[str]) -> str:
    if not value:
        return ''
    text = value.replace('\r\n', ' ').replace('\n', ' ').replace('\r', ' ')
    return text.replace(',', ';')


def _number_cell(value: object, name: str, trip: Trip, signed: bool = False) -> str:
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not np.isfinite(value):
        raise InvalidDataError(f"{name} of trip {trip.id} is not a finite number: {value!r}")
    if not signed and value < 0:
        raise InvalidDataError(f"{name} of trip {trip.id} is negative: {value!r}")
    return str(float(value))


def csv_row(trip: Trip) -> List[str]:
    """Serialize one dated trip into the 15 export cells."""
    amounts = [
        ('fuel', trip.fuel),
        ('bait', trip.bait),
        ('license', trip.license),
        ('boat', trip.boat),
        ('food', trip.food),
        ('other_expenses', trip.other_expenses),
        ('total_expenses', trip.total_expenses),
        ('income_from_sale', trip.income_from_sale),
    ]
    temperature = ''
    if trip.temperature is not None:
        temperature = _number_cell(trip.temperature, 'temperature', trip, signed=True)
    return [
        trip.calendar_date.isoformat(),
        _text_cell(trip.location_display_name),
        *(_number_cell(value, name, trip) for name, value in amounts),
        _number_cell(trip.net_balance, 'net_balance', trip, signed=True),
        _text_cell(trip.fish_caught),
        _text_cell(trip.weather_condition),
        temperature,
        _text_cell(trip.note),
    ]


def build_csv(trips: Sequence[Trip]) -> str:
    """Render trips as CSV text, newest first.

    Undated trips are skipped with a warning.

    Raises:
        NoDataError: if there is nothing to export
        InvalidDataError: if a numeric field is not a finite number
    """
    if not trips:
        logger.warning("No trips to export")
        raise NoDataError()

    lines = [','.join(CSV_HEADER)]
    for trip in analytics.sort_trips_by_date(trips):
        if trip.calendar_date is None:
            logger.warning("Trip %s missing date, skipping", trip.id)
            continue
        lines.append(','.join(csv_row(trip)))

    if len(lines) == 1:
        logger.warning("No dated trips to export")
        raise NoDataError()
    return '\n'.join(lines) + '\n'


# ---------------------------------------------------------------------------
# Artifact files
# ---------------------------------------------------------------------------


def export_filename(prefix: str, suffix: str, now: Optional[datetime] = None) -> str:
    """Build a timestamped artifact name such as ``trip_summary_1700000000.pdf``."""
    timestamp = int((now or datetime.now()).timestamp())
    return f"{prefix}{timestamp}{suffix}"


def _write_artifact(path: Path, payload: bytes) -> Path:
    tmp_path = path.with_name(path.name + '.tmp')
    try:
        tmp_path.write_bytes(payload)
        tmp_path.replace(path)
    except OSError as exc:
        logger.error("Failed to write export file %s: %s", path.name, exc)
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError as cleanup_exc:
            logger.debug("Could not remove partial file %s: %s", tmp_path.name, cleanup_exc)
        raise WriteFailedError(str(exc)) from exc
    return path


def _resolve_dir(export_dir: Optional[Path]) -> Path:
    if export_dir is None:
        try:
            return get_export_dir()
        except OSError as exc:
            raise WriteFailedError(str(exc)) from exc
    return Path(export_dir)


def export_csv(
    trips: Sequence[Trip],
    export_dir: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> Path:
    """Write all trips to ``Fishing_Trips_Export_<timestamp>.csv``."""
    logger.info("Starting CSV export")
    target_dir = _resolve_dir(export_dir)
    cleanup_old_exports(target_dir, now=now)
    logger.debug("Exporting %d trips to CSV", len(trips))

    text = build_csv(trips)
    path = _write_artifact(target_dir / export_filename(CSV_PREFIX, '.csv', now), text.encode('utf-8'))
    logger.info("CSV export completed successfully: %s", path.name)
    return path


def export_full_pdf(
    trips: Sequence[Trip],
    currency: Optional[CurrencySetting] = None,
    export_dir: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> Path:
    """Write the all-trips report to ``My_Fishing_Finances_<timestamp>.pdf``."""
    logger.info("Starting PDF export")
    target_dir = _resolve_dir(export_dir)
    cleanup_old_exports(target_dir, now=now)

    if not trips:
        logger.warning("No trips to export")
        raise NoDataError()
    logger.debug("Exporting %d trips to PDF", len(trips))
    document = build_full_report(trips, currency, now=(now or datetime.now()).date())
    path = _write_artifact(target_dir / export_filename(FULL_PDF_PREFIX, '.pdf', now), render_pdf(document))
    logger.info("PDF export completed successfully: %s", path.name)
    return path


def export_trip_pdf(
    trip: Trip,
    currency: Optional[CurrencySetting] = None,
    export_dir: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> Path:
    """Write a single-trip summary to ``trip_summary_<timestamp>.pdf``."""
    logger.info("Generating PDF for trip: %s", trip.location_display_name)
    target_dir = _resolve_dir(export_dir)
    document = build_trip_summary(trip, currency)
    path = _write_artifact(target_dir / export_filename(TRIP_PDF_PREFIX, '.pdf', now), render_pdf(document))
    logger.info("PDF generated successfully: %s", path.name)
    return path


# ---------------------------------------------------------------------------
# Cleanup
# ---------------------------------------------------------------------------


def remove_export(path: Path) -> bool:
    """Delete an artifact once the consumer is done with it."""
    try:
        Path(path).unlink()
    except OSError as exc:
        logger.warning("Failed to cleanup temporary file %s: %s", Path(path).name, exc)
        return False
    logger.debug("Cleaned up temporary export file: %s", Path(path).name)
    return True


def _is_export_artifact(path: Path) -> bool:
    return path.suffix in EXPORT_SUFFIXES and path.name.startswith(EXPORT_PREFIXES)


def cleanup_old_exports(export_dir: Optional[Path] = None, now: Optional[datetime] = None) -> int:
    """Delete export artifacts older than a day.

    Failures are logged and never raised.  Returns the number of files
    removed.
    """
    cutoff = (now or datetime.now()).timestamp() - EXPORT_MAX_AGE.total_seconds()
    removed = 0
    try:
        target_dir = Path(export_dir) if export_dir is not None else get_export_dir()
        candidates = [path for path in target_dir.iterdir() if _is_export_artifact(path)]
    except OSError as exc:
        logger.warning("Failed to cleanup old export files: %s", exc)
        return 0

    for path in candidates:
        try:
            if path.stat().st_mtime < cutoff:
                path.unlink()
                removed += 1
                logger.debug("Cleaned up old export file: %s", path.name)
        except OSError as exc:
            logger.warning("Failed to remove old export file %s: %s", path.name, exc)
    return removed


def cleanup_old_exports_in_background(
    export_dir: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> threading.Thread:
    """Run :func:`cleanup_old_exports` on a daemon thread and return it."""
    worker = threading.Thread(
        target=cleanup_old_exports,
        args=(export_dir, now),
        name='angler-export-cleanup',
        daemon=True,
    )
    worker.start()
    return worker
