"""Trip statistics and aggregation.

This module contains pure functions that turn a list of
:class:`~angler_finance.models.Trip` records into the figures shown on
the dashboard, the statistics view, the budget screen and in exports.
Nothing here touches the record store; callers fetch trips and pass
them in together with the current date, which keeps every function
deterministic under test.

Grouping is done with pandas.  Trips are flattened into a small frame by
:func:`trips_frame` with one row per trip and the calendar keys
(``year`` and the ``YYYY-MM`` ``month`` string) precomputed, so undated
trips simply carry missing keys and drop out of any date-bucketed
aggregation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .models import GearItem, MonthlyBucket, Trip

FRAME_COLUMNS = [
    'year',
    'month_number',
    'month',
    'location',
    'total_expenses',
    'income',
    'net_balance',
]

LabelExtractor = Callable[[Trip], Iterable[str]]


class TripFilter(str, Enum):
    ALL = "All"
    PROFITABLE = "Profitable"
    LOSS = "Loss"
    THIS_MONTH = "This Month"
    THIS_YEAR = "This Year"


class TripSort(str, Enum):
    DATE = "Date"
    PROFIT = "Profit"
    LOCATION = "Location"


@dataclass(frozen=True)
class TripTotals:
    trip_count: int
    total_expenses: float
    total_income: float
    net_balance: float


@dataclass
class DashboardSummary:
    total_spent_this_year: float
    total_earned_this_year: float
    net_cost_this_year: float
    best_profit_trip: Optional[Trip]
    recent_trips: List[Trip] = field(default_factory=list)


@dataclass
class TripStatistics:
    """Everything the statistics view displays, computed in one pass."""

    monthly_data: List[MonthlyBucket]
    top_expensive_locations: List[Tuple[str, float]]
    top_profitable_locations: List[Tuple[str, float]]
    average_cost_per_trip: float
    trips_this_year: int
    year_comparison: Tuple[float, float]
    fish_statistics: List[Tuple[str, int]]
    weather_statistics: List[Tuple[str, int]]
    trip_count: int


# ---------------------------------------------------------------------------
# Frame construction
# ---------------------------------------------------------------------------


def trips_frame(trips: Sequence[Trip]) -> pd.DataFrame:
    """Flatten trips into a DataFrame with one row per trip."""
    rows = []
    for trip in trips:
        day = trip.calendar_date
        rows.append({
            'year': day.year if day else None,
            'month_number': day.month if day else None,
            'month': f"{day.year:04d}-{day.month:02d}" if day else None,
            'location': trip.location_display_name,
            'total_expenses': trip.total_expenses,
            'income': trip.income_from_sale,
            'net_balance': trip.net_balance,
        })
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def _in_year(frame: pd.DataFrame, year: int) -> pd.DataFrame:
    return frame[frame['year'] == year]


def _in_month(frame: pd.DataFrame, year: int, month: int) -> pd.DataFrame:
    return frame[(frame['year'] == year) & (frame['month_number'] == month)]


# ---------------------------------------------------------------------------
# Time series and period totals
# ---------------------------------------------------------------------------


def monthly_series(trips: Sequence[Trip]) -> List[MonthlyBucket]:
    """Sum expenses and income per calendar month, oldest month first.

    Undated trips are left out.  ``YYYY-MM`` keys sort chronologically
    as plain strings.
    """
    frame = trips_frame(trips)
    dated = frame.dropna(subset=['month'])
    if dated.empty:
        return []
    grouped = dated.groupby('month', sort=True)[['total_expenses', 'income']].sum()
    return [
        MonthlyBucket(month=str(month), expenses=float(row['total_expenses']), income=float(row['income']))
        for month, row in grouped.iterrows()
    ]


def expenses_in_year(trips: Sequence[Trip], year: int) -> float:
    return float(_in_year(trips_frame(trips), year)['total_expenses'].sum())


def income_in_year(trips: Sequence[Trip], year: int) -> float:
    return float(_in_year(trips_frame(trips), year)['income'].sum())


def expenses_in_month(trips: Sequence[Trip], year: int, month: int) -> float:
    return float(_in_month(trips_frame(trips), year, month)['total_expenses'].sum())


def trip_count_in_year(trips: Sequence[Trip], year: int) -> int:
    """Count trips whose calendar date falls in ``year``."""
    return int((trips_frame(trips)['year'] == year).sum())


def year_over_year_net_balance(trips: Sequence[Trip], year: int) -> Tuple[float, float]:
    """Return the net balance totals for ``year`` and the year before it."""
    frame = trips_frame(trips)
    current = float(_in_year(frame, year)['net_balance'].sum())
    prior = float(_in_year(frame, year - 1)['net_balance'].sum())
    return current, prior


def average_expense_per_trip(trips: Sequence[Trip]) -> float:
    """Mean trip cost, 0 when there are no trips."""
    if not trips:
        return 0.0
    return float(trips_frame(trips)['total_expenses'].mean())


def collection_totals(trips: Sequence[Trip]) -> TripTotals:
    """Totals across every trip, dated or not.

    The full PDF report prints these figures, so they must come from
    here rather than being summed again at the call site.
    """
    frame = trips_frame(trips)
    expenses = float(frame['total_expenses'].sum())
    income = float(frame['income'].sum())
    return TripTotals(
        trip_count=len(frame),
        total_expenses=expenses,
        total_income=income,
        net_balance=income - expenses,
    )


# ---------------------------------------------------------------------------
# Rankings
# ---------------------------------------------------------------------------


def _rank_locations(trips: Sequence[Trip], column: str, limit: Optional[int]) -> List[Tuple[str, float]]:
    frame = trips_frame(trips)
    if frame.empty:
        return []
    grouped = frame.groupby('location', sort=False)[column].sum().reset_index()
    ranked = grouped.sort_values([column, 'location'], ascending=[False, True], kind='mergesort')
    if limit is not None:
        ranked = ranked.head(limit)
    return [(str(name), float(value)) for name, value in zip(ranked['location'], ranked[column])]


def top_locations_by_expense(trips: Sequence[Trip], limit: Optional[int] = None) -> List[Tuple[str, float]]:
    """Locations ordered by total spend, highest first; ties by name."""
    return _rank_locations(trips, 'total_expenses', limit)


def top_locations_by_profit(trips: Sequence[Trip], limit: Optional[int] = None) -> List[Tuple[str, float]]:
    """Locations ordered by summed net balance, highest first; ties by name."""
    return _rank_locations(trips, 'net_balance', limit)


# ---------------------------------------------------------------------------
# Categorical tallies
# ---------------------------------------------------------------------------


def fish_labels(trip: Trip) -> List[str]:
    """Split the fish-caught text on commas into trimmed, non-empty names."""
    if not trip.fish_caught:
        return []
    names = (part.strip() for part in trip.fish_caught.split(','))
    return [name for name in names if name]


def weather_labels(trip: Trip) -> List[str]:
    return [trip.weather_condition] if trip.weather_condition else []


def categorical_tally(trips: Sequence[Trip], extractor: LabelExtractor) -> List[Tuple[str, int]]:
    """Count labels produced by ``extractor`` across all trips.

    Every label occurrence counts, including repeats within one trip.
    The result is ordered by count descending, then label ascending.
    """
    labels = [label for trip in trips for label in extractor(trip)]
    if not labels:
        return []
    counts = (
        pd.Series(labels, dtype=object)
        .value_counts()
        .rename_axis('label')
        .reset_index(name='count')
    )
    counts = counts.sort_values(['count', 'label'], ascending=[False, True], kind='mergesort')
    return [(str(label), int(count)) for label, count in zip(counts['label'], counts['count'])]


def fish_tally(trips: Sequence[Trip]) -> List[Tuple[str, int]]:
    return categorical_tally(trips, fish_labels)


def weather_tally(trips: Sequence[Trip]) -> List[Tuple[str, int]]:
    return categorical_tally(trips, weather_labels)


# ---------------------------------------------------------------------------
# Dashboard and statistics bundles
# ---------------------------------------------------------------------------


def sort_trips_by_date(trips: Iterable[Trip], descending: bool = True) -> List[Trip]:
    """Order trips by date; undated trips always go last."""
    trips = list(trips)
    dated = [trip for trip in trips if trip.calendar_date is not None]
    undated = [trip for trip in trips if trip.calendar_date is None]
    dated.sort(key=lambda trip: trip.calendar_date, reverse=descending)
    return dated + undated


def _matches_search(trip: Trip, needle: str) -> bool:
    if needle in trip.location_display_name.casefold():
        return True
    return bool(trip.note) and needle in trip.note.casefold()


def filter_trips(
    trips: Iterable[Trip],
    now: date,
    search: str = "",
    filter_option: TripFilter = TripFilter.ALL,
) -> List[Trip]:
    """Apply the trip list search box and filter choice.

    ``search`` matches the location display name or the note, ignoring
    case.  The month and year filters compare calendar components with
    ``now``; undated trips never match them.
    """
    result = list(trips)
    needle = search.strip().casefold()
    if needle:
        result = [trip for trip in result if _matches_search(trip, needle)]

    option = TripFilter(filter_option)
    if option is TripFilter.PROFITABLE:
        result = [trip for trip in result if trip.net_balance > 0]
    elif option is TripFilter.LOSS:
        result = [trip for trip in result if trip.net_balance < 0]
    elif option is TripFilter.THIS_MONTH:
        result = [
            trip for trip in result
            if trip.calendar_date is not None
            and (trip.calendar_date.year, trip.calendar_date.month) == (now.year, now.month)
        ]
    elif option is TripFilter.THIS_YEAR:
        result = [trip for trip in result if trip.calendar_date is not None and trip.calendar_date.year == now.year]
    return result


def sort_trips(trips: Iterable[Trip], sort_option: TripSort = TripSort.DATE) -> List[Trip]:
    """Order the trip list: newest first, most profitable first, or by location name."""
    option = TripSort(sort_option)
    if option is TripSort.PROFIT:
        return sorted(trips, key=lambda trip: trip.net_balance, reverse=True)
    if option is TripSort.LOCATION:
        return sorted(trips, key=lambda trip: trip.location_display_name)
    return sort_trips_by_date(trips)


def best_profit_trip(trips: Sequence[Trip]) -> Optional[Trip]:
    if not trips:
        return None
    return max(trips, key=lambda trip: trip.net_balance)


def dashboard_summary(trips: Sequence[Trip], now: date, recent: int = 5) -> DashboardSummary:
    """Headline figures for the current calendar year."""
    spent = expenses_in_year(trips, now.year)
    earned = income_in_year(trips, now.year)
    return DashboardSummary(
        total_spent_this_year=spent,
        total_earned_this_year=earned,
        net_cost_this_year=spent - earned,
        best_profit_trip=best_profit_trip(trips),
        recent_trips=sort_trips_by_date(trips)[:recent],
    )


def total_invested(gear_items: Sequence[GearItem]) -> float:
    """Sum of all gear purchase prices."""
    return float(sum(item.price for item in gear_items))


def compute_statistics(trips: Sequence[Trip], now: date, limit: int = 5) -> TripStatistics:
    return TripStatistics(
        monthly_data=monthly_series(trips),
        top_expensive_locations=top_locations_by_expense(trips, limit),
        top_profitable_locations=top_locations_by_profit(trips, limit),
        average_cost_per_trip=average_expense_per_trip(trips),
        trips_this_year=trip_count_in_year(trips, now.year),
        year_comparison=year_over_year_net_balance(trips, now.year),
        fish_statistics=fish_tally(trips),
        weather_statistics=weather_tally(trips),
        trip_count=len(trips),
    )
