"""Memoized trip statistics.

The statistics view recomputes :class:`~angler_finance.analytics.TripStatistics`
only when the trip collection changes.  Changes are detected either from
a version counter supplied by the caller (for example bumped by the
record store after every save or delete) or, when no version is given,
from a content fingerprint of the trips.
"""

from __future__ import annotations

import hashlib
import threading
from datetime import date
from typing import Hashable, Optional, Sequence, Tuple

from . import analytics
from .config import TOP_N
from .models import Trip


def trips_fingerprint(trips: Sequence[Trip]) -> str:
    """Hash every field that feeds the statistics, in collection order."""
    digest = hashlib.sha256()
    for trip in trips:
        day = trip.calendar_date
        parts = (
            trip.id,
            day.isoformat() if day else '',
            trip.location_name or '',
            repr(trip.fuel),
            repr(trip.bait),
            repr(trip.license),
            repr(trip.boat),
            repr(trip.food),
            repr(trip.other_expenses),
            repr(trip.income_from_sale),
            trip.fish_caught or '',
            trip.weather_condition or '',
        )
        digest.update('\x1f'.join(parts).encode('utf-8'))
        digest.update(b'\x1e')
    return digest.hexdigest()


class StatisticsCache:
    """Holds the last computed statistics and the key they were built for.

    The key also includes the calendar year of ``now`` so that
    "this year" figures roll over at New Year without a data change.
    """

    def __init__(self, limit: int = TOP_N) -> None:
        self.limit = limit
        self._lock = threading.Lock()
        self._key: Optional[Tuple[Hashable, int]] = None
        self._stats: Optional[analytics.TripStatistics] = None
        self.computations = 0

    def get(
        self,
        trips: Sequence[Trip],
        now: date,
        version: Optional[Hashable] = None,
    ) -> analytics.TripStatistics:
        content_key = version if version is not None else trips_fingerprint(trips)
        key = (content_key, now.year)
        with self._lock:
            if self._stats is None or key != self._key:
                self._stats = analytics.compute_statistics(trips, now, self.limit)
                self._key = key
                self.computations += 1
            return self._stats

    def invalidate(self) -> None:
        with self._lock:
            self._key = None
            self._stats = None
