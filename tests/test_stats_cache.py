from datetime import date

from angler_finance.models import Trip
from angler_finance.stats_cache import StatisticsCache, trips_fingerprint


def _trips():
    return [
        Trip(date=date(2025, 1, 5), location_name='Pier', fuel=10, fish_caught='Bass'),
        Trip(date=date(2024, 8, 1), location_name='Dock', income_from_sale=20),
    ]


def test_cache_reuses_result_until_trips_change():
    cache = StatisticsCache()
    trips = _trips()
    first = cache.get(trips, date(2025, 6, 1))
    assert cache.get(trips, date(2025, 6, 2)) is first
    assert cache.computations == 1

    trips[0].fuel = 99
    refreshed = cache.get(trips, date(2025, 6, 2))
    assert cache.computations == 2
    assert refreshed.top_expensive_locations[0] == ('Pier', 99.0)


def test_cache_rolls_over_with_the_year():
    cache = StatisticsCache()
    trips = _trips()
    assert cache.get(trips, date(2025, 12, 31)).trips_this_year == 1
    assert cache.get(trips, date(2026, 1, 1)).trips_this_year == 0
    assert cache.computations == 2


def test_cache_with_explicit_version():
    cache = StatisticsCache()
    trips = _trips()
    cache.get(trips, date(2025, 6, 1), version=1)
    trips.append(Trip(date=date(2025, 2, 1), fuel=5))
    assert cache.get(trips, date(2025, 6, 1), version=1).trip_count == 2
    assert cache.get(trips, date(2025, 6, 1), version=2).trip_count == 3


def test_invalidate_forces_recompute():
    cache = StatisticsCache(limit=1)
    trips = _trips()
    cache.get(trips, date(2025, 6, 1))
    cache.invalidate()
    stats = cache.get(trips, date(2025, 6, 1))
    assert cache.computations == 2
    assert len(stats.top_profitable_locations) == 1


def test_fingerprint_tracks_content_and_order():
    trips = _trips()
    assert trips_fingerprint(trips) == trips_fingerprint(list(trips))
    assert trips_fingerprint(trips) != trips_fingerprint(list(reversed(trips)))
