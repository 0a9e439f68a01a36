from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Any, Iterator, List, Optional, Union

from .config import DB_PATH, ensure_data_directories
from .errors import FetchFailedError, SaveFailedError
from .models import GearItem, Trip, local_date

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;
PRAGMA synchronous=NORMAL;

CREATE TABLE IF NOT EXISTS trips (
    id TEXT PRIMARY KEY,
    trip_date TEXT,
    location_name TEXT,
    fuel REAL NOT NULL DEFAULT 0,
    bait REAL NOT NULL DEFAULT 0,
    license REAL NOT NULL DEFAULT 0,
    boat REAL NOT NULL DEFAULT 0,
    food REAL NOT NULL DEFAULT 0,
    other_expenses REAL NOT NULL DEFAULT 0,
    income_from_sale REAL NOT NULL DEFAULT 0,
    note TEXT,
    fish_caught TEXT,
    weather_condition TEXT,
    temperature REAL,
    photo BLOB
);

CREATE TABLE IF NOT EXISTS gear_items (
    id TEXT PRIMARY KEY,
    name TEXT,
    price REAL NOT NULL DEFAULT 0,
    purchase_date TEXT,
    photo BLOB
);

CREATE INDEX IF NOT EXISTS ix_trip_date ON trips (trip_date);
CREATE INDEX IF NOT EXISTS ix_gear_purchase_date ON gear_items (purchase_date);
"""

TRIP_COLUMNS = [
    'id', 'trip_date', 'location_name', 'fuel', 'bait', 'license', 'boat', 'food',
    'other_expenses', 'income_from_sale', 'note', 'fish_caught', 'weather_condition',
    'temperature', 'photo',
]
GEAR_COLUMNS = ['id', 'name', 'price', 'purchase_date', 'photo']

# Caller-facing sort keys mapped onto columns
TRIP_SORT_KEYS = {
    'date': 'trip_date',
    'location': 'location_name',
    'income': 'income_from_sale',
}
GEAR_SORT_KEYS = {
    'purchase_date': 'purchase_date',
    'name': 'name',
    'price': 'price',
}

PathLike = Union[str, Path]


def _resolve(db_path: Optional[PathLike]) -> str:
    if db_path is not None:
        return str(db_path)
    ensure_data_directories()
    return str(DB_PATH)


@contextmanager
def connect(db_path: Optional[PathLike] = None) -> Iterator[sqlite3.Connection]:
    conn = sqlite3.connect(_resolve(db_path))
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def init_db(db_path: Optional[PathLike] = None) -> None:
    with connect(db_path) as conn:
        conn.executescript(SCHEMA_SQL)
        conn.commit()
    logger.info("Record store ready")


def _to_iso_date(value: Optional[date]) -> Optional[str]:
    day = local_date(value)
    return day.isoformat() if day else None


def _from_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(value)


def _order_clause(sort_by: str, descending: bool, keys: dict) -> str:
    if sort_by not in keys:
        raise ValueError(f"Unsupported sort key '{sort_by}'. Expected one of {sorted(keys)}")
    # rowid keeps ties in insertion order
    direction = 'DESC' if descending else 'ASC'
    return f" ORDER BY {keys[sort_by]} {direction}, rowid {direction}"


def _row_to_trip(row: sqlite3.Row) -> Trip:
    return Trip(
        id=row['id'],
        date=_from_iso_date(row['trip_date']),
        location_name=row['location_name'],
        fuel=row['fuel'],
        bait=row['bait'],
        license=row['license'],
        boat=row['boat'],
        food=row['food'],
        other_expenses=row['other_expenses'],
        income_from_sale=row['income_from_sale'],
        note=row['note'],
        fish_caught=row['fish_caught'],
        weather_condition=row['weather_condition'],
        temperature=row['temperature'],
        photo=row['photo'],
    )


def _row_to_gear(row: sqlite3.Row) -> GearItem:
    return GearItem(
        id=row['id'],
        name=row['name'],
        price=row['price'],
        purchase_date=_from_iso_date(row['purchase_date']),
        photo=row['photo'],
    )


def fetch_trips(
    sort_by: str = 'date',
    descending: bool = True,
    db_path: Optional[PathLike] = None,
) -> List[Trip]:
    """Fetch every trip, newest first by default.

    Raises:
        FetchFailedError: if the store cannot be read or holds a corrupt row
    """
    sql = f"SELECT {', '.join(TRIP_COLUMNS)} FROM trips" + _order_clause(sort_by, descending, TRIP_SORT_KEYS)
    try:
        with connect(db_path) as conn:
            trips = [_row_to_trip(row) for row in conn.execute(sql).fetchall()]
    except (sqlite3.Error, OSError, ValueError) as exc:
        logger.error("Failed to fetch trips: %s", exc)
        raise FetchFailedError(str(exc)) from exc
    logger.debug("Fetched %d trips", len(trips))
    return trips


def fetch_gear_items(
    sort_by: str = 'purchase_date',
    descending: bool = True,
    db_path: Optional[PathLike] = None,
) -> List[GearItem]:
    sql = f"SELECT {', '.join(GEAR_COLUMNS)} FROM gear_items" + _order_clause(sort_by, descending, GEAR_SORT_KEYS)
    try:
        with connect(db_path) as conn:
            items = [_row_to_gear(row) for row in conn.execute(sql).fetchall()]
    except (sqlite3.Error, OSError, ValueError) as exc:
        logger.error("Failed to fetch gear items: %s", exc)
        raise FetchFailedError(str(exc)) from exc
    logger.debug("Fetched %d gear items", len(items))
    return items


def _upsert(table: str, columns: List[str], values: List[Any], db_path: Optional[PathLike]) -> None:
    placeholders = ', '.join('?' for _ in columns)
    updates = ', '.join(f"{column} = excluded.{column}" for column in columns if column != 'id')
    sql = (
        f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders}) "
        f"ON CONFLICT(id) DO UPDATE SET {updates}"
    )
    try:
        with connect(db_path) as conn:
            conn.execute(sql, values)
            conn.commit()
    except (sqlite3.Error, OSError) as exc:
        logger.error("Failed to save %s row: %s", table, exc)
        raise SaveFailedError(str(exc)) from exc


def save_trip(trip: Trip, db_path: Optional[PathLike] = None) -> None:
    """Insert a new trip or update the stored trip with the same id."""
    _upsert('trips', TRIP_COLUMNS, [
        trip.id,
        _to_iso_date(trip.date),
        trip.location_name,
        trip.fuel,
        trip.bait,
        trip.license,
        trip.boat,
        trip.food,
        trip.other_expenses,
        trip.income_from_sale,
        trip.note,
        trip.fish_caught,
        trip.weather_condition,
        trip.temperature,
        trip.photo,
    ], db_path)
    logger.debug("Saved trip %s", trip.id)


def save_gear_item(item: GearItem, db_path: Optional[PathLike] = None) -> None:
    _upsert('gear_items', GEAR_COLUMNS, [
        item.id,
        item.name,
        item.price,
        _to_iso_date(item.purchase_date),
        item.photo,
    ], db_path)
    logger.debug("Saved gear item %s", item.id)


def _delete(table: str, identifier: str, db_path: Optional[PathLike]) -> bool:
    try:
        with connect(db_path) as conn:
            cursor = conn.execute(f"DELETE FROM {table} WHERE id = ?", (identifier,))
            conn.commit()
            return cursor.rowcount > 0
    except (sqlite3.Error, OSError) as exc:
        logger.error("Failed to delete from %s: %s", table, exc)
        raise SaveFailedError(str(exc)) from exc


def delete_trip(trip: Trip, db_path: Optional[PathLike] = None) -> bool:
    """Delete a trip. Returns True if a row was removed."""
    return _delete('trips', trip.id, db_path)


def delete_gear_item(item: GearItem, db_path: Optional[PathLike] = None) -> bool:
    return _delete('gear_items', item.id, db_path)


def clear_database(db_path: Optional[PathLike] = None) -> bool:
    """Remove all trips and gear items. Returns True if successful."""
    try:
        with connect(db_path) as conn:
            conn.execute("DELETE FROM trips")
            conn.execute("DELETE FROM gear_items")
            conn.commit()
    except (sqlite3.Error, OSError) as exc:
        logger.error("Failed to clear database: %s", exc)
        raise SaveFailedError(str(exc)) from exc
    return True
