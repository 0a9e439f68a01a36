"""Record types for fishing trips, gear purchases and budget settings.

Trips and gear items are plain dataclasses; the derived figures
(``total_expenses``, ``net_balance`` and the display names) are computed
on read and never stored.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple

UNKNOWN_LOCATION = "Unknown Location"
UNNAMED_ITEM = "Unnamed Item"
UNKNOWN_DATE = "Unknown Date"

WEATHER_CONDITIONS: Tuple[str, ...] = ("Sunny", "Cloudy", "Rainy", "Windy", "Foggy", "Snowy")

EXPENSE_FIELDS: Tuple[str, ...] = ("fuel", "bait", "license", "boat", "food", "other_expenses")


def new_identifier() -> str:
    return str(uuid.uuid4())


def local_date(value: Optional[date]) -> Optional[date]:
    """Return the local calendar date for ``value``.

    Aware datetimes are converted to the local timezone first so that
    year and month boundaries follow the device calendar.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def format_medium_date(value: Optional[date]) -> str:
    """Render a date like ``Mar 1, 2024``."""
    day = local_date(value)
    if day is None:
        return UNKNOWN_DATE
    return f"{day:%b} {day.day}, {day.year}"


def _check_amount(name: str, value: float) -> float:
    number = float(value)
    if not math.isfinite(number) or number < 0:
        raise ValueError(f"{name} must be a finite non-negative amount, got {value!r}")
    return number


@dataclass
class Trip:
    """A single fishing outing."""

    date: Optional[date] = None
    location_name: Optional[str] = None
    fuel: float = 0.0
    bait: float = 0.0
    license: float = 0.0
    boat: float = 0.0
    food: float = 0.0
    other_expenses: float = 0.0
    income_from_sale: float = 0.0
    note: Optional[str] = None
    fish_caught: Optional[str] = None
    weather_condition: Optional[str] = None
    temperature: Optional[float] = None
    photo: Optional[bytes] = field(default=None, repr=False)
    id: str = field(default_factory=new_identifier)

    def __post_init__(self) -> None:
        for name in EXPENSE_FIELDS + ("income_from_sale",):
            setattr(self, name, _check_amount(name, getattr(self, name)))
        if self.temperature is not None:
            self.temperature = float(self.temperature)

    @property
    def total_expenses(self) -> float:
        return self.fuel + self.bait + self.license + self.boat + self.food + self.other_expenses

    @property
    def net_balance(self) -> float:
        return self.income_from_sale - self.total_expenses

    @property
    def location_display_name(self) -> str:
        if self.location_name and self.location_name.strip():
            return self.location_name
        return UNKNOWN_LOCATION

    @property
    def formatted_date(self) -> str:
        return format_medium_date(self.date)

    @property
    def calendar_date(self) -> Optional[date]:
        return local_date(self.date)


@dataclass
class GearItem:
    """A purchased piece of equipment."""

    name: Optional[str] = None
    price: float = 0.0
    purchase_date: Optional[date] = None
    photo: Optional[bytes] = field(default=None, repr=False)
    id: str = field(default_factory=new_identifier)

    def __post_init__(self) -> None:
        self.price = _check_amount("price", self.price)

    @property
    def item_display_name(self) -> str:
        if self.name and self.name.strip():
            return self.name
        return UNNAMED_ITEM

    @property
    def formatted_purchase_date(self) -> str:
        return format_medium_date(self.purchase_date)


@dataclass(frozen=True)
class BudgetSettings:
    """User thresholds; 0 means the threshold is not set."""

    monthly_budget: float = 0.0
    yearly_budget: float = 0.0
    income_goal: float = 0.0

    def __post_init__(self) -> None:
        for name in ("monthly_budget", "yearly_budget", "income_goal"):
            object.__setattr__(self, name, _check_amount(name, getattr(self, name)))


@dataclass(frozen=True)
class MonthlyBucket:
    month: str
    expenses: float
    income: float

    @property
    def net(self) -> float:
        return self.income - self.expenses
