"""Form input parsing for trips and gear items.

The parsers take the raw strings typed into the trip and gear forms,
check every field, and only then build the record.  The first failing
field raises :class:`~angler_finance.errors.ValidationError` with a
message naming it, so a rejected form never yields a half-filled record.
"""

from __future__ import annotations

import math
from dataclasses import replace
from datetime import date
from typing import Optional, Tuple

from .errors import ValidationError
from .models import WEATHER_CONDITIONS, GearItem, Trip

# (Trip attribute, label shown to the user)
EXPENSE_INPUTS: Tuple[Tuple[str, str], ...] = (
    ('fuel', 'Fuel'),
    ('bait', 'Bait & Lures'),
    ('license', 'License/Permit'),
    ('boat', 'Boat Rental'),
    ('food', 'Food & Drinks'),
    ('other_expenses', 'Other Expenses'),
)


def parse_number(text: Optional[str]) -> Optional[float]:
    """Parse a finite decimal number, returning ``None`` when it is not one."""
    if text is None:
        return None
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _amount(field: str, label: str, text: Optional[str]) -> float:
    if not text or not text.strip():
        return 0.0
    value = parse_number(text)
    if value is None:
        raise ValidationError(field, f"Please enter a valid number for {label}")
    if value < 0:
        raise ValidationError(field, f"{label} cannot be negative")
    return value


def _optional_text(text: Optional[str]) -> Optional[str]:
    return text if text else None


def parse_trip_form(
    *,
    location: str,
    trip_date: Optional[date],
    fuel: str = '',
    bait: str = '',
    license: str = '',
    boat: str = '',
    food: str = '',
    other_expenses: str = '',
    income: str = '',
    temperature: str = '',
    note: str = '',
    fish_caught: str = '',
    weather: str = '',
    photo: Optional[bytes] = None,
    existing: Optional[Trip] = None,
) -> Trip:
    """Validate trip form input and build the trip to save.

    When ``existing`` is given its identifier is kept and a photo is
    only replaced if a new one was picked.
    """
    if not location or not location.strip():
        raise ValidationError('location', "Please enter a location for this trip")

    raw_expenses = {
        'fuel': fuel,
        'bait': bait,
        'license': license,
        'boat': boat,
        'food': food,
        'other_expenses': other_expenses,
    }
    expenses = {name: _amount(name, label, raw_expenses[name]) for name, label in EXPENSE_INPUTS}

    income_value = 0.0
    if income and income.strip():
        parsed = parse_number(income)
        if parsed is None:
            raise ValidationError('income_from_sale', "Please enter a valid number for income")
        if parsed < 0:
            raise ValidationError('income_from_sale', "Income cannot be negative")
        income_value = parsed

    temperature_value = None
    if temperature and temperature.strip():
        # below-freezing readings are valid
        temperature_value = parse_number(temperature)
        if temperature_value is None:
            raise ValidationError('temperature', "Please enter a valid temperature")

    if weather and weather not in WEATHER_CONDITIONS:
        raise ValidationError('weather_condition', f"Unknown weather condition: {weather}")

    values = dict(
        date=trip_date,
        location_name=location,
        income_from_sale=income_value,
        note=_optional_text(note),
        fish_caught=_optional_text(fish_caught),
        weather_condition=_optional_text(weather),
        temperature=temperature_value,
        **expenses,
    )
    if existing is None:
        return Trip(photo=photo, **values)
    return replace(existing, photo=photo if photo is not None else existing.photo, **values)


def parse_gear_form(
    *,
    name: str,
    price: str,
    purchase_date: Optional[date],
    photo: Optional[bytes] = None,
    existing: Optional[GearItem] = None,
) -> GearItem:
    """Validate gear form input and build the item to save."""
    if not name or not name.strip():
        raise ValidationError('name', "Please enter a name for this gear item")
    if not price or not price.strip():
        raise ValidationError('price', "Please enter a price for this gear item")
    value = parse_number(price)
    if value is None:
        raise ValidationError('price', "Please enter a valid price")
    if value < 0:
        raise ValidationError('price', "Price cannot be negative")

    values = dict(name=name.strip(), price=value, purchase_date=purchase_date)
    if existing is None:
        return GearItem(photo=photo, **values)
    return replace(existing, photo=photo if photo is not None else existing.photo, **values)
