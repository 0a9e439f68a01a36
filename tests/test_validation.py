from datetime import date

import pytest

from angler_finance.errors import ValidationError
from angler_finance.models import GearItem, Trip
from angler_finance.validation import parse_gear_form, parse_number, parse_trip_form


def test_parse_number():
    assert parse_number(' 12.5 ') == 12.5
    assert parse_number('abc') is None
    assert parse_number('nan') is None
    assert parse_number('inf') is None
    assert parse_number(None) is None


def test_trip_form_builds_trip():
    trip = parse_trip_form(
        location='Lake Tahoe',
        trip_date=date(2024, 3, 1),
        fuel='60',
        bait='40',
        income='150',
        temperature='-2',
        fish_caught='Bass, Trout',
        weather='Sunny',
    )
    assert trip.total_expenses == 100
    assert trip.net_balance == 50
    assert trip.temperature == -2.0
    assert trip.note is None
    assert trip.weather_condition == 'Sunny'


def test_blank_amounts_default_to_zero():
    trip = parse_trip_form(location='Pier', trip_date=None, fuel='  ')
    assert trip.total_expenses == 0
    assert trip.temperature is None


def test_trip_form_requires_location():
    with pytest.raises(ValidationError) as excinfo:
        parse_trip_form(location='   ', trip_date=date(2024, 1, 1))
    assert excinfo.value.field == 'location'
    assert excinfo.value.message == 'Please enter a location for this trip'


@pytest.mark.parametrize(
    'kwargs, field, message',
    [
        ({'fuel': 'ten'}, 'fuel', 'Please enter a valid number for Fuel'),
        ({'bait': '-1'}, 'bait', 'Bait & Lures cannot be negative'),
        ({'income': 'lots'}, 'income_from_sale', 'Please enter a valid number for income'),
        ({'income': '-5'}, 'income_from_sale', 'Income cannot be negative'),
        ({'temperature': 'warm'}, 'temperature', 'Please enter a valid temperature'),
        ({'weather': 'Hail'}, 'weather_condition', 'Unknown weather condition: Hail'),
    ],
)
def test_trip_form_rejections(kwargs, field, message):
    with pytest.raises(ValidationError) as excinfo:
        parse_trip_form(location='Pier', trip_date=date(2024, 1, 1), **kwargs)
    assert excinfo.value.field == field
    assert str(excinfo.value) == message


def test_editing_keeps_identifier_and_photo():
    existing = Trip(date=date(2024, 1, 1), location_name='Pier', fuel=5, photo=b'old')
    updated = parse_trip_form(location='Dock', trip_date=date(2024, 1, 2), fuel='7', existing=existing)
    assert updated.id == existing.id
    assert updated.photo == b'old'
    assert updated.location_name == 'Dock'
    assert existing.location_name == 'Pier'

    replaced = parse_trip_form(location='Dock', trip_date=None, photo=b'new', existing=existing)
    assert replaced.photo == b'new'


def test_gear_form():
    item = parse_gear_form(name=' Rod ', price='120.50', purchase_date=date(2024, 2, 1))
    assert item.name == 'Rod'
    assert item.price == 120.5


@pytest.mark.parametrize(
    'name, price, message',
    [
        ('', '10', 'Please enter a name for this gear item'),
        ('Rod', '', 'Please enter a price for this gear item'),
        ('Rod', 'cheap', 'Please enter a valid price'),
        ('Rod', '-3', 'Price cannot be negative'),
    ],
)
def test_gear_form_rejections(name, price, message):
    with pytest.raises(ValidationError, match=message):
        parse_gear_form(name=name, price=price, purchase_date=None)


def test_gear_form_edit_keeps_identifier():
    existing = GearItem(name='Rod', price=10, photo=b'img')
    updated = parse_gear_form(name='Rod v2', price='12', purchase_date=None, existing=existing)
    assert updated.id == existing.id
    assert updated.photo == b'img'
