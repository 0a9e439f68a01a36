import json

from angler_finance.formatting import Currency, CurrencySetting
from angler_finance.models import BudgetSettings
from angler_finance.settings_storage import AppSettings, DEFAULT_SETTINGS, load_raw_settings, load_settings, save_settings


def test_missing_file_gives_defaults(tmp_path):
    path = tmp_path / 'settings.json'
    assert load_raw_settings(path) == DEFAULT_SETTINGS
    settings = load_settings(path)
    assert settings.currency.currency is Currency.USD
    assert settings.budgets == BudgetSettings()


def test_save_and_load_roundtrip(tmp_path):
    path = tmp_path / 'nested' / 'settings.json'
    settings = AppSettings(
        currency=CurrencySetting(Currency.CUSTOM, 'kr'),
        budgets=BudgetSettings(monthly_budget=200, yearly_budget=2000, income_goal=500),
    )
    save_settings(settings, path)
    assert load_settings(path) == settings
    stored = json.loads(path.read_text(encoding='utf-8'))
    assert stored['selected_currency'] == 'Custom'


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / 'settings.json'
    path.write_text('{not json', encoding='utf-8')
    assert load_settings(path) == AppSettings()


def test_invalid_values_are_sanitized(tmp_path):
    path = tmp_path / 'settings.json'
    path.write_text(json.dumps({
        'selected_currency': 'DOGE',
        'monthly_budget': -50,
        'yearly_budget': 'lots',
        'income_goal': 300,
        'unrelated': True,
    }), encoding='utf-8')
    settings = load_settings(path)
    assert settings.currency.currency is Currency.USD
    assert settings.budgets == BudgetSettings(income_goal=300)
    assert 'unrelated' not in load_raw_settings(path)
