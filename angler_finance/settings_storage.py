"""Lightweight persistent storage for currency and budget settings."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from .config import SETTINGS_PATH
from .formatting import CurrencySetting
from .models import BudgetSettings

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: Dict[str, Any] = {
    'selected_currency': 'USD',
    'custom_currency_symbol': '$',
    'monthly_budget': 0.0,
    'yearly_budget': 0.0,
    'income_goal': 0.0,
}


@dataclass(frozen=True)
class AppSettings:
    currency: CurrencySetting = field(default_factory=CurrencySetting)
    budgets: BudgetSettings = field(default_factory=BudgetSettings)


def _threshold(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if number > 0 else 0.0


def load_raw_settings(path: Path | None = None) -> Dict[str, Any]:
    target = path or SETTINGS_PATH
    if not target.exists():
        return DEFAULT_SETTINGS.copy()
    try:
        with target.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", target, exc)
        return DEFAULT_SETTINGS.copy()
    if not isinstance(data, dict):
        return DEFAULT_SETTINGS.copy()
    merged = DEFAULT_SETTINGS.copy()
    merged.update({k: v for k, v in data.items() if k in DEFAULT_SETTINGS})
    return merged


def load_settings(path: Path | None = None) -> AppSettings:
    """Load settings, falling back to defaults for anything missing or invalid."""
    raw = load_raw_settings(path)
    currency = CurrencySetting.from_value(
        raw.get('selected_currency'),
        str(raw.get('custom_currency_symbol') or '$'),
    )
    budgets = BudgetSettings(
        monthly_budget=_threshold(raw.get('monthly_budget')),
        yearly_budget=_threshold(raw.get('yearly_budget')),
        income_goal=_threshold(raw.get('income_goal')),
    )
    return AppSettings(currency=currency, budgets=budgets)


def save_settings(settings: AppSettings, path: Path | None = None) -> None:
    target = path or SETTINGS_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        'selected_currency': settings.currency.currency.value,
        'custom_currency_symbol': settings.currency.custom_symbol,
        'monthly_budget': settings.budgets.monthly_budget,
        'yearly_budget': settings.budgets.yearly_budget,
        'income_goal': settings.budgets.income_goal,
    }
    with target.open('w', encoding='utf-8') as handle:
        json.dump(payload, handle, indent=2, sort_keys=True, ensure_ascii=False)
