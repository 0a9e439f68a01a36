from datetime import date

import pytest

from angler_finance import budgets
from angler_finance.models import BudgetSettings, Trip

NOW = date(2025, 6, 15)


def _trips():
    return [
        Trip(date=date(2025, 6, 2), location_name="Pier", fuel=100, bait=50, income_from_sale=40),
        Trip(date=date(2025, 2, 10), location_name="Pier", boat=200, income_from_sale=300),
        Trip(date=date(2024, 6, 20), location_name="Pier", food=999),
        Trip(date=None, location_name="Pier", fuel=500),
    ]


def test_progress_ratio_clamps_and_handles_zero_budget():
    assert budgets.progress_ratio(150, 100) == 1.0
    assert budgets.progress_ratio(50, 100) == 0.5
    assert budgets.progress_ratio(50, 0) == 0.0


def test_monthly_progress_clamped_and_over_budget():
    trips = [Trip(date=date(2025, 6, 1), fuel=150)]
    assert budgets.monthly_progress(trips, 100, NOW) == 1.0
    assert budgets.over_budget_amount(150, 100) == 50
    assert budgets.remaining_amount(150, 100) == 0


def test_progress_without_budget_is_zero():
    assert budgets.monthly_progress(_trips(), 0, NOW) == 0.0
    assert budgets.yearly_progress(_trips(), 0, NOW) == 0.0
    assert budgets.income_progress(_trips(), 0, NOW) == 0.0


def test_yearly_and_income_progress_use_current_year_only():
    trips = _trips()
    assert budgets.yearly_progress(trips, 700, NOW) == pytest.approx(350 / 700)
    assert budgets.income_progress(trips, 680, NOW) == pytest.approx(340 / 680)


def test_goal_achieved():
    assert budgets.goal_achieved(1.0)
    assert not budgets.goal_achieved(0.99)


def test_evaluate_budgets_report():
    settings = BudgetSettings(monthly_budget=100, yearly_budget=1000, income_goal=300)
    report = budgets.evaluate_budgets(_trips(), settings, NOW)
    assert report.month_spending == 150
    assert report.year_spending == 350
    assert report.year_income == 340
    assert report.monthly_progress == 1.0
    assert report.monthly_over_budget == 50
    assert report.monthly_remaining == 0
    assert report.yearly_progress == pytest.approx(0.35)
    assert report.yearly_remaining == 650
    assert report.yearly_over_budget == 0
    assert report.income_progress == 1.0
    assert report.income_remaining == 0
    assert report.goal_achieved


def test_evaluate_budgets_with_nothing_set():
    report = budgets.evaluate_budgets(_trips(), BudgetSettings(), NOW)
    assert report.monthly_progress == 0.0
    assert report.income_progress == 0.0
    assert not report.goal_achieved


def test_budget_settings_reject_negative_amounts():
    with pytest.raises(ValueError):
        BudgetSettings(monthly_budget=-1)
