"""Budget and income-goal progress.

Progress ratios compare what has been spent (or earned) in the current
period against the thresholds in :class:`~angler_finance.models.BudgetSettings`.
A threshold of 0 means "not set" and always yields a ratio of 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from . import analytics
from .models import BudgetSettings, Trip


@dataclass(frozen=True)
class BudgetReport:
    """Progress for all three thresholds at one point in time.

    Ratios are clamped to ``[0, 1]``; the ``over``/``remaining`` amounts
    carry the unclamped difference.
    """

    month_spending: float
    year_spending: float
    year_income: float
    monthly_progress: float
    yearly_progress: float
    income_progress: float
    monthly_over_budget: float
    monthly_remaining: float
    yearly_over_budget: float
    yearly_remaining: float
    income_remaining: float
    goal_achieved: bool


def progress_ratio(amount: float, threshold: float) -> float:
    """Return ``amount / threshold`` clamped to 1, or 0 when no threshold is set.

    Example:
        >>> progress_ratio(150, 100)
        1.0
        >>> progress_ratio(25, 0)
        0.0
    """
    if threshold <= 0:
        return 0.0
    return min(amount / threshold, 1.0)


def over_budget_amount(spend: float, budget: float) -> float:
    return max(0.0, spend - budget)


def remaining_amount(spend: float, budget: float) -> float:
    return max(0.0, budget - spend)


def goal_achieved(progress: float) -> bool:
    return progress >= 1.0


def monthly_progress(trips: Sequence[Trip], monthly_budget: float, now: date) -> float:
    spend = analytics.expenses_in_month(trips, now.year, now.month)
    return progress_ratio(spend, monthly_budget)


def yearly_progress(trips: Sequence[Trip], yearly_budget: float, now: date) -> float:
    spend = analytics.expenses_in_year(trips, now.year)
    return progress_ratio(spend, yearly_budget)


def income_progress(trips: Sequence[Trip], income_goal: float, now: date) -> float:
    earned = analytics.income_in_year(trips, now.year)
    return progress_ratio(earned, income_goal)


def evaluate_budgets(trips: Sequence[Trip], settings: BudgetSettings, now: date) -> BudgetReport:
    """Compute every budget figure for the month and year containing ``now``."""
    month_spending = analytics.expenses_in_month(trips, now.year, now.month)
    year_spending = analytics.expenses_in_year(trips, now.year)
    year_income = analytics.income_in_year(trips, now.year)
    income = progress_ratio(year_income, settings.income_goal)
    return BudgetReport(
        month_spending=month_spending,
        year_spending=year_spending,
        year_income=year_income,
        monthly_progress=progress_ratio(month_spending, settings.monthly_budget),
        yearly_progress=progress_ratio(year_spending, settings.yearly_budget),
        income_progress=income,
        monthly_over_budget=over_budget_amount(month_spending, settings.monthly_budget),
        monthly_remaining=remaining_amount(month_spending, settings.monthly_budget),
        yearly_over_budget=over_budget_amount(year_spending, settings.yearly_budget),
        yearly_remaining=remaining_amount(year_spending, settings.yearly_budget),
        income_remaining=remaining_amount(year_income, settings.income_goal),
        goal_achieved=goal_achieved(income),
    )
