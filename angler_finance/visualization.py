"""Plotly visualisation helpers for trip statistics.

Each function accepts the output of the matching function in
:mod:`angler_finance.analytics` and returns a
`plotly.graph_objects.Figure`.  Empty inputs produce an empty figure
titled "No data to display" rather than raising, so callers can render
the result unconditionally.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .models import MonthlyBucket

EXPENSE_COLOR = "rgba(0, 122, 255, 0.7)"
INCOME_COLOR = "rgba(52, 199, 89, 0.7)"


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_monthly_overview_chart(buckets: Sequence[MonthlyBucket], title: str | None = None) -> go.Figure:
    """Overlaid expense and income bars for each month.

    Parameters
    ----------
    buckets : sequence of MonthlyBucket
        Output of :func:`analytics.monthly_series`, oldest first.
    title : str, optional
        Chart title, "Monthly Overview" by default.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart with one expenses trace and one income trace.
    """
    if not buckets:
        return _empty_figure()
    months = [bucket.month for bucket in buckets]
    fig = go.Figure()
    fig.add_trace(go.Bar(name="Expenses", x=months, y=[b.expenses for b in buckets], marker_color=EXPENSE_COLOR))
    fig.add_trace(go.Bar(name="Income", x=months, y=[b.income for b in buckets], marker_color=INCOME_COLOR))
    fig.update_layout(
        title=title or "Monthly Overview",
        barmode="overlay",
        xaxis_title="Month",
        yaxis_title="Amount",
    )
    return fig


def create_location_ranking_chart(ranking: List[Tuple[str, float]], title: str | None = None) -> go.Figure:
    """Horizontal bar chart of a location ranking, best at the top."""
    if not ranking:
        return _empty_figure()
    df = pd.DataFrame(ranking, columns=["Location", "Amount"])
    fig = px.bar(df, x="Amount", y="Location", orientation="h")
    fig.update_layout(
        title=title or "Top Locations",
        yaxis={"categoryorder": "array", "categoryarray": list(reversed(df["Location"].tolist()))},
    )
    return fig


def create_tally_pie_chart(tally: List[Tuple[str, int]], title: str | None = None) -> go.Figure:
    """Pie chart of a categorical tally such as fish species or weather."""
    if not tally:
        return _empty_figure()
    df = pd.DataFrame(tally, columns=["Label", "Count"])
    fig = px.pie(df, names="Label", values="Count")
    fig.update_layout(title=title or "Breakdown")
    return fig
