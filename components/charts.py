"""Plotly chart builders for the MPI dashboard."""

from typing import List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from config.defaults import TIMEFRAMES
from models.resolution import CalculationStatistics, ComparisonSummary, GroupSummary


def mpi_by_group_bar(
    summaries: List[GroupSummary],
    title: str = "Average MPI by Group",
) -> go.Figure:
    """Grouped bar chart: one bar per timeframe for each group."""
    rows = [
        {"group": s.group, "timeframe": f"{tf}-day", "mpi": s.averages[tf]}
        for s in summaries for tf in TIMEFRAMES
    ]
    df = pd.DataFrame(rows, columns=["group", "timeframe", "mpi"])
    fig = px.bar(
        df, x="group", y="mpi", color="timeframe",
        barmode="group",
        labels={"mpi": "MPI", "group": "Group", "timeframe": ""},
        title=title,
    )
    # 100 = performing in line with the market
    fig.add_hline(y=100, line_dash="dash", line_color="#888888")
    fig.update_layout(legend_title_text="", height=420)
    return fig


def tier_breakdown_donut(stats: CalculationStatistics, title: str = "Resolution Sources") -> go.Figure:
    """Donut chart showing which tier produced each value."""
    fig = go.Figure(data=[go.Pie(
        labels=["Precomputed", "Derived", "Unavailable"],
        values=[stats.precomputed_used, stats.derived_used, stats.unavailable],
        hole=0.6,
        marker_colors=["#4CAF50", "#4A90D9", "#F5C542"],
        textinfo="percent+label",
    )])
    fig.update_layout(
        title=title,
        height=350,
        showlegend=True,
        annotations=[dict(text=f"{stats.total_resolutions}", x=0.5, y=0.5, font_size=16, showarrow=False)],
    )
    return fig


def comparison_bar(summaries: List[ComparisonSummary], timeframe: int) -> go.Figure:
    """Bar chart comparing precomputed and derived group averages for one timeframe."""
    fig = go.Figure()
    groups = [s.group for s in summaries]
    fig.add_trace(go.Bar(
        name="Precomputed",
        x=groups,
        y=[s.precomputed_averages[timeframe] for s in summaries],
        marker_color="#4CAF50",
    ))
    fig.add_trace(go.Bar(
        name="Derived",
        x=groups,
        y=[s.derived_averages[timeframe] for s in summaries],
        marker_color="#4A90D9",
    ))
    fig.update_layout(
        barmode="group",
        title=f"Precomputed vs Derived MPI ({timeframe}-day)",
        xaxis_title="Group",
        yaxis_title="MPI",
        height=400,
    )
    return fig
