"""Plotly figures for the dashboard and the likes analytics page."""
from typing import Any, Dict, List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .base import PRIMARY_ACCENT

PIE_COLORS = ["#ec4899", "#f472b6", "#fb7185", "#fda4af"]


def _style(fig: go.Figure, height: int = 280) -> go.Figure:
    fig.update_layout(
        height=height,
        margin=dict(l=10, r=10, t=40, b=10),
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
    )
    return fig


def weekday_bar_chart(chart_data: List[Dict[str, Any]], title: str = "Weekly Likes Trend") -> go.Figure:
    df = pd.DataFrame(chart_data, columns=["day", "count", "percent"])
    fig = px.bar(df, x="day", y="count", title=title, hover_data=["percent"],
                 labels={"day": "Day of Week", "count": "Count", "percent": "% of total"})
    fig.update_traces(marker_color=PRIMARY_ACCENT)
    return _style(fig)


def weekday_area_chart(chart_data: List[Dict[str, Any]], title: str = "Weekly User Activity") -> go.Figure:
    df = pd.DataFrame(chart_data, columns=["day", "count", "percent"])
    fig = px.area(df, x="day", y="count", title=title,
                  labels={"day": "Day", "count": "Users"})
    fig.update_traces(line_color=PRIMARY_ACCENT)
    return _style(fig)


def distribution_pie(items: List[Dict[str, Any]], title: str) -> go.Figure:
    df = pd.DataFrame(items, columns=["name", "value"])
    fig = px.pie(df, values="value", names="name", title=title,
                 color_discrete_sequence=PIE_COLORS)
    fig.update_traces(textinfo="label+percent")
    return _style(fig)


def distribution_bar(items: List[Dict[str, Any]], title: str) -> go.Figure:
    df = pd.DataFrame(items, columns=["name", "value"])
    fig = px.bar(df, x="name", y="value", title=title,
                 labels={"name": "", "value": "Rows"})
    fig.update_traces(marker_color=PRIMARY_ACCENT)
    return _style(fig)
