"""
Chart data and plotly figures for the results panel.
"""

from typing import List, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from ..sizing.models import DimensioningResult

COLORS = ["#3498db", "#2ecc71", "#f39c12", "#e74c3c"]

# Indicative quality indicators shown next to the computed coverage
CAPACITY_INDICATOR = 85
QUALITY_INDICATOR = 92
AVAILABILITY_INDICATOR = 98


def pie_data(results: Optional[DimensioningResult]) -> pd.DataFrame:
    """Performance indicators: computed coverage plus fixed indicative values."""
    coverage = results.coverage if results is not None else 0
    return pd.DataFrame({
        "name": ["Couverture", "Capacité", "Qualité", "Disponibilité"],
        "value": [coverage, CAPACITY_INDICATOR, QUALITY_INDICATOR, AVAILABILITY_INDICATOR],
    })


SITE_ICON = "📡"
SITE_GRID_LIMIT = 16


def site_icons(results: Optional[DimensioningResult], limit: int = SITE_GRID_LIMIT) -> List[str]:
    """One antenna icon per site for the coverage map, at most `limit` of them."""
    sites = results.sites if results is not None else 0
    return [SITE_ICON] * max(0, min(sites, limit))


def bar_data(results: Optional[DimensioningResult]) -> pd.DataFrame:
    """Site count and cost in millions."""
    sites = results.sites if results is not None else 0
    cost = results.cost if results is not None else 0.0
    return pd.DataFrame({
        "name": ["Sites", "Coût (M FCFA)"],
        "value": [sites, cost / 1_000_000],
    })


def pie_figure(results: Optional[DimensioningResult]) -> go.Figure:
    df = pie_data(results)
    fig = px.pie(df, names="name", values="value", color_discrete_sequence=COLORS, hole=0.0)
    fig.update_traces(textinfo="label+value")
    fig.update_layout(title="Indicateurs de Performance", height=320, showlegend=False)
    return fig


def bar_figure(results: Optional[DimensioningResult]) -> go.Figure:
    df = bar_data(results)
    fig = go.Figure(go.Bar(x=df["name"], y=df["value"], marker_color=COLORS[0]))
    fig.update_layout(title="Sites et Coût", yaxis_title="Valeur", height=320)
    return fig


def sweep_figure(df: pd.DataFrame, parameter: str, metric: str = "sites") -> go.Figure:
    """Line chart of one result column against the swept parameter."""
    fig = go.Figure(go.Scatter(x=df[parameter], y=df[metric], mode="lines+markers", line=dict(color=COLORS[1])))
    fig.update_layout(
        title=f"Sensibilité : {metric} en fonction de {parameter}",
        xaxis_title=parameter,
        yaxis_title=metric,
        height=320,
    )
    return fig
