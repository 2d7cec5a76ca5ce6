"""Plotly figures for the dashboard."""

import plotly.graph_objects as go

from mibolsillo.models.movement import DailyTotals


INCOME_COLOR = "#16a34a"
EXPENSE_COLOR = "#dc2626"


def build_trend_figure(series: list[DailyTotals], title: str = "Últimos 7 días") -> go.Figure:
    """Line chart with one trace for income and one for expense."""
    labels = [d.label for d in series]
    dates = [d.day.strftime("%d/%m") for d in series]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=labels,
        y=[float(d.income) for d in series],
        customdata=dates,
        mode="lines+markers",
        name="Ingresos",
        line=dict(color=INCOME_COLOR, width=2),
        hovertemplate="%{x} %{customdata}<br>Ingresos: $ %{y:,.2f}<extra></extra>",
    ))
    fig.add_trace(go.Scatter(
        x=labels,
        y=[float(d.expense) for d in series],
        customdata=dates,
        mode="lines+markers",
        name="Egresos",
        line=dict(color=EXPENSE_COLOR, width=2),
        hovertemplate="%{x} %{customdata}<br>Egresos: $ %{y:,.2f}<extra></extra>",
    ))

    fig.update_layout(
        title=title,
        xaxis_title="Día",
        yaxis_title="Monto (ARS)",
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        margin=dict(l=20, r=20, t=60, b=20),
    )
    fig.update_yaxes(rangemode="tozero", gridcolor="#e5e7eb")
    return fig
