"""Presentation helpers shared by the Streamlit screens."""

from mibolsillo.ui.charts import build_trend_figure
from mibolsillo.ui.formatting import (
    format_money,
    format_timestamp,
    movement_detail,
    movement_headline,
    range_label,
)

__all__ = [
    "build_trend_figure",
    "format_money",
    "format_timestamp",
    "movement_detail",
    "movement_headline",
    "range_label",
]
