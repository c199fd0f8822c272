"""Presentation-ready views of evaluation reports."""

from predboard.reporting.csv_output import write_table_csv
from predboard.reporting.summary import format_percent, render_summary, summarize_report
from predboard.reporting.tables import build_accuracy_frame, build_prediction_table, stock_timeline

__all__ = [
    "write_table_csv",
    "format_percent",
    "render_summary",
    "summarize_report",
    "build_accuracy_frame",
    "build_prediction_table",
    "stock_timeline",
]
