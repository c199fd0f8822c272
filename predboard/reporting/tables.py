"""Tabular views behind the accuracy chart, timeline chart and prediction table."""

from typing import Optional

import pandas as pd

from predboard.constants import DIRECTION_LABELS
from predboard.evaluation.types import EvaluationReport, TimelineEntry

PREDICTION_COLUMNS = ["date", "symbol", "predicted", "actual", "result"]
ACCURACY_COLUMNS = ["symbol", "company", "accuracy_pct", "correct", "total"]
TIMELINE_COLUMNS = ["date", "predicted", "actual", "result", "hit", "label"]


def direction_label(value) -> str:
    return DIRECTION_LABELS.get(value, "Unknown")


def result_label(entry: TimelineEntry) -> str:
    return "Correct" if entry.correct else "Incorrect"


def build_prediction_table(report: EvaluationReport) -> pd.DataFrame:
    """Every scored prediction across all stocks, ordered by date."""
    rows = [
        {
            "date": entry.date,
            "symbol": metric.symbol,
            "predicted": direction_label(entry.predicted),
            "actual": direction_label(entry.actual),
            "result": result_label(entry),
        }
        for metric in report.stock_metrics
        for entry in metric.timeline
    ]
    if not rows:
        return pd.DataFrame(columns=PREDICTION_COLUMNS)
    frame = pd.DataFrame(rows, columns=PREDICTION_COLUMNS)
    return frame.sort_values("date", kind="stable").reset_index(drop=True)


def build_accuracy_frame(report: EvaluationReport) -> pd.DataFrame:
    """Per-stock accuracy in report (ranked) order."""
    rows = [
        {
            "symbol": metric.symbol,
            "company": metric.company,
            "accuracy_pct": round(metric.accuracy * 100, 2),
            "correct": metric.correct,
            "total": metric.total,
        }
        for metric in report.stock_metrics
    ]
    return pd.DataFrame(rows, columns=ACCURACY_COLUMNS)


def stock_timeline(report: EvaluationReport, symbol: str) -> Optional[pd.DataFrame]:
    metric = report.find_stock(symbol)
    if metric is None:
        return None

    rows = []
    for entry in metric.timeline:
        predicted = direction_label(entry.predicted)
        actual = direction_label(entry.actual)
        result = result_label(entry)
        rows.append({
            "date": entry.date,
            "predicted": predicted,
            "actual": actual,
            "result": result,
            "hit": 1 if entry.correct else 0,
            "label": f"{entry.date}: {result} (predicted {predicted}, actual {actual})",
        })
    return pd.DataFrame(rows, columns=TIMELINE_COLUMNS)
