"""Headline figures for an evaluation run."""

from typing import Dict, List

from predboard.constants import DEFAULT_FEATURE_NOTE, DEFAULT_SUMMARY_TITLE, PLACEHOLDER
from predboard.evaluation.types import EvaluationReport


def format_percent(value: float) -> str:
    return f"{value * 100:.1f}%"


def format_feature_window(window) -> str:
    return f"{window} steps" if window else PLACEHOLDER


def summarize_report(report: EvaluationReport) -> Dict[str, str]:
    metadata = report.metadata
    top = report.top_stock
    if top is not None:
        top_symbol = top.symbol
        top_accuracy = f"Accuracy: {format_percent(top.accuracy)} ({top.correct}/{top.total})"
    else:
        top_symbol = PLACEHOLDER
        top_accuracy = f"Accuracy: {PLACEHOLDER}"

    return {
        "top_stock_symbol": top_symbol,
        "top_stock_accuracy": top_accuracy,
        "dataset_accuracy": format_percent(report.dataset_accuracy),
        "dataset_name": metadata.label or DEFAULT_SUMMARY_TITLE,
        "feature_window": format_feature_window(metadata.feature_window),
        "feature_description": metadata.description or DEFAULT_FEATURE_NOTE,
        "features": ", ".join(metadata.features) if metadata.features else PLACEHOLDER,
    }


def render_summary(summary: Dict[str, str]) -> str:
    lines: List[str] = [
        summary["dataset_name"],
        f"  Dataset accuracy: {summary['dataset_accuracy']}",
        f"  Top stock: {summary['top_stock_symbol']} ({summary['top_stock_accuracy']})",
        f"  Feature window: {summary['feature_window']}",
        f"  Features: {summary['features']}",
        f"  Notes: {summary['feature_description']}",
    ]
    return "\n".join(lines)
