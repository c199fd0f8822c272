"""Accuracy evaluation of binary direction predictions."""

from predboard.evaluation.evaluator import evaluate, score_stock
from predboard.evaluation.types import EvaluationReport, StockMetric, TimelineEntry

__all__ = ["evaluate", "score_stock", "EvaluationReport", "StockMetric", "TimelineEntry"]
