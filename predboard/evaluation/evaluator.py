"""Score canonical datasets against their actual outcomes."""

from dataclasses import replace

from predboard.evaluation.types import EvaluationReport, StockMetric, TimelineEntry
from predboard.normalization.schema import Dataset, Stock


def score_stock(stock: Stock) -> StockMetric:
    # NaN compares unequal to everything, so unreadable rows count as misses.
    timeline = [
        TimelineEntry(
            date=row.date,
            predicted=row.predicted,
            actual=row.actual,
            correct=row.predicted == row.actual,
        )
        for row in stock.predictions
    ]
    total = len(timeline)
    correct = sum(1 for entry in timeline if entry.correct)
    return StockMetric(
        symbol=stock.symbol,
        company=stock.company,
        accuracy=correct / total if total else 0.0,
        total=total,
        correct=correct,
        timeline=timeline,
    )


def evaluate(dataset: Dataset) -> EvaluationReport:
    """Rank stocks by accuracy and aggregate a dataset-wide hit rate.

    Never raises and never mutates ``dataset``. Stocks with equal accuracy
    keep their input order; empty stocks and empty datasets score 0.
    """
    stock_metrics = sorted(
        (score_stock(stock) for stock in dataset.stocks),
        key=lambda metric: metric.accuracy,
        reverse=True,
    )

    aggregate_correct = sum(metric.correct for metric in stock_metrics)
    aggregate_total = sum(metric.total for metric in stock_metrics)

    return EvaluationReport(
        stock_metrics=stock_metrics,
        dataset_accuracy=aggregate_correct / aggregate_total if aggregate_total else 0.0,
        top_stock=stock_metrics[0] if stock_metrics else None,
        metadata=replace(dataset.metadata, features=list(dataset.metadata.features)),
    )
