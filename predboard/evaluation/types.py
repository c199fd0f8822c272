"""Result types produced by the evaluator."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from predboard.normalization.schema import DatasetMetadata, Direction, direction_to_json


@dataclass(frozen=True)
class TimelineEntry:
    date: str
    predicted: Direction
    actual: Direction
    correct: bool

    def to_dict(self) -> Dict:
        return {
            "date": self.date,
            "predicted": direction_to_json(self.predicted),
            "actual": direction_to_json(self.actual),
            "correct": self.correct,
        }


@dataclass
class StockMetric:
    symbol: str
    company: str
    accuracy: float
    total: int
    correct: int
    timeline: List[TimelineEntry] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "symbol": self.symbol,
            "company": self.company,
            "accuracy": self.accuracy,
            "total": self.total,
            "correct": self.correct,
            "timeline": [entry.to_dict() for entry in self.timeline],
        }


@dataclass
class EvaluationReport:
    stock_metrics: List[StockMetric]
    dataset_accuracy: float
    top_stock: Optional[StockMetric]
    metadata: DatasetMetadata

    def find_stock(self, symbol: str) -> Optional[StockMetric]:
        for metric in self.stock_metrics:
            if metric.symbol == symbol:
                return metric
        return None

    def to_dict(self) -> Dict:
        return {
            "stockMetrics": [metric.to_dict() for metric in self.stock_metrics],
            "datasetAccuracy": self.dataset_accuracy,
            "topStock": self.top_stock.to_dict() if self.top_stock else None,
            "metadata": self.metadata.to_dict(),
        }
