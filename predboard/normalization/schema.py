"""Canonical dataset shapes that every ingestion path converges to."""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Union
import math

from predboard.exceptions import ValidationError

# 0 or 1 after coercion; JSON-normalized rows may also carry NaN.
Direction = Union[int, float]


def direction_to_json(value: Direction) -> Optional[int]:
    """NaN has no strict JSON form; unreadable directions export as null."""
    if isinstance(value, float) and math.isnan(value):
        return None
    return int(value)


@dataclass
class PredictionRow:
    date: str
    predicted: Direction
    actual: Direction

    def to_dict(self) -> Dict:
        return {
            "date": self.date,
            "predicted": direction_to_json(self.predicted),
            "actual": direction_to_json(self.actual),
        }


@dataclass
class Stock:
    symbol: str
    company: str
    predictions: List[PredictionRow] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "symbol": self.symbol,
            "company": self.company,
            "predictions": [row.to_dict() for row in self.predictions],
        }


@dataclass
class DatasetMetadata:
    label: Optional[str] = None
    description: Optional[str] = None
    feature_window: Optional[float] = None
    features: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        payload: Dict = {}
        if self.label is not None:
            payload["label"] = self.label
        if self.description is not None:
            payload["description"] = self.description
        if self.feature_window is not None:
            payload["featureWindow"] = self.feature_window
        payload["features"] = list(self.features)
        return payload


@dataclass
class Dataset:
    metadata: DatasetMetadata = field(default_factory=DatasetMetadata)
    stocks: List[Stock] = field(default_factory=list)

    @property
    def prediction_count(self) -> int:
        return sum(len(stock.predictions) for stock in self.stocks)

    def to_dict(self) -> Dict:
        """Export in the JSON dataset file shape."""
        return {
            "metadata": self.metadata.to_dict(),
            "stocks": [stock.to_dict() for stock in self.stocks],
        }


@dataclass
class CatalogueEntry:
    id: str
    name: str
    description: Optional[str] = None
    feature_window: Optional[float] = None
    features: List[str] = field(default_factory=list)

    def copy(self) -> "CatalogueEntry":
        return replace(self, features=list(self.features))

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "featureWindow": self.feature_window,
            "features": list(self.features),
        }


def validate_dataset(dataset: Dataset) -> None:
    """Reject datasets that the evaluator could not meaningfully score."""
    if not dataset.stocks:
        raise ValidationError("A dataset must include at least one stock entry.")
