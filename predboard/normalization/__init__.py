"""Ingestion of CSV and JSON inputs into canonical datasets."""

from predboard.normalization.csv_parser import parse_csv_dataset, split_csv_line
from predboard.normalization.normalize import normalize_payload
from predboard.normalization.schema import (
    CatalogueEntry,
    Dataset,
    DatasetMetadata,
    PredictionRow,
    Stock,
    validate_dataset,
)

__all__ = [
    "parse_csv_dataset",
    "split_csv_line",
    "normalize_payload",
    "CatalogueEntry",
    "Dataset",
    "DatasetMetadata",
    "PredictionRow",
    "Stock",
    "validate_dataset",
]
