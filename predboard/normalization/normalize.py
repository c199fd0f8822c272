"""Normalize loosely-typed JSON payloads into canonical datasets."""

from typing import Any, List, Mapping, Optional
import logging

from predboard.normalization.coerce import (
    coerce_binary_or_nan,
    coerce_positive_number,
    is_missing_direction,
)
from predboard.normalization.schema import Dataset, DatasetMetadata, PredictionRow, Stock

logger = logging.getLogger(__name__)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _string_list(value: Any) -> List[str]:
    return [str(item) for item in value if item is not None]


def normalize_metadata(raw: Any) -> DatasetMetadata:
    if not isinstance(raw, Mapping):
        return DatasetMetadata()

    features = raw.get("features")
    if not isinstance(features, list):
        features = raw.get("featureNames")
    if not isinstance(features, list):
        features = []

    return DatasetMetadata(
        label=_optional_text(raw.get("label")) or None,
        description=_optional_text(raw.get("description") or raw.get("notes")),
        feature_window=coerce_positive_number(raw.get("featureWindow")),
        features=_string_list(features),
    )


def normalize_payload(payload: Any) -> Dataset:
    """Convert a JSON-like payload into a dataset without ever raising.

    Missing pieces degrade to empty values: a payload without ``stocks``
    yields a dataset with no stocks, which callers that need a usable
    dataset must reject themselves.
    """
    if not isinstance(payload, Mapping):
        payload = {}

    raw_stocks = payload.get("stocks")
    if not isinstance(raw_stocks, list):
        raw_stocks = []

    stocks: List[Stock] = []
    unreadable = 0
    for raw_stock in raw_stocks:
        if not isinstance(raw_stock, Mapping):
            logger.debug("Skipping non-object stock entry: %r", raw_stock)
            continue
        symbol = _optional_text(raw_stock.get("symbol")) or ""
        company = raw_stock.get("company")
        raw_rows = raw_stock.get("predictions")
        if not isinstance(raw_rows, list):
            raw_rows = []

        predictions: List[PredictionRow] = []
        for raw_row in raw_rows:
            if not isinstance(raw_row, Mapping):
                logger.debug("Skipping non-object prediction for %s: %r", symbol, raw_row)
                continue
            row = PredictionRow(
                date=_optional_text(raw_row.get("date")) or "",
                predicted=coerce_binary_or_nan(raw_row.get("predicted")),
                actual=coerce_binary_or_nan(raw_row.get("actual")),
            )
            if is_missing_direction(row.predicted) or is_missing_direction(row.actual):
                unreadable += 1
            predictions.append(row)

        predictions.sort(key=lambda row: row.date)
        stocks.append(Stock(
            symbol=symbol,
            company=_optional_text(company) or symbol,
            predictions=predictions,
        ))

    if unreadable:
        logger.warning(
            "%d prediction rows had unreadable predicted/actual values and will score as incorrect.",
            unreadable,
        )

    return Dataset(metadata=normalize_metadata(payload.get("metadata")), stocks=stocks)

