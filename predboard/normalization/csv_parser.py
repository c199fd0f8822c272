"""Parse uploaded prediction CSV files into canonical datasets."""

from typing import Dict, List, Optional, Sequence, Set, Tuple
import logging
import re

from predboard.constants import DEFAULT_DATASET_LABEL, OPTIONAL_COLUMNS, REQUIRED_COLUMNS
from predboard.exceptions import ValidationError
from predboard.normalization.coerce import (
    coerce_positive_number,
    parse_binary_value,
    parse_feature_list,
)
from predboard.normalization.schema import Dataset, DatasetMetadata, PredictionRow, Stock

logger = logging.getLogger(__name__)

_LINE_BREAKS = re.compile(r"\r\n?")


def split_csv_line(line: str) -> List[str]:
    """Split one CSV line on commas, honouring double-quoted fields."""
    cells: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    cells.append("".join(current).strip())
    return cells


def build_header_lookup(headers: Sequence[str]) -> Dict[str, int]:
    lookup: Dict[str, int] = {}
    for index, header in enumerate(headers):
        lookup.setdefault(header.lower(), index)
    return lookup


def resolve_columns(
    lookup: Dict[str, int],
    table: Sequence[Tuple[str, Sequence[str]]],
) -> Dict[str, Optional[int]]:
    """Map each canonical column name to the index of its first matching alias."""
    resolved: Dict[str, Optional[int]] = {}
    for canonical, aliases in table:
        resolved[canonical] = None
        for alias in aliases:
            index = lookup.get(alias.lower())
            if index is not None:
                resolved[canonical] = index
                break
    return resolved


def _cell(values: List[str], index: Optional[int]) -> str:
    if index is None or index >= len(values):
        return ""
    return values[index].strip()


def parse_csv_dataset(text: str, dataset_name: Optional[str] = None) -> Dataset:
    """Build a dataset from CSV text.

    Rows are grouped by symbol in the order symbols first appear. Dataset
    level metadata columns may appear on any row; the last non-empty value
    wins. Row numbers in error messages count the header as row 1.
    """
    if not text or not text.strip():
        raise ValidationError("CSV file is empty.")

    raw_lines = [line.strip() for line in _LINE_BREAKS.sub("\n", text).split("\n")]
    raw_lines = [line for line in raw_lines if line]
    if not raw_lines:
        raise ValidationError("CSV file does not contain any rows.")

    headers = split_csv_line(raw_lines[0])
    lookup = build_header_lookup(headers)

    required = resolve_columns(lookup, REQUIRED_COLUMNS)
    if any(index is None for index in required.values()):
        raise ValidationError('CSV must include "symbol", "date", "predicted", and "actual" columns.')
    optional = resolve_columns(lookup, OPTIONAL_COLUMNS)

    metadata = DatasetMetadata(label=dataset_name or DEFAULT_DATASET_LABEL)
    stocks: Dict[str, Stock] = {}
    named: Set[str] = set()

    for offset, line in enumerate(raw_lines[1:]):
        row_number = offset + 2
        values = split_csv_line(line)

        symbol = _cell(values, required["symbol"])
        date = _cell(values, required["date"])
        if not symbol:
            raise ValidationError(f"Missing stock symbol on row {row_number}.")
        if not date:
            raise ValidationError(f"Missing date for {symbol} on row {row_number}.")

        predicted = parse_binary_value(_cell(values, required["predicted"]), "predicted", row_number)
        actual = parse_binary_value(_cell(values, required["actual"]), "actual", row_number)

        company = _cell(values, optional["company"])
        label = _cell(values, optional["label"])
        description = _cell(values, optional["description"])
        window_value = _cell(values, optional["feature_window"])
        feature_value = _cell(values, optional["features"])

        if label:
            metadata.label = label
        if description:
            metadata.description = description
        if window_value:
            window = coerce_positive_number(window_value)
            if window is not None:
                metadata.feature_window = window
        if feature_value:
            metadata.features = parse_feature_list(feature_value)

        stock = stocks.get(symbol)
        if stock is None:
            stock = Stock(symbol=symbol, company=symbol)
            stocks[symbol] = stock
        if company and symbol not in named:
            stock.company = company
            named.add(symbol)

        stock.predictions.append(PredictionRow(date=date, predicted=predicted, actual=actual))

    if not stocks:
        raise ValidationError("CSV did not include any stock prediction rows.")

    stock_list = list(stocks.values())
    for stock in stock_list:
        stock.predictions.sort(key=lambda row: row.date)

    logger.info(
        "Parsed CSV dataset %r with %d stocks and %d rows.",
        metadata.label,
        len(stock_list),
        len(raw_lines) - 1,
    )
    return Dataset(metadata=metadata, stocks=stock_list)
