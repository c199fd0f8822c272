"""Unit tests for CSV dataset parsing."""

import pytest

from predboard.constants import REQUIRED_COLUMNS
from predboard.exceptions import CoercionError, ValidationError
from predboard.normalization.csv_parser import (
    build_header_lookup,
    parse_csv_dataset,
    resolve_columns,
    split_csv_line,
)


def test_split_csv_line_quotes_and_escapes():
    line = '"Acme, Inc.","2024-01-01",up, down '
    assert split_csv_line(line) == ["Acme, Inc.", "2024-01-01", "up", "down"]
    assert split_csv_line('"He said ""hi""",x') == ['He said "hi"', "x"]
    assert split_csv_line("a,,b,") == ["a", "", "b", ""]


def test_resolve_columns_prefers_first_alias():
    lookup = build_header_lookup(["Symbol", "DATE", "prediction", "Predicted", "target"])
    resolved = resolve_columns(lookup, REQUIRED_COLUMNS)
    assert resolved == {"symbol": 0, "date": 1, "predicted": 3, "actual": 4}


def test_duplicate_headers_use_first_column():
    assert build_header_lookup(["symbol", "Date", "DATE"]) == {"symbol": 0, "date": 1}

    text = "symbol,date,predicted,actual,Actual\nAAPL,2024-01-01,up,up,down\n"
    row = parse_csv_dataset(text).stocks[0].predictions[0]
    assert (row.predicted, row.actual) == (1, 1)


def test_parse_csv_dataset_full(sample_csv_text):
    dataset = parse_csv_dataset(sample_csv_text, "upload")

    assert [stock.symbol for stock in dataset.stocks] == ["AAPL", "MSFT"]
    aapl, msft = dataset.stocks
    assert aapl.company == "Apple Inc."
    assert [row.date for row in aapl.predictions] == ["2024-01-02", "2024-01-03"]
    assert [(row.predicted, row.actual) for row in aapl.predictions] == [(1, 1), (1, 0)]
    assert msft.company == 'Microsoft "MSFT" Corp'

    assert dataset.metadata.label == "GRU sample"
    assert dataset.metadata.description == "Daily calls"
    assert dataset.metadata.feature_window == 30
    assert dataset.metadata.features == ["close", "volume", "rsi"]


def test_parse_csv_dataset_quoted_company():
    text = 'company,date,predicted,actual,symbol\n"Acme, Inc.","2024-01-01",up,down,ACME\n'
    dataset = parse_csv_dataset(text, "acme")
    assert dataset.stocks[0].company == "Acme, Inc."
    assert dataset.stocks[0].predictions[0].predicted == 1
    assert dataset.stocks[0].predictions[0].actual == 0


def test_parse_csv_dataset_predictions_sorted_by_date():
    text = "\r\n".join([
        "symbol,date,predicted,actual",
        "X,2024-03-01,1,1",
        "",
        "X,2024-01-15,0,1",
        "X,2024-02-10,1,0",
    ])
    dataset = parse_csv_dataset(text, "sorted")
    dates = [row.date for row in dataset.stocks[0].predictions]
    assert dates == sorted(dates)


def test_parse_csv_dataset_default_label_and_company():
    dataset = parse_csv_dataset("symbol,date,predicted,actual\nX,2024-01-01,1,0", None)
    assert dataset.metadata.label == "Custom dataset"
    assert dataset.stocks[0].company == "X"
    assert dataset.metadata.feature_window is None
    assert dataset.metadata.features == []


def test_parse_csv_dataset_first_company_value_kept():
    text = "\n".join([
        "symbol,date,predicted,actual,name",
        "X,2024-01-01,1,0,",
        "X,2024-01-02,1,0,First Name",
        "X,2024-01-03,1,0,Second Name",
    ])
    dataset = parse_csv_dataset(text, "names")
    assert dataset.stocks[0].company == "First Name"


def test_parse_csv_dataset_last_metadata_wins_and_ignores_bad_window():
    text = "\n".join([
        "symbol,date,predicted,actual,label,feature_window",
        "X,2024-01-01,1,0,First,20",
        "X,2024-01-02,1,0,Second,-5",
        "X,2024-01-03,1,0,,abc",
    ])
    dataset = parse_csv_dataset(text, "meta")
    assert dataset.metadata.label == "Second"
    assert dataset.metadata.feature_window == 20


@pytest.mark.parametrize("text", ["", "   \n\t  "])
def test_parse_csv_dataset_empty(text):
    with pytest.raises(ValidationError, match="CSV file is empty."):
        parse_csv_dataset(text, "empty")


def test_parse_csv_dataset_missing_required_column():
    with pytest.raises(ValidationError) as excinfo:
        parse_csv_dataset("symbol,date,predicted\nX,2024-01-01,1", "missing")
    message = str(excinfo.value)
    for name in ("symbol", "date", "predicted", "actual"):
        assert f'"{name}"' in message


def test_parse_csv_dataset_header_only():
    with pytest.raises(ValidationError, match="did not include any stock prediction rows"):
        parse_csv_dataset("symbol,date,predicted,actual\n\n", "header")


def test_parse_csv_dataset_row_errors_report_row_number():
    text = "\n".join([
        "symbol,date,predicted,actual",
        "X,2024-01-01,1,0",
        ",2024-01-02,1,0",
    ])
    with pytest.raises(ValidationError, match="Missing stock symbol on row 3."):
        parse_csv_dataset(text, "rows")

    with pytest.raises(ValidationError, match="Missing date for X on row 2."):
        parse_csv_dataset("symbol,date,predicted,actual\nX,,1,0", "rows")


def test_parse_csv_dataset_bad_binary_value():
    text = "symbol,date,predicted,actual\nX,2024-01-01,1,0\nX,2024-01-02,maybe,0"
    with pytest.raises(CoercionError) as excinfo:
        parse_csv_dataset(text, "bad")
    assert excinfo.value.row_number == 3
    assert 'Invalid predicted value "maybe" on row 3.' in str(excinfo.value)


def test_parse_csv_dataset_short_row_reports_missing_actual():
    with pytest.raises(CoercionError, match="Missing actual value on row 2."):
        parse_csv_dataset("symbol,date,predicted,actual\nX,2024-01-01,1", "short")
