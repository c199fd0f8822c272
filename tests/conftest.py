"""
Pytest configuration and shared fixtures for predboard tests.
"""

import json

import pytest

from predboard.normalization.schema import Dataset, DatasetMetadata, PredictionRow, Stock
from tests.mocks import StubSource


@pytest.fixture
def sample_csv_text():
    """Two stocks, out-of-order dates, quoted company names and metadata columns."""
    return "\n".join([
        "Symbol,Date,Prediction,Target,Company,Label,Notes,Feature_Window,Features",
        'AAPL,2024-01-03,up,down,"Apple Inc.",,,,',
        'AAPL,2024-01-02,1,1,,,,,',
        'MSFT,2024-01-02,down,0,"Microsoft ""MSFT"" Corp",,,,',
        'MSFT,2024-01-03,yes,true,,GRU sample,Daily calls,30,"close|volume;rsi"',
    ])


@pytest.fixture
def sample_payload():
    return {
        "metadata": {
            "label": "GRU daily",
            "description": "Daily calls",
            "featureWindow": 30,
            "features": ["close", "volume"],
        },
        "stocks": [
            {
                "symbol": "AAPL",
                "company": "Apple Inc.",
                "predictions": [
                    {"date": "2024-01-02", "predicted": 1, "actual": 1},
                    {"date": "2024-01-03", "predicted": 0, "actual": 1},
                ],
            },
            {
                "symbol": "MSFT",
                "predictions": [
                    {"date": "2024-01-02", "predicted": 0, "actual": 0},
                ],
            },
        ],
    }


@pytest.fixture
def two_stock_dataset():
    """Stock A: 2 of 3 correct. Stock B: 0 of 2 correct."""
    return Dataset(
        metadata=DatasetMetadata(label="Sample", feature_window=10, features=["close"]),
        stocks=[
            Stock(symbol="B", company="Beta Corp", predictions=[
                PredictionRow(date="2024-01-01", predicted=1, actual=0),
                PredictionRow(date="2024-01-02", predicted=0, actual=1),
            ]),
            Stock(symbol="A", company="Alpha Inc", predictions=[
                PredictionRow(date="2024-01-01", predicted=1, actual=1),
                PredictionRow(date="2024-01-02", predicted=0, actual=0),
                PredictionRow(date="2024-01-03", predicted=1, actual=0),
            ]),
        ],
    )


@pytest.fixture
def stub_source(sample_payload):
    return StubSource(resources={
        "index.json": {
            "datasets": [
                {
                    "id": "gru-daily",
                    "name": "GRU daily",
                    "description": "Daily calls",
                    "featureWindow": 30,
                    "features": ["close", "volume"],
                },
            ],
        },
        "gru-daily.json": sample_payload,
    })


@pytest.fixture
def data_dir(tmp_path, sample_payload):
    """A local catalogue directory with one built-in dataset."""
    directory = tmp_path / "data"
    directory.mkdir()
    (directory / "index.json").write_text(json.dumps({
        "datasets": [{"id": "gru-daily", "name": "GRU daily", "featureWindow": 30}],
    }), encoding="utf-8")
    (directory / "gru-daily.json").write_text(json.dumps(sample_payload), encoding="utf-8")
    return directory
