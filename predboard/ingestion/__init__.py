"""Sources for catalogue and dataset resources."""

from predboard.ingestion.sources import (
    DataSource,
    HttpDataSource,
    LocalDataSource,
    SourceResponse,
    build_data_source,
)

__all__ = [
    "DataSource",
    "HttpDataSource",
    "LocalDataSource",
    "SourceResponse",
    "build_data_source",
]
