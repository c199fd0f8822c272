"""Dataset catalogue and session registry.

A ``DatasetRegistry`` combines the built-in catalogue served by a data
source with datasets registered during the session. It lives in memory
only: construct one per application (or per test) and drop it to forget
every custom dataset.
"""

from typing import Any, Dict, List, Optional, Tuple
import logging

from predboard.constants import (
    CATALOGUE_RESOURCE,
    DEFAULT_CUSTOM_DESCRIPTION,
    DEFAULT_DATASET_LABEL,
)
from predboard.exceptions import TransportError
from predboard.ingestion.sources import DataSource
from predboard.normalization.coerce import coerce_positive_number
from predboard.normalization.csv_parser import parse_csv_dataset
from predboard.normalization.ids import canonicalize_dataset_id, make_custom_dataset_id
from predboard.normalization.normalize import normalize_payload
from predboard.normalization.schema import CatalogueEntry, Dataset, validate_dataset
from predboard.ops.metrics import (
    CATALOGUE_FETCHED,
    DATASETS_LOADED,
    DATASETS_REGISTERED,
    MetricsRecorder,
    get_metrics_recorder,
)
from predboard.storage.cache import CacheStore, MemoryCache

logger = logging.getLogger(__name__)

_CATALOGUE_CACHE_KEY = "catalogue:builtin"


def _entry_from_index(raw: Any) -> Optional[CatalogueEntry]:
    if not isinstance(raw, dict) or not raw.get("id"):
        return None
    features = raw.get("features")
    return CatalogueEntry(
        id=str(raw["id"]),
        name=str(raw.get("name") or raw["id"]),
        description=raw.get("description"),
        feature_window=coerce_positive_number(raw.get("featureWindow")),
        features=[str(item) for item in features] if isinstance(features, list) else [],
    )


class DatasetRegistry:
    def __init__(
        self,
        source: DataSource,
        cache: Optional[CacheStore] = None,
        metrics: Optional[MetricsRecorder] = None,
        catalogue_path: str = CATALOGUE_RESOURCE,
        catalogue_ttl: Optional[int] = None,
    ) -> None:
        self._source = source
        self._cache = cache or MemoryCache()
        self._metrics = metrics or get_metrics_recorder()
        self._catalogue_path = catalogue_path
        self._catalogue_ttl = catalogue_ttl
        self._custom: Dict[str, Tuple[CatalogueEntry, Dataset]] = {}

    def _builtin_entries(self) -> List[CatalogueEntry]:
        cached = self._cache.get(_CATALOGUE_CACHE_KEY)
        if cached is not None:
            return cached

        response = self._source.fetch(self._catalogue_path)
        if not response.ok:
            raise TransportError(
                f"Unable to load dataset catalogue (HTTP {response.status}).",
                resource=self._catalogue_path,
                status_code=response.status,
            )
        data = response.json()
        raw_entries = data.get("datasets") if isinstance(data, dict) else None
        entries = []
        for raw in raw_entries if isinstance(raw_entries, list) else []:
            entry = _entry_from_index(raw)
            if entry is None:
                logger.warning("Skipping catalogue entry without an id: %r", raw)
                continue
            entries.append(entry)

        self._cache.set(_CATALOGUE_CACHE_KEY, entries, self._catalogue_ttl)
        self._metrics.increment(CATALOGUE_FETCHED)
        logger.info("Loaded %d built-in datasets from %s", len(entries), self._catalogue_path)
        return entries

    def list_datasets(self) -> List[CatalogueEntry]:
        """Built-in entries first, then custom entries in registration order."""
        base = [entry.copy() for entry in self._builtin_entries()]
        custom = [entry.copy() for entry, _ in self._custom.values()]
        return base + custom

    def get_entry(self, dataset_id: str) -> Optional[CatalogueEntry]:
        dataset_id = canonicalize_dataset_id(dataset_id)
        if dataset_id in self._custom:
            return self._custom[dataset_id][0].copy()
        for entry in self._builtin_entries():
            if entry.id == dataset_id:
                return entry.copy()
        return None

    def load_dataset(self, dataset_id: Optional[str]) -> Dataset:
        dataset_id = canonicalize_dataset_id(dataset_id or "")
        if not dataset_id:
            raise TransportError("A dataset id must be provided.")

        if dataset_id in self._custom:
            return self._custom[dataset_id][1]

        path = f"{dataset_id}.json"
        response = self._source.fetch(path)
        if not response.ok:
            raise TransportError(
                f'Unable to load dataset "{dataset_id}" (HTTP {response.status}).',
                resource=path,
                status_code=response.status,
            )
        dataset = normalize_payload(response.json())
        self._metrics.increment(DATASETS_LOADED)
        logger.info("Loaded dataset %s with %d stocks", dataset_id, len(dataset.stocks))
        return dataset

    def _new_id(self) -> str:
        dataset_id = make_custom_dataset_id()
        while dataset_id in self._custom:
            dataset_id = make_custom_dataset_id()
        return dataset_id

    def register_dataset(self, name: Optional[str], dataset: Dataset) -> CatalogueEntry:
        """Store an already-canonical dataset and return a copy of its entry."""
        validate_dataset(dataset)
        metadata = dataset.metadata
        entry = CatalogueEntry(
            id=self._new_id(),
            name=metadata.label or name or DEFAULT_DATASET_LABEL,
            description=metadata.description or DEFAULT_CUSTOM_DESCRIPTION,
            feature_window=metadata.feature_window,
            features=list(metadata.features),
        )
        self._custom[entry.id] = (entry, dataset)
        self._metrics.increment(DATASETS_REGISTERED)
        logger.info("Registered custom dataset %s (%s)", entry.id, entry.name)
        return entry.copy()

    def register_custom_dataset(self, name: Optional[str], payload: Any) -> CatalogueEntry:
        return self.register_dataset(name, normalize_payload(payload))

    def register_csv_dataset(self, name: Optional[str], text: str) -> CatalogueEntry:
        return self.register_dataset(name, parse_csv_dataset(text, name))
