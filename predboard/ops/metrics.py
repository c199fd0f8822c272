"""Counters and timings for catalogue loads, registrations and evaluations."""

from collections import Counter, defaultdict
from contextlib import contextmanager
from typing import DefaultDict, Dict, Iterator, List
import threading
import time

CATALOGUE_FETCHED = "catalogue.fetched"
DATASETS_LOADED = "datasets.loaded"
DATASETS_REGISTERED = "datasets.registered"
EVALUATION_TIMING = "evaluation"


class MetricsRecorder:
    def increment(self, key: str, value: int = 1) -> None:
        raise NotImplementedError

    def timing(self, key: str, value_ms: float) -> None:
        raise NotImplementedError

    def snapshot(self) -> Dict[str, Dict]:
        raise NotImplementedError

    @contextmanager
    def timed(self, key: str) -> Iterator[None]:
        """Record the wall time of the enclosed block in milliseconds."""
        started = time.perf_counter()
        try:
            yield
        finally:
            self.timing(key, (time.perf_counter() - started) * 1000.0)


def _summarize(samples: List[float]) -> Dict[str, float]:
    return {
        "count": len(samples),
        "avg_ms": sum(samples) / len(samples),
        "max_ms": max(samples),
    }


class InMemoryMetricsRecorder(MetricsRecorder):
    def __init__(self) -> None:
        self._counters: Counter = Counter()
        self._samples: DefaultDict[str, List[float]] = defaultdict(list)
        self._lock = threading.Lock()

    def increment(self, key: str, value: int = 1) -> None:
        with self._lock:
            self._counters[key] += int(value)

    def timing(self, key: str, value_ms: float) -> None:
        with self._lock:
            self._samples[key].append(float(value_ms))

    def snapshot(self) -> Dict[str, Dict]:
        with self._lock:
            return {
                "counters": dict(self._counters),
                "timings": {key: _summarize(samples) for key, samples in self._samples.items()},
            }

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._samples.clear()


_DEFAULT_RECORDER = InMemoryMetricsRecorder()


def get_metrics_recorder() -> MetricsRecorder:
    """Process-wide recorder shared by the CLI and registries built without one."""
    return _DEFAULT_RECORDER
