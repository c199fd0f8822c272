"""Operational helpers."""

from predboard.ops.metrics import InMemoryMetricsRecorder, MetricsRecorder, get_metrics_recorder

__all__ = ["InMemoryMetricsRecorder", "MetricsRecorder", "get_metrics_recorder"]
