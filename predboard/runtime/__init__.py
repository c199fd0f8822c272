"""Run bookkeeping."""

from predboard.runtime.manifest import RunManifest

__all__ = ["RunManifest"]
