"""Identifier helpers for registered datasets."""

import secrets
import time

from predboard.constants import CUSTOM_ID_PREFIX


def canonicalize_dataset_id(dataset_id: str) -> str:
    return (dataset_id or "").strip()


def make_custom_dataset_id() -> str:
    """Time-based id with a random suffix, e.g. ``custom-1718000000000-a1b2c3``."""
    millis = int(time.time() * 1000)
    return f"{CUSTOM_ID_PREFIX}-{millis}-{secrets.token_hex(3)}"
