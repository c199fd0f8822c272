"""Value coercion shared by the CSV parser and the payload normalizer."""

from typing import Any, List, Optional
import math
import re

from predboard.constants import DOWN_TOKENS, FEATURE_SEPARATORS, UP_TOKENS
from predboard.exceptions import CoercionError
from predboard.normalization.schema import Direction

_FEATURE_SPLIT = re.compile("[" + re.escape(FEATURE_SEPARATORS) + "]")


def _parse_number(text: str) -> Optional[float]:
    try:
        return float(text)
    except (TypeError, ValueError):
        return None


def parse_binary_value(value: Any, field: str, row_number: int) -> int:
    """Strictly read an up/down marker, raising on anything unrecognized."""
    normalized = str(value if value is not None else "").strip().lower()

    if not normalized:
        raise CoercionError(
            f"Missing {field} value on row {row_number}.",
            field=field,
            row_number=row_number,
            value=value,
        )

    if normalized in UP_TOKENS:
        return 1
    if normalized in DOWN_TOKENS:
        return 0

    numeric = _parse_number(normalized)
    if numeric == 1:
        return 1
    if numeric == 0:
        return 0

    raise CoercionError(
        f'Invalid {field} value "{value}" on row {row_number}. '
        "Expected 0/1, true/false, or up/down.",
        field=field,
        row_number=row_number,
        value=value,
    )


def coerce_binary_or_nan(value: Any) -> Direction:
    """Lenient variant for JSON payloads: unrecognized values become NaN."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        if value == 1:
            return 1
        if value == 0:
            return 0
        return math.nan
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in UP_TOKENS:
            return 1
        if normalized in DOWN_TOKENS:
            return 0
        numeric = _parse_number(normalized) if normalized else None
        if numeric == 1:
            return 1
        if numeric == 0:
            return 0
    return math.nan


def is_missing_direction(value: Direction) -> bool:
    return isinstance(value, float) and math.isnan(value)


def coerce_positive_number(value: Any) -> Optional[float]:
    """Return a positive finite number (int when integral) or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        numeric = float(value)
    else:
        numeric = _parse_number(str(value).strip())
    if numeric is None or not math.isfinite(numeric) or numeric <= 0:
        return None
    if numeric.is_integer():
        return int(numeric)
    return numeric


def parse_feature_list(value: Any) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in _FEATURE_SPLIT.split(str(value)) if item.strip()]
