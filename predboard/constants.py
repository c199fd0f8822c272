"""
Constants for predboard.

Provides the CSV column alias tables, the binary direction vocabulary,
and default labels shared by ingestion and reporting.
"""

from typing import Dict, FrozenSet, Tuple


# =============================================================================
# CSV COLUMN ALIASES
# =============================================================================

# Ordered (canonical name, accepted aliases) pairs. Aliases are matched
# case-insensitively and the first alias present in the header wins.
REQUIRED_COLUMNS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("symbol", ("symbol",)),
    ("date", ("date",)),
    ("predicted", ("predicted", "prediction")),
    ("actual", ("actual", "target")),
)

OPTIONAL_COLUMNS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("company", ("company", "name")),
    ("label", ("dataset_label", "label")),
    ("description", ("dataset_description", "description", "notes")),
    ("feature_window", ("feature_window", "featurewindow")),
    ("features", ("features", "feature_names", "featureNames")),
)


# =============================================================================
# BINARY DIRECTION VOCABULARY
# =============================================================================

UP_TOKENS: FrozenSet[str] = frozenset({"1", "true", "up", "rise", "yes"})
DOWN_TOKENS: FrozenSet[str] = frozenset({"0", "false", "down", "fall", "no"})

# Characters that separate entries in a feature list cell
FEATURE_SEPARATORS = "|;,"

DIRECTION_LABELS: Dict[int, str] = {1: "Up", 0: "Down"}


# =============================================================================
# DEFAULT LABELS
# =============================================================================

DEFAULT_DATASET_LABEL = "Custom dataset"
DEFAULT_CUSTOM_DESCRIPTION = "Uploaded custom dataset"
DEFAULT_SUMMARY_TITLE = "Dataset summary"
DEFAULT_FEATURE_NOTE = "Select a dataset to view the engineered features."
PLACEHOLDER = "–"

CATALOGUE_RESOURCE = "index.json"
CUSTOM_ID_PREFIX = "custom"
