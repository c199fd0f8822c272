"""Stock direction-prediction accuracy dashboard package."""

__all__ = [
    "cli",
    "config",
    "constants",
    "exceptions",
    "ingestion",
    "normalization",
    "evaluation",
    "registry",
    "reporting",
    "ops",
    "storage",
    "runtime",
]

__version__ = "0.1.0"
