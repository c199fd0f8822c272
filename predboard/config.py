"""Configuration for the dashboard CLI and registry."""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, Dict
import json
import os

from predboard.constants import CATALOGUE_RESOURCE, DEFAULT_DATASET_LABEL
from predboard.exceptions import ConfigurationError

_DEFAULT_DATA_DIR = "data"
_DEFAULT_REQUEST_TIMEOUT = 15.0
_DEFAULT_OUTPUT_DIR = ".cache/predboard"
_DEFAULT_LOG_LEVEL = "INFO"


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _coerce_float(value: Optional[str], default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _coerce_optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    # Zero or negative TTLs mean "cache for the process lifetime".
    return parsed if parsed > 0 else None


def _parse_env_file(path: Path) -> Dict[str, str]:
    data: Dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        data[key.strip()] = _strip_quotes(value.strip())
    return data


def _load_config_data(path: Path) -> Dict[str, str]:
    if not path.exists():
        raise ConfigurationError(str(path), "config file not found")
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigurationError(str(path), f"invalid JSON: {exc}")
        if not isinstance(payload, dict):
            raise ConfigurationError(str(path), "expected a JSON object")
        return {str(k): str(v) for k, v in payload.items() if v is not None}
    return _parse_env_file(path)


@dataclass
class Config:
    data_dir: str
    data_url: str
    catalogue_path: str
    catalogue_ttl: Optional[int]
    request_timeout: float
    output_dir: str
    default_label: str
    log_level: str

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise ConfigurationError(
                "PREDBOARD_REQUEST_TIMEOUT",
                f"must be positive, got {self.request_timeout}",
            )
        if not self.catalogue_path:
            raise ConfigurationError("PREDBOARD_CATALOGUE_PATH", "must not be empty")

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            data_dir=os.environ.get("PREDBOARD_DATA_DIR", _DEFAULT_DATA_DIR),
            data_url=os.environ.get("PREDBOARD_DATA_URL", ""),
            catalogue_path=os.environ.get("PREDBOARD_CATALOGUE_PATH", CATALOGUE_RESOURCE),
            catalogue_ttl=_coerce_optional_int(os.environ.get("PREDBOARD_CATALOGUE_TTL")),
            request_timeout=_coerce_float(
                os.environ.get("PREDBOARD_REQUEST_TIMEOUT"),
                _DEFAULT_REQUEST_TIMEOUT,
            ),
            output_dir=os.environ.get("PREDBOARD_OUTPUT_DIR", _DEFAULT_OUTPUT_DIR),
            default_label=os.environ.get("PREDBOARD_DEFAULT_LABEL", DEFAULT_DATASET_LABEL),
            log_level=os.environ.get("PREDBOARD_LOG_LEVEL", _DEFAULT_LOG_LEVEL),
        )

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        env_config = cls.from_env()
        if not config_path:
            return env_config

        file_data = _load_config_data(Path(config_path))
        return cls(
            data_dir=file_data.get("PREDBOARD_DATA_DIR", env_config.data_dir),
            data_url=file_data.get("PREDBOARD_DATA_URL", env_config.data_url),
            catalogue_path=file_data.get("PREDBOARD_CATALOGUE_PATH", env_config.catalogue_path),
            catalogue_ttl=(
                _coerce_optional_int(file_data.get("PREDBOARD_CATALOGUE_TTL"))
                if file_data.get("PREDBOARD_CATALOGUE_TTL") not in (None, "")
                else env_config.catalogue_ttl
            ),
            request_timeout=_coerce_float(
                file_data.get("PREDBOARD_REQUEST_TIMEOUT"),
                env_config.request_timeout,
            ),
            output_dir=file_data.get("PREDBOARD_OUTPUT_DIR", env_config.output_dir),
            default_label=file_data.get("PREDBOARD_DEFAULT_LABEL", env_config.default_label),
            log_level=file_data.get("PREDBOARD_LOG_LEVEL", env_config.log_level),
        )

    def to_dict(self) -> Dict[str, str]:
        return {k: str(v) for k, v in asdict(self).items()}
