"""Unit tests for environment and file-based configuration."""

import json

import pytest

from predboard.config import Config
from predboard.exceptions import ConfigurationError

_ENV_KEYS = (
    "PREDBOARD_DATA_DIR",
    "PREDBOARD_DATA_URL",
    "PREDBOARD_CATALOGUE_PATH",
    "PREDBOARD_CATALOGUE_TTL",
    "PREDBOARD_REQUEST_TIMEOUT",
    "PREDBOARD_OUTPUT_DIR",
    "PREDBOARD_DEFAULT_LABEL",
    "PREDBOARD_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_from_env_defaults():
    config = Config.from_env()
    assert config.data_dir == "data"
    assert config.data_url == ""
    assert config.catalogue_path == "index.json"
    assert config.catalogue_ttl is None
    assert config.request_timeout == 15.0
    assert config.default_label == "Custom dataset"
    assert config.log_level == "INFO"


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("PREDBOARD_DATA_URL", "https://example.test/data")
    monkeypatch.setenv("PREDBOARD_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("PREDBOARD_CATALOGUE_TTL", "60")

    config = Config.from_env()
    assert config.data_url == "https://example.test/data"
    assert config.request_timeout == 2.5
    assert config.catalogue_ttl == 60


@pytest.mark.parametrize("raw", ["0", "-5", "soon"])
def test_catalogue_ttl_falls_back_to_no_expiry(monkeypatch, raw):
    monkeypatch.setenv("PREDBOARD_CATALOGUE_TTL", raw)
    assert Config.from_env().catalogue_ttl is None


def test_unparseable_timeout_uses_default(monkeypatch):
    monkeypatch.setenv("PREDBOARD_REQUEST_TIMEOUT", "fast")
    assert Config.from_env().request_timeout == 15.0


def test_non_positive_timeout_rejected(monkeypatch):
    monkeypatch.setenv("PREDBOARD_REQUEST_TIMEOUT", "0")
    with pytest.raises(ConfigurationError, match="PREDBOARD_REQUEST_TIMEOUT"):
        Config.from_env()


def test_load_env_file(tmp_path):
    path = tmp_path / "predboard.env"
    path.write_text(
        "# local overrides\n"
        "PREDBOARD_DATA_DIR='/srv/data'\n"
        "PREDBOARD_LOG_LEVEL=DEBUG\n"
        "not a setting\n",
        encoding="utf-8",
    )
    config = Config.load(str(path))
    assert config.data_dir == "/srv/data"
    assert config.log_level == "DEBUG"
    assert config.catalogue_path == "index.json"


def test_load_json_file(tmp_path):
    path = tmp_path / "predboard.json"
    path.write_text(json.dumps({
        "PREDBOARD_OUTPUT_DIR": "out",
        "PREDBOARD_CATALOGUE_TTL": 30,
        "PREDBOARD_DATA_URL": None,
    }), encoding="utf-8")
    config = Config.load(str(path))
    assert config.output_dir == "out"
    assert config.catalogue_ttl == 30
    assert config.data_url == ""


def test_load_missing_or_invalid_file(tmp_path):
    with pytest.raises(ConfigurationError, match="config file not found"):
        Config.load(str(tmp_path / "missing.env"))

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="invalid JSON"):
        Config.load(str(broken))


def test_to_dict_stringifies_values():
    payload = Config.from_env().to_dict()
    assert payload["request_timeout"] == "15.0"
    assert payload["catalogue_ttl"] == "None"
