"""Byte/JSON sources that serve the catalogue index and dataset files.

A source maps a relative resource path such as ``index.json`` or
``gru-daily.json`` to a response carrying a status code and body. Sources
never raise for a missing resource; they report a non-success status and
leave the decision to the caller.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union
import json
import logging

import requests
from requests.adapters import HTTPAdapter

from predboard.exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass
class SourceResponse:
    path: str
    status: int
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        try:
            return json.loads(self.text)
        except json.JSONDecodeError as exc:
            raise TransportError(
                f'Resource "{self.path}" is not valid JSON.',
                resource=self.path,
                status_code=self.status,
                original_error=exc,
            )


class DataSource:
    def fetch(self, path: str) -> SourceResponse:
        raise NotImplementedError


class LocalDataSource(DataSource):
    """Serve resources from a directory on disk."""

    def __init__(self, base_dir: Union[str, Path]) -> None:
        self._base_dir = Path(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _resolve(self, path: str) -> Optional[Path]:
        """Return the file for ``path``, or None when it escapes ``base_dir``."""
        root = self._base_dir.resolve()
        target = (root / path).resolve()
        try:
            target.relative_to(root)
        except ValueError:
            return None
        return target

    def fetch(self, path: str) -> SourceResponse:
        target = self._resolve(path)
        if target is None:
            logger.warning("Refusing resource %r outside %s", path, self._base_dir)
            return SourceResponse(path=path, status=404)
        if not target.is_file():
            logger.debug("Resource %s not found under %s", path, self._base_dir)
            return SourceResponse(path=path, status=404)
        try:
            return SourceResponse(path=path, status=200, text=target.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read %s: %s", target, exc)
            return SourceResponse(path=path, status=500)


class HttpDataSource(DataSource):
    """Serve resources from an HTTP base URL with a pooled session."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=2, pool_maxsize=2, max_retries=0)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self._session = session

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def fetch(self, path: str) -> SourceResponse:
        url = self.url_for(path)
        try:
            response = self._session.get(
                url,
                headers={"Cache-Control": "no-cache"},
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as exc:
            raise TransportError(f"Request for {url} timed out.", resource=path, original_error=exc)
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"Request for {url} failed.", resource=path, original_error=exc)
        return SourceResponse(path=path, status=response.status_code, text=response.text)


def build_data_source(config) -> DataSource:
    """Pick the HTTP source when a base URL is configured, else the local directory."""
    if config.data_url:
        logger.info("Using HTTP data source at %s", config.data_url)
        return HttpDataSource(config.data_url, timeout=config.request_timeout)
    logger.info("Using local data source at %s", config.data_dir)
    return LocalDataSource(config.data_dir)
