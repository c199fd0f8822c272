"""Mock implementations for testing predboard."""

import json

from predboard.ingestion.sources import DataSource, SourceResponse


class StubSource(DataSource):
    """In-memory source that records every requested path."""

    def __init__(self, resources=None, statuses=None):
        self.resources = dict(resources or {})
        self.statuses = dict(statuses or {})
        self.calls = []

    def fetch(self, path):
        self.calls.append(path)
        if path in self.statuses:
            return SourceResponse(path=path, status=self.statuses[path])
        if path not in self.resources:
            return SourceResponse(path=path, status=404)
        return SourceResponse(path=path, status=200, text=json.dumps(self.resources[path]))


class StubResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text


class StubSession:
    """Stands in for ``requests.Session`` and records each GET."""

    def __init__(self, response=None, error=None):
        self.response = response or StubResponse()
        self.error = error
        self.requests = []

    def get(self, url, headers=None, timeout=None):
        self.requests.append({"url": url, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response
