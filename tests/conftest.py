"""Shared test fixtures for all test modules."""

import json
from typing import Any

import httpx
import pytest

from signoz_tools.client import SigNozClient
from signoz_tools.config import SigNozConfig


class FakeBackend:
    """Stands in for the SigNoz query_range endpoint.

    Each queued item answers one request: a dict is returned as a 200 JSON
    body, an httpx.Response is returned as-is, an exception is raised.
    Every request body is recorded in ``payloads``.
    """

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []
        self.payloads: list[dict[str, Any]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.payloads.append(json.loads(request.content))
        if not self.responses:
            raise AssertionError("Unexpected request to fake backend")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, httpx.Response):
            return item
        return httpx.Response(200, json=item)

    @property
    def last_query(self) -> dict[str, Any]:
        """Builder query ``A`` of the most recent request."""
        return self.payloads[-1]["compositeQuery"]["builderQueries"]["A"]


@pytest.fixture
def config() -> SigNozConfig:
    return SigNozConfig(base_url="https://signoz.example.com/", api_key="test-key")


@pytest.fixture
def make_client(config: SigNozConfig):
    """Factory fixture: make_client(*responses) -> (client, backend)."""

    def _make(*responses: Any) -> tuple[SigNozClient, FakeBackend]:
        backend = FakeBackend(*responses)
        return SigNozClient(config, transport=httpx.MockTransport(backend)), backend

    return _make


def table_response(headers: list[str], rows: list[list[Any]]) -> dict[str, Any]:
    return {"status": "success", "data": {"result": [{"queryName": "A", "table": {"headers": headers, "rows": rows}}]}}


def series_response(series: list[dict[str, Any]]) -> dict[str, Any]:
    return {"status": "success", "data": {"result": [{"queryName": "A", "series": series}]}}


def list_response(entries: list[dict[str, Any]]) -> dict[str, Any]:
    return {"status": "success", "data": {"result": [{"queryName": "A", "list": entries}]}}
