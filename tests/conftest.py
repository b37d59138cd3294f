"""Shared fixtures: a mocked Cloudflare client and SDK error factories."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import cloudflare
import httpx
import pytest

API_URL = "https://api.cloudflare.com/client/v4/"


@pytest.fixture
def cf_client() -> MagicMock:
    client = MagicMock()
    client.dns.records.list.return_value = []
    client.dns.records.batch.return_value = SimpleNamespace(posts=[], deletes=[])
    client.zero_trust.access.infrastructure.targets.list.return_value = []
    return client


@pytest.fixture
def status_error():
    def factory(status: int = 403, message: str = "Forbidden"):
        request = httpx.Request("GET", API_URL)
        response = httpx.Response(status, request=request)
        return cloudflare.APIStatusError(message, response=response, body=None)

    return factory


@pytest.fixture
def connection_error():
    def factory():
        return cloudflare.APIConnectionError(request=httpx.Request("GET", API_URL))

    return factory
