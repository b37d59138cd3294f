"""Tests for the HTTP trigger server, run against a real socket on localhost."""

import asyncio
import json
import threading
import urllib.error
import urllib.request

import pytest

from target_dns.server.trigger import TriggerServer
from target_dns.utils.errors import FetchError


class StubController:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.runs = 0

    async def run_once(self):
        if self.error:
            raise self.error
        self.runs += 1

    async def sync_and_list(self):
        await self.run_once()
        return [{"id": "r1", "name": "db1.internal.example", "content": "10.0.0.5"}]


@pytest.fixture
def serve():
    """Start a TriggerServer on an ephemeral port with a background event loop."""
    loop = asyncio.new_event_loop()
    loop_thread = threading.Thread(target=loop.run_forever, daemon=True)
    loop_thread.start()
    servers = []

    def start(controller):
        server = TriggerServer(controller, loop, host="127.0.0.1", port=0)
        server.start()
        servers.append(server)
        return f"http://127.0.0.1:{server.port}"

    yield start

    for server in servers:
        server.stop()
    loop.call_soon_threadsafe(loop.stop)
    loop_thread.join(timeout=5)
    loop.close()


def request(url: str, method: str = "GET", headers: dict | None = None):
    req = urllib.request.Request(url, method=method, headers=headers or {})
    try:
        with urllib.request.urlopen(req, timeout=5) as response:
            return response.status, response.read().decode()
    except urllib.error.HTTPError as e:
        return e.code, e.read().decode()


def test_get_sync_returns_records_json(serve) -> None:
    controller = StubController()
    base = serve(controller)

    status, body = request(f"{base}/sync")

    assert status == 200
    assert json.loads(body) == [
        {"id": "r1", "name": "db1.internal.example", "content": "10.0.0.5"}
    ]
    assert controller.runs == 1


def test_get_root_from_scheduler_returns_text(serve) -> None:
    controller = StubController()
    base = serve(controller)

    status, body = request(f"{base}/", headers={"User-Agent": "Cloudflare-Workers"})

    assert status == 200
    assert "DNS records updated" in body
    assert controller.runs == 1


def test_sync_error_returns_500(serve) -> None:
    base = serve(StubController(error=FetchError("Failed to fetch targets: 403")))

    status, body = request(f"{base}/sync")

    assert status == 500
    assert body == "Error: Failed to fetch targets: 403"


def test_health(serve) -> None:
    base = serve(StubController())

    status, body = request(f"{base}/health")

    assert status == 200
    assert json.loads(body) == {"status": "healthy"}


@pytest.mark.parametrize("method, path", [("POST", "/sync"), ("DELETE", "/"), ("GET", "/other")])
def test_other_methods_and_paths_return_405(serve, method: str, path: str) -> None:
    controller = StubController()
    base = serve(controller)

    status, body = request(f"{base}{path}", method=method)

    assert status == 405
    assert body == "Method Not Allowed or Invalid Path"
    assert controller.runs == 0


def test_scheduler_sync_error_names_the_trigger(serve) -> None:
    base = serve(StubController(error=FetchError("Failed to fetch targets: 403")))

    status, body = request(f"{base}/sync", headers={"User-Agent": "Cloudflare-Workers"})

    assert status == 500
    assert body == "Error during scheduled HTTP execution: Failed to fetch targets: 403"


def test_head_returns_405_without_body(serve) -> None:
    controller = StubController()
    base = serve(controller)

    status, body = request(f"{base}/sync", method="HEAD")

    assert status == 405
    assert body == ""
    assert controller.runs == 0
