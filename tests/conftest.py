"""Shared pytest configuration for the project test suite."""
from __future__ import annotations

import asyncio
import sys
import threading
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import pytest
import requests
from aiohttp import web


# Ensure the repository root (which contains the ``overflow_watch`` package) is importable.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class DummyResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, invalid_json: bool = False):
        self._payload = payload
        self.status_code = status_code
        self._invalid_json = invalid_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self) -> Any:
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class DummySession:
    """Stands in for ``requests.Session`` with canned responses per path."""

    def __init__(self, routes: Optional[Dict[str, Any]] = None):
        self.routes = routes or {}
        self.calls: List[str] = []

    def get(self, url: str, timeout: Optional[float] = None) -> DummyResponse:
        self.calls.append(url)
        for path, outcome in self.routes.items():
            if url.endswith(path):
                if isinstance(outcome, Exception):
                    raise outcome
                if isinstance(outcome, DummyResponse):
                    return outcome
                return DummyResponse(outcome)
        return DummyResponse({"detail": "Not Found"}, status_code=404)


@pytest.fixture
def dummy_session_factory():
    return DummySession


@pytest.fixture
def dummy_response_factory():
    return DummyResponse


@pytest.fixture
def dashboard_url() -> Generator[str, None, None]:
    """Serve the dashboard API on ``127.0.0.1`` backed by a canned prediction source."""

    from overflow_watch.dashboard_server import DashboardApplication
    from overflow_watch.prediction_source import PredictionClient

    session = DummySession({
        "/predict_overflow": {"predicted_max_id_in_30_days": 2_160_000_000},
        "/current_max_id": {"current_max_id": 2_000_000_000},
    })
    client = PredictionClient(base_url="http://prediction.test", session=session)

    loop = asyncio.new_event_loop()
    ready = threading.Event()
    urls: List[str] = []

    def _run() -> None:
        asyncio.set_event_loop(loop)
        app = DashboardApplication(client=client).app
        runner = web.AppRunner(app)
        loop.run_until_complete(runner.setup())
        site = web.TCPSite(runner, host="127.0.0.1", port=0)
        loop.run_until_complete(site.start())
        sockets = site._server.sockets  # type: ignore[attr-defined]
        assert sockets, "aiohttp site did not expose any sockets"
        port = sockets[0].getsockname()[1]
        urls.append(f"http://127.0.0.1:{port}")
        ready.set()
        try:
            loop.run_forever()
        finally:
            loop.run_until_complete(runner.cleanup())
            loop.close()

    thread = threading.Thread(target=_run, name="dashboard-test-server", daemon=True)
    thread.start()
    if not ready.wait(timeout=10):
        raise RuntimeError("Timed out starting dashboard test server")

    try:
        yield urls[0]
    finally:
        if loop.is_running():
            loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout=5)
