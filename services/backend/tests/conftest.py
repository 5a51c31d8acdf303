"""Pytest fixtures and fakes for the upstream routing and weather services."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest
import requests

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from routecast.config import Settings, get_settings  # noqa: E402

ROUTING_URL = "https://routing.test/api"
WEATHER_URL = "https://weather.test/api"


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, invalid_json: bool = False):
        self._payload = payload
        self.status_code = status_code
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")
        return None


class FakeUpstream:
    """Routes fake ``requests.get`` calls to canned route and weather replies."""

    def __init__(self) -> None:
        self.route: Callable[[], FakeResponse] = lambda: FakeResponse({"duration": 0, "distance": 0, "steps": None})
        self.weather: Dict[str, Callable[[], FakeResponse]] = {}
        self.calls: List[str] = []

    def set_route(self, payload: Any = None, **kwargs: Any) -> None:
        self.route = lambda: FakeResponse(payload, **kwargs)

    def fail_route(self, exc: Exception) -> None:
        def _raise() -> FakeResponse:
            raise exc

        self.route = _raise

    def set_weather(self, lat_lng: str, payload: Any = None, **kwargs: Any) -> None:
        self.weather[lat_lng] = lambda: FakeResponse(payload, **kwargs)

    def fail_weather(self, lat_lng: str, exc: Exception | None = None) -> None:
        error = exc or requests.ConnectionError("weather service unreachable")

        def _raise() -> FakeResponse:
            raise error

        self.weather[lat_lng] = _raise

    @property
    def route_calls(self) -> List[str]:
        return [url for url in self.calls if url.startswith(ROUTING_URL)]

    @property
    def weather_calls(self) -> List[str]:
        return [url for url in self.calls if url.startswith(WEATHER_URL)]

    def get(self, url: str, params=None, **kwargs):  # pylint: disable=unused-argument
        self.calls.append(url)
        if url.startswith(f"{ROUTING_URL}/route/"):
            return self.route()
        if url.startswith(f"{WEATHER_URL}/weather/"):
            lat, lng = url[len(f"{WEATHER_URL}/weather/"):].split("/")
            reply = self.weather.get(f"{lat}/{lng}")
            if reply is None:
                raise requests.ConnectionError(f"No weather stub for {lat}/{lng}")
            return reply()
        raise AssertionError(f"Unexpected URL {url}")


@pytest.fixture
def settings() -> Settings:
    return Settings(routing_base_url=ROUTING_URL, weather_base_url=WEATHER_URL)


@pytest.fixture
def upstream(monkeypatch) -> FakeUpstream:
    from routecast.services import routing as routing_service
    from routecast.services import weather as weather_service

    fake = FakeUpstream()
    monkeypatch.setattr(routing_service.requests, "get", fake.get)
    monkeypatch.setattr(weather_service.requests, "get", fake.get)
    return fake


@pytest.fixture
def client(settings):
    pytest.importorskip("httpx", reason="httpx is required for FastAPI TestClient")
    from fastapi.testclient import TestClient

    from routecast.main import app

    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
