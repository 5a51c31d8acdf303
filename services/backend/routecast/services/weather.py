"""Weather lookups for route step coordinates."""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import Any, Mapping

import requests
from pydantic import ValidationError

from routecast.config import Settings, get_settings
from routecast.models.schemas import Coords, UpstreamWeather, WeatherSample

logger = logging.getLogger(__name__)

WEATHER_PATH_TEMPLATE = "/weather/{lat}/{lng}"


class WeatherServiceError(RuntimeError):
    """Raised when the upstream weather provider fails."""


def format_coordinate(value: float | int | None) -> str:
    """Render a coordinate the way a JSON producer prints it.

    Integral floats lose their ``.0`` (``10.0 -> "10"``); everything else
    uses the shortest round-trip digits in positional notation
    (``1e-05 -> "0.00001"``). ``None`` renders as ``""``.
    """
    if value is None:
        return ""
    number = float(value)
    if math.isfinite(number) and number.is_integer():
        return str(int(number))
    text = repr(number)
    if "e" in text and math.isfinite(number):
        text = format(Decimal(text), "f")
    return text


def composite_key(lat: float | int | None, lng: float | int | None) -> str:
    """Exact-match key joining a weather sample back to its step."""
    return f"{format_coordinate(lat)}:{format_coordinate(lng)}"


def _weather_url(base_url: str, coords: Coords) -> str:
    path = WEATHER_PATH_TEMPLATE.format(
        lat=format_coordinate(coords.lat),
        lng=format_coordinate(coords.lng),
    )
    return f"{base_url}{path}"


def _parse_weather(payload: Any) -> UpstreamWeather:
    if not isinstance(payload, Mapping):
        raise WeatherServiceError("Weather payload is not a JSON object.")
    try:
        return UpstreamWeather.model_validate(payload)
    except ValidationError as exc:
        raise WeatherServiceError(f"Weather payload invalid: {exc}") from exc


def fetch_weather(coords: Coords, *, settings: Settings | None = None) -> WeatherSample:
    settings = settings or get_settings()
    url = _weather_url(settings.weather_base_url, coords)
    try:
        response = requests.get(url, timeout=settings.weather_timeout_s)
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as exc:
        raise WeatherServiceError(f"Weather request failed: {exc}") from exc
    except ValueError as exc:
        raise WeatherServiceError(f"Weather response is not JSON: {exc}") from exc

    weather = _parse_weather(payload)
    logger.debug("Weather at %s,%s: %s", coords.lat, coords.lng, weather.description)
    return WeatherSample.model_validate({**weather.model_dump(), "id": composite_key(coords.lat, coords.lng)})
