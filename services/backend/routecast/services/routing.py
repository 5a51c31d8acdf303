"""Client for the third-party routing service."""

from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import quote

import requests
from pydantic import ValidationError

from routecast.config import Settings, get_settings
from routecast.models.schemas import RouteResponse

logger = logging.getLogger(__name__)

ROUTE_PATH_TEMPLATE = "/route/{origin}/{destination}"


class RouteServiceError(RuntimeError):
    """Raised when the routing service cannot produce a usable route payload."""


def _route_url(base_url: str, origin: str, destination: str) -> str:
    # Free-form names: keep each one a single path segment.
    path = ROUTE_PATH_TEMPLATE.format(
        origin=quote(origin, safe=""),
        destination=quote(destination, safe=""),
    )
    return f"{base_url}{path}"


def _parse_route(payload: Any) -> RouteResponse:
    if not isinstance(payload, Mapping):
        raise RouteServiceError("Route payload is not a JSON object.")
    try:
        return RouteResponse.model_validate(payload)
    except ValidationError as exc:
        raise RouteServiceError(f"Route payload invalid: {exc}") from exc


def fetch_route(origin: str, destination: str, *, settings: Settings | None = None) -> RouteResponse:
    settings = settings or get_settings()
    url = _route_url(settings.routing_base_url, origin, destination)
    try:
        response = requests.get(url, timeout=settings.routing_timeout_s)
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as exc:
        raise RouteServiceError(f"Route request failed: {exc}") from exc
    except ValueError as exc:
        raise RouteServiceError(f"Route response is not JSON: {exc}") from exc

    route = _parse_route(payload)
    logger.debug(
        "Route %r -> %r: %d steps",
        origin,
        destination,
        len(route.steps or []),
    )
    return route
