"""Route endpoint: directions decorated with weather along the way."""

from __future__ import annotations

import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from fastapi.responses import JSONResponse

from routecast.config import Settings, get_settings
from routecast.models.schemas import RouteResponse
from routecast.services.route_weather import build_route_with_weather
from routecast.services.routing import RouteServiceError

router = APIRouter(prefix="/api", tags=["route"])

logger = logging.getLogger(__name__)


def require_token(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Bearer check, active only when ``ROUTE_API_TOKEN`` is configured."""
    expected = settings.route_api_token
    if not expected:
        return
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not secrets.compare_digest(token.strip().encode(), expected.encode()):
        raise HTTPException(
            status_code=401,
            detail="Missing or invalid bearer token.",
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.get(
    "/route",
    response_model=RouteResponse,
    responses={400: {"description": "Routing service failure; body is null."}},
    dependencies=[Depends(require_token)],
)
def route_with_weather(
    origin: str = Query(default="", alias="from"),
    destination: str = Query(default="", alias="to"),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    try:
        route = build_route_with_weather(origin, destination, settings=settings)
    except RouteServiceError as exc:
        logger.error("Route %r -> %r failed: %s", origin, destination, exc)
        return JSONResponse(status_code=400, content=None)
    except Exception:
        logger.exception("Unexpected error building route %r -> %r", origin, destination)
        return JSONResponse(status_code=400, content=None)
    return JSONResponse(status_code=200, content=route.to_payload())
