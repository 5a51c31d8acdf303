from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routecast.api.route import router as route_router
from routecast.config import get_settings
from routecast.utils.logging_colors import install_color_handler

logger = logging.getLogger(__name__)


app = FastAPI(title="Routecast Backend", version="1.0.0")


@app.on_event("startup")
def _startup() -> None:
    settings = get_settings()
    install_color_handler(logging.getLogger("routecast"), settings.log_level, use_color=settings.log_color)
    logger.info(
        "Routecast ready: routing=%s weather=%s auth=%s",
        settings.routing_base_url,
        settings.weather_base_url,
        "token" if settings.route_api_token else "trusted-network",
    )


allowed_origins: List[str] = get_settings().cors_origins or ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allowed_origins != ["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(route_router)


@app.get("/")
def root() -> dict[str, object]:
    settings = get_settings()
    return {
        "service": "routecast-backend",
        "routing": settings.routing_base_url,
        "weather": settings.weather_base_url,
    }


@app.get("/healthz")
def healthz() -> dict[str, object]:
    return {"ok": True}
