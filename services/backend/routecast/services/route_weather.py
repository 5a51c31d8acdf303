"""Route aggregation: join routing-service steps with per-coordinate weather."""

from __future__ import annotations

import logging
from concurrent.futures import ALL_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Dict, List, Tuple

from routecast.config import Settings, get_settings
from routecast.models.schemas import Coords, RouteResponse, RouteStepWithWeather, WeatherSample
from routecast.services import routing, weather

logger = logging.getLogger(__name__)

RouteFetcher = Callable[..., RouteResponse]
WeatherFetcher = Callable[..., WeatherSample]


def _lookup_weather(
    steps: List[RouteStepWithWeather],
    fetch_weather: WeatherFetcher,
    settings: Settings,
) -> Dict[str, WeatherSample]:
    """Fan out one lookup per coordinate-bearing step and keep the successes."""
    targets: List[Coords] = [coords for coords in (step.coordinates() for step in steps) if coords is not None]
    if not targets:
        return {}

    workers = settings.weather_max_workers or len(targets)
    pending: List[Tuple[Coords, Future]] = []
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="weather") as executor:
        for coords in targets:
            pending.append((coords, executor.submit(fetch_weather, coords, settings=settings)))
        wait([future for _, future in pending], return_when=ALL_COMPLETED)

    samples: Dict[str, WeatherSample] = {}
    failures = 0
    for coords, future in pending:
        exc = future.exception()
        if exc is not None:
            failures += 1
            logger.warning("Weather lookup failed for %s,%s: %s", coords.lat, coords.lng, exc)
            continue
        sample = future.result()
        samples[sample.id] = sample

    logger.info("Weather lookups: %d issued, %d failed", len(targets), failures)
    return samples


def build_route_with_weather(
    origin: str,
    destination: str,
    *,
    settings: Settings | None = None,
    fetch_route: RouteFetcher = routing.fetch_route,
    fetch_weather: WeatherFetcher = weather.fetch_weather,
) -> RouteResponse:
    """Fetch a route and attach current weather to every step with coordinates.

    :class:`routing.RouteServiceError` propagates; weather failures only
    leave the affected steps without a ``weather`` entry.
    """
    settings = settings or get_settings()
    route = fetch_route(origin, destination, settings=settings)
    if not route.steps:
        return route

    samples = _lookup_weather(route.steps, fetch_weather, settings)

    steps: List[RouteStepWithWeather] = []
    for step in route.steps:
        coords = step.coordinates()
        sample = samples.get(weather.composite_key(coords.lat, coords.lng)) if coords else None
        if sample is None:
            steps.append(step)
        else:
            steps.append(step.model_copy(update={"weather": sample}))
    return route.model_copy(update={"steps": steps})
