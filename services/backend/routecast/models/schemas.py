"""Pydantic schemas for route and weather payloads."""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

# Keeps the upstream form: 18 stays 18, 18.5 stays 18.5.
Number = Union[int, float]


class UpstreamModel(BaseModel):
    """Lenient base for bodies produced by third-party services.

    Keys this service does not know about are carried through to the response.
    """

    model_config = ConfigDict(extra="allow")


class Coords(UpstreamModel):
    lat: Optional[Number] = None
    lng: Optional[Number] = None


class UpstreamWeather(UpstreamModel):
    description: str
    temperature: Number


class WeatherSample(UpstreamWeather):
    id: str


class RouteStep(UpstreamModel):
    direction: Optional[str] = None
    location: Optional[Coords] = None

    def coordinates(self) -> Optional[Coords]:
        """Location if both latitude and longitude are present."""
        if self.location is None:
            return None
        if self.location.lat is None or self.location.lng is None:
            return None
        return self.location


class RouteStepWithWeather(RouteStep):
    weather: Optional[WeatherSample] = None


class RouteResponse(UpstreamModel):
    duration: Optional[Number] = None
    distance: Optional[Number] = None
    steps: Optional[List[RouteStepWithWeather]] = None

    def to_payload(self) -> dict:
        """JSON-ready body; keys the upstream never sent stay absent."""
        return self.model_dump(mode="json", exclude_unset=True)
