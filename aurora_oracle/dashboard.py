"""Forecast dashboard state: current location plus the latest applied forecast."""

import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .capability import AuroraCapability
from .errors import ProviderError
from .models import Coordinates, GroundingSource, WeatherReport
from .prompts import FORECAST_FAILURE_TEXT


LOCATION_DENIED_TEXT = "Location access denied. Using default (Reykjavik)."


class DashboardState(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    location: Optional[Coordinates] = None
    location_error: Optional[str] = None
    weather: Optional[WeatherReport] = None
    raw_text: str = ""
    sources: List[GroundingSource] = Field(default_factory=list)
    loading: bool = False
    demo_mode: bool = False


class Dashboard:
    """Applies forecast results to a single view, newest request wins.

    Every load takes a sequence number; a result that resolves after a newer
    load has started is dropped instead of overwriting the newer one.
    """

    def __init__(self, capability: AuroraCapability, default_coords: Coordinates) -> None:
        self._capability = capability
        self._default_coords = default_coords
        self._seq = 0
        self._in_flight = 0
        self.location: Optional[Coordinates] = None
        self.location_error: Optional[str] = None
        self.weather: Optional[WeatherReport] = None
        self.raw_text = ""
        self.sources: List[GroundingSource] = []

    async def set_location(self, coords: Optional[Coordinates]) -> DashboardState:
        if coords is None:
            self.location_error = LOCATION_DENIED_TEXT
            coords = self._default_coords
        else:
            self.location_error = None
        self.location = coords
        return await self._load(coords)

    async def refresh(self) -> DashboardState:
        if self.location is None:
            return self.snapshot()
        return await self._load(self.location)

    async def _load(self, coords: Coordinates) -> DashboardState:
        self._seq += 1
        seq = self._seq
        self._in_flight += 1
        try:
            result = await self._capability.fetch_forecast(coords)
        except ProviderError as e:
            logging.error("Failed to load weather data: %s", e)
            if seq == self._seq:
                self.raw_text = FORECAST_FAILURE_TEXT
            return self.snapshot()
        finally:
            self._in_flight -= 1

        if seq != self._seq:
            logging.info("Dropping stale forecast #%d (latest is #%d)", seq, self._seq)
            return self.snapshot()
        self.weather = result.data
        self.raw_text = result.raw_text
        self.sources = list(result.sources)
        return self.snapshot()

    def snapshot(self) -> DashboardState:
        return DashboardState(
            location=self.location,
            location_error=self.location_error,
            weather=self.weather,
            raw_text=self.raw_text,
            sources=self.sources,
            loading=self._in_flight > 0,
            demo_mode=self._capability.demo_mode,
        )
