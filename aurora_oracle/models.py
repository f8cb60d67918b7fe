"""Typed records for forecasts, photo advice and chat turns.

Field names are snake_case in Python and camelCase on the wire, matching the
JSON block the model is asked to produce.
"""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


MPH_PER_KM_S = 2236.94


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Coordinates(_Record):
    latitude: float
    longitude: float

    @field_validator("latitude", "longitude")
    @classmethod
    def _finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("coordinate must be a finite number")
        return v


class VisibilityChance(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    EXTREME = "Extreme"

    @classmethod
    def parse(cls, value: Any) -> "VisibilityChance":
        """Map free text such as "Moderate to High" onto the highest level it mentions."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        for level in reversed(list(cls)):
            if level.value.lower() in text:
                return level
        return cls.LOW


class NearestDetection(_Record):
    location: str
    status: str
    coordinates: Optional[str] = None  # "lat, long"


class SolarFlare(_Record):
    flare_class: str = Field(alias="class")  # "X1.5", "M5.0" or "None"
    time: str
    impact: str
    region: Optional[str] = None
    eta: Optional[str] = None

    @property
    def is_significant(self) -> bool:
        return self.flare_class.strip().lower() != "none"

    @property
    def is_x_class(self) -> bool:
        return self.flare_class.strip().upper().startswith("X")


class ForecastPoint(_Record):
    time: str
    kp: float


class WeatherReport(_Record):
    kp_index: float
    solar_wind_speed: float  # km/s
    solar_wind_density: float  # p/cm^3
    bz: float  # nT
    probability_score: int = Field(ge=0, le=100)
    visibility_chance: VisibilityChance
    tonights_window: str
    nearest_detection: Optional[NearestDetection] = None
    solar_flare: Optional[SolarFlare] = None
    forecast: List[ForecastPoint] = Field(default_factory=list)  # Now, +1h .. +5h
    location_name: str
    timestamp: str = Field(default_factory=_utc_now_iso)
    summary: Optional[str] = None

    @field_validator("probability_score", mode="before")
    @classmethod
    def _clamp_score(cls, v: Any) -> Any:
        # models sometimes answer 78.5 or 105; keep the report and pin the score to 0..100
        try:
            score = round(float(v))
        except (TypeError, ValueError, OverflowError):
            return v
        return min(100, max(0, score))

    @field_validator("visibility_chance", mode="before")
    @classmethod
    def _coerce_visibility(cls, v: Any) -> Any:
        return VisibilityChance.parse(v)

    def wind_speed_display(self, unit_system: Literal["metric", "imperial"] = "metric") -> str:
        if unit_system == "imperial":
            return f"{self.solar_wind_speed * MPH_PER_KM_S:,.0f} mph"
        return f"{self.solar_wind_speed:g} km/s"


class GroundingSource(_Record):
    uri: str
    title: str


class SearchResult(_Record):
    data: Optional[WeatherReport] = None
    raw_text: str = ""
    sources: List[GroundingSource] = Field(default_factory=list)


class RecommendedSettings(_Record):
    iso: str
    shutter_speed: str
    aperture: str
    focus: str


class PhotoAnalysis(_Record):
    cloud_cover: str
    darkness_rating: str  # e.g. "Good (Bortle 4)"
    recommended_settings: RecommendedSettings
    checklist: List[str]
    feedback: str


class ChatMessage(_Record):
    id: str
    role: Literal["user", "model"]
    text: str
    timestamp: int  # ms since epoch
