"""Demo mode: deterministic stand-ins used when no Gemini credential is configured."""

import asyncio
import logging
from typing import Optional

from .config import CONFIG, _Config
from .models import (
    Coordinates,
    ForecastPoint,
    GroundingSource,
    NearestDetection,
    PhotoAnalysis,
    RecommendedSettings,
    SearchResult,
    SolarFlare,
    VisibilityChance,
    WeatherReport,
)


DEMO_CHAT_REPLY = (
    "I am currently in Demo Mode because the API Key is missing. I cannot process live "
    "queries, but I can confirm your systems are operational! 🚀"
)

DEMO_SOURCE = GroundingSource(uri="https://www.swpc.noaa.gov/", title="NOAA Space Weather (Simulated)")

DEMO_WEATHER_REPORT = WeatherReport(
    kp_index=5.33,
    solar_wind_speed=520,
    solar_wind_density=12.5,
    bz=-6.2,
    probability_score=78,
    summary=(
        "⚠️ DEMO MODE: API Key not detected. Displaying simulated storm conditions. \n\n"
        "A moderate geomagnetic storm (G2) is in progress due to a Coronal Hole High Speed "
        "Stream (CH HSS). High-latitude observers should have excellent visibility."
    ),
    visibility_chance=VisibilityChance.HIGH,
    tonights_window="22:00 - 02:00 Local",
    nearest_detection=NearestDetection(location="Tromsø, Norway", status="Visual Sighting Confirmed"),
    solar_flare=SolarFlare(
        flare_class="M2.4",
        time="14:30 UTC",
        impact="Minor Radio Blackout (R1)",
        region="AR3664",
        eta="Tomorrow 08:00 UTC",
    ),
    forecast=[
        ForecastPoint(time="Now", kp=5),
        ForecastPoint(time="+1h", kp=6),
        ForecastPoint(time="+2h", kp=5),
        ForecastPoint(time="+3h", kp=4),
        ForecastPoint(time="+4h", kp=3),
        ForecastPoint(time="+5h", kp=3),
    ],
    location_name="Simulated Sector (Demo)",
)

DEMO_PHOTO_ANALYSIS = PhotoAnalysis(
    cloud_cover="Partly Cloudy (Simulated)",
    darkness_rating="Bortle 4 (Rural Transition)",
    recommended_settings=RecommendedSettings(
        iso="1600 - 3200",
        shutter_speed="8s - 15s",
        aperture="f/2.8 or lower",
        focus="Infinity (Manual)",
    ),
    checklist=[
        "Use a tripod (Mandatory)",
        "Set 2s timer to avoid shake",
        "Shoot in RAW format",
    ],
    feedback="Demo Mode: Great conditions simulated! Look for gaps in the clouds to the North.",
)


class DemoChatResponder:
    async def send(self, message: str) -> str:
        return DEMO_CHAT_REPLY


class DemoCapability:
    demo_mode = True

    def __init__(self, config: Optional[_Config] = None) -> None:
        config = config or CONFIG
        self.forecast_delay_sec = config.demo_forecast_delay_sec
        self.photo_delay_sec = config.demo_photo_delay_sec

    async def fetch_forecast(self, coords: Coordinates) -> SearchResult:
        logging.info("Demo mode: simulated forecast for %s, %s", coords.latitude, coords.longitude)
        await asyncio.sleep(self.forecast_delay_sec)
        return SearchResult(
            data=DEMO_WEATHER_REPORT,
            raw_text=DEMO_WEATHER_REPORT.summary or "",
            sources=[DEMO_SOURCE],
        )

    async def analyze_photo(self, image: bytes, device: str) -> Optional[PhotoAnalysis]:
        await asyncio.sleep(self.photo_delay_sec)
        return DEMO_PHOTO_ANALYSIS

    def create_chat(self) -> DemoChatResponder:
        return DemoChatResponder()
