import os

# Service settings are read at import time
os.environ["AURORA_RATE_LIMIT"] = "1000/minute"
os.environ.pop("AURORA_API_KEY", None)

import json
from types import SimpleNamespace
from typing import Any, List, Optional

import pytest

from aurora_oracle.config import _Config
from aurora_oracle.fallback import DemoCapability


WEATHER_PAYLOAD = {
    "kpIndex": 6.33,
    "solarWindSpeed": 610,
    "solarWindDensity": 14.2,
    "bz": -8.1,
    "probabilityScore": 84,
    "visibilityChance": "Extreme",
    "tonightsWindow": "23:00 - 02:00",
    "nearestDetection": {"location": "Abisko, Sweden", "status": "Visual Sighting"},
    "solarFlare": {
        "class": "X1.5",
        "time": "09:12 UTC",
        "impact": "Radio blackout on sunlit side",
        "region": "AR3664",
        "eta": "Oct 17 18:00 UTC",
    },
    "locationName": "Kiruna, Sweden",
    "forecast": [
        {"time": "Now", "kp": 6},
        {"time": "+1h", "kp": 7},
        {"time": "+2h", "kp": 6},
        {"time": "+3h", "kp": 5},
        {"time": "+4h", "kp": 5},
        {"time": "+5h", "kp": 4},
    ],
}

PHOTO_PAYLOAD = {
    "cloudCover": "Clear",
    "darknessRating": "Good (Bortle 3)",
    "recommendedSettings": {
        "iso": "3200",
        "shutterSpeed": "6s",
        "aperture": "f/1.8",
        "focus": "Manual, infinity",
    },
    "checklist": ["Mount on a tripod", "Disable night mode", "Lock focus on a star"],
    "feedback": "Clear skies to the north, go for it.",
}


def forecast_reply(narrative: str = "Captain's Log: the sky is restless tonight.") -> str:
    return f"{narrative}\n\n```json\n{json.dumps(WEATHER_PAYLOAD, indent=2)}\n```\n"


def fake_response(text: str, chunks: Optional[List[Any]] = None) -> SimpleNamespace:
    metadata = SimpleNamespace(grounding_chunks=chunks or [])
    return SimpleNamespace(text=text, candidates=[SimpleNamespace(grounding_metadata=metadata)])


def web_chunk(uri: str, title: str) -> SimpleNamespace:
    return SimpleNamespace(web=SimpleNamespace(uri=uri, title=title))


class FakeModel:
    """Stands in for genai.GenerativeModel."""

    def __init__(self, response: Any = None, error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Any] = []
        self.chats: List["FakeChat"] = []

    async def generate_content_async(self, contents: Any) -> Any:
        self.calls.append(contents)
        if self.error is not None:
            raise self.error
        return self.response

    def start_chat(self, history=None) -> "FakeChat":
        chat = FakeChat()
        self.chats.append(chat)
        return chat


class FakeChat:
    def __init__(self) -> None:
        self.sent: List[str] = []
        self.error: Optional[Exception] = None

    async def send_message_async(self, message: str) -> Any:
        self.sent.append(message)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=f"echo: {message}")


@pytest.fixture
def fast_config() -> _Config:
    return _Config({"DEMO_FORECAST_DELAY_SEC": "0.01", "DEMO_PHOTO_DELAY_SEC": "0.01"})


@pytest.fixture
def demo_capability(fast_config) -> DemoCapability:
    return DemoCapability(fast_config)
