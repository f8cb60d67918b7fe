"""The single seam between the app and the generative model.

Callers hold one capability for the life of the process and never check for a
missing credential themselves: demo mode is just another implementation.
"""

import logging
from typing import Optional, Protocol

from .config import CONFIG, _Config
from .fallback import DemoCapability
from .gemini import GeminiCapability
from .models import Coordinates, PhotoAnalysis, SearchResult


class ChatResponder(Protocol):
    async def send(self, message: str) -> str: ...


class AuroraCapability(Protocol):
    demo_mode: bool

    async def fetch_forecast(self, coords: Coordinates) -> SearchResult: ...

    async def analyze_photo(self, image: bytes, device: str) -> Optional[PhotoAnalysis]: ...

    def create_chat(self) -> ChatResponder: ...


def build_capability(config: Optional[_Config] = None) -> AuroraCapability:
    config = config or CONFIG
    if config.demo_mode:
        logging.warning("API Key not found. Falling back to Demo Mode.")
        return DemoCapability(config)
    return GeminiCapability(config)
