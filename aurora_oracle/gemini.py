"""Live capability backed by Gemini through google-generativeai."""

import json
import logging
import time
from datetime import datetime, timezone
from typing import Any, List, Optional, Type, TypeVar

import google.generativeai as genai
from pydantic import BaseModel, ValidationError

from .config import CONFIG, _Config
from .errors import ProviderError
from .extraction import extract_json, parse_json_reply, strip_json_block
from .images import sniff_mime_type
from .models import Coordinates, GroundingSource, PhotoAnalysis, SearchResult, WeatherReport
from .prompts import CHAT_DIRECTIVE, PERSONA, forecast_prompt, photo_prompt


M = TypeVar("M", bound=BaseModel)


def _log_call(fn: str, started: float, ok: bool) -> None:
    log_data = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "tool": "gemini",
        "fn": fn,
        "latency_ms": f"{(time.monotonic() - started) * 1000:.2f}",
        "ok": ok,
    }
    logging.info(json.dumps(log_data))


def _response_text(response: Any) -> str:
    # .text raises ValueError when the candidate has no text parts (e.g. safety block)
    try:
        return getattr(response, "text", None) or ""
    except ValueError:
        return ""


def grounding_sources(response: Any) -> List[GroundingSource]:
    """Map grounding chunks to sources, dropping chunks without a web reference."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []
    sources: List[GroundingSource] = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        if not web:
            continue
        sources.append(
            GroundingSource(
                uri=getattr(web, "uri", "") or "",
                title=getattr(web, "title", "") or "",
            )
        )
    return sources


def coerce_payload(model: Type[M], payload: Any, what: str) -> Optional[M]:
    if payload is None:
        return None
    if not isinstance(payload, dict):
        logging.warning("Discarding %s: expected a JSON object, got %s", what, type(payload).__name__)
        return None
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        logging.warning("Discarding malformed %s: %s", what, e)
        return None


class GoogleSearchTool(genai.types.Tool):
    """Search grounding for Gemini 2.x models.

    The SDK rebuilds plain ``protos.Tool`` values from the fields it knows
    (functions, ``google_search_retrieval``, code execution) and would drop
    ``google_search``, so the wrapper hands its proto over as-is.
    """

    def to_proto(self) -> Any:
        return genai.protos.Tool(google_search=genai.protos.Tool.GoogleSearch())


class GeminiChatResponder:
    def __init__(self, chat: Any) -> None:
        self._chat = chat

    async def send(self, message: str) -> str:
        t0 = time.monotonic()
        try:
            response = await self._chat.send_message_async(message)
        except Exception as e:
            _log_call("chat", t0, ok=False)
            raise ProviderError(f"Chat request failed: {e}") from e
        _log_call("chat", t0, ok=True)
        return _response_text(response)


class GeminiCapability:
    demo_mode = False

    def __init__(
        self,
        config: Optional[_Config] = None,
        *,
        forecast_model: Any = None,
        photo_model: Any = None,
        chat_model: Any = None,
    ) -> None:
        config = config or CONFIG
        if forecast_model is None or photo_model is None or chat_model is None:
            genai.configure(api_key=config.gemini_api_key)
        self.forecast_model = forecast_model or genai.GenerativeModel(
            config.gemini_model,
            system_instruction=PERSONA,
            tools=[GoogleSearchTool()],
        )
        self.photo_model = photo_model or genai.GenerativeModel(
            config.gemini_model,
            generation_config={"response_mime_type": "application/json"},
        )
        self.chat_model = chat_model or genai.GenerativeModel(
            config.gemini_model,
            system_instruction=PERSONA + CHAT_DIRECTIVE,
        )

    async def fetch_forecast(self, coords: Coordinates) -> SearchResult:
        t0 = time.monotonic()
        try:
            response = await self.forecast_model.generate_content_async(forecast_prompt(coords))
        except Exception as e:
            logging.error("Error fetching space weather: %s", e)
            _log_call("forecast", t0, ok=False)
            raise ProviderError(f"Space weather request failed: {e}") from e
        _log_call("forecast", t0, ok=True)

        text = _response_text(response)
        report = coerce_payload(WeatherReport, extract_json(text), "weather report")
        return SearchResult(
            data=report,
            raw_text=strip_json_block(text),
            sources=grounding_sources(response),
        )

    async def analyze_photo(self, image: bytes, device: str) -> Optional[PhotoAnalysis]:
        t0 = time.monotonic()
        parts = [
            {"mime_type": sniff_mime_type(image), "data": image},
            photo_prompt(device),
        ]
        try:
            response = await self.photo_model.generate_content_async(parts)
        except Exception as e:
            logging.error("Error analyzing photo: %s", e)
            _log_call("analyze_photo", t0, ok=False)
            return None
        _log_call("analyze_photo", t0, ok=True)
        return coerce_payload(PhotoAnalysis, parse_json_reply(_response_text(response)), "photo analysis")

    def create_chat(self) -> GeminiChatResponder:
        return GeminiChatResponder(self.chat_model.start_chat(history=[]))
