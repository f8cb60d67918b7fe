import asyncio
import time

from aurora_oracle.capability import build_capability
from aurora_oracle.config import _Config
from aurora_oracle.fallback import (
    DEMO_CHAT_REPLY,
    DEMO_PHOTO_ANALYSIS,
    DEMO_WEATHER_REPORT,
    DemoCapability,
)
from aurora_oracle.models import Coordinates, WeatherReport


REYKJAVIK = Coordinates(latitude=64.1265, longitude=-21.8174)


def test_missing_credential_selects_demo_mode():
    capability = build_capability(_Config({}))
    assert isinstance(capability, DemoCapability)
    assert capability.demo_mode


def test_api_key_alias_is_honoured():
    assert _Config({"API_KEY": "k"}).gemini_api_key == "k"
    assert _Config({"GEMINI_API_KEY": "g", "API_KEY": "k"}).gemini_api_key == "g"
    assert not _Config({"GEMINI_API_KEY": "g"}).demo_mode


def test_bad_delays_fall_back_to_defaults():
    cfg = _Config({"DEMO_FORECAST_DELAY_SEC": "soon", "DEMO_PHOTO_DELAY_SEC": "0"})
    assert cfg.demo_forecast_delay_sec == 1.5
    assert cfg.demo_photo_delay_sec == 2.0


def test_demo_forecast_is_fixed_and_delayed(demo_capability):
    for _ in range(2):
        started = time.monotonic()
        result = asyncio.run(demo_capability.fetch_forecast(REYKJAVIK))
        assert time.monotonic() - started >= 0.01
        assert result.data == DEMO_WEATHER_REPORT
        assert result.data.location_name == "Simulated Sector (Demo)"
        assert len(result.sources) == 1
        assert "Simulated" in result.sources[0].title
        assert result.raw_text.startswith("⚠️ DEMO MODE")


def test_demo_forecast_is_schema_valid():
    dumped = DEMO_WEATHER_REPORT.model_dump(by_alias=True, mode="json")
    assert WeatherReport.model_validate(dumped) == DEMO_WEATHER_REPORT
    assert len(DEMO_WEATHER_REPORT.forecast) == 6


def test_demo_forecast_ignores_location(demo_capability):
    far_south = Coordinates(latitude=-45.0, longitude=170.5)
    a = asyncio.run(demo_capability.fetch_forecast(REYKJAVIK))
    b = asyncio.run(demo_capability.fetch_forecast(far_south))
    assert a == b


def test_demo_photo_analysis(demo_capability):
    started = time.monotonic()
    analysis = asyncio.run(demo_capability.analyze_photo(b"not really a jpeg", "DSLR/Mirrorless"))
    assert time.monotonic() - started >= 0.01
    assert analysis == DEMO_PHOTO_ANALYSIS
    assert len(analysis.checklist) == 3


def test_demo_chat_always_says_the_same(demo_capability):
    responder = demo_capability.create_chat()

    async def talk():
        return [await responder.send(m) for m in ("Will I see it tonight?", "", "🌌" * 50)]

    assert asyncio.run(talk()) == [DEMO_CHAT_REPLY] * 3
