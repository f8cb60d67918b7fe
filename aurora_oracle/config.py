import os
from typing import Final, Mapping, Optional


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    try:
        return float(env.get(name, default))
    except ValueError:
        return default


class _Config:
    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        env = os.environ if environ is None else environ

        # Credential toggles live vs. demo mode for the lifetime of the process
        self.gemini_api_key: str | None = env.get("GEMINI_API_KEY") or env.get("API_KEY") or None
        self.gemini_model: str = env.get("GEMINI_MODEL", "gemini-2.5-flash")

        # Demo mode latency
        self.demo_forecast_delay_sec: float = _float_env(env, "DEMO_FORECAST_DELAY_SEC", 1.5)
        if self.demo_forecast_delay_sec <= 0:
            self.demo_forecast_delay_sec = 1.5
        self.demo_photo_delay_sec: float = _float_env(env, "DEMO_PHOTO_DELAY_SEC", 2.0)
        if self.demo_photo_delay_sec <= 0:
            self.demo_photo_delay_sec = 2.0

        # Used when the caller cannot supply a position (Reykjavik)
        self.default_latitude: float = _float_env(env, "DEFAULT_LATITUDE", 64.1265)
        self.default_longitude: float = _float_env(env, "DEFAULT_LONGITUDE", -21.8174)

        # Idle chat sessions are dropped after this long without a turn
        self.chat_session_ttl_sec: float = _float_env(env, "CHAT_SESSION_TTL_SEC", 1800.0)
        if self.chat_session_ttl_sec <= 0:
            self.chat_session_ttl_sec = 1800.0

    @property
    def demo_mode(self) -> bool:
        return not self.gemini_api_key


CONFIG: Final[_Config] = _Config()
