import os
from typing import Final


class _Config:
    def __init__(self) -> None:
        # Security / limits
        self.api_key: str | None = os.getenv("AURORA_API_KEY") or None
        self.rate_limit: str = os.getenv("AURORA_RATE_LIMIT", "30/minute")

        try:
            self.port: int = int(os.getenv("PORT", "3003"))
        except ValueError:
            self.port = 3003


CONFIG: Final[_Config] = _Config()
