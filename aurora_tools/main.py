import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
import uvicorn

from aurora_oracle.capability import AuroraCapability, build_capability
from aurora_oracle.chat import ChatRegistry
from aurora_oracle.config import CONFIG as ORACLE_CONFIG
from aurora_oracle.dashboard import Dashboard
from aurora_oracle.models import Coordinates
from aurora_tools.routers.chat import router as chat_router
from aurora_tools.routers.dashboard import router as dashboard_router
from aurora_tools.routers.forecast import router as forecast_router
from aurora_tools.routers.photo import router as photo_router
from .config import CONFIG
from .deps import get_api_key, get_capability


# --- Logging Configuration ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler()  # Ensure logs go to stdout/stderr
    ]
)
# --------------------------


def default_coordinates() -> Coordinates:
    return Coordinates(
        latitude=ORACLE_CONFIG.default_latitude,
        longitude=ORACLE_CONFIG.default_longitude,
    )


def create_app(capability: Optional[AuroraCapability] = None) -> FastAPI:
    limiter = Limiter(key_func=get_remote_address, default_limits=[CONFIG.rate_limit])

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One capability for the whole process; demo mode is decided here only
        cap = capability or build_capability(ORACLE_CONFIG)
        app.state.capability = cap
        app.state.default_coords = default_coordinates()
        app.state.dashboard = Dashboard(cap, app.state.default_coords)
        app.state.chat_registry = ChatRegistry(cap, ttl_seconds=ORACLE_CONFIG.chat_session_ttl_sec)
        yield

    app = FastAPI(title="Aurora Watch", lifespan=lifespan)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=512)
    app.include_router(forecast_router, prefix="/forecast")
    app.include_router(photo_router, prefix="/photo")
    app.include_router(chat_router, prefix="/chat")
    app.include_router(dashboard_router, prefix="/dashboard")

    @app.get("/", dependencies=[Depends(get_api_key)])
    async def root(_: Request, cap: AuroraCapability = Depends(get_capability)):
        return {"status": "ok", "demoMode": cap.demo_mode}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=CONFIG.port)
