from typing import Optional

from fastapi import Header, HTTPException, Request, status

from aurora_oracle.capability import AuroraCapability
from aurora_oracle.chat import ChatRegistry
from aurora_oracle.dashboard import Dashboard

from .config import CONFIG


def get_api_key(x_api_key: Optional[str] = Header(default=None)) -> Optional[str]:
    expected_api_key = CONFIG.api_key
    if expected_api_key is None:
        return None
    if x_api_key != expected_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
        )
    return x_api_key


def _state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"{name} not initialized",
        )
    return value


def get_capability(request: Request) -> AuroraCapability:
    return _state(request, "capability")


def get_dashboard(request: Request) -> Dashboard:
    return _state(request, "dashboard")


def get_chat_registry(request: Request) -> ChatRegistry:
    return _state(request, "chat_registry")
