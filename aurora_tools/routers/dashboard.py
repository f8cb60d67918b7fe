from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from aurora_oracle.dashboard import Dashboard, DashboardState

from ..deps import get_api_key, get_dashboard
from .forecast import resolve_coordinates


router = APIRouter(dependencies=[Depends(get_api_key)])


class LocationRequest(BaseModel):
    # Both omitted means the client could not obtain a position
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@router.get("", response_model=DashboardState)
async def current(dashboard: Dashboard = Depends(get_dashboard)) -> DashboardState:
    return dashboard.snapshot()


@router.post("/location", response_model=DashboardState)
async def set_location(
    req: LocationRequest,
    request: Request,
    dashboard: Dashboard = Depends(get_dashboard),
) -> DashboardState:
    if req.latitude is None or req.longitude is None:
        return await dashboard.set_location(None)
    return await dashboard.set_location(resolve_coordinates(request, req.latitude, req.longitude))


@router.post("/refresh", response_model=DashboardState)
async def refresh(dashboard: Dashboard = Depends(get_dashboard)) -> DashboardState:
    return await dashboard.refresh()
