from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, ValidationError

from aurora_oracle.capability import AuroraCapability
from aurora_oracle.errors import ProviderError
from aurora_oracle.models import Coordinates, SearchResult

from ..deps import get_api_key, get_capability


router = APIRouter(dependencies=[Depends(get_api_key)])


class ForecastRequest(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


def resolve_coordinates(request: Request, latitude: Optional[float], longitude: Optional[float]) -> Coordinates:
    if latitude is None or longitude is None:
        return request.app.state.default_coords
    try:
        return Coordinates(latitude=latitude, longitude=longitude)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid coordinates: {e.errors()[0]['msg']}",
        )


@router.post("", response_model=SearchResult)
async def forecast(
    req: ForecastRequest,
    request: Request,
    capability: AuroraCapability = Depends(get_capability),
) -> SearchResult:
    coords = resolve_coordinates(request, req.latitude, req.longitude)
    try:
        return await capability.fetch_forecast(coords)
    except ProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        )
