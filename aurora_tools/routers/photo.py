from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from aurora_oracle.capability import AuroraCapability
from aurora_oracle.images import decode_image_payload
from aurora_oracle.models import PhotoAnalysis

from ..deps import get_api_key, get_capability


router = APIRouter(dependencies=[Depends(get_api_key)])


class PhotoRequest(BaseModel):
    image: str  # base64, optionally as a data URL
    device: str = "Smartphone"


class PhotoResponse(BaseModel):
    analysis: Optional[PhotoAnalysis] = None


@router.post("/analyze", response_model=PhotoResponse)
async def analyze(req: PhotoRequest, capability: AuroraCapability = Depends(get_capability)) -> PhotoResponse:
    try:
        image = decode_image_payload(req.image)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    analysis = await capability.analyze_photo(image, req.device.strip() or "Smartphone")
    return PhotoResponse(analysis=analysis)
