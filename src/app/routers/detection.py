from __future__ import annotations

from fastapi import APIRouter, Depends

from src.app.deps import get_detector
from src.app.schemas.detection import DetectRequest, DetectResponse
from src.services.detection import DetectionService

router = APIRouter(prefix="/detect", tags=["detection"])


@router.post("", response_model=DetectResponse)
async def detect(
    payload: DetectRequest,
    detector: DetectionService = Depends(get_detector),
) -> DetectResponse:
    return DetectResponse.from_domain(await detector.detect(payload.input))
