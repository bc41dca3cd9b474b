from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.app.deps import get_detector, get_workbench
from src.app.domain.errors import NoPendingDetectionError, StepNotFoundError
from src.app.schemas.detection import DetectResponse
from src.app.schemas.recipes import (
    BatchStepsIn,
    InputUpdate,
    RecipeStepIn,
    StepParamsUpdate,
    WorkbenchResponse,
)
from src.app.services.workbench import Workbench
from src.services.detection import DetectionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workbench", tags=["workbench"])


def _state(workbench: Workbench) -> WorkbenchResponse:
    return WorkbenchResponse.from_domain(workbench.state())


@router.get("", response_model=WorkbenchResponse)
def get_state(workbench: Workbench = Depends(get_workbench)) -> WorkbenchResponse:
    return _state(workbench)


@router.put("/input", response_model=WorkbenchResponse)
def set_input(
    payload: InputUpdate,
    workbench: Workbench = Depends(get_workbench),
) -> WorkbenchResponse:
    workbench.set_input(payload.input)
    return _state(workbench)


@router.post("/steps", response_model=WorkbenchResponse, status_code=status.HTTP_201_CREATED)
def add_step(
    payload: RecipeStepIn,
    workbench: Workbench = Depends(get_workbench),
) -> WorkbenchResponse:
    # The catalog only offers known operations; batch appends from detection may not.
    if payload.operationId not in workbench.registry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Operation not found: {payload.operationId}",
        )
    workbench.add_step(payload.operationId, payload.params)
    return _state(workbench)


@router.post("/steps/batch", response_model=WorkbenchResponse, status_code=status.HTTP_201_CREATED)
def add_steps(
    payload: BatchStepsIn,
    workbench: Workbench = Depends(get_workbench),
) -> WorkbenchResponse:
    workbench.add_steps(payload.operationIds)
    return _state(workbench)


@router.patch("/steps/{instance_id}", response_model=WorkbenchResponse)
def update_step(
    instance_id: str,
    payload: StepParamsUpdate,
    workbench: Workbench = Depends(get_workbench),
) -> WorkbenchResponse:
    try:
        workbench.update_step_params(instance_id, payload.params)
    except StepNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return _state(workbench)


@router.delete("/steps/{instance_id}", response_model=WorkbenchResponse)
def remove_step(
    instance_id: str,
    workbench: Workbench = Depends(get_workbench),
) -> WorkbenchResponse:
    workbench.remove_step(instance_id)
    return _state(workbench)


@router.delete("/steps", response_model=WorkbenchResponse)
def clear_steps(workbench: Workbench = Depends(get_workbench)) -> WorkbenchResponse:
    workbench.clear_recipe()
    return _state(workbench)


@router.post("/detect", response_model=DetectResponse)
async def detect(
    workbench: Workbench = Depends(get_workbench),
    detector: DetectionService = Depends(get_detector),
) -> DetectResponse:
    result = await detector.detect(workbench.input_text)
    workbench.store_detection(result)
    return DetectResponse.from_domain(result)


@router.post("/detect/accept", response_model=WorkbenchResponse)
def accept_detection(workbench: Workbench = Depends(get_workbench)) -> WorkbenchResponse:
    try:
        workbench.accept_detection()
    except NoPendingDetectionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return _state(workbench)


@router.post("/detect/dismiss", response_model=WorkbenchResponse)
def dismiss_detection(workbench: Workbench = Depends(get_workbench)) -> WorkbenchResponse:
    workbench.dismiss_detection()
    return _state(workbench)
