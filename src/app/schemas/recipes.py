from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from src.app.domain.models import ExecutionReport, OperationInstance, WorkbenchState
from src.app.schemas.detection import DetectionOut


class RecipeStepIn(BaseModel):
    operationId: str = Field(..., min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)


class RecipeStepOut(BaseModel):
    instanceId: str
    operationId: str
    params: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, step: OperationInstance) -> "RecipeStepOut":
        return cls(
            instanceId=step.instance_id,
            operationId=step.operation_id,
            params=dict(step.params),
        )


class BakeRequest(BaseModel):
    input: str = ""
    recipe: list[RecipeStepIn] = Field(default_factory=list)


class BakeResponse(BaseModel):
    output: str
    error: Optional[str] = None
    stepsApplied: int = 0
    skippedOperationIds: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, report: ExecutionReport) -> "BakeResponse":
        return cls(
            output=report.output,
            error=report.error,
            stepsApplied=report.steps_applied,
            skippedOperationIds=list(report.skipped_operation_ids),
        )


class InputUpdate(BaseModel):
    input: str


class StepParamsUpdate(BaseModel):
    params: dict[str, Any] = Field(default_factory=dict)


class BatchStepsIn(BaseModel):
    operationIds: list[str] = Field(default_factory=list)


class WorkbenchResponse(BaseModel):
    input: str
    output: str
    recipe: list[RecipeStepOut] = Field(default_factory=list)
    detection: Optional[DetectionOut] = None
    inputLength: int = 0
    outputLength: int = 0

    @classmethod
    def from_domain(cls, state: WorkbenchState) -> "WorkbenchResponse":
        return cls(
            input=state.input_text,
            output=state.output,
            recipe=[RecipeStepOut.from_domain(step) for step in state.recipe],
            detection=DetectionOut.from_domain(state.detection) if state.detection else None,
            inputLength=state.input_length,
            outputLength=state.output_length,
        )
