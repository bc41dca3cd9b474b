from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from src.app.domain.models import DetectionResult


class DetectionOut(BaseModel):
    format: str
    confidence: float
    explanation: str
    suggestedOperations: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, result: DetectionResult) -> "DetectionOut":
        return cls(
            format=result.format,
            confidence=result.confidence,
            explanation=result.explanation,
            suggestedOperations=list(result.suggested_operations),
        )


class DetectRequest(BaseModel):
    input: str


class DetectResponse(BaseModel):
    detection: Optional[DetectionOut] = None

    @classmethod
    def from_domain(cls, result: Optional[DetectionResult]) -> "DetectResponse":
        return cls(detection=DetectionOut.from_domain(result) if result else None)
