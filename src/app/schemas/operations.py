from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from src.app.domain.models import Operation, OperationParam


class OperationParamOut(BaseModel):
    name: str
    type: Literal["text", "number", "select", "boolean"]
    defaultValue: Optional[Any] = None
    options: Optional[list[str]] = None

    @classmethod
    def from_domain(cls, param: OperationParam) -> "OperationParamOut":
        return cls(
            name=param.name,
            type=param.type.value,
            defaultValue=param.default_value,
            options=list(param.options) or None,
        )


class OperationOut(BaseModel):
    id: str
    name: str
    description: str
    category: str
    params: list[OperationParamOut] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, operation: Operation) -> "OperationOut":
        return cls(
            id=operation.id,
            name=operation.name,
            description=operation.description,
            category=operation.category.value,
            params=[OperationParamOut.from_domain(p) for p in operation.params],
        )


class OperationListResponse(BaseModel):
    operations: list[OperationOut]
    total: int
