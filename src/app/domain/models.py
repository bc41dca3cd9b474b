# src/app/domain/models.py
"""
Domain models for the recipe workbench.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from src.app.domain.errors import OperationError

ALL_CATEGORIES = "All"

Transform = Callable[[str, Mapping[str, Any]], str]


class OperationCategory(str, Enum):
    """Closed set of catalog categories, in display order."""
    ENCODING = "Encoding"
    HASHING = "Hashing"
    ENCRYPTION = "Encryption"
    DATA_FORMAT = "Data Format"
    UTILS = "Utils"


class ParamType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class OperationParam:
    """Descriptor for a user-editable operation parameter."""
    name: str
    type: ParamType
    default_value: Any = None
    options: tuple[str, ...] = ()


@dataclass(frozen=True)
class Operation:
    """
    A catalog entry: metadata plus a pure transform.
    Owned by the registry and never mutated.
    """
    id: str
    name: str
    description: str
    category: OperationCategory
    transform: Transform = field(repr=False, compare=False)
    params: tuple[OperationParam, ...] = ()

    def apply(self, text: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """
        Run the transform, turning a recoverable OperationError into its
        message. Anything else propagates to the caller.
        """
        try:
            return self.transform(text, params or {})
        except OperationError as exc:
            return str(exc)


@dataclass(frozen=True)
class OperationInstance:
    """One step of a recipe. The same operation may appear many times."""
    instance_id: str
    operation_id: str
    params: Mapping[str, Any] = field(default_factory=dict)

    def with_params(self, params: Mapping[str, Any]) -> "OperationInstance":
        return OperationInstance(
            instance_id=self.instance_id,
            operation_id=self.operation_id,
            params=dict(params),
        )


@dataclass
class DetectionResult:
    """Best-effort guess about the input, as returned by the analysis model."""
    format: str
    confidence: float
    explanation: str
    suggested_operations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ExecutionReport:
    """Outcome of folding a recipe over an input."""
    output: str
    error: Optional[str] = None
    steps_applied: int = 0
    skipped_operation_ids: tuple[str, ...] = ()

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class WorkbenchState:
    """Consistent snapshot of everything the UI renders."""
    input_text: str
    recipe: tuple[OperationInstance, ...]
    output: str
    detection: Optional[DetectionResult] = None

    @property
    def input_length(self) -> int:
        return len(self.input_text)

    @property
    def output_length(self) -> int:
        return len(self.output)
