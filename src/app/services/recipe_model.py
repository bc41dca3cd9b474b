# src/app/services/recipe_model.py
"""
The user's recipe: an ordered list of operation instances.
All mutations are serialized so a reader never sees a half-applied batch.
"""
from __future__ import annotations

import threading
from typing import Any, Iterable, Iterator, Mapping, Optional
from uuid import uuid4

from src.app.domain.errors import StepNotFoundError
from src.app.domain.models import OperationInstance


class RecipeModel:
    def __init__(self, steps: Iterable[OperationInstance] = ()) -> None:
        self._lock = threading.RLock()
        self._steps: list[OperationInstance] = []
        # every id ever handed out, kept across remove() and clear() so none is reused
        self._issued_ids: set[str] = set()
        for step in steps:
            if step.instance_id in self._issued_ids:
                raise ValueError(f"Duplicate instance id: {step.instance_id}")
            self._issued_ids.add(step.instance_id)
            self._steps.append(step)

    def _new_instance(self, operation_id: str, params: Optional[Mapping[str, Any]] = None) -> OperationInstance:
        instance_id = uuid4().hex
        while instance_id in self._issued_ids:
            instance_id = uuid4().hex
        self._issued_ids.add(instance_id)
        return OperationInstance(
            instance_id=instance_id,
            operation_id=operation_id,
            params=dict(params or {}),
        )

    def append(self, operation_id: str, params: Optional[Mapping[str, Any]] = None) -> OperationInstance:
        with self._lock:
            step = self._new_instance(operation_id, params)
            self._steps.append(step)
            return step

    def append_batch(self, operation_ids: Iterable[str]) -> list[OperationInstance]:
        """Append one instance per id, in order, as a single update."""
        ids = list(operation_ids)
        with self._lock:
            new_steps = [self._new_instance(operation_id) for operation_id in ids]
            self._steps = [*self._steps, *new_steps]
            return new_steps

    def remove(self, instance_id: str) -> bool:
        with self._lock:
            remaining = [step for step in self._steps if step.instance_id != instance_id]
            removed = len(remaining) != len(self._steps)
            self._steps = remaining
            return removed

    def clear(self) -> None:
        with self._lock:
            self._steps = []

    def update_params(self, instance_id: str, params: Mapping[str, Any]) -> OperationInstance:
        with self._lock:
            for position, step in enumerate(self._steps):
                if step.instance_id == instance_id:
                    updated = step.with_params(params)
                    self._steps[position] = updated
                    return updated
        raise StepNotFoundError(instance_id)

    def get(self, instance_id: str) -> Optional[OperationInstance]:
        with self._lock:
            for step in self._steps:
                if step.instance_id == instance_id:
                    return step
        return None

    def snapshot(self) -> tuple[OperationInstance, ...]:
        with self._lock:
            return tuple(self._steps)

    def __len__(self) -> int:
        with self._lock:
            return len(self._steps)

    def __iter__(self) -> Iterator[OperationInstance]:
        return iter(self.snapshot())
