# src/app/services/workbench.py
"""
Live workbench state: input text, recipe, derived output and the last
detection suggestion.

Responsibilities:
- Serialize every recipe/input mutation
- Recompute the output from scratch after each change
- Hold a detection result until it is accepted or dismissed
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Iterable, Mapping, Optional

from src.app.domain.errors import NoPendingDetectionError
from src.app.domain.models import DetectionResult, OperationInstance, WorkbenchState
from src.app.services.recipe_engine import recompute
from src.app.services.recipe_model import RecipeModel
from src.services.operations import OperationRegistry, get_registry

logger = logging.getLogger(__name__)


class Workbench:
    def __init__(
        self,
        registry: Optional[OperationRegistry] = None,
        recipe: Optional[RecipeModel] = None,
        input_text: str = "",
    ):
        self._registry = registry if registry is not None else get_registry()
        self._recipe = recipe if recipe is not None else RecipeModel()
        self._lock = threading.Lock()
        self._input_text = input_text
        self._detection: Optional[DetectionResult] = None
        self._output = recompute(self._input_text, self._recipe.snapshot(), self._registry)

    @property
    def registry(self) -> OperationRegistry:
        return self._registry

    @property
    def input_text(self) -> str:
        return self._input_text

    @property
    def output(self) -> str:
        return self._output

    @property
    def detection(self) -> Optional[DetectionResult]:
        return self._detection

    def _refresh(self) -> None:
        self._output = recompute(self._input_text, self._recipe.snapshot(), self._registry)

    def state(self) -> WorkbenchState:
        with self._lock:
            return WorkbenchState(
                input_text=self._input_text,
                recipe=self._recipe.snapshot(),
                output=self._output,
                detection=self._detection,
            )

    def set_input(self, text: str) -> WorkbenchState:
        with self._lock:
            self._input_text = text
            self._refresh()
        return self.state()

    def add_step(self, operation_id: str, params: Optional[Mapping[str, Any]] = None) -> OperationInstance:
        with self._lock:
            step = self._recipe.append(operation_id, params)
            self._refresh()
        logger.info("workbench.step_added operation=%s instance=%s", operation_id, step.instance_id)
        return step

    def add_steps(self, operation_ids: Iterable[str]) -> list[OperationInstance]:
        with self._lock:
            steps = self._recipe.append_batch(operation_ids)
            self._refresh()
        logger.info("workbench.steps_added count=%d", len(steps))
        return steps

    def remove_step(self, instance_id: str) -> bool:
        with self._lock:
            removed = self._recipe.remove(instance_id)
            if removed:
                self._refresh()
        return removed

    def update_step_params(self, instance_id: str, params: Mapping[str, Any]) -> OperationInstance:
        with self._lock:
            step = self._recipe.update_params(instance_id, params)
            self._refresh()
        return step

    def clear_recipe(self) -> None:
        with self._lock:
            self._recipe.clear()
            self._refresh()

    def store_detection(self, result: Optional[DetectionResult]) -> None:
        with self._lock:
            self._detection = result

    def accept_detection(self) -> list[OperationInstance]:
        """
        Append every suggested operation in one batch and drop the suggestion.

        Raises:
            NoPendingDetectionError: If there is nothing to accept
        """
        with self._lock:
            if self._detection is None:
                raise NoPendingDetectionError()
            steps = self._recipe.append_batch(self._detection.suggested_operations)
            self._detection = None
            self._refresh()
        logger.info("workbench.detection_accepted steps=%d", len(steps))
        return steps

    def dismiss_detection(self) -> None:
        with self._lock:
            self._detection = None
