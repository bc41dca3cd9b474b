# src/app/services/recipe_engine.py
"""
Recipe execution.
Folds an ordered list of operation instances over an input string.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from src.app.domain.errors import RecipeExecutionError
from src.app.domain.models import ExecutionReport, OperationInstance
from src.services.operations import OperationRegistry, get_registry

logger = logging.getLogger(__name__)


def execute_recipe(
    input_text: str,
    recipe: Iterable[OperationInstance],
    registry: Optional[OperationRegistry] = None,
) -> ExecutionReport:
    """
    Run every step of the recipe, in order, starting from the full input.

    Steps whose operation is not in the registry are skipped. Recoverable
    operation failures are already folded into the text by Operation.apply,
    so later steps see the error message as their input.

    Any other exception aborts the run: the partial output is discarded and
    the report carries a single "Error executing recipe: ..." message.

    Args:
        input_text: Raw text typed by the user
        recipe: Ordered operation instances
        registry: Catalog to resolve operation ids (defaults to the built-in one)

    Returns:
        ExecutionReport with the final output
    """
    if registry is None:
        registry = get_registry()
    current = input_text
    applied = 0
    skipped: list[str] = []

    for step in recipe:
        operation = registry.lookup(step.operation_id)
        if operation is None:
            logger.debug("recipe.step_skipped operation=%s instance=%s", step.operation_id, step.instance_id)
            skipped.append(step.operation_id)
            continue
        try:
            current = operation.apply(current, step.params)
        except Exception as exc:
            error = RecipeExecutionError(exc, operation_id=operation.id)
            logger.warning(
                "recipe.step_failed operation=%s instance=%s error=%s",
                operation.id,
                step.instance_id,
                exc,
                exc_info=True,
            )
            return ExecutionReport(
                output=str(error),
                error=str(error),
                steps_applied=applied,
                skipped_operation_ids=tuple(skipped),
            )
        applied += 1

    return ExecutionReport(
        output=current,
        steps_applied=applied,
        skipped_operation_ids=tuple(skipped),
    )


def run_recipe(
    input_text: str,
    recipe: Iterable[OperationInstance],
    registry: Optional[OperationRegistry] = None,
) -> str:
    """Return only the visible output of a run."""
    return execute_recipe(input_text, recipe, registry).output


def recompute(
    input_text: str,
    recipe: Iterable[OperationInstance],
    registry: Optional[OperationRegistry] = None,
) -> str:
    # Always a full re-run from the input; no prefix caching.
    return run_recipe(input_text, tuple(recipe), registry)
