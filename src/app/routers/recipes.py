from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from src.app.deps import get_operation_registry
from src.app.schemas.recipes import BakeRequest, BakeResponse
from src.app.services.recipe_engine import execute_recipe
from src.app.services.recipe_model import RecipeModel
from src.services.operations import OperationRegistry

log = logging.getLogger("recipes")
router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.post("/bake", response_model=BakeResponse)
def bake(
    payload: BakeRequest,
    registry: OperationRegistry = Depends(get_operation_registry),
) -> BakeResponse:
    recipe = RecipeModel()
    for step in payload.recipe:
        recipe.append(step.operationId, step.params)
    report = execute_recipe(payload.input, recipe.snapshot(), registry)
    if report.failed:
        log.info("recipes.bake_failed steps=%d error=%s", len(recipe), report.error)
    return BakeResponse.from_domain(report)
