from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.app.deps import get_operation_registry
from src.app.domain.errors import OperationNotFoundError
from src.app.domain.models import ALL_CATEGORIES
from src.app.schemas.operations import OperationListResponse, OperationOut
from src.services.operations import OperationRegistry

router = APIRouter(prefix="/operations", tags=["operations"])


@router.get("", response_model=OperationListResponse)
def list_operations(
    search: str = Query(default="", max_length=200),
    category: str = Query(default=ALL_CATEGORIES),
    registry: OperationRegistry = Depends(get_operation_registry),
) -> OperationListResponse:
    operations = [OperationOut.from_domain(op) for op in registry.filter(search, category)]
    return OperationListResponse(operations=operations, total=len(operations))


@router.get("/categories", response_model=list[str])
def list_categories(
    registry: OperationRegistry = Depends(get_operation_registry),
) -> list[str]:
    return [ALL_CATEGORIES, *registry.categories()]


@router.get("/{operation_id}", response_model=OperationOut)
def get_operation(
    operation_id: str,
    registry: OperationRegistry = Depends(get_operation_registry),
) -> OperationOut:
    try:
        return OperationOut.from_domain(registry.get_or_raise(operation_id))
    except OperationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
