# src/app/deps.py (single-process workbench, exposed as dependencies)

from __future__ import annotations

from src.app.services.workbench import Workbench
from src.services.detection import DetectionService, get_detection_service
from src.services.operations import OperationRegistry, get_registry

_workbench: Workbench | None = None


def get_operation_registry() -> OperationRegistry:
    return get_registry()


def get_workbench() -> Workbench:
    global _workbench
    if _workbench is None:
        _workbench = Workbench(registry=get_registry())
    return _workbench


def get_detector() -> DetectionService:
    return get_detection_service()
