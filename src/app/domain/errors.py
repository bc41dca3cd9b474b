from __future__ import annotations


class RecipeError(Exception):
    pass


class OperationError(RecipeError):
    """
    Recoverable failure of a single operation.

    The message is what the user sees in place of the step output, so it
    must stay stable.
    """

    def __init__(self, message: str, operation_id: str | None = None):
        super().__init__(message)
        self.operation_id = operation_id


class InvalidEncodingError(OperationError):
    def __init__(self, encoding: str, operation_id: str | None = None):
        super().__init__(f"Error: Invalid {encoding} input", operation_id=operation_id)
        self.encoding = encoding


class InvalidFormatError(OperationError):
    def __init__(self, data_format: str, operation_id: str | None = None):
        super().__init__(f"Error: Invalid {data_format}", operation_id=operation_id)
        self.data_format = data_format


class OperationNotFoundError(RecipeError):
    def __init__(self, operation_id: str):
        super().__init__(f"Operation not found: {operation_id}")
        self.operation_id = operation_id


class DuplicateOperationError(RecipeError):
    def __init__(self, operation_id: str):
        super().__init__(f"Duplicate operation id in registry: {operation_id}")
        self.operation_id = operation_id


class StepNotFoundError(RecipeError):
    def __init__(self, instance_id: str):
        super().__init__(f"Recipe step not found: {instance_id}")
        self.instance_id = instance_id


class NoPendingDetectionError(RecipeError):
    def __init__(self, message: str = "No detection result to apply"):
        super().__init__(message)


class RecipeExecutionError(RecipeError):
    """Unrecoverable fault raised by a step; aborts the whole run."""

    PREFIX = "Error executing recipe"

    def __init__(self, cause: BaseException, operation_id: str | None = None):
        reason = str(cause) or type(cause).__name__
        super().__init__(f"{self.PREFIX}: {reason}")
        self.cause = cause
        self.operation_id = operation_id
