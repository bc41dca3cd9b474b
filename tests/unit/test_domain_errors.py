from __future__ import annotations

import pytest

from src.app.domain.errors import (
    RecipeError,
    OperationError,
    InvalidEncodingError,
    InvalidFormatError,
    OperationNotFoundError,
    DuplicateOperationError,
    StepNotFoundError,
    NoPendingDetectionError,
    RecipeExecutionError,
)


class TestRecipeError:
    def test_base_exception(self) -> None:
        error = RecipeError("Base error")
        assert str(error) == "Base error"
        assert isinstance(error, Exception)


class TestOperationError:
    def test_message_and_operation_id(self) -> None:
        error = OperationError("Error: broken", operation_id="reverse")
        assert str(error) == "Error: broken"
        assert error.operation_id == "reverse"

    def test_operation_id_optional(self) -> None:
        error = OperationError("Error: broken")
        assert error.operation_id is None


class TestInvalidEncodingError:
    def test_base64_message(self) -> None:
        error = InvalidEncodingError("Base64", operation_id="base64-decode")
        assert str(error) == "Error: Invalid Base64 input"
        assert error.encoding == "Base64"
        assert error.operation_id == "base64-decode"

    def test_hex_message(self) -> None:
        assert str(InvalidEncodingError("Hex")) == "Error: Invalid Hex input"


class TestInvalidFormatError:
    def test_json_message(self) -> None:
        error = InvalidFormatError("JSON", operation_id="json-prettify")
        assert str(error) == "Error: Invalid JSON"
        assert error.data_format == "JSON"


class TestOperationNotFoundError:
    def test_includes_operation_id(self) -> None:
        error = OperationNotFoundError("base32-decode")
        assert "base32-decode" in str(error)
        assert error.operation_id == "base32-decode"


class TestDuplicateOperationError:
    def test_includes_operation_id(self) -> None:
        error = DuplicateOperationError("md5")
        assert "md5" in str(error)
        assert error.operation_id == "md5"


class TestStepNotFoundError:
    def test_includes_instance_id(self) -> None:
        error = StepNotFoundError("abc123")
        assert "abc123" in str(error)
        assert error.instance_id == "abc123"


class TestNoPendingDetectionError:
    def test_default_message(self) -> None:
        assert str(NoPendingDetectionError()) == "No detection result to apply"


class TestRecipeExecutionError:
    def test_wraps_cause_message(self) -> None:
        cause = RuntimeError("boom")
        error = RecipeExecutionError(cause, operation_id="reverse")
        assert str(error) == "Error executing recipe: boom"
        assert error.cause is cause
        assert error.operation_id == "reverse"

    def test_falls_back_to_exception_name(self) -> None:
        error = RecipeExecutionError(KeyError())
        assert str(error) == "Error executing recipe: KeyError"


class TestExceptionHierarchy:
    def test_all_domain_errors_inherit_from_recipe_error(self) -> None:
        assert issubclass(OperationError, RecipeError)
        assert issubclass(InvalidEncodingError, OperationError)
        assert issubclass(InvalidFormatError, OperationError)
        assert issubclass(OperationNotFoundError, RecipeError)
        assert issubclass(DuplicateOperationError, RecipeError)
        assert issubclass(StepNotFoundError, RecipeError)
        assert issubclass(NoPendingDetectionError, RecipeError)
        assert issubclass(RecipeExecutionError, RecipeError)

    def test_lookup_errors_are_not_recoverable_operation_errors(self) -> None:
        assert not issubclass(OperationNotFoundError, OperationError)
        assert not issubclass(RecipeExecutionError, OperationError)
