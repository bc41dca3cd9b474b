from __future__ import annotations

import hashlib

import pytest

from src.app.domain.errors import NoPendingDetectionError, StepNotFoundError
from src.app.domain.models import DetectionResult, Operation, OperationCategory
from src.app.services.recipe_model import RecipeModel
from src.app.services.workbench import Workbench
from src.services.operations import OPERATIONS, OperationRegistry


def make_detection(*operation_ids: str) -> DetectionResult:
    return DetectionResult(
        format="Base64",
        confidence=0.9,
        explanation="Looks like Base64",
        suggested_operations=list(operation_ids),
    )


class TestWorkbenchRecompute:
    def test_uses_injected_empty_collaborators(self) -> None:
        recipe = RecipeModel()
        workbench = Workbench(registry=OperationRegistry([]), recipe=recipe, input_text="abc")

        workbench.add_step("to-uppercase")

        assert len(recipe) == 1
        assert len(workbench.registry) == 0
        assert workbench.output == "abc"

    def test_initial_state(self) -> None:
        workbench = Workbench()
        state = workbench.state()

        assert state.input_text == ""
        assert state.output == ""
        assert state.recipe == ()
        assert state.detection is None

    def test_output_follows_every_edit(self) -> None:
        workbench = Workbench()

        workbench.set_input("aGVsbG8=")
        assert workbench.output == "aGVsbG8="

        decode = workbench.add_step("base64-decode")
        assert workbench.output == "hello"

        workbench.add_step("to-uppercase")
        assert workbench.output == "HELLO"

        workbench.add_step("sha256")
        assert workbench.output == hashlib.sha256(b"HELLO").hexdigest()

        workbench.remove_step(decode.instance_id)
        assert workbench.output == hashlib.sha256(b"AGVSBG8=").hexdigest()

        workbench.clear_recipe()
        assert workbench.output == "aGVsbG8="

    def test_input_change_reruns_recipe(self) -> None:
        workbench = Workbench()
        workbench.add_step("reverse")

        workbench.set_input("abc")
        assert workbench.output == "cba"

        state = workbench.set_input("xyz")
        assert state.output == "zyx"
        assert state.input_length == 3

    def test_params_change_reruns_recipe(self) -> None:
        def suffix(text: str, params) -> str:
            return text + params.get("suffix", "")

        registry = OperationRegistry(
            [
                *OPERATIONS,
                Operation(
                    id="suffix",
                    name="Suffix",
                    description="",
                    category=OperationCategory.UTILS,
                    transform=suffix,
                ),
            ]
        )
        workbench = Workbench(registry=registry, input_text="x")
        step = workbench.add_step("suffix")
        assert workbench.output == "x"

        workbench.update_step_params(step.instance_id, {"suffix": "!"})
        assert workbench.output == "x!"

    def test_update_unknown_step_raises(self) -> None:
        with pytest.raises(StepNotFoundError):
            Workbench().update_step_params("missing", {})

    def test_remove_absent_step_is_noop(self) -> None:
        workbench = Workbench(input_text="abc")
        workbench.add_step("reverse")

        assert workbench.remove_step("missing") is False
        assert workbench.output == "cba"


class TestWorkbenchDetection:
    def test_accept_appends_batch_and_clears_suggestion(self) -> None:
        workbench = Workbench(input_text="aGVsbG8=")
        workbench.add_step("reverse")
        workbench.store_detection(make_detection("reverse", "base64-decode", "unknown-op"))

        new_steps = workbench.accept_detection()

        assert [s.operation_id for s in new_steps] == ["reverse", "base64-decode", "unknown-op"]
        state = workbench.state()
        assert [s.operation_id for s in state.recipe] == ["reverse", "reverse", "base64-decode", "unknown-op"]
        assert state.detection is None
        assert state.output == "hello"

    def test_accept_without_suggestion_raises(self) -> None:
        with pytest.raises(NoPendingDetectionError):
            Workbench().accept_detection()

    def test_dismiss_has_no_side_effect_on_recipe(self) -> None:
        workbench = Workbench(input_text="abc")
        workbench.add_step("reverse")
        workbench.store_detection(make_detection("rot13"))

        workbench.dismiss_detection()

        state = workbench.state()
        assert state.detection is None
        assert [s.operation_id for s in state.recipe] == ["reverse"]
        assert state.output == "cba"

    def test_add_steps_batch(self) -> None:
        workbench = Workbench(input_text="abc")
        workbench.add_steps(["reverse", "to-uppercase"])
        assert workbench.output == "CBA"
