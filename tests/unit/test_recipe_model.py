from __future__ import annotations

import threading

import pytest

from src.app.domain.errors import StepNotFoundError
from src.app.domain.models import OperationInstance
from src.app.services.recipe_model import RecipeModel


class TestRecipeModelAppend:
    def test_append_creates_fresh_instance(self) -> None:
        recipe = RecipeModel()

        step = recipe.append("md5")

        assert step.operation_id == "md5"
        assert step.params == {}
        assert step.instance_id
        assert recipe.snapshot() == (step,)

    def test_same_operation_gets_distinct_instances(self) -> None:
        recipe = RecipeModel()

        first = recipe.append("reverse")
        second = recipe.append("reverse")

        assert first.instance_id != second.instance_id
        assert [s.operation_id for s in recipe] == ["reverse", "reverse"]

    def test_params_are_copied_per_instance(self) -> None:
        recipe = RecipeModel()
        shared = {"mode": "x"}

        first = recipe.append("reverse", shared)
        second = recipe.append("reverse", shared)
        shared["mode"] = "changed"

        assert first.params == {"mode": "x"}
        assert first.params is not second.params


class TestRecipeModelBatch:
    def test_append_batch_keeps_order(self) -> None:
        recipe = RecipeModel()
        recipe.append("reverse")

        new_steps = recipe.append_batch(["a", "b", "c"])

        assert [s.operation_id for s in new_steps] == ["a", "b", "c"]
        assert [s.operation_id for s in recipe.snapshot()] == ["reverse", "a", "b", "c"]
        assert len({s.instance_id for s in recipe.snapshot()}) == 4

    def test_append_batch_accepts_generator(self) -> None:
        recipe = RecipeModel()
        recipe.append_batch(op for op in ["rot13", "sha256"])
        assert len(recipe) == 2

    def test_empty_batch_is_noop(self) -> None:
        recipe = RecipeModel()
        assert recipe.append_batch([]) == []
        assert len(recipe) == 0

    def test_readers_never_see_partial_batch(self) -> None:
        recipe = RecipeModel()
        batch = [f"op-{i}" for i in range(200)]
        observed_sizes: set[int] = set()
        stop = threading.Event()

        def reader() -> None:
            while not stop.is_set():
                observed_sizes.add(len(recipe.snapshot()))

        thread = threading.Thread(target=reader)
        thread.start()
        try:
            for _ in range(20):
                recipe.append_batch(batch)
        finally:
            stop.set()
            thread.join()

        assert all(size % len(batch) == 0 for size in observed_sizes)
        assert len(recipe) == 20 * len(batch)


class TestRecipeModelRemoveAndClear:
    def test_remove_exact_instance(self) -> None:
        recipe = RecipeModel()
        first = recipe.append("reverse")
        second = recipe.append("reverse")

        assert recipe.remove(first.instance_id) is True
        assert recipe.snapshot() == (second,)

    def test_remove_absent_is_noop(self) -> None:
        recipe = RecipeModel()
        step = recipe.append("md5")

        assert recipe.remove("missing") is False
        assert recipe.snapshot() == (step,)

    def test_clear(self) -> None:
        recipe = RecipeModel()
        recipe.append_batch(["a", "b"])

        recipe.clear()

        assert len(recipe) == 0
        assert recipe.snapshot() == ()

    def test_ids_are_not_reused_after_clear(self) -> None:
        recipe = RecipeModel()
        before = {s.instance_id for s in recipe.append_batch(["a"] * 50)}
        recipe.clear()
        after = {s.instance_id for s in recipe.append_batch(["a"] * 50)}

        assert before.isdisjoint(after)


class TestRecipeModelParams:
    def test_update_params_preserves_identity_and_position(self) -> None:
        recipe = RecipeModel()
        first = recipe.append("reverse")
        second = recipe.append("md5")

        updated = recipe.update_params(first.instance_id, {"mode": "fast"})

        assert updated.instance_id == first.instance_id
        assert updated.params == {"mode": "fast"}
        assert recipe.snapshot() == (updated, second)

    def test_update_params_unknown_raises(self) -> None:
        recipe = RecipeModel()

        with pytest.raises(StepNotFoundError) as exc_info:
            recipe.update_params("missing", {})

        assert exc_info.value.instance_id == "missing"

    def test_get(self) -> None:
        recipe = RecipeModel()
        step = recipe.append("md5")

        assert recipe.get(step.instance_id) == step
        assert recipe.get("missing") is None


class TestRecipeModelSeed:
    def test_seed_steps(self) -> None:
        seed = [
            OperationInstance(instance_id="one", operation_id="reverse"),
            OperationInstance(instance_id="two", operation_id="md5"),
        ]
        recipe = RecipeModel(seed)
        assert [s.instance_id for s in recipe] == ["one", "two"]

    def test_seed_with_duplicate_ids_rejected(self) -> None:
        seed = [
            OperationInstance(instance_id="one", operation_id="reverse"),
            OperationInstance(instance_id="one", operation_id="md5"),
        ]
        with pytest.raises(ValueError):
            RecipeModel(seed)

    def test_snapshot_is_independent(self) -> None:
        recipe = RecipeModel()
        recipe.append("md5")
        snapshot = recipe.snapshot()
        recipe.append("sha1")

        assert len(snapshot) == 1
