"""Tests for sequential bulk creation with per-item failure isolation."""

import pytest

from locals_api.core.bulk import UNEXPECTED_ITEM_ERROR, run_bulk
from locals_api.core.exceptions import InvalidInputError, ResourceExistsError


def create_unique(seen: set):
    def create_one(item: str) -> str:
        if item in seen:
            raise ResourceExistsError("Thing", "name")
        seen.add(item)
        return item.upper()

    return create_one


class TestRunBulk:
    @pytest.mark.parametrize("items", [[], (), None, "abc", {"a": 1}])
    def test_rejects_non_list_or_empty_input(self, items):
        calls = []

        with pytest.raises(InvalidInputError) as exc_info:
            run_bulk(items, calls.append)

        assert exc_info.value.status_code == 400
        assert calls == []

    def test_all_succeed(self):
        result = run_bulk(["a", "b"], create_unique(set()))

        assert result.success is True
        assert (result.total, result.created, result.failed) == (2, 2, 0)
        assert [s.data for s in result.data.successful] == ["A", "B"]

    def test_failures_do_not_stop_the_batch(self):
        result = run_bulk(["a", "b", "a", "c"], create_unique(set()), identify=str)

        assert result.success is False
        assert (result.total, result.created, result.failed) == (4, 3, 1)
        failure = result.data.failed[0]
        assert failure.index == 2
        assert failure.identifying_field == "a"
        assert failure.error_message == "Thing with this name already exists"

    def test_indices_partition_the_input(self):
        items = ["a", "b", "a", "b", "c"]
        result = run_bulk(items, create_unique(set()))

        indices = [s.index for s in result.data.successful] + [
            f.index for f in result.data.failed
        ]
        assert sorted(indices) == list(range(len(items)))
        assert result.created + result.failed == result.total

    def test_unexpected_errors_get_a_generic_message(self):
        def create_one(item: str) -> str:
            raise RuntimeError("connection string with password=secret")

        result = run_bulk(["a"], create_one)

        assert result.failed == 1
        assert result.data.failed[0].error_message == UNEXPECTED_ITEM_ERROR
        assert result.data.failed[0].identifying_field is None

    def test_each_item_attempted_once_in_order(self):
        attempts = []

        def create_one(item: int) -> int:
            attempts.append(item)
            if item % 2:
                raise InvalidInputError("odd")
            return item

        run_bulk([0, 1, 2, 3], create_one)

        assert attempts == [0, 1, 2, 3]
