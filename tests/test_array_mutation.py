from __future__ import annotations

from mongoquent.model import ArrayMutationTracker, AttributeStore
from mongoquent.model.arrays import wrap_values


def _tracker(**attributes: object) -> tuple[AttributeStore, ArrayMutationTracker]:
    store = AttributeStore()
    store.fill(attributes)
    return store, ArrayMutationTracker(store)


def test_append_unique_skips_existing_values() -> None:
    store, tracker = _tracker(numbers=[1, 2, 3])
    assert tracker.append("numbers", [2, 4], unique=True) == [1, 2, 3, 4]
    assert store.get("numbers") == [1, 2, 3, 4]


def test_append_without_unique_keeps_duplicates() -> None:
    _, tracker = _tracker(numbers=[1, 2, 3])
    assert tracker.append("numbers", [2, 4]) == [1, 2, 3, 2, 4]


def test_append_unique_dedupes_within_one_call() -> None:
    _, tracker = _tracker()
    assert tracker.append("numbers", [4, 4, 5], unique=True) == [4, 5]


def test_append_syncs_snapshot() -> None:
    store, tracker = _tracker(tags=["a"])
    tracker.append("tags", ["b"])
    assert store.get_original("tags") == ["a", "b"]
    assert store.get_original("tags") is not store.get("tags")


def test_append_can_leave_snapshot_alone() -> None:
    store, tracker = _tracker(tags=["a"])
    tracker.append("tags", ["b"], sync_snapshot=False)
    assert store.get_original("tags") == ["a"]


def test_remove_drops_every_occurrence() -> None:
    store, tracker = _tracker(numbers=[1, 2, 2, 3])
    assert tracker.remove("numbers", [2]) == [1, 3]
    assert store.get_original("numbers") == [1, 3]


def test_missing_or_scalar_attribute_is_treated_as_empty() -> None:
    store, tracker = _tracker(label="scalar")
    assert tracker.append("label", ["x"]) == ["x"]
    assert tracker.remove("missing", ["x"]) == []
    assert store.get("missing") == []


def test_tuple_attribute_is_treated_as_list() -> None:
    _, tracker = _tracker(numbers=(1, 2))
    assert tracker.append("numbers", [3]) == [1, 2, 3]


def test_returned_list_is_detached() -> None:
    store, tracker = _tracker(numbers=[1])
    result = tracker.append("numbers", [2])
    result.append(99)
    assert store.get("numbers") == [1, 2]


def test_wrap_values_unpacks_iterables_but_not_scalars() -> None:
    assert wrap_values({"b"}) == ["b"]
    assert wrap_values(value for value in (1, 2)) == [1, 2]
    assert wrap_values("ab") == ["ab"]
    assert wrap_values(b"ab") == [b"ab"]
    assert wrap_values({"k": 1}) == [{"k": 1}]
    assert wrap_values(7) == [7]
