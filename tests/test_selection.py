from __future__ import annotations

import pytest

from compiletest.core import AllFrom, SkipGroup, TestSet, select_indices
from compiletest.core.selection import (
    INVALID,
    VALID,
    resolve_selection,
    select_invalid,
    select_valid,
    selection_file,
)

GROUP = ("a", "b", "c", "d")


def test_select_follows_requested_order() -> None:
    assert select_indices([2, 0], GROUP) == ("c", "a")


def test_select_keeps_last_occurrence_of_duplicates() -> None:
    assert select_indices([1, 2, 1], GROUP) == ("c", "b")


def test_select_with_index_repeated_three_times() -> None:
    assert select_indices([0, 1, 0, 2, 0], GROUP) == ("b", "c", "a")


def test_select_returns_each_index_once() -> None:
    picked = select_indices([3, 3, 1, 3, 1], GROUP)
    assert picked == ("d", "b")
    assert len(set(picked)) == len(picked)


def test_select_drops_out_of_range_indices() -> None:
    assert select_indices([-1, 4, 1, 100], GROUP) == ("b",)
    assert select_indices([7, 7], GROUP) == ()


@pytest.mark.parametrize("indices", [None, [], ()])
def test_select_without_indices_is_identity(indices) -> None:
    assert select_indices(indices, GROUP) == GROUP


def test_select_full_range_preserves_order() -> None:
    assert select_indices(list(range(len(GROUP))), GROUP) == GROUP


def _loader(calls: list):
    def load(path: str) -> TestSet:
        calls.append(path)
        return TestSet.of(["v0", "v1", "v2"], ["i0", "i1"])

    return load


def test_resolve_selection_composes_narrowing_steps() -> None:
    calls: list = []
    selection = select_invalid([1], select_valid([2, 0], AllFrom("suite.ss")))
    tests = resolve_selection(selection, _loader(calls))
    assert tests.valid == ("v2", "v0")
    assert tests.invalid == ("i1",)
    assert calls == ["suite.ss"]


def test_resolve_selection_nested_narrowing_applies_in_order() -> None:
    selection = select_valid([1], select_valid([2, 0], AllFrom("suite.ss")))
    tests = resolve_selection(selection, _loader([]))
    assert tests.valid == ("v0",)
    assert tests.invalid == ("i0", "i1")


def test_skip_group_empties_one_group() -> None:
    tests = resolve_selection(SkipGroup(INVALID, AllFrom("suite.ss")), _loader([]))
    assert tests.valid == ("v0", "v1", "v2")
    assert tests.invalid == ()
    tests = resolve_selection(SkipGroup(VALID, AllFrom("suite.ss")), _loader([]))
    assert tests.valid == ()


def test_skip_group_rejects_unknown_group() -> None:
    with pytest.raises(ValueError):
        SkipGroup("other", AllFrom("suite.ss"))


def test_selection_file_walks_to_root() -> None:
    selection = SkipGroup(VALID, select_invalid([0], AllFrom("x.ss")))
    assert selection_file(selection) == "x.ss"
