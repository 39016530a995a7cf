"""Composable requests narrowing a suite down to chosen cases."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple, Union

from .models import DEFAULT_TEST_FILE, TestCase, TestSet

logger = logging.getLogger(__name__)

VALID = "valid"
INVALID = "invalid"
GROUPS = (VALID, INVALID)


@dataclass(frozen=True)
class AllFrom:
    """Every case found in ``path``."""

    path: str


@dataclass(frozen=True)
class SelectValid:
    """Narrow the valid group of ``base`` to ``indices``."""

    indices: Optional[Tuple[int, ...]]
    base: "Selection"


@dataclass(frozen=True)
class SelectInvalid:
    """Narrow the invalid group of ``base`` to ``indices``."""

    indices: Optional[Tuple[int, ...]]
    base: "Selection"


@dataclass(frozen=True)
class SkipGroup:
    """Drop one whole group of ``base``."""

    group: str
    base: "Selection"

    def __post_init__(self) -> None:
        if self.group not in GROUPS:
            raise ValueError(f"Unknown group '{self.group}', expected one of {GROUPS}")


Selection = Union[AllFrom, SelectValid, SelectInvalid, SkipGroup]

DEFAULT_SELECTION: Selection = AllFrom(DEFAULT_TEST_FILE)


def select_valid(indices: Optional[Sequence[int]], base: Selection = DEFAULT_SELECTION) -> SelectValid:
    return SelectValid(indices=_freeze(indices), base=base)


def select_invalid(indices: Optional[Sequence[int]], base: Selection = DEFAULT_SELECTION) -> SelectInvalid:
    return SelectInvalid(indices=_freeze(indices), base=base)


def _freeze(indices: Optional[Sequence[int]]) -> Optional[Tuple[int, ...]]:
    if indices is None:
        return None
    return tuple(int(index) for index in indices)


def select_indices(indices: Optional[Sequence[int]], group: Sequence[TestCase]) -> Tuple[TestCase, ...]:
    """Return the cases of ``group`` at ``indices``.

    Missing or empty ``indices`` keeps the whole group. An index is dropped
    when it occurs again later in ``indices`` or when it is out of range, so
    each surviving case appears once, at the position of its last request.
    """

    if not indices:
        return tuple(group)
    seen: set[int] = set()
    picked: list[TestCase] = []
    for index in reversed(indices):
        if index in seen:
            continue
        seen.add(index)
        if 0 <= index < len(group):
            picked.append(group[index])
    picked.reverse()
    return tuple(picked)


def resolve_selection(selection: Selection, load: Callable[[str], TestSet]) -> TestSet:
    """Load the base file of ``selection`` and apply each narrowing step."""

    if isinstance(selection, AllFrom):
        return load(selection.path)
    tests = resolve_selection(selection.base, load)
    if isinstance(selection, SelectValid):
        narrowed = TestSet(valid=select_indices(selection.indices, tests.valid), invalid=tests.invalid)
    elif isinstance(selection, SelectInvalid):
        narrowed = TestSet(valid=tests.valid, invalid=select_indices(selection.indices, tests.invalid))
    elif isinstance(selection, SkipGroup):
        if selection.group == VALID:
            narrowed = TestSet(valid=(), invalid=tests.invalid)
        else:
            narrowed = TestSet(valid=tests.valid, invalid=())
    else:
        raise TypeError(f"Unsupported selection {selection!r}")
    logger.debug(
        "Narrowed selection to %d valid / %d invalid case(s)", len(narrowed.valid), len(narrowed.invalid)
    )
    return narrowed


def selection_file(selection: Selection) -> str:
    """Return the path at the root of ``selection``."""

    while not isinstance(selection, AllFrom):
        selection = selection.base
    return selection.path
