"""
Ordinal selection over matched elements.

A query is a selector plus optional indices. Indices are ints or `range`s,
freely mixed; they are flattened in the order given, so the result follows
the caller's order rather than document order.
"""
# @file purpose: Resolve index/range restrictions over query matches.

from __future__ import annotations

from typing import Sequence, TypeVar, Union

from .errors import IndexOutOfRangeError

T = TypeVar("T")

Index = Union[int, range]


def flatten(indices: Sequence[Index]) -> list[int]:
    """Expand ranges into their ordinals, keeping the given order."""
    ordinals: list[int] = []
    for index in indices:
        if isinstance(index, range):
            ordinals.extend(index)
        elif isinstance(index, int) and not isinstance(index, bool):
            ordinals.append(index)
        else:
            raise TypeError(f"indices must be int or range, got {type(index).__name__}")
    return ordinals


def is_single(indices: Sequence[Index]) -> bool:
    """One plain int means "that element", not "a set holding it"."""
    return len(indices) == 1 and not isinstance(indices[0], range)


def pick(matches: Sequence[T], indices: Sequence[Index], *, selector: str) -> list[T]:
    """
    Select `matches` at `indices`.
    No indices selects everything. Any ordinal outside [0, len) raises
    IndexOutOfRangeError; there are no partial results.
    """
    if not indices:
        return list(matches)

    ordinals = flatten(indices)
    count = len(matches)
    for ordinal in ordinals:
        if not 0 <= ordinal < count:
            raise IndexOutOfRangeError(selector, ordinal, count, indices=ordinals)
    return [matches[i] for i in ordinals]
