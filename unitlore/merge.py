"""Merging of mappings by key order."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TypeVar

K = TypeVar("K")
V = TypeVar("V")


def merge_sorted(
    left: Mapping[K, V],
    right: Mapping[K, V],
    merge_func: Callable[[V, V], V | None],
) -> dict[K, V]:
    """Combine two mappings into one ordered by key.

    Keys found in only one mapping are copied; for keys in both,
    ``merge_func`` decides the value, and a result of None drops the key.
    """
    merged: dict[K, V] = {}
    for key in sorted(left.keys() | right.keys()):
        if key in left and key in right:
            value = merge_func(left[key], right[key])
            if value is not None:
                merged[key] = value
        elif key in left:
            merged[key] = left[key]
        else:
            merged[key] = right[key]
    return merged