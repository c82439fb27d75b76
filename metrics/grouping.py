"""
metrics/grouping.py

Order-preserving partitioning of records by a key function.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
J = TypeVar("J", bound=Hashable)


def group_by(items: Iterable[T], key: Callable[[T], K]) -> dict[K, list[T]]:
    """
    Partition *items* into groups keyed by ``key(item)``.

    Groups appear in first-seen order and members keep encounter order.
    Keys are matched by value equality, so ``2022`` and ``2022.0`` land
    in the same group.
    """
    groups: dict[K, list[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups


def group_by_nested(
    items: Iterable[T],
    outer: Callable[[T], K],
    inner: Callable[[T], J],
) -> dict[K, dict[J, list[T]]]:
    """Two-level :func:`group_by`: outer groups, each split by *inner*."""
    return {
        outer_key: group_by(members, inner)
        for outer_key, members in group_by(items, outer).items()
    }
