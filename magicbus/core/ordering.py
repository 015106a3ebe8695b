from __future__ import annotations

from typing import Any, Callable, Iterable

"""
Type ordering: most general interest types first.

The comparator only answers "is one of these a strict ancestor of the other".
Unrelated types compare equal, which is not a total order, so it must never be
used for key equality and cannot be fed straight into sorted(). order_types()
builds a linear extension instead.
"""

# is_subtype(candidate, ancestor) -> True if candidate "is-a" ancestor (reflexive)
SubtypeFn = Callable[[Any, Any], bool]


def is_subtype(candidate: Any, ancestor: Any) -> bool:
    return issubclass(candidate, ancestor)


def is_strict_ancestor(a: Any, b: Any, subtype: SubtypeFn = is_subtype) -> bool:
    """True if b is-a a, but not the other way round."""
    return subtype(b, a) and not subtype(a, b)


def compare_types(a: Any, b: Any, subtype: SubtypeFn = is_subtype) -> int:
    """
    -1: a is a strict ancestor of b (a first)
     1: b is a strict ancestor of a (b first)
     0: unrelated or identical
    """
    a_first = subtype(b, a)
    b_first = subtype(a, b)
    if a_first and not b_first:
        return -1
    if b_first and not a_first:
        return 1
    return 0


def order_types(types: Iterable[Any], subtype: SubtypeFn = is_subtype) -> list[Any]:
    """
    Stable topological order: every strict ancestor before its descendants,
    otherwise earliest input first.

    Repeatedly takes the first remaining type that has no strict ancestor left.
    Quadratic, fine for the handful of interest types a bus sees.
    """
    remaining = list(types)
    ordered: list[Any] = []
    while remaining:
        for i, candidate in enumerate(remaining):
            if not any(
                compare_types(other, candidate, subtype) < 0
                for other in remaining
                if other is not candidate
            ):
                ordered.append(remaining.pop(i))
                break
        else:
            # Cyclic relation from a custom subtype function; keep input order.
            ordered.extend(remaining)
            break
    return ordered
