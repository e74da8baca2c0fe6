"""
Broadcast compatibility helpers.

Shapes are compared trailing-aligned: walking both shapes from the last
dimension backward, each pair of sizes must be equal or one of them must be
1. Missing leading dimensions on the shorter side are treated as 1.
"""

from __future__ import annotations

from typing import Sequence

from ...domain._errors import IncompatibleBroadcastError
from ...domain._ordering import Ordering


def broadcast_shape(source: Sequence[int], target: Sequence[int]) -> tuple[int, ...]:
    """
    Return the shape produced by broadcasting `source` against `target`.

    Raises
    ------
    IncompatibleBroadcastError
        If a trailing-aligned pair of sizes differs and neither is 1.
    """
    source = tuple(source)
    target = tuple(target)
    rank = max(len(source), len(target))
    src = (1,) * (rank - len(source)) + source
    dst = (1,) * (rank - len(target)) + target

    out = []
    for s, t in zip(src, dst):
        if s != t and s != 1 and t != 1:
            raise IncompatibleBroadcastError(source, target)
        out.append(max(s, t))
    return tuple(out)


def is_broadcast_compatible(source: Sequence[int], target: Sequence[int]) -> bool:
    try:
        broadcast_shape(source, target)
    except IncompatibleBroadcastError:
        return False
    return True


def cyclic_fill_matches_broadcast(
    source: Sequence[int], result: Sequence[int], ordering: Ordering
) -> bool:
    """
    Tell whether cycling `source`'s flat elements over `result` agrees with
    stride-0 broadcasting.

    In C order the cyclic fill is exact when the padded source is all ones up
    to some axis and identical to `result` from that axis on. Fortran order
    mirrors the condition.
    """
    rank = len(result)
    src = (1,) * (rank - len(source)) + tuple(source)
    dst = tuple(result)
    if ordering is Ordering.FORTRAN:
        src = src[::-1]
        dst = dst[::-1]

    for k in range(rank + 1):
        if src[k:] == dst[k:]:
            return True
        if src[k] != 1:
            return False
    return True
