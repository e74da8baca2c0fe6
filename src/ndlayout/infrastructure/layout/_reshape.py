"""
Zero-copy reshape stride solver.

`no_copy_strides` decides whether an existing strided layout can be
reinterpreted under a new shape without moving any data, and computes the
strides of the reinterpreted layout when it can.

Algorithm
---------
1. Drop every size-1 axis from the current layout.
2. Require equal, non-zero element counts on both sides.
3. Walk the old and new dimensions in tandem, growing a group on whichever
   side has the smaller running product until both products match.
4. The old axes of a group may only be merged when they are contiguous in
   memory under the requested ordering.
5. New strides for a group are produced with the contiguous-stride formula,
   seeded from the boundary stride of the old group.
6. Trailing size-1 axes of the new shape receive the last computed stride
   (scaled by the preceding extent in Fortran order).

A `None` return value means "not possible" and is a normal outcome: the
caller falls back to a copying reshape.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ...domain._ordering import Ordering


def no_copy_strides(
    shape: Sequence[int],
    stride: Sequence[int],
    new_shape: Sequence[int],
    ordering: Ordering,
) -> Optional[tuple[int, ...]]:
    """
    Compute strides for a zero-copy reshape, or return None.

    Parameters
    ----------
    shape : Sequence[int]
        Current shape.
    stride : Sequence[int]
        Current strides.
    new_shape : Sequence[int]
        Requested shape; must not contain negative entries.
    ordering : Ordering
        Ordering under which elements are read and written.

    Returns
    -------
    Optional[tuple[int, ...]]
        Strides for `new_shape` addressing the same elements in the same
        logical order, or None when no such strides exist.
    """
    old_dims = [int(d) for d in shape if d != 1]
    old_strides = [int(s) for d, s in zip(shape, stride) if d != 1]
    new_dims = [int(d) for d in new_shape]

    new_total = 1
    for d in new_dims:
        new_total *= d
    old_total = 1
    for d in old_dims:
        old_total *= d

    if new_total != old_total or new_total == 0:
        return None

    fortran = ordering is Ordering.FORTRAN
    new_strides = [0] * len(new_dims)

    oi, oj = 0, 1
    ni, nj = 0, 1
    while ni < len(new_dims) and oi < len(old_dims):
        np_ = new_dims[ni]
        op = old_dims[oi]

        while np_ != op:
            if np_ < op:
                np_ *= new_dims[nj]
                nj += 1
            else:
                op *= old_dims[oj]
                oj += 1

        for ok in range(oi, oj - 1):
            if fortran:
                if old_strides[ok + 1] != old_dims[ok] * old_strides[ok]:
                    return None
            elif old_strides[ok] != old_dims[ok + 1] * old_strides[ok + 1]:
                return None

        if fortran:
            new_strides[ni] = old_strides[oi]
            for nk in range(ni + 1, nj):
                new_strides[nk] = new_strides[nk - 1] * new_dims[nk - 1]
        else:
            new_strides[nj - 1] = old_strides[oj - 1]
            for nk in range(nj - 1, ni, -1):
                new_strides[nk - 1] = new_strides[nk] * new_dims[nk]

        ni = nj
        nj += 1
        oi = oj
        oj += 1

    if ni >= 1:
        last_stride = new_strides[ni - 1]
        if fortran:
            last_stride *= new_dims[ni - 1]
    else:
        last_stride = 1
    for nk in range(ni, len(new_dims)):
        new_strides[nk] = last_stride

    return tuple(new_strides)
