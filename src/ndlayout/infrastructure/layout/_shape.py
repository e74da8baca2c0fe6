"""
Pure shape and stride helpers.

Every function in this module operates on plain integer tuples and has no
knowledge of buffers or arrays. The array layer calls into these helpers
for all layout arithmetic so that singleton-dimension handling (leading and
trailing 1s, row/column vector shapes) is decided in exactly one place.

Conventions
-----------
- Shapes and strides are tuples of Python ints.
- Rank-1 shapes are promoted to `(1, n)` row vectors by `normalize_layout`.
  Rank 0 denotes a scalar and stays rank 0.
- Strides are measured in elements, not bytes.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ...domain._errors import (
    AmbiguousShapeError,
    IllegalAxisError,
    IndexOutOfRangeError,
    InvalidPermutationError,
    ShapeMismatchError,
)
from ...domain._ordering import Ordering


def prod(values: Sequence[int]) -> int:
    out = 1
    for v in values:
        out *= int(v)
    return out


def default_strides(shape: Sequence[int], ordering: Ordering) -> tuple[int, ...]:
    """
    Compute contiguous strides for `shape` in the given ordering.

    Row-major: `stride[-1] == 1` and `stride[i] == stride[i+1] * shape[i+1]`.
    Column-major: `stride[0] == 1` and `stride[i] == stride[i-1] * shape[i-1]`.

    Parameters
    ----------
    shape : Sequence[int]
        Logical shape.
    ordering : Ordering
        Element ordering.

    Returns
    -------
    tuple[int, ...]
        One stride per dimension.
    """
    rank = len(shape)
    strides = [1] * rank
    if ordering is Ordering.C:
        for i in range(rank - 2, -1, -1):
            strides[i] = strides[i + 1] * int(shape[i + 1])
    else:
        for i in range(1, rank):
            strides[i] = strides[i - 1] * int(shape[i - 1])
    return tuple(strides)


def normalize_layout(
    shape: Sequence[int],
    stride: Optional[Sequence[int]],
    ordering: Ordering,
) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """
    Validate a shape/stride pair and promote rank-1 layouts to row vectors.

    Rules
    -----
    - Missing strides are computed with `default_strides`.
    - A stride tuple whose rank differs from the shape's is recomputed from
      the shape (invariant repair, not an error).
    - `(n,)` becomes `(1, n)`. An explicit rank-1 stride `(s,)` is kept as
      the column stride; the phantom leading axis gets the stride the
      default formula would give it when seeded from `s`.

    Raises
    ------
    ShapeMismatchError
        If any dimension is negative.
    """
    shape = tuple(int(d) for d in shape)
    if any(d < 0 for d in shape):
        raise ShapeMismatchError(shape, reason="dimensions must be non-negative")

    if stride is not None:
        stride = tuple(int(s) for s in stride)
        if len(stride) != len(shape):
            stride = None

    if len(shape) == 1:
        n = shape[0]
        if stride is None:
            shape = (1, n)
            return shape, default_strides(shape, ordering)
        s = stride[0]
        lead = n * s if ordering is Ordering.C else s
        return (1, n), (lead, s)

    if stride is None:
        stride = default_strides(shape, ordering)
    return shape, stride


def normalize_axis(axis: int, rank: int) -> int:
    """Resolve a possibly negative axis, raising `IllegalAxisError` when out of range."""
    if rank == 0:
        raise IllegalAxisError(axis, (), "scalars have no axes")
    resolved = axis + rank if axis < 0 else axis
    if resolved < 0 or resolved >= rank:
        raise IllegalAxisError(axis, (rank,), f"axis must be in [-{rank}, {rank})")
    return resolved


# ----------------------------------------------------------------------
# Shape classification
# ----------------------------------------------------------------------
def is_row_vector_shape(shape: Sequence[int]) -> bool:
    return len(shape) == 1 or (len(shape) == 2 and shape[0] == 1)


def is_column_vector_shape(shape: Sequence[int]) -> bool:
    return len(shape) == 2 and shape[1] == 1


def is_vector_shape(shape: Sequence[int]) -> bool:
    return is_row_vector_shape(shape) or is_column_vector_shape(shape)


def is_matrix_shape(shape: Sequence[int]) -> bool:
    return len(shape) == 2 and shape[0] != 1 and shape[1] != 1


def leading_ones(shape: Sequence[int]) -> int:
    """Count the consecutive size-1 axes at the start of `shape`."""
    count = 0
    for d in shape:
        if d != 1:
            break
        count += 1
    return count


def trailing_ones(shape: Sequence[int]) -> int:
    """
    Count the consecutive size-1 axes at the end of `shape`.

    Axis 0 is never counted, so an all-ones shape reports `rank - 1`.
    """
    count = 0
    for i in range(len(shape) - 1, 0, -1):
        if shape[i] != 1:
            break
        count += 1
    return count


def effective_singletons(shape: Sequence[int]) -> tuple[int, int]:
    """
    Return the `(leading, trailing)` singleton counts used for addressing.

    Column-vector shapes `(n, 1)` report no trailing singletons so that
    `(i, 0)` addressing stays correct for them.
    """
    lead = leading_ones(shape)
    trail = 0 if is_column_vector_shape(shape) else trailing_ones(shape)
    if lead + trail > len(shape):
        trail = len(shape) - lead
    return lead, trail


def squeeze_axes(shape: Sequence[int]) -> tuple[int, ...]:
    """Return the indices of the non-singleton axes of `shape`."""
    return tuple(i for i, d in enumerate(shape) if d != 1)


def squeeze(shape: Sequence[int]) -> tuple[int, ...]:
    return tuple(d for d in shape if d != 1)


# ----------------------------------------------------------------------
# Index arithmetic
# ----------------------------------------------------------------------
def ind2sub(shape: Sequence[int], index: int, ordering: Ordering) -> tuple[int, ...]:
    """
    Unravel a flat index into coordinates.

    This is the inverse of the default stride formula: in C order the last
    coordinate varies fastest, in Fortran order the first one does.

    Raises
    ------
    IndexOutOfRangeError
        If `index` is outside `[0, prod(shape))`.
    """
    total = prod(shape)
    if index < 0 or index >= total:
        raise IndexOutOfRangeError(index, total, "flat index")

    coords = [0] * len(shape)
    rem = index
    axes = range(len(shape) - 1, -1, -1) if ordering is Ordering.C else range(len(shape))
    for axis in axes:
        dim = shape[axis]
        coords[axis] = rem % dim
        rem //= dim
    return tuple(coords)


def physical_index(offset: int, stride: Sequence[int], coords: Sequence[int]) -> int:
    ix = offset
    for c, s in zip(coords, stride):
        ix += c * s
    return ix


def reach(shape: Sequence[int], stride: Sequence[int], offset: int) -> tuple[int, int]:
    """
    Return the lowest and highest buffer index addressed by a layout.

    Only meaningful for layouts with at least one element.
    """
    lo = hi = offset
    for d, s in zip(shape, stride):
        span = (d - 1) * s
        if span > 0:
            hi += span
        else:
            lo += span
    return lo, hi


# ----------------------------------------------------------------------
# Reshape / permute argument handling
# ----------------------------------------------------------------------
def infer_shape(shape: Sequence[int], length: int) -> tuple[int, ...]:
    """
    Replace a single negative dimension with the size implied by `length`.

    Raises
    ------
    AmbiguousShapeError
        If more than one dimension is negative.
    ShapeMismatchError
        If the resolved shape does not hold exactly `length` elements.
    """
    shape = tuple(int(d) for d in shape)
    negatives = [i for i, d in enumerate(shape) if d < 0]
    if len(negatives) > 1:
        raise AmbiguousShapeError(shape)

    if negatives:
        known = prod(d for d in shape if d >= 0)
        if known == 0 or length % known != 0:
            raise ShapeMismatchError(shape, length, "cannot infer the -1 dimension")
        i = negatives[0]
        shape = shape[:i] + (length // known,) + shape[i + 1 :]

    if prod(shape) != length:
        raise ShapeMismatchError(shape, length, "reshape must preserve the element count")
    return shape


def check_permutation(order: Sequence[int], rank: int) -> tuple[int, ...]:
    """
    Validate that `order` arranges `0..rank` exactly once each.

    Raises
    ------
    InvalidPermutationError
        On wrong length, negative, out-of-range or duplicated entries.
    """
    order = tuple(int(o) for o in order)
    if len(order) != rank:
        raise InvalidPermutationError(order, rank, "length must equal the rank")
    for o in order:
        if o < 0:
            raise InvalidPermutationError(order, rank, f"negative entry {o}")
        if o >= rank:
            raise InvalidPermutationError(order, rank, f"entry {o} >= rank")
    if len(set(order)) != rank:
        raise InvalidPermutationError(order, rank, "entries must be unique")
    return order


def remove_axes(values: Sequence[int], axes: Sequence[int]) -> tuple[int, ...]:
    drop = set(axes)
    return tuple(v for i, v in enumerate(values) if i not in drop)
