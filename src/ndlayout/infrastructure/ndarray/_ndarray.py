"""
Concrete strided NDArray implementation (NumPy-backed buffer).

This module provides `NDArray`, the layout descriptor bound to a shared
`DataBuffer`. An array is the tuple `(buffer, shape, stride, offset,
ordering)` plus a factory strategy that every derived array inherits.

Design notes
------------
- Behavior is split across cohesive mixins (indexing, views, reshape,
  copies, comparison). This module owns construction, invariant checks,
  lifecycle and the cached derived properties the mixins build on.
- Construction fails before any shared state is touched: the buffer is only
  retained once every check has passed.
- Arrays never own their buffer exclusively. Each array retains the buffer
  on construction and releases it exactly once, either on `cleanup()` or
  when the array is garbage collected.
- Derived properties (major stride, singleton counts, vector/scalar
  classification) are memoized in a `MemoTable` and reset whenever the
  layout is mutated through `set_shape` / `set_stride`.
"""

from __future__ import annotations

import weakref
from typing import Optional, Sequence, Union

from ...domain._buffer import IDataBuffer
from ...domain._errors import (
    IllegalAxisError,
    OffsetOutOfRangeError,
    ShapeMismatchError,
    UseAfterInvalidationError,
)
from ...domain._factory import IArrayFactory
from ...domain._ordering import Ordering
from ...domain.utils._memo import MemoTable
from .._config import get_config
from ..layout._shape import (
    effective_singletons,
    is_column_vector_shape,
    is_matrix_shape,
    is_row_vector_shape,
    is_vector_shape,
    leading_ones,
    normalize_axis,
    normalize_layout,
    prod,
    reach,
    trailing_ones,
)
from .mixins import (
    NDArrayMixinCompare,
    NDArrayMixinCopy,
    NDArrayMixinIndexing,
    NDArrayMixinReshape,
    NDArrayMixinViews,
)


def _validate_layout(
    buffer: IDataBuffer,
    shape: tuple[int, ...],
    stride: tuple[int, ...],
    offset: int,
) -> None:
    capacity = buffer.length()
    length = prod(shape)

    if length > capacity:
        raise ShapeMismatchError(shape, capacity, "shape must be <= buffer length")

    if offset < 0 or offset > capacity or (length > 0 and offset == capacity):
        raise OffsetOutOfRangeError(offset, capacity)

    if length > 0:
        lo, hi = reach(shape, stride, offset)
        if lo < 0 or hi >= capacity:
            raise ShapeMismatchError(
                shape,
                capacity,
                f"stride {stride} at offset {offset} reaches index "
                f"{hi if hi >= capacity else lo}",
            )


class NDArray(
    NDArrayMixinIndexing,
    NDArrayMixinViews,
    NDArrayMixinReshape,
    NDArrayMixinCopy,
    NDArrayMixinCompare,
):
    """
    Strided view over a shared flat buffer.

    Parameters
    ----------
    buffer : IDataBuffer
        Element storage, shared with every array derived from this one.
    shape : Sequence[int]
        Logical shape. Rank-1 shapes are promoted to `(1, n)` row vectors;
        an empty shape denotes a rank-0 scalar.
    stride : Optional[Sequence[int]], optional
        Per-dimension displacement. Computed from shape and ordering when
        omitted, or when its rank does not match the shape.
    offset : int, optional
        Buffer index of coordinate (0, ..., 0). Defaults to 0.
    ordering : Optional[Ordering or str], optional
        Element ordering. Defaults to the configured default order.
    factory : Optional[IArrayFactory], optional
        Strategy used to create every array derived from this one.
        Defaults to the process-wide default factory.

    Raises
    ------
    ShapeMismatchError
        If the shape holds more elements than the buffer, or if the layout
        reaches outside the buffer.
    OffsetOutOfRangeError
        If the offset does not address an element of the buffer.
    UseAfterInvalidationError
        If the buffer has already been released.
    """

    def __init__(
        self,
        buffer: IDataBuffer,
        shape: Sequence[int],
        stride: Optional[Sequence[int]] = None,
        offset: int = 0,
        ordering: Optional[Union[Ordering, str]] = None,
        factory: Optional[IArrayFactory] = None,
    ) -> None:
        ordering = (
            get_config().default_order if ordering is None else Ordering.parse(ordering)
        )
        shape, stride = normalize_layout(shape, stride, ordering)
        offset = int(offset)
        _validate_layout(buffer, shape, stride, offset)

        if factory is None:
            from ._factory import default_factory

            factory = default_factory()

        buffer.retain()

        self._data = buffer
        self._shape = shape
        self._stride = stride
        self._offset = offset
        self._ordering = ordering
        self._length = prod(shape)
        self._factory = factory
        self._memo = MemoTable()
        self._cleaned_up = False
        self._finalizer = weakref.finalize(self, buffer.release)

    # ------------------------------------------------------------------
    # Factory hook
    # ------------------------------------------------------------------
    def _create(
        self,
        buffer: IDataBuffer,
        shape: Sequence[int],
        stride: Optional[Sequence[int]] = None,
        offset: int = 0,
        ordering: Optional[Ordering] = None,
    ) -> "NDArray":
        return self._factory.create(
            buffer, shape, stride, offset, self._ordering if ordering is None else ordering
        )

    def _create_zeros(
        self, shape: Sequence[int], ordering: Optional[Ordering] = None
    ) -> "NDArray":
        return self._factory.zeros(shape, self._ordering if ordering is None else ordering)

    @property
    def factory(self) -> IArrayFactory:
        return self._factory

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def _ensure_not_cleaned_up(self) -> None:
        if self._cleaned_up:
            raise UseAfterInvalidationError("array")
        if self._data.is_released:
            raise UseAfterInvalidationError("buffer")

    @property
    def is_cleaned_up(self) -> bool:
        return self._cleaned_up

    def cleanup(self) -> None:
        """
        Invalidate this array and drop its hold on the buffer.

        Invalidation is one-way. Other arrays sharing the buffer stay valid;
        the storage itself is released with its last holder.
        """
        if self._cleaned_up:
            return
        self._cleaned_up = True
        self._finalizer()

    def is_valid(self) -> bool:
        """Return True if every coordinate of this array resolves inside its buffer."""
        if self._cleaned_up or self._data.is_released:
            return False
        try:
            _validate_layout(self._data, self._shape, self._stride, self._offset)
        except (ShapeMismatchError, OffsetOutOfRangeError):
            return False
        return True

    # ------------------------------------------------------------------
    # Layout descriptor
    # ------------------------------------------------------------------
    @property
    def data(self) -> IDataBuffer:
        self._ensure_not_cleaned_up()
        return self._data

    @property
    def shape(self) -> tuple[int, ...]:
        self._ensure_not_cleaned_up()
        return self._shape

    @property
    def stride(self) -> tuple[int, ...]:
        self._ensure_not_cleaned_up()
        return self._stride

    @property
    def offset(self) -> int:
        self._ensure_not_cleaned_up()
        return self._offset

    @property
    def ordering(self) -> Ordering:
        self._ensure_not_cleaned_up()
        return self._ordering

    @property
    def length(self) -> int:
        self._ensure_not_cleaned_up()
        return self._length

    @property
    def rank(self) -> int:
        self._ensure_not_cleaned_up()
        return len(self._shape)

    def size(self, dimension: int) -> int:
        """
        Return the extent of one dimension.

        Scalars report their length for dimensions 0, 1 and any negative
        dimension.
        """
        self._ensure_not_cleaned_up()
        if self.is_scalar():
            if dimension in (0, 1) or dimension < 0:
                return self._length
            raise IllegalAxisError(dimension, self._shape, "illegal dimension for scalar")
        return self._shape[normalize_axis(dimension, len(self._shape))]

    def stride_of(self, dimension: int) -> int:
        self._ensure_not_cleaned_up()
        return self._stride[normalize_axis(dimension, len(self._stride))]

    def slices(self) -> int:
        """Number of slices along dimension 0."""
        self._ensure_not_cleaned_up()
        return self._shape[0] if self._shape else 0

    def set_shape(self, *shape: int) -> None:
        """
        Replace the shape in place (construction-time normalization only).

        Strides are recomputed from the new shape when their rank no longer
        matches. The array is left unchanged if the new layout is invalid.
        """
        self._ensure_not_cleaned_up()
        if len(shape) == 1 and isinstance(shape[0], (tuple, list)):
            shape = tuple(shape[0])
        stride = self._stride if len(self._stride) == len(shape) else None
        self._commit_layout(shape, stride)

    def set_stride(self, stride: Sequence[int]) -> None:
        """Replace the strides in place (construction-time normalization only)."""
        self._ensure_not_cleaned_up()
        self._commit_layout(self._shape, stride)

    def _commit_layout(
        self, shape: Sequence[int], stride: Optional[Sequence[int]]
    ) -> None:
        shape, stride = normalize_layout(shape, stride, self._ordering)
        _validate_layout(self._data, shape, stride, self._offset)
        self._shape = shape
        self._stride = stride
        self._length = prod(shape)
        self.reset_cache()

    def reset_cache(self) -> None:
        """Forget every memoized derived property."""
        self._memo.reset()

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------
    def is_row_vector(self) -> bool:
        self._ensure_not_cleaned_up()
        return is_row_vector_shape(self._shape)

    def is_column_vector(self) -> bool:
        self._ensure_not_cleaned_up()
        return is_column_vector_shape(self._shape)

    def is_vector(self) -> bool:
        self._ensure_not_cleaned_up()
        return self._memo.get(
            "is_vector",
            lambda: is_vector_shape(self._shape),
        )

    def is_scalar(self) -> bool:
        self._ensure_not_cleaned_up()
        return self._memo.get(
            "is_scalar",
            lambda: len(self._shape) == 0
            or (self._length == 1 and len(self._shape) <= 2),
        )

    def is_matrix(self) -> bool:
        self._ensure_not_cleaned_up()
        return is_matrix_shape(self._shape)

    def is_square(self) -> bool:
        return self.is_matrix() and self._shape[0] == self._shape[1]

    def rows(self) -> int:
        """Number of rows of a matrix or vector."""
        self._ensure_not_cleaned_up()
        if self.is_matrix():
            return self._shape[0]
        if self.is_vector():
            return 1 if self.is_row_vector() else self._shape[0]
        raise IllegalAxisError("rows", self._shape, "not a 2d matrix")

    def columns(self) -> int:
        """Number of columns of a matrix or vector."""
        self._ensure_not_cleaned_up()
        if self.is_matrix():
            return self._shape[1]
        if self.is_vector():
            return 1 if self.is_column_vector() else self._shape[1]
        raise IllegalAxisError("columns", self._shape, "not a 2d matrix")

    # ------------------------------------------------------------------
    # Derived strides
    # ------------------------------------------------------------------
    def leading_ones(self) -> int:
        self._ensure_not_cleaned_up()
        return self._memo.get("leading_ones", lambda: leading_ones(self._shape))

    def trailing_ones(self) -> int:
        self._ensure_not_cleaned_up()
        return self._memo.get("trailing_ones", lambda: trailing_ones(self._shape))

    def effective_singletons(self) -> tuple[int, int]:
        """Leading/trailing singleton counts used for coordinate addressing."""
        self._ensure_not_cleaned_up()
        return self._memo.get("singletons", lambda: effective_singletons(self._shape))

    def element_stride(self) -> int:
        return 1

    def first_non_one_stride(self) -> int:
        """The first stride that is not 1, or the element stride if none."""
        self._ensure_not_cleaned_up()

        def compute() -> int:
            for s in self._stride:
                if s != 1:
                    return s
            return self.element_stride()

        return self._memo.get("first_non_one_stride", compute)

    def major_stride(self) -> int:
        """
        Displacement to the next element along the natural traversal dimension.

        Decision table
        --------------
        1. Rank 0: the element stride.
        2. Row-major, and either the innermost stride is 1 on a non-matrix or
           the shape is a row-vector shape: the first non-1 stride.
        3. Column-major with a leading dimension of size 1: the first non-1
           stride.
        4. Rank > 2, and either the leading dimension spans the whole length
           with trailing singletons present, or leading singletons are present
           on a non-vector: the element stride.
        5. Otherwise `stride[0]`.
        """
        self._ensure_not_cleaned_up()
        return self._memo.get("major_stride", self._compute_major_stride)

    def _compute_major_stride(self) -> int:
        shape, stride = self._shape, self._stride
        if len(stride) == 0:
            return self.element_stride()

        if self._ordering is Ordering.C:
            if (stride[-1] == 1 and not is_matrix_shape(shape)) or is_row_vector_shape(shape):
                return self.first_non_one_stride()

        if self._ordering is Ordering.FORTRAN and shape[0] == 1:
            return self.first_non_one_stride()

        if len(shape) > 2 and (
            (shape[0] == self._length and self.trailing_ones() > 0)
            or (self.leading_ones() > 0 and not self.is_vector())
        ):
            return self.element_stride()

        return stride[0]

    def secondary_stride(self) -> int:
        """Displacement along the next-fastest traversal dimension."""
        self._ensure_not_cleaned_up()
        if len(self._stride) == 0:
            return 1
        if len(self._stride) >= 2 and self._ordering is Ordering.C:
            if self.is_column_vector():
                return self.major_stride()
            return self._stride[1]
        return self.major_stride()

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        if self._cleaned_up:
            return "NDArray(<cleaned up>)"
        return (
            f"NDArray(shape={self._shape}, stride={self._stride}, "
            f"offset={self._offset}, ordering='{self._ordering}')"
        )
