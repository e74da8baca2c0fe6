"""
Zero-copy view mixin.

This module defines `NDArrayMixinViews`, which derives new arrays sharing
the host's buffer purely by adjusting shape, stride and offset:

- `linear_view` / `linear_view_column_order` : flattened row/column views
- `get`                                      : per-axis point/interval/all
- `sub_array`                                : explicit offsets/shape/stride
- `slice`                                    : one index along an axis
- `get_row` / `get_column`                   : 2-D row and column access
- `tensor_along_dimension`                   : sub-tensor enumeration
- `permute` / `swap_axes`                    : axis reordering
- `dim_shuffle`                              : permute plus unit-axis insertion

Every result is created through the host's factory so that substituted
array flavors propagate to derived arrays.
"""

from __future__ import annotations

from abc import ABC
from typing import Optional, Sequence, Union

from ....domain._errors import (
    IllegalAxisError,
    IndexOutOfRangeError,
    InvalidSubArrayError,
)
from ...indexing._ndarray_index import NDArrayIndex, resolve_indexes
from ...layout._reshape import no_copy_strides
from ...layout._shape import check_permutation, normalize_axis, prod, remove_axes


class NDArrayMixinViews(ABC):
    """
    Mixin implementing views that alias the host's buffer.
    """

    # ------------------------------------------------------------------
    # Flattened views
    # ------------------------------------------------------------------
    def linear_view(self):
        """
        Return a `(1, length)` view over the same elements, or `self`.

        When the layout cannot be flattened without copying, `self` is
        returned: flat addressing on it already visits every element in
        ordering order.
        """
        self._ensure_not_cleaned_up()
        if len(self._shape) == 0 or self.is_row_vector():
            return self
        strides = no_copy_strides(self._shape, self._stride, (1, self._length), self._ordering)
        if strides is None:
            return self
        return self._create(self._data, (1, self._length), strides, self._offset)

    def linear_view_column_order(self):
        """Column-shaped counterpart of `linear_view`."""
        self._ensure_not_cleaned_up()
        if len(self._shape) == 0 or self.is_column_vector():
            return self
        strides = no_copy_strides(self._shape, self._stride, (self._length, 1), self._ordering)
        if strides is None:
            return self
        return self._create(self._data, (self._length, 1), strides, self._offset)

    # ------------------------------------------------------------------
    # Index-spec and explicit sub-views
    # ------------------------------------------------------------------
    def get(self, *indexes: NDArrayIndex):
        """
        Select a view with one `NDArrayIndex` per leading axis.

        Points drop their axis, intervals narrow it, and axes without a
        specification are kept whole.
        """
        self._ensure_not_cleaned_up()
        shape, stride, offset = resolve_indexes(
            self._shape, self._stride, self._offset, indexes
        )
        return self._create(self._data, shape, stride, offset)

    def sub_array(
        self,
        offsets: Sequence[int],
        shape: Sequence[int],
        stride: Sequence[int],
    ):
        """
        Return a view at explicit per-axis offsets with the given shape/stride.

        Parameters
        ----------
        offsets : Sequence[int]
            Starting coordinate on each axis.
        shape : Sequence[int]
            Shape of the view.
        stride : Sequence[int]
            Strides of the view.

        Returns
        -------
        NDArray
            `self` when `shape` equals this array's shape and all offsets are
            zero, otherwise a new view sharing the buffer.

        Raises
        ------
        InvalidSubArrayError
            If the argument lengths differ from the rank, if the element count
            exceeds this array's, or if non-zero offsets are combined with the
            full shape.
        """
        self._ensure_not_cleaned_up()
        offsets = tuple(int(o) for o in offsets)
        shape = tuple(int(d) for d in shape)
        stride = tuple(int(s) for s in stride)
        rank = len(self._shape)

        if len(offsets) != rank or len(shape) != rank or len(stride) != rank:
            raise InvalidSubArrayError(
                f"offsets, shape and stride must all have length {rank}; "
                f"got {len(offsets)}, {len(shape)}, {len(stride)}"
            )
        if shape == self._shape:
            if any(offsets):
                raise InvalidSubArrayError("non-zero offsets require a smaller shape")
            return self
        if prod(shape) > self._length:
            raise InvalidSubArrayError(
                f"sub-array of shape {shape} exceeds parent length {self._length}"
            )

        offset = self._offset + sum(o * s for o, s in zip(offsets, self._stride))
        return self._create(self._data, shape, stride, offset)

    # ------------------------------------------------------------------
    # Slicing
    # ------------------------------------------------------------------
    def _select(self, axis: int, index: int):
        """View removing `axis` at coordinate `index` (no singleton retargeting)."""
        dim = self._shape[axis]
        if index < 0 or index >= dim:
            raise IndexOutOfRangeError(index, dim, f"slice on axis {axis}")
        return self._create(
            self._data,
            remove_axes(self._shape, (axis,)),
            remove_axes(self._stride, (axis,)),
            self._offset + index * self._stride[axis],
        )

    def slice(self, index: int, dimension: Optional[int] = None):
        """
        Return the `index`-th slice, along axis 0 or along `dimension`.

        Rules
        -----
        - Scalars only have slice 0, returned as a 1x1 view.
        - Vectors slice into 1x1 views of their elements.
        - Matrices: `dimension=1` gives a row, `dimension=0` a column.
        - Higher ranks: a dimension inside the leading singleton block is
          retargeted to the first non-singleton axis.
        - Negative `index` counts from the end of axis 0.
        """
        self._ensure_not_cleaned_up()
        rank = len(self._shape)

        if dimension is None:
            if rank == 0:
                if index != 0:
                    raise IndexOutOfRangeError(index, 1, "slice of scalar")
                return self._create(self._data, (1, 1), (1, 1), self._offset)
            if self.is_vector():
                if index < 0:
                    index += self._length
                return self._create(self._data, (1, 1), (1, 1), self._resolve_flat(index))
            if index < 0:
                index += self._shape[0]
            return self.get(NDArrayIndex.point(index), *[NDArrayIndex.all()] * (rank - 1))

        dim = normalize_axis(dimension, rank)
        if rank == 2:
            return self.get_row(index) if dim == 1 else self.get_column(index)

        lead = self.leading_ones()
        if dim < lead < rank:
            dim = lead
        if index < 0:
            index += self._shape[dim]
        return self._select(dim, index)

    def get_row(self, r: int):
        """
        Return row `r` as a `(1, columns)` view.

        Raises
        ------
        IllegalAxisError
            If the array is not 2-D (or 3-D with a leading singleton), or if a
            row other than 0 is requested from a row vector.
        """
        self._ensure_not_cleaned_up()
        rank = len(self._shape)
        if rank == 2:
            if self.is_row_vector():
                if r == 0:
                    return self
                raise IllegalAxisError(r, self._shape, "row vector only has row 0")
            if self.is_column_vector():
                return self._create(self._data, (1, 1), (1, 1), self._resolve_flat(r))
            return self.vector_along_dimension(r, 1)
        if rank == 3 and self._shape[0] == 1:
            return self.slice(0).get_row(r)
        raise IllegalAxisError(r, self._shape, "get_row requires a 2d array")

    def get_column(self, c: int):
        """
        Return column `c` as a `(rows, 1)` view.

        Raises
        ------
        IllegalAxisError
            If the array is not 2-D (or 3-D with a leading singleton), or if a
            column other than 0 is requested from a column vector.
        """
        self._ensure_not_cleaned_up()
        rank = len(self._shape)
        if rank == 2:
            if self.is_column_vector():
                if c == 0:
                    return self
                raise IllegalAxisError(c, self._shape, "column vector only has column 0")
            if self.is_row_vector():
                return self._create(self._data, (1, 1), (1, 1), self._resolve_flat(c))
            return self.vector_along_dimension(c, 0).permute(1, 0)
        if rank == 3 and self._shape[0] == 1:
            return self.slice(0).get_column(c)
        raise IllegalAxisError(c, self._shape, "get_column requires a 2d array")

    # ------------------------------------------------------------------
    # Tensor-along-dimension
    # ------------------------------------------------------------------
    def _normalize_dimensions(self, dimension: Sequence[int]) -> tuple[int, ...]:
        if len(dimension) == 1 and isinstance(dimension[0], (tuple, list)):
            dimension = tuple(dimension[0])
        rank = len(self._shape)
        dims = tuple(normalize_axis(int(d), rank) for d in dimension)
        if not dims:
            raise IllegalAxisError((), self._shape, "at least one dimension is required")
        if len(set(dims)) != len(dims):
            raise IllegalAxisError(dims, self._shape, "dimensions must be unique")
        return dims

    def tensors_along_dimension(self, *dimension: int) -> int:
        """Number of sub-tensors spanning `dimension`."""
        self._ensure_not_cleaned_up()
        dims = self._normalize_dimensions(dimension)
        tensor_length = prod(self._shape[d] for d in dims)
        return self._length // tensor_length if tensor_length else 0

    def tensor_along_dimension(self, index: int, *dimension: int):
        """
        Return the `index`-th sub-tensor spanning the given dimensions.

        The requested dimensions are moved to the end (in the order given)
        and the remaining outer axes are sliced off one after another, the
        outer coordinate of each step being
        `index * tensor_length // length_per_slice` modulo the axis size.
        The result shares the buffer; a single dimension yields a row vector.

        The sub-tensor keeps the requested dimensions in the order given, so
        `tensor_along_dimension(i, 1, 2)` on a `(2, 3, 4)` array is a `(3, 4)`
        view. Reverse the dimensions, or permute the result, for the `(4, 3)`
        layout that lists them last-first.

        Raises
        ------
        IllegalAxisError
            If a dimension is out of range or repeated.
        IndexOutOfRangeError
            If `index` is not in `[0, tensors_along_dimension(*dimension))`.
        """
        self._ensure_not_cleaned_up()
        dims = self._normalize_dimensions(dimension)
        count = self.tensors_along_dimension(*dims)
        if index < 0 or index >= count:
            raise IndexOutOfRangeError(index, count, f"tensor along dimension {dims}")

        outer = [a for a in range(len(self._shape)) if a not in dims]
        outer_shape = [self._shape[a] for a in outer]
        tensor_shape = tuple(self._shape[d] for d in dims)
        tensor_stride = tuple(self._stride[d] for d in dims)
        tensor_length = prod(tensor_shape)

        offset = self._offset
        for k, axis in enumerate(outer):
            length_per_slice = tensor_length * prod(outer_shape[k + 1 :])
            coord = (index * tensor_length // length_per_slice) % outer_shape[k]
            offset += coord * self._stride[axis]

        return self._create(self._data, tensor_shape, tensor_stride, offset)

    def vectors_along_dimension(self, dimension: int) -> int:
        """Number of vectors along `dimension`."""
        return self.tensors_along_dimension(dimension)

    def vector_along_dimension(self, index: int, dimension: int):
        """The `index`-th vector along `dimension`, as a row-vector view."""
        return self.tensor_along_dimension(index, dimension)

    # ------------------------------------------------------------------
    # Axis reordering
    # ------------------------------------------------------------------
    def permute(self, *order: int):
        """
        Return a view with axes rearranged by `order`.

        Raises
        ------
        InvalidPermutationError
            If `order` is not a permutation of `0..rank`.
        """
        self._ensure_not_cleaned_up()
        if len(order) == 1 and isinstance(order[0], (tuple, list)):
            order = tuple(order[0])
        order = check_permutation(order, len(self._shape))
        return self._create(
            self._data,
            tuple(self._shape[o] for o in order),
            tuple(self._stride[o] for o in order),
            self._offset,
        )

    def swap_axes(self, a: int, b: int):
        self._ensure_not_cleaned_up()
        rank = len(self._shape)
        a, b = normalize_axis(a, rank), normalize_axis(b, rank)
        order = list(range(rank))
        order[a], order[b] = order[b], order[a]
        return self.permute(*order)

    def dim_shuffle(self, rearrange: Sequence[Union[int, str]], broadcastable: Sequence[bool]):
        """
        Permute axes, dropping and inserting unit axes (Theano-style).

        Parameters
        ----------
        rearrange : Sequence[int or str]
            Output axes in order. An integer selects an existing axis; the
            string "x" inserts a new axis of size 1 at that position.
        broadcastable : Sequence[bool]
            One flag per existing axis. Axes left out of `rearrange` must be
            flagged broadcastable (and have size 1).

        Returns
        -------
        NDArray
            A view sharing the buffer. Without any "x" entry this is exactly
            `permute(*rearrange)`.

        Raises
        ------
        IllegalAxisError
            If `broadcastable` does not match the rank, an entry is neither an
            axis nor "x", or a non-broadcastable axis would be dropped.
        InvalidPermutationError
            If an axis is repeated.
        """
        self._ensure_not_cleaned_up()
        rank = len(self._shape)
        if len(broadcastable) != rank:
            raise IllegalAxisError(
                tuple(broadcastable), self._shape, "one broadcastable flag per axis is required"
            )

        kept = []
        inserted = []
        for position, entry in enumerate(rearrange):
            if isinstance(entry, str):
                if entry.lower() != "x":
                    raise IllegalAxisError(entry, self._shape, "only 'x' may insert an axis")
                inserted.append(position)
            elif isinstance(entry, int) and not isinstance(entry, bool):
                if entry < 0 or entry >= rank:
                    raise IllegalAxisError(entry, self._shape, "axis out of range")
                kept.append(entry)
            else:
                raise IllegalAxisError(entry, self._shape, "entries must be axes or 'x'")

        if not inserted:
            return self.permute(*kept)

        dropped = [a for a in range(rank) if a not in kept]
        for a in dropped:
            if not broadcastable[a]:
                raise IllegalAxisError(a, self._shape, "cannot drop a non-broadcastable axis")

        permuted = self.permute(*(kept + dropped))
        new_shape = list(permuted.shape[: len(kept)])
        for position in inserted:
            new_shape.insert(position, 1)
        return permuted.reshape(*new_shape)
