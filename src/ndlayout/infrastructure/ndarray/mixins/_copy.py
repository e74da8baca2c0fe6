"""
Copying and write-through mixin.

This module defines `NDArrayMixinCopy`, which groups every operation that
allocates a fresh buffer (`dup`, `ravel`, `transpose`, `broadcast`,
`repmat`, `get_rows`, `get_columns`) or writes through views into the host
(`assign`, `put`, `put_row`, `put_column`, `put_slice`).

Design notes
------------
- Fresh arrays are allocated through the host's factory with contiguous
  strides, so buffer index `i` of a fresh array is flat element `i` in its
  ordering.
- Writes that read from a source overlapping the destination read all
  source values first.
- General-tensor broadcast replicates the source's flat elements cyclically
  over the target. A `RuntimeWarning` is emitted whenever that fill differs
  from stride-0 broadcasting for the requested shapes.
"""

from __future__ import annotations

import warnings
from abc import ABC
from typing import Sequence, Union

import numpy as np

from ....domain._errors import ShapeMismatchError
from ....domain._ordering import Ordering
from ...indexing._ndarray_index import NDArrayIndex
from ...layout._broadcast import broadcast_shape, cyclic_fill_matches_broadcast
from ...layout._shape import is_matrix_shape, normalize_layout

Number = Union[int, float]


class NDArrayMixinCopy(ABC):
    """
    Mixin implementing copies, transposition, broadcasting and bulk writes.
    """

    # ------------------------------------------------------------------
    # Materialization
    # ------------------------------------------------------------------
    def to_numpy(self) -> np.ndarray:
        """
        Return a NumPy copy with the same logical shape and element values.

        Notes
        -----
        The result is a detached copy; writing to it never affects the buffer.
        """
        self._ensure_not_cleaned_up()
        return np.asarray(self._data.to_numpy()[self._index_grid()])

    def _fill_from_flat(self, values: np.ndarray) -> None:
        buf = self._data
        for i, value in enumerate(values):
            buf.put(i, value)

    def dup(self):
        """Return a contiguous copy with the same shape and ordering."""
        self._ensure_not_cleaned_up()
        out = self._create_zeros(self._shape)
        out._fill_from_flat(self._flat_values())
        return out

    def ravel(self):
        """Return a `(1, length)` copy traversed in this array's ordering."""
        self._ensure_not_cleaned_up()
        out = self._create_zeros((1, self._length))
        out._fill_from_flat(self._flat_values())
        return out

    # ------------------------------------------------------------------
    # Transpose
    # ------------------------------------------------------------------
    def transpose(self):
        """
        Return a copy with reversed axes.

        Vectors flip between row and column shape, matrices are copied
        element by element, and higher ranks transpose each slice along the
        last axis into the matching slice of the result.
        """
        self._ensure_not_cleaned_up()
        rank = len(self._shape)
        if rank == 0:
            return self.dup()

        out = self._create_zeros(self._shape[::-1])

        if self.is_vector():
            for i in range(self._length):
                out.put_scalar(i, self.get_double(i))
            return out

        if rank == 2:
            rows, cols = self._shape
            for i in range(rows):
                for j in range(cols):
                    out.put_scalar((j, i), self.get_double(i, j))
            return out

        last = rank - 1
        for j in range(self._shape[last]):
            out.put_slice(j, self._select(last, j).transpose())
        return out

    # ------------------------------------------------------------------
    # Broadcast
    # ------------------------------------------------------------------
    def broadcast(self, shape: Sequence[int]):
        """
        Return a copy expanded to `shape`.

        Parameters
        ----------
        shape : Sequence[int]
            Target shape; rank-1 targets are treated as row vectors.

        Returns
        -------
        NDArray
            `self` when no expansion is needed, otherwise a new array.

        Raises
        ------
        IncompatibleBroadcastError
            If a trailing-aligned pair of sizes differs and neither is 1.

        Notes
        -----
        Scalars fill the target with their value, row vectors are copied into
        every row and column vectors into every column of a 2-D target. Other
        sources are replicated cyclically along the flat traversal; that fill
        agrees with stride-0 broadcasting only when the source matches a
        suffix of the target (in traversal order) after leading 1s.
        """
        self._ensure_not_cleaned_up()
        target, _ = normalize_layout(shape, None, self._ordering)
        if target == self._shape:
            return self

        result = broadcast_shape(self._shape, target)
        if result == self._shape:
            return self

        if self.is_scalar():
            return self._factory.value_array_of(result, self.get_double(0), self._ordering)

        if self.is_column_vector() and is_matrix_shape(result):
            out = self._create_zeros(result)
            column = self.dup()
            for c in range(out.columns()):
                out.put_column(c, column)
            return out

        if self.is_row_vector() and len(result) == 2:
            out = self._create_zeros(result)
            row = self.dup()
            for r in range(out.rows()):
                out.put_row(r, row)
            return out

        if not cyclic_fill_matches_broadcast(self._shape, result, self._ordering):
            warnings.warn(
                f"broadcast of shape {self._shape} to {result} uses cyclic fill, "
                "which differs from stride-0 broadcasting for these shapes",
                RuntimeWarning,
                stacklevel=2,
            )

        out = self._create_zeros(result)
        values = self._flat_values()
        n = len(values)
        buf = out.data
        for i in range(out.length):
            buf.put(i, values[i % n])
        return out

    # ------------------------------------------------------------------
    # Bulk writes
    # ------------------------------------------------------------------
    def assign(self, other: Union["NDArrayMixinCopy", Number]):
        """
        Copy `other` into this array element by element and return `self`.

        Parameters
        ----------
        other : NDArray or number
            A number fills every element. An array must have the same shape,
            or both arrays must be vectors of the same length.

        Raises
        ------
        ShapeMismatchError
            If the shapes are incompatible.
        """
        self._ensure_not_cleaned_up()
        targets = self._physical_indices()

        if isinstance(other, (int, float, np.number)):
            buf = self._data
            for ix in targets:
                buf.put(int(ix), other)
            return self

        same_shape = other.shape == self._shape
        both_vectors = self.is_vector() and other.is_vector()
        if not same_shape and not (both_vectors and other.length == self._length):
            raise ShapeMismatchError(
                other.shape, self._length, f"cannot assign into shape {self._shape}"
            )

        values = other._flat_values(self._ordering)
        buf = self._data
        for ix, value in zip(targets, values):
            buf.put(int(ix), value)
        return self

    def put(self, indexes, element: Union["NDArrayMixinCopy", Number]):
        """
        Write `element` into the view selected by `indexes` and return `self`.

        Parameters
        ----------
        indexes : NDArrayIndex or Sequence[NDArrayIndex]
            Per-axis selection, resolved like `get`.
        element : NDArray or number
            A number, or a single-element array, fills the selection. Any
            other array must match the selection as `assign` requires.
        """
        self._ensure_not_cleaned_up()
        if isinstance(indexes, NDArrayIndex):
            indexes = (indexes,)
        view = self.get(*indexes)
        if not isinstance(element, (int, float, np.number)) and element.is_scalar():
            element = element.get_double(0)
        view.assign(element)
        return self

    def put_row(self, row: int, to_put):
        """Copy the vector `to_put` into row `row`."""
        self._ensure_not_cleaned_up()
        if not to_put.is_vector() or to_put.length != self.columns():
            raise ShapeMismatchError(
                to_put.shape, self.columns(), "row must be a vector of length columns()"
            )
        self.get_row(row).assign(to_put)
        return self

    def put_column(self, column: int, to_put):
        """Copy the vector `to_put` into column `column`."""
        self._ensure_not_cleaned_up()
        if not to_put.is_vector() or to_put.length != self.rows():
            raise ShapeMismatchError(
                to_put.shape, self.rows(), "column must be a vector of length rows()"
            )
        self.get_column(column).assign(to_put)
        return self

    def put_slice(self, index: int, to_put):
        """
        Copy `to_put` into slice `index` along dimension 0.

        On scalars and vectors the slice is a single element and `to_put`
        must be a scalar.
        """
        self._ensure_not_cleaned_up()
        if self.is_scalar() or self.is_vector():
            if not to_put.is_scalar():
                raise ShapeMismatchError(
                    to_put.shape, 1, "slices of vectors are single elements"
                )
            self.put_scalar(index, to_put.get_double(0))
            return self

        view = self.slice(index)
        if to_put.is_scalar():
            view.assign(to_put.get_double(0))
        else:
            view.assign(to_put)
        return self

    # ------------------------------------------------------------------
    # Gathers
    # ------------------------------------------------------------------
    def get_rows(self, rows: Sequence[int]):
        """Return a copy holding the listed rows, in the given order."""
        self._ensure_not_cleaned_up()
        out = self._create_zeros((len(rows), self.columns()))
        for i, r in enumerate(rows):
            out.put_row(i, self.get_row(r))
        return out

    def get_columns(self, columns: Sequence[int]):
        """Return a copy holding the listed columns, in the given order."""
        self._ensure_not_cleaned_up()
        out = self._create_zeros((self.rows(), len(columns)))
        for i, c in enumerate(columns):
            out.put_column(i, self.get_column(c))
        return out

    def slice_vectors(self) -> list:
        """Recursively collect every vector slice of this array as views."""
        self._ensure_not_cleaned_up()
        if self.is_vector():
            return [self]
        out = []
        for i in range(self.slices()):
            out.extend(self.slice(i).slice_vectors())
        return out


    # ------------------------------------------------------------------
    # Tiling
    # ------------------------------------------------------------------
    def repmat(self, *reps: int):
        """
        Return a copy tiled `reps[i]` times along each axis.

        Parameters
        ----------
        *reps : int
            Repetition count per axis, or a single tuple of them. Fewer counts
            than axes apply to the trailing axes; a scalar accepts any number.

        Returns
        -------
        NDArray
            A new array of shape `shape[i] * reps[i]`.

        Raises
        ------
        ShapeMismatchError
            If a count is negative or there are more counts than axes.
        """
        self._ensure_not_cleaned_up()
        if len(reps) == 1 and isinstance(reps[0], (tuple, list)):
            reps = tuple(reps[0])
        reps = tuple(int(r) for r in reps)
        rank = len(self._shape)
        if any(r < 0 for r in reps) or (rank and len(reps) > rank):
            raise ShapeMismatchError(reps, self._length, f"cannot tile shape {self._shape}")

        tiled = np.tile(self.to_numpy(), reps)
        out = self._create_zeros(tiled.shape)
        out._fill_from_flat(tiled.ravel(order="F" if self._ordering is Ordering.FORTRAN else "C"))
        return out
