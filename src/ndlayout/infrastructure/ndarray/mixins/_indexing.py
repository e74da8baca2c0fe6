"""
Index resolution mixin.

This module defines `NDArrayMixinIndexing`, which turns user coordinates
into linear buffer indices for a concrete `NDArray`.

Addressing modes
----------------
- Full coordinates (one per axis): `offset + sum(coord[i] * stride[i])`,
  each coordinate bounds-checked against its axis.
- A single flat index: scalars read their one element, row vectors address
  `(0, i)`, column vectors address `(i, 0)`, and everything else unravels
  the index in the array's own ordering.
- Partial coordinates: a tuple with one entry per non-singleton axis is
  expanded with zeros on the singleton axes, so `(4, 1, 3)` may be addressed
  by `(i, j)`.

Notes
-----
The mixin assumes the host provides `_shape`, `_stride`, `_offset`,
`_ordering`, `_length`, `_data`, `_create(...)`, `_ensure_not_cleaned_up()`
and the classification predicates.
"""

from __future__ import annotations

from abc import ABC
from typing import Optional, Sequence, Union

import numpy as np

from ....domain._errors import IllegalAxisError, IndexOutOfRangeError
from ....domain._ordering import Ordering
from ...layout._shape import effective_singletons, ind2sub, physical_index, squeeze_axes

Number = Union[int, float]
Index = Union[int, Sequence[int]]


class NDArrayMixinIndexing(ABC):
    """
    Mixin implementing element addressing and scalar element access.
    """

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def _resolve_coords(self, coords: Sequence[int]) -> int:
        for axis, (c, dim) in enumerate(zip(coords, self._shape)):
            if c < 0 or c >= dim:
                raise IndexOutOfRangeError(
                    tuple(coords), self._shape, f"coordinate on axis {axis}"
                )
        return physical_index(self._offset, self._stride, coords)

    def _resolve_flat(self, index: int) -> int:
        index = int(index)
        if index < 0 or index >= self._length:
            raise IndexOutOfRangeError(index, self._length, "flat index")

        if self.is_scalar():
            return self._offset
        if self.is_row_vector():
            return self._resolve_coords((0, index))
        if self.is_column_vector():
            return self._resolve_coords((index, 0))
        return physical_index(
            self._offset, self._stride, ind2sub(self._shape, index, self._ordering)
        )

    def _expand_partial(self, indices: Sequence[int]) -> tuple[int, ...]:
        rank = len(self._shape)
        lead, trail = effective_singletons(self._shape)

        if len(indices) == rank - lead - trail:
            axes = range(lead, rank - trail)
        else:
            axes = squeeze_axes(self._shape)
            if len(indices) != len(axes):
                raise IndexOutOfRangeError(
                    tuple(indices),
                    self._shape,
                    f"expected {rank} coordinates (or {len(axes)} for non-singleton axes)",
                )

        coords = [0] * rank
        for axis, c in zip(axes, indices):
            coords[axis] = int(c)
        return tuple(coords)

    def _resolve(self, indices: Sequence[int]) -> int:
        indices = tuple(int(i) for i in indices)
        if len(indices) == 1:
            return self._resolve_flat(indices[0])
        if len(indices) == len(self._shape):
            return self._resolve_coords(indices)
        return self._resolve_coords(self._expand_partial(indices))

    @staticmethod
    def _unpack(indices: tuple) -> tuple:
        if len(indices) == 1 and isinstance(indices[0], (tuple, list)):
            return tuple(indices[0])
        return indices

    def linear_index(self, index: int) -> int:
        """
        Map a flat index to a buffer index.

        Parameters
        ----------
        index : int
            Flat position in `[0, length)`, traversed in the array's ordering.

        Returns
        -------
        int
            Buffer index of that element.

        Raises
        ------
        IndexOutOfRangeError
            If `index` is outside `[0, length)`.
        """
        self._ensure_not_cleaned_up()
        return self._resolve_flat(index)

    def index(self, row: int, column: int) -> int:
        """Buffer index of `(row, column)` on a matrix or vector."""
        self._ensure_not_cleaned_up()
        if not self.is_matrix():
            if self.is_column_vector():
                if column != 0:
                    raise IndexOutOfRangeError(column, 1, "column of a column vector")
                return self._resolve_flat(row)
            if self.is_row_vector():
                if row != 0:
                    raise IndexOutOfRangeError(row, 1, "row of a row vector")
                return self._resolve_flat(column)
            raise IllegalAxisError("index", self._shape, "only valid on 2d arrays")
        return self._resolve_coords((row, column))

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------
    def get_double(self, *indices: int) -> float:
        """
        Read one element.

        Accepts full coordinates, a single flat index, or one coordinate per
        non-singleton axis. A single tuple argument is unpacked.

        Raises
        ------
        IndexOutOfRangeError
            If the coordinates are out of range or of unusable length.
        """
        self._ensure_not_cleaned_up()
        return self._data.get_double(self._resolve(self._unpack(indices)))

    def get_float(self, *indices: int) -> float:
        self._ensure_not_cleaned_up()
        return self._data.get_float(self._resolve(self._unpack(indices)))

    def get_int(self, *indices: int) -> int:
        return int(self.get_double(*indices))

    def put_scalar(self, index: Index, value: Number):
        """
        Write one element and return `self`.

        Parameters
        ----------
        index : int or Sequence[int]
            Flat index or coordinate tuple, resolved like `get_double`.
        value : int or float
            Value to store.
        """
        self._ensure_not_cleaned_up()
        indices = tuple(index) if isinstance(index, (tuple, list)) else (index,)
        self._data.put(self._resolve(indices), value)
        return self

    def get_scalar(self, *indices: int):
        """
        Return a 1x1 view aliasing one element.

        Writes through the returned view are visible in this array.
        """
        self._ensure_not_cleaned_up()
        ix = self._resolve(self._unpack(indices))
        return self._create(self._data, (1, 1), (1, 1), ix)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def _index_grid(self) -> np.ndarray:
        """Buffer index of every element, laid out in the logical shape."""
        grid = np.full(self._shape, self._offset, dtype=np.int64)
        rank = len(self._shape)
        for axis, (dim, s) in enumerate(zip(self._shape, self._stride)):
            step = (np.arange(dim, dtype=np.int64) * s).reshape(
                [-1 if a == axis else 1 for a in range(rank)]
            )
            grid = grid + step
        return grid

    def _physical_indices(self, ordering: Optional[Ordering] = None) -> np.ndarray:
        """Buffer indices in flat traversal order (the array's own ordering by default)."""
        ordering = self._ordering if ordering is None else ordering
        return self._index_grid().ravel(order="F" if ordering is Ordering.FORTRAN else "C")

    def _flat_values(self, ordering: Optional[Ordering] = None) -> np.ndarray:
        """Element values in flat traversal order."""
        return self._data.to_numpy()[self._physical_indices(ordering)]
