"""
NumPy-backed flat data buffer.

This module provides `DataBuffer`, the concrete element store bound by
arrays. It is a thin wrapper around a one-dimensional NumPy array of
float64 ("double") or float32 ("float") elements whose length is fixed at
creation.

Design notes
------------
- The buffer knows nothing about shapes or strides; it is addressed purely
  by linear index. All layout arithmetic lives in the array layer.
- Shared ownership is explicit: arrays call `retain()` when they bind the
  buffer and `release()` exactly once when they are cleaned up or collected.
  When the count drops back to zero the NumPy storage is dropped and every
  later access raises `UseAfterInvalidationError`.
- There is no internal locking. Concurrent writers must synchronize
  externally.
"""

from __future__ import annotations

from typing import Iterable, Union

import numpy as np

from ...domain._errors import IndexOutOfRangeError, UseAfterInvalidationError
from ..utils._logging import get_logger

Number = Union[int, float]

logger = get_logger(__name__)

_DATA_TYPES = {np.dtype(np.float64): "double", np.dtype(np.float32): "float"}


class DataBuffer:
    """
    Fixed-length, reference-counted element store.

    Parameters
    ----------
    length : int
        Number of elements. Must be non-negative.
    dtype : type, optional
        `np.float64` (default) or `np.float32`.

    Raises
    ------
    ValueError
        If the length is negative or the dtype is unsupported.
    """

    __slots__ = ("_data", "_dtype", "_length", "_refs", "_released", "__weakref__")

    def __init__(self, length: int, dtype: type = np.float64) -> None:
        length = int(length)
        if length < 0:
            raise ValueError(f"Buffer length must be non-negative, got {length}")
        dt = np.dtype(dtype)
        if dt not in _DATA_TYPES:
            raise ValueError(f"Unsupported buffer dtype {dt}; expected float64 or float32")
        self._data = np.zeros(length, dtype=dt)
        self._dtype = dt
        self._length = length
        self._refs = 0
        self._released = False

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @classmethod
    def zeros(cls, length: int, dtype: type = np.float64) -> "DataBuffer":
        return cls(length, dtype=dtype)

    @classmethod
    def full(cls, length: int, value: Number, dtype: type = np.float64) -> "DataBuffer":
        buf = cls(length, dtype=dtype)
        buf._data.fill(value)
        return buf

    @classmethod
    def from_values(
        cls, values: Union[Iterable[Number], np.ndarray], dtype: type = np.float64
    ) -> "DataBuffer":
        """
        Create a buffer holding a copy of `values`, flattened in C order.

        Parameters
        ----------
        values : Iterable[Number] or np.ndarray
            Source elements.
        dtype : type, optional
            Element type of the new buffer.

        Returns
        -------
        DataBuffer
            A new buffer with `len(values)` elements.
        """
        if not isinstance(values, np.ndarray):
            values = list(values)
        flat = np.asarray(values, dtype=dtype).reshape(-1)
        buf = cls(flat.size, dtype=dtype)
        buf._data[:] = flat
        return buf

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def data_type(self) -> str:
        """Return "double" or "float" depending on the element width."""
        return _DATA_TYPES[self._dtype]

    @property
    def ref_count(self) -> int:
        return self._refs

    @property
    def is_released(self) -> bool:
        return self._released

    def length(self) -> int:
        return self._length

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        state = "released" if self._released else f"refs={self._refs}"
        return f"DataBuffer(length={self._length}, dtype={self._dtype.name}, {state})"

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------
    def _check(self, index: int) -> int:
        if self._released:
            raise UseAfterInvalidationError("buffer")
        if index < 0 or index >= self._length:
            raise IndexOutOfRangeError(index, self._length, "linear buffer index")
        return index

    def get(self, index: int) -> float:
        return float(self._data[self._check(index)])

    def get_double(self, index: int) -> float:
        return float(self._data[self._check(index)])

    def get_float(self, index: int) -> float:
        return float(np.float32(self._data[self._check(index)]))

    def put(self, index: int, value: Number) -> None:
        self._data[self._check(index)] = value

    def to_numpy(self) -> np.ndarray:
        """Return a copy of the whole buffer as a 1-D NumPy array."""
        if self._released:
            raise UseAfterInvalidationError("buffer")
        return self._data.copy()

    # ------------------------------------------------------------------
    # Shared ownership
    # ------------------------------------------------------------------
    def retain(self) -> None:
        """
        Register a new holder.

        Raises
        ------
        UseAfterInvalidationError
            If the storage was already released.
        """
        if self._released:
            raise UseAfterInvalidationError("buffer")
        self._refs += 1

    def release(self) -> None:
        """
        Drop one holder and free the storage when none remain.

        Releasing a buffer that has no holders is a no-op.
        """
        if self._released or self._refs == 0:
            return
        self._refs -= 1
        if self._refs == 0:
            self._data = None
            self._released = True
            logger.debug("released buffer of length %d", self._length)
