"""
Array factory strategy.

`NDArrayFactory` is the default `IArrayFactory`: it allocates `DataBuffer`
storage and wraps buffers into `NDArray` instances that remember the
factory, so every array derived from them is created by the same strategy.

Substituting the factory (per array, or process-wide via
`set_default_factory`) is how alternative array flavors are plugged in
without touching the layout engine.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from ...domain._buffer import IDataBuffer
from ...domain._factory import IArrayFactory
from ...domain._ordering import Ordering
from .._config import get_config
from ..buffer._data_buffer import DataBuffer
from ..layout._shape import normalize_layout, prod
from ._ndarray import NDArray

Number = Union[int, float]


class NDArrayFactory:
    """
    Default strategy for allocating buffers and arrays.

    Parameters
    ----------
    dtype : Optional[type], optional
        Element type of allocated buffers. Defaults to the configured dtype
        at allocation time.
    """

    def __init__(self, dtype: Optional[type] = None) -> None:
        self._dtype = dtype

    @property
    def dtype(self) -> type:
        return get_config().dtype if self._dtype is None else self._dtype

    def _ordering(self, ordering: Optional[Union[Ordering, str]]) -> Ordering:
        return get_config().default_order if ordering is None else Ordering.parse(ordering)

    def create(
        self,
        buffer: IDataBuffer,
        shape: Sequence[int],
        stride: Optional[Sequence[int]] = None,
        offset: int = 0,
        ordering: Optional[Union[Ordering, str]] = None,
    ) -> NDArray:
        """Wrap `buffer` in a new array created by this factory."""
        return NDArray(buffer, shape, stride, offset, ordering, factory=self)

    def create_buffer(self, length: int) -> DataBuffer:
        return DataBuffer(length, dtype=self.dtype)

    def zeros(
        self, shape: Sequence[int], ordering: Optional[Union[Ordering, str]] = None
    ) -> NDArray:
        """Allocate a contiguous, zero-filled array."""
        ordering = self._ordering(ordering)
        shape, _ = normalize_layout(shape, None, ordering)
        return self.create(self.create_buffer(prod(shape)), shape, None, 0, ordering)

    def value_array_of(
        self,
        shape: Sequence[int],
        value: Number,
        ordering: Optional[Union[Ordering, str]] = None,
    ) -> NDArray:
        """Allocate a contiguous array with every element set to `value`."""
        ordering = self._ordering(ordering)
        shape, _ = normalize_layout(shape, None, ordering)
        buffer = DataBuffer.full(prod(shape), value, dtype=self.dtype)
        return self.create(buffer, shape, None, 0, ordering)

    def scalar(self, value: Number) -> NDArray:
        """Allocate a rank-0 array holding `value`."""
        return self.value_array_of((), value)

    def from_values(
        self,
        values: Sequence[Number],
        shape: Optional[Sequence[int]] = None,
        ordering: Optional[Union[Ordering, str]] = None,
    ) -> NDArray:
        """
        Wrap a copy of flat `values` in an array.

        Parameters
        ----------
        values : Sequence[Number]
            Buffer contents, in buffer order.
        shape : Optional[Sequence[int]], optional
            Logical shape. Defaults to a row vector of all values.
        ordering : Optional[Ordering or str], optional
            Ordering used to lay the values out over `shape`.

        Returns
        -------
        NDArray
            An array with offset 0 and contiguous strides.
        """
        buffer = DataBuffer.from_values(values, dtype=self.dtype)
        if shape is None:
            shape = (buffer.length(),)
        return self.create(buffer, shape, None, 0, self._ordering(ordering))

    def from_numpy(
        self, array: np.ndarray, ordering: Optional[Union[Ordering, str]] = None
    ) -> NDArray:
        """
        Copy a NumPy array into a new array with the same logical contents.

        The buffer is filled in the requested ordering, so `to_numpy()` of the
        result equals `array` for either ordering.
        """
        ordering = self._ordering(ordering)
        array = np.asarray(array)
        flat = array.ravel(order="F" if ordering is Ordering.FORTRAN else "C")
        buffer = DataBuffer.from_values(flat, dtype=self.dtype)
        return self.create(buffer, array.shape, None, 0, ordering)


_default_factory: Optional[IArrayFactory] = None


def default_factory() -> IArrayFactory:
    """Return the process-wide factory used when none is given."""
    global _default_factory
    if _default_factory is None:
        _default_factory = NDArrayFactory()
    return _default_factory


def set_default_factory(factory: Optional[IArrayFactory]) -> None:
    """Replace the process-wide factory; `None` restores `NDArrayFactory`."""
    global _default_factory
    _default_factory = factory
