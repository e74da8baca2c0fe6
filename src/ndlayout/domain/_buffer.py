"""
Data buffer interface definitions.

The layout engine never owns element storage. It consumes a flat,
fixed-length, addressable store of numbers through the `IDataBuffer`
protocol and only ever computes *which* linear index to read or write.

Notes
-----
- Buffers are shared: any number of arrays (views) may bind the same buffer,
  and writes through one view are visible through all the others.
- Ownership is expressed through explicit reference counting
  (`retain` / `release`). The storage is dropped when the last holder
  releases it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    import numpy as np

Number = Union[int, float]


@runtime_checkable
class IDataBuffer(Protocol):
    """
    Flat element store interface.

    Any object that provides these members can back an array, regardless of
    its concrete class.
    """

    @property
    def data_type(self) -> str:
        """
        Return the element kind stored in the buffer.

        Returns
        -------
        str
            "double" for 64-bit storage, "float" for 32-bit storage.
        """
        ...

    @property
    def ref_count(self) -> int:
        """Return the number of live holders of this buffer."""
        ...

    @property
    def is_released(self) -> bool:
        """Return True once the storage has been dropped."""
        ...

    def length(self) -> int:
        """Return the fixed number of addressable elements."""
        ...

    def get(self, index: int) -> float:
        """Read the element at a linear index."""
        ...

    def get_double(self, index: int) -> float:
        """Read the element at a linear index as a double."""
        ...

    def get_float(self, index: int) -> float:
        """Read the element at a linear index rounded to single precision."""
        ...

    def put(self, index: int, value: Number) -> None:
        """Write the element at a linear index."""
        ...

    def to_numpy(self) -> "np.ndarray":
        """Return a 1-D copy of every element in the buffer."""
        ...

    def retain(self) -> None:
        """Register one more holder of this buffer."""
        ...

    def release(self) -> None:
        """Drop one holder; the storage is released with the last one."""
        ...
