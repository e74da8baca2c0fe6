"""
Array factory hook.

Every code path that produces a new array (a view, a copy, a reshaped
array) routes through a single `IArrayFactory.create` entry point. The
factory is a strategy object chosen when an array is constructed and is
inherited by every array derived from it, so an alternative array
"flavor" can be substituted without the layout logic inspecting types.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence, Union, runtime_checkable

from ._ordering import Ordering

if TYPE_CHECKING:
    from ._buffer import IDataBuffer
    from ._ndarray import INDArray


@runtime_checkable
class IArrayFactory(Protocol):
    """
    Structural contract for array factories.

    Notes
    -----
    Implementations must return arrays that keep a reference to the factory
    itself, so that views of views stay in the same flavor.
    """

    def create(
        self,
        buffer: "IDataBuffer",
        shape: Sequence[int],
        stride: Optional[Sequence[int]] = None,
        offset: int = 0,
        ordering: Optional[Union[Ordering, str]] = None,
    ) -> "INDArray":
        """
        Bind a layout to an existing buffer.

        Parameters
        ----------
        buffer : IDataBuffer
            Storage shared with the caller.
        shape : Sequence[int]
            Logical shape of the new array.
        stride : Optional[Sequence[int]], optional
            Strides; derived from shape and ordering when omitted.
        offset : int, optional
            Buffer index of the first logical element.
        ordering : Optional[Ordering or str], optional
            Element ordering; the configured default when omitted.

        Returns
        -------
        INDArray
            A new array aliasing `buffer`.
        """
        ...

    def create_buffer(self, length: int) -> "IDataBuffer":
        """Allocate a zero-filled buffer of `length` elements."""
        ...

    def zeros(
        self,
        shape: Sequence[int],
        ordering: Optional[Union[Ordering, str]] = None,
    ) -> "INDArray":
        """Allocate a fresh, contiguous, zero-filled array."""
        ...

    def value_array_of(
        self,
        shape: Sequence[int],
        value: float,
        ordering: Optional[Union[Ordering, str]] = None,
    ) -> "INDArray":
        """Allocate a fresh, contiguous array filled with `value`."""
        ...
