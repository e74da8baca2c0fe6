"""
NDArray interface definitions.

This module defines the domain-level interface for strided array views
using structural typing. The interface captures the memory-layout contract
that higher-level numeric code relies on: reading and writing a scalar given
logical coordinates, and obtaining any legal view without copying.

Notes
-----
Numeric semantics (element-wise kernels, reductions, algebra) are out of
scope for this protocol. Those are layered on top through
`IOperationExecutor`, which consumes `linear_view()` objects.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, Union, runtime_checkable

from ._buffer import IDataBuffer
from ._ordering import Ordering

Number = Union[int, float]


@runtime_checkable
class INDArray(Protocol):
    """
    Strided array view interface.

    An `INDArray` binds a shape, stride, offset and ordering to a shared
    `IDataBuffer`. Several arrays may alias the same buffer.
    """

    # ---------------------------------------------------------------------
    # Layout descriptor
    # ---------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        """Return the logical shape."""
        ...

    @property
    def stride(self) -> tuple[int, ...]:
        """Return the per-dimension buffer displacement."""
        ...

    @property
    def offset(self) -> int:
        """Return the buffer index of coordinate (0, ..., 0)."""
        ...

    @property
    def ordering(self) -> Ordering:
        """Return the element ordering."""
        ...

    @property
    def length(self) -> int:
        """Return the number of logical elements."""
        ...

    @property
    def rank(self) -> int:
        """Return the number of dimensions."""
        ...

    @property
    def data(self) -> IDataBuffer:
        """Return the shared buffer."""
        ...

    # ---------------------------------------------------------------------
    # Classification and derived strides
    # ---------------------------------------------------------------------
    def is_scalar(self) -> bool: ...
    def is_vector(self) -> bool: ...
    def is_row_vector(self) -> bool: ...
    def is_column_vector(self) -> bool: ...
    def is_matrix(self) -> bool: ...
    def element_stride(self) -> int: ...
    def major_stride(self) -> int: ...
    def secondary_stride(self) -> int: ...

    # ---------------------------------------------------------------------
    # Scalar access
    # ---------------------------------------------------------------------
    def get_double(self, *indices: int) -> float:
        """
        Read one element.

        Parameters
        ----------
        *indices : int
            Either a single flat index or a coordinate tuple.

        Returns
        -------
        float
            The element value.
        """
        ...

    def put_scalar(self, index: Union[int, Sequence[int]], value: Number) -> "INDArray":
        """
        Write one element and return `self`.

        Parameters
        ----------
        index : int or Sequence[int]
            A flat index or a coordinate tuple.
        value : Number
            The value to store.
        """
        ...

    def linear_index(self, i: int) -> int:
        """Return the buffer index of flat element `i`."""
        ...

    # ---------------------------------------------------------------------
    # Views
    # ---------------------------------------------------------------------
    def linear_view(self) -> "INDArray": ...

    def slice(self, index: int, dimension: Optional[int] = None) -> "INDArray": ...

    def get_row(self, r: int) -> "INDArray": ...

    def get_column(self, c: int) -> "INDArray": ...

    def permute(self, *order: int) -> "INDArray": ...

    def tensor_along_dimension(self, index: int, *dimension: int) -> "INDArray": ...

    def vector_along_dimension(self, index: int, dimension: int) -> "INDArray": ...

    def reshape(self, *shape: int, order: Optional[Union[Ordering, str]] = None) -> "INDArray": ...

    # ---------------------------------------------------------------------
    # Copies
    # ---------------------------------------------------------------------
    def dup(self) -> "INDArray": ...

    def transpose(self) -> "INDArray": ...

    def broadcast(self, shape: Sequence[int]) -> "INDArray": ...

    def to_numpy(self) -> Any:
        """Materialize the logical contents as a backend-native array."""
        ...

    # ---------------------------------------------------------------------
    # Lifecycle
    # ---------------------------------------------------------------------
    @property
    def is_cleaned_up(self) -> bool: ...

    def cleanup(self) -> None:
        """Invalidate this array; every later access fails."""
        ...
