"""
Backend-agnostic contracts for ndlayout.

The domain layer defines the error kinds, the `Ordering` enum and the
structural interfaces (`IDataBuffer`, `INDArray`, `IArrayFactory`,
`IOperationExecutor`) that concrete implementations satisfy.
"""

from ._buffer import IDataBuffer
from ._errors import (
    AmbiguousShapeError,
    IllegalAxisError,
    IncompatibleBroadcastError,
    IndexOutOfRangeError,
    InvalidPermutationError,
    InvalidSubArrayError,
    NDLayoutError,
    OffsetOutOfRangeError,
    ShapeMismatchError,
    UseAfterInvalidationError,
)
from ._executor import IOperationExecutor
from ._factory import IArrayFactory
from ._ndarray import INDArray
from ._ordering import Ordering

__all__ = [
    IDataBuffer.__name__,
    INDArray.__name__,
    IArrayFactory.__name__,
    IOperationExecutor.__name__,
    Ordering.__name__,
    NDLayoutError.__name__,
    ShapeMismatchError.__name__,
    OffsetOutOfRangeError.__name__,
    IndexOutOfRangeError.__name__,
    InvalidPermutationError.__name__,
    IncompatibleBroadcastError.__name__,
    AmbiguousShapeError.__name__,
    IllegalAxisError.__name__,
    InvalidSubArrayError.__name__,
    UseAfterInvalidationError.__name__,
]
