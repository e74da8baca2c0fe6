"""
ndlayout: strided N-dimensional array layouts over shared flat buffers.

Arrays are `(buffer, shape, stride, offset, ordering)` descriptors. Slices,
rows, columns, permutations and most reshapes are views that share the
buffer; transposes, broadcasts and non-contiguous reshapes copy.

Example
-------
>>> from ndlayout import default_factory
>>> a = default_factory().from_values([1, 2, 3, 4, 5, 6], shape=(2, 3))
>>> a.get_double(1, 2)
6.0
>>> a.get_row(0).put_scalar(0, 10.0).get_double(0)
10.0
>>> a.get_double(0, 0)
10.0
"""

from .domain import (
    AmbiguousShapeError,
    IArrayFactory,
    IDataBuffer,
    IllegalAxisError,
    IncompatibleBroadcastError,
    INDArray,
    IndexOutOfRangeError,
    IOperationExecutor,
    InvalidPermutationError,
    InvalidSubArrayError,
    NDLayoutError,
    OffsetOutOfRangeError,
    Ordering,
    ShapeMismatchError,
    UseAfterInvalidationError,
)
from .infrastructure import (
    DataBuffer,
    NDArray,
    NDArrayFactory,
    NDArrayIndex,
    NDLayoutConfig,
    default_factory,
    get_config,
    reset_config,
    set_config,
    set_default_factory,
)

__all__ = [
    "AmbiguousShapeError",
    "DataBuffer",
    "IArrayFactory",
    "IDataBuffer",
    "INDArray",
    "IllegalAxisError",
    "IncompatibleBroadcastError",
    "IndexOutOfRangeError",
    "IOperationExecutor",
    "InvalidPermutationError",
    "InvalidSubArrayError",
    "NDArray",
    "NDArrayFactory",
    "NDArrayIndex",
    "NDLayoutConfig",
    "NDLayoutError",
    "OffsetOutOfRangeError",
    "Ordering",
    "ShapeMismatchError",
    "UseAfterInvalidationError",
    "default_factory",
    "get_config",
    "reset_config",
    "set_config",
    "set_default_factory",
]
