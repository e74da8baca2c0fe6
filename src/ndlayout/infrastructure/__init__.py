"""
Concrete implementations of the ndlayout contracts.

- `buffer`   : NumPy-backed, reference-counted `DataBuffer`
- `layout`   : pure shape/stride arithmetic and the zero-copy reshape solver
- `indexing` : `NDArrayIndex` specifications for view extraction
- `ndarray`  : the strided `NDArray` and its default factory
"""

from ._config import NDLayoutConfig, get_config, reset_config, set_config
from .buffer import DataBuffer
from .indexing import NDArrayIndex
from .ndarray import NDArray, NDArrayFactory, default_factory, set_default_factory

__all__ = [
    NDLayoutConfig.__name__,
    get_config.__name__,
    set_config.__name__,
    reset_config.__name__,
    DataBuffer.__name__,
    NDArrayIndex.__name__,
    NDArray.__name__,
    NDArrayFactory.__name__,
    default_factory.__name__,
    set_default_factory.__name__,
]
