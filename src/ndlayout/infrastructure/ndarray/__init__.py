from ._ndarray import NDArray
from ._factory import NDArrayFactory, default_factory, set_default_factory

__all__ = [
    NDArray.__name__,
    NDArrayFactory.__name__,
    default_factory.__name__,
    set_default_factory.__name__,
]
