from ._ndarray_index import NDArrayIndex, resolve_indexes

__all__ = [NDArrayIndex.__name__, resolve_indexes.__name__]
