"""
NDArray behavior mixins.

Each mixin groups one family of `NDArray` operations:

- `NDArrayMixinIndexing` : coordinate resolution and element access
- `NDArrayMixinViews`    : zero-copy views (slices, rows, TADs, permute)
- `NDArrayMixinReshape`  : reshape with zero-copy preference
- `NDArrayMixinCopy`     : copies, transpose, broadcast and bulk writes
- `NDArrayMixinCompare`  : tolerant value equality

The mixins rely on the layout fields and hooks provided by the concrete
`NDArray` class and are not meant to be used on their own.
"""

from ._indexing import NDArrayMixinIndexing
from ._views import NDArrayMixinViews
from ._reshape import NDArrayMixinReshape
from ._copy import NDArrayMixinCopy
from ._compare import NDArrayMixinCompare

__all__ = [
    NDArrayMixinIndexing.__name__,
    NDArrayMixinViews.__name__,
    NDArrayMixinReshape.__name__,
    NDArrayMixinCopy.__name__,
    NDArrayMixinCompare.__name__,
]
