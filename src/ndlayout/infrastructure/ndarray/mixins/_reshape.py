"""
Reshape mixin.

`NDArrayMixinReshape.reshape` first asks the zero-copy stride solver
(`no_copy_strides`) for a view and falls back to a copying reshape only
when the current layout cannot be reinterpreted. The "not possible" answer
of the solver is an ordinary outcome, not an error.
"""

from __future__ import annotations

from abc import ABC
from typing import Optional, Sequence, Union

from ....domain._ordering import Ordering
from ...layout._reshape import no_copy_strides
from ...layout._shape import infer_shape, normalize_layout
from ...utils._logging import get_logger

logger = get_logger(__name__)


class NDArrayMixinReshape(ABC):
    """
    Mixin implementing `reshape` with zero-copy preference.
    """

    def _no_copy_reshape(
        self, new_shape: Sequence[int], ordering: Ordering
    ) -> Optional[tuple[int, ...]]:
        return no_copy_strides(self._shape, self._stride, new_shape, ordering)

    def reshape(self, *shape: int, order: Optional[Union[Ordering, str]] = None):
        """
        Return an array with the same elements under a new shape.

        Parameters
        ----------
        *shape : int
            New dimensions, or a single tuple of them. One entry may be -1 to
            infer it from the element count.
        order : Optional[Ordering or str], optional
            Ordering in which elements are read from this array and laid out
            in the result. Defaults to this array's ordering.

        Returns
        -------
        NDArray
            `self` if the shape and ordering are unchanged; a view sharing the
            buffer when the layout allows it; otherwise a freshly allocated
            copy.

        Raises
        ------
        AmbiguousShapeError
            If more than one dimension is -1.
        ShapeMismatchError
            If the new shape does not hold exactly `length` elements.
        """
        self._ensure_not_cleaned_up()
        if len(shape) == 1 and isinstance(shape[0], (tuple, list)):
            shape = tuple(shape[0])
        order = self._ordering if order is None else Ordering.parse(order)

        new_shape, _ = normalize_layout(infer_shape(shape, self._length), None, order)
        if new_shape == self._shape and order is self._ordering:
            return self

        strides = self._no_copy_reshape(new_shape, order)
        if strides is not None:
            logger.debug(
                "zero-copy reshape %s -> %s strides=%s order=%s",
                self._shape,
                new_shape,
                strides,
                order,
            )
            return self._create(self._data, new_shape, strides, self._offset, order)

        logger.debug("copying reshape %s -> %s order=%s", self._shape, new_shape, order)
        out = self._create_zeros(new_shape, order)
        buf = out.data
        for i, value in enumerate(self._flat_values(order)):
            buf.put(i, value)
        return out
