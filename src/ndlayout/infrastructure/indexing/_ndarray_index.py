"""
Per-axis index specifications for view extraction.

An `NDArrayIndex` describes what to keep of one axis:

- `point(i)`        keeps only coordinate `i` and removes the axis,
- `interval(b, e)`  keeps coordinates `b, b+step, ...` below `e`,
- `all()`           keeps the whole axis.

`resolve_indexes` turns a sequence of specifications into the offset, shape
and strides of the selected view using stride arithmetic only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ...domain._errors import IllegalAxisError, IndexOutOfRangeError


@dataclass(frozen=True)
class NDArrayIndex:
    """
    One axis of an index specification.

    Attributes
    ----------
    kind : str
        "point", "interval" or "all".
    begin : int
        Point coordinate, or first coordinate of an interval.
    end : Optional[int]
        Exclusive end of an interval (None for points and `all`).
    step : int
        Interval step, always >= 1.
    """

    kind: str
    begin: int = 0
    end: Optional[int] = None
    step: int = 1

    @classmethod
    def point(cls, index: int) -> "NDArrayIndex":
        return cls("point", int(index))

    @classmethod
    def all(cls) -> "NDArrayIndex":
        return cls("all")

    @classmethod
    def interval(cls, begin: int, end: int, step: int = 1) -> "NDArrayIndex":
        if step < 1:
            raise ValueError(f"Interval step must be >= 1, got {step}")
        return cls("interval", int(begin), int(end), int(step))

    def length(self, dim: int) -> int:
        """Number of coordinates this specification selects on an axis of size `dim`."""
        if self.kind == "point":
            return 1
        if self.kind == "all":
            return dim
        return max(0, -(-(self.end - self.begin) // self.step))


def resolve_indexes(
    shape: Sequence[int],
    stride: Sequence[int],
    offset: int,
    indexes: Sequence[NDArrayIndex],
) -> tuple[tuple[int, ...], tuple[int, ...], int]:
    """
    Compute the layout selected by `indexes`.

    Parameters
    ----------
    shape, stride : Sequence[int]
        Layout being indexed.
    offset : int
        Offset of the layout being indexed.
    indexes : Sequence[NDArrayIndex]
        At most one specification per axis; missing trailing axes mean `all`.

    Returns
    -------
    tuple
        `(new_shape, new_stride, new_offset)`. Axes selected by points are
        removed from shape and stride.

    Raises
    ------
    IllegalAxisError
        If more specifications than axes are given.
    IndexOutOfRangeError
        If a point or interval falls outside its axis.
    """
    if len(indexes) > len(shape):
        raise IllegalAxisError(len(indexes), shape, "more index specifications than axes")

    new_shape: list[int] = []
    new_stride: list[int] = []
    new_offset = offset

    for axis, dim in enumerate(shape):
        spec = indexes[axis] if axis < len(indexes) else NDArrayIndex.all()
        s = stride[axis]

        if spec.kind == "point":
            i = spec.begin + dim if spec.begin < 0 else spec.begin
            if i < 0 or i >= dim:
                raise IndexOutOfRangeError(spec.begin, dim, f"point on axis {axis}")
            new_offset += i * s
        elif spec.kind == "interval":
            if spec.begin < 0 or spec.end > dim or spec.begin > spec.end:
                raise IndexOutOfRangeError(
                    (spec.begin, spec.end), dim, f"interval on axis {axis}"
                )
            new_offset += spec.begin * s
            new_shape.append(spec.length(dim))
            new_stride.append(s * spec.step)
        else:
            new_shape.append(dim)
            new_stride.append(s)

    return tuple(new_shape), tuple(new_stride), new_offset
