"""
Layout- and lifecycle-related exceptions for ndlayout.

This module defines the error kinds raised by the strided layout engine.
Every error is local, synchronous and non-retryable: it signals a caller
mistake (an impossible shape, an out-of-range coordinate, a malformed
permutation) rather than a transient condition.

Each concrete error derives from `NDLayoutError` and from the closest
builtin exception type, so callers may catch either the library-specific
class or the idiomatic builtin (`ValueError`, `IndexError`, `RuntimeError`).

Notes
-----
The "zero-copy reshape is not possible" outcome is deliberately *not* an
error. The reshape resolver returns `None` for it and the caller falls back
to a copying reshape.
"""

from __future__ import annotations

from typing import Optional, Sequence


class NDLayoutError(Exception):
    """Base class for all ndlayout errors."""


class ShapeMismatchError(NDLayoutError, ValueError):
    """
    Raised when a shape, stride or offset is inconsistent with buffer capacity.

    Attributes
    ----------
    shape : tuple[int, ...]
        The requested shape.
    capacity : Optional[int]
        Length of the buffer the shape was checked against, when known.
    """

    def __init__(
        self,
        shape: Sequence[int],
        capacity: Optional[int] = None,
        reason: str = "",
    ) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        shape : Sequence[int]
            The offending shape.
        capacity : Optional[int], optional
            Buffer length, if the mismatch is against a buffer.
        reason : str, optional
            Extra human-readable detail appended to the message.
        """
        msg = f"Shape {tuple(shape)} is inconsistent"
        if capacity is not None:
            msg += f" with buffer of length {capacity}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.shape = tuple(shape)
        self.capacity = capacity


class OffsetOutOfRangeError(NDLayoutError, IndexError):
    """
    Raised when a view offset does not address an element of its buffer.

    Attributes
    ----------
    offset : int
        The rejected offset.
    capacity : int
        Length of the buffer.
    """

    def __init__(self, offset: int, capacity: int) -> None:
        super().__init__(
            f"Offset {offset} is out of range for buffer of length {capacity}."
        )
        self.offset = offset
        self.capacity = capacity


class IndexOutOfRangeError(NDLayoutError, IndexError):
    """
    Raised when a coordinate or flat index exceeds the bounds of a view.

    Attributes
    ----------
    index : object
        The rejected index (an int or a coordinate tuple).
    bound : object
        The bound it was checked against (a length or a shape).
    """

    def __init__(self, index: object, bound: object, reason: str = "") -> None:
        msg = f"Index {index} is out of range for {bound}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.index = index
        self.bound = bound


class InvalidPermutationError(NDLayoutError, ValueError):
    """
    Raised when a permutation is not an arrangement of `0..rank`.

    Attributes
    ----------
    order : tuple[int, ...]
        The rejected permutation.
    rank : int
        Rank of the array being permuted.
    """

    def __init__(self, order: Sequence[int], rank: int, reason: str) -> None:
        super().__init__(f"Invalid permutation {tuple(order)} for rank {rank}: {reason}")
        self.order = tuple(order)
        self.rank = rank


class IncompatibleBroadcastError(NDLayoutError, ValueError):
    """
    Raised when two shapes cannot be broadcast together.

    Attributes
    ----------
    source : tuple[int, ...]
        Shape being broadcast.
    target : tuple[int, ...]
        Requested shape.
    """

    def __init__(self, source: Sequence[int], target: Sequence[int]) -> None:
        super().__init__(
            f"Incompatible broadcast from {tuple(source)} to {tuple(target)}."
        )
        self.source = tuple(source)
        self.target = tuple(target)


class AmbiguousShapeError(NDLayoutError, ValueError):
    """Raised when a reshape request leaves more than one dimension to infer."""

    def __init__(self, shape: Sequence[int]) -> None:
        super().__init__(
            f"Only one dimension can be inferred (-1), got shape {tuple(shape)}."
        )
        self.shape = tuple(shape)


class IllegalAxisError(NDLayoutError, ValueError):
    """
    Raised when a row/column/slice/axis request does not fit the array rank.

    Attributes
    ----------
    axis : object
        The rejected axis or index.
    shape : tuple[int, ...]
        Shape of the array the request was made against.
    """

    def __init__(self, axis: object, shape: Sequence[int], reason: str = "") -> None:
        msg = f"Illegal axis {axis} for shape {tuple(shape)}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.axis = axis
        self.shape = tuple(shape)


class InvalidSubArrayError(NDLayoutError, ValueError):
    """Raised when sub-array offsets/shape/stride are contradictory."""


class UseAfterInvalidationError(NDLayoutError, RuntimeError):
    """
    Raised when an invalidated ("cleaned up") array or released buffer is used.

    Once an array has been cleaned up, every accessor fails deterministically
    instead of reading storage that may have been released.
    """

    def __init__(self, what: str = "array") -> None:
        super().__init__(f"Invalid operation: {what} was already cleaned up.")
        self.what = what
