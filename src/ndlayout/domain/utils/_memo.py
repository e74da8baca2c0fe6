"""
Compute-once memoization cells.

Arrays cache several derived layout properties (major stride, leading and
trailing singleton counts, vector classification). Instead of sentinel
values in mutable fields, each cached property is held in a `MemoCell`
that computes its value on first access and can be reset explicitly when
the layout changes.

Cells store values only. The producer is supplied on every `get` and never
retained, so caching a property of a host object does not create a
reference cycle back to that host.
"""

from __future__ import annotations

from typing import Callable, Dict, Generic, Hashable, TypeVar

T = TypeVar("T")

_UNSET = object()


class MemoCell(Generic[T]):
    """
    A lazily computed, explicitly resettable value.
    """

    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value: object = _UNSET

    @property
    def is_set(self) -> bool:
        return self._value is not _UNSET

    def get(self, compute: Callable[[], T]) -> T:
        """
        Return the cached value, calling `compute` only when the cell is empty.

        Parameters
        ----------
        compute : Callable[[], T]
            Zero-argument function producing the value. It is not stored.
        """
        if self._value is _UNSET:
            self._value = compute()
        return self._value  # type: ignore[return-value]

    def reset(self) -> None:
        self._value = _UNSET


class MemoTable:
    """
    A named collection of `MemoCell` objects sharing one reset switch.

    Cells are registered lazily by key, so a host object only pays for the
    properties it actually queries.
    """

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: Dict[Hashable, MemoCell] = {}

    def get(self, key: Hashable, compute: Callable[[], T]) -> T:
        """
        Return the cached value for `key`, computing it on first use.

        Parameters
        ----------
        key : Hashable
            Name of the cached property.
        compute : Callable[[], T]
            Producer used when the cell is empty.

        Returns
        -------
        T
            The memoized value.
        """
        cell = self._cells.get(key)
        if cell is None:
            cell = MemoCell()
            self._cells[key] = cell
        return cell.get(compute)

    def is_set(self, key: Hashable) -> bool:
        cell = self._cells.get(key)
        return cell is not None and cell.is_set

    def reset(self) -> None:
        """Forget every cached value."""
        for cell in self._cells.values():
            cell.reset()
