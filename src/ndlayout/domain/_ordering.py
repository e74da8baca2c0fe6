"""
Memory ordering descriptors.

`Ordering` names the two supported element orders of a strided layout:
row-major ("C", last dimension fastest) and column-major ("Fortran", first
dimension fastest). The ordering decides how default strides are computed,
how flat indices are unravelled into coordinates, and which contiguity test
the zero-copy reshape resolver applies.
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class Ordering(Enum):
    """
    Enumeration of supported element orderings.

    Attributes
    ----------
    C : Ordering
        Row-major order.
    FORTRAN : Ordering
        Column-major order.
    """

    C = "c"
    FORTRAN = "f"

    @classmethod
    def parse(cls, value: Union["Ordering", str]) -> "Ordering":
        """
        Normalize a user-facing ordering value.

        Parameters
        ----------
        value : Ordering or str
            An `Ordering` member, or one of "c", "C", "f", "F".

        Returns
        -------
        Ordering
            The matching enum member.

        Raises
        ------
        ValueError
            If the value does not name a supported ordering.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.lower() in ("c", "f"):
            return cls(value.lower())
        raise ValueError(f"Invalid ordering {value!r}. Expected 'c' or 'f'.")

    def __str__(self) -> str:
        return self.value
