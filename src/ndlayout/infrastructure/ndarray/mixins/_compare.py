"""
Equality mixin.

Arrays compare by value with an absolute tolerance:

- two scalars are equal when `|a - b| < eps`,
- two vectors are equal when they have the same length and every pair of
  elements differs by at most `eps`,
- anything else is equal when the shapes match, the slice counts along
  dimension 0 match, and every pair of corresponding slices is equal.

The tolerance defaults to `NDLAYOUT_EPS` (see `NDLayoutConfig`). Arrays are
mutable views, so they are unhashable.
"""

from __future__ import annotations

from abc import ABC
from typing import Optional

from ..._config import get_config


class NDArrayMixinCompare(ABC):
    """
    Mixin implementing tolerant value equality.
    """

    __hash__ = None

    def equals_with_eps(self, other: "NDArrayMixinCompare", eps: Optional[float] = None) -> bool:
        """
        Compare values with an explicit absolute tolerance.

        Parameters
        ----------
        other : NDArray
            Array to compare against.
        eps : Optional[float], optional
            Absolute tolerance. Defaults to the configured threshold.

        Returns
        -------
        bool
            True if both arrays hold the same values within `eps`.
        """
        self._ensure_not_cleaned_up()
        other._ensure_not_cleaned_up()
        eps = get_config().eps_threshold if eps is None else eps

        if self.is_scalar() and other.is_scalar():
            return abs(self.get_double(0) - other.get_double(0)) < eps

        if self.is_vector() and other.is_vector():
            if self.length != other.length:
                return False
            a = self._flat_values()
            b = other._flat_values()
            return bool(all(abs(x - y) <= eps for x, y in zip(a, b)))

        if self.shape != other.shape:
            return False
        if self.slices() != other.slices():
            return False
        for i in range(self.slices()):
            if not self.slice(i).equals_with_eps(other.slice(i), eps):
                return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NDArrayMixinCompare):
            return NotImplemented
        return self.equals_with_eps(other)
