"""
Operation executor interface.

Arithmetic and reduction kernels are not part of the layout engine. They
are applied by an external executor that walks linear views: the engine's
only obligation is to hand out `linear_view()` objects whose flat
`get_double(i)` / `put_scalar(i, v)` address the right buffer elements.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ._ndarray import INDArray


@runtime_checkable
class IOperationExecutor(Protocol):
    """Structural contract for element-wise / reduction executors."""

    def exec(
        self,
        x: "INDArray",
        y: Optional["INDArray"],
        z: "INDArray",
        n: int,
    ) -> None:
        """
        Apply an operation over `n` flat elements.

        Parameters
        ----------
        x : INDArray
            Linear view of the first operand.
        y : Optional[INDArray]
            Linear view of the second operand, if any.
        z : INDArray
            Linear view receiving the result.
        n : int
            Number of elements to process.
        """
        ...
