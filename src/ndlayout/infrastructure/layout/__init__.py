"""
Pure layout arithmetic shared by the array implementation.
"""

from ._broadcast import broadcast_shape, cyclic_fill_matches_broadcast, is_broadcast_compatible
from ._reshape import no_copy_strides
from ._shape import (
    check_permutation,
    default_strides,
    effective_singletons,
    ind2sub,
    infer_shape,
    is_column_vector_shape,
    is_matrix_shape,
    is_row_vector_shape,
    is_vector_shape,
    leading_ones,
    normalize_axis,
    normalize_layout,
    physical_index,
    prod,
    reach,
    remove_axes,
    squeeze,
    squeeze_axes,
    trailing_ones,
)

__all__ = [
    "broadcast_shape",
    "check_permutation",
    "cyclic_fill_matches_broadcast",
    "default_strides",
    "effective_singletons",
    "ind2sub",
    "infer_shape",
    "is_broadcast_compatible",
    "is_column_vector_shape",
    "is_matrix_shape",
    "is_row_vector_shape",
    "is_vector_shape",
    "leading_ones",
    "no_copy_strides",
    "normalize_axis",
    "normalize_layout",
    "physical_index",
    "prod",
    "reach",
    "remove_axes",
    "squeeze",
    "squeeze_axes",
    "trailing_ones",
]
