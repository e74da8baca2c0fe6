from unittest import TestCase
import unittest
import itertools

from src.ndlayout.domain._errors import (
    AmbiguousShapeError,
    IllegalAxisError,
    IndexOutOfRangeError,
    InvalidPermutationError,
    ShapeMismatchError,
)
from src.ndlayout.domain._ordering import Ordering
from src.ndlayout.infrastructure.layout import (
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


class TestDefaultStrides(TestCase):
    def test_row_major(self):
        self.assertEqual(default_strides((2, 3, 4), Ordering.C), (12, 4, 1))

    def test_column_major(self):
        self.assertEqual(default_strides((2, 3, 4), Ordering.FORTRAN), (1, 2, 6))

    def test_scalar_shape_has_no_strides(self):
        self.assertEqual(default_strides((), Ordering.C), ())

    def test_stride_formula_holds_for_small_shapes(self):
        for shape in [(1,), (5,), (2, 3), (4, 1, 3), (2, 2, 2, 2)]:
            c = default_strides(shape, Ordering.C)
            f = default_strides(shape, Ordering.FORTRAN)
            with self.subTest(shape=shape):
                self.assertEqual(c[-1], 1)
                self.assertEqual(f[0], 1)
                for i in range(len(shape) - 1):
                    self.assertEqual(c[i], c[i + 1] * shape[i + 1])
                for i in range(1, len(shape)):
                    self.assertEqual(f[i], f[i - 1] * shape[i - 1])


class TestNormalizeLayout(TestCase):
    def test_rank1_promoted_to_row_vector(self):
        self.assertEqual(normalize_layout((5,), None, Ordering.C), ((1, 5), (5, 1)))
        self.assertEqual(normalize_layout((5,), None, Ordering.FORTRAN), ((1, 5), (1, 1)))

    def test_rank1_explicit_stride_kept_as_column_stride(self):
        self.assertEqual(normalize_layout((5,), (2,), Ordering.C), ((1, 5), (10, 2)))
        self.assertEqual(normalize_layout((5,), (2,), Ordering.FORTRAN), ((1, 5), (2, 2)))

    def test_rank_mismatched_stride_is_recomputed(self):
        self.assertEqual(normalize_layout((2, 3), (1,), Ordering.C), ((2, 3), (3, 1)))

    def test_explicit_stride_kept(self):
        self.assertEqual(normalize_layout((2, 3), (1, 2), Ordering.C), ((2, 3), (1, 2)))

    def test_rank0_stays_scalar(self):
        self.assertEqual(normalize_layout((), None, Ordering.C), ((), ()))

    def test_negative_dimension_rejected(self):
        with self.assertRaises(ShapeMismatchError):
            normalize_layout((2, -1), None, Ordering.C)


class TestAxesAndClassification(TestCase):
    def test_normalize_axis(self):
        self.assertEqual(normalize_axis(-1, 3), 2)
        self.assertEqual(normalize_axis(0, 3), 0)
        with self.assertRaises(IllegalAxisError):
            normalize_axis(3, 3)
        with self.assertRaises(IllegalAxisError):
            normalize_axis(-4, 3)
        with self.assertRaises(IllegalAxisError):
            normalize_axis(0, 0)

    def test_vector_and_matrix_shapes(self):
        self.assertTrue(is_row_vector_shape((1, 4)))
        self.assertTrue(is_row_vector_shape((4,)))
        self.assertTrue(is_column_vector_shape((4, 1)))
        self.assertTrue(is_vector_shape((4, 1)))
        self.assertFalse(is_vector_shape((2, 2)))
        self.assertFalse(is_vector_shape((1, 1, 4)))
        self.assertTrue(is_matrix_shape((2, 3)))
        self.assertFalse(is_matrix_shape((1, 3)))
        self.assertFalse(is_matrix_shape((2, 3, 4)))

    def test_singleton_counts(self):
        self.assertEqual(leading_ones((1, 1, 3, 1)), 2)
        self.assertEqual(trailing_ones((1, 1, 3, 1)), 1)
        self.assertEqual(trailing_ones((1, 1, 1)), 2)
        self.assertEqual(leading_ones(()), 0)

    def test_effective_singletons_excludes_column_vector_trailing_one(self):
        self.assertEqual(effective_singletons((4, 1)), (0, 0))
        self.assertEqual(effective_singletons((1, 4)), (1, 0))
        self.assertEqual(effective_singletons((2, 3, 1)), (0, 1))
        self.assertEqual(effective_singletons((1, 1, 1)), (3, 0))

    def test_squeeze(self):
        self.assertEqual(squeeze_axes((1, 4, 1, 3)), (1, 3))
        self.assertEqual(squeeze((1, 4, 1, 3)), (4, 3))

    def test_remove_axes(self):
        self.assertEqual(remove_axes((2, 3, 4), (1,)), (2, 4))
        self.assertEqual(remove_axes((2, 3, 4), (0, 2)), (3,))


class TestIndexArithmetic(TestCase):
    def test_ind2sub_row_major(self):
        self.assertEqual(ind2sub((2, 3), 5, Ordering.C), (1, 2))
        self.assertEqual(ind2sub((2, 3), 3, Ordering.C), (1, 0))

    def test_ind2sub_column_major(self):
        self.assertEqual(ind2sub((2, 3), 3, Ordering.FORTRAN), (1, 1))
        self.assertEqual(ind2sub((2, 3), 4, Ordering.FORTRAN), (0, 2))

    def test_ind2sub_out_of_range(self):
        with self.assertRaises(IndexOutOfRangeError):
            ind2sub((2, 3), 6, Ordering.C)
        with self.assertRaises(IndexOutOfRangeError):
            ind2sub((2, 3), -1, Ordering.C)

    def test_ind2sub_inverts_default_strides(self):
        for shape, ordering in itertools.product(
            [(2, 3), (4, 1, 3), (2, 3, 4)], [Ordering.C, Ordering.FORTRAN]
        ):
            stride = default_strides(shape, ordering)
            with self.subTest(shape=shape, ordering=ordering):
                for i in range(prod(shape)):
                    coords = ind2sub(shape, i, ordering)
                    self.assertEqual(physical_index(0, stride, coords), i)

    def test_reach(self):
        self.assertEqual(reach((2, 3), (3, 1), 0), (0, 5))
        self.assertEqual(reach((2, 3), (-3, 1), 3), (0, 5))
        self.assertEqual(reach((1, 1), (1, 1), 4), (4, 4))


class TestReshapeArguments(TestCase):
    def test_infer_shape(self):
        self.assertEqual(infer_shape((-1, 3), 6), (2, 3))
        self.assertEqual(infer_shape((2, 3), 6), (2, 3))

    def test_infer_shape_errors(self):
        with self.assertRaises(AmbiguousShapeError):
            infer_shape((-1, -1), 6)
        with self.assertRaises(ShapeMismatchError):
            infer_shape((4, -1), 6)
        with self.assertRaises(ShapeMismatchError):
            infer_shape((2, 2), 6)

    def test_check_permutation(self):
        self.assertEqual(check_permutation([2, 0, 1], 3), (2, 0, 1))
        for bad in [(0,), (0, 0), (0, 2), (-1, 0)]:
            with self.subTest(order=bad):
                with self.assertRaises(InvalidPermutationError):
                    check_permutation(bad, 2)


if __name__ == "__main__":
    unittest.main()
