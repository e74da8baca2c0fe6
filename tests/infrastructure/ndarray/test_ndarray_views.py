from unittest import TestCase
import unittest
import numpy as np

from src.ndlayout.domain._errors import (
    IllegalAxisError,
    IndexOutOfRangeError,
    InvalidPermutationError,
    InvalidSubArrayError,
)
from src.ndlayout.infrastructure.indexing import NDArrayIndex
from src.ndlayout.infrastructure.ndarray import NDArray, NDArrayFactory


class _ArrayFactoryMixin:
    def _array(self, values, shape=None, ordering="c") -> NDArray:
        arr = np.asarray(values, dtype=np.float64)
        if shape is not None:
            arr = arr.reshape(shape)
        return NDArrayFactory().from_numpy(arr, ordering)


# ----------------------------------------------------------------------
# Slicing
# ----------------------------------------------------------------------
class TestSlice(TestCase, _ArrayFactoryMixin):
    def setUp(self):
        self.arr = np.arange(24, dtype=np.float64).reshape(2, 3, 4)
        self.a = self._array(self.arr)

    def test_slice_along_first_axis(self):
        s = self.a.slice(1)
        self.assertEqual(s.shape, (3, 4))
        self.assertEqual(s.offset, 12)
        self.assertIs(s.data, self.a.data)
        np.testing.assert_array_equal(s.to_numpy(), self.arr[1])

    def test_negative_slice_index(self):
        np.testing.assert_array_equal(self.a.slice(-1).to_numpy(), self.arr[1])

    def test_slice_along_explicit_dimension(self):
        np.testing.assert_array_equal(self.a.slice(2, 2).to_numpy(), self.arr[:, :, 2])
        np.testing.assert_array_equal(self.a.slice(1, 1).to_numpy(), self.arr[:, 1, :])

    def test_slice_dimension_skips_leading_singletons(self):
        arr = np.arange(12, dtype=np.float64).reshape(1, 3, 4)
        b = self._array(arr)
        view = b.slice(1, 0)
        self.assertEqual(view.shape, (1, 4))
        np.testing.assert_array_equal(view.to_numpy(), arr[:, 1, :])

    def test_slice_on_matrix_dimensions(self):
        m = self._array(np.arange(6), (2, 3))
        np.testing.assert_array_equal(m.slice(1, 1).to_numpy(), [[3, 4, 5]])
        np.testing.assert_array_equal(m.slice(2, 0).to_numpy(), [[2], [5]])

    def test_slice_of_vector_is_boxed_element(self):
        v = self._array([1, 2, 3])
        s = v.slice(2)
        self.assertEqual(s.shape, (1, 1))
        self.assertEqual(s.get_double(0), 3.0)
        s.put_scalar(0, 30.0)
        self.assertEqual(v.get_double(2), 30.0)

    def test_slice_of_scalar(self):
        s = NDArrayFactory().scalar(5.0)
        self.assertEqual(s.slice(0).get_double(0), 5.0)
        with self.assertRaises(IndexOutOfRangeError):
            s.slice(1)

    def test_slice_out_of_range(self):
        with self.assertRaises(IndexOutOfRangeError):
            self.a.slice(2)
        with self.assertRaises(IndexOutOfRangeError):
            self.a.slice(4, 2)
        with self.assertRaises(IllegalAxisError):
            self.a.slice(0, 3)

    def test_slice_writes_are_visible_in_parent(self):
        self.a.slice(0).put_scalar((2, 3), -1.0)
        self.assertEqual(self.a.get_double(0, 2, 3), -1.0)


# ----------------------------------------------------------------------
# Rows and columns
# ----------------------------------------------------------------------
class TestRowsAndColumns(TestCase, _ArrayFactoryMixin):
    def test_row_aliases_parent(self):
        m = NDArrayFactory().from_values([1, 2, 3, 4, 5, 6], shape=(2, 3))
        row = m.get_row(0)
        self.assertEqual(row.shape, (1, 3))
        row.put_scalar(1, 50.0)
        self.assertEqual(m.get_double(0, 1), 50.0)

    def test_column_is_column_shaped_and_aliases_parent(self):
        m = NDArrayFactory().from_values([1, 2, 3, 4, 5, 6], shape=(2, 3))
        col = m.get_column(2)
        self.assertEqual(col.shape, (2, 1))
        np.testing.assert_array_equal(col.to_numpy(), [[3], [6]])

        col.put_scalar(1, -1.0)
        self.assertEqual(m.get_double(1, 2), -1.0)

    def test_rows_and_columns_in_fortran_order(self):
        arr = np.arange(6, dtype=np.float64).reshape(2, 3)
        m = self._array(arr, ordering="f")
        np.testing.assert_array_equal(m.get_row(1).to_numpy(), arr[1:2, :])
        np.testing.assert_array_equal(m.get_column(1).to_numpy(), arr[:, 1:2])

    def test_row_vector_rows(self):
        v = self._array([1, 2, 3])
        self.assertIs(v.get_row(0), v)
        with self.assertRaises(IllegalAxisError):
            v.get_row(1)
        self.assertEqual(v.get_column(2).get_double(0), 3.0)

    def test_column_vector_columns(self):
        v = self._array([1, 2, 3], (3, 1))
        self.assertIs(v.get_column(0), v)
        with self.assertRaises(IllegalAxisError):
            v.get_column(1)
        self.assertEqual(v.get_row(1).get_double(0), 2.0)

    def test_rank3_with_leading_singleton(self):
        arr = np.arange(6, dtype=np.float64).reshape(1, 2, 3)
        a = self._array(arr)
        np.testing.assert_array_equal(a.get_row(1).to_numpy(), [[3, 4, 5]])
        np.testing.assert_array_equal(a.get_column(0).to_numpy(), [[0], [3]])

    def test_rows_require_2d(self):
        a = self._array(np.arange(24), (2, 3, 4))
        with self.assertRaises(IllegalAxisError):
            a.get_row(0)
        with self.assertRaises(IllegalAxisError):
            a.get_column(0)


# ----------------------------------------------------------------------
# Tensor along dimension
# ----------------------------------------------------------------------
class TestTensorAlongDimension(TestCase, _ArrayFactoryMixin):
    def setUp(self):
        self.arr = np.arange(24, dtype=np.float64).reshape(2, 3, 4)
        self.a = self._array(self.arr)

    def test_vectors_along_last_dimension(self):
        self.assertEqual(self.a.vectors_along_dimension(2), 6)
        expected = self.arr.reshape(6, 4)
        for i in range(6):
            v = self.a.vector_along_dimension(i, 2)
            self.assertEqual(v.shape, (1, 4))
            self.assertIs(v.data, self.a.data)
            np.testing.assert_array_equal(v.to_numpy()[0], expected[i])

    def test_vectors_along_middle_dimension(self):
        self.assertEqual(self.a.vectors_along_dimension(1), 8)
        for i in range(8):
            v = self.a.vector_along_dimension(i, 1)
            np.testing.assert_array_equal(v.to_numpy()[0], self.arr[i // 4, :, i % 4])

    def test_tensor_along_two_dimensions(self):
        self.assertEqual(self.a.tensors_along_dimension(1, 2), 2)
        for i in range(2):
            np.testing.assert_array_equal(
                self.a.tensor_along_dimension(i, 1, 2).to_numpy(), self.arr[i]
            )

    def test_dimension_order_is_kept(self):
        self.assertEqual(self.a.tensor_along_dimension(1, 1, 2).shape, (3, 4))
        t = self.a.tensor_along_dimension(1, 2, 1)
        self.assertEqual(t.shape, (4, 3))
        np.testing.assert_array_equal(t.to_numpy(), self.arr[1].T)

    def test_negative_dimension(self):
        np.testing.assert_array_equal(
            self.a.vector_along_dimension(0, -1).to_numpy()[0], self.arr[0, 0]
        )

    def test_invalid_requests(self):
        with self.assertRaises(IndexOutOfRangeError):
            self.a.vector_along_dimension(6, 2)
        with self.assertRaises(IllegalAxisError):
            self.a.tensor_along_dimension(0, 1, 1)
        with self.assertRaises(IllegalAxisError):
            self.a.tensor_along_dimension(0, 3)

    def test_writes_through_tensor_are_visible(self):
        v = self.a.vector_along_dimension(5, 1)
        v.assign(0.0)
        self.assertTrue(np.all(self.a.to_numpy()[1, :, 1] == 0))


# ----------------------------------------------------------------------
# Index specifications and sub-arrays
# ----------------------------------------------------------------------
class TestGetAndSubArray(TestCase, _ArrayFactoryMixin):
    def test_get_with_index_specs(self):
        arr = np.arange(24, dtype=np.float64).reshape(2, 3, 4)
        a = self._array(arr)
        view = a.get(
            NDArrayIndex.all(), NDArrayIndex.interval(0, 3, 2), NDArrayIndex.point(1)
        )
        self.assertEqual(view.shape, (2, 2))
        np.testing.assert_array_equal(view.to_numpy(), arr[:, 0:3:2, 1])

    def test_get_all_points_gives_scalar_view(self):
        a = self._array(np.arange(6), (2, 3))
        s = a.get(NDArrayIndex.point(1), NDArrayIndex.point(2))
        self.assertTrue(s.is_scalar())
        self.assertEqual(s.get_double(0), 5.0)

    def test_sub_array(self):
        arr = np.arange(16, dtype=np.float64).reshape(4, 4)
        m = self._array(arr)
        sub = m.sub_array((1, 1), (2, 2), (4, 1))
        self.assertIs(sub.data, m.data)
        np.testing.assert_array_equal(sub.to_numpy(), arr[1:3, 1:3])

    def test_sub_array_identity_returns_self(self):
        m = self._array(np.arange(16), (4, 4))
        self.assertIs(m.sub_array((0, 0), (4, 4), (4, 1)), m)

    def test_sub_array_rejections(self):
        m = self._array(np.arange(16), (4, 4))
        with self.assertRaises(InvalidSubArrayError):
            m.sub_array((1, 0), (4, 4), (4, 1))
        with self.assertRaises(InvalidSubArrayError):
            m.sub_array((0,), (2, 2), (4, 1))
        with self.assertRaises(InvalidSubArrayError):
            m.sub_array((0, 0), (5, 4), (4, 1))


# ----------------------------------------------------------------------
# Linear views and permutation
# ----------------------------------------------------------------------
class TestLinearViewAndPermute(TestCase, _ArrayFactoryMixin):
    def test_linear_view_of_contiguous_array_is_a_view(self):
        arr = np.arange(6, dtype=np.float64).reshape(2, 3)
        a = self._array(arr)
        flat = a.linear_view()
        self.assertEqual(flat.shape, (1, 6))
        self.assertEqual(flat.stride, (6, 1))
        self.assertIs(flat.data, a.data)
        for i in range(6):
            self.assertEqual(flat.get_double(i), a.get_double(i))

    def test_linear_view_column_order(self):
        a = self._array(np.arange(6), (2, 3))
        col = a.linear_view_column_order()
        self.assertEqual(col.shape, (6, 1))
        np.testing.assert_array_equal(col.to_numpy().ravel(), np.arange(6))

    def test_linear_view_of_non_contiguous_array_is_self(self):
        t = self._array(np.arange(6), (2, 3)).permute(1, 0)
        self.assertIs(t.linear_view(), t)

    def test_permute(self):
        arr = np.arange(24, dtype=np.float64).reshape(2, 3, 4)
        a = self._array(arr)
        p = a.permute(2, 0, 1)
        self.assertEqual(p.shape, (4, 2, 3))
        self.assertEqual(p.stride, (1, 12, 4))
        self.assertIs(p.data, a.data)
        np.testing.assert_array_equal(p.to_numpy(), np.transpose(arr, (2, 0, 1)))
        np.testing.assert_array_equal(a.permute((1, 0, 2)).to_numpy(), np.transpose(arr, (1, 0, 2)))

    def test_invalid_permutations(self):
        a = self._array(np.arange(24), (2, 3, 4))
        for order in [(0, 1), (0, 0, 1), (0, 1, 3), (-1, 0, 1)]:
            with self.subTest(order=order):
                with self.assertRaises(InvalidPermutationError):
                    a.permute(*order)

    def test_swap_axes(self):
        arr = np.arange(24, dtype=np.float64).reshape(2, 3, 4)
        a = self._array(arr)
        np.testing.assert_array_equal(a.swap_axes(0, 2).to_numpy(), np.swapaxes(arr, 0, 2))
        np.testing.assert_array_equal(a.swap_axes(-1, 1).to_numpy(), np.swapaxes(arr, 2, 1))


# ----------------------------------------------------------------------
# Dim shuffle
# ----------------------------------------------------------------------
class TestDimShuffle(TestCase, _ArrayFactoryMixin):
    def setUp(self):
        self.arr = np.arange(6, dtype=np.float64).reshape(2, 3)
        self.a = self._array(self.arr)

    def test_without_new_axes_is_permute(self):
        s = self.a.dim_shuffle((1, 0), (False, False))
        self.assertEqual(s.shape, (3, 2))
        self.assertEqual(s.stride, self.a.permute(1, 0).stride)
        np.testing.assert_array_equal(s.to_numpy(), self.arr.T)

    def test_inserts_unit_axes_as_a_view(self):
        s = self.a.dim_shuffle((1, "x", 0), (False, False))
        self.assertEqual(s.shape, (3, 1, 2))
        self.assertIs(s.data, self.a.data)
        np.testing.assert_array_equal(s.to_numpy(), self.arr.T[:, None, :])

        s.put_scalar((2, 0, 1), -1.0)
        self.assertEqual(self.a.get_double(1, 2), -1.0)

    def test_drops_broadcastable_unit_axis(self):
        row = self._array(np.arange(3), (1, 3))
        s = row.dim_shuffle(("x", 1), (True, False))
        self.assertEqual(s.shape, (1, 3))
        self.assertIs(s.data, row.data)
        np.testing.assert_array_equal(s.to_numpy(), [[0, 1, 2]])

    def test_invalid_requests(self):
        with self.assertRaises(IllegalAxisError):
            self.a.dim_shuffle((1, "x"), (False, False))
        with self.assertRaises(IllegalAxisError):
            self.a.dim_shuffle((1, "y", 0), (False, False))
        with self.assertRaises(IllegalAxisError):
            self.a.dim_shuffle((1, "x", 0), (False,))
        with self.assertRaises(IllegalAxisError):
            self.a.dim_shuffle((2, "x", 0), (False, False))
        with self.assertRaises(InvalidPermutationError):
            self.a.dim_shuffle((0, 0, "x"), (False, True))


if __name__ == "__main__":
    unittest.main()
