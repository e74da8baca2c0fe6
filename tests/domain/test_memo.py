from unittest import TestCase
import unittest
import gc
import weakref

from src.ndlayout.domain.utils import MemoCell, MemoTable


class _Counter:
    def __init__(self, value):
        self.value = value
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.value


class _Host:
    def __init__(self):
        self.memo = MemoTable()

    def answer(self):
        return self.memo.get("answer", lambda: id(self))


class TestMemoCell(TestCase):
    def test_computes_once(self):
        compute = _Counter(42)
        cell = MemoCell()

        self.assertFalse(cell.is_set)
        self.assertEqual(cell.get(compute), 42)
        self.assertEqual(cell.get(compute), 42)
        self.assertTrue(cell.is_set)
        self.assertEqual(compute.calls, 1)

    def test_reset_forces_recompute(self):
        compute = _Counter(7)
        cell = MemoCell()
        cell.get(compute)
        cell.reset()

        self.assertFalse(cell.is_set)
        self.assertEqual(cell.get(compute), 7)
        self.assertEqual(compute.calls, 2)

    def test_caches_falsy_values(self):
        compute = _Counter(None)
        cell = MemoCell()
        cell.get(compute)
        cell.get(compute)
        self.assertEqual(compute.calls, 1)


class TestMemoTable(TestCase):
    def test_keys_are_independent(self):
        table = MemoTable()
        a = _Counter(1)
        b = _Counter(2)

        self.assertEqual(table.get("a", a), 1)
        self.assertEqual(table.get("b", b), 2)
        self.assertEqual(table.get("a", a), 1)
        self.assertEqual(a.calls, 1)
        self.assertEqual(b.calls, 1)

    def test_is_set_and_reset(self):
        table = MemoTable()
        compute = _Counter(0)

        self.assertFalse(table.is_set("x"))
        table.get("x", compute)
        self.assertTrue(table.is_set("x"))

        table.reset()
        self.assertFalse(table.is_set("x"))
        table.get("x", compute)
        self.assertEqual(compute.calls, 2)

    def test_producer_closure_does_not_keep_host_alive(self):
        gc.disable()
        try:
            host = _Host()
            host.answer()
            ref = weakref.ref(host)
            del host
            self.assertIsNone(ref())
        finally:
            gc.enable()


if __name__ == "__main__":
    unittest.main()
