from unittest import TestCase
import unittest
import numpy as np

from src.ndlayout.domain._ordering import Ordering
from src.ndlayout.infrastructure._config import (
    NDLayoutConfig,
    get_config,
    reset_config,
    set_config,
)
from src.ndlayout.infrastructure.buffer import DataBuffer
from src.ndlayout.infrastructure.ndarray import NDArray
from src.ndlayout.infrastructure.utils._logging import get_logger


class TestNDLayoutConfigFromEnv(TestCase):
    def test_defaults_from_empty_environment(self):
        cfg = NDLayoutConfig.from_env({})
        self.assertIs(cfg.default_order, Ordering.C)
        self.assertEqual(cfg.eps_threshold, 1e-5)
        self.assertIs(cfg.dtype, np.float64)
        self.assertFalse(cfg.debug)

    def test_reads_every_variable(self):
        cfg = NDLayoutConfig.from_env(
            {
                "NDLAYOUT_ORDER": "F",
                "NDLAYOUT_EPS": "0.001",
                "NDLAYOUT_DTYPE": "float32",
                "NDLAYOUT_DEBUG": "1",
            }
        )
        self.assertIs(cfg.default_order, Ordering.FORTRAN)
        self.assertEqual(cfg.eps_threshold, 0.001)
        self.assertIs(cfg.dtype, np.float32)
        self.assertTrue(cfg.debug)

    def test_debug_falsy_values(self):
        for raw in ("", "0", "false", "No", "OFF"):
            with self.subTest(raw=raw):
                self.assertFalse(NDLayoutConfig.from_env({"NDLAYOUT_DEBUG": raw}).debug)

    def test_invalid_values_raise(self):
        bad = [
            {"NDLAYOUT_EPS": "tiny"},
            {"NDLAYOUT_EPS": "-1"},
            {"NDLAYOUT_DTYPE": "int8"},
            {"NDLAYOUT_ORDER": "z"},
        ]
        for env in bad:
            with self.subTest(env=env):
                with self.assertRaises(ValueError):
                    NDLayoutConfig.from_env(env)


class TestActiveConfig(TestCase):
    def tearDown(self):
        reset_config()

    def test_with_overrides_parses_ordering(self):
        cfg = NDLayoutConfig().with_overrides(default_order="f", eps_threshold=0.1)
        self.assertIs(cfg.default_order, Ordering.FORTRAN)
        self.assertEqual(cfg.eps_threshold, 0.1)
        self.assertIs(NDLayoutConfig().default_order, Ordering.C)

    def test_set_and_reset(self):
        custom = NDLayoutConfig(eps_threshold=0.25)
        set_config(custom)
        self.assertIs(get_config(), custom)
        reset_config()
        self.assertIsNot(get_config(), custom)

    def test_default_order_applies_to_new_arrays(self):
        set_config(get_config().with_overrides(default_order="f"))
        a = NDArray(DataBuffer(6), (2, 3))
        self.assertIs(a.ordering, Ordering.FORTRAN)
        self.assertEqual(a.stride, (1, 2))

        b = NDArray(DataBuffer(6), (2, 3), ordering="c")
        self.assertEqual(b.stride, (3, 1))


class TestGetLogger(TestCase):
    def test_names_are_rooted_at_package(self):
        self.assertEqual(
            get_logger("src.ndlayout.infrastructure.layout").name,
            "ndlayout.infrastructure.layout",
        )
        self.assertEqual(get_logger("ndlayout.buffer").name, "ndlayout.buffer")
        self.assertEqual(get_logger("custom").name, "ndlayout.custom")


if __name__ == "__main__":
    unittest.main()
