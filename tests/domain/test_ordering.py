from unittest import TestCase
import unittest

from src.ndlayout.domain._ordering import Ordering


class TestOrderingParse(TestCase):
    def test_parse_accepts_members(self):
        self.assertIs(Ordering.parse(Ordering.C), Ordering.C)
        self.assertIs(Ordering.parse(Ordering.FORTRAN), Ordering.FORTRAN)

    def test_parse_accepts_strings_case_insensitive(self):
        self.assertIs(Ordering.parse("c"), Ordering.C)
        self.assertIs(Ordering.parse("C"), Ordering.C)
        self.assertIs(Ordering.parse("f"), Ordering.FORTRAN)
        self.assertIs(Ordering.parse("F"), Ordering.FORTRAN)

    def test_parse_rejects_unknown_values(self):
        for bad in ("k", "", "row", 0, None):
            with self.subTest(value=bad):
                with self.assertRaises(ValueError):
                    Ordering.parse(bad)

    def test_str_is_single_letter(self):
        self.assertEqual(str(Ordering.C), "c")
        self.assertEqual(str(Ordering.FORTRAN), "f")


if __name__ == "__main__":
    unittest.main()
