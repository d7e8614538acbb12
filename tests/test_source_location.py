"""
Tests for mlirgen source locations.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from mlirgen.source import Position, SourceLocation, UNKNOWN_LOCATION, combine


def loc(filename, r0, c0, r1, c1):
    return SourceLocation(filename, Position(r0, c0), Position(r1, c1))


class TestPosition(unittest.TestCase):
    """Position ordering."""

    def test_orders_by_row_then_column(self):
        self.assertLess(Position(1, 9), Position(2, 0))
        self.assertLess(Position(2, 0), Position(2, 1))
        self.assertEqual(max(Position(3, 1), Position(3, 4)), Position(3, 4))

    def test_str(self):
        self.assertEqual(str(Position(4, 7)), "4:7")


class TestCombine(unittest.TestCase):
    """Merging two source ranges."""

    def test_combine_spanning_rows(self):
        """(1,0)-(1,5) combined with (2,0)-(2,3) covers (1,0)-(2,3)."""
        merged = combine(loc("a.ns", 1, 0, 1, 5), loc("a.ns", 2, 0, 2, 3))
        self.assertEqual(merged.start, Position(1, 0))
        self.assertEqual(merged.end, Position(2, 3))

    def test_combine_is_order_independent_for_range(self):
        a = loc("a.ns", 5, 2, 5, 8)
        b = loc("a.ns", 3, 4, 5, 6)
        self.assertEqual(combine(a, b).start, combine(b, a).start)
        self.assertEqual(combine(a, b).end, combine(b, a).end)

    def test_combine_compares_columns_on_same_row(self):
        merged = combine(loc("a.ns", 2, 7, 2, 9), loc("a.ns", 2, 3, 2, 12))
        self.assertEqual(merged.start, Position(2, 3))
        self.assertEqual(merged.end, Position(2, 12))

    def test_combine_keeps_first_filename(self):
        merged = combine(loc("first.ns", 1, 0, 1, 1), loc("second.ns", 9, 0, 9, 1))
        self.assertEqual(merged.filename, "first.ns")
        self.assertEqual(merged.end, Position(9, 1))

    def test_method_form(self):
        a = loc("a.ns", 1, 0, 1, 5)
        b = loc("a.ns", 2, 0, 2, 3)
        self.assertEqual(a.combine(b), combine(a, b))

    def test_inputs_are_unchanged(self):
        a = loc("a.ns", 1, 0, 1, 5)
        combine(a, loc("a.ns", 2, 0, 2, 3))
        self.assertEqual(a.end, Position(1, 5))


class TestUnknownLocation(unittest.TestCase):

    def test_unknown(self):
        self.assertTrue(SourceLocation.unknown().is_unknown)
        self.assertTrue(UNKNOWN_LOCATION.is_unknown)
        self.assertFalse(loc("a.ns", 1, 0, 1, 1).is_unknown)

    def test_str(self):
        self.assertEqual(str(loc("a.ns", 1, 0, 2, 3)), "a.ns:1:0-2:3")


if __name__ == "__main__":
    unittest.main(verbosity=2)
