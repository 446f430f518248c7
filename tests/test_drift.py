"""
Tests for flow rate drift resolution.
"""

import unittest

from src.air_monitoring.rules import FlowrateDriftResolver, format_average, parse_flowrate


class TestParseFlowrate(unittest.TestCase):
    """Test flow rate parsing."""

    def test_numeric_values(self):
        self.assertEqual(parse_flowrate("2.0"), 2.0)
        self.assertEqual(parse_flowrate(" 1.5 "), 1.5)
        self.assertEqual(parse_flowrate(3), 3.0)

    def test_invalid_values(self):
        for value in (None, "", "abc", "0", "-1", 0, True, "nan", "inf"):
            with self.subTest(value=value):
                self.assertIsNone(parse_flowrate(value))


class TestFormatAverage(unittest.TestCase):
    """Test average flow rate formatting."""

    def test_one_decimal_when_exact(self):
        self.assertEqual(format_average(2.0), "2.0")
        self.assertEqual(format_average(2.5), "2.5")

    def test_two_decimals_otherwise(self):
        self.assertEqual(format_average(2.25), "2.25")
        self.assertEqual(format_average((2.0 + 2.1) / 2), "2.05")

    def test_halves_round_up(self):
        self.assertEqual(format_average((1.0 + 1.25) / 2), "1.13")
        self.assertEqual(format_average(0.375), "0.38")
        self.assertEqual(format_average(2.05), "2.05")


class TestFlowrateDriftResolver(unittest.TestCase):
    """Test drift resolution."""

    def setUp(self):
        """Set up test fixtures."""
        self.resolver = FlowrateDriftResolver()

    def test_within_tolerance(self):
        result = self.resolver.resolve("2.0", "2.1")
        self.assertEqual(result.average_flowrate, "2.05")
        self.assertEqual(result.status, "pending")

    def test_boundary_is_pending(self):
        result = self.resolver.resolve("5.0", "4.5")
        self.assertEqual(result.average_flowrate, "4.75")
        self.assertEqual(result.status, "pending")
        self.assertEqual(self.resolver.resolve("5.0", "4.4").status, "failed")

    def test_outside_tolerance_fails(self):
        result = self.resolver.resolve("2.0", "2.5")
        self.assertEqual(result.average_flowrate, "2.25")
        self.assertEqual(result.status, "failed")

    def test_missing_final(self):
        result = self.resolver.resolve("2.0", "")
        self.assertEqual(result.average_flowrate, "")
        self.assertEqual(result.status, "pending")

    def test_invalid_initial(self):
        result = self.resolver.resolve("0", "2.0")
        self.assertEqual(result.average_flowrate, "")
        self.assertEqual(result.status, "pending")

    def test_idempotent(self):
        first = self.resolver.resolve("4.0", "3.5")
        second = self.resolver.resolve("4.0", "3.5")
        self.assertEqual(first, second)
        self.assertEqual(first.status, "failed")

    def test_half_up_average(self):
        result = self.resolver.resolve("1.0", "1.25")
        self.assertEqual(result.average_flowrate, "1.13")
        self.assertEqual(result.status, "failed")

    def test_average_within_half_a_hundredth(self):
        rates = [value / 100 for value in range(50, 350, 5)]
        for initial in rates:
            for final in rates:
                with self.subTest(initial=initial, final=final):
                    result = self.resolver.resolve(initial, final)
                    average = (initial + final) / 2
                    self.assertLessEqual(abs(float(result.average_flowrate) - average), 0.005 + 1e-9)

    def test_custom_tolerance(self):
        resolver = FlowrateDriftResolver(tolerance=0.05)
        self.assertEqual(resolver.resolve("2.0", "2.15").status, "failed")


if __name__ == "__main__":
    unittest.main()
