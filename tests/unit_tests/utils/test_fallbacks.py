"""Unit tests for FallbackMonitor."""

import unittest

from defect_dashboard.utils.fallbacks import COUNT, TYPE_FILTER, FallbackMonitor


class TestFallbackMonitor(unittest.TestCase):
    """Test suite for FallbackMonitor."""

    def test_counts_per_reason(self):
        monitor = FallbackMonitor()
        monitor.record(COUNT, "request failed", jql="project = X")
        monitor.record(COUNT, "bad body")
        monitor.record(TYPE_FILTER, "unknown filter", type_filter="Story")

        self.assertEqual(monitor.total(COUNT), 2)
        self.assertEqual(monitor.total(TYPE_FILTER), 1)
        self.assertEqual(monitor.snapshot(), {COUNT: 2, TYPE_FILTER: 1})

    def test_reset(self):
        monitor = FallbackMonitor()
        monitor.record(COUNT, "bad body")
        monitor.reset()
        self.assertEqual(monitor.total(COUNT), 0)
        self.assertEqual(monitor.snapshot(), {})


if __name__ == "__main__":
    unittest.main()
