"""
Unit tests for the Bus class.

This test module validates:
- Current stop and upcoming stop queries
- Advancing along the route and finishing
- Travel time computation and its memoization
"""

import os
import sys
import logging
import unittest

# Add parent directory to path to import from sibling directories
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from network.topology import Topology
from simulation.exceptions import InvariantViolation
from vehicles.bus import Bus


class TestBus(unittest.TestCase):
    """Test cases for the Bus class."""

    def setUp(self):
        logging.disable(logging.CRITICAL)

        self.topology = Topology()
        self.c1 = self.topology.new_city("C1").city_id
        self.c2 = self.topology.new_city("C2").city_id
        self.c3 = self.topology.new_city("C3").city_id
        self.topology.new_road(self.c1, self.c2, 5)
        self.topology.new_road(self.c2, self.c3, 7)

        self.bus = Bus(0, [self.c1, self.c2, self.c3])

    def tearDown(self):
        logging.disable(logging.NOTSET)

    # ==================== Initialization ====================

    def test_initial_state(self):
        self.assertEqual(self.bus.current_stop(), self.c1)
        self.assertFalse(self.bus.finished)
        self.assertEqual(self.bus.stops_passed, 0)

    def test_empty_route_rejected(self):
        with self.assertRaises(ValueError):
            Bus(1, [])

    # ==================== Upcoming stops ====================

    def test_current_stop_is_not_upcoming(self):
        self.assertFalse(self.bus.is_upcoming_stop(self.c1))
        self.assertTrue(self.bus.is_upcoming_stop(self.c2))
        self.assertTrue(self.bus.is_upcoming_stop(self.c3))

    def test_unknown_city_is_not_upcoming(self):
        self.assertFalse(self.bus.is_upcoming_stop(99))

    def test_passed_stop_is_not_upcoming(self):
        self.bus.advance()
        self.assertFalse(self.bus.is_upcoming_stop(self.c1))
        self.assertFalse(self.bus.is_upcoming_stop(self.c2))
        self.assertTrue(self.bus.is_upcoming_stop(self.c3))

    def test_revisited_city_stays_upcoming(self):
        bus = Bus(1, [self.c1, self.c2, self.c1])
        self.assertFalse(bus.is_upcoming_stop(self.c1))

        bus.advance()
        self.assertTrue(bus.is_upcoming_stop(self.c1))
        self.assertEqual(bus.travel_time_to(self.topology, self.c1, 0), 5)

    # ==================== Advancing ====================

    def test_advance_until_finished(self):
        self.bus.advance()
        self.assertEqual(self.bus.current_stop(), self.c2)
        self.bus.advance()
        self.assertEqual(self.bus.current_stop(), self.c3)
        self.assertFalse(self.bus.finished)

        self.bus.advance()
        self.assertTrue(self.bus.finished)
        self.assertEqual(self.bus.stops_passed, 3)

    def test_advance_after_finish_is_noop(self):
        for _ in range(3):
            self.bus.advance()

        self.bus.advance()
        self.assertTrue(self.bus.finished)
        self.assertEqual(self.bus.stops_passed, 3)

    def test_current_stop_of_finished_bus(self):
        for _ in range(3):
            self.bus.advance()

        with self.assertRaises(InvariantViolation):
            self.bus.current_stop()
        self.assertFalse(self.bus.is_upcoming_stop(self.c3))

    # ==================== Travel time ====================

    def test_travel_time_from_tick_zero(self):
        self.assertEqual(self.bus.travel_time_to(self.topology, self.c3, 0), 12)
        self.assertEqual(self.bus.travel_time_to(self.topology, self.c2, 0), 5)

    def test_travel_time_from_later_tick(self):
        bus = Bus(1, [self.c1, self.c2, self.c3])
        self.assertEqual(bus.travel_time_to(self.topology, self.c3, 10), 22)

    def test_travel_time_is_memoized_per_position(self):
        self.assertEqual(self.bus.travel_time_to(self.topology, self.c3, 0), 12)
        # Same position: the memoized value is returned
        self.assertEqual(self.bus.travel_time_to(self.topology, self.c3, 10), 12)

    def test_advance_drops_memo(self):
        self.assertEqual(self.bus.travel_time_to(self.topology, self.c3, 0), 12)

        self.bus.advance()
        self.assertEqual(self.bus.travel_time_to(self.topology, self.c3, 100), 107)

    def test_travel_time_to_non_upcoming_stop(self):
        with self.assertRaises(InvariantViolation):
            self.bus.travel_time_to(self.topology, self.c1, 0)
        with self.assertRaises(InvariantViolation):
            self.bus.travel_time_to(self.topology, 99, 0)

    # ==================== Introspection ====================

    def test_get_bus_info(self):
        self.bus.advance()
        info = self.bus.get_bus_info()

        self.assertEqual(info["bus_id"], 0)
        self.assertEqual(info["route"], [self.c1, self.c2, self.c3])
        self.assertEqual(info["remaining_route"], [self.c2, self.c3])
        self.assertEqual(info["current_stop"], self.c2)
        self.assertFalse(info["finished"])

    def test_repr(self):
        self.assertIn("id=0", repr(self.bus))
        for _ in range(3):
            self.bus.advance()
        self.assertIn("FINISHED", repr(self.bus))


if __name__ == "__main__":
    unittest.main()
