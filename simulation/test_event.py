"""
Simple test for Event class
"""
import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from network.city import City
from simulation.event import Event
from simulation.exceptions import InvariantViolation


class TestEvent(unittest.TestCase):

    def setUp(self):
        self.prague = City(1, "Prague")
        self.brno = City(2, "Brno")

    def test_basic_functionality(self):
        event = Event(120, 0, self.brno, alighted_count=50)

        self.assertEqual(event.tick, 120)
        self.assertEqual(event.bus_id, 0)
        self.assertEqual(event.city, self.brno)
        self.assertEqual(event.alighted_count, 50)
        self.assertEqual(event.boarded_count, 0)
        self.assertFalse(event.frozen)

    def test_negative_values_rejected(self):
        with self.assertRaises(ValueError):
            Event(-10, 0, self.brno)
        with self.assertRaises(ValueError):
            Event(10, 0, self.brno, alighted_count=-1)

    def test_counts_accumulate(self):
        event = Event(0, 0, self.prague)
        event.add_boarded(10)
        event.add_boarded(40)

        self.assertEqual(event.boarded_count, 50)
        self.assertEqual(event.alighted_count, 0)

    def test_merge_keeps_city(self):
        event = Event(90, 0, self.prague, alighted_count=10)
        event.merge(Event(90, 0, self.brno, alighted_count=5, boarded_count=2))

        self.assertEqual(event.city, self.prague)
        self.assertEqual(event.alighted_count, 15)
        self.assertEqual(event.boarded_count, 2)

    def test_frozen_event_cannot_change(self):
        event = Event(0, 0, self.prague)
        event.freeze()

        with self.assertRaises(InvariantViolation):
            event.add_boarded(1)
        with self.assertRaises(InvariantViolation):
            event.merge(Event(0, 0, self.prague))

    def test_ordering(self):
        events = [
            Event(200, 1, self.prague),
            Event(90, 3, self.prague),
            Event(90, 0, self.brno),
        ]
        ordered = sorted(events)
        self.assertEqual([(e.tick, e.bus_id) for e in ordered], [(90, 0), (90, 3), (200, 1)])

    def test_to_dict(self):
        event = Event(0, 1, self.prague, boarded_count=50)
        self.assertEqual(event.to_dict(), {
            'tick': 0,
            'bus_id': 1,
            'city': "Prague",
            'city_id': 1,
            'alighted_count': 0,
            'boarded_count': 50,
        })
        self.assertIn("on=50", repr(event))


if __name__ == "__main__":
    unittest.main()
