"""
Event schedule for the intercity bus simulation.

Pending events are bucketed by tick, and within a tick by bus id. Each
(tick, bus) pair owns at most one slot; scheduling into an occupied slot
merges the counts into the event already there.
"""

import logging
from typing import Dict, List, Optional

from simulation.event import Event

logger = logging.getLogger(__name__)


class EventSchedule:
    """
    Time-bucketed store of pending bus events.

    Attributes:
        slots (Dict[int, Dict[int, Event]]): tick -> bus id -> pending event.
    """

    def __init__(self) -> None:
        self.slots: Dict[int, Dict[int, Event]] = {}

    def schedule(self, tick: int, bus_id: int, event: Event) -> Event:
        """
        Put an event into the (tick, bus_id) slot.

        Args:
            tick: Tick the event is due at (>= 0).
            bus_id: Bus owning the slot.
            event: Event to store or merge.

        Returns:
            The event now held by the slot (the existing one after a merge).

        Raises:
            ValueError: If tick is negative.
        """
        if tick < 0:
            raise ValueError(f"Cannot schedule an event at negative tick {tick}")

        bucket = self.slots.setdefault(tick, {})
        existing = bucket.get(bus_id)
        if existing is None:
            bucket[bus_id] = event
            logger.debug(f"Scheduled {event!r} at tick {tick}")
            return event

        existing.merge(event)
        logger.debug(f"Merged into {existing!r} at tick {tick}")
        return existing

    def due(self, tick: int) -> List[Event]:
        """Events scheduled at exactly ``tick``, ordered by bus id."""
        bucket = self.slots.get(tick)
        if not bucket:
            return []
        return [bucket[bus_id] for bus_id in sorted(bucket)]

    def pop_due(self, tick: int) -> List[Event]:
        """Remove and return the events at ``tick``, ordered by bus id."""
        bucket = self.slots.pop(tick, None)
        if not bucket:
            return []
        return [bucket[bus_id] for bus_id in sorted(bucket)]

    def next_tick(self) -> Optional[int]:
        """Earliest tick with a pending event, or None if nothing is pending."""
        pending = [tick for tick, bucket in self.slots.items() if bucket]
        return min(pending) if pending else None

    def pending_count(self) -> int:
        return sum(len(bucket) for bucket in self.slots.values())

    def __len__(self) -> int:
        return self.pending_count()

    def __repr__(self) -> str:
        return f"EventSchedule(pending={self.pending_count()}, next_tick={self.next_tick()})"
