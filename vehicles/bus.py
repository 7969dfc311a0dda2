"""
Bus module for the intercity bus simulation.

A bus follows a fixed route of cities. It only knows where it is (the head of
its remaining route) and where it is still going; the simulation engine
decides when it moves. Travel times to upcoming stops are memoized per route
position, so a cached value is never reused once the bus has moved on.
"""

import logging
from collections import Counter, deque
from typing import Any, Deque, Dict, List, Tuple

from network.topology import Topology
from simulation.exceptions import InvariantViolation

# Configure logging
logger = logging.getLogger(__name__)


class Bus:
    """
    Represents a fixed-route bus.

    Attributes:
        bus_id (int): Unique identifier, assigned sequentially from 0.
        remaining_route (Deque[int]): City ids still to visit; the head is the
            city the bus is at right now.
        upcoming_stops (Counter): Multiset view of remaining_route.
        finished (bool): True once the route has been fully consumed.
        stops_passed (int): Number of stops the bus has left behind.
    """

    def __init__(self, bus_id: int, route: List[int]) -> None:
        """
        Initialize a new Bus.

        The route is expected to be validated by the caller (see
        Topology.validate_route); the bus only checks it is non-empty.

        Args:
            bus_id: Unique identifier for the bus.
            route: Ordered list of city ids.

        Raises:
            ValueError: If route is empty.
        """
        if not route:
            raise ValueError("Route cannot be empty")

        self.bus_id = bus_id
        self.route: Tuple[int, ...] = tuple(route)
        self.remaining_route: Deque[int] = deque(route)
        self.upcoming_stops: Counter = Counter(route)
        self.finished = False
        self.stops_passed = 0

        # (stops_passed, destination) -> absolute arrival tick
        self._travel_time_cache: Dict[Tuple[int, int], int] = {}

        logger.info(f"Initialized bus {self.bus_id} with route {list(route)}")

    def current_stop(self) -> int:
        """
        Get the city the bus is currently at.

        Returns:
            City id at the head of the remaining route.

        Raises:
            InvariantViolation: If the route is already exhausted.
        """
        if not self.remaining_route:
            raise InvariantViolation(f"Bus {self.bus_id} has no current stop (route exhausted)")
        return self.remaining_route[0]

    def is_upcoming_stop(self, city_id: int) -> bool:
        """
        Check whether the bus will still visit a city.

        The bus is never "upcoming" to the city it is standing in.
        """
        if not self.remaining_route:
            return False
        return self.upcoming_stops[city_id] > 0 and city_id != self.remaining_route[0]

    def advance(self) -> None:
        """
        Move the bus to its next stop.

        Does nothing once the bus has finished. Cached travel times are
        relative to the old position and are dropped.
        """
        if self.finished:
            logger.debug(f"Bus {self.bus_id} already finished, advance ignored")
            return

        left = self.remaining_route.popleft()
        self.upcoming_stops[left] -= 1
        if self.upcoming_stops[left] <= 0:
            del self.upcoming_stops[left]

        self.stops_passed += 1
        self._travel_time_cache.clear()

        if not self.remaining_route:
            self.finished = True
            logger.info(f"Bus {self.bus_id} finished its route")
        else:
            logger.debug(f"Bus {self.bus_id} moved from {left} to {self.remaining_route[0]}")

    def travel_time_to(self, topology: Topology, destination: int, now: int) -> int:
        """
        Compute the tick at which the bus reaches an upcoming stop.

        Walks the remaining route from the current stop, adding the travel
        time of every road up to the first occurrence of ``destination``.

        Args:
            topology: Road network used to look up road travel times.
            destination: City id of an upcoming stop.
            now: Tick the bus leaves its current stop.

        Returns:
            now + the summed road travel times to the destination.

        Raises:
            InvariantViolation: If destination is not an upcoming stop.
        """
        key = (self.stops_passed, destination)
        if key in self._travel_time_cache:
            logger.debug(f"Bus {self.bus_id}: cached travel time to {destination}")
            return self._travel_time_cache[key]

        if not self.is_upcoming_stop(destination):
            raise InvariantViolation(
                f"Bus {self.bus_id} asked for travel time to {destination}, "
                f"which is not an upcoming stop"
            )

        total = now
        previous = self.remaining_route[0]
        for city_id in list(self.remaining_route)[1:]:
            total += topology.travel_time_between(previous, city_id)
            if city_id == destination:
                break
            previous = city_id

        self._travel_time_cache[key] = total
        return total

    def get_bus_info(self) -> Dict[str, Any]:
        """
        Get information about the bus's current state.

        Returns:
            Dictionary with bus_id, route, remaining_route, current_stop
            (None once finished), stops_passed and finished.
        """
        return {
            "bus_id": self.bus_id,
            "route": list(self.route),
            "remaining_route": list(self.remaining_route),
            "current_stop": self.remaining_route[0] if self.remaining_route else None,
            "stops_passed": self.stops_passed,
            "finished": self.finished,
        }

    def __repr__(self) -> str:
        if self.finished:
            at = "FINISHED"
        else:
            at = str(self.remaining_route[0])
        return f"Bus(id={self.bus_id}, at={at}, remaining={len(self.remaining_route)})"
