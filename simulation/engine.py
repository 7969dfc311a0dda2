"""
Simulation engine for the intercity bus network.

The engine owns the topology, the buses, the passenger ledger and the event
schedule, plus the tick counter. It is driven from outside by ``execute``
calls; each call walks the requested window tick by tick, dispatches the
events due at every tick and schedules follow-on events for later ticks.

Processing one event:
    1. Every destination with people waiting at the event's city that the
       bus still has ahead of it gets a follow-on event at the tick the bus
       reaches it (people get off there). Those people board now and the
       ledger entry is zeroed.
    2. The bus advances one stop.
    3. The event is frozen and reported.
"""

import logging
from threading import Lock
from typing import Dict, List, Sequence

from demand.ledger import PassengerLedger
from network.city import City, Road
from network.topology import CityRef, Topology
from simulation.event import Event
from simulation.schedule import EventSchedule
from vehicles.bus import Bus

# Configure logging
logger = logging.getLogger(__name__)


class Simulation:
    """
    Discrete-event simulation of buses carrying waiting passengers.

    Attributes:
        topology (Topology): Cities and roads.
        buses (List[Bus]): Buses in creation order (index == bus_id).
        ledger (PassengerLedger): Waiting passengers per origin/destination.
        schedule (EventSchedule): Pending events.
        current_time (int): First tick the next ``execute`` call processes.
    """

    def __init__(self) -> None:
        # Owned here; cities and roads are added only through the locked factories
        self.topology = Topology()
        self.buses: List[Bus] = []
        self.ledger = PassengerLedger()
        self.schedule = EventSchedule()
        self._current_time = 0

        # One lock for every mutating call
        self._lock = Lock()

        logger.info("Simulation initialized")

    @property
    def current_time(self) -> int:
        return self._current_time

    # ==================== Setup ====================

    def new_city(self, name: str) -> City:
        with self._lock:
            return self.topology.new_city(name)

    def new_road(self, a: CityRef, b: CityRef, travel_time: int) -> Road:
        with self._lock:
            return self.topology.new_road(a, b, travel_time)

    def new_bus(self, stops: Sequence[CityRef]) -> Bus:
        """
        Put a new bus on a fixed route.

        The bus starts at the first stop at the current tick; an empty event
        is scheduled there so waiting people can board it.

        Args:
            stops: Ordered stops (at least two, consecutive stops adjacent).

        Returns:
            The new Bus.

        Raises:
            InvalidRouteError: If the route is too short or a road is missing.
        """
        with self._lock:
            route = self.topology.validate_route(stops)

            bus = Bus(len(self.buses), route)
            self.buses.append(bus)

            first_stop = self.topology.get_city(bus.current_stop())
            self.schedule.schedule(
                self._current_time,
                bus.bus_id,
                Event(self._current_time, bus.bus_id, first_stop),
            )

            logger.info(
                f"Bus {bus.bus_id} created on route "
                f"{' -> '.join(self.topology.route_names(route))}, "
                f"departing at tick {self._current_time}"
            )
            return bus

    def add_people(self, origin: CityRef, destination: CityRef, count: int) -> int:
        """
        Add people waiting at ``origin`` for a bus to ``destination``.

        Returns:
            The number of people now waiting for that pair.

        Raises:
            ValueError: If a city is unknown or count is not positive.
        """
        with self._lock:
            origin_id = self.topology.resolve(origin)
            destination_id = self.topology.resolve(destination)
            waiting = self.ledger.add_people(origin_id, destination_id, count)
            logger.info(
                f"{count} people now waiting at "
                f"{self.topology.get_city(origin_id).name} for "
                f"{self.topology.get_city(destination_id).name} (total {waiting})"
            )
            return waiting

    # ==================== Execution ====================

    def execute(self, tick_count: int) -> List[Event]:
        """
        Run the simulation for ``tick_count`` ticks.

        Args:
            tick_count: Number of ticks to process (> 0).

        Returns:
            Events dispatched during the window, in dispatch order.

        Raises:
            ValueError: If tick_count is not a positive integer.
        """
        if not isinstance(tick_count, int) or isinstance(tick_count, bool) or tick_count < 1:
            raise ValueError(f"tick_count must be a positive integer, got {tick_count!r}")

        with self._lock:
            start = self._current_time
            end = start + tick_count
            dispatched: List[Event] = []

            logger.info(f"Executing ticks {start}..{end - 1}")

            for tick in range(start, end):
                # Follow-ons always land on later ticks, so this list is final
                due = self.schedule.pop_due(tick)
                if not due:
                    continue

                for event in due:
                    self._process_event(event, tick)
                    dispatched.append(event)

            self._current_time = end

            logger.info(
                f"Dispatched {len(dispatched)} event(s); clock now at {self._current_time}, "
                f"{self.schedule.pending_count()} event(s) pending"
            )
            return dispatched

    def _process_event(self, event: Event, tick: int) -> None:
        bus = self.buses[event.bus_id]
        origin_id = event.city.city_id

        for destination_id, waiting in self.ledger.waiting_for(origin_id).items():
            if waiting <= 0 or not bus.is_upcoming_stop(destination_id):
                continue

            arrival = bus.travel_time_to(self.topology, destination_id, tick)
            if arrival <= tick:
                logger.warning(
                    f"Bus {bus.bus_id} reaches {destination_id} in zero ticks; "
                    f"scheduling drop-off at tick {tick + 1}"
                )
                arrival = tick + 1

            destination = self.topology.get_city(destination_id)
            self.schedule.schedule(
                arrival,
                bus.bus_id,
                Event(arrival, bus.bus_id, destination, alighted_count=waiting),
            )
            event.add_boarded(waiting)
            self.ledger.clear_pair(origin_id, destination_id)

            logger.debug(
                f"Tick {tick}: {waiting} people boarded bus {bus.bus_id} at "
                f"{event.city.name} for {destination.name} (arrival {arrival})"
            )

        bus.advance()
        event.freeze()

        logger.debug(f"Dispatched {event!r}")

    # ==================== Introspection ====================

    def get_bus(self, bus_id: int) -> Bus:
        return self.buses[bus_id]

    def get_state(self) -> Dict[str, object]:
        """Snapshot of the simulation for logging and reports."""
        with self._lock:
            return {
                'current_time': self._current_time,
                'cities': [city.name for city in self.topology.cities],
                'roads': [road.to_dict() for road in self.topology.roads],
                'buses': [bus.get_bus_info() for bus in self.buses],
                'waiting': self.ledger.to_dict(),
                'pending_events': self.schedule.pending_count(),
            }

    def __repr__(self) -> str:
        return (
            f"Simulation(time={self._current_time}, cities={len(self.topology)}, "
            f"buses={len(self.buses)}, pending={self.schedule.pending_count()})"
        )
