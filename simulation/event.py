from typing import Any, Dict

from network.city import City
from simulation.exceptions import InvariantViolation


class Event:
    """
    A bus stopping at a city at a given tick.

    Records how many people got off and how many got on. While the event
    waits in the schedule its counts may still grow (several boardings can
    target the same bus at the same tick); once the engine dispatches it the
    event is frozen.

    Events are ordered by tick, then by bus id, which is also the order the
    engine dispatches them in.

    Attributes:
        tick: Simulation tick of the stop (>= 0)
        bus_id: Id of the bus stopping
        city: City where the bus stops
        alighted_count: People who got off here
        boarded_count: People who got on here

    Example:
        >>> event = Event(120, 0, brno, alighted_count=50)
        >>> event.alighted_count
        50
    """

    def __init__(
        self,
        tick: int,
        bus_id: int,
        city: City,
        alighted_count: int = 0,
        boarded_count: int = 0
    ):
        """
        Initialize an Event instance.

        Args:
            tick: The simulation tick when the event occurs (must be >= 0)
            bus_id: Id of the bus the event belongs to
            city: City where the bus stops
            alighted_count: Initial number of people getting off
            boarded_count: Initial number of people getting on

        Raises:
            ValueError: If tick or a count is negative
        """
        if tick < 0:
            raise ValueError(f"Event tick must be non-negative, got {tick}")
        if alighted_count < 0 or boarded_count < 0:
            raise ValueError("Event counts must be non-negative")

        self.tick = tick
        self.bus_id = bus_id
        self.city = city
        self._alighted_count = alighted_count
        self._boarded_count = boarded_count
        self._frozen = False

    @property
    def alighted_count(self) -> int:
        return self._alighted_count

    @property
    def boarded_count(self) -> int:
        return self._boarded_count

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add_boarded(self, count: int) -> None:
        self._check_mutable()
        self._boarded_count += count

    def merge(self, other: 'Event') -> None:
        """
        Fold another pending event for the same (tick, bus) slot into this one.

        Counts are added; this event keeps its city.
        """
        self._check_mutable()
        self._alighted_count += other.alighted_count
        self._boarded_count += other.boarded_count

    def freeze(self) -> None:
        """Mark the event as dispatched. Further count changes are a bug."""
        self._frozen = True

    def _check_mutable(self) -> None:
        if self._frozen:
            raise InvariantViolation(f"{self!r} was already dispatched and cannot change")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tick': self.tick,
            'bus_id': self.bus_id,
            'city': self.city.name,
            'city_id': self.city.city_id,
            'alighted_count': self._alighted_count,
            'boarded_count': self._boarded_count,
        }

    def __lt__(self, other: 'Event') -> bool:
        """Order by tick, then by bus id."""
        if self.tick != other.tick:
            return self.tick < other.tick
        return self.bus_id < other.bus_id

    def __repr__(self) -> str:
        return (
            f"Event(tick={self.tick}, bus={self.bus_id}, city={self.city.name}, "
            f"off={self._alighted_count}, on={self._boarded_count})"
        )
