"""
City and Road value types for the intercity bus network.

Cities are identified by an integer id handed out by the Topology that owns
them. Two cities sharing a name are still different cities; equality and
hashing only look at the id.
"""

from typing import Any, Dict, Tuple


class City:
    """
    A node of the road network.

    Attributes:
        city_id (int): Arena identifier, unique within one Topology.
        name (str): Human-readable name (not required to be unique).
    """

    __slots__ = ("_city_id", "_name")

    def __init__(self, city_id: int, name: str) -> None:
        if not isinstance(city_id, int) or city_id < 0:
            raise ValueError("city_id must be a non-negative integer")
        if not isinstance(name, str) or not name:
            raise ValueError("name must be a non-empty string")

        self._city_id = city_id
        self._name = name

    @property
    def city_id(self) -> int:
        return self._city_id

    @property
    def name(self) -> str:
        return self._name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, City):
            return NotImplemented
        return self._city_id == other._city_id

    def __hash__(self) -> int:
        return hash(("City", self._city_id))

    def __repr__(self) -> str:
        return f"City(id={self._city_id}, name={self._name})"


class Road:
    """
    An undirected edge between two cities.

    The road stores city ids rather than City objects. A road from A to B
    can be driven from B to A in the same time.

    Attributes:
        city_a (int): Id of one endpoint.
        city_b (int): Id of the other endpoint.
        travel_time (int): Ticks needed to drive the road (>= 0).
    """

    __slots__ = ("_city_a", "_city_b", "_travel_time")

    def __init__(self, city_a: int, city_b: int, travel_time: int) -> None:
        if not isinstance(travel_time, int) or isinstance(travel_time, bool):
            raise TypeError("travel_time must be an integer")
        if travel_time < 0:
            raise ValueError(f"travel_time must be non-negative, got {travel_time}")

        self._city_a = city_a
        self._city_b = city_b
        self._travel_time = travel_time

    @property
    def city_a(self) -> int:
        return self._city_a

    @property
    def city_b(self) -> int:
        return self._city_b

    @property
    def travel_time(self) -> int:
        return self._travel_time

    @property
    def endpoints(self) -> Tuple[int, int]:
        return (self._city_a, self._city_b)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'city_a': self._city_a,
            'city_b': self._city_b,
            'travel_time': self._travel_time,
        }

    def __repr__(self) -> str:
        return f"Road({self._city_a}<->{self._city_b}, time={self._travel_time})"
