"""
Topology module for the intercity bus simulation.

The Topology is the arena that owns every City and Road. Cities are handed
out with sequential integer ids, and every other component (buses, the
passenger ledger, roads) refers to cities by those ids.

Roads are undirected: an adjacency query for (A, B) and (B, A) always gives
the same answer.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Union

from network.city import City, Road
from simulation.exceptions import InvalidRouteError

logger = logging.getLogger(__name__)

CityRef = Union[City, int]


class Topology:
    """
    Container for the road network.

    Attributes:
        cities (List[City]): Cities in creation order (index == city_id).
        roads (List[Road]): Roads in creation order.
    """

    def __init__(self) -> None:
        self._cities: List[City] = []
        self._roads: List[Road] = []
        # Unordered endpoint pair -> first road registered between them
        self._road_index: Dict[FrozenSet[int], Road] = {}
        self._neighbours: Dict[int, List[int]] = {}

    # ==================== Factories ====================

    def new_city(self, name: str) -> City:
        """
        Create a city and register it in the arena.

        Args:
            name: Human-readable name of the city.

        Returns:
            The new City. Its id is the number of cities created before it.
        """
        city = City(len(self._cities), name)
        self._cities.append(city)
        self._neighbours[city.city_id] = []
        logger.info(f"City {city.name} registered with id {city.city_id}")
        return city

    def new_road(self, a: CityRef, b: CityRef, travel_time: int) -> Road:
        """
        Create an undirected road between two known cities.

        Args:
            a: First endpoint.
            b: Second endpoint.
            travel_time: Ticks needed to drive the road. Zero is allowed.

        Returns:
            The new Road.

        Raises:
            ValueError: If a city is unknown or travel_time is negative.
        """
        a_id = self.resolve(a)
        b_id = self.resolve(b)
        road = Road(a_id, b_id, travel_time)

        key = frozenset((a_id, b_id))
        if key in self._road_index:
            logger.warning(
                f"Road {road} duplicates {self._road_index[key]}; "
                f"the earlier road is used for travel times"
            )
        else:
            self._road_index[key] = road
            self._neighbours[a_id].append(b_id)
            if b_id != a_id:
                self._neighbours[b_id].append(a_id)

        if travel_time == 0:
            logger.warning(f"Road {road} has zero travel time")

        self._roads.append(road)
        logger.info(
            f"Road {self._cities[a_id].name} <-> {self._cities[b_id].name} "
            f"added ({travel_time} ticks)"
        )
        return road

    # ==================== Lookups ====================

    @property
    def cities(self) -> List[City]:
        return list(self._cities)

    @property
    def roads(self) -> List[Road]:
        return list(self._roads)

    def get_city(self, city_id: int) -> City:
        if not isinstance(city_id, int) or not 0 <= city_id < len(self._cities):
            raise KeyError(f"Unknown city id: {city_id}")
        return self._cities[city_id]

    def road_between(self, a: CityRef, b: CityRef) -> Optional[Road]:
        """Return the road joining a and b (either orientation), or None."""
        return self._road_index.get(frozenset((self.resolve(a), self.resolve(b))))

    def are_adjacent(self, a: CityRef, b: CityRef) -> bool:
        return self.road_between(a, b) is not None

    def travel_time_between(self, a: CityRef, b: CityRef) -> int:
        """
        Direct travel time between two adjacent cities.

        Raises:
            KeyError: If no road joins the two cities.
        """
        road = self.road_between(a, b)
        if road is None:
            raise KeyError(f"No road between {a} and {b}")
        return road.travel_time

    def neighbours(self, city: CityRef) -> List[City]:
        """Cities reachable over a single road, in road creation order."""
        return [self._cities[c] for c in self._neighbours[self.resolve(city)]]

    # ==================== Routes ====================

    def validate_route(self, stops: Sequence[CityRef]) -> List[int]:
        """
        Check that a bus route can be driven and convert it to city ids.

        A route needs at least two stops and a road between every
        consecutive pair.

        Args:
            stops: Ordered stops of the route.

        Returns:
            The route as a list of city ids.

        Raises:
            InvalidRouteError: If the route is too short or a road is missing.
        """
        if len(stops) < 2:
            logger.error(f"Rejected route with {len(stops)} stop(s)")
            raise InvalidRouteError("A bus route must have at least two stops")

        try:
            route = [self.resolve(stop) for stop in stops]
        except ValueError as e:
            raise InvalidRouteError(f"Route references an unknown city: {e}") from e

        for origin, destination in zip(route, route[1:]):
            if not self.are_adjacent(origin, destination):
                reachable = ", ".join(c.name for c in self.neighbours(origin)) or "nothing"
                logger.error(
                    f"Rejected route: no road between "
                    f"{self._cities[origin].name} and {self._cities[destination].name}"
                )
                raise InvalidRouteError(
                    "Not all consecutive stops in the route are connected by a road: "
                    f"{self._cities[origin].name} -> {self._cities[destination].name} "
                    f"({self._cities[origin].name} only reaches {reachable})"
                )

        return route

    def route_names(self, route: Iterable[int]) -> List[str]:
        return [self._cities[c].name for c in route]

    # ==================== Helpers ====================

    def resolve(self, city: CityRef) -> int:
        """Turn a City or a city id into a validated city id."""
        if isinstance(city, City):
            city_id = city.city_id
            if city_id < len(self._cities) and self._cities[city_id] is city:
                return city_id
            raise ValueError(f"{city!r} does not belong to this topology")

        if isinstance(city, int) and not isinstance(city, bool):
            if 0 <= city < len(self._cities):
                return city
            raise ValueError(f"Unknown city id: {city}")

        raise ValueError(f"Expected a City or a city id, got {city!r}")

    def __len__(self) -> int:
        return len(self._cities)

    def __repr__(self) -> str:
        return f"Topology(cities={len(self._cities)}, roads={len(self._roads)})"
