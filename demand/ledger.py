"""
Passenger ledger for the intercity bus simulation.

Passengers are not modelled individually. For each origin city the ledger
keeps how many people wait for each destination. Boarding zeroes an entry
instead of deleting it, so later additions to the same pair start from 0.
"""

import logging
from typing import Dict

logger = logging.getLogger(__name__)


class PassengerLedger:
    """
    Waiting-passenger counts keyed by origin and destination city ids.

    Attributes:
        waiting (Dict[int, Dict[int, int]]): origin -> destination -> count.
    """

    def __init__(self) -> None:
        self.waiting: Dict[int, Dict[int, int]] = {}

    def add_people(self, origin: int, destination: int, count: int) -> int:
        """
        Add people waiting at ``origin`` for ``destination``.

        Args:
            origin: City id where the people wait.
            destination: City id they want to reach.
            count: Number of people (>= 1).

        Returns:
            The new waiting count for the pair.

        Raises:
            ValueError: If count is not a positive integer.
        """
        if not isinstance(count, int) or isinstance(count, bool) or count < 1:
            logger.error(f"Rejected passenger count {count!r} for {origin} -> {destination}")
            raise ValueError(f"count must be a positive integer, got {count!r}")

        destinations = self.waiting.setdefault(origin, {})
        destinations[destination] = destinations.get(destination, 0) + count

        logger.debug(
            f"{count} people waiting at {origin} for {destination} "
            f"(now {destinations[destination]})"
        )
        return destinations[destination]

    def waiting_for(self, origin: int) -> Dict[int, int]:
        """
        Snapshot of the destinations people wait for at ``origin``.

        Zeroed entries stay in the result. The returned dict is a copy, so
        callers may zero entries while iterating over it.
        """
        return dict(self.waiting.get(origin, {}))

    def waiting_count(self, origin: int, destination: int) -> int:
        return self.waiting.get(origin, {}).get(destination, 0)

    def clear_pair(self, origin: int, destination: int) -> int:
        """
        Zero the waiting count for a pair after those people boarded.

        Returns:
            The count that was waiting before clearing.
        """
        destinations = self.waiting.get(origin)
        if destinations is None or destination not in destinations:
            return 0

        boarded = destinations[destination]
        destinations[destination] = 0
        return boarded

    def total_waiting(self) -> int:
        return sum(
            count
            for destinations in self.waiting.values()
            for count in destinations.values()
        )

    def to_dict(self) -> Dict[int, Dict[int, int]]:
        return {origin: dict(destinations) for origin, destinations in self.waiting.items()}

    def __repr__(self) -> str:
        return f"PassengerLedger(origins={len(self.waiting)}, waiting={self.total_waiting()})"
