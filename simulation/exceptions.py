"""
Exception types for the bus simulation.

Two families exist:
    - InvalidRouteError: a bus route that can never be driven (configuration
      mistake, raised when the bus is created).
    - InvariantViolation: the engine's own bookkeeping is inconsistent
      (a bug, never caught inside the simulation).
"""


class InvalidRouteError(ValueError):
    """Raised when a bus route has fewer than two stops or a missing road."""


class InvariantViolation(RuntimeError):
    """Raised when an internal precondition of the engine does not hold."""
