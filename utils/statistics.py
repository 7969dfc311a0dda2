"""
Statistics over dispatched simulation events.

Summaries are built from the Event lists returned by Simulation.execute and
are meant for logging at the end of a run.
"""

import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Tuple

import numpy as np

from simulation.event import Event

logger = logging.getLogger(__name__)


def summarize_events(events: Iterable[Event]) -> Dict[str, Any]:
    """
    Aggregate boarding and alighting counts.

    Args:
        events: Dispatched events, in any order.

    Returns:
        Dictionary with keys:
            - num_events: Number of events
            - total_boarded / total_alighted: Sums over all events
            - mean_boarded / max_boarded: Per-event boarding figures
              (0.0 / 0 when there are no events)
            - by_city: city name -> {'boarded': int, 'alighted': int}
            - by_bus: bus id -> {'boarded': int, 'alighted': int, 'stops': int}
    """
    events = list(events)

    boarded = np.array([e.boarded_count for e in events], dtype=np.int64)
    alighted = np.array([e.alighted_count for e in events], dtype=np.int64)

    by_city: Dict[str, Dict[str, int]] = defaultdict(lambda: {'boarded': 0, 'alighted': 0})
    by_bus: Dict[int, Dict[str, int]] = defaultdict(
        lambda: {'boarded': 0, 'alighted': 0, 'stops': 0}
    )

    for event in events:
        city_totals = by_city[event.city.name]
        city_totals['boarded'] += event.boarded_count
        city_totals['alighted'] += event.alighted_count

        bus_totals = by_bus[event.bus_id]
        bus_totals['boarded'] += event.boarded_count
        bus_totals['alighted'] += event.alighted_count
        bus_totals['stops'] += 1

    summary = {
        'num_events': len(events),
        'total_boarded': int(boarded.sum()),
        'total_alighted': int(alighted.sum()),
        'mean_boarded': float(np.mean(boarded)) if events else 0.0,
        'max_boarded': int(np.max(boarded)) if events else 0,
        'by_city': dict(by_city),
        'by_bus': dict(by_bus),
    }

    logger.debug(
        f"Summarized {summary['num_events']} events: "
        f"{summary['total_boarded']} boarded, {summary['total_alighted']} alighted"
    )
    return summary


def occupancy_timeline(events: Iterable[Event]) -> List[Tuple[int, int, int]]:
    # Running on-board count per bus, in (tick, bus id) order
    ordered = sorted(events)
    on_board: Dict[int, int] = defaultdict(int)
    timeline = []

    for event in ordered:
        on_board[event.bus_id] += event.boarded_count - event.alighted_count
        timeline.append((event.tick, event.bus_id, on_board[event.bus_id]))

    return timeline
