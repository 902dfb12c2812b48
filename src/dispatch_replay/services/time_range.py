# services/time_range.py
from collections.abc import Iterable

from dispatch_replay.domain.entities.trip import Trip
from dispatch_replay.sim.clock import MIN_WINDOW, SIM_START_MIN, TimeWindow


def latest_dropoff(trips: Iterable[Trip]) -> float | None:
    latest = None
    for trip in trips:
        last = trip.dropoff_t  # None for empty or non-numeric timestamps
        if last is not None and (latest is None or last > latest):
            latest = last
    return latest


def derive_time_window(
    trips: Iterable[Trip],
    *,
    domain_min: float = SIM_START_MIN,
    min_window: float = MIN_WINDOW,
) -> TimeWindow:
    """Clock domain: fixed start, ending at the last dropoff but never shorter than min_window."""
    floor = domain_min + min_window
    latest = latest_dropoff(trips)
    return TimeWindow(domain_min, floor if latest is None else max(floor, latest))
