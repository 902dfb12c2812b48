# domain/passengers.py
"""Passenger wait-state reconstruction.

Resolution joins each passenger to its trip once per dataset load; the
per-frame step is then a cheap window check over the resolved infos.
"""

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dispatch_replay.domain.entities.geography import Coord, coords_equal, is_number
from dispatch_replay.domain.entities.passenger import PassengerEvent
from dispatch_replay.domain.entities.trip import Trip
from dispatch_replay.policy.wait_colors import DEFAULT_TABLE, RGB, WaitColorTable


class PickupSource(str, Enum):
    ROUTE_MATCH = "route_match"  # pickup location found on the trip route
    WAIT_MIN = "wait_min"  # call + recorded wait_min
    CALL = "call"  # no better evidence; zero implied wait
    UNRESOLVED = "unresolved"  # no numeric call time at all


@dataclass(frozen=True)
class PassengerInfo:
    passenger_id: Any
    call: float | None
    pickup_time: float | None
    pickup_loc: Coord | None
    source: PickupSource = PickupSource.UNRESOLVED

    @property
    def wait(self) -> float | None:
        if self.call is None or self.pickup_time is None:
            return None
        return self.pickup_time - self.call

    def visible_at(self, t: float) -> bool:
        return (
            self.pickup_loc is not None
            and self.call is not None
            and self.pickup_time is not None
            and self.call <= t <= self.pickup_time
        )


@dataclass(frozen=True)
class VisiblePassenger:
    location: Coord
    wait: float
    bucket: int
    color: RGB
    passenger_id: Any = field(default=None, compare=False)


def index_trips_by_passenger(trips: Iterable[Trip]) -> dict[Any, Trip]:
    """passenger_id -> first trip seen for that id; trips without an id are skipped."""
    index: dict[Any, Trip] = {}
    for trip in trips:
        pid = trip.passenger_id
        if pid is None:
            continue
        try:
            index.setdefault(pid, trip)
        except TypeError:  # unhashable id in raw data
            continue
    return index


def _route_pickup_time(trip: Trip, loc: Coord, tolerance: float) -> float | None:
    for i, pt in enumerate(trip.route):
        if pt is None:
            continue
        if coords_equal(pt, loc, tolerance):
            # first matching point decides, even when its timestamp is unusable
            return trip.timestamp[i] if i < len(trip.timestamp) else None
    return None


def resolve_passenger(
    p: PassengerEvent, trip: Trip | None, *, tolerance: float = 0.0
) -> PassengerInfo:
    call = p.call
    if trip is not None and p.pickup_loc is not None:
        pickup = _route_pickup_time(trip, p.pickup_loc, tolerance)
        if pickup is not None:
            return PassengerInfo(p.passenger_id, call, pickup, p.pickup_loc, PickupSource.ROUTE_MATCH)
    if call is not None and p.wait_min is not None:
        return PassengerInfo(
            p.passenger_id, call, call + p.wait_min, p.pickup_loc, PickupSource.WAIT_MIN
        )
    source = PickupSource.CALL if call is not None else PickupSource.UNRESOLVED
    return PassengerInfo(p.passenger_id, call, call, p.pickup_loc, source)


def resolve_passenger_infos(
    trips: Iterable[Trip],
    passengers: Iterable[PassengerEvent],
    *,
    tolerance: float = 0.0,
    index: Mapping[Any, Trip] | None = None,
) -> tuple[PassengerInfo, ...]:
    index = index_trips_by_passenger(trips) if index is None else index
    infos = []
    for p in passengers:
        try:
            trip = index.get(p.passenger_id)
        except TypeError:
            trip = None
        infos.append(resolve_passenger(p, trip, tolerance=tolerance))
    return tuple(infos)


def resolution_summary(infos: Iterable[PassengerInfo]) -> dict[str, int]:
    counts = Counter(info.source.value for info in infos)
    return {s.value: counts.get(s.value, 0) for s in PickupSource}


def visible_passengers(
    infos: Iterable[PassengerInfo], t: float, *, colors: WaitColorTable = DEFAULT_TABLE
) -> list[VisiblePassenger]:
    out = []
    for info in infos:
        if not info.visible_at(t):
            continue
        # total eventual wait, constant for the whole visible window
        wait = info.wait
        out.append(
            VisiblePassenger(
                location=info.pickup_loc,
                wait=wait,
                bucket=colors.bucket(wait),
                color=colors.color(wait),
                passenger_id=info.passenger_id,
            )
        )
    return out
