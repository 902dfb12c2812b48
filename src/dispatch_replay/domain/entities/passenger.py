# domain/entities/passenger.py
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from dispatch_replay.domain.entities.geography import Coord, as_coord, is_number


def _pickup_location(raw: Mapping) -> Coord | None:
    # "loc" is either the coordinate itself or a list whose head is the coordinate;
    # "location" is always a bare coordinate.
    loc = raw.get("loc")
    if isinstance(loc, Sequence) and not isinstance(loc, (str, bytes)) and len(loc) > 0:
        head = as_coord(loc[0])
        if head is not None:
            return head
        direct = as_coord(loc)
        if direct is not None:
            return direct
    return as_coord(raw.get("location"))


@dataclass(frozen=True)
class PassengerEvent:
    passenger_id: Any
    timestamp: tuple[float | None, ...]
    pickup_loc: Coord | None
    wait_min: float | None = None

    @classmethod
    def from_raw(cls, raw: Mapping) -> "PassengerEvent":
        if not isinstance(raw, Mapping):
            return cls(passenger_id=None, timestamp=(), pickup_loc=None)
        ts = raw.get("timestamp")
        if isinstance(ts, (str, bytes)) or not isinstance(ts, Sequence):
            ts = ()
        wait = raw.get("wait_min")
        return cls(
            passenger_id=raw.get("passenger_id"),
            timestamp=tuple(float(x) if is_number(x) else None for x in ts),
            pickup_loc=_pickup_location(raw),
            wait_min=float(wait) if is_number(wait) else None,
        )

    @property
    def call(self) -> float | None:
        return self.timestamp[0] if self.timestamp else None
