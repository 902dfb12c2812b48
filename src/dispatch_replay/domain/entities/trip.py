# domain/entities/trip.py
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from dispatch_replay.domain.entities.geography import Coord, as_coord, is_number


def _seq(v: Any) -> tuple:
    if isinstance(v, (str, bytes)) or not isinstance(v, Sequence):
        return ()
    return tuple(v)


@dataclass(frozen=True)
class Trip:
    """One recorded vehicle trip.

    timestamp[0] is the dispatch (match) time, timestamp[1] the pickup time and
    timestamp[-1] the dropoff time; route[1] is the pickup point and route[-1]
    the destination. Entries that failed to parse are kept as None so indices
    stay aligned with the raw record.
    """

    passenger_id: Any
    route: tuple[Coord | None, ...]
    timestamp: tuple[float | None, ...]

    @classmethod
    def from_raw(cls, raw: Mapping) -> "Trip":
        if not isinstance(raw, Mapping):
            return cls(passenger_id=None, route=(), timestamp=())
        return cls(
            passenger_id=raw.get("passenger_id"),
            route=tuple(as_coord(p) for p in _seq(raw.get("route"))),
            timestamp=tuple(float(x) if is_number(x) else None for x in _seq(raw.get("timestamp"))),
        )

    @property
    def dispatch_t(self) -> float | None:
        return self.timestamp[0] if self.timestamp else None

    @property
    def pickup_t(self) -> float | None:
        return self.timestamp[1] if len(self.timestamp) >= 2 else None

    @property
    def dropoff_t(self) -> float | None:
        return self.timestamp[-1] if self.timestamp else None

    @property
    def pickup(self) -> Coord | None:
        return self.route[1] if len(self.route) >= 2 else None

    @property
    def destination(self) -> Coord | None:
        return self.route[-1] if self.route else None

    @property
    def is_renderable(self) -> bool:
        if len(self.route) < 2 or len(self.timestamp) < 2:
            return False
        if self.dispatch_t is None or self.pickup_t is None or self.dropoff_t is None:
            return False
        return self.pickup is not None and self.destination is not None
