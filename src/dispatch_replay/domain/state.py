# domain/state.py
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from dispatch_replay.domain.entities.passenger import PassengerEvent
from dispatch_replay.domain.entities.trip import Trip
from dispatch_replay.domain.passengers import (
    PassengerInfo,
    index_trips_by_passenger,
    resolve_passenger_infos,
)


@dataclass(frozen=True)
class ReplayDataset:
    """Trips, passengers and their one-time derived passenger infos.

    Everything is a tuple of frozen records, so frames can read it freely.
    Build a new dataset (``from_raw``/``from_records``) whenever the inputs change.
    """

    trips: tuple[Trip, ...] = ()
    passengers: tuple[PassengerEvent, ...] = ()
    infos: tuple[PassengerInfo, ...] = ()

    @classmethod
    def from_records(
        cls,
        trips: Iterable[Trip],
        passengers: Iterable[PassengerEvent],
        *,
        tolerance: float = 0.0,
    ) -> "ReplayDataset":
        trips, passengers = tuple(trips), tuple(passengers)
        index = index_trips_by_passenger(trips)
        infos = resolve_passenger_infos(trips, passengers, tolerance=tolerance, index=index)
        return cls(trips=trips, passengers=passengers, infos=infos)

    @classmethod
    def from_raw(
        cls,
        trips: Iterable[Mapping] | None,
        passengers: Iterable[Mapping] | None,
        *,
        tolerance: float = 0.0,
    ) -> "ReplayDataset":
        return cls.from_records(
            (Trip.from_raw(r) for r in trips or ()),
            (PassengerEvent.from_raw(r) for r in passengers or ()),
            tolerance=tolerance,
        )

    @property
    def invalid_trips(self) -> int:
        return sum(1 for t in self.trips if not t.is_renderable)
