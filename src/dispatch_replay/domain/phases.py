# domain/phases.py
from dataclasses import dataclass
from enum import Enum

from dispatch_replay.domain.entities.geography import Coord
from dispatch_replay.domain.entities.trip import Trip
from dispatch_replay.domain.mechanics.path_sampler import interpolate


class TripPhase(str, Enum):
    INVALID = "invalid"
    PRE_DISPATCH = "pre_dispatch"
    DISPATCHED = "dispatched"  # empty vehicle heading to the pickup point
    OCCUPIED = "occupied"  # passenger aboard, heading to the destination
    COMPLETED = "completed"


@dataclass(frozen=True)
class Arc:
    source: Coord
    target: Coord


@dataclass(frozen=True)
class TripPhaseState:
    phase: TripPhase
    position: Coord | None = None
    arc: Arc | None = None
    destination: Coord | None = None

    @property
    def active(self) -> bool:
        return self.phase in (TripPhase.DISPATCHED, TripPhase.OCCUPIED)


_INVALID = TripPhaseState(TripPhase.INVALID)
_PRE_DISPATCH = TripPhaseState(TripPhase.PRE_DISPATCH)
_COMPLETED = TripPhaseState(TripPhase.COMPLETED)


def phase_at(trip: Trip, t: float) -> TripPhase:
    if not trip.is_renderable:
        return TripPhase.INVALID
    if t < trip.dispatch_t:
        return TripPhase.PRE_DISPATCH
    # the pickup instant belongs to the ride, not the approach
    if t < trip.pickup_t:
        return TripPhase.DISPATCHED
    if t <= trip.dropoff_t:
        return TripPhase.OCCUPIED
    return TripPhase.COMPLETED


def classify_trip(trip: Trip, t: float) -> TripPhaseState:
    phase = phase_at(trip, t)
    if phase is TripPhase.INVALID:
        return _INVALID
    if phase is TripPhase.PRE_DISPATCH:
        return _PRE_DISPATCH
    if phase is TripPhase.COMPLETED:
        return _COMPLETED

    pos = interpolate(trip.route, trip.timestamp, t)
    if phase is TripPhase.DISPATCHED:
        arc = Arc(pos, trip.pickup) if pos is not None else None
        return TripPhaseState(phase, position=pos, arc=arc)
    arc = Arc(pos, trip.destination) if pos is not None else None
    return TripPhaseState(phase, position=pos, arc=arc, destination=trip.destination)
