# app/frame.py
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from dispatch_replay.domain.entities.geography import Coord
from dispatch_replay.domain.entities.passenger import PassengerEvent
from dispatch_replay.domain.entities.trip import Trip
from dispatch_replay.domain.mechanics.path_sampler import trail
from dispatch_replay.domain.passengers import (
    PassengerInfo,
    VisiblePassenger,
    resolve_passenger_infos,
    visible_passengers,
)
from dispatch_replay.domain.phases import Arc, TripPhase, classify_trip
from dispatch_replay.policy.wait_colors import DEFAULT_TABLE, WaitColorTable

TRAIL_LENGTH = 0.5  # minutes of path kept behind each vehicle


@dataclass(frozen=True)
class VehiclePath:
    passenger_id: Any
    phase: TripPhase
    position: Coord
    trail: tuple[Coord, ...] = ()


@dataclass(frozen=True)
class Frame:
    t: float
    vehicle_paths: list[VehiclePath] = field(default_factory=list)
    visible_passengers: list[VisiblePassenger] = field(default_factory=list)
    destination_markers: list[Coord] = field(default_factory=list)
    dispatch_arcs: list[Arc] = field(default_factory=list)
    occupied_arcs: list[Arc] = field(default_factory=list)

    def counts(self) -> dict[str, int]:
        return {
            "vehicles": len(self.vehicle_paths),
            "passengers": len(self.visible_passengers),
            "destinations": len(self.destination_markers),
            "dispatch_arcs": len(self.dispatch_arcs),
            "occupied_arcs": len(self.occupied_arcs),
        }

    def to_dict(self) -> dict:
        """Plain lists of coordinate pairs, ready for a map layer."""
        return {
            "t": self.t,
            "vehicle_paths": [
                {
                    "passenger_id": v.passenger_id,
                    "phase": v.phase.value,
                    "position": list(v.position),
                    "path": [list(p) for p in v.trail],
                }
                for v in self.vehicle_paths
            ],
            "visible_passengers": [
                {"location": list(p.location), "wait": p.wait, "color": list(p.color)}
                for p in self.visible_passengers
            ],
            "destination_markers": [{"location": list(p)} for p in self.destination_markers],
            "dispatch_arcs": [
                {"source": list(a.source), "target": list(a.target)} for a in self.dispatch_arcs
            ],
            "occupied_arcs": [
                {"source": list(a.source), "target": list(a.target)} for a in self.occupied_arcs
            ],
        }


def assemble_frame(
    trips: Sequence[Trip],
    passengers: Iterable[PassengerEvent],
    infos: Iterable[PassengerInfo] | None,
    t: float,
    *,
    trail_length: float = TRAIL_LENGTH,
    colors: WaitColorTable = DEFAULT_TABLE,
) -> Frame:
    """Derive every render layer at one clock value; t may jump in either direction."""
    if infos is None:
        infos = resolve_passenger_infos(trips, passengers)

    vehicles, dispatch_arcs, occupied_arcs, destinations = [], [], [], []
    for trip in trips:
        state = classify_trip(trip, t)
        if not state.active or state.position is None:
            continue
        vehicles.append(
            VehiclePath(
                passenger_id=trip.passenger_id,
                phase=state.phase,
                position=state.position,
                trail=tuple(trail(trip.route, trip.timestamp, t, trail_length)),
            )
        )
        if state.phase is TripPhase.DISPATCHED:
            dispatch_arcs.append(state.arc)
        else:
            occupied_arcs.append(state.arc)
            destinations.append(state.destination)
    return Frame(
        t=t,
        vehicle_paths=vehicles,
        visible_passengers=visible_passengers(infos, t, colors=colors),
        destination_markers=destinations,
        dispatch_arcs=dispatch_arcs,
        occupied_arcs=occupied_arcs,
    )
