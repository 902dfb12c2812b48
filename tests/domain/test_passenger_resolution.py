# tests/domain/test_passenger_resolution.py
import pytest

from dispatch_replay.domain.entities.passenger import PassengerEvent
from dispatch_replay.domain.entities.trip import Trip
from dispatch_replay.domain.passengers import (
    PickupSource,
    index_trips_by_passenger,
    resolution_summary,
    resolve_passenger_infos,
    visible_passengers,
)

PICKUP = [127.1, 37.4]


def _trip(pid, ts=(90, 130, 150), route=([127.0, 37.3], PICKUP, [127.2, 37.5])):
    return Trip.from_raw({"passenger_id": pid, "route": list(route), "timestamp": list(ts)})


def _passenger(pid=1, **raw):
    return PassengerEvent.from_raw({"passenger_id": pid, "timestamp": [100], **raw})


def test_pickup_time_from_matching_route_point():
    (info,) = resolve_passenger_infos([_trip(1)], [_passenger(loc=[PICKUP])])
    assert info.source is PickupSource.ROUTE_MATCH
    assert (info.call, info.pickup_time) == (100.0, 130.0)
    assert info.pickup_loc == (127.1, 37.4)


def test_visible_window_is_inclusive_with_constant_wait():
    infos = resolve_passenger_infos([_trip(1)], [_passenger(loc=[PICKUP])])
    for t in (100.0, 115.0, 130.0):
        (vp,) = visible_passengers(infos, t)
        assert vp.wait == 30.0
        assert vp.location == (127.1, 37.4)
        assert vp.bucket == 3
    assert visible_passengers(infos, 99.0) == []
    assert visible_passengers(infos, 131.0) == []


def test_wait_min_fallback_when_no_route_point_matches():
    (info,) = resolve_passenger_infos(
        [_trip(1)], [_passenger(location=[0.0, 0.0], wait_min=12)]
    )
    assert info.source is PickupSource.WAIT_MIN
    assert info.pickup_time == 112.0


def test_call_fallback_means_zero_wait():
    (info,) = resolve_passenger_infos([], [_passenger(location=[1.0, 2.0])])
    assert info.source is PickupSource.CALL
    assert info.pickup_time == info.call == 100.0
    (vp,) = visible_passengers([info], 100.0)
    assert vp.wait == 0.0
    assert visible_passengers([info], 100.5) == []


def test_missing_call_time_is_never_visible():
    p = PassengerEvent.from_raw({"passenger_id": 1, "location": [1.0, 2.0], "wait_min": 5})
    (info,) = resolve_passenger_infos([], [p])
    assert info.source is PickupSource.UNRESOLVED
    assert visible_passengers([info], 100.0) == []


def test_missing_pickup_location_resolves_but_stays_hidden():
    (info,) = resolve_passenger_infos([_trip(1)], [_passenger(wait_min=10)])
    assert info.pickup_time == 110.0
    assert visible_passengers([info], 105.0) == []


def test_first_trip_wins_for_duplicate_ids():
    first, second = _trip(1, ts=(90, 130, 150)), _trip(1, ts=(95, 140, 160))
    assert index_trips_by_passenger([first, second])[1] is first
    (info,) = resolve_passenger_infos([first, second], [_passenger(loc=[PICKUP])])
    assert info.pickup_time == 130.0


def test_trips_without_id_are_not_indexed():
    assert index_trips_by_passenger([_trip(None), _trip(2)]).keys() == {2}


def test_matched_point_with_bad_timestamp_falls_back():
    trip = _trip(1, ts=(90, "n/a", 150))
    (info,) = resolve_passenger_infos([trip], [_passenger(loc=[PICKUP], wait_min=20)])
    assert info.source is PickupSource.WAIT_MIN
    assert info.pickup_time == 120.0


def test_exact_match_by_default_tolerance_is_opt_in():
    near = [127.1000001, 37.4]
    passengers = [_passenger(loc=[near], wait_min=5)]
    (strict,) = resolve_passenger_infos([_trip(1)], passengers)
    assert strict.source is PickupSource.WAIT_MIN
    (loose,) = resolve_passenger_infos([_trip(1)], passengers, tolerance=1e-5)
    assert loose.source is PickupSource.ROUTE_MATCH
    assert loose.pickup_time == 130.0


def test_resolution_summary_counts_every_source():
    infos = resolve_passenger_infos(
        [_trip(1)],
        [_passenger(1, loc=[PICKUP]), _passenger(2, wait_min=3), _passenger(3)],
    )
    assert resolution_summary(infos) == {
        "route_match": 1,
        "wait_min": 1,
        "call": 1,
        "unresolved": 0,
    }


@pytest.mark.parametrize(
    "raw, expected",
    [
        ({"loc": [[1.0, 2.0]]}, (1.0, 2.0)),
        ({"loc": [1.0, 2.0]}, (1.0, 2.0)),
        ({"location": [3.0, 4.0]}, (3.0, 4.0)),
        ({"loc": [], "location": [3.0, 4.0]}, (3.0, 4.0)),
        ({"loc": "here"}, None),
        ({}, None),
    ],
)
def test_pickup_location_normalized_once(raw, expected):
    assert PassengerEvent.from_raw({"passenger_id": 1, **raw}).pickup_loc == expected
