# domain/mechanics/path_sampler.py
"""Position along a timestamped path.

Paths come straight from recorded data, so nothing here raises: clean input is
interpolated with numpy, anything malformed (length mismatch, non-numeric or
unsorted timestamps, broken points) degrades to the nearest raw route point.
"""

from collections.abc import Sequence

import numpy as np

from dispatch_replay.domain.entities.geography import Coord, as_coord, is_number


def _as_arrays(route: Sequence, timestamps: Sequence) -> tuple[np.ndarray, np.ndarray] | None:
    try:
        pts = np.asarray(route, dtype=float)
        times = np.asarray(timestamps, dtype=float)
    except (TypeError, ValueError):
        return None
    if pts.ndim != 2 or pts.shape[1] < 2 or times.ndim != 1:
        return None
    if len(times) != len(pts) or len(times) < 2:
        return None
    if not (np.isfinite(pts).all() and np.isfinite(times).all()):
        return None
    if np.any(np.diff(times) < 0):
        return None
    return pts, times


def _segment(times: np.ndarray, t: float) -> int:
    # k with times[k] <= t < times[k+1]; last segment once t reaches the end
    if t >= times[-1]:
        return len(times) - 2
    k = int(np.searchsorted(times, t, side="right")) - 1
    return min(max(k, 0), len(times) - 2)


def _sample(pts: np.ndarray, times: np.ndarray, t: float) -> Coord:
    k = _segment(times, t)
    t0, t1 = times[k], times[k + 1]
    alpha = 0.0 if t1 <= t0 else min(1.0, max(0.0, (t - t0) / (t1 - t0)))
    a, b = pts[k], pts[k + 1]
    return tuple(float(v) for v in a + (b - a) * alpha)


def _nearest_raw(route: Sequence, timestamps: Sequence, t) -> Coord | None:
    n = min(len(route), len(timestamps))
    k = 0
    if n >= 2 and is_number(t):
        last = timestamps[n - 1]
        if is_number(last) and t >= last:
            k = n - 1
        else:
            for i in range(n - 1):
                a, b = timestamps[i], timestamps[i + 1]
                if is_number(a) and is_number(b) and a <= t < b:
                    k = i
                    break
    if k < len(route):
        p = as_coord(route[k])
        if p is not None:
            return p
    for p in route:
        c = as_coord(p)
        if c is not None:
            return c
    return None


def interpolate(route: Sequence, timestamps: Sequence, t: float) -> Coord | None:
    """Interpolated position at time t; None only when the route has no usable point."""
    try:
        route = list(route or ())
        timestamps = list(timestamps or ())
    except TypeError:
        return None
    arrays = _as_arrays(route, timestamps) if is_number(t) else None
    if arrays is None:
        return _nearest_raw(route, timestamps, t)
    return _sample(*arrays, float(t))


def trail(route: Sequence, timestamps: Sequence, t: float, length: float) -> list[Coord]:
    """Polyline covered during [t - length, t], clipped to the path's own time span."""
    if not is_number(t) or not is_number(length) or length < 0:
        return []
    try:
        arrays = _as_arrays(list(route or ()), list(timestamps or ()))
    except TypeError:
        return []
    if arrays is None:
        return []
    pts, times = arrays
    start, end = max(t - length, times[0]), min(t, times[-1])
    if end < start:
        return []
    inner = [tuple(float(v) for v in pts[i]) for i in np.flatnonzero((times > start) & (times < end))]
    return [_sample(pts, times, start), *inner, _sample(pts, times, end)]
