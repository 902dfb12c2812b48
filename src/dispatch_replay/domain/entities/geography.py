# domain/entities/geography.py
from collections.abc import Sequence
from math import isfinite
from typing import Any

import numpy as np

# lon/lat pair (a third altitude axis is carried through untouched)
Coord = tuple[float, ...]


def is_number(x: Any) -> bool:
    if isinstance(x, bool):
        return False
    return isinstance(x, (int, float, np.integer, np.floating)) and isfinite(float(x))


def as_coord(p: Any) -> Coord | None:
    """Return p as a tuple of floats, or None if it is not a usable coordinate."""
    if isinstance(p, (str, bytes)) or not isinstance(p, (Sequence, np.ndarray)):
        return None
    if len(p) < 2 or not all(is_number(v) for v in p):
        return None
    return tuple(float(v) for v in p)


def coords_equal(a: Coord, b: Coord, tolerance: float = 0.0) -> bool:
    # lon and lat only; tolerance 0.0 is exact float equality
    return abs(a[0] - b[0]) <= tolerance and abs(a[1] - b[1]) <= tolerance
