# policy/wait_colors.py
from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass

from dispatch_replay.domain.entities.geography import is_number

RGB = tuple[int, int, int]

# (upper bound exclusive in minutes, color); last row catches everything above
DEFAULT_WAIT_COLORS: tuple[tuple[float, RGB], ...] = (
    (15.0, (255, 255, 255)),
    (30.0, (255, 230, 230)),
    (45.0, (255, 190, 190)),
    (60.0, (255, 140, 140)),
    (float("inf"), (200, 0, 0)),
)


@dataclass(frozen=True)
class WaitColorTable:
    rows: tuple[tuple[float, RGB], ...] = DEFAULT_WAIT_COLORS

    def __post_init__(self):
        bounds = [b for b, _ in self.rows]
        if not bounds:
            raise ValueError("wait color table needs at least one row")
        if any(b2 <= b1 for b1, b2 in zip(bounds, bounds[1:])):
            raise ValueError("wait color bounds must be strictly ascending")

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence]) -> "WaitColorTable":
        return cls(tuple((float(b), tuple(int(c) for c in rgb)) for b, rgb in rows))

    @property
    def bounds(self) -> list[float]:
        return [b for b, _ in self.rows]

    def bucket(self, wait: float | None) -> int:
        """1-based bucket index; negative or missing waits count as 0."""
        w = max(0.0, float(wait)) if is_number(wait) else 0.0
        return min(bisect_right(self.bounds, w), len(self.rows) - 1) + 1

    def color(self, wait: float | None) -> RGB:
        return self.rows[self.bucket(wait) - 1][1]


DEFAULT_TABLE = WaitColorTable()


def wait_bucket(wait: float | None) -> int:
    return DEFAULT_TABLE.bucket(wait)


def wait_to_color(wait: float | None) -> RGB:
    return DEFAULT_TABLE.color(wait)
