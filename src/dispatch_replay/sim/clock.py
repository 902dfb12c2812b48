# sim/clock.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from math import floor

from dispatch_replay.domain.entities.geography import is_number
from dispatch_replay.sim.hooks import NoopHooks, ReplayHooks

# simulation time is minutes-of-day
HOUR = 60.0

SIM_START_MIN = 7 * HOUR  # calls start at 07:00
MIN_WINDOW = 1 * HOUR
TICK_INCREMENT = 0.01
DEFAULT_SPEED = 0.5


def hours(x: float) -> float:
    return x * HOUR


def display_time(t: float) -> tuple[str, str]:
    """("HH", "MM") for a minutes-of-day clock value."""
    hour = int(floor(t / HOUR)) % 24
    minute = int(floor(t + 0.5)) % 60  # half-up, not banker's rounding
    return f"{hour:02d}", f"{minute:02d}"


def format_clock(t: float) -> str:
    hh, mm = display_time(t)
    return f"{hh} : {mm}"


@dataclass(frozen=True)
class TimeWindow:
    min: float
    max: float

    def clamp(self, t: float) -> float:
        return max(self.min, min(self.max, t))

    def __contains__(self, t: float) -> bool:
        return self.min <= t <= self.max


class SimulationClock:
    """Speed-scaled playhead that loops over a TimeWindow.

    ``tick`` and ``seek`` both mutate the playhead under one lock, so a seek can
    never be overwritten by an increment computed from the value before it.
    """

    def __init__(
        self,
        window: TimeWindow | None = None,
        *,
        increment: float = TICK_INCREMENT,
        speed: float = DEFAULT_SPEED,
        hooks: ReplayHooks | None = None,
    ):
        if increment <= 0:
            raise ValueError(f"increment must be > 0, got {increment}")
        if speed <= 0:
            raise ValueError(f"speed must be > 0, got {speed}")
        self._window = window or TimeWindow(SIM_START_MIN, SIM_START_MIN + MIN_WINDOW)
        self._increment = increment
        self._speed = speed
        self._t = self._window.min
        self._lock = threading.Lock()
        self._hooks = hooks or NoopHooks()

    @property
    def now(self) -> float:
        with self._lock:
            return self._t

    @property
    def window(self) -> TimeWindow:
        return self._window

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def step(self) -> float:
        return self._increment * self._speed

    def tick(self) -> float:
        with self._lock:
            nxt = self._t + self.step
            wrapped = nxt > self._window.max
            self._t = self._window.min if wrapped else nxt
            t = self._t
        self._hooks.tick(t=t, wrapped=wrapped)
        return t

    def seek(self, t: float) -> float:
        if not is_number(t):
            raise ValueError(f"cannot seek to {t!r}")
        with self._lock:
            self._t = self._window.clamp(float(t))
            now = self._t
        self._hooks.seek(t=now, requested=t)
        return now

    def reset(self) -> float:
        with self._lock:
            self._t = self._window.min
            return self._t

    def set_speed(self, speed: float) -> None:
        if speed <= 0:
            raise ValueError(f"speed must be > 0, got {speed}")
        with self._lock:
            self._speed = speed

    def set_window(self, window: TimeWindow) -> None:
        with self._lock:
            self._window = window
            self._t = window.clamp(self._t)
