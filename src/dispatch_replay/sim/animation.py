# sim/animation.py
import asyncio
from collections.abc import Callable
from typing import Any

from dispatch_replay.sim.clock import SimulationClock
from dispatch_replay.sim.hooks import NoopHooks, ReplayHooks

FrameCallback = Callable[[float], Any]


class CancelToken:
    """Handle for one running animation; cancelling it drops the pending tick."""

    def __init__(self, task: asyncio.Task):
        self._task = task

    @property
    def task(self) -> asyncio.Task:
        return self._task

    @property
    def done(self) -> bool:
        return self._task.done()

    @property
    def active(self) -> bool:
        # a cancel() that the event loop has not processed yet already ends the run
        return not self._task.done() and not self._task.cancelling()

    def cancel(self) -> None:
        if not self._task.done():
            self._task.cancel()


class AnimationLoop:
    """Drives a SimulationClock once per frame on the running asyncio loop.

    Each tick increments the clock, yields to the event loop, then hands a single
    snapshot of the clock to ``on_frame`` so every layer of the frame sees the
    same time.
    """

    def __init__(
        self,
        clock: SimulationClock,
        on_frame: FrameCallback,
        *,
        fps: float = 60.0,
        hooks: ReplayHooks | None = None,
    ):
        if fps <= 0:
            raise ValueError(f"fps must be > 0, got {fps}")
        self.clock = clock
        self.on_frame = on_frame
        self.fps = fps
        self._hooks = hooks or NoopHooks()
        self._token: CancelToken | None = None

    @property
    def running(self) -> bool:
        return self._token is not None and self._token.active

    def start(self) -> CancelToken:
        if self.running:
            return self._token
        loop = asyncio.get_running_loop()  # RuntimeError outside a running loop
        self._token = CancelToken(loop.create_task(self.run()))
        return self._token

    def stop(self, token: CancelToken | None = None) -> None:
        token = token or self._token
        if token is None:
            return
        token.cancel()
        if token is self._token:
            self._token = None

    async def run(self, frames: int | None = None) -> int:
        interval = 1.0 / self.fps
        ticks = 0
        self._hooks.loop_start(fps=self.fps)
        try:
            while frames is None or ticks < frames:
                if ticks:
                    await asyncio.sleep(interval)
                self.clock.tick()
                await asyncio.sleep(0)
                self.on_frame(self.clock.now)
                ticks += 1
        finally:
            self._hooks.loop_stop(ticks=ticks)
        return ticks
