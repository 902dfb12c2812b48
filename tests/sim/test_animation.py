# tests/sim/test_animation.py
import asyncio

import pytest

from dispatch_replay.sim.animation import AnimationLoop
from dispatch_replay.sim.clock import SimulationClock, TimeWindow
from dispatch_replay.sim.hooks import NoopHooks


class LoopHooks(NoopHooks):
    def __init__(self):
        self.events = []

    def loop_start(self, *, fps):
        self.events.append(("start", fps))

    def loop_stop(self, *, ticks):
        self.events.append(("stop", ticks))


def _clock() -> SimulationClock:
    return SimulationClock(TimeWindow(420.0, 480.0), increment=1.0, speed=1.0)


def test_run_fixed_number_of_frames():
    seen = []
    hooks = LoopHooks()
    loop = AnimationLoop(_clock(), seen.append, fps=1000, hooks=hooks)
    assert asyncio.run(loop.run(frames=3)) == 3
    assert seen == [421.0, 422.0, 423.0]
    assert hooks.events == [("start", 1000), ("stop", 3)]


def test_seek_during_yield_is_what_the_frame_sees():
    clock = _clock()
    seen = []
    loop = AnimationLoop(clock, seen.append, fps=1000)

    async def seeker():
        clock.seek(450.0)

    async def main():
        runner = asyncio.create_task(loop.run(frames=1))
        other = asyncio.create_task(seeker())
        await asyncio.gather(runner, other)

    asyncio.run(main())
    assert seen == [450.0]
    assert clock.tick() == 451.0


def test_stop_cancels_pending_tick_without_leaking():
    seen = []
    loop = AnimationLoop(_clock(), seen.append, fps=500)

    async def main():
        token = loop.start()
        assert loop.start() is token  # already running
        await asyncio.sleep(0.03)
        loop.stop(token)
        await asyncio.gather(token.task, return_exceptions=True)
        count = len(seen)
        await asyncio.sleep(0.02)
        return token, count

    token, count = asyncio.run(main())
    assert count > 0
    assert len(seen) == count
    assert token.done and token.task.cancelled()
    assert not loop.running


def test_restart_right_after_token_cancel_gets_a_fresh_run():
    seen = []
    loop = AnimationLoop(_clock(), seen.append, fps=500)

    async def main():
        first = loop.start()
        await asyncio.sleep(0.02)
        first.cancel()
        assert not first.active
        assert not loop.running
        second = loop.start()
        before = len(seen)
        await asyncio.sleep(0.02)
        after = len(seen)
        loop.stop(second)
        await asyncio.gather(first.task, second.task, return_exceptions=True)
        return first, second, before, after

    first, second, before, after = asyncio.run(main())
    assert second is not first
    assert first.task.cancelled()
    assert after > before


def test_start_needs_a_running_event_loop():
    loop = AnimationLoop(_clock(), lambda t: None)
    with pytest.raises(RuntimeError):
        loop.start()


def test_fps_must_be_positive():
    with pytest.raises(ValueError):
        AnimationLoop(_clock(), lambda t: None, fps=0)
