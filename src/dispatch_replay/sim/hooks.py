# sim/hooks.py
from typing import Protocol


class ReplayHooks(Protocol):
    def dataset_loaded(self, *, trips, passengers, invalid_trips, resolution, window): ...
    def tick(self, *, t, wrapped): ...
    def seek(self, *, t, requested): ...
    def frame(self, frame): ...
    def loop_start(self, *, fps): ...
    def loop_stop(self, *, ticks): ...


class NoopHooks:
    def dataset_loaded(self, **_):
        pass

    def tick(self, **_):
        pass

    def seek(self, **_):
        pass

    def frame(self, *_, **__):
        pass

    def loop_start(self, **_):
        pass

    def loop_stop(self, **_):
        pass
