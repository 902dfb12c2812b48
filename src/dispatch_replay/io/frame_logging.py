# io/frame_logging.py
import json
import logging
import sys

from dispatch_replay.io.recorder import Recorder
from dispatch_replay.sim.clock import format_clock
from dispatch_replay.sim.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def _default_json_logger(name="dispatch_replay", level="INFO", stream=None):
    # one JSON handler per logger, pointed at the requested stream (stdout by default)
    stream = stream or sys.stdout
    logger = logging.getLogger(name)
    for old in [h for h in logger.handlers if isinstance(h.formatter, _JsonFormatter)]:
        if old.stream is stream:
            break
        logger.removeHandler(old)
    else:
        h = logging.StreamHandler(stream)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class FrameLogging(NoopHooks):
    """
    Structured logs for dataset loads, clock control and assembled frames.
    Frames themselves go to the recorder; only their counts are logged.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
        stream=None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level, stream=stream)
        self._frames = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        if "t" in extra and extra["t"] is not None:
            payload["clock"] = format_clock(extra["t"])
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # dataset

    def dataset_loaded(self, *, trips, passengers, invalid_trips, resolution, window):
        self._emit(
            "INFO",
            "dataset_loaded",
            trips=trips,
            passengers=passengers,
            invalid_trips=invalid_trips,
            pickup_sources=resolution,
            window=[window.min, window.max],
        )
        if invalid_trips:
            self._emit("WARNING", "trips_excluded", count=invalid_trips)

    # clock

    def tick(self, *, t, wrapped):
        if wrapped:
            self._emit("INFO", "clock_wrapped", t=t)

    def seek(self, *, t, requested):
        self._emit("INFO", "seek", t=t, requested=requested, clamped=t != requested)

    def loop_start(self, *, fps):
        self._emit("INFO", "loop_start", fps=fps)

    def loop_stop(self, *, ticks):
        self._emit("INFO", "loop_stop", ticks=ticks)

    # frames

    def frame(self, frame):
        self._frames += 1
        if self.debug and (self._frames % self.sample_every) == 0:
            self._emit("DEBUG", "frame", t=frame.t, seq=self._frames, **frame.counts())
        if self.recorder:
            self.recorder.emit(frame)
