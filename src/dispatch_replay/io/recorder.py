# io/recorder.py
import json
import logging
import sys
from typing import Protocol

log = logging.getLogger("dispatch_replay.recorder")


class Sink(Protocol):
    def write(self, frame) -> None: ...


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp

    def write(self, frame) -> None:
        self.fp.write(json.dumps(frame.to_dict()) + "\n")


class MemorySink:
    def __init__(self):
        self.frames: list = []

    def write(self, frame) -> None:
        self.frames.append(frame)


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)

    def emit(self, frame):
        for s in self.sinks:
            try:
                s.write(frame)
            except Exception:
                # a broken sink must not stop playback
                log.exception("sink %s failed at t=%s", type(s).__name__, getattr(frame, "t", None))
