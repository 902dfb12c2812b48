# main.py
import argparse
import asyncio
import sys

from dispatch_replay.app.build import build
from dispatch_replay.io.config import load_config
from dispatch_replay.io.datasets import load_records
from dispatch_replay.io.recorder import JsonlSink, Recorder


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Write taxi-dispatch replay frames as JSON lines.")
    ap.add_argument("--trips", required=True, help="trips.json")
    ap.add_argument("--passengers", help="passengers.json (optional)")
    ap.add_argument("--config", help="scenario config (JSON)")
    group = ap.add_mutually_exclusive_group(required=True)
    group.add_argument("--at", type=float, nargs="+", help="clock values in minutes-of-day")
    group.add_argument("--frames", type=int, help="number of animation ticks to run")
    return ap.parse_args(argv)


def run(argv=None) -> int:
    args = parse_args(argv)
    cfg = load_config(args.config)
    app = build(
        cfg,
        load_records(args.trips),
        load_records(args.passengers, required=False),
        recorder=Recorder(JsonlSink(sys.stdout)),
        log_stream=sys.stderr,  # stdout carries frames only
    )

    if args.at:
        for t in args.at:
            app.frame(app.seek(t))
        return 0

    asyncio.run(app.animation().run(frames=args.frames))
    return 0


if __name__ == "__main__":
    sys.exit(run())
