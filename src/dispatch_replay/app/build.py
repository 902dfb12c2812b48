# dispatch_replay/app/build.py
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from dispatch_replay.app.frame import Frame, assemble_frame
from dispatch_replay.config.models import ScenarioModel
from dispatch_replay.domain.passengers import resolution_summary
from dispatch_replay.domain.state import ReplayDataset
from dispatch_replay.io.frame_logging import FrameLogging  # JSON logs
from dispatch_replay.io.recorder import Recorder
from dispatch_replay.policy.wait_colors import WaitColorTable
from dispatch_replay.services.time_range import derive_time_window
from dispatch_replay.sim.animation import AnimationLoop
from dispatch_replay.sim.clock import SimulationClock, TimeWindow, display_time
from dispatch_replay.sim.hooks import NoopHooks, ReplayHooks


@dataclass
class App:
    config: ScenarioModel
    dataset: ReplayDataset
    clock: SimulationClock
    colors: WaitColorTable
    hooks: ReplayHooks

    # ---- control surface for the UI ----

    def get_time_window(self) -> TimeWindow:
        return self.clock.window

    def seek(self, t: float) -> float:
        return self.clock.seek(t)

    def display_time(self) -> tuple[str, str]:
        return display_time(self.clock.now)

    # ---- data ----

    def load(self, trips: Iterable[Mapping] | None, passengers: Iterable[Mapping] | None) -> None:
        """Swap in new datasets: re-resolve passengers and re-derive the clock domain."""
        replay = self.config.replay
        self.dataset = ReplayDataset.from_raw(
            trips, passengers, tolerance=self.config.pickup_match.tolerance
        )
        window = derive_time_window(
            self.dataset.trips,
            domain_min=replay.sim_start_min,
            min_window=replay.min_window_min,
        )
        self.clock.set_window(window)
        self.hooks.dataset_loaded(
            trips=len(self.dataset.trips),
            passengers=len(self.dataset.passengers),
            invalid_trips=self.dataset.invalid_trips,
            resolution=resolution_summary(self.dataset.infos),
            window=window,
        )

    def frame(self, t: float | None = None) -> Frame:
        t = self.clock.now if t is None else t
        frame = assemble_frame(
            self.dataset.trips,
            self.dataset.passengers,
            self.dataset.infos,
            t,
            trail_length=self.config.trail.length_min,
            colors=self.colors,
        )
        self.hooks.frame(frame)
        return frame

    def animation(self) -> AnimationLoop:
        return AnimationLoop(self.clock, self.frame, fps=self.config.replay.fps, hooks=self.hooks)


def build(
    cfg: ScenarioModel | Mapping | None = None,
    trips: Iterable[Mapping] | None = None,
    passengers: Iterable[Mapping] | None = None,
    *,
    use_logging: bool = True,
    recorder: Recorder | None = None,
    log_stream=None,
) -> App:
    # 0) Validate config
    if cfg is None:
        model = ScenarioModel()
    else:
        model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Hooks (logging + frame recording)
    hooks = (
        FrameLogging(
            run_id=model.run_id,
            recorder=recorder,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
            stream=log_stream,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Clock; its window is fixed once the data is loaded
    clock = SimulationClock(
        TimeWindow(model.replay.sim_start_min, model.replay.sim_start_min + model.replay.min_window_min),
        increment=model.replay.increment_min,
        speed=model.replay.speed,
        hooks=hooks,
    )

    app = App(
        config=model,
        dataset=ReplayDataset(),
        clock=clock,
        colors=model.wait_colors.table(),
        hooks=hooks,
    )
    # 3) Data
    app.load(trips, passengers)
    return app
