from math import isfinite
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from dispatch_replay.policy.wait_colors import DEFAULT_WAIT_COLORS, WaitColorTable
from dispatch_replay.sim.clock import DEFAULT_SPEED, MIN_WINDOW, SIM_START_MIN, TICK_INCREMENT


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = 1


class ReplayModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    sim_start_min: float = SIM_START_MIN  # minutes-of-day
    min_window_min: float = MIN_WINDOW
    increment_min: float = TICK_INCREMENT  # per tick, before speed scaling
    speed: float = DEFAULT_SPEED
    fps: float = 60.0

    @field_validator("min_window_min", "increment_min", "speed", "fps")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if not isfinite(v) or v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator("sim_start_min")
    @classmethod
    def _in_day(cls, v: float) -> float:
        if not isfinite(v) or v < 0:
            raise ValueError("sim_start_min must be a non-negative minute of day")
        return v


class TrailModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    length_min: float = Field(default=0.5, ge=0)


class PickupMatchModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    # 0.0 keeps exact coordinate equality when joining a passenger to its route point
    tolerance: float = Field(default=0.0, ge=0)


class WaitColorsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    rows: list[tuple[float, tuple[int, int, int]]] = Field(
        default_factory=lambda: [tuple(r) for r in DEFAULT_WAIT_COLORS]
    )

    @field_validator("rows")
    @classmethod
    def _ascending(cls, v):
        if not v:
            raise ValueError("wait color table needs at least one row")
        bounds = [b for b, _ in v]
        if any(b2 <= b1 for b1, b2 in zip(bounds, bounds[1:])):
            raise ValueError("wait color bounds must be strictly ascending")
        if any(c < 0 or c > 255 for _, rgb in v for c in rgb):
            raise ValueError("wait colors must be 0..255 RGB")
        return v

    def table(self) -> WaitColorTable:
        return WaitColorTable.from_rows(self.rows)


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "replay"
    run_id: str = "local"
    replay: ReplayModel = ReplayModel()
    trail: TrailModel = TrailModel()
    pickup_match: PickupMatchModel = PickupMatchModel()
    wait_colors: WaitColorsModel = Field(default_factory=WaitColorsModel)
    log: LogModel = LogModel()
