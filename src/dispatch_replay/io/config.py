# src/dispatch_replay/io/config.py
from pathlib import Path

from dispatch_replay.config.models import ScenarioModel


def load_config(path: str | Path | None) -> ScenarioModel:
    # no file means all defaults
    if path is None:
        return ScenarioModel()
    return ScenarioModel.model_validate_json(Path(path).read_text(encoding="utf-8"))
