# io/datasets.py
import json
import logging
from pathlib import Path

log = logging.getLogger("dispatch_replay.datasets")


def load_records(path: str | Path | None, *, required: bool = True) -> list:
    """JSON array of records. An optional file that is missing loads as []."""
    if path is None:
        return []
    p = Path(path)
    if not p.exists() and not required:
        log.warning("optional dataset %s not found; using empty list", p)
        return []
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{p}: expected a JSON array of records, got {type(data).__name__}")
    return data
