# src/kyra_rides/io/config.py
import json
from pathlib import Path

from kyra_rides.config.models import AppModel


def load_config(path: str | Path | None = None) -> AppModel:
    """Read a JSON config file; no path means all defaults."""
    if path is None:
        return AppModel()
    with open(path, encoding="utf-8") as f:
        return AppModel.model_validate(json.load(f))
