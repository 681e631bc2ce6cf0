"""
puppycare.config
================
YAML configuration. Each top-level section is handed as keyword
arguments to the matching subsystem, which ignores keys it does not use.
"""

import copy
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG = {
    "needs": {
        "hunger": 50.0,
        "happiness": 50.0,
        "feed_amount": 30.0,
        "play_amount": 15.0,
        "pet_amount": 5.0,
        "decay_per_minute": 1.0,
        "full_threshold": 90.0,
    },
    "waste": {
        "rate_per_hour": 1.0,
        "max_waste": 10,
        "spawn_chance_per_feed": 0.0,
    },
    "behavior": {
        "tick_s": 0.3,
        "eating_s": 6.0,
        "playing_s": 6.0,
        "petting_s": 3.0,
        "mood_s": 3.0,
        "idle_s": 3.0,
        "walk_chance": 0.6,
        "walk_stop_chance": 1 / 31,
        "turn_chance": 1 / 40,
        "stage_width": 390.0,
        "edge_margin": 80.0,
        "walk_step": 5.0,
        "sleep_at_night": True,
    },
    "daycycle": {
        "day_start_hour": 6,
        "night_start_hour": 18,
        "check_interval_s": 60.0,
    },
    "conversation": {
        "bubble_s": 5.0,
        "offer_count": 2,
        "table": None,
    },
    "engine": {
        "max_catchup_s": 4 * 3600,
        "seed": None,
    },
    "logging": {
        "level": "INFO",
    },
}


def merge_config(base: dict, override: dict) -> dict:
    """Recursively overlay override onto base, in place."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_config(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: Optional[str] = None) -> dict:
    """Defaults, overlaid with the YAML file at path when given."""
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    if path is None:
        return cfg
    data = yaml.safe_load(Path(path).read_text())
    if data is None:
        return cfg
    if not isinstance(data, dict):
        raise ValueError(f"config {path} must be a mapping, got {type(data).__name__}")
    return merge_config(cfg, data)
