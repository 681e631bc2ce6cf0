"""Unit tests for puppycare.config"""

from pathlib import Path

import pytest

from puppycare.config import DEFAULT_CONFIG, load_config, merge_config
from puppycare.engine import PetEngine

SAMPLE = Path(__file__).resolve().parents[2] / "config.yaml"


def test_defaults_without_path():
    cfg = load_config()
    assert cfg == DEFAULT_CONFIG
    cfg["needs"]["hunger"] = 1
    assert DEFAULT_CONFIG["needs"]["hunger"] == 50.0


def test_file_overrides_only_given_keys(tmp_path):
    path = tmp_path / "pup.yaml"
    path.write_text("needs:\n  decay_per_minute: 0.5\nbehavior:\n  tick_s: 0.1\n")
    cfg = load_config(str(path))
    assert cfg["needs"]["decay_per_minute"] == 0.5
    assert cfg["needs"]["feed_amount"] == 30.0
    assert cfg["behavior"]["tick_s"] == 0.1


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path)) == DEFAULT_CONFIG


def test_non_mapping_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_merge_is_recursive():
    base = {"a": {"x": 1, "y": 2}, "b": 3}
    merge_config(base, {"a": {"y": 5}, "c": 4})
    assert base == {"a": {"x": 1, "y": 5}, "b": 3, "c": 4}


def test_sample_config_builds_an_engine():
    cfg = load_config(str(SAMPLE))
    engine = PetEngine(config=cfg)
    assert engine.machine.tick_s == 0.3
    assert engine.needs.hunger == 50.0
