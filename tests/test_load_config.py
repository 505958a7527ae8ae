"""Tests for configuration loading and merging."""

from pathlib import Path

import yaml

from doc_aggregator.compute_config_hash import compute_config_hash
from doc_aggregator.deep_merge import deep_merge
from doc_aggregator.load_config import DEFAULT_CONFIG, load_config


def test_deep_merge_scalars() -> None:
    """Verify scalar replacement in deep merge."""
    base = {"a": 1, "b": 2}
    update = {"b": 3, "c": 4}
    merged = deep_merge(base, update)
    assert merged == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_nested() -> None:
    """Verify recursive merging of dictionaries."""
    base = {"nested": {"x": 1, "y": 2}}
    update = {"nested": {"y": 3, "z": 4}}
    merged = deep_merge(base, update)
    assert merged == {"nested": {"x": 1, "y": 3, "z": 4}}


def test_deep_merge_arrays_replace() -> None:
    """Verify that arrays are replaced by default."""
    base = {"arr": [1, 2]}
    update = {"arr": [3, 4]}
    merged = deep_merge(base, update)
    assert merged == {"arr": [3, 4]}


def test_deep_merge_code_types_additive() -> None:
    """Verify that the code_types list is merged additively."""
    base = {"code_types": ["ext_define", "b"]}
    update = {"code_types": ["b", "a"]}
    merged = deep_merge(base, update)
    assert merged["code_types"] == ["a", "b", "ext_define"]


def test_compute_config_hash_stability() -> None:
    """Verify that config hash is stable regardless of key order."""
    config1 = {"b": 2, "a": 1, "nested": {"y": 2, "x": 1}}
    config2 = {"a": 1, "b": 2, "nested": {"x": 1, "y": 2}}
    assert compute_config_hash(config1) == compute_config_hash(config2)


def test_load_config_defaults() -> None:
    """Verify that default config is loaded when no path is provided."""
    config = load_config(None)
    assert config["global_class"]["name"] == "global"
    assert config["css_prefix"]["value"] == "x-"
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_load_config_missing_file(tmp_path: Path) -> None:
    """Verify that a missing config file falls back to defaults."""
    assert load_config(str(tmp_path / "absent.yml")) == DEFAULT_CONFIG


def test_load_config_with_file(tmp_path: Path) -> None:
    """Verify that user config correctly overrides defaults."""
    config_file = tmp_path / "config.yml"
    config_data = {
        "global_class": {"name": "window"},
        "event_options": {"code_types": ["sencha_define"]},
    }

    config_file.write_text(yaml.dump(config_data))

    loaded = load_config(str(config_file))
    assert loaded["global_class"]["name"] == "window"
    assert loaded["global_class"]["doc"] == "Global variables and functions."
    assert "ext_define" in loaded["event_options"]["code_types"]  # Default
    assert "sencha_define" in loaded["event_options"]["code_types"]  # Added
