"""Tests for configuration loading."""

import json

import pytest

import config as app_config_module
from cue_models import EngineConfig


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    for name in list(app_config_module.os.environ):
        if name.startswith("CUE_SCHEDULER_"):
            monkeypatch.delenv(name, raising=False)
    # Keep the cwd candidate out of the search.
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(app_config_module, "_default_config_candidates", lambda: [tmp_path / "absent.json"])


def test_defaults_match_engine_defaults():
    config, resolved_path = app_config_module.load_config()
    assert resolved_path is None
    assert app_config_module.to_engine_config(config) == EngineConfig()


def test_file_values(tmp_path):
    config_path = tmp_path / "cue_scheduler_config.json"
    config_path.write_text(
        json.dumps({"sound": {"crowd_enabled": False, "master_volume": 0.5}, "timeline": {"frames_per_event": 45}}),
        encoding="utf-8",
    )
    config, resolved_path = app_config_module.load_config(config_path)
    engine_config = app_config_module.to_engine_config(config)

    assert resolved_path == config_path
    assert engine_config.crowd_enabled is False
    assert engine_config.master_intensity == 0.5
    assert engine_config.frames_per_event == 45
    assert engine_config.lead_in_frames == 90


def test_environment_overrides(tmp_path, monkeypatch):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"sound": {"enabled": True}}), encoding="utf-8")
    monkeypatch.setenv("CUE_SCHEDULER_CONFIG_PATH", str(config_path))
    monkeypatch.setenv("CUE_SCHEDULER_ENABLED", "off")
    monkeypatch.setenv("CUE_SCHEDULER_STAGGER_FRAMES", "8")
    monkeypatch.setenv("CUE_SCHEDULER_MASTER_VOLUME", "0.25")
    monkeypatch.setenv("CUE_SCHEDULER_CATALOG_PATH", " cues.json ")

    config, resolved_path = app_config_module.load_config()
    engine_config = app_config_module.to_engine_config(config)

    assert resolved_path == config_path
    assert engine_config.enabled is False
    assert engine_config.stagger_frames == 8
    assert engine_config.master_intensity == 0.25
    assert config.catalog_path == "cues.json"


def test_out_of_range_values_rejected(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"sound": {"master_volume": 1.5}}), encoding="utf-8")
    with pytest.raises(ValueError):
        app_config_module.load_config(config_path)

    config_path.write_text(json.dumps({"timeline": {"overlap_window_frames": -1}}), encoding="utf-8")
    with pytest.raises(ValueError):
        app_config_module.load_config(config_path)


def test_non_object_root_rejected(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        app_config_module.load_config(config_path)


def test_explicit_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        app_config_module.load_config(tmp_path / "nope.json")


def test_media_settings():
    config = app_config_module.AppConfig.model_validate({"media": {"use_transitions": False}})
    settings = app_config_module.to_media_settings(config)
    assert settings.use_transitions is False
    assert settings.enabled is True


def test_to_json_reloads_to_same_config(tmp_path):
    config = app_config_module.AppConfig.model_validate(
        {"sound": {"master_volume": 0.25}, "catalog_path": "  cues.json  "}
    )
    dumped = json.loads(app_config_module.to_json(config))
    assert dumped["catalog_path"] == "cues.json"
    assert dumped["sound"]["master_volume"] == 0.25

    config_path = tmp_path / "round_trip.json"
    config_path.write_text(app_config_module.to_json(config), encoding="utf-8")
    reloaded, _ = app_config_module.load_config(config_path)
    assert reloaded == config
