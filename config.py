"""
config.py

Typed configuration loading and validation for the cue scheduler.

Design goals
- Load at most one UTF-8 JSON config file
- Validate with pydantic (defaults included), so the engine can assume validated input
- Support environment variable overrides
- No other I/O beyond reading the config file (no directory creation)

Config file location
- If CUE_SCHEDULER_CONFIG_PATH is set, that file is used.
- Otherwise these paths are searched in order and the first one that exists is used:
  1) ./cue_scheduler_config.json (current working directory)
  2) <user config dir>/CueScheduler/CueScheduler/cue_scheduler_config.json
  3) <user config dir>/CueScheduler/CueScheduler/config.json
- If none exists, the built-in defaults are used.

Example config file (cue_scheduler_config.json)
{
  "sound": {
    "enabled": true,
    "captures_enabled": true,
    "crowd_enabled": true,
    "atmosphere_enabled": true,
    "clock_enabled": false,
    "special_moves_enabled": true,
    "master_volume": 1.0
  },
  "timeline": {
    "frame_rate": 30,
    "lead_in_frames": 90,
    "frames_per_event": 30,
    "overlap_window_frames": 15,
    "stagger_frames": 5
  },
  "media": {
    "enabled": true,
    "prefer_user_uploads": true
  },
  "catalog_path": "catalogs/tournament_cues.json"
}
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError, field_validator

from cue_models import EngineConfig
from media_library import MediaLibrarySettings


class SoundSettings(BaseModel):
    enabled: bool = Field(default=True, description="Master switch. False yields an empty schedule.")
    captures_enabled: bool = Field(default=True, description="Piece capture cues.")
    crowd_enabled: bool = Field(default=True, description="Crowd reactions to evaluation swings.")
    atmosphere_enabled: bool = Field(default=True, description="Background hall ambience.")
    clock_enabled: bool = Field(default=False, description="Clock cues. Off by default, ticking is distracting.")
    special_moves_enabled: bool = Field(default=True, description="Check, checkmate, castle and promotion cues.")
    master_volume: float = Field(default=1.0, ge=0.0, le=1.0, description="Scales every cue's default intensity.")


class TimelineSettings(BaseModel):
    frame_rate: int = Field(default=30, ge=1, description="Frames per second of the rendered video.")
    lead_in_frames: int = Field(default=90, ge=0, description="Intro frames before the first move's cues.")
    frames_per_event: int = Field(default=30, ge=1, description="Frames allotted to each move.")
    overlap_window_frames: int = Field(default=15, ge=0, description="Suppression window in frames.")
    stagger_frames: int = Field(default=5, ge=0, description="Offset between cues of the same move.")


class MediaSettings(BaseModel):
    enabled: bool = Field(default=True, description="Master switch for b-roll selection.")
    use_venue_shots: bool = Field(default=True)
    use_player_media: bool = Field(default=True)
    use_atmosphere: bool = Field(default=True)
    use_transitions: bool = Field(default=True)
    prefer_user_uploads: bool = Field(default=True, description="Prefer tournament uploads over stock media.")


class AppConfig(BaseModel):
    sound: SoundSettings = Field(default_factory=SoundSettings)
    timeline: TimelineSettings = Field(default_factory=TimelineSettings)
    media: MediaSettings = Field(default_factory=MediaSettings)
    catalog_path: Optional[str] = Field(default=None, description="Optional JSON cue catalog. Stock cues if unset.")

    @field_validator("catalog_path")
    @classmethod
    def normalize_optional_path(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        trimmed = value.strip()
        return trimmed or None


def to_engine_config(config: AppConfig) -> EngineConfig:
    sound = config.sound
    timeline = config.timeline
    return EngineConfig(
        enabled=bool(sound.enabled),
        captures_enabled=bool(sound.captures_enabled),
        crowd_enabled=bool(sound.crowd_enabled),
        ambient_enabled=bool(sound.atmosphere_enabled),
        clock_enabled=bool(sound.clock_enabled),
        special_moves_enabled=bool(sound.special_moves_enabled),
        master_intensity=float(sound.master_volume),
        frame_rate=int(timeline.frame_rate),
        lead_in_frames=int(timeline.lead_in_frames),
        frames_per_event=int(timeline.frames_per_event),
        overlap_window_frames=int(timeline.overlap_window_frames),
        stagger_frames=int(timeline.stagger_frames),
    )


def to_media_settings(config: AppConfig) -> MediaLibrarySettings:
    media = config.media
    return MediaLibrarySettings(
        enabled=bool(media.enabled),
        use_venue_shots=bool(media.use_venue_shots),
        use_player_media=bool(media.use_player_media),
        use_atmosphere=bool(media.use_atmosphere),
        use_transitions=bool(media.use_transitions),
        prefer_user_uploads=bool(media.prefer_user_uploads),
    )


def _default_config_candidates() -> List[Path]:
    config_directory = Path(user_config_dir("CueScheduler", "CueScheduler"))
    return [
        Path.cwd() / "cue_scheduler_config.json",
        config_directory / "cue_scheduler_config.json",
        config_directory / "config.json",
    ]


def _resolve_config_path() -> Optional[Path]:
    explicit_path_text = os.environ.get("CUE_SCHEDULER_CONFIG_PATH", "").strip()
    if explicit_path_text:
        return Path(explicit_path_text)

    for candidate_path in _default_config_candidates():
        if candidate_path.exists():
            return candidate_path

    return None


def _read_json_file_utf8(config_path: Path) -> Dict[str, Any]:
    try:
        raw_text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except OSError as exception:
        raise OSError(f"Failed to read config file: {config_path}. Error: {exception}") from exception

    try:
        parsed = json.loads(raw_text)
    except json.JSONDecodeError as exception:
        raise ValueError(f"Config file is not valid JSON: {config_path}. Error: {exception}") from exception

    if not isinstance(parsed, dict):
        raise ValueError(f"Config file root must be a JSON object: {config_path}")

    return parsed


def _apply_environment_overrides(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Environment overrides are optional. The config file is the primary source of truth.

    Override variables:
    - CUE_SCHEDULER_ENABLED
    - CUE_SCHEDULER_CAPTURES_ENABLED
    - CUE_SCHEDULER_CROWD_ENABLED
    - CUE_SCHEDULER_ATMOSPHERE_ENABLED
    - CUE_SCHEDULER_CLOCK_ENABLED
    - CUE_SCHEDULER_SPECIAL_MOVES_ENABLED
    - CUE_SCHEDULER_MASTER_VOLUME
    - CUE_SCHEDULER_FRAME_RATE
    - CUE_SCHEDULER_LEAD_IN_FRAMES
    - CUE_SCHEDULER_FRAMES_PER_EVENT
    - CUE_SCHEDULER_OVERLAP_WINDOW_FRAMES
    - CUE_SCHEDULER_STAGGER_FRAMES
    - CUE_SCHEDULER_CATALOG_PATH
    """
    def ensure_nested(config_root: Dict[str, Any], section_name: str) -> Dict[str, Any]:
        section = config_root.get(section_name)
        if isinstance(section, dict):
            section = dict(section)
        else:
            section = {}
        config_root[section_name] = section
        return section

    updated_config = dict(config_dict)

    sound_section = ensure_nested(updated_config, "sound")
    timeline_section = ensure_nested(updated_config, "timeline")

    def override_string(env_name: str, target_dict: Dict[str, Any], key_name: str) -> None:
        value_text = os.environ.get(env_name, "")
        if value_text.strip():
            target_dict[key_name] = value_text.strip()

    def override_int(env_name: str, target_dict: Dict[str, Any], key_name: str) -> None:
        value_text = os.environ.get(env_name, "").strip()
        if not value_text:
            return
        try:
            target_dict[key_name] = int(value_text)
        except ValueError:
            return

    def override_float(env_name: str, target_dict: Dict[str, Any], key_name: str) -> None:
        value_text = os.environ.get(env_name, "").strip()
        if not value_text:
            return
        try:
            target_dict[key_name] = float(value_text)
        except ValueError:
            return

    def override_bool(env_name: str, target_dict: Dict[str, Any], key_name: str) -> None:
        value_text = os.environ.get(env_name, "").strip().lower()
        if not value_text:
            return
        truthy = {"1", "true", "yes", "on"}
        falsy = {"0", "false", "no", "off"}
        if value_text in truthy:
            target_dict[key_name] = True
        elif value_text in falsy:
            target_dict[key_name] = False

    override_bool("CUE_SCHEDULER_ENABLED", sound_section, "enabled")
    override_bool("CUE_SCHEDULER_CAPTURES_ENABLED", sound_section, "captures_enabled")
    override_bool("CUE_SCHEDULER_CROWD_ENABLED", sound_section, "crowd_enabled")
    override_bool("CUE_SCHEDULER_ATMOSPHERE_ENABLED", sound_section, "atmosphere_enabled")
    override_bool("CUE_SCHEDULER_CLOCK_ENABLED", sound_section, "clock_enabled")
    override_bool("CUE_SCHEDULER_SPECIAL_MOVES_ENABLED", sound_section, "special_moves_enabled")
    override_float("CUE_SCHEDULER_MASTER_VOLUME", sound_section, "master_volume")

    override_int("CUE_SCHEDULER_FRAME_RATE", timeline_section, "frame_rate")
    override_int("CUE_SCHEDULER_LEAD_IN_FRAMES", timeline_section, "lead_in_frames")
    override_int("CUE_SCHEDULER_FRAMES_PER_EVENT", timeline_section, "frames_per_event")
    override_int("CUE_SCHEDULER_OVERLAP_WINDOW_FRAMES", timeline_section, "overlap_window_frames")
    override_int("CUE_SCHEDULER_STAGGER_FRAMES", timeline_section, "stagger_frames")

    override_string("CUE_SCHEDULER_CATALOG_PATH", updated_config, "catalog_path")

    return updated_config


def load_config(config_path: Optional[Path] = None) -> Tuple[AppConfig, Optional[Path]]:
    resolved_path = config_path if config_path is not None else _resolve_config_path()
    json_dict: Dict[str, Any] = {}
    if resolved_path is not None:
        json_dict = _read_json_file_utf8(Path(resolved_path))
    json_dict = _apply_environment_overrides(json_dict)

    source_text = str(resolved_path) if resolved_path is not None else "(defaults)"
    try:
        config = AppConfig.model_validate(json_dict)
    except ValidationError as exception:
        raise ValueError(f"Config validation failed for {source_text}:\n{exception}") from exception

    return config, resolved_path


def to_json(config: AppConfig) -> str:
    return json.dumps(config.model_dump(), ensure_ascii=False, indent=2)
