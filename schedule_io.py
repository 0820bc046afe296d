# -*- coding: utf-8 -*-
########################
# schedule_io.py
########################
# Purpose:
# - Read analyzed game events from JSON and write finished schedules as JSON payloads.
#
# Design notes:
# - Event files are validated with pydantic. Missing optional fields are legitimate, not errors.
# - sequence_index defaults to the event's 1-based position in the file.
# - Payloads are plain dicts so the rendering side does not import engine types.
#
########################
# Interfaces:
# Public exceptions:
# - class EventFileError(Exception)
#
# Public dataclasses:
# - LoadedEvents(events: tuple[GameEvent, ...], evaluations: Optional[tuple[Optional[float], ...]])
#
# Public functions:
# - events_from_payload(payload: dict) -> LoadedEvents
# - load_events_json(events_path: pathlib.Path) -> LoadedEvents
# - schedule_to_payload(schedule: Sequence[ScheduledCue], config: EngineConfig) -> list[dict]
# - schedule_to_json(schedule: Sequence[ScheduledCue], config: EngineConfig) -> str
#
# Example event file
# {
#   "events": [
#     {"move": "Qxd8", "fen": "...", "captured_piece": "q"},
#     {"move": "Nf3", "fen": "...", "previous_evaluation": 250, "evaluation": 30},
#     {"move": "Qh7#", "fen": "...", "is_check": true, "is_checkmate": true}
#   ]
# }
#
########################

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

import timeline_placer
from cue_models import EngineConfig, GameEvent, ScheduledCue


class EventFileError(Exception):
    """Raised when an event file cannot be read, parsed or validated."""


class GameEventModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    move: str = ""
    position: str = Field(default="", alias="fen")
    sequence_index: Optional[int] = Field(default=None, ge=1)
    evaluation: Optional[float] = None
    previous_evaluation: Optional[float] = None
    captured_piece: Optional[str] = None
    is_check: bool = False
    is_checkmate: bool = False
    is_castle: bool = False
    is_promotion: bool = False


class EventFileModel(BaseModel):
    events: List[GameEventModel] = Field(default_factory=list)
    evaluations: Optional[List[Optional[float]]] = None

    @model_validator(mode="after")
    def check_evaluation_count(self) -> "EventFileModel":
        if self.evaluations is not None and len(self.evaluations) != len(self.events):
            raise ValueError(
                f"evaluations has {len(self.evaluations)} entries but there are {len(self.events)} events"
            )
        return self


@dataclass(frozen=True)
class LoadedEvents:
    events: Tuple[GameEvent, ...]
    evaluations: Optional[Tuple[Optional[float], ...]]


def events_from_payload(payload: Dict[str, Any]) -> LoadedEvents:
    try:
        file_model = EventFileModel.model_validate(payload)
    except ValidationError as exception:
        raise EventFileError(f"Event payload validation failed:\n{exception}") from exception

    events: List[GameEvent] = []
    for position_index, item in enumerate(file_model.events, start=1):
        captured_piece = (item.captured_piece or "").strip() or None
        events.append(
            GameEvent(
                move=item.move,
                position=item.position,
                sequence_index=int(item.sequence_index) if item.sequence_index is not None else position_index,
                evaluation=item.evaluation,
                previous_evaluation=item.previous_evaluation,
                captured_piece=captured_piece,
                is_check=bool(item.is_check),
                is_checkmate=bool(item.is_checkmate),
                is_castle=bool(item.is_castle),
                is_promotion=bool(item.is_promotion),
            )
        )

    evaluations = tuple(file_model.evaluations) if file_model.evaluations is not None else None
    return LoadedEvents(events=tuple(events), evaluations=evaluations)


def load_events_json(events_path: Path) -> LoadedEvents:
    events_path = Path(events_path)
    try:
        raw_text = events_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exception:
        raise EventFileError(f"Failed to read event file: {events_path}. Error: {exception}") from exception

    try:
        parsed = json.loads(raw_text)
    except json.JSONDecodeError as exception:
        raise EventFileError(f"Event file is not valid JSON: {events_path}. Error: {exception}") from exception

    # A bare list is accepted as the events array.
    if isinstance(parsed, list):
        parsed = {"events": parsed}
    if not isinstance(parsed, dict):
        raise EventFileError(f"Event file root must be a JSON object or array: {events_path}")

    return events_from_payload(parsed)


def schedule_to_payload(schedule: Sequence[ScheduledCue], config: EngineConfig) -> List[Dict[str, Any]]:
    payload: List[Dict[str, Any]] = []
    for cue in schedule:
        payload.append(
            {
                "cue_id": cue.cue_id,
                "category": cue.category.value,
                "media_path": cue.media_path,
                "intensity": round(float(cue.intensity), 6),
                "start_frame": int(cue.start_frame),
                "start_seconds": timeline_placer.frames_to_seconds(cue.start_frame, config),
                "priority": int(cue.priority),
            }
        )
    return payload


def schedule_to_json(schedule: Sequence[ScheduledCue], config: EngineConfig) -> str:
    return json.dumps(schedule_to_payload(schedule, config), ensure_ascii=False, indent=2)
