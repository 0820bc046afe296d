# -*- coding: utf-8 -*-
########################
# cue_models.py
########################
# Purpose:
# - Core data models for the cue scheduling pipeline.
# - Defines game events, catalog entries, cue intents, scheduled cues and engine configuration.
#
# Design notes:
# - Keep these models stable. Prefer extending with new optional fields rather than breaking changes.
# - All models are frozen dataclasses. Corrections are made by building new values.
# - CueCategory is a closed set. Adding a member requires a matching rank in timeline_placer.
#
########################
# Interfaces:
# Public enums:
# - class CueCategory(enum.Enum): SPECIAL_MOVE | CROWD_REACTION | PIECE_CAPTURE | CLOCK | AMBIENT
#
# Public dataclasses:
# - GameEvent(move: str, position: str, evaluation: Optional[float], previous_evaluation: Optional[float],
#             captured_piece: Optional[str], is_check: bool, is_checkmate: bool, is_castle: bool,
#             is_promotion: bool, sequence_index: int)
# - CueCatalogEntry(cue_id: str, category: CueCategory, default_intensity: float, media_path: str,
#                   description: str, capture_tier: Optional[int])
# - CueIntent(entry: CueCatalogEntry, intensity: float)
# - ScheduledCue(intent: CueIntent, start_frame: int, priority: int)
# - EngineConfig(enabled, captures_enabled, crowd_enabled, ambient_enabled, clock_enabled,
#                special_moves_enabled, master_intensity, frame_rate, lead_in_frames,
#                frames_per_event, overlap_window_frames, stagger_frames)
#
# Inputs/Outputs:
# - These types are exchanged between EventClassifier, TimelinePlacer, PriorityResolver,
#   ScheduleBuilder and the rendering side (ScheduleView, schedule_io).
#
########################

from __future__ import annotations

from dataclasses import dataclass
import enum
from typing import Optional


class CueCategory(enum.Enum):
    SPECIAL_MOVE = "special_moves"
    CROWD_REACTION = "crowd_reaction"
    PIECE_CAPTURE = "piece_capture"
    CLOCK = "clock"
    AMBIENT = "atmosphere"


@dataclass(frozen=True)
class GameEvent:
    move: str
    position: str
    sequence_index: int
    evaluation: Optional[float] = None
    previous_evaluation: Optional[float] = None
    captured_piece: Optional[str] = None
    is_check: bool = False
    is_checkmate: bool = False
    is_castle: bool = False
    is_promotion: bool = False


@dataclass(frozen=True)
class CueCatalogEntry:
    cue_id: str
    category: CueCategory
    default_intensity: float
    media_path: str
    description: str = ""
    capture_tier: Optional[int] = None


@dataclass(frozen=True)
class CueIntent:
    entry: CueCatalogEntry
    intensity: float


@dataclass(frozen=True)
class ScheduledCue:
    intent: CueIntent
    start_frame: int
    priority: int

    @property
    def cue_id(self) -> str:
        return self.intent.entry.cue_id

    @property
    def category(self) -> CueCategory:
        return self.intent.entry.category

    @property
    def intensity(self) -> float:
        return float(self.intent.intensity)

    @property
    def media_path(self) -> str:
        return self.intent.entry.media_path


@dataclass(frozen=True)
class EngineConfig:
    enabled: bool = True
    captures_enabled: bool = True
    crowd_enabled: bool = True
    ambient_enabled: bool = True
    # Off by default, ticking tends to be distracting.
    clock_enabled: bool = False
    special_moves_enabled: bool = True
    master_intensity: float = 1.0
    frame_rate: int = 30
    lead_in_frames: int = 90
    frames_per_event: int = 30
    overlap_window_frames: int = 15
    stagger_frames: int = 5
