# -*- coding: utf-8 -*-
########################
# schedule_view.py
########################
# Purpose:
# - Read-only playback queries over a finished cue schedule.
# - Answers "which cues are sounding at frame N" for the rendering side.
#
# Design notes:
# - Never mutates or reorders the schedule. The builder's order is kept in every result.
# - The engine makes no assumption about real cue length. Callers pass duration_frames.
#
########################
# Interfaces:
# Public constants:
# - DEFAULT_CUE_DURATION_FRAMES = 90
#
# Public dataclasses:
# - ActiveCue(scheduled_cue: ScheduledCue, offset_frames: int, offset_seconds: float)
#
# Public classes:
# - class ScheduleView
#   - __init__(schedule: Sequence[ScheduledCue], config: EngineConfig)
#   - schedule() -> tuple[ScheduledCue, ...]
#   - active_cues(frame: int, duration_frames: int = DEFAULT_CUE_DURATION_FRAMES) -> list[ActiveCue]
#   - cues_between(start_frame: int, end_frame: int) -> list[ScheduledCue]
#   - cues_in_category(category: CueCategory) -> list[ScheduledCue]
#   - last_start_frame() -> Optional[int]
#
# Inputs:
# - Ordered ScheduledCue tuple from schedule_builder.py.
#
# Outputs:
# - ActiveCue views with the offset into each cue's media.
#
########################

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import timeline_placer
from cue_models import CueCategory, EngineConfig, ScheduledCue

# Three seconds at 30 fps. Most cue media is one to three seconds long.
DEFAULT_CUE_DURATION_FRAMES = 90


@dataclass(frozen=True)
class ActiveCue:
    scheduled_cue: ScheduledCue
    offset_frames: int
    offset_seconds: float


class ScheduleView:
    def __init__(self, schedule: Sequence[ScheduledCue], config: EngineConfig) -> None:
        self._schedule: Tuple[ScheduledCue, ...] = tuple(schedule)
        self._config = config

    def schedule(self) -> Tuple[ScheduledCue, ...]:
        return self._schedule

    def active_cues(self, frame: int, duration_frames: int = DEFAULT_CUE_DURATION_FRAMES) -> List[ActiveCue]:
        current_frame = int(frame)
        active: List[ActiveCue] = []
        for scheduled_cue in self._schedule:
            start = int(scheduled_cue.start_frame)
            if start > current_frame:
                # Schedule is ordered by start frame, nothing later can be active.
                break
            if current_frame < start + int(duration_frames):
                offset = current_frame - start
                active.append(
                    ActiveCue(
                        scheduled_cue=scheduled_cue,
                        offset_frames=offset,
                        offset_seconds=timeline_placer.frames_to_seconds(offset, self._config),
                    )
                )
        return active

    def cues_between(self, start_frame: int, end_frame: int) -> List[ScheduledCue]:
        start = int(start_frame)
        end = int(end_frame)
        return [cue for cue in self._schedule if start <= int(cue.start_frame) <= end]

    def cues_in_category(self, category: CueCategory) -> List[ScheduledCue]:
        return [cue for cue in self._schedule if cue.category is category]

    def last_start_frame(self) -> Optional[int]:
        if not self._schedule:
            return None
        return max(int(cue.start_frame) for cue in self._schedule)
