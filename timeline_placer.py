# -*- coding: utf-8 -*-
########################
# timeline_placer.py
########################
# Purpose:
# - Single source of truth for where cues land on the frame timeline.
# - Converts an event's 1-based sequence index into its base frame and stamps each cue intent
#   with a start frame and a priority rank.
#
# Design notes:
# - Pure functions. No state, no I/O.
# - Cues of the same event are staggered so they never start on exactly the same frame.
# - Priority ranks are a total order over CueCategory. Every category must have a rank here.
#
########################
# Interfaces:
# Public functions:
# - priority_for_category(category: CueCategory) -> int
# - base_frame(sequence_index: int, config: EngineConfig) -> int
# - place_intents(intents: Sequence[CueIntent], base_frame_value: int, config: EngineConfig) -> tuple[ScheduledCue, ...]
# - frames_to_seconds(frames: int, config: EngineConfig) -> float
# - seconds_to_frames(seconds: float, config: EngineConfig) -> int
#
# Inputs:
# - sequence_index from GameEvent, CueIntent values from event_classifier.py.
# - lead_in_frames, frames_per_event, stagger_frames and frame_rate from EngineConfig.
#
# Outputs:
# - ScheduledCue values consumed by priority_resolver.py and schedule_builder.py.
#
########################

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from cue_models import CueCategory, CueIntent, EngineConfig, ScheduledCue


_PRIORITY_BY_CATEGORY: Dict[CueCategory, int] = {
    CueCategory.SPECIAL_MOVE: 5,
    CueCategory.CROWD_REACTION: 4,
    CueCategory.PIECE_CAPTURE: 3,
    CueCategory.CLOCK: 2,
    CueCategory.AMBIENT: 1,
}

# Import time check so a new CueCategory member cannot ship without a rank.
_UNRANKED = [category for category in CueCategory if category not in _PRIORITY_BY_CATEGORY]
if _UNRANKED:
    raise RuntimeError(f"CueCategory members without a priority rank: {_UNRANKED}")


def priority_for_category(category: CueCategory) -> int:
    return int(_PRIORITY_BY_CATEGORY.get(category, 0))


def base_frame(sequence_index: int, config: EngineConfig) -> int:
    return int(config.lead_in_frames) + (int(sequence_index) - 1) * int(config.frames_per_event)


def place_intents(
    intents: Sequence[CueIntent],
    base_frame_value: int,
    config: EngineConfig,
) -> Tuple[ScheduledCue, ...]:
    stagger = int(config.stagger_frames)
    return tuple(
        ScheduledCue(
            intent=intent,
            start_frame=int(base_frame_value) + index * stagger,
            priority=priority_for_category(intent.entry.category),
        )
        for index, intent in enumerate(intents)
    )


def frames_to_seconds(frames: int, config: EngineConfig) -> float:
    return float(frames) / float(config.frame_rate)


def seconds_to_frames(seconds: float, config: EngineConfig) -> int:
    return int(round(float(seconds) * float(config.frame_rate)))


def _run_unit_tests() -> None:
    config = EngineConfig(lead_in_frames=90, frames_per_event=30, stagger_frames=5)
    assert base_frame(1, config) == 90
    assert base_frame(3, config) == 150

    from cue_models import CueCatalogEntry

    capture = CueCatalogEntry("capture-queen", CueCategory.PIECE_CAPTURE, 0.6, "q.mp3", capture_tier=3)
    check = CueCatalogEntry("check", CueCategory.SPECIAL_MOVE, 0.4, "check.mp3")
    placed = place_intents([CueIntent(check, 0.4), CueIntent(capture, 0.6)], 120, config)
    assert [(cue.start_frame, cue.priority) for cue in placed] == [(120, 5), (125, 3)]

    assert abs(frames_to_seconds(45, config) - 1.5) < 1e-9
    assert seconds_to_frames(2.0, config) == 60


if __name__ == "__main__":
    _run_unit_tests()
    print("timeline_placer.py: ok")
