# -*- coding: utf-8 -*-
########################
# priority_resolver.py
########################
# Purpose:
# - Overlap suppression for scheduled cues.
# - Drops any cue that starts within the suppression window of an already kept cue
#   of higher or equal priority.
#
# Design notes:
# - Greedy, first seen wins. Cues are visited in production order (event order, then stagger order).
# - Do not sort by priority before this pass. The input order decides equal priority collisions.
# - O(n * kept). n is a few hundred for a full game.
#
########################
# Interfaces:
# Public dataclasses:
# - SuppressionWindow(frames: int)
#   - conflicts(kept: ScheduledCue, candidate: ScheduledCue) -> bool
#
# Public functions:
# - suppress_overlapping(cues: Sequence[ScheduledCue], window_frames: int) -> tuple[ScheduledCue, ...]
#
# Inputs:
# - ScheduledCue values in production order.
# - window_frames from EngineConfig.overlap_window_frames.
#
# Outputs:
# - Surviving ScheduledCue values, still in production order.
#
########################

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from cue_models import ScheduledCue


@dataclass(frozen=True)
class SuppressionWindow:
    frames: int

    def conflicts(self, kept: ScheduledCue, candidate: ScheduledCue) -> bool:
        distance = abs(int(kept.start_frame) - int(candidate.start_frame))
        return distance < int(self.frames) and int(kept.priority) >= int(candidate.priority)


def suppress_overlapping(cues: Sequence[ScheduledCue], window_frames: int) -> Tuple[ScheduledCue, ...]:
    window = SuppressionWindow(frames=int(window_frames))
    kept: List[ScheduledCue] = []
    for candidate in cues:
        if any(window.conflicts(existing, candidate) for existing in kept):
            continue
        kept.append(candidate)
    return tuple(kept)


def _run_unit_tests() -> None:
    from cue_models import CueCatalogEntry, CueCategory, CueIntent

    special = CueIntent(CueCatalogEntry("check", CueCategory.SPECIAL_MOVE, 0.4, "check.mp3"), 0.4)
    capture = CueIntent(CueCatalogEntry("capture-pawn", CueCategory.PIECE_CAPTURE, 0.4, "p.mp3", capture_tier=0), 0.4)

    kept = suppress_overlapping([ScheduledCue(special, 100, 5), ScheduledCue(capture, 105, 3)], 15)
    assert [cue.priority for cue in kept] == [5]

    kept = suppress_overlapping([ScheduledCue(capture, 100, 3), ScheduledCue(capture, 120, 3)], 15)
    assert [cue.start_frame for cue in kept] == [100, 120]

    # Equal priority inside the window: the earlier produced cue wins.
    kept = suppress_overlapping([ScheduledCue(capture, 110, 3), ScheduledCue(capture, 100, 3)], 15)
    assert [cue.start_frame for cue in kept] == [110]

    # A later higher priority cue is not suppressed by an earlier lower one.
    kept = suppress_overlapping([ScheduledCue(capture, 100, 3), ScheduledCue(special, 105, 5)], 15)
    assert [cue.priority for cue in kept] == [3, 5]


if __name__ == "__main__":
    _run_unit_tests()
    print("priority_resolver.py: ok")
