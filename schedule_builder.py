# -*- coding: utf-8 -*-
########################
# schedule_builder.py
########################
# Purpose:
# - Build the final cue schedule for one game.
# - Runs EventClassifier -> TimelinePlacer -> PriorityResolver over the full event sequence.
#
# Design notes:
# - Master disabled short-circuits to an empty schedule before any component runs.
# - Production order (event order, stagger order, ambient last) is what the resolver sees.
# - The final (start_frame asc, priority desc) sort is presentation only and happens after suppression.
# - Never returns a partial schedule.
#
########################
# Interfaces:
# Public constants:
# - AMBIENT_START_FRAME = 0
#
# Public functions:
# - resolve_evaluation_pairs(events: Sequence[GameEvent], evaluations: Optional[Sequence[Optional[float]]])
#     -> tuple[GameEvent, ...]
# - sort_schedule(cues: Iterable[ScheduledCue]) -> tuple[ScheduledCue, ...]
# - build_schedule(events, config, catalog, *, evaluations=None, choose=random.choice)
#     -> tuple[ScheduledCue, ...]
#
# Inputs:
# - Ordered GameEvent sequence, optional per-event evaluation list, EngineConfig, CueCatalog.
#
# Outputs:
# - Ordered ScheduledCue tuple for the rendering side.
#
########################

from __future__ import annotations

import dataclasses
import logging
import random
from typing import Iterable, List, Optional, Sequence, Tuple

import event_classifier
import priority_resolver
import timeline_placer
from cue_catalog import CueCatalog
from cue_models import EngineConfig, GameEvent, ScheduledCue

logger = logging.getLogger(__name__)

AMBIENT_START_FRAME = 0


def resolve_evaluation_pairs(
    events: Sequence[GameEvent],
    evaluations: Optional[Sequence[Optional[float]]] = None,
) -> Tuple[GameEvent, ...]:
    """Fill in each event's (evaluation, previous_evaluation) pair.

    With an explicit evaluations list, event i takes evaluations[i] and evaluations[i - 1]
    (nothing for the first event). Without one, an event's own previous_evaluation is kept
    and only a missing one is carried forward from the prior event's evaluation.
    """
    if evaluations is not None and len(evaluations) != len(events):
        raise ValueError(f"Expected {len(events)} evaluations, got {len(evaluations)}")

    resolved: List[GameEvent] = []
    carried: Optional[float] = None
    for index, event in enumerate(events):
        if evaluations is not None:
            current = evaluations[index]
            previous = evaluations[index - 1] if index > 0 else None
            event = dataclasses.replace(event, evaluation=current, previous_evaluation=previous)
        elif event.previous_evaluation is None and carried is not None:
            event = dataclasses.replace(event, previous_evaluation=carried)
        resolved.append(event)
        carried = event.evaluation
    return tuple(resolved)


def sort_schedule(cues: Iterable[ScheduledCue]) -> Tuple[ScheduledCue, ...]:
    # sorted() is stable, so equal (frame, priority) keep production order.
    return tuple(sorted(cues, key=lambda cue: (int(cue.start_frame), -int(cue.priority))))


def build_schedule(
    events: Sequence[GameEvent],
    config: EngineConfig,
    catalog: CueCatalog,
    *,
    evaluations: Optional[Sequence[Optional[float]]] = None,
    choose: event_classifier.ChooseFn = random.choice,
) -> Tuple[ScheduledCue, ...]:
    if not config.enabled:
        return ()

    produced: List[ScheduledCue] = []
    for event in resolve_evaluation_pairs(events, evaluations):
        intents = event_classifier.classify_event(event, config, catalog, choose)
        if not intents:
            continue
        frame = timeline_placer.base_frame(event.sequence_index, config)
        produced.extend(timeline_placer.place_intents(intents, frame, config))

    ambient_intents = event_classifier.ambient_cues(config, catalog)
    produced.extend(timeline_placer.place_intents(ambient_intents, AMBIENT_START_FRAME, config))

    kept = priority_resolver.suppress_overlapping(produced, config.overlap_window_frames)
    schedule = sort_schedule(kept)

    logger.info(
        "Scheduled %d cues for %d events (%d suppressed)",
        len(schedule),
        len(events),
        len(produced) - len(kept),
    )
    return schedule
