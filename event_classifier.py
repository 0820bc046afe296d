# -*- coding: utf-8 -*-
########################
# event_classifier.py
########################
# Purpose:
# - Decide which catalog cues a single analyzed game event implies.
# - Provide the stateless ambient cue query used once per scheduling run.
#
# Design notes:
# - Pure logic over (event, config, catalog). The only nondeterminism is the crowd gasp pick,
#   which goes through the injectable choose callable.
# - Intent order is fixed: special move, capture, crowd reaction. The timeline stagger depends on it.
# - A catalog miss is never an error. The cue is dropped (or the capture falls back to tier 0).
#
########################
# Interfaces:
# Public constants:
# - GASP_DELTA_THRESHOLD = 200.0
# - APPLAUSE_DELTA_THRESHOLD = 150.0
# - DEFAULT_AMBIENT_CUE_IDS = ("tournament-hall",)
#
# Public functions:
# - capture_tier_for_piece(piece_code: str) -> int
# - classify_event(event: GameEvent, config: EngineConfig, catalog: CueCatalog, choose=random.choice)
#     -> tuple[CueIntent, ...]
# - ambient_cues(config: EngineConfig, catalog: CueCatalog, cue_ids=DEFAULT_AMBIENT_CUE_IDS)
#     -> tuple[CueIntent, ...]
#
# Inputs:
# - GameEvent from the game analysis side, EngineConfig, CueCatalog.
#
# Outputs:
# - CueIntent values for timeline_placer.py.
#
########################

from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from cue_catalog import CueCatalog
from cue_models import CueCatalogEntry, CueCategory, CueIntent, EngineConfig, GameEvent

logger = logging.getLogger(__name__)

ChooseFn = Callable[[Sequence[CueCatalogEntry]], CueCatalogEntry]

# Centipawn swings.
GASP_DELTA_THRESHOLD = 200.0
APPLAUSE_DELTA_THRESHOLD = 150.0

DEFAULT_AMBIENT_CUE_IDS: Tuple[str, ...] = ("tournament-hall",)

_CAPTURE_TIER_BY_PIECE: Dict[str, int] = {
    "p": 0,
    "n": 1,
    "b": 1,
    "r": 2,
    "q": 3,
}


def capture_tier_for_piece(piece_code: str) -> int:
    return int(_CAPTURE_TIER_BY_PIECE.get(str(piece_code or "").strip().lower(), 0))


def _scaled(entry: CueCatalogEntry, config: EngineConfig) -> CueIntent:
    return CueIntent(entry=entry, intensity=float(entry.default_intensity) * float(config.master_intensity))


def _special_move_cue_id(event: GameEvent) -> Optional[str]:
    # Checkmate implies check, so checkmate must be tested first.
    if event.is_checkmate:
        return "checkmate"
    if event.is_check:
        return "check"
    if event.is_castle:
        return "castle"
    if event.is_promotion:
        return "promotion"
    return None


def _capture_entry(piece_code: str, catalog: CueCatalog) -> Optional[CueCatalogEntry]:
    tier = capture_tier_for_piece(piece_code)
    entry = catalog.capture_entry_for_tier(tier)
    if entry is None and tier != 0:
        logger.debug("No capture cue for tier %d (piece %r), falling back to tier 0", tier, piece_code)
        entry = catalog.capture_entry_for_tier(0)
    return entry


def _crowd_entry(
    evaluation: float,
    previous_evaluation: float,
    catalog: CueCatalog,
    choose: ChooseFn,
) -> Optional[CueCatalogEntry]:
    delta = float(evaluation) - float(previous_evaluation)

    # Magnitude first: a +220 swing is a gasp, not applause.
    if abs(delta) > GASP_DELTA_THRESHOLD:
        candidates = catalog.entries_in(CueCategory.CROWD_REACTION)
        if not candidates:
            return None
        return choose(candidates)

    if delta > APPLAUSE_DELTA_THRESHOLD:
        return catalog.first_matching(CueCategory.CROWD_REACTION, "applause")

    return None


def classify_event(
    event: GameEvent,
    config: EngineConfig,
    catalog: CueCatalog,
    choose: ChooseFn = random.choice,
) -> Tuple[CueIntent, ...]:
    if not config.enabled:
        return ()

    selected: List[CueCatalogEntry] = []

    if config.special_moves_enabled:
        cue_id = _special_move_cue_id(event)
        if cue_id is not None:
            entry = catalog.get(cue_id)
            if entry is None:
                logger.debug("Catalog has no %r cue, skipping for move %s", cue_id, event.sequence_index)
            else:
                selected.append(entry)

    if config.captures_enabled and event.captured_piece:
        entry = _capture_entry(event.captured_piece, catalog)
        if entry is not None:
            selected.append(entry)

    if config.crowd_enabled and event.evaluation is not None and event.previous_evaluation is not None:
        entry = _crowd_entry(event.evaluation, event.previous_evaluation, catalog, choose)
        if entry is not None:
            selected.append(entry)

    return tuple(_scaled(entry, config) for entry in selected)


def ambient_cues(
    config: EngineConfig,
    catalog: CueCatalog,
    cue_ids: Sequence[str] = DEFAULT_AMBIENT_CUE_IDS,
) -> Tuple[CueIntent, ...]:
    if not config.enabled or not config.ambient_enabled:
        return ()

    intents: List[CueIntent] = []
    for cue_id in cue_ids:
        entry = catalog.get(cue_id)
        if entry is None:
            logger.debug("Catalog has no ambient cue %r", cue_id)
            continue
        intents.append(_scaled(entry, config))
    return tuple(intents)
