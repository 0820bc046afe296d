# -*- coding: utf-8 -*-
########################
# cue_catalog.py
########################
# Purpose:
# - Immutable lookup over the cues available to a scheduling run.
# - Provides the stock cue library and a JSON loader for per-tournament catalogs.
#
# Design notes:
# - The catalog is passed explicitly to every engine call. There is no module level catalog state.
# - Lookups never raise on a miss. Callers decide the fallback.
# - Catalog order is significant: random crowd selection and applause lookup walk entries in order.
# - The loader validates structure only. It never opens or checks the referenced media files.
#
########################
# Interfaces:
# Public exceptions:
# - class CatalogError(Exception)
# - class CatalogLoadError(CatalogError)
#
# Public classes:
# - class CueCatalog
#   - __init__(entries: Iterable[CueCatalogEntry])
#   - get(cue_id: str) -> Optional[CueCatalogEntry]
#   - entries_in(category: CueCategory) -> tuple[CueCatalogEntry, ...]
#   - capture_entry_for_tier(tier: int) -> Optional[CueCatalogEntry]
#   - first_matching(category: CueCategory, id_fragment: str) -> Optional[CueCatalogEntry]
#
# Public functions:
# - default_catalog() -> CueCatalog
# - load_catalog_json(catalog_path: pathlib.Path) -> CueCatalog
#   Untiered capture cues that would land past MAX_CAPTURE_TIER raise CatalogLoadError.
#
# Inputs:
# - CueCatalogEntry values or a UTF-8 JSON catalog file.
#
# Outputs:
# - CueCatalog for event_classifier.py and schedule_builder.py.
#
########################

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from cue_models import CueCatalogEntry, CueCategory

logger = logging.getLogger(__name__)

MAX_CAPTURE_TIER = 3


class CatalogError(Exception):
    """Base error for catalog construction."""


class CatalogLoadError(CatalogError):
    """Raised when a catalog file cannot be read, parsed or validated."""


class CueCatalog:
    def __init__(self, entries: Iterable[CueCatalogEntry]) -> None:
        ordered: List[CueCatalogEntry] = []
        by_id: Dict[str, CueCatalogEntry] = {}
        for entry in entries:
            if entry.cue_id in by_id:
                raise CatalogError(f"Duplicate cue id in catalog: {entry.cue_id!r}")
            by_id[entry.cue_id] = entry
            ordered.append(entry)
        self._entries: Tuple[CueCatalogEntry, ...] = tuple(ordered)
        self._by_id = by_id

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CueCatalogEntry]:
        return iter(self._entries)

    def __contains__(self, cue_id: object) -> bool:
        return cue_id in self._by_id

    def get(self, cue_id: str) -> Optional[CueCatalogEntry]:
        return self._by_id.get(str(cue_id))

    def entries_in(self, category: CueCategory) -> Tuple[CueCatalogEntry, ...]:
        return tuple(entry for entry in self._entries if entry.category is category)

    def capture_entry_for_tier(self, tier: int) -> Optional[CueCatalogEntry]:
        for entry in self.entries_in(CueCategory.PIECE_CAPTURE):
            if entry.capture_tier is not None and int(entry.capture_tier) == int(tier):
                return entry
        return None

    def first_matching(self, category: CueCategory, id_fragment: str) -> Optional[CueCatalogEntry]:
        fragment = str(id_fragment)
        for entry in self.entries_in(category):
            if fragment in entry.cue_id:
                return entry
        return None


def _entry(
    cue_id: str,
    category: CueCategory,
    default_intensity: float,
    media_path: str,
    description: str,
    capture_tier: Optional[int] = None,
) -> CueCatalogEntry:
    return CueCatalogEntry(
        cue_id=cue_id,
        category=category,
        default_intensity=default_intensity,
        media_path=media_path,
        description=description,
        capture_tier=capture_tier,
    )


def default_catalog() -> CueCatalog:
    """Return the stock cue library shipped with the scheduler."""
    capture = CueCategory.PIECE_CAPTURE
    crowd = CueCategory.CROWD_REACTION
    ambient = CueCategory.AMBIENT
    clock = CueCategory.CLOCK
    special = CueCategory.SPECIAL_MOVE
    return CueCatalog(
        [
            _entry("capture-pawn", capture, 0.4, "sounds/pieces/capture-pawn.mp3", "Pawn capture sound", 0),
            _entry("capture-minor", capture, 0.45, "sounds/pieces/capture-minor.mp3", "Knight/Bishop capture sound", 1),
            _entry("capture-rook", capture, 0.5, "sounds/pieces/capture-rook.mp3", "Rook capture sound", 2),
            _entry("capture-queen", capture, 0.6, "sounds/pieces/capture-queen.mp3", "Queen capture - dramatic", 3),
            _entry("gasp-01", crowd, 0.35, "sounds/crowd/gasp-01.mp3", "Crowd gasp for blunders"),
            _entry("gasp-02", crowd, 0.35, "sounds/crowd/gasp-02.mp3", "Crowd gasp variant"),
            _entry("applause-01", crowd, 0.3, "sounds/crowd/applause-01.mp3", "Applause for brilliant moves"),
            _entry("applause-02", crowd, 0.3, "sounds/crowd/applause-02.mp3", "Applause variant"),
            _entry("murmur", crowd, 0.2, "sounds/crowd/murmur.mp3", "Low crowd murmur for tense moments"),
            _entry("cheer", crowd, 0.4, "sounds/crowd/cheer.mp3", "Victory cheer for checkmate"),
            _entry("tournament-hall", ambient, 0.15, "sounds/atmosphere/tournament-hall.mp3", "Background tournament ambience"),
            _entry(
                "chess-pieces-background",
                ambient,
                0.1,
                "sounds/atmosphere/pieces-background.mp3",
                "Subtle background piece movement sounds",
            ),
            _entry("clock-tick", clock, 0.25, "sounds/clock/tick.mp3", "Chess clock ticking"),
            _entry("clock-tick-fast", clock, 0.3, "sounds/clock/tick-fast.mp3", "Faster ticking for time pressure"),
            _entry("clock-press", clock, 0.3, "sounds/clock/press.mp3", "Clock press sound"),
            _entry("check", special, 0.4, "sounds/special/check.mp3", "Check sound"),
            _entry("checkmate", special, 0.5, "sounds/special/checkmate.mp3", "Checkmate sound"),
            _entry("castle", special, 0.35, "sounds/special/castle.mp3", "Castling sound"),
            _entry("promotion", special, 0.4, "sounds/special/promotion.mp3", "Pawn promotion sound"),
        ]
    )


class CatalogEntryModel(BaseModel):
    id: str = Field(min_length=1)
    category: CueCategory
    default_intensity: float = Field(default=0.5, ge=0.0, le=1.0)
    path: str = Field(min_length=1, description="Opaque media reference handed to the renderer.")
    description: str = ""
    capture_tier: Optional[int] = Field(default=None, ge=0, le=MAX_CAPTURE_TIER)

    @field_validator("id", "path")
    @classmethod
    def strip_text(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("must be a non-empty string")
        return trimmed


class CatalogFileModel(BaseModel):
    cues: List[CatalogEntryModel] = Field(default_factory=list)


def _catalog_from_model(file_model: CatalogFileModel) -> CueCatalog:
    entries: List[CueCatalogEntry] = []
    next_capture_tier = 0
    for item in file_model.cues:
        capture_tier = item.capture_tier
        if item.category is CueCategory.PIECE_CAPTURE and capture_tier is None:
            # Untiered capture cues take their tier from their position in the file.
            capture_tier = next_capture_tier
            if capture_tier > MAX_CAPTURE_TIER:
                raise CatalogError(
                    f"Capture cue '{item.id}' has no capture_tier and tiers 0-{MAX_CAPTURE_TIER} are used up"
                )
        if item.category is CueCategory.PIECE_CAPTURE:
            next_capture_tier = int(capture_tier) + 1
        entries.append(
            CueCatalogEntry(
                cue_id=item.id,
                category=item.category,
                default_intensity=float(item.default_intensity),
                media_path=item.path,
                description=item.description,
                capture_tier=capture_tier if item.category is CueCategory.PIECE_CAPTURE else None,
            )
        )
    return CueCatalog(entries)


def load_catalog_json(catalog_path: Path) -> CueCatalog:
    catalog_path = Path(catalog_path)
    try:
        raw_text = catalog_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exception:
        raise CatalogLoadError(f"Failed to read catalog file: {catalog_path}. Error: {exception}") from exception

    try:
        parsed = json.loads(raw_text)
    except json.JSONDecodeError as exception:
        raise CatalogLoadError(f"Catalog file is not valid JSON: {catalog_path}. Error: {exception}") from exception

    if not isinstance(parsed, dict):
        raise CatalogLoadError(f"Catalog file root must be a JSON object: {catalog_path}")

    try:
        file_model = CatalogFileModel.model_validate(parsed)
    except ValidationError as exception:
        raise CatalogLoadError(f"Catalog validation failed for {catalog_path}:\n{exception}") from exception

    try:
        catalog = _catalog_from_model(file_model)
    except CatalogError as exception:
        raise CatalogLoadError(f"{exception} ({catalog_path})") from exception

    logger.debug("Loaded %d cues from %s", len(catalog), catalog_path)
    return catalog
