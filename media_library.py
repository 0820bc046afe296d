# -*- coding: utf-8 -*-
########################
# media_library.py
########################
# Purpose:
# - Pick b-roll media (venue shots, atmosphere clips, transitions) for video segments.
# - Holds the stock media library and tournament/player filters over any library.
#
# Design notes:
# - Libraries are plain tuples passed in by the caller. Uploaded tournament media is merged by the caller.
# - Random picks go through an injectable choose callable so tests can pin them.
# - No upload validation or storage here.
#
########################
# Interfaces:
# Public enums:
# - class MediaType(enum.Enum): VIDEO | IMAGE
# - class MediaCategory(enum.Enum): VENUE_EXTERIOR | VENUE_HALL | PLAYER_PHOTO | PLAYER_VIDEO | ATMOSPHERE | TRANSITION
# - class SegmentKind(enum.Enum): INTRO | TRANSITION | OUTRO | ATMOSPHERE
#
# Public dataclasses:
# - MediaAsset(asset_id, media_type, category, path, description, duration_seconds, tags, tournament_id, player_id)
# - MediaLibrarySettings(enabled, use_venue_shots, use_player_media, use_atmosphere, use_transitions,
#                        prefer_user_uploads)
#
# Public functions:
# - default_media_library() -> tuple[MediaAsset, ...]
# - media_by_category(category, library) -> list[MediaAsset]
# - tournament_media(tournament_id, library) -> list[MediaAsset]
# - player_media(player_id, library) -> list[MediaAsset]
# - random_media(category, library, choose=random.choice) -> Optional[MediaAsset]
# - select_media_for_segment(segment, settings, library=None, *, tournament_id=None, choose=random.choice)
#     -> Optional[MediaAsset]
# - select_player_media(player_id, settings, library, *, choose=random.choice) -> Optional[MediaAsset]
#
########################

from __future__ import annotations

from dataclasses import dataclass
import enum
import random
from typing import Callable, List, Optional, Sequence, Tuple


class MediaType(enum.Enum):
    VIDEO = "video"
    IMAGE = "image"


class MediaCategory(enum.Enum):
    VENUE_EXTERIOR = "venue_exterior"
    VENUE_HALL = "venue_hall"
    PLAYER_PHOTO = "player_photo"
    PLAYER_VIDEO = "player_video"
    ATMOSPHERE = "atmosphere"
    TRANSITION = "transition"


class SegmentKind(enum.Enum):
    INTRO = "intro"
    TRANSITION = "transition"
    OUTRO = "outro"
    ATMOSPHERE = "atmosphere"


@dataclass(frozen=True)
class MediaAsset:
    asset_id: str
    media_type: MediaType
    category: MediaCategory
    path: str
    description: str
    duration_seconds: Optional[float] = None
    tags: Tuple[str, ...] = ()
    tournament_id: Optional[str] = None
    player_id: Optional[str] = None


@dataclass(frozen=True)
class MediaLibrarySettings:
    enabled: bool = True
    use_venue_shots: bool = True
    use_player_media: bool = True
    use_atmosphere: bool = True
    use_transitions: bool = True
    prefer_user_uploads: bool = True


MediaChooseFn = Callable[[Sequence[MediaAsset]], MediaAsset]

_VENUE_CATEGORIES = (MediaCategory.VENUE_EXTERIOR, MediaCategory.VENUE_HALL)


def default_media_library() -> Tuple[MediaAsset, ...]:
    return (
        MediaAsset(
            asset_id="stock-venue-exterior-01",
            media_type=MediaType.IMAGE,
            category=MediaCategory.VENUE_EXTERIOR,
            path="media/stock/venue/exterior-01.jpg",
            description="Generic tournament hall exterior",
            tags=("establishing", "intro"),
        ),
        MediaAsset(
            asset_id="stock-venue-hall-01",
            media_type=MediaType.VIDEO,
            category=MediaCategory.VENUE_HALL,
            path="media/stock/venue/hall-wide-01.mp4",
            description="Wide shot of chess tournament hall",
            duration_seconds=5.0,
            tags=("establishing", "atmosphere"),
        ),
        MediaAsset(
            asset_id="stock-clock-closeup",
            media_type=MediaType.VIDEO,
            category=MediaCategory.ATMOSPHERE,
            path="media/stock/atmosphere/clock-closeup.mp4",
            description="Chess clock close-up",
            duration_seconds=3.0,
            tags=("clock", "tension"),
        ),
        MediaAsset(
            asset_id="stock-board-overhead",
            media_type=MediaType.VIDEO,
            category=MediaCategory.ATMOSPHERE,
            path="media/stock/atmosphere/board-overhead.mp4",
            description="Overhead shot of chess board",
            duration_seconds=4.0,
            tags=("board", "transition"),
        ),
        MediaAsset(
            asset_id="stock-pieces-closeup",
            media_type=MediaType.VIDEO,
            category=MediaCategory.ATMOSPHERE,
            path="media/stock/atmosphere/pieces-closeup.mp4",
            description="Close-up of chess pieces",
            duration_seconds=3.0,
            tags=("pieces", "artistic"),
        ),
        MediaAsset(
            asset_id="stock-hand-move",
            media_type=MediaType.VIDEO,
            category=MediaCategory.TRANSITION,
            path="media/stock/transitions/hand-move.mp4",
            description="Hand making a chess move",
            duration_seconds=2.0,
            tags=("transition", "move"),
        ),
        MediaAsset(
            asset_id="stock-clock-press",
            media_type=MediaType.VIDEO,
            category=MediaCategory.TRANSITION,
            path="media/stock/transitions/clock-press.mp4",
            description="Hand pressing chess clock",
            duration_seconds=1.5,
            tags=("transition", "clock"),
        ),
    )


def media_by_category(category: MediaCategory, library: Sequence[MediaAsset]) -> List[MediaAsset]:
    return [asset for asset in library if asset.category is category]


def tournament_media(tournament_id: str, library: Sequence[MediaAsset]) -> List[MediaAsset]:
    return [asset for asset in library if asset.tournament_id == tournament_id]


def player_media(player_id: str, library: Sequence[MediaAsset]) -> List[MediaAsset]:
    return [asset for asset in library if asset.player_id == player_id]


def random_media(
    category: MediaCategory,
    library: Sequence[MediaAsset],
    choose: MediaChooseFn = random.choice,
) -> Optional[MediaAsset]:
    assets = media_by_category(category, library)
    if not assets:
        return None
    return choose(assets)


def select_media_for_segment(
    segment: SegmentKind,
    settings: MediaLibrarySettings,
    library: Optional[Sequence[MediaAsset]] = None,
    *,
    tournament_id: Optional[str] = None,
    choose: MediaChooseFn = random.choice,
) -> Optional[MediaAsset]:
    if not settings.enabled:
        return None

    assets: Sequence[MediaAsset] = library if library is not None else default_media_library()

    if segment is SegmentKind.INTRO:
        if not settings.use_venue_shots:
            return None
        if tournament_id and settings.prefer_user_uploads:
            for asset in assets:
                if asset.tournament_id == tournament_id and asset.category in _VENUE_CATEGORIES:
                    return asset
        return random_media(MediaCategory.VENUE_HALL, assets, choose) or random_media(
            MediaCategory.VENUE_EXTERIOR, assets, choose
        )

    if segment is SegmentKind.TRANSITION:
        if not settings.use_transitions:
            return None
        return random_media(MediaCategory.TRANSITION, assets, choose)

    if segment is SegmentKind.ATMOSPHERE:
        if not settings.use_atmosphere:
            return None
        return random_media(MediaCategory.ATMOSPHERE, assets, choose)

    if segment is SegmentKind.OUTRO:
        if not settings.use_venue_shots:
            return None
        return random_media(MediaCategory.VENUE_HALL, assets, choose)

    return None


def select_player_media(
    player_id: str,
    settings: MediaLibrarySettings,
    library: Sequence[MediaAsset],
    *,
    choose: MediaChooseFn = random.choice,
) -> Optional[MediaAsset]:
    """Pick a picture-in-picture asset for a player, preferring video over photo."""
    if not settings.enabled or not settings.use_player_media:
        return None

    assets = player_media(player_id, library)
    videos = [asset for asset in assets if asset.category is MediaCategory.PLAYER_VIDEO]
    if videos:
        return choose(videos)
    photos = [asset for asset in assets if asset.category is MediaCategory.PLAYER_PHOTO]
    if photos:
        return choose(photos)
    return None
