"""Tests for b-roll media selection."""

from media_library import (
    MediaAsset,
    MediaCategory,
    MediaLibrarySettings,
    MediaType,
    SegmentKind,
    default_media_library,
    media_by_category,
    player_media,
    select_media_for_segment,
    select_player_media,
    tournament_media,
)


def first(candidates):
    return candidates[0]


UPLOADED_HALL = MediaAsset(
    asset_id="upload-hall",
    media_type=MediaType.VIDEO,
    category=MediaCategory.VENUE_HALL,
    path="media/uploads/hall.mp4",
    description="Uploaded hall footage",
    duration_seconds=6.0,
    tournament_id="t-1",
)

PLAYER_PHOTO = MediaAsset(
    asset_id="photo-1",
    media_type=MediaType.IMAGE,
    category=MediaCategory.PLAYER_PHOTO,
    path="media/uploads/photo.jpg",
    description="Headshot",
    player_id="fide-1",
)

PLAYER_VIDEO = MediaAsset(
    asset_id="video-1",
    media_type=MediaType.VIDEO,
    category=MediaCategory.PLAYER_VIDEO,
    path="media/uploads/reaction.mp4",
    description="Reaction clip",
    duration_seconds=3.0,
    player_id="fide-1",
)


def test_filters():
    library = default_media_library() + (UPLOADED_HALL, PLAYER_PHOTO)
    assert len(media_by_category(MediaCategory.ATMOSPHERE, library)) == 3
    assert tournament_media("t-1", library) == [UPLOADED_HALL]
    assert player_media("fide-1", library) == [PLAYER_PHOTO]


def test_intro_prefers_tournament_upload():
    library = default_media_library() + (UPLOADED_HALL,)
    picked = select_media_for_segment(
        SegmentKind.INTRO, MediaLibrarySettings(), library, tournament_id="t-1", choose=first
    )
    assert picked == UPLOADED_HALL


def test_intro_falls_back_to_stock_hall():
    settings = MediaLibrarySettings(prefer_user_uploads=False)
    library = (UPLOADED_HALL,) + default_media_library()
    picked = select_media_for_segment(SegmentKind.INTRO, settings, library, tournament_id="t-1", choose=lambda c: c[-1])
    assert picked.asset_id == "stock-venue-hall-01"


def test_intro_uses_exterior_when_no_hall():
    library = tuple(asset for asset in default_media_library() if asset.category is not MediaCategory.VENUE_HALL)
    picked = select_media_for_segment(SegmentKind.INTRO, MediaLibrarySettings(), library, choose=first)
    assert picked.asset_id == "stock-venue-exterior-01"


def test_segment_flags():
    assert select_media_for_segment(SegmentKind.TRANSITION, MediaLibrarySettings(enabled=False)) is None
    assert select_media_for_segment(SegmentKind.TRANSITION, MediaLibrarySettings(use_transitions=False)) is None
    assert select_media_for_segment(SegmentKind.ATMOSPHERE, MediaLibrarySettings(use_atmosphere=False)) is None
    assert select_media_for_segment(SegmentKind.OUTRO, MediaLibrarySettings(use_venue_shots=False)) is None


def test_default_library_segments():
    settings = MediaLibrarySettings()
    assert select_media_for_segment(SegmentKind.TRANSITION, settings, choose=first).asset_id == "stock-hand-move"
    assert select_media_for_segment(SegmentKind.ATMOSPHERE, settings, choose=first).asset_id == "stock-clock-closeup"
    assert select_media_for_segment(SegmentKind.OUTRO, settings, choose=first).asset_id == "stock-venue-hall-01"


def test_empty_library_returns_none():
    assert select_media_for_segment(SegmentKind.TRANSITION, MediaLibrarySettings(), (), choose=first) is None


def test_player_media_prefers_video():
    library = (PLAYER_PHOTO, PLAYER_VIDEO)
    assert select_player_media("fide-1", MediaLibrarySettings(), library, choose=first) == PLAYER_VIDEO
    assert select_player_media("fide-1", MediaLibrarySettings(), (PLAYER_PHOTO,), choose=first) == PLAYER_PHOTO
    assert select_player_media("fide-2", MediaLibrarySettings(), library, choose=first) is None
    assert select_player_media("fide-1", MediaLibrarySettings(use_player_media=False), library) is None
