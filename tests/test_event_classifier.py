"""Tests for per-event cue classification."""

import dataclasses

import pytest

from cue_catalog import CueCatalog
from cue_models import CueCatalogEntry, CueCategory, GameEvent
from event_classifier import ambient_cues, capture_tier_for_piece, classify_event


def _event(**overrides):
    base = dict(move="e4", position="fen", sequence_index=1)
    base.update(overrides)
    return GameEvent(**base)


def _ids(intents):
    return [intent.entry.cue_id for intent in intents]


class TestSpecialMoves:
    """Special move precedence: checkmate, check, castle, promotion."""

    def test_checkmate_emits_only_checkmate(self, engine_config, catalog):
        intents = classify_event(_event(is_check=True, is_checkmate=True), engine_config, catalog)
        assert _ids(intents) == ["checkmate"]

    def test_check_beats_castle_and_promotion(self, engine_config, catalog):
        intents = classify_event(_event(is_check=True, is_castle=True, is_promotion=True), engine_config, catalog)
        assert _ids(intents) == ["check"]

    def test_castle_beats_promotion(self, engine_config, catalog):
        intents = classify_event(_event(is_castle=True, is_promotion=True), engine_config, catalog)
        assert _ids(intents) == ["castle"]

    def test_promotion(self, engine_config, catalog):
        assert _ids(classify_event(_event(is_promotion=True), engine_config, catalog)) == ["promotion"]

    def test_disabled_special_moves(self, engine_config, catalog):
        config = dataclasses.replace(engine_config, special_moves_enabled=False)
        assert classify_event(_event(is_checkmate=True), config, catalog) == ()

    def test_missing_catalog_entry_is_skipped(self, engine_config):
        catalog = CueCatalog([CueCatalogEntry("check", CueCategory.SPECIAL_MOVE, 0.4, "check.mp3")])
        assert classify_event(_event(is_checkmate=True), engine_config, catalog) == ()


class TestCaptures:
    """Capture cue selection by piece tier."""

    @pytest.mark.parametrize(
        "piece, expected",
        [("p", 0), ("n", 1), ("b", 1), ("r", 2), ("q", 3), ("Q", 3), ("x", 0), ("", 0)],
    )
    def test_capture_tier_for_piece(self, piece, expected):
        assert capture_tier_for_piece(piece) == expected

    def test_queen_capture_selects_queen_tier(self, engine_config, catalog):
        assert _ids(classify_event(_event(captured_piece="q"), engine_config, catalog)) == ["capture-queen"]

    def test_unknown_piece_selects_pawn_tier(self, engine_config, catalog):
        assert _ids(classify_event(_event(captured_piece="x"), engine_config, catalog)) == ["capture-pawn"]

    def test_missing_tier_falls_back_to_pawn(self, engine_config):
        catalog = CueCatalog(
            [CueCatalogEntry("capture-pawn", CueCategory.PIECE_CAPTURE, 0.4, "p.mp3", capture_tier=0)]
        )
        assert _ids(classify_event(_event(captured_piece="r"), engine_config, catalog)) == ["capture-pawn"]

    def test_no_capture_cues_at_all(self, engine_config):
        assert classify_event(_event(captured_piece="q"), engine_config, CueCatalog([])) == ()

    def test_special_move_comes_before_capture(self, engine_config, catalog):
        intents = classify_event(_event(captured_piece="n", is_check=True), engine_config, catalog)
        assert _ids(intents) == ["check", "capture-minor"]


class TestCrowdReactions:
    """Evaluation swing thresholds."""

    def test_large_swing_uses_choose(self, engine_config, catalog):
        seen = []

        def choose(candidates):
            seen.append([entry.cue_id for entry in candidates])
            return candidates[1]

        intents = classify_event(_event(previous_evaluation=250, evaluation=30), engine_config, catalog, choose)
        assert _ids(intents) == ["gasp-02"]
        assert seen == [["gasp-01", "gasp-02", "applause-01", "applause-02", "murmur", "cheer"]]

    def test_plus_220_is_gasp_branch_not_applause(self, engine_config, catalog):
        calls = []

        def choose(candidates):
            calls.append(len(candidates))
            return candidates[-1]

        intents = classify_event(_event(previous_evaluation=0, evaluation=220), engine_config, catalog, choose)
        assert calls == [6]
        assert _ids(intents) == ["cheer"]

    def test_brilliant_move_applause(self, engine_config, catalog):
        intents = classify_event(_event(previous_evaluation=0, evaluation=180), engine_config, catalog)
        assert _ids(intents) == ["applause-01"]

    def test_exact_thresholds_do_not_trigger(self, engine_config, catalog):
        assert classify_event(_event(previous_evaluation=0, evaluation=150), engine_config, catalog) == ()
        assert classify_event(_event(previous_evaluation=200, evaluation=0), engine_config, catalog) == ()

    def test_negative_small_swing_is_silent(self, engine_config, catalog):
        assert classify_event(_event(previous_evaluation=0, evaluation=-180), engine_config, catalog) == ()

    def test_missing_evaluation_skips_crowd(self, engine_config, catalog):
        assert classify_event(_event(evaluation=500), engine_config, catalog) == ()
        assert classify_event(_event(previous_evaluation=500), engine_config, catalog) == ()


class TestIntensityAndSwitches:
    """Master switch and intensity scaling."""

    def test_master_disabled(self, engine_config, catalog):
        config = dataclasses.replace(engine_config, enabled=False)
        assert classify_event(_event(captured_piece="q", is_checkmate=True), config, catalog) == ()

    def test_intensity_scaled_by_master(self, engine_config, catalog):
        config = dataclasses.replace(engine_config, master_intensity=0.5)
        intents = classify_event(_event(captured_piece="q"), config, catalog)
        assert intents[0].intensity == pytest.approx(0.3)

    def test_ambient_cues(self, engine_config, catalog):
        config = dataclasses.replace(engine_config, master_intensity=0.5)
        intents = ambient_cues(config, catalog)
        assert _ids(intents) == ["tournament-hall"]
        assert intents[0].intensity == pytest.approx(0.075)

    def test_ambient_disabled(self, engine_config, catalog):
        assert ambient_cues(dataclasses.replace(engine_config, ambient_enabled=False), catalog) == ()
        assert ambient_cues(dataclasses.replace(engine_config, enabled=False), catalog) == ()
