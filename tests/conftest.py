"""Pytest configuration and fixtures."""

import pytest

from cue_catalog import default_catalog
from cue_models import EngineConfig, GameEvent


@pytest.fixture
def catalog():
    """Stock cue catalog."""
    return default_catalog()


@pytest.fixture
def engine_config():
    """Engine config with every category enabled."""
    return EngineConfig(
        enabled=True,
        captures_enabled=True,
        crowd_enabled=True,
        ambient_enabled=True,
        clock_enabled=True,
        special_moves_enabled=True,
        master_intensity=1.0,
        frame_rate=30,
        lead_in_frames=90,
        frames_per_event=30,
        overlap_window_frames=15,
        stagger_frames=5,
    )


@pytest.fixture
def first_choice():
    """Deterministic stand-in for random.choice."""
    return lambda candidates: candidates[0]


@pytest.fixture
def scenario_events():
    """Queen capture, a 220 centipawn swing, then checkmate."""
    return [
        GameEvent(move="Bxd8", position="fen-1", sequence_index=1, captured_piece="q"),
        GameEvent(move="Nf3", position="fen-2", sequence_index=2, previous_evaluation=250, evaluation=30),
        GameEvent(move="Qh7#", position="fen-3", sequence_index=3, is_check=True, is_checkmate=True),
    ]
