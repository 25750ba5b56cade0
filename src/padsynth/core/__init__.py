"""Core system components for Pad Synth."""

from padsynth.core.state import (
    AXES,
    EffectConfig,
    OscillatorConfig,
    SynthState,
    Waveform,
    create_initial_state,
)
from padsynth.core.config import Settings
from padsynth.core.exceptions import (
    PadSynthError,
    SnapshotError,
    SnapshotSourceError,
    AudioGraphError,
    GraphMutationError,
)
from padsynth.core.store import SnapshotStore

__all__ = [
    "AXES",
    "EffectConfig",
    "OscillatorConfig",
    "SynthState",
    "Waveform",
    "create_initial_state",
    "Settings",
    "PadSynthError",
    "SnapshotError",
    "SnapshotSourceError",
    "AudioGraphError",
    "GraphMutationError",
    "SnapshotStore",
]
