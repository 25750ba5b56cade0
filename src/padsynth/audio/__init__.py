"""Audio graph contracts and managers."""

from padsynth.audio.contracts import AudioGraphManager, SnapshotSource
from padsynth.audio.recording import GraphCall, RecordingGraphManager
from padsynth.audio.virtual import EffectNode, OscillatorVoice, VirtualAudioGraph

__all__ = [
    "AudioGraphManager",
    "SnapshotSource",
    "GraphCall",
    "RecordingGraphManager",
    "EffectNode",
    "OscillatorVoice",
    "VirtualAudioGraph",
]
