"""
Virtual Audio Graph: in-memory AudioGraphManager.

Models the node graph a browser or DSP backend would hold: one oscillator
voice per (oscillator slot, held note) pair and one effect node per pad
axis. No audio is rendered; the graph is inspectable so the reconciler can
be exercised end to end.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import numpy as np
import structlog

from padsynth.core.config import AudioGraphConfig
from padsynth.core.exceptions import AudioGraphError, EffectChainError
from padsynth.core.notes import note_to_midi
from padsynth.core.state import AXES, EffectConfig, SynthState

logger = structlog.get_logger()

A4_MIDI = 69


@dataclass
class OscillatorVoice:
    """One sounding oscillator node."""

    slot: int
    note: str
    waveform: str
    gain: float
    frequency_hz: float


@dataclass
class EffectNode:
    """Effect processing node for one pad axis."""

    axis: str
    name: str
    amount: float
    options: dict[str, Any] = field(default_factory=dict)


def bank_frequencies(
    midi_notes: np.ndarray,
    octave_adjustments: np.ndarray,
    reference_pitch_hz: float = 440.0,
) -> np.ndarray:
    """
    Frequencies for every (slot, note) pair.

    Returns an array of shape (len(octave_adjustments), len(midi_notes)).
    """
    semitones = midi_notes[np.newaxis, :] - A4_MIDI + 12 * octave_adjustments[:, np.newaxis]
    return reference_pitch_hz * np.power(2.0, semitones / 12.0)


class VirtualAudioGraph:
    """AudioGraphManager holding voices and effect nodes in memory."""

    def __init__(self, config: Optional[AudioGraphConfig] = None):
        self.config = config or AudioGraphConfig()
        self.voices: list[OscillatorVoice] = []
        self.effect_chain: dict[str, EffectNode] = {}

        # Stats
        self.voices_created = 0
        self.chain_builds = 0

    def stop_all_oscillators(self) -> None:
        if self.voices:
            logger.debug("Stopping oscillators", voices=len(self.voices))
        self.voices = []

    def create_oscillators(self, snapshot: SynthState) -> None:
        notes = list(dict.fromkeys(snapshot.get("notes", ())))
        oscillators = list(snapshot.get("oscillators", ()))
        if not notes or not oscillators:
            return

        if len(notes) * len(oscillators) > self.config.max_voices:
            raise AudioGraphError(
                f"{len(notes) * len(oscillators)} voices requested, "
                f"limit is {self.config.max_voices}"
            )

        midi = np.array([note_to_midi(note) for note in notes], dtype=float)
        octaves = np.array([osc["octave_adjustment"] for osc in oscillators], dtype=float)
        frequencies = bank_frequencies(midi, octaves, self.config.reference_pitch_hz)

        for slot, osc in enumerate(oscillators):
            for column, note in enumerate(notes):
                self.voices.append(
                    OscillatorVoice(
                        slot=slot,
                        note=note,
                        waveform=getattr(osc["waveform"], "value", osc["waveform"]),
                        gain=float(osc["gain"]),
                        frequency_hz=float(frequencies[slot, column]),
                    )
                )
        self.voices_created += len(notes) * len(oscillators)
        logger.debug("Created oscillators", voices=len(self.voices))

    def destroy_effect_chain(self) -> None:
        self.effect_chain = {}

    def rebuild_effect_chain(self, effects: Mapping[str, EffectConfig]) -> None:
        self.effect_chain = {
            axis: EffectNode(
                axis=axis,
                name=effects[axis]["name"],
                amount=float(effects[axis]["amount"]),
                options=dict(effects[axis].get("options", {})),
            )
            for axis in AXES
            if axis in effects
        }
        self.chain_builds += 1
        logger.debug("Rebuilt effect chain", effects=[n.name for n in self.effect_chain.values()])

    def _node(self, axis: str) -> EffectNode:
        node = self.effect_chain.get(axis)
        if node is None:
            raise EffectChainError(axis, "effect chain has not been built")
        return node

    def update_effect_amount(self, axis: str, amount: float) -> None:
        if amount is None:
            raise EffectChainError(axis, "no amount to apply")
        self._node(axis).amount = float(amount)

    def update_effect_parameters(self, axis: str, options: Mapping[str, Any]) -> None:
        node = self._node(axis)
        node.options = dict(options)

    def summary(self) -> dict:
        """Inspectable view of the graph."""
        return {
            "voices": [
                {
                    "slot": voice.slot,
                    "note": voice.note,
                    "waveform": voice.waveform,
                    "frequency_hz": round(voice.frequency_hz, 2),
                }
                for voice in self.voices
            ],
            "effects": {
                axis: {"name": node.name, "amount": node.amount, "options": node.options}
                for axis, node in self.effect_chain.items()
            },
            "voices_created": self.voices_created,
            "chain_builds": self.chain_builds,
        }
