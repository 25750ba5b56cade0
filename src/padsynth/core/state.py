"""
Snapshot Definitions for Pad Synth.

This module defines the application-state snapshot that the store emits
and the reconciler compares: held notes, the oscillator bank and the
per-axis effect configuration of the X/Y pad.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping, Sequence, TypedDict

if TYPE_CHECKING:
    from padsynth.core.config import Settings


class Waveform(str, Enum):
    """Oscillator waveform shapes."""

    SINE = "sine"
    SQUARE = "square"
    SAWTOOTH = "sawtooth"
    TRIANGLE = "triangle"


# Fixed pad axes, in reconciliation order.
AXES: tuple[str, ...] = ("x", "y")


class OscillatorConfig(TypedDict):
    """One slot of the oscillator bank."""

    waveform: str  # Waveform value
    gain: float  # 0.0 - 1.0
    octave_adjustment: int


class EffectConfig(TypedDict):
    """Effect assigned to one pad axis."""

    name: str
    amount: float  # 0.0 - 1.0, derived from pad position
    options: dict[str, Any]


class SynthState(TypedDict, total=False):
    """
    Point-in-time application state relevant to sound.

    Snapshots are never mutated once emitted; reducers build a new one for
    every change. Keys outside notes/oscillators/effects are inert to the
    reconciler.
    """

    notes: Sequence[str]
    oscillators: Sequence[OscillatorConfig]
    effects: Mapping[str, EffectConfig]
    # UI bookkeeping carried by the store but ignored by the audio graph
    onboarding_step: int


def create_initial_state(settings: "Settings | None" = None) -> SynthState:
    """Create a fresh SynthState from the configured defaults."""
    if settings is None:
        from padsynth.core.config import Settings

        settings = Settings()

    initial = settings.initial
    return SynthState(
        notes=(),
        oscillators=tuple(
            OscillatorConfig(
                waveform=osc.waveform.value,
                gain=osc.gain,
                octave_adjustment=osc.octave_adjustment,
            )
            for osc in initial.oscillators
        ),
        effects={
            "x": EffectConfig(
                name=initial.x_effect.name,
                amount=initial.x_effect.amount,
                options=dict(initial.x_effect.options),
            ),
            "y": EffectConfig(
                name=initial.y_effect.name,
                amount=initial.y_effect.amount,
                options=dict(initial.y_effect.options),
            ),
        },
        onboarding_step=0,
    )
