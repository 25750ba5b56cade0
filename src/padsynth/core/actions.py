"""
User Intents and the Snapshot Reducer.

Actions are small frozen pydantic models. ``reduce_state`` folds one action
into a snapshot and returns a new snapshot; untouched branches are shared
with the previous one, changed branches are rebuilt.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from padsynth.core.effects import default_options, is_known_effect
from padsynth.core.exceptions import InvalidActionError, InvalidNoteError
from padsynth.core.notes import is_valid_note, note_to_midi
from padsynth.core.state import (
    EffectConfig,
    OscillatorConfig,
    SynthState,
    Waveform,
)

AxisName = Literal["x", "y"]


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class PressKey(_Action):
    type: Literal["press_key"] = "press_key"
    note: str


class ReleaseKey(_Action):
    type: Literal["release_key"] = "release_key"
    note: str


class UpdateOscillator(_Action):
    type: Literal["update_oscillator"] = "update_oscillator"
    index: int
    waveform: Optional[Waveform] = None
    gain: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    octave_adjustment: Optional[int] = None


class ChangeEffect(_Action):
    type: Literal["change_effect"] = "change_effect"
    axis: AxisName
    name: str
    options: Optional[dict[str, Any]] = None


class MovePad(_Action):
    """Pad position, one amount per axis."""

    type: Literal["move_pad"] = "move_pad"
    x: float
    y: float


class TweakEffectOption(_Action):
    type: Literal["tweak_effect_option"] = "tweak_effect_option"
    axis: AxisName
    key: str
    value: Any


class NextOnboardingStep(_Action):
    type: Literal["next_onboarding_step"] = "next_onboarding_step"


Action = Annotated[
    Union[
        PressKey,
        ReleaseKey,
        UpdateOscillator,
        ChangeEffect,
        MovePad,
        TweakEffectOption,
        NextOnboardingStep,
    ],
    Field(discriminator="type"),
]

_action_adapter: TypeAdapter[Action] = TypeAdapter(Action)


def parse_action(data: Mapping[str, Any]) -> Action:
    """Validate a plain mapping (e.g. from a YAML script) into an Action."""
    return _action_adapter.validate_python(dict(data))


def _clamp_unit(value: float) -> float:
    return min(1.0, max(0.0, float(value)))


def _with_effect(state: SynthState, axis: str, effect: EffectConfig) -> SynthState:
    effects = dict(state.get("effects", {}))
    effects[axis] = effect
    return SynthState(**{**state, "effects": effects})


def _current_effect(state: SynthState, axis: str, action: str) -> EffectConfig:
    effect = state.get("effects", {}).get(axis)
    if effect is None:
        raise InvalidActionError(action, f"no effect configured on axis '{axis}'")
    return effect


def reduce_state(state: SynthState, action: Action) -> SynthState:
    """Return the snapshot that results from applying ``action`` to ``state``."""
    if isinstance(action, PressKey):
        note_to_midi(action.note)
        notes = tuple(state.get("notes", ()))
        if action.note in notes:
            return state
        return SynthState(**{**state, "notes": notes + (action.note,)})

    if isinstance(action, ReleaseKey):
        if not is_valid_note(action.note):
            raise InvalidNoteError(action.note)
        notes = tuple(state.get("notes", ()))
        if action.note not in notes:
            return state
        return SynthState(**{**state, "notes": tuple(n for n in notes if n != action.note)})

    if isinstance(action, UpdateOscillator):
        oscillators = list(state.get("oscillators", ()))
        if not 0 <= action.index < len(oscillators):
            raise InvalidActionError(
                action.type,
                f"oscillator index {action.index} out of range (bank has {len(oscillators)})",
            )
        current = oscillators[action.index]
        oscillators[action.index] = OscillatorConfig(
            waveform=action.waveform.value if action.waveform else current["waveform"],
            gain=action.gain if action.gain is not None else current["gain"],
            octave_adjustment=(
                action.octave_adjustment
                if action.octave_adjustment is not None
                else current["octave_adjustment"]
            ),
        )
        return SynthState(**{**state, "oscillators": tuple(oscillators)})

    if isinstance(action, ChangeEffect):
        if not is_known_effect(action.name):
            raise InvalidActionError(action.type, f"unknown effect type '{action.name}'")
        current = _current_effect(state, action.axis, action.type)
        options = dict(action.options) if action.options is not None else default_options(action.name)
        return _with_effect(
            state,
            action.axis,
            EffectConfig(name=action.name, amount=current["amount"], options=options),
        )

    if isinstance(action, MovePad):
        effects = dict(state.get("effects", {}))
        for axis, amount in (("x", action.x), ("y", action.y)):
            current = _current_effect(state, axis, action.type)
            clamped = _clamp_unit(amount)
            if current["amount"] != clamped:
                effects[axis] = EffectConfig(
                    name=current["name"], amount=clamped, options=current["options"]
                )
        return SynthState(**{**state, "effects": effects})

    if isinstance(action, TweakEffectOption):
        current = _current_effect(state, action.axis, action.type)
        options = {**current["options"], action.key: action.value}
        return _with_effect(
            state,
            action.axis,
            EffectConfig(name=current["name"], amount=current["amount"], options=options),
        )

    if isinstance(action, NextOnboardingStep):
        return SynthState(**{**state, "onboarding_step": state.get("onboarding_step", 0) + 1})

    raise InvalidActionError(getattr(action, "type", type(action).__name__), "unsupported action")
