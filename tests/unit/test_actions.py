from __future__ import annotations

import pytest
from pydantic import ValidationError

from padsynth.core.actions import (
    ChangeEffect,
    MovePad,
    PressKey,
    ReleaseKey,
    TweakEffectOption,
    UpdateOscillator,
    parse_action,
    reduce_state,
)
from padsynth.core.exceptions import InvalidActionError, InvalidNoteError
from padsynth.core.state import Waveform, create_initial_state


def test_press_and_release_keys() -> None:
    state = create_initial_state()

    state = reduce_state(state, PressKey(note="c4"))
    state = reduce_state(state, PressKey(note="g4"))
    same = reduce_state(state, PressKey(note="c4"))
    assert same is state

    state = reduce_state(state, ReleaseKey(note="c4"))
    assert tuple(state["notes"]) == ("g4",)


def test_press_key_rejects_unparseable_note() -> None:
    with pytest.raises(InvalidNoteError):
        reduce_state(create_initial_state(), PressKey(note="h9"))


def test_update_oscillator_changes_only_given_fields() -> None:
    state = create_initial_state()
    original = state["oscillators"][1]

    new_state = reduce_state(state, UpdateOscillator(index=1, waveform=Waveform.SINE))

    assert new_state["oscillators"][1]["waveform"] == "sine"
    assert new_state["oscillators"][1]["gain"] == original["gain"]
    assert new_state["oscillators"][0] is state["oscillators"][0]
    assert state["oscillators"][1]["waveform"] == original["waveform"]


def test_update_oscillator_index_out_of_range() -> None:
    with pytest.raises(InvalidActionError):
        reduce_state(create_initial_state(), UpdateOscillator(index=5, gain=0.2))


def test_change_effect_resets_options_and_keeps_amount() -> None:
    state = create_initial_state()

    new_state = reduce_state(state, ChangeEffect(axis="y", name="delay"))

    assert new_state["effects"]["y"]["name"] == "delay"
    assert new_state["effects"]["y"]["options"] == {"delay_time": 0.25, "feedback": 0.4}
    assert new_state["effects"]["y"]["amount"] == state["effects"]["y"]["amount"]
    assert new_state["effects"]["x"] is state["effects"]["x"]


def test_change_effect_rejects_unknown_effect() -> None:
    with pytest.raises(InvalidActionError):
        reduce_state(create_initial_state(), ChangeEffect(axis="x", name="wobble"))


def test_move_pad_clamps_amounts() -> None:
    state = reduce_state(create_initial_state(), MovePad(x=1.4, y=-0.2))

    assert state["effects"]["x"]["amount"] == 1.0
    assert state["effects"]["y"]["amount"] == 0.0


def test_tweak_effect_option_merges_into_options() -> None:
    state = create_initial_state()

    new_state = reduce_state(state, TweakEffectOption(axis="x", key="resonance", value=12))

    assert new_state["effects"]["x"]["options"]["resonance"] == 12
    assert new_state["effects"]["x"]["options"]["type"] == "lowpass"
    assert state["effects"]["x"]["options"]["resonance"] == 5


def test_parse_action_uses_type_discriminator() -> None:
    action = parse_action({"type": "move_pad", "x": 0.1, "y": 0.2})

    assert isinstance(action, MovePad)

    with pytest.raises(ValidationError):
        parse_action({"type": "change_effect", "axis": "z", "name": "filter"})


def test_release_key_rejects_unparseable_note() -> None:
    state = reduce_state(create_initial_state(), PressKey(note="c4"))

    with pytest.raises(InvalidNoteError):
        reduce_state(state, ReleaseKey(note="c44"))

    assert reduce_state(state, ReleaseKey(note="e4")) is state
