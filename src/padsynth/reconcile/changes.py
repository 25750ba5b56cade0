"""Change sets: which sound domains differ between two snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from padsynth.core.state import AXES, SynthState
from padsynth.reconcile.diff import (
    NOTES,
    OSCILLATORS,
    differs_at,
    effect_amount,
    effect_axis,
    effect_name,
    effect_options,
)


@dataclass(frozen=True)
class AxisChanges:
    """Per-axis effect changes. Sub-flags are only set when the axis changed."""

    axis: str
    axis_changed: bool = False
    position_changed: bool = False
    effect_name_changed: bool = False
    effect_params_changed: bool = False


@dataclass(frozen=True)
class ChangeSet:
    """Ephemeral record of what changed between two consecutive snapshots."""

    notes_changed: bool = False
    oscillators_changed: bool = False
    axes: Mapping[str, AxisChanges] = field(
        default_factory=lambda: MappingProxyType({a: AxisChanges(axis=a) for a in AXES})
    )

    @property
    def bank_changed(self) -> bool:
        """Notes or oscillator configuration changed: the bank needs rebuilding."""
        return self.notes_changed or self.oscillators_changed

    @property
    def effects_changed(self) -> bool:
        return any(changes.axis_changed for changes in self.axes.values())

    @property
    def sounds_changed(self) -> bool:
        return self.bank_changed or self.effects_changed

    def changed_axes(self) -> list[str]:
        return [axis for axis in AXES if self.axes[axis].axis_changed]

    def as_dict(self) -> dict:
        return {
            "sounds_changed": self.sounds_changed,
            "notes_changed": self.notes_changed,
            "oscillators_changed": self.oscillators_changed,
            "axes": {
                axis: {
                    "axis_changed": changes.axis_changed,
                    "position_changed": changes.position_changed,
                    "effect_name_changed": changes.effect_name_changed,
                    "effect_params_changed": changes.effect_params_changed,
                }
                for axis, changes in self.axes.items()
            },
        }


def _axis_changes(previous: Optional[SynthState], current: SynthState, axis: str) -> AxisChanges:
    if not differs_at(previous, current, effect_axis(axis)):
        return AxisChanges(axis=axis)
    return AxisChanges(
        axis=axis,
        axis_changed=True,
        position_changed=differs_at(previous, current, effect_amount(axis)),
        effect_name_changed=differs_at(previous, current, effect_name(axis)),
        effect_params_changed=differs_at(previous, current, effect_options(axis)),
    )


def compute_change_set(previous: Optional[SynthState], current: SynthState) -> ChangeSet:
    """Diff two snapshots over the watched sound domains."""
    return ChangeSet(
        notes_changed=differs_at(previous, current, NOTES),
        oscillators_changed=differs_at(previous, current, OSCILLATORS),
        axes=MappingProxyType({axis: _axis_changes(previous, current, axis) for axis in AXES}),
    )
