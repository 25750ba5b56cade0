"""
Path Diff Engine: did the value at a watched path change between snapshots?

The set of watched paths is fixed, so each one is an explicit accessor
rather than a generic key walker. Accessors never raise: a path that does
not resolve yields the ``ABSENT`` marker, which equals only itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from padsynth.core.state import SynthState


class _Absent:
    """Marker for a path that does not resolve in a snapshot."""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()


@dataclass(frozen=True)
class StatePath:
    """A named accessor into a snapshot."""

    name: str
    resolve: Callable[[Any], Any]

    def __str__(self) -> str:
        return self.name


def _get(container: Any, key: str) -> Any:
    if container is ABSENT or not isinstance(container, Mapping):
        return ABSENT
    return container.get(key, ABSENT)


def _freeze(value: Any) -> Any:
    """Normalize containers so list/tuple and dict subclasses compare by content."""
    if isinstance(value, Mapping):
        return {key: _freeze(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _resolve_notes(state: Any) -> Any:
    notes = _get(state, "notes")
    if notes is ABSENT or isinstance(notes, (str, bytes)):
        return notes
    try:
        return frozenset(notes)
    except TypeError:
        # Unhashable or non-iterable content: compare as-is
        return _freeze(notes)


def _resolve_oscillators(state: Any) -> Any:
    return _get(state, "oscillators")


def _resolve_effects(state: Any) -> Any:
    return _get(state, "effects")


NOTES = StatePath("notes", _resolve_notes)
OSCILLATORS = StatePath("oscillators", _resolve_oscillators)
EFFECTS = StatePath("effects", _resolve_effects)


def effect_axis(axis: str) -> StatePath:
    return StatePath(f"effects.{axis}", lambda state: _get(_resolve_effects(state), axis))


def effect_amount(axis: str) -> StatePath:
    return StatePath(
        f"effects.{axis}.amount",
        lambda state: _get(_get(_resolve_effects(state), axis), "amount"),
    )


def effect_name(axis: str) -> StatePath:
    return StatePath(
        f"effects.{axis}.name",
        lambda state: _get(_get(_resolve_effects(state), axis), "name"),
    )


def effect_options(axis: str) -> StatePath:
    return StatePath(
        f"effects.{axis}.options",
        lambda state: _get(_get(_resolve_effects(state), axis), "options"),
    )


def resolve(state: SynthState, path: StatePath) -> Any:
    """Return the value at ``path`` in ``state``, or ``ABSENT``."""
    return path.resolve(state)


def differs_at(
    previous: Optional[SynthState],
    current: SynthState,
    path: StatePath,
) -> bool:
    """
    Report whether the value reachable at ``path`` differs between snapshots.

    With no previous snapshot there is no baseline, so nothing has changed.
    Absent vs absent is equal; absent vs present is a change. Values are
    compared by deep structural equality, notes as a set.
    """
    if previous is None:
        return False

    before = path.resolve(previous)
    after = path.resolve(current)

    if before is ABSENT or after is ABSENT:
        return before is not after

    return _freeze(before) != _freeze(after)
