"""Capability contracts consumed by the reconciler."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, runtime_checkable

from padsynth.core.state import EffectConfig, SynthState


@runtime_checkable
class AudioGraphManager(Protocol):
    """
    Mutations the reconciler may issue against a live audio graph.

    Implementations own the oscillator and effect nodes. ``stop_all_oscillators``
    and ``destroy_effect_chain`` must be safe when nothing is live; the two
    ``update_*`` calls adjust existing nodes and must not rebuild them.
    """

    def stop_all_oscillators(self) -> None: ...

    def create_oscillators(self, snapshot: SynthState) -> None: ...

    def destroy_effect_chain(self) -> None: ...

    def rebuild_effect_chain(self, effects: Mapping[str, EffectConfig]) -> None: ...

    def update_effect_amount(self, axis: str, amount: float) -> None: ...

    def update_effect_parameters(self, axis: str, options: Mapping[str, Any]) -> None: ...


@runtime_checkable
class SnapshotSource(Protocol):
    """Sequential source of immutable snapshots."""

    def subscribe(self, listener: Callable[[], None]) -> Any: ...

    def unsubscribe(self, handle: Any) -> None: ...

    def get_current_snapshot(self) -> SynthState: ...
