"""
Recording Graph Manager.

Records every AudioGraphManager call in order, optionally forwarding to a
delegate. Used by the CLI dry run and as the test double for the reconciler.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import structlog

from padsynth.audio.contracts import AudioGraphManager
from padsynth.core.state import EffectConfig, SynthState

logger = structlog.get_logger()


@dataclass(frozen=True)
class GraphCall:
    """One recorded contract call."""

    operation: str
    kwargs: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        args = ", ".join(f"{key}={value!r}" for key, value in self.kwargs.items())
        return f"{self.operation}({args})"


class RecordingGraphManager:
    """AudioGraphManager that logs calls; ``fail_on`` makes one operation raise."""

    def __init__(
        self,
        delegate: Optional[AudioGraphManager] = None,
        fail_on: Optional[str] = None,
    ) -> None:
        self.delegate = delegate
        self.fail_on = fail_on
        self.calls: list[GraphCall] = []

    def _record(self, operation: str, **kwargs: Any) -> None:
        self.calls.append(GraphCall(operation, kwargs))
        logger.debug("Graph call", operation=operation)
        if operation == self.fail_on:
            raise RuntimeError(f"simulated failure in {operation}")

    def stop_all_oscillators(self) -> None:
        self._record("stop_all_oscillators")
        if self.delegate is not None:
            self.delegate.stop_all_oscillators()

    def create_oscillators(self, snapshot: SynthState) -> None:
        self._record("create_oscillators", snapshot=snapshot)
        if self.delegate is not None:
            self.delegate.create_oscillators(snapshot)

    def destroy_effect_chain(self) -> None:
        self._record("destroy_effect_chain")
        if self.delegate is not None:
            self.delegate.destroy_effect_chain()

    def rebuild_effect_chain(self, effects: Mapping[str, EffectConfig]) -> None:
        self._record("rebuild_effect_chain", effects=effects)
        if self.delegate is not None:
            self.delegate.rebuild_effect_chain(effects)

    def update_effect_amount(self, axis: str, amount: float) -> None:
        self._record("update_effect_amount", axis=axis, amount=amount)
        if self.delegate is not None:
            self.delegate.update_effect_amount(axis, amount)

    def update_effect_parameters(self, axis: str, options: Mapping[str, Any]) -> None:
        self._record("update_effect_parameters", axis=axis, options=options)
        if self.delegate is not None:
            self.delegate.update_effect_parameters(axis, options)

    @property
    def operations(self) -> list[str]:
        return [call.operation for call in self.calls]

    def clear(self) -> None:
        self.calls.clear()
