"""
Reconciliation Controller: keeps an audio graph in step with snapshots.

Each new snapshot is diffed against the previous one and only the graph
mutations implied by the change are issued, in a fixed order:

1. oscillator bank rebuild (notes or oscillator settings changed)
2. per axis, x then y: amount update, effect chain rebuild, parameter update
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional

import structlog

from padsynth.audio.contracts import AudioGraphManager, SnapshotSource
from padsynth.core.exceptions import GraphMutationError
from padsynth.core.state import AXES, SynthState
from padsynth.reconcile.changes import ChangeSet, compute_change_set
from padsynth.reconcile.diff import ABSENT, effect_amount, effect_options, resolve

logger = structlog.get_logger()


def _present_or(value: Any, default: Any) -> Any:
    return default if value is ABSENT else value


class ReconciliationController:
    """
    Per-session reconciler between a snapshot source and an audio graph.

    Holds only the most recent snapshot and the subscription handle, so
    several controllers can run side by side. The source must deliver
    snapshots one at a time; the controller has no re-entrancy protection.
    """

    def __init__(self, manager: AudioGraphManager):
        self.manager = manager
        self.previous_snapshot: Optional[SynthState] = None

        self._source: Optional[SnapshotSource] = None
        self._subscription: Any = None

        # Stats
        self._reconciliations = 0
        self._mutations = 0

    def start(self, source: SnapshotSource) -> None:
        """Subscribe to ``source``; each emission is reconciled synchronously."""
        self._source = source
        self._subscription = source.subscribe(self._handle_emission)
        logger.debug("Reconciler subscribed", handle=self._subscription)

    def stop(self) -> None:
        """Cancel the subscription. Not idempotent; only call after ``start``."""
        self._source.unsubscribe(self._subscription)
        logger.debug(
            "Reconciler unsubscribed",
            reconciliations=self._reconciliations,
            mutations=self._mutations,
        )
        self._source = None
        self._subscription = None

    def _handle_emission(self) -> None:
        self.on_snapshot(self._source.get_current_snapshot())

    def on_snapshot(self, current: SynthState) -> Optional[ChangeSet]:
        """
        Reconcile the graph against ``current``.

        Returns the computed ChangeSet, or None when this is the first
        snapshot (baseline capture, no graph calls). A failing graph call
        propagates as GraphMutationError; the baseline has already advanced
        and is not rolled back.
        """
        previous = self.previous_snapshot
        self.previous_snapshot = current

        if previous is None:
            logger.debug("Captured baseline snapshot")
            return None

        start_time = time.time()
        changes = compute_change_set(previous, current)
        self._reconciliations += 1

        if not changes.sounds_changed:
            return changes

        if changes.bank_changed:
            self._call("stop_all_oscillators", self.manager.stop_all_oscillators)
            self._call("create_oscillators", self.manager.create_oscillators, current)

        for axis in AXES:
            axis_changes = changes.axes[axis]
            if not axis_changes.axis_changed:
                continue

            if axis_changes.position_changed:
                self._call(
                    "update_effect_amount",
                    self.manager.update_effect_amount,
                    axis=axis,
                    amount=_present_or(resolve(current, effect_amount(axis)), None),
                )

            if axis_changes.effect_name_changed:
                self._call("destroy_effect_chain", self.manager.destroy_effect_chain)
                self._call(
                    "rebuild_effect_chain",
                    self.manager.rebuild_effect_chain,
                    current.get("effects", {}),
                )

            # Still issued after a rebuild: option keys may be effect specific
            if axis_changes.effect_params_changed:
                self._call(
                    "update_effect_parameters",
                    self.manager.update_effect_parameters,
                    axis=axis,
                    options=_present_or(resolve(current, effect_options(axis)), {}),
                )

        logger.debug(
            "Reconciled snapshot",
            bank_changed=changes.bank_changed,
            axes=changes.changed_axes(),
            elapsed_ms=(time.time() - start_time) * 1000,
        )
        return changes

    def _call(self, operation: str, method: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        try:
            method(*args, **kwargs)
        except Exception as e:
            logger.error("Graph mutation failed", operation=operation, error=str(e))
            raise GraphMutationError(operation, str(e), axis=kwargs.get("axis")) from e
        self._mutations += 1

    def get_stats(self) -> dict:
        """Get reconciliation statistics."""
        return {
            "subscribed": self._subscription is not None,
            "reconciliations": self._reconciliations,
            "mutations": self._mutations,
        }
