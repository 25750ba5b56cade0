"""
Snapshot Store: in-process source of immutable synth snapshots.

Holds the current snapshot, folds dispatched actions into a new one via
the reducer and notifies subscribers one emission at a time.
"""

from __future__ import annotations

import itertools
import threading
from typing import Callable, Dict, Optional

import structlog

from padsynth.core.actions import Action, reduce_state
from padsynth.core.exceptions import SnapshotSourceError
from padsynth.core.state import SynthState, create_initial_state

logger = structlog.get_logger()

Listener = Callable[[], None]
Reducer = Callable[[SynthState, Action], SynthState]


class SnapshotStore:
    """
    Minimal subscribe/dispatch store.

    Listeners are called with no payload and read the latest snapshot with
    ``get_current_snapshot()``. Emissions are serialized: a dispatch waits
    for the previous one to finish notifying, and dispatching from inside a
    listener is rejected.
    """

    def __init__(
        self,
        initial_state: Optional[SynthState] = None,
        reducer: Reducer = reduce_state,
    ):
        self._state: SynthState = (
            initial_state if initial_state is not None else create_initial_state()
        )
        self._reducer = reducer
        self._listeners: Dict[int, Listener] = {}
        self._handles = itertools.count(1)

        self._lock = threading.Lock()
        self._dispatching = False
        self._dispatch_thread: Optional[int] = None

    def subscribe(self, listener: Listener) -> int:
        """Register a listener; returns a handle for ``unsubscribe``."""
        handle = next(self._handles)
        self._listeners[handle] = listener
        logger.debug("Listener subscribed", handle=handle)
        return handle

    def unsubscribe(self, handle: int) -> None:
        if handle not in self._listeners:
            raise SnapshotSourceError(f"unknown subscription handle {handle}")
        del self._listeners[handle]
        logger.debug("Listener unsubscribed", handle=handle)

    def get_current_snapshot(self) -> SynthState:
        return self._state

    def dispatch(self, action: Action) -> SynthState:
        """Reduce ``action`` into a new snapshot and notify listeners."""
        if self._dispatching and self._dispatch_thread == threading.get_ident():
            raise SnapshotSourceError("listeners may not dispatch actions")

        with self._lock:
            self._dispatching = True
            self._dispatch_thread = threading.get_ident()
            try:
                self._state = self._reducer(self._state, action)
                logger.debug("Action dispatched", action=action.type)

                # Copy so listeners may unsubscribe while being notified
                for listener in list(self._listeners.values()):
                    listener()
            finally:
                self._dispatching = False
                self._dispatch_thread = None

        return self._state

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
