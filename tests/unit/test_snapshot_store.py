from __future__ import annotations

import pytest

from padsynth.audio.recording import RecordingGraphManager
from padsynth.core.actions import MovePad, NextOnboardingStep, PressKey, ReleaseKey
from padsynth.core.exceptions import SnapshotSourceError
from padsynth.core.store import SnapshotStore
from padsynth.reconcile.controller import ReconciliationController


def test_dispatch_produces_new_snapshot_and_keeps_old_intact() -> None:
    store = SnapshotStore()
    before = store.get_current_snapshot()

    after = store.dispatch(PressKey(note="c4"))

    assert after is not before
    assert tuple(before["notes"]) == ()
    assert tuple(after["notes"]) == ("c4",)
    assert store.get_current_snapshot() is after


def test_listeners_are_notified_in_subscription_order() -> None:
    store = SnapshotStore()
    seen: list[str] = []
    store.subscribe(lambda: seen.append("first"))
    store.subscribe(lambda: seen.append("second"))

    store.dispatch(PressKey(note="c4"))

    assert seen == ["first", "second"]


def test_unsubscribe_stops_notifications() -> None:
    store = SnapshotStore()
    seen: list[int] = []
    handle = store.subscribe(lambda: seen.append(1))

    store.unsubscribe(handle)
    store.dispatch(PressKey(note="c4"))

    assert seen == []
    assert store.listener_count == 0


def test_unsubscribe_unknown_handle_raises() -> None:
    with pytest.raises(SnapshotSourceError):
        SnapshotStore().unsubscribe(42)


def test_dispatch_from_listener_is_rejected() -> None:
    store = SnapshotStore()
    handle = store.subscribe(lambda: store.dispatch(ReleaseKey(note="c4")))

    with pytest.raises(SnapshotSourceError):
        store.dispatch(PressKey(note="c4"))

    # The store accepts the next emission once the offending listener is gone
    store.unsubscribe(handle)
    seen: list[int] = []
    store.subscribe(lambda: seen.append(1))
    store.dispatch(PressKey(note="e4"))
    assert seen == [1]


def test_store_drives_controller_end_to_end() -> None:
    store = SnapshotStore()
    manager = RecordingGraphManager()
    controller = ReconciliationController(manager)
    controller.start(store)

    store.dispatch(NextOnboardingStep())  # baseline
    store.dispatch(NextOnboardingStep())
    assert manager.calls == []

    store.dispatch(PressKey(note="e4"))
    assert manager.operations == ["stop_all_oscillators", "create_oscillators"]

    manager.clear()
    store.dispatch(MovePad(x=0.25, y=0.75))
    assert manager.operations == ["update_effect_amount"]
    assert manager.calls[0].kwargs == {"axis": "x", "amount": 0.25}

    controller.stop()
    assert store.listener_count == 0
