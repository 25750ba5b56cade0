"""Snapshot diffing and audio graph reconciliation."""

from padsynth.reconcile.changes import AxisChanges, ChangeSet, compute_change_set
from padsynth.reconcile.controller import ReconciliationController
from padsynth.reconcile.diff import ABSENT, StatePath, differs_at

__all__ = [
    "AxisChanges",
    "ChangeSet",
    "compute_change_set",
    "ReconciliationController",
    "ABSENT",
    "StatePath",
    "differs_at",
]
