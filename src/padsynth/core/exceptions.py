"""
Custom Exceptions for Pad Synth.

Provides a hierarchy of exceptions for the snapshot, store and audio graph
layers, so callers can tell bad input apart from backend failures.
"""

from __future__ import annotations

from typing import Any, Optional


class PadSynthError(Exception):
    """Base exception for all Pad Synth errors."""

    def __init__(self, message: str, recoverable: bool = True):
        super().__init__(message)
        self.message = message
        self.recoverable = recoverable


# =============================================================================
# Snapshot Errors
# =============================================================================


class SnapshotError(PadSynthError):
    """Base exception for snapshot content errors."""
    pass


class InvalidActionError(SnapshotError):
    """An action could not be applied to the current snapshot."""

    def __init__(self, action: str, reason: str):
        super().__init__(f"Cannot apply action '{action}': {reason}")
        self.action = action
        self.reason = reason


class InvalidNoteError(SnapshotError):
    """A note identifier could not be parsed."""

    def __init__(self, note: Any):
        super().__init__(f"Invalid note identifier: {note!r}")
        self.note = note


# =============================================================================
# Snapshot Source Errors
# =============================================================================


class SnapshotSourceError(PadSynthError):
    """Misuse of a snapshot source (bad handle, re-entrant dispatch)."""

    def __init__(self, reason: str):
        super().__init__(f"Snapshot source error: {reason}", recoverable=False)
        self.reason = reason


# =============================================================================
# Audio Graph Errors
# =============================================================================


class AudioGraphError(PadSynthError):
    """Base exception for audio graph errors."""
    pass


class GraphMutationError(AudioGraphError):
    """An AudioGraphManager call raised during reconciliation."""

    def __init__(self, operation: str, reason: str, axis: Optional[str] = None):
        target = f" (axis {axis})" if axis else ""
        super().__init__(f"Graph mutation '{operation}'{target} failed: {reason}")
        self.operation = operation
        self.reason = reason
        self.axis = axis


class EffectChainError(AudioGraphError):
    """Effect chain is missing or inconsistent with the request."""

    def __init__(self, axis: str, reason: str):
        super().__init__(f"Effect chain error on axis '{axis}': {reason}")
        self.axis = axis


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(PadSynthError):
    """Invalid configuration."""

    def __init__(self, reason: str):
        super().__init__(f"Configuration error: {reason}", recoverable=False)
