"""
Pad Synth: audio graph reconciliation for a keyboard synth with an X/Y effect pad.

Application state flows through a snapshot store; a reconciler diffs each
new snapshot against the last one and issues only the oscillator and effect
graph mutations that the change requires.
"""

__version__ = "0.1.0"
__author__ = "Pad Synth Team"

from padsynth.core.config import Settings
from padsynth.core.state import SynthState
from padsynth.reconcile.controller import ReconciliationController

__all__ = [
    "SynthState",
    "Settings",
    "ReconciliationController",
    "__version__",
]
