"""Catalog of pad effect types and their default options."""

from __future__ import annotations

from typing import Any

EFFECT_DEFAULTS: dict[str, dict[str, Any]] = {
    "filter": {"type": "lowpass", "resonance": 5},
    "distortion": {"oversampling": "4x"},
    "delay": {"delay_time": 0.25, "feedback": 0.4},
    "reverb": {"decay": 2.0, "dry_wet": 0.5},
    "phaser": {"rate": 1.2, "depth": 0.6, "feedback": 0.3},
}


def is_known_effect(name: str) -> bool:
    return name in EFFECT_DEFAULTS


def default_options(name: str) -> dict[str, Any]:
    """Return a fresh copy of the default options for an effect type."""
    return dict(EFFECT_DEFAULTS.get(name, {}))
