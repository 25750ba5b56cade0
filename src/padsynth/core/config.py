"""
Configuration Management for Pad Synth.

Uses Pydantic Settings for type-safe configuration with environment
variable support and YAML file loading.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from padsynth.core.effects import default_options, is_known_effect
from padsynth.core.exceptions import ConfigError
from padsynth.core.state import Waveform


class OscillatorDefaults(BaseModel):
    """Initial configuration of one oscillator slot."""
    waveform: Waveform = Waveform.SAWTOOTH
    gain: float = Field(default=0.15, ge=0.0, le=1.0)
    octave_adjustment: int = 0


class EffectDefaults(BaseModel):
    """Initial effect assigned to a pad axis."""
    name: str
    amount: float = Field(default=0.5, ge=0.0, le=1.0)
    options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def _known_effect(cls, value: str) -> str:
        if not is_known_effect(value):
            raise ValueError(f"unknown effect type '{value}'")
        return value


def _default_oscillators() -> List[OscillatorDefaults]:
    return [
        OscillatorDefaults(waveform=Waveform.SAWTOOTH, gain=0.15, octave_adjustment=0),
        OscillatorDefaults(waveform=Waveform.SQUARE, gain=0.5, octave_adjustment=-1),
    ]


class InitialStateConfig(BaseModel):
    """Defaults used to build the very first snapshot."""
    oscillators: List[OscillatorDefaults] = Field(default_factory=_default_oscillators)
    x_effect: EffectDefaults = Field(
        default_factory=lambda: EffectDefaults(
            name="filter", amount=0.4, options=default_options("filter")
        )
    )
    y_effect: EffectDefaults = Field(
        default_factory=lambda: EffectDefaults(
            name="distortion", amount=0.75, options=default_options("distortion")
        )
    )


class AudioGraphConfig(BaseModel):
    """Virtual audio graph configuration."""
    reference_pitch_hz: float = Field(default=440.0, gt=0.0)  # A4
    max_voices: int = Field(default=64, ge=1)


class Settings(BaseSettings):
    """
    Main application settings.

    Can be configured via:
    - Environment variables (prefixed with PADSYNTH_)
    - YAML config file
    - Direct instantiation
    """

    model_config = SettingsConfigDict(
        env_prefix="PADSYNTH_",
        env_nested_delimiter="__",
    )

    audio: AudioGraphConfig = Field(default_factory=AudioGraphConfig)
    initial: InitialStateConfig = Field(default_factory=InitialStateConfig)

    # Debug
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save settings to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)


def load_snapshot(path: Path) -> Dict[str, Any]:
    """Load a snapshot document from YAML/JSON; the document must be a mapping."""
    with open(path) as f:
        data = json.load(f) if path.suffix == ".json" else yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"snapshot {path} must be a mapping, got {type(data).__name__}")
    return data
