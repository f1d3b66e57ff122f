"""Runtime configuration helpers for the analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

from .defaults import (
    DEFAULT_ANALYSIS_WINDOW_SECONDS,
    DEFAULT_SAMPLING_RATE,
    DEFAULT_THRESHOLD_RMS,
    MAX_SPECTRUM_POINTS,
)

_FILTER_TYPE_VALUES = {"none", "lowpass", "highpass", "bandpass"}


@dataclass(slots=True)
class SignalLabConfig:
    """
    Tuning knobs for filtering, spectrum analysis and activity classification.

    The defaults match a ~1 kHz EMG recording analysed in half-second windows.
    """

    default_sampling_rate: float = DEFAULT_SAMPLING_RATE
    max_spectrum_points: int = MAX_SPECTRUM_POINTS

    threshold_rms: float = DEFAULT_THRESHOLD_RMS
    analysis_window_seconds: float = DEFAULT_ANALYSIS_WINDOW_SECONDS

    # Filter applied when the caller does not pass its own FilterConfig
    filter_type: str = "none"
    low_cut_hz: float = 20.0
    high_cut_hz: float = 450.0

    def sanitized(self) -> SignalLabConfig:
        """Return a copy with derived limits applied."""
        filter_type = str(self.filter_type or "none").strip().lower()
        if filter_type not in _FILTER_TYPE_VALUES:
            filter_type = "none"
        return SignalLabConfig(
            default_sampling_rate=max(1e-3, float(self.default_sampling_rate)),
            max_spectrum_points=max(2, int(self.max_spectrum_points)),
            threshold_rms=float(self.threshold_rms),
            analysis_window_seconds=max(0.0, float(self.analysis_window_seconds)),
            filter_type=filter_type,
            low_cut_hz=float(self.low_cut_hz),
            high_cut_hz=float(self.high_cut_hz),
        )

    def filter_mapping(self) -> dict[str, Any]:
        """Return the default filter in the ``{type, lowCutHz, highCutHz}`` shape."""
        return {
            "type": self.filter_type,
            "lowCutHz": self.low_cut_hz,
            "highCutHz": self.high_cut_hz,
        }


def _recognized_fields() -> set[str]:
    """Return the dataclass field names accepted by :class:`SignalLabConfig`."""
    return {f.name for f in fields(SignalLabConfig)}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten known nesting patterns (top-level ``pipeline`` or ``filter`` keys)."""
    merged: MutableMapping[str, Any] = {}
    for key, value in data.items():
        if key == "pipeline" and isinstance(value, Mapping):
            merged.update(value)
        elif key == "filter" and isinstance(value, Mapping):
            if "type" in value:
                merged["filter_type"] = value["type"]
            for src, dst in (("low_cut_hz", "low_cut_hz"), ("lowCutHz", "low_cut_hz"),
                             ("high_cut_hz", "high_cut_hz"), ("highCutHz", "high_cut_hz")):
                if src in value:
                    merged[dst] = value[src]
        else:
            merged[key] = value
    return merged


def config_from_mapping(data: Mapping[str, Any] | None) -> SignalLabConfig:
    """Build :class:`SignalLabConfig` from ``data`` (ignoring unknown keys)."""
    if not data:
        return SignalLabConfig()
    normalized = _normalize_mapping(data)
    known = _recognized_fields()
    payload = {key: normalized[key] for key in normalized.keys() & known}
    return SignalLabConfig(**payload).sanitized()


def load_config(path: str | Path | None) -> SignalLabConfig:
    """
    Load configuration from ``path``.

    Missing files fall back to default :class:`SignalLabConfig`.
    """
    if path is None:
        return SignalLabConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return SignalLabConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


__all__ = ["SignalLabConfig", "config_from_mapping", "load_config"]
