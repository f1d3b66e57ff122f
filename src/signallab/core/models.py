"""Shared dataclasses for datasets, filter settings and analysis results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

import numpy as np


class FilterType(str, Enum):
    NONE = "none"
    LOWPASS = "lowpass"
    HIGHPASS = "highpass"
    BANDPASS = "bandpass"

    @classmethod
    def parse(cls, value: Any) -> "FilterType":
        """Resolve ``value`` to a filter type; unknown values map to ``NONE``."""
        if isinstance(value, cls):
            return value
        raw = str(value or "").strip().lower().replace("-", "").replace("_", "")
        for member in cls:
            if member.value == raw:
                return member
        return cls.NONE


class ActivityLabel(str, Enum):
    GRIP = "Grip"
    REST = "Rest"
    NO_DATA = "No data"


@dataclass(frozen=True)
class Channel:
    id: str
    label: str
    data: np.ndarray

    def __len__(self) -> int:
        return int(self.data.size)


@dataclass(frozen=True)
class Dataset:
    """
    A multi-channel recording ready for analysis.

    Instances are treated as immutable value objects once built by ingestion
    or a sample provider. ``labels`` holds optional per-sample annotations.
    """

    id: str
    name: str
    type: str
    sampling_rate: float
    channels: tuple[Channel, ...]
    labels: Optional[list[Any]] = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def sample_count(self) -> int:
        """Number of samples in the first channel (0 for an empty dataset)."""
        return len(self.channels[0]) if self.channels else 0

    def channel(self, channel_id: str) -> Optional[Channel]:
        for ch in self.channels:
            if ch.id == channel_id:
                return ch
        return None

    def to_mapping(self) -> dict[str, Any]:
        """Serialize back into the JSON ingestion shape."""
        payload: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "samplingRate": self.sampling_rate,
            "channels": [
                {"id": ch.id, "label": ch.label, "data": ch.data.tolist()}
                for ch in self.channels
            ],
            "meta": dict(self.meta),
        }
        if self.labels is not None:
            payload["labels"] = list(self.labels)
        return payload


def _optional_cutoff(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class FilterConfig:
    """
    Filter selection for one pipeline run.

    ``None`` cutoffs mean "not provided"; like a cutoff ``<= 0`` they turn the
    corresponding filter stage into a no-op.
    """

    type: FilterType = FilterType.NONE
    low_cut_hz: Optional[float] = None
    high_cut_hz: Optional[float] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> "FilterConfig":
        """
        Build a FilterConfig from the UI/JSON shape.

        Both ``{"type", "lowCutHz", "highCutHz"}`` and snake_case keys are
        accepted.
        """
        payload: Mapping[str, Any] = mapping or {}
        low = payload.get("lowCutHz", payload.get("low_cut_hz"))
        high = payload.get("highCutHz", payload.get("high_cut_hz"))
        return cls(
            type=FilterType.parse(payload.get("type")),
            low_cut_hz=_optional_cutoff(low),
            high_cut_hz=_optional_cutoff(high),
        )


@dataclass(frozen=True)
class SpectrumResult:
    freqs: np.ndarray
    magnitudes: np.ndarray

    @classmethod
    def empty(cls) -> "SpectrumResult":
        return cls(freqs=np.empty(0, dtype=float), magnitudes=np.empty(0, dtype=float))

    def __len__(self) -> int:
        return int(self.freqs.size)

    def peak(self) -> Optional[tuple[float, float]]:
        """Return ``(freq, magnitude)`` of the strongest non-DC bin, if any."""
        if self.magnitudes.size < 2:
            return None
        idx = int(np.argmax(self.magnitudes[1:])) + 1
        return float(self.freqs[idx]), float(self.magnitudes[idx])


@dataclass(frozen=True)
class ClassificationResult:
    label: ActivityLabel
    rms: float
    threshold: float


@dataclass(frozen=True)
class PipelineResult:
    """Everything a presentation layer needs to draw one channel."""

    channel_id: str
    time_axis: np.ndarray
    raw: np.ndarray
    filtered: np.ndarray
    spectrum: SpectrumResult
    classification: ClassificationResult


def as_float_array(values: Sequence[float] | np.ndarray) -> np.ndarray:
    """Convert input to a 1-D float64 array without validating finiteness."""
    arr = np.asarray(values, dtype=float)
    return arr.reshape(-1)
