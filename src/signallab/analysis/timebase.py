"""Sample-index to seconds mapping."""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..config.defaults import DEFAULT_SAMPLING_RATE


def resolve_sampling_rate(sampling_rate: Optional[float]) -> float:
    """Return ``sampling_rate`` or the default when it is unset or not positive."""
    if sampling_rate is None:
        return DEFAULT_SAMPLING_RATE
    sr = float(sampling_rate)
    if not np.isfinite(sr) or sr <= 0:
        return DEFAULT_SAMPLING_RATE
    return sr


def build_time_axis(length: int, sampling_rate: Optional[float] = None) -> np.ndarray:
    """
    Build the time axis (seconds) for ``length`` samples.

    Element ``i`` equals ``i / sampling_rate``. A missing or zero sampling
    rate falls back to :data:`DEFAULT_SAMPLING_RATE`.
    """
    n = max(0, int(length))
    dt = 1.0 / resolve_sampling_rate(sampling_rate)
    return np.arange(n, dtype=float) * dt
