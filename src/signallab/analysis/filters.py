"""Filtering helpers."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike
from scipy import signal

from ..core.models import FilterConfig, FilterType, as_float_array
from .timebase import resolve_sampling_rate


def _rc_and_dt(cutoff_hz: float, sample_rate_hz: float) -> tuple[float, float]:
    rc = 1.0 / (2.0 * math.pi * cutoff_hz)
    dt = 1.0 / sample_rate_hz
    return rc, dt


def _is_active(cutoff_hz: Optional[float]) -> bool:
    return cutoff_hz is not None and cutoff_hz > 0


def _run_recurrence(first: float, rest: np.ndarray, b: np.ndarray, a: np.ndarray, zi: float) -> np.ndarray:
    out = np.empty(rest.size + 1, dtype=float)
    out[0] = first
    if rest.size:
        out[1:], _ = signal.lfilter(b, a, rest, zi=np.array([zi]))
    return out


def lowpass(data: ArrayLike, sample_rate_hz: Optional[float], cutoff_hz: Optional[float]) -> np.ndarray:
    """
    Apply a single-pole IIR low-pass filter.

    Implements ``y[0] = x[0]`` and ``y[i] = y[i-1] + alpha * (x[i] - y[i-1])``
    with ``alpha = dt / (rc + dt)``. A missing or non-positive cutoff returns
    the input unchanged.

    Parameters
    ----------
    data:
        1-D array-like of samples.
    sample_rate_hz:
        Sampling rate in Hz; None or non-positive uses the default rate.
    cutoff_hz:
        Cutoff frequency in Hz. Values above Nyquist are accepted.

    Returns
    -------
    np.ndarray
        Filtered samples, same length as the input.
    """
    arr = as_float_array(data)
    if arr.size == 0 or not _is_active(cutoff_hz):
        return arr
    rc, dt = _rc_and_dt(float(cutoff_hz), resolve_sampling_rate(sample_rate_hz))
    alpha = dt / (rc + dt)
    b = np.array([alpha])
    a = np.array([1.0, alpha - 1.0])
    # State carried into x[1] from y[0] = x[0]
    return _run_recurrence(arr[0], arr[1:], b, a, (1.0 - alpha) * arr[0])


def highpass(data: ArrayLike, sample_rate_hz: Optional[float], cutoff_hz: Optional[float]) -> np.ndarray:
    """
    Apply a single-pole IIR high-pass filter.

    Implements ``y[0] = 0`` and ``y[i] = alpha * (y[i-1] + x[i] - x[i-1])``
    with ``alpha = rc / (rc + dt)``. A missing or non-positive cutoff returns
    the input unchanged.
    """
    arr = as_float_array(data)
    if arr.size == 0 or not _is_active(cutoff_hz):
        return arr
    rc, dt = _rc_and_dt(float(cutoff_hz), resolve_sampling_rate(sample_rate_hz))
    alpha = rc / (rc + dt)
    b = np.array([alpha, -alpha])
    a = np.array([1.0, -alpha])
    # State carried into x[1] from y[0] = 0
    return _run_recurrence(0.0, arr[1:], b, a, -alpha * arr[0])


def apply_filter(
    data: ArrayLike,
    sample_rate_hz: Optional[float],
    config: FilterConfig | None,
) -> np.ndarray:
    """
    Run the filter selected by ``config`` over ``data``.

    ``bandpass`` cascades the high-pass stage (``low_cut_hz``) into the
    low-pass stage (``high_cut_hz``). The two cutoffs are not checked against
    each other, so an inverted range simply yields the cascade's output.
    ``none``, a missing config, or empty input return the input unchanged.
    """
    arr = as_float_array(data)
    if arr.size == 0 or config is None or config.type is FilterType.NONE:
        return arr

    sr = resolve_sampling_rate(sample_rate_hz)

    if config.type is FilterType.LOWPASS:
        return lowpass(arr, sr, config.high_cut_hz)
    if config.type is FilterType.HIGHPASS:
        return highpass(arr, sr, config.low_cut_hz)
    if config.type is FilterType.BANDPASS:
        return lowpass(highpass(arr, sr, config.low_cut_hz), sr, config.high_cut_hz)
    return arr
