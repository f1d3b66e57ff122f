"""Magnitude spectrum over a capped analysis window."""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from ..config.defaults import MAX_SPECTRUM_POINTS
from ..core.models import SpectrumResult, as_float_array
from .timebase import resolve_sampling_rate


def compute_spectrum(
    data: ArrayLike,
    sample_rate_hz: Optional[float],
    *,
    max_points: int = MAX_SPECTRUM_POINTS,
) -> SpectrumResult:
    """
    Compute frequency bins and magnitudes for a real-valued signal.

    Only the first ``n = min(len(data), max_points)`` samples are analysed and
    no window function is applied, so leakage between bins is expected. Bin
    ``k`` for ``k in [0, n // 2)`` has frequency ``k * sr / n`` and magnitude
    ``|sum_t x[t] * exp(-2j*pi*k*t/n)|``; the real FFT produces the same values
    as the direct summation.

    Parameters
    ----------
    data:
        1-D array-like of samples.
    sample_rate_hz:
        Sampling rate in Hz. ``None`` or non-positive uses the default rate.
    max_points:
        Cap on the analysis window length.

    Returns
    -------
    SpectrumResult
        ``freqs`` and ``magnitudes`` of length ``n // 2``; empty for empty input.
    """
    arr = as_float_array(data)
    if arr.size == 0:
        return SpectrumResult.empty()

    sr = resolve_sampling_rate(sample_rate_hz)
    n = min(arr.size, max(1, int(max_points)))
    half = n // 2

    fft_result = np.fft.rfft(arr[:n])[:half]
    freqs = np.arange(half, dtype=float) * sr / n
    magnitude = np.abs(fft_result)

    return SpectrumResult(freqs=freqs, magnitudes=magnitude)
