"""RMS energy and the grip/rest activity classifier."""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Any, Optional

import numpy as np
from numpy.typing import ArrayLike

from ..config.defaults import DEFAULT_ANALYSIS_WINDOW_SECONDS, DEFAULT_THRESHOLD_RMS
from ..core.models import ActivityLabel, ClassificationResult, as_float_array
from .timebase import resolve_sampling_rate

logger = logging.getLogger(__name__)


def rms(signal: ArrayLike) -> float:
    """
    Compute root-mean-square (RMS) value of a 1-D signal.

    Parameters
    ----------
    signal:
        1-D array-like of samples.

    Returns
    -------
    float
        RMS value of the signal, ``0.0`` for empty input.
    """
    arr = as_float_array(signal)
    if arr.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(np.square(arr))))


def _resolve_threshold(threshold_rms: Any) -> float:
    if isinstance(threshold_rms, Real) and not isinstance(threshold_rms, bool):
        return float(threshold_rms)
    return DEFAULT_THRESHOLD_RMS


def _leading_window(arr: np.ndarray, window_s: float, sample_rate_hz: float) -> np.ndarray:
    """
    Slice the analysis window off the front of ``arr``.

    An infinite window keeps every sample and a NaN one keeps none. A negative
    length counts from the end, so ``-k`` drops the last ``k`` samples.
    """
    span = float(window_s) * sample_rate_hz
    if math.isnan(span):
        return arr[:0]
    if math.isinf(span):
        return arr if span > 0 else arr[:0]
    return arr[: min(arr.size, math.floor(span))]


def classify_activity(
    signal: ArrayLike,
    sample_rate_hz: Optional[float],
    *,
    threshold_rms: Optional[float] = None,
    analysis_window_seconds: float = DEFAULT_ANALYSIS_WINDOW_SECONDS,
) -> ClassificationResult:
    """
    Label the leading window of ``signal`` as grip or rest.

    The RMS of the first ``min(len, floor(window_s * sr))`` samples is compared
    against ``threshold_rms``; ``rms >= threshold`` is a grip. A threshold that
    is missing or not a number falls back to :data:`DEFAULT_THRESHOLD_RMS`,
    while an explicit ``0`` is kept. Empty input yields ``No data``.
    """
    arr = as_float_array(signal)
    if arr.size == 0:
        return ClassificationResult(label=ActivityLabel.NO_DATA, rms=0.0, threshold=0.0)

    sr = resolve_sampling_rate(sample_rate_hz)
    window = _leading_window(arr, analysis_window_seconds, sr)
    window_rms = rms(window)
    threshold = _resolve_threshold(threshold_rms)

    label = ActivityLabel.GRIP if window_rms >= threshold else ActivityLabel.REST
    logger.debug(
        "classified %d-sample window: rms=%.4f threshold=%.4f -> %s",
        window.size,
        window_rms,
        threshold,
        label.value,
    )
    return ClassificationResult(label=label, rms=window_rms, threshold=threshold)
