"""Signal analysis utilities (filtering, spectrum, and feature extraction).

This package gathers pure helpers that operate on NumPy arrays of samples.
Modules such as :mod:`filters`, :mod:`spectrum`, :mod:`features` and
:mod:`timebase` hold no state between calls and perform no I/O, so they can
be reused in command-line tools, automated tests, or a UI layer alike.
"""

from .features import classify_activity, rms
from .filters import apply_filter, highpass, lowpass
from .spectrum import compute_spectrum
from .timebase import build_time_axis

__all__ = [
    "apply_filter",
    "build_time_axis",
    "classify_activity",
    "compute_spectrum",
    "highpass",
    "lowpass",
    "rms",
]
