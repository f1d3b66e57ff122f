"""Synthetic EMG/EEG sample datasets.

Used as the built-in sample catalog when no recording is at hand. All noise
is drawn from an explicit :class:`numpy.random.Generator` so a given seed
always reproduces the same datasets.
"""

from __future__ import annotations

from typing import List

import numpy as np

from ..core.models import Channel, Dataset

SeedLike = int | np.random.Generator | None

SYNTHETIC_SOURCE = "synthetic"


def _as_generator(rng: SeedLike) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def generate_emg_grip_rest(rng: SeedLike = None) -> Dataset:
    """Forearm-like EMG with a 50 Hz grip burst strictly between 1 s and 2 s."""
    gen = _as_generator(rng)
    sampling_rate = 1000.0
    seconds = 3
    total = int(sampling_rate * seconds)

    t = np.arange(total, dtype=float) / sampling_rate
    is_grip = (t > 1.0) & (t < 2.0)
    noise = gen.standard_normal(total) * 0.05
    burst_noise = gen.standard_normal(total) * 0.1
    burst = np.where(is_grip, np.sin(2 * np.pi * 50 * t) * 0.8 + burst_noise, 0.0)

    return Dataset(
        id="emg_grip_rest",
        name="Synthetic EMG: Grip vs Rest",
        type="EMG",
        sampling_rate=sampling_rate,
        channels=(Channel(id="ch1", label="EMG Channel 1", data=noise + burst),),
        labels=["grip" if g else "rest" for g in is_grip],
        meta={
            "description": "Simulated forearm EMG with a grip burst between 1 and 2 seconds.",
            "source": SYNTHETIC_SOURCE,
        },
    )


def generate_eeg_alpha(rng: SeedLike = None) -> Dataset:
    """EEG-like trace dominated by a 10 Hz alpha rhythm plus 1 Hz drift."""
    gen = _as_generator(rng)
    sampling_rate = 250.0
    seconds = 4
    total = int(sampling_rate * seconds)

    t = np.arange(total, dtype=float) / sampling_rate
    alpha = np.sin(2 * np.pi * 10 * t)
    slow_drift = np.sin(2 * np.pi * 1 * t) * 0.1
    noise = gen.standard_normal(total) * 0.05

    return Dataset(
        id="eeg_alpha",
        name="Synthetic EEG: Alpha Rhythm",
        type="EEG",
        sampling_rate=sampling_rate,
        channels=(
            Channel(id="ch1", label="EEG Channel (Occipital-like)", data=alpha * 0.5 + slow_drift + noise),
        ),
        labels=["eeg-alpha"] * total,
        meta={
            "description": "Simulated EEG with a dominant 10 Hz alpha component.",
            "source": SYNTHETIC_SOURCE,
        },
    )


def create_synthetic_datasets(seed: SeedLike = None) -> List[Dataset]:
    """Return the EMG and EEG samples, both drawn from one generator."""
    gen = _as_generator(seed)
    return [generate_emg_grip_rest(gen), generate_eeg_alpha(gen)]
