"""
Matplotlib preview of one pipeline run.

Draws three stacked panels: the raw and filtered waveform against time, the
magnitude spectrum of the filtered signal, and the classifier RMS against its
threshold. Used by ``signallab-analyze --plot`` / ``--save``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from ..core.models import Dataset, PipelineResult


def build_figure(dataset: Dataset, result: PipelineResult) -> Figure:
    fig, (ax_wave, ax_spec, ax_cls) = plt.subplots(
        3, 1, figsize=(10, 8), gridspec_kw={"height_ratios": [3, 3, 1]}
    )
    fig.suptitle(f"{dataset.name} [{result.channel_id}]")

    ax_wave.plot(result.time_axis, result.raw, label="raw", linewidth=0.8, alpha=0.6)
    ax_wave.plot(result.time_axis, result.filtered, label="filtered", linewidth=0.8)
    ax_wave.set_xlabel("Time (s)")
    ax_wave.set_ylabel("Amplitude")
    ax_wave.legend(loc="upper right")

    ax_spec.plot(result.spectrum.freqs, result.spectrum.magnitudes, linewidth=0.8)
    ax_spec.set_xlabel("Frequency (Hz)")
    ax_spec.set_ylabel("Magnitude")

    cls = result.classification
    ax_cls.barh(["rms"], [cls.rms], color="tab:orange" if cls.label.value == "Grip" else "tab:blue")
    ax_cls.axvline(cls.threshold, color="k", linestyle="--", linewidth=1.0)
    ax_cls.set_title(f"{cls.label.value} (rms={cls.rms:.3f}, threshold={cls.threshold:.3f})")

    fig.tight_layout()
    return fig


def show_or_save(dataset: Dataset, result: PipelineResult, save_path: Optional[Path] = None) -> None:
    """Render ``result``; write it to ``save_path`` when given, else open a window."""
    fig = build_figure(dataset, result)
    try:
        if save_path is not None:
            fig.savefig(save_path)
        else:
            plt.show()
    finally:
        plt.close(fig)
