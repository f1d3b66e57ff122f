"""Sequencing of the analysis stages for one dataset channel.

The raw channel is filtered once; spectrum analysis and activity
classification both run on the fully filtered array. The time axis is built
from the raw sample count. Nothing is cached between calls, so callers re-run
the pipeline whenever the dataset, channel, filter or threshold changes.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..analysis.features import classify_activity
from ..analysis.filters import apply_filter
from ..analysis.spectrum import compute_spectrum
from ..analysis.timebase import build_time_axis
from ..config.runtime import SignalLabConfig
from ..errors import ChannelNotFoundError
from ..tools.debug import time_block
from .models import Channel, Dataset, FilterConfig, PipelineResult

__all__ = ["select_channel", "run_pipeline"]

logger = logging.getLogger(__name__)


def select_channel(dataset: Dataset, channel_id: Optional[str] = None) -> Channel:
    """
    Return the channel with ``channel_id``, or the first channel when None.

    Raises
    ------
    ChannelNotFoundError
        ``channel_id`` is not present, or the dataset has no channels.
    """
    if channel_id is None:
        if not dataset.channels:
            raise ChannelNotFoundError(f"Dataset {dataset.id!r} has no channels")
        return dataset.channels[0]
    channel = dataset.channel(channel_id)
    if channel is None:
        raise ChannelNotFoundError(f"Channel {channel_id!r} not found in dataset {dataset.id!r}")
    return channel


def _resolve_filter(
    filter_config: FilterConfig | Mapping[str, Any] | None,
    config: SignalLabConfig,
) -> FilterConfig:
    if isinstance(filter_config, FilterConfig):
        return filter_config
    if filter_config is None:
        return FilterConfig.from_mapping(config.filter_mapping())
    return FilterConfig.from_mapping(filter_config)


def run_pipeline(
    dataset: Dataset,
    channel_id: Optional[str] = None,
    filter_config: FilterConfig | Mapping[str, Any] | None = None,
    *,
    threshold_rms: Optional[float] = None,
    analysis_window_seconds: Optional[float] = None,
    config: SignalLabConfig | None = None,
) -> PipelineResult:
    """
    Filter one channel and derive its spectrum and activity label.

    Parameters
    ----------
    dataset:
        Dataset produced by ingestion or a sample provider.
    channel_id:
        Channel to analyse; None selects the first channel.
    filter_config:
        A :class:`FilterConfig` or its mapping shape. None uses the filter
        configured in ``config``.
    threshold_rms, analysis_window_seconds:
        Classifier options; None uses the values in ``config``.
    config:
        Pipeline defaults; None uses :class:`SignalLabConfig` defaults.
    """
    cfg = config or SignalLabConfig()
    channel = select_channel(dataset, channel_id)
    fcfg = _resolve_filter(filter_config, cfg)
    sr = dataset.sampling_rate or cfg.default_sampling_rate

    raw = channel.data
    with time_block(f"filter[{fcfg.type.value}] {channel.id}"):
        filtered = apply_filter(raw, sr, fcfg)
    with time_block(f"spectrum {channel.id}"):
        spectrum = compute_spectrum(filtered, sr, max_points=cfg.max_spectrum_points)
    with time_block(f"classify {channel.id}"):
        classification = classify_activity(
            filtered,
            sr,
            threshold_rms=cfg.threshold_rms if threshold_rms is None else threshold_rms,
            analysis_window_seconds=(
                cfg.analysis_window_seconds
                if analysis_window_seconds is None
                else analysis_window_seconds
            ),
        )

    logger.debug(
        "Pipeline %s/%s: %d samples, %d spectrum bins, label=%s",
        dataset.id,
        channel.id,
        raw.size,
        len(spectrum),
        classification.label.value,
    )
    return PipelineResult(
        channel_id=channel.id,
        time_axis=build_time_axis(raw.size, sr),
        raw=raw,
        filtered=filtered,
        spectrum=spectrum,
        classification=classification,
    )
