"""Core data model and the analysis pipeline contract.

:mod:`models` defines the immutable dataset/channel value objects together
with the filter settings and result containers exchanged between stages.
:mod:`pipeline` sequences filtering, spectrum analysis and classification for
one selected channel.
"""

from .models import (
    ActivityLabel,
    Channel,
    ClassificationResult,
    Dataset,
    FilterConfig,
    FilterType,
    PipelineResult,
    SpectrumResult,
)

__all__ = [
    "ActivityLabel",
    "Channel",
    "ClassificationResult",
    "Dataset",
    "FilterConfig",
    "FilterType",
    "PipelineResult",
    "SpectrumResult",
]
