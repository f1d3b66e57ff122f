"""Configuration objects and constants for Signal Lab.

This package knows how to load a YAML descriptor (``signallab.yaml``) that
tunes the analysis pipeline: default sampling rate, spectrum window cap,
classifier threshold and the default filter. The resulting typed dataclass
(see :mod:`runtime`) is passed to :func:`signallab.core.pipeline.run_pipeline`
and the command-line tools so every caller agrees on the same defaults.
"""

from .runtime import SignalLabConfig, config_from_mapping, load_config

__all__ = ["SignalLabConfig", "config_from_mapping", "load_config"]
