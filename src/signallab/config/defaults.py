"""Fixed constants shared by ingestion and the analysis pipeline."""

from __future__ import annotations

from typing import Any, Dict, List

DEFAULT_SAMPLING_RATE: float = 1000.0
MAX_SPECTRUM_POINTS: int = 4096
DEFAULT_THRESHOLD_RMS: float = 0.2
DEFAULT_ANALYSIS_WINDOW_SECONDS: float = 0.5

DATASET_TYPE_CUSTOM = "Custom"
DATASET_SCHEMA_VERSION = 1

FILTER_TYPES: List[Dict[str, str]] = [
    {"value": "none", "label": "No filter"},
    {"value": "lowpass", "label": "Low-pass"},
    {"value": "highpass", "label": "High-pass"},
    {"value": "bandpass", "label": "Band-pass"},
]

DEFAULT_FILTER_CONFIG: Dict[str, Any] = {
    "type": "none",
    "lowCutHz": 20.0,
    "highCutHz": 450.0,
}
