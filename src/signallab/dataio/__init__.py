"""Data input helpers (JSON/CSV ingestion and sample datasets).

Utility modules here keep input concerns isolated from the analysis code:
- :mod:`ingestion` validates uploaded JSON or CSV into a :class:`Dataset`.
- :mod:`synthetic` builds reproducible EMG/EEG sample recordings.
- :mod:`catalog` serves ready-made datasets and their summaries by id.
"""

from .catalog import DatasetSummary, SampleCatalog, summarize_dataset
from .ingestion import load_dataset_file, normalize_json, parse_delimited_text
from .synthetic import create_synthetic_datasets

__all__ = [
    "DatasetSummary",
    "SampleCatalog",
    "create_synthetic_datasets",
    "load_dataset_file",
    "normalize_json",
    "parse_delimited_text",
    "summarize_dataset",
]
