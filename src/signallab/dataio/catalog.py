"""In-memory catalog of ready-made datasets."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..core.models import Dataset
from .synthetic import SeedLike, create_synthetic_datasets

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatasetSummary:
    id: str
    name: str
    type: str
    sampling_rate: float
    channel_count: int
    length: int
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "samplingRate": self.sampling_rate,
            "channelCount": self.channel_count,
            "length": self.length,
            "meta": dict(self.meta),
        }


def summarize_dataset(dataset: Dataset) -> DatasetSummary:
    """Describe ``dataset`` without its sample arrays; ``length`` is the first channel's."""
    return DatasetSummary(
        id=dataset.id,
        name=dataset.name,
        type=dataset.type,
        sampling_rate=dataset.sampling_rate,
        channel_count=len(dataset.channels),
        length=dataset.sample_count,
        meta=dict(dataset.meta or {}),
    )


class SampleCatalog:
    """Lookup of datasets by id, preserving insertion order."""

    def __init__(self, datasets: Iterable[Dataset] = ()) -> None:
        self._datasets: Dict[str, Dataset] = {}
        for ds in datasets:
            self.add(ds)

    @classmethod
    def synthetic(cls, seed: SeedLike = None) -> "SampleCatalog":
        """Catalog holding the built-in synthetic EMG/EEG samples."""
        return cls(create_synthetic_datasets(seed))

    def add(self, dataset: Dataset) -> None:
        if dataset.id in self._datasets:
            logger.warning("Replacing dataset %r in catalog", dataset.id)
        self._datasets[dataset.id] = dataset

    def get(self, dataset_id: str) -> Optional[Dataset]:
        return self._datasets.get(dataset_id)

    def list_summaries(self) -> List[DatasetSummary]:
        return [summarize_dataset(ds) for ds in self._datasets.values()]

    def __len__(self) -> int:
        return len(self._datasets)

    def __contains__(self, dataset_id: object) -> bool:
        return dataset_id in self._datasets
