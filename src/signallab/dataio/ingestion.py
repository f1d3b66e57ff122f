"""Turn user-supplied JSON or delimited text into a :class:`Dataset`."""

from __future__ import annotations

import json
import logging
import math
import re
import uuid
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence

import numpy as np

from ..config.defaults import (
    DATASET_SCHEMA_VERSION,
    DATASET_TYPE_CUSTOM,
    DEFAULT_SAMPLING_RATE,
)
from ..core.models import Channel, Dataset
from ..errors import (
    EmptyChannelError,
    EmptyInputError,
    InvalidEncodingError,
    InvalidJsonError,
    MissingChannelsError,
    NoNumericValuesError,
)

logger = logging.getLogger(__name__)

CSV_CHANNEL_ID = "ch1"
CSV_CHANNEL_LABEL = "Channel 1"
CSV_DESCRIPTION = "User uploaded CSV dataset. Parsed one numeric value per row or last column."
JSON_DESCRIPTION = "User uploaded dataset"

# Records end at LF or CRLF only; other control characters stay inside a line
_LINE_BREAK = re.compile(r"\r?\n")


def _new_dataset_id() -> str:
    return f"upload_{uuid.uuid4().hex}"


def _coerce_number(raw: Any) -> Optional[float]:
    """Return ``raw`` as a finite float, or None if it is not one."""
    if raw is None:
        return None
    if isinstance(raw, str) and "_" in raw:
        # float() accepts digit separators, textual input must not
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(value):
        return None
    return value


def _text_or_default(value: Any, default: str) -> str:
    if value is None or value == "":
        return default
    return str(value)


def _is_unset(value: Any) -> bool:
    """True for None and falsy scalars (``""``, ``0``, ``False``); containers count as set."""
    if value is None:
        return True
    if isinstance(value, (list, tuple, Mapping)):
        return False
    return not value


def resolve_sampling_rate(value: Any) -> float:
    """Return ``value`` as a sampling rate if finite and positive, else the default."""
    sr = _coerce_number(value)
    if sr is not None and sr > 0:
        return sr
    return DEFAULT_SAMPLING_RATE


def _normalize_numeric_array(data: Any, label: str) -> np.ndarray:
    if not isinstance(data, (list, tuple, np.ndarray)):
        raise EmptyChannelError(f"{label} data must be an array of numbers")

    values: List[float] = []
    for raw in data:
        value = _coerce_number(raw)
        if value is not None:
            values.append(value)

    if not values:
        raise EmptyChannelError(f"{label} contains no numeric samples")
    dropped = len(data) - len(values)
    if dropped:
        logger.warning("%s: dropped %d non-numeric or non-finite samples", label, dropped)
    return np.asarray(values, dtype=float)


def _normalize_channel(raw: Any, index: int) -> Channel:
    fallback_label = f"Channel {index + 1}"
    ch: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    return Channel(
        id=_text_or_default(ch.get("id"), f"ch{index + 1}"),
        label=_text_or_default(ch.get("label"), fallback_label),
        data=_normalize_numeric_array(ch.get("data"), fallback_label),
    )


def _warn_on_ragged(channels: Sequence[Channel], name: str) -> None:
    lengths = {len(ch) for ch in channels}
    if len(lengths) > 1:
        logger.warning(
            "Dataset %r has channels of different lengths: %s",
            name,
            ", ".join(f"{ch.id}={len(ch)}" for ch in channels),
        )


def normalize_json(payload: Mapping[str, Any], source_name: str | None = None) -> Dataset:
    """
    Validate and coerce a decoded JSON object into a :class:`Dataset`.

    Channels come from ``payload["channels"]``; when that key is missing (or a
    falsy scalar such as ``""``/``0``) but ``payload["data"]`` is an array, a
    single ``ch1`` channel is synthesized from it. An explicit empty list is
    still an error. Non-finite samples, ``null`` entries and strings that are
    not plain decimal numbers are dropped. Channels of different lengths are
    accepted (a warning is logged).

    Raises
    ------
    MissingChannelsError
        No non-empty channel list can be resolved.
    EmptyChannelError
        A channel has no finite numeric samples.
    """
    if not isinstance(payload, Mapping):
        raise MissingChannelsError("Dataset must include at least one channel")

    sampling_rate = resolve_sampling_rate(payload.get("samplingRate"))

    channels_raw = payload.get("channels")
    if _is_unset(channels_raw) and isinstance(payload.get("data"), list):
        channels_raw = [{"id": "ch1", "label": "Channel 1", "data": payload["data"]}]

    if not isinstance(channels_raw, list) or not channels_raw:
        raise MissingChannelsError("Dataset must include at least one channel")

    channels = tuple(_normalize_channel(ch, idx) for idx, ch in enumerate(channels_raw))
    name = _text_or_default(payload.get("name"), source_name or "Uploaded dataset")
    _warn_on_ragged(channels, name)

    labels = payload.get("labels")
    dataset = Dataset(
        id=_text_or_default(payload.get("id"), _new_dataset_id()),
        name=name,
        type=_text_or_default(payload.get("type"), DATASET_TYPE_CUSTOM),
        sampling_rate=sampling_rate,
        channels=channels,
        labels=list(labels) if isinstance(labels, list) else None,
        meta={
            "description": _text_or_default(payload.get("description"), JSON_DESCRIPTION),
            "schemaVersion": DATASET_SCHEMA_VERSION,
        },
    )
    logger.debug(
        "Normalized JSON dataset %r: %d channel(s) at %.3f Hz",
        dataset.name,
        len(dataset.channels),
        dataset.sampling_rate,
    )
    return dataset


def parse_delimited_text(text: str, source_name: str | None = None) -> Dataset:
    """
    Parse comma-separated text into a single-channel :class:`Dataset`.

    Each non-blank line contributes its last comma-separated field as one
    sample; lines whose last field is not a finite number are skipped.

    Raises
    ------
    EmptyInputError
        The text has no non-blank lines.
    NoNumericValuesError
        No line yields a finite number.
    """
    lines = [line.strip() for line in _LINE_BREAK.split(text)]
    lines = [line for line in lines if line]
    if not lines:
        raise EmptyInputError("CSV file is empty")

    values: List[float] = []
    for line in lines:
        value = _coerce_number(line.split(",")[-1])
        if value is not None:
            values.append(value)

    if not values:
        raise NoNumericValuesError("No numeric values parsed from CSV")
    if len(values) < len(lines):
        logger.debug("Skipped %d non-numeric line(s)", len(lines) - len(values))

    return Dataset(
        id=_new_dataset_id(),
        name=source_name or "Uploaded CSV",
        type=DATASET_TYPE_CUSTOM,
        sampling_rate=DEFAULT_SAMPLING_RATE,
        channels=(
            Channel(
                id=CSV_CHANNEL_ID,
                label=CSV_CHANNEL_LABEL,
                data=np.asarray(values, dtype=float),
            ),
        ),
        meta={
            "description": CSV_DESCRIPTION,
            "schemaVersion": DATASET_SCHEMA_VERSION,
        },
    )


def load_dataset_file(path: str | Path) -> Dataset:
    """
    Read ``path`` and ingest it.

    ``.json`` files go through :func:`normalize_json`; everything else is
    treated as delimited text. The file name becomes the dataset name.
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidEncodingError(f"{file_path.name} is not UTF-8 text: {exc}") from exc
    if file_path.suffix.lower() == ".json":
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidJsonError(f"Failed to parse {file_path.name}: {exc}") from exc
        if not isinstance(payload, dict):
            raise InvalidJsonError(f"{file_path.name} must contain a JSON object")
        return normalize_json(payload, file_path.name)
    return parse_delimited_text(text, file_path.name)
