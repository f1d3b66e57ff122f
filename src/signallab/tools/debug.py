"""Stage timing for the analysis pipeline.

Setting ``SIGNALLAB_DEBUG=1`` makes :func:`time_block` log how long each
pipeline stage (filter, spectrum, classifier) took for a channel. Without the
variable the context manager does nothing.
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import Callable, Iterator

logger = logging.getLogger(__name__)

DEBUG_SIGNALLAB = os.getenv("SIGNALLAB_DEBUG", "").lower() in {"1", "true", "yes", "on"}


@contextmanager
def time_block(label: str, *, emitter: Callable[[str], None] | None = None) -> Iterator[None]:
    """Report the wall time spent inside the block as ``"<label> took N ms"``."""
    if not DEBUG_SIGNALLAB:
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        (emitter or logger.debug)(f"{label} took {elapsed_ms:.3f} ms")
