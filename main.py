"""Run ``signallab-analyze`` from a source checkout without installing it.

    python main.py recording.csv --filter bandpass --low-cut 20 --high-cut 450
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from signallab.tools.analyze import main as analyze_main  # noqa: E402


def main(argv: Sequence[str] | None = None) -> int:
    return analyze_main(sys.argv[1:] if argv is None else list(argv))


if __name__ == "__main__":
    raise SystemExit(main())
