#!/usr/bin/env python3
"""
Command-line front end for the Signal Lab pipeline.

Loads a JSON/CSV recording (or one of the synthetic samples), runs the
filter -> spectrum / classifier pipeline on one channel and prints a short
report. Ingestion problems are reported as ``invalid input`` with exit
status 2 so they can be told apart from analysis failures.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from ..config.defaults import FILTER_TYPES
from ..config.runtime import SignalLabConfig, load_config
from ..core.models import Dataset, FilterConfig, PipelineResult
from ..core.pipeline import run_pipeline
from ..dataio.catalog import SampleCatalog, summarize_dataset
from ..dataio.ingestion import load_dataset_file
from ..errors import ChannelNotFoundError, DatasetValidationError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_INPUT = 2
EXIT_BAD_SELECTION = 3


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Filter a recording, compute its spectrum and classify grip vs rest."
    )
    parser.add_argument("file", nargs="?", help="Path to a .json or .csv recording.")
    parser.add_argument(
        "--sample",
        type=str,
        help="Analyse a built-in synthetic dataset by id instead of a file.",
    )
    parser.add_argument(
        "--list-samples",
        action="store_true",
        help="List the built-in synthetic datasets and exit.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for synthetic samples.")
    parser.add_argument("-c", "--channel", type=str, default=None, help="Channel id (default: first).")
    parser.add_argument(
        "--filter",
        dest="filter_type",
        choices=[ft["value"] for ft in FILTER_TYPES],
        default=None,
        help="Filter type (default: from config).",
    )
    parser.add_argument("--low-cut", type=float, default=None, help="High-pass cutoff in Hz.")
    parser.add_argument("--high-cut", type=float, default=None, help="Low-pass cutoff in Hz.")
    parser.add_argument("--threshold", type=float, default=None, help="RMS threshold for 'Grip'.")
    parser.add_argument("--window", type=float, default=None, help="Analysis window in seconds.")
    parser.add_argument("--config", type=str, default=None, help="YAML configuration file.")
    parser.add_argument("--json", action="store_true", help="Emit the report as JSON.")
    parser.add_argument("--plot", action="store_true", help="Show a Matplotlib preview.")
    parser.add_argument("--save", type=str, default=None, help="Write the preview to an image file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _filter_from_args(args: argparse.Namespace, cfg: SignalLabConfig) -> FilterConfig:
    mapping = cfg.filter_mapping()
    if args.filter_type is not None:
        mapping["type"] = args.filter_type
    if args.low_cut is not None:
        mapping["lowCutHz"] = args.low_cut
    if args.high_cut is not None:
        mapping["highCutHz"] = args.high_cut
    return FilterConfig.from_mapping(mapping)


def build_report(dataset: Dataset, result: PipelineResult, filter_config: FilterConfig) -> dict[str, Any]:
    """Collect the printable parts of a pipeline run."""
    peak = result.spectrum.peak()
    cls = result.classification
    return {
        "dataset": summarize_dataset(dataset).to_mapping(),
        "channel": result.channel_id,
        "filter": {
            "type": filter_config.type.value,
            "lowCutHz": filter_config.low_cut_hz,
            "highCutHz": filter_config.high_cut_hz,
        },
        "classification": {"label": cls.label.value, "rms": cls.rms, "threshold": cls.threshold},
        "spectrum": {
            "bins": len(result.spectrum),
            "peakHz": peak[0] if peak else None,
            "peakMagnitude": peak[1] if peak else None,
        },
    }


def _print_report(report: dict[str, Any]) -> None:
    ds = report["dataset"]
    print(f"Dataset:  {ds['name']} ({ds['type']}, id={ds['id']})")
    print(
        f"          {ds['channelCount']} channel(s), {ds['length']} samples "
        f"@ {ds['samplingRate']:g} Hz"
    )
    flt = report["filter"]
    print(f"Channel:  {report['channel']}  filter={flt['type']}")
    cls = report["classification"]
    print(f"Activity: {cls['label']} (rms={cls['rms']:.4f}, threshold={cls['threshold']:.4f})")
    spec = report["spectrum"]
    if spec["peakHz"] is not None:
        print(f"Spectrum: {spec['bins']} bins, peak {spec['peakHz']:.2f} Hz (|X|={spec['peakMagnitude']:.3f})")
    else:
        print(f"Spectrum: {spec['bins']} bins")


def _load_dataset(args: argparse.Namespace, parser: argparse.ArgumentParser) -> Optional[Dataset]:
    if args.sample:
        catalog = SampleCatalog.synthetic(args.seed)
        dataset = catalog.get(args.sample)
        if dataset is None:
            known = ", ".join(s.id for s in catalog.list_summaries())
            parser.error(f"Unknown sample {args.sample!r} (available: {known})")
        return dataset
    if not args.file:
        parser.error("Specify a recording FILE or --sample ID.")
    path = Path(args.file).expanduser()
    if not path.exists():
        parser.error(f"File not found: {path}")
    return load_dataset_file(path)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_samples:
        for summary in SampleCatalog.synthetic(args.seed).list_summaries():
            print(f"{summary.id:<16} {summary.type:<6} {summary.name}")
        return EXIT_OK

    cfg = load_config(args.config)

    try:
        dataset = _load_dataset(args, parser)
    except DatasetValidationError as exc:
        print(f"invalid input: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    filter_config = _filter_from_args(args, cfg)
    try:
        result = run_pipeline(
            dataset,
            args.channel,
            filter_config,
            threshold_rms=args.threshold,
            analysis_window_seconds=args.window,
            config=cfg,
        )
    except ChannelNotFoundError as exc:
        known = ", ".join(ch.id for ch in dataset.channels)
        print(f"error: {exc.args[0]} (available: {known})", file=sys.stderr)
        return EXIT_BAD_SELECTION

    report = build_report(dataset, result, filter_config)
    if args.json:
        print(json.dumps(report, indent=2))
    else:
        _print_report(report)

    if args.plot or args.save:
        from .plotter import show_or_save

        show_or_save(dataset, result, Path(args.save) if args.save else None)

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
