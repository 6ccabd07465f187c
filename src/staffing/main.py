from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

import pandas as pd

from staffing.config import Config, cfg
from staffing.input_data import InputData, input_from_json
from staffing.reporting import Reporter
from staffing.reporting.summary import project_coverage_frame


def run_report(
    config: Config | None = None,
    data: InputData | None = None,
    input_path: str | Path | None = None,
    reporter: Reporter | None = None,
    validate_config: bool = True,
    enable_reporting: bool = True,
) -> pd.DataFrame:
    """
    Load input data and report staffing coverage for every project.

    Parameters
    ----------
    config:
        The configuration for the run. Defaults to `staffing.config.cfg` when omitted.
    data:
        Pre-built `InputData`. When omitted it is loaded from `input_path` (or the
        bundled example JSON).
    input_path:
        JSON file with projects, workers, vehicles and assignments. Ignored when
        `data` is supplied.
    reporter:
        Custom reporter instance. Defaults to `Reporter(config)`.
    validate_config:
        Toggle to run `Config.validate()` first.
    enable_reporting:
        When False, nothing is printed or written; only the summary frame is
        returned.

    Returns
    -------
    pd.DataFrame
        One row per project (see `project_coverage_frame`).
    """
    cfg_obj = config or cfg
    if validate_config:
        cfg_obj.validate()

    input_data = data if data is not None else input_from_json(input_path)

    if not enable_reporting:
        return project_coverage_frame(
            input_data, ignore_paused=cfg_obj.IGNORE_PAUSED_PROJECTS
        )

    active_reporter = reporter or Reporter(cfg_obj)
    return active_reporter.report(input_data)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Report worker coverage and double bookings for projects."
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="JSON file with projects/workers/vehicles/assignments "
        "(default: bundled example).",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for report.txt, CSV exports and charts (default: outputs).",
    )
    parser.add_argument(
        "--no-plots", action="store_true", help="Skip the coverage chart."
    )
    parser.add_argument(
        "--include-paused",
        action="store_true",
        help="Count bookings on paused projects as conflicts.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> pd.DataFrame:
    """CLI entry point."""
    args = parse_args(argv)
    config = Config(
        ENABLE_PLOTS=not args.no_plots,
        IGNORE_PAUSED_PROJECTS=not args.include_paused,
    )
    if args.output_dir:
        config.OUTPUT_DIR = Path(args.output_dir)
    return run_report(config=config, input_path=args.input)


if __name__ == "__main__":
    main()
