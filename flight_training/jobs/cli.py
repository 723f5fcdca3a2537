"""Command-line entrypoint for building the training dataset."""

import argparse
import logging
from dataclasses import replace
from typing import List, Optional

from flight_training.config import REPO_ROOT, AppConfig, load_config
from flight_training.jobs.runner import RunConfig, run_job
from flight_training.logging_utils import configure_logging, generate_run_id

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Augment flight records with historical average delays for training."
    )
    parser.add_argument(
        "--input",
        default=None,
        help="Path or URL of the raw flights CSV (default: FLIGHTS_INPUT).",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Output prefix; delays.csv and flights.csv are appended (default: OUTPUT_PREFIX).",
    )
    parser.add_argument(
        "--trainday-csv",
        default=None,
        help="Path or URL of trainday.csv (default: TRAINDAY_CSV).",
    )
    parser.add_argument(
        "--no-trainday-filter",
        action="store_true",
        help="Keep flights from every date instead of train days only.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads for the per-record stages (default: WORKERS or 1).",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=10_000,
        help="Records per work chunk (default: 10000).",
    )
    parser.add_argument(
        "--run-id",
        default=None,
        help="Identifier used in log file names (default: UTC timestamp).",
    )
    return parser.parse_args(argv)


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    overrides = {}
    if args.input:
        overrides["input_path"] = args.input
    if args.output:
        overrides["output_prefix"] = args.output
    if args.trainday_csv:
        overrides["trainday_csv_path"] = args.trainday_csv
    if args.no_trainday_filter:
        overrides["trainday_csv_path"] = None
    if args.workers is not None:
        if args.workers < 1:
            raise ValueError("--workers must be positive")
        overrides["workers"] = args.workers
    return replace(config, **overrides)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    run_id = args.run_id or generate_run_id()
    try:
        config = _apply_overrides(load_config(), args)
    except Exception as exc:  # noqa: BLE001 - log and exit gracefully with a file
        # Fall back to a default log location so failures are still captured per run.
        fallback = AppConfig(
            input_path="",
            output_prefix="",
            trainday_csv_path=None,
            log_directory=REPO_ROOT / "logs",
            log_level="INFO",
        )
        configure_logging(fallback, run_id=run_id)
        LOGGER.error("Failed to load configuration: %s", exc)
        return 1

    configure_logging(config, run_id=run_id)

    job_config = RunConfig(workers=config.workers, chunk_size=args.chunk_size)
    try:
        run_job(config, job_config, run_id=run_id)
    except Exception:  # noqa: BLE001 - fatal errors end the run
        LOGGER.exception("Run %s aborted", run_id)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
