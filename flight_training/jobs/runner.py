"""Job runner orchestrating parse, aggregate, join, and write stages."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, FrozenSet, Iterable, List, Optional, Sequence, Tuple, TypeVar

from flight_training.config import AppConfig
from flight_training.delays import DelayMeanMap, merge_partials, summarize_flights
from flight_training.formatting import departure_delays_to_csv, to_training_csv
from flight_training.join import join_average_delays
from flight_training.logging_utils import generate_run_id, perf, perf_span
from flight_training.textio import read_lines, write_outputs
from flight_training.transform import Flight, load_traindays, parse_flights

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class RunConfig:
    workers: int = 1
    chunk_size: int = 10_000


@dataclass(frozen=True)
class RunSummary:
    run_id: str
    lines_read: int
    flights: int
    skipped: int
    delay_keys: int
    departure_keys: int
    delays_path: Path
    flights_path: Path


def output_paths(output_prefix: str) -> Tuple[Path, Path]:
    """Return (delays, flights) CSV paths for an output prefix."""
    return Path(f"{output_prefix}delays.csv"), Path(f"{output_prefix}flights.csv")


def _chunked(items: Sequence[T], size: int) -> List[Sequence[T]]:
    return [items[start:start + size] for start in range(0, len(items), size)]


def _map_chunks(
    func: Callable[[T], R], chunks: Iterable[T], workers: int
) -> List[R]:
    """Apply ``func`` to every chunk, preserving chunk order in the result."""
    if workers <= 1:
        return [func(chunk) for chunk in chunks]
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(func, chunks))


def _load_traindays(path: Optional[str]) -> Optional[FrozenSet[str]]:
    if not path:
        LOGGER.info("Train-day filter disabled; keeping flights from every date")
        return None
    with perf_span("pipeline.load_traindays", tags={"path": path}, logger=LOGGER):
        return load_traindays(read_lines(path))


@perf("jobs.run_job", tags={"component": "jobs"})
def run_job(
    config: AppConfig,
    job_config: RunConfig,
    run_id: Optional[str] = None,
) -> RunSummary:
    """Build both output files for one run.

    Stages run strictly in sequence: the train days are materialized before
    parsing, and the mean map is fully merged before any flight is joined.
    Nothing is written until every stage has succeeded.
    """
    if job_config.chunk_size < 1:
        raise ValueError("chunk_size must be positive")

    resolved_run_id = run_id or generate_run_id()
    job_name = getattr(config, "app_name", "flight-training")
    workers = job_config.workers
    LOGGER.info(
        "%s run %s started: input=%s output=%s workers=%s",
        job_name,
        resolved_run_id,
        config.input_path,
        config.output_prefix,
        workers,
    )

    traindays = _load_traindays(config.trainday_csv_path)

    with perf_span("pipeline.read", tags={"path": config.input_path}, logger=LOGGER):
        lines = list(read_lines(config.input_path))

    with perf_span("pipeline.parse", tags={"lines": len(lines)}, logger=LOGGER):
        parsed = _map_chunks(
            lambda chunk: parse_flights(chunk, traindays),
            _chunked(lines, job_config.chunk_size),
            workers,
        )
    flights: List[Flight] = [flight for chunk in parsed for flight in chunk]
    skipped = len(lines) - len(flights)
    LOGGER.info("Parsed %s flights from %s lines (%s skipped)", len(flights), len(lines), skipped)

    flight_chunks = _chunked(flights, job_config.chunk_size)
    with perf_span("pipeline.aggregate", tags={"flights": len(flights)}, logger=LOGGER):
        means: DelayMeanMap = merge_partials(
            _map_chunks(summarize_flights, flight_chunks, workers)
        )

    with perf_span("pipeline.join", tags={"flights": len(flights)}, logger=LOGGER):
        joined = _map_chunks(
            lambda chunk: join_average_delays(chunk, means), flight_chunks, workers
        )
    enriched = [flight for chunk in joined for flight in chunk]

    delays_path, flights_path = output_paths(config.output_prefix)
    with perf_span("pipeline.write", tags={"prefix": config.output_prefix}, logger=LOGGER):
        departure_keys, _ = write_outputs(
            [
                (delays_path, departure_delays_to_csv(means)),
                (flights_path, (to_training_csv(flight) for flight in enriched)),
            ]
        )

    summary = RunSummary(
        run_id=resolved_run_id,
        lines_read=len(lines),
        flights=len(enriched),
        skipped=skipped,
        delay_keys=len(means),
        departure_keys=departure_keys,
        delays_path=delays_path,
        flights_path=flights_path,
    )
    LOGGER.info(
        "Run summary: lines=%s flights=%s skipped=%s departure_keys=%s arrival_keys=%s",
        summary.lines_read,
        summary.flights,
        summary.skipped,
        summary.departure_keys,
        len(means) - departure_keys,
    )
    LOGGER.info("%s run %s completed", job_name, resolved_run_id)
    return summary


__all__ = ["RunConfig", "RunSummary", "output_paths", "run_job"]
