"""Centralized logging utilities for training-dataset runs.

Besides handler setup, this module provides the timing helpers used to report
how long each pipeline stage takes:

- ``perf``: a decorator that times a function and logs one structured line
  with the duration and success state.
- ``perf_span``: a context manager that times an arbitrary block (one pipeline
  stage, for example) and logs the same structured line.

Both write through the logger hierarchy set up by ``configure_logging`` so the
timings land in the per-run log file under ``logs/``.
"""

import functools
import logging
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from flight_training.config import AppConfig

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [run=%(run_id)s] %(message)s"
PERF_MESSAGE = "event=perf name=%s duration_ms=%.3f success=%s tags=%s"


class _RunContextFilter(logging.Filter):
    """Inject the current run identifier into every log record."""

    def __init__(self, run_id: str) -> None:
        super().__init__()
        self._run_id = run_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = self._run_id
        return True


def _sanitize_run_id(run_id: str) -> str:
    """Convert a run identifier into a filesystem-friendly token."""
    return "".join(ch if ch.isalnum() or ch in ("-", "_") else "-" for ch in run_id)


def generate_run_id() -> str:
    """Return a default run identifier based on the current UTC timestamp."""
    return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def configure_logging(
    config: AppConfig,
    run_id: Optional[str] = None,
    include_console: bool = True,
    fmt: str = DEFAULT_LOG_FORMAT,
) -> Path:
    """Configure root logging handlers for the current run.

    Existing root handlers are removed, so calling this twice in one process
    switches the log file rather than duplicating output.
    """
    resolved_run_id = run_id or generate_run_id()
    safe_run_id = _sanitize_run_id(resolved_run_id)

    log_dir = config.log_directory
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"{config.app_name}-{safe_run_id}.log"

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    handlers = [logging.FileHandler(log_path, encoding="utf-8")]
    if include_console:
        handlers.append(logging.StreamHandler(sys.stdout))

    for handler in handlers:
        handler.setFormatter(logging.Formatter(fmt))
        handler.addFilter(_RunContextFilter(resolved_run_id))
        root_logger.addHandler(handler)

    level = getattr(logging, config.log_level.upper(), logging.INFO)
    root_logger.setLevel(level)

    return log_path


def _format_tags(tags: Optional[Mapping[str, Any]]) -> str:
    """Return a compact, sorted string representation for tags."""
    if not tags:
        return "{}"
    items = ", ".join(f"{k}={tags[k]!r}" for k in sorted(tags))
    return "{" + items + "}"


def perf(
    name: Optional[str] = None,
    *,
    tags: Optional[Mapping[str, Any]] = None,
    level: int = logging.INFO,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator that logs execution time of a function.

    Args:
        name: Optional span name; defaults to ``<module>.<func>``.
        tags: Optional mapping of additional metadata to include in the log.
        level: Logging level to use (defaults to ``logging.INFO``).

    Returns:
        A callable that wraps the target function, logging a structured
        ``event=perf`` line with duration in milliseconds and success flag.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        span_name = name or f"{func.__module__}.{func.__qualname__}"
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_ns = time.monotonic_ns()
            success = False
            try:
                result = func(*args, **kwargs)
                success = True
                return result
            finally:
                duration_ms = (time.monotonic_ns() - start_ns) / 1_000_000.0
                logger.log(
                    level,
                    PERF_MESSAGE,
                    span_name,
                    duration_ms,
                    str(success).lower(),
                    _format_tags(tags),
                )

        return wrapper

    return decorator


class perf_span:
    """Context manager to time an arbitrary code block and log its duration.

    Example:
        with perf_span("pipeline.join", tags={"flights": 1200}):
            enriched = join_average_delays(flights, means)
    """

    def __init__(
        self,
        name: str,
        *,
        tags: Optional[Mapping[str, Any]] = None,
        level: int = logging.INFO,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._name = name
        self._tags = tags or {}
        self._level = level
        self._logger = logger or logging.getLogger(__name__)
        self._start_ns: Optional[int] = None

    def __enter__(self) -> "perf_span":
        self._start_ns = time.monotonic_ns()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        end_ns = time.monotonic_ns()
        start_ns = self._start_ns or end_ns
        self._logger.log(
            self._level,
            PERF_MESSAGE,
            self._name,
            (end_ns - start_ns) / 1_000_000.0,
            str(exc_type is None).lower(),
            _format_tags(self._tags),
        )
        return False


__all__ = [
    "configure_logging",
    "generate_run_id",
    "DEFAULT_LOG_FORMAT",
    "perf",
    "perf_span",
]
