"""Configuration utilities for the training-dataset job.

This module reads environment variables (optionally from an `.env` file) and
produces an application configuration object consumed across the project.

See `.env.example` for supported keys: `FLIGHTS_INPUT`, `OUTPUT_PREFIX`,
`TRAINDAY_CSV`, `LOG_DIR`, `LOG_LEVEL`, `WORKERS`, and optional `APP_NAME`.

Usage example:

    from flight_training.config import load_config

    config = load_config()
    run_job(config, RunConfig(workers=config.workers))
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_ENV_FILE = REPO_ROOT / ".env"

DEFAULT_INPUT = str(REPO_ROOT / "data" / "flights" / "small.csv")
DEFAULT_OUTPUT_PREFIX = "/tmp/output/"
DEFAULT_TRAINDAY_CSV = "gs://cloud-training-demos/flights/trainday.csv"


def _load_env_file(path: Path) -> Dict[str, str]:
    """Parse a dotenv-style file into a dictionary."""
    if not path.exists():
        return {}

    data: Dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        data[key.strip()] = value.strip().strip("\"'")
    return data


def _merge_envs(dotenv_values: Mapping[str, str], env: MutableMapping[str, str]) -> Dict[str, str]:
    """Merge dotenv values with the current environment, preferring os.environ."""
    merged = dict(dotenv_values)
    merged.update(env)  # os.environ wins
    return merged


def load_environment(env_file: Optional[Path] = None) -> Dict[str, str]:
    """Return dotenv values overlaid with the process environment."""
    target_file = env_file or DEFAULT_ENV_FILE
    return _merge_envs(_load_env_file(target_file), os.environ)


def _parse_workers(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return 1
    try:
        workers = int(raw)
    except ValueError:
        raise ValueError(f"WORKERS must be an integer, got {raw!r}") from None
    if workers < 1:
        raise ValueError(f"WORKERS must be positive, got {workers}")
    return workers


@dataclass(frozen=True)
class AppConfig:
    """Application-level configuration values."""

    input_path: str
    output_prefix: str
    trainday_csv_path: Optional[str]
    log_directory: Path
    log_level: str
    app_name: str = "flight-training"
    workers: int = 1


def load_config(env_file: Optional[Path] = None) -> AppConfig:
    """Load configuration values using environment defaults."""
    merged = load_environment(env_file)

    log_directory = Path(merged.get("LOG_DIR", REPO_ROOT / "logs"))
    if not log_directory.is_absolute():
        log_directory = REPO_ROOT / log_directory

    log_level = merged.get("LOG_LEVEL", "INFO").upper()

    # An explicitly empty TRAINDAY_CSV turns the filter off.
    trainday = merged.get("TRAINDAY_CSV", DEFAULT_TRAINDAY_CSV).strip() or None

    return AppConfig(
        input_path=merged.get("FLIGHTS_INPUT") or DEFAULT_INPUT,
        output_prefix=merged.get("OUTPUT_PREFIX") or DEFAULT_OUTPUT_PREFIX,
        trainday_csv_path=trainday,
        log_directory=log_directory,
        log_level=log_level,
        app_name=merged.get("APP_NAME", "flight-training"),
        workers=_parse_workers(merged.get("WORKERS")),
    )


__all__ = ["AppConfig", "load_config", "load_environment", "REPO_ROOT"]
