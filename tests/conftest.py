"""Shared pytest fixtures for the flight_training package tests.

Provides configuration objects and raw-line builders so tests stay
deterministic and never touch real user config or the network.
"""

from pathlib import Path
from typing import Callable

import pytest

from flight_training.config import AppConfig

FIELD_COUNT = 27


def make_flight_line(
    date: str = "2015-01-04",
    origin: str = "ATL",
    dest: str = "ORD",
    dep_time: str = "1005",
    dep_delay: str = "4.00",
    taxi_out: str = "6.00",
    arr_time: str = "1130",
    arr_delay: str = "-3.00",
    distance: str = "606.00",
) -> str:
    """Build one raw on-time performance line with the fields the parser reads."""
    fields = [""] * FIELD_COUNT
    fields[0] = date
    fields[1] = "AA"
    fields[8] = origin
    fields[12] = dest
    fields[13] = dep_time
    fields[14] = dep_time
    fields[15] = dep_delay
    fields[16] = taxi_out
    fields[21] = arr_time
    fields[22] = arr_delay
    fields[23] = "0.00"
    fields[25] = "0.00"
    fields[26] = distance
    return ",".join(fields)


@pytest.fixture
def flight_line() -> Callable[..., str]:
    return make_flight_line


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """Application config fixture.

    Points logging and outputs at a temporary directory and disables the
    train-day filter.
    """
    input_path = tmp_path / "flights.csv"
    return AppConfig(
        input_path=str(input_path),
        output_prefix=str(tmp_path / "out" / "run-"),
        trainday_csv_path=None,
        log_directory=tmp_path / "logs",
        log_level="INFO",
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Absolute path to tests/fixtures, independent of the working directory."""
    return Path(__file__).resolve().parent / "fixtures"
