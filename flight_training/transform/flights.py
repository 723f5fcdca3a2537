"""Parse raw on-time performance CSV lines into structured flight records."""

import logging
import math
from dataclasses import dataclass, replace
from typing import AbstractSet, Iterable, List, Optional

LOGGER = logging.getLogger(__name__)

# Positional layout of the upstream on-time performance export.
DATE = 0
ORIGIN = 8
DEST = 12
DEP_TIME = 13
DEP_DELAY = 15
TAXI_OUT = 16
ARR_TIME = 21
ARR_DELAY = 22
DISTANCE = 26

MIN_FIELDS = DISTANCE + 1


@dataclass(frozen=True)
class Flight:
    """One parsed flight, carrying the features used for training."""

    date: str
    from_airport: str
    to_airport: str
    dep_hour: int
    arr_hour: int
    departure_delay: float
    taxi_out_time: float
    distance: float
    arrival_delay: float
    average_departure_delay: float = math.nan
    average_arrival_delay: float = math.nan

    def with_average_delays(self, departure: float, arrival: float) -> "Flight":
        return replace(
            self,
            average_departure_delay=departure,
            average_arrival_delay=arrival,
        )


def _hour(hhmm: str) -> int:
    # 2358 -> 23, 0005 -> 0; truncates toward zero for negative values too
    value = int(hhmm)
    if value < 0:
        return -(-value // 100)
    return value // 100


def parse_flight(
    line: str, traindays: Optional[AbstractSet[str]] = None
) -> Optional[Flight]:
    """Return a Flight for ``line``, or None when the line yields no record.

    Canceled or diverted flights (empty arrival delay) and, when ``traindays``
    is given, flights on other dates are dropped quietly. Malformed lines are
    dropped with a warning and never raise.
    """
    fields = line.split(",")
    if len(fields) <= ARR_DELAY:
        LOGGER.warning("Malformed line {%s} skipped: %s fields", line, len(fields))
        return None
    if not fields[ARR_DELAY]:
        LOGGER.debug("Ignoring canceled/diverted flight on %s", fields[DATE])
        return None
    if len(fields) < MIN_FIELDS:
        LOGGER.warning("Malformed line {%s} skipped: %s fields", line, len(fields))
        return None

    try:
        flight = Flight(
            date=fields[DATE],
            from_airport=fields[ORIGIN],
            to_airport=fields[DEST],
            dep_hour=_hour(fields[DEP_TIME]),
            arr_hour=_hour(fields[ARR_TIME]),
            departure_delay=float(fields[DEP_DELAY]),
            taxi_out_time=float(fields[TAXI_OUT]),
            distance=float(fields[DISTANCE]),
            arrival_delay=float(fields[ARR_DELAY]),
        )
    except ValueError as exc:
        LOGGER.warning("Malformed line {%s} skipped: %s", line, exc)
        return None

    if traindays is not None and flight.date not in traindays:
        LOGGER.debug("Ignoring %s as it is not a trainday", flight.date)
        return None
    return flight


def parse_flights(
    lines: Iterable[str], traindays: Optional[AbstractSet[str]] = None
) -> List[Flight]:
    """Parse every line, keeping only those that produce a Flight."""
    flights: List[Flight] = []
    for line in lines:
        flight = parse_flight(line, traindays)
        if flight is not None:
            flights.append(flight)
    return flights


__all__ = ["Flight", "parse_flight", "parse_flights", "MIN_FIELDS"]
