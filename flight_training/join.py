"""Attach historical average delays to flights from a completed mean map."""

from typing import Iterable, List

from flight_training.delays import DelayMeanMap, arrival_key, departure_key
from flight_training.transform.flights import Flight

DEFAULT_DELAY = 0.0


def add_delay_info(flight: Flight, means: DelayMeanMap) -> Flight:
    """Return a copy of ``flight`` with both average-delay features filled in.

    The arrival feature looks at arrivals into the destination during the
    hour before this flight departs (``dep_hour - 1``), which is known at
    prediction time. Hour 0 looks up hour -1, which never matches and falls
    back to the default. Keys absent from ``means`` default to zero.
    """
    departure = means.lookup(
        departure_key(flight.from_airport, flight.dep_hour), DEFAULT_DELAY
    )
    arrival = means.lookup(
        arrival_key(flight.to_airport, flight.date, flight.dep_hour - 1), DEFAULT_DELAY
    )
    return flight.with_average_delays(departure, arrival)


def join_average_delays(flights: Iterable[Flight], means: DelayMeanMap) -> List[Flight]:
    """Enrich every flight; the result has one entry per input flight, in order."""
    return [add_delay_info(flight, means) for flight in flights]


__all__ = ["DEFAULT_DELAY", "add_delay_info", "join_average_delays"]
