"""Render flights and delay means as CSV rows."""

from typing import Iterator, Tuple

from flight_training.delays import DelayKey, DelayKind, DelayMeanMap
from flight_training.transform.flights import Flight

ONTIME_THRESHOLD_MINUTES = 15

TRAINING_FIELDS: Tuple[str, ...] = (
    "ontime",
    "date",
    "fromAirport",
    "toAirport",
    "depHour",
    "arrHour",
    "departureDelay",
    "taxiOutTime",
    "distance",
    "averageDepartureDelay",
    "averageArrivalDelay",
)


def to_training_csv(flight: Flight) -> str:
    """Render ``flight`` in the fixed training-row column order."""
    ontime = 1.0 if flight.arrival_delay < ONTIME_THRESHOLD_MINUTES else 0.0
    values = (
        ontime,
        flight.date,
        flight.from_airport,
        flight.to_airport,
        flight.dep_hour,
        flight.arr_hour,
        flight.departure_delay,
        flight.taxi_out_time,
        flight.distance,
        flight.average_departure_delay,
        flight.average_arrival_delay,
    )
    return ",".join(str(value) for value in values)


def delay_to_csv(key: DelayKey, mean: float) -> str:
    return f"{key},{mean}"


def departure_delays_to_csv(means: DelayMeanMap) -> Iterator[str]:
    """Yield ``airport:hour,mean`` rows for the departure family only."""
    for key, mean in means.of_kind(DelayKind.DEPARTURE):
        yield delay_to_csv(key, mean)


__all__ = [
    "TRAINING_FIELDS",
    "delay_to_csv",
    "departure_delays_to_csv",
    "to_training_csv",
]
