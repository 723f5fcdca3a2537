"""Keyed delay statistics: key construction, extraction and per-key means.

Two key families share one mean map. Departure keys are ``(airport, hour)``
and hold the mean of departure delay plus taxi-out time; arrival keys are
``(airport, date, hour)`` and hold the mean arrival delay. The family is an
explicit field of :class:`DelayKey`, never a string prefix.

Aggregation is split into partial accumulators so that chunks of flights can
be summarized independently and merged afterwards. Only the merged result,
:class:`DelayMeanMap`, is ever handed to the join.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from flight_training.transform.flights import Flight

LOGGER = logging.getLogger(__name__)


class DelayKind(str, Enum):
    DEPARTURE = "departure"
    ARRIVAL = "arrival"


@dataclass(frozen=True, order=True)
class DelayKey:
    kind: DelayKind
    airport: str
    hour: int
    date: str = ""

    def __str__(self) -> str:
        if self.kind is DelayKind.DEPARTURE:
            return f"{self.airport}:{self.hour}"
        return f"{self.airport}:{self.date}:{self.hour}"


def departure_key(airport: str, hour: int) -> DelayKey:
    return DelayKey(DelayKind.DEPARTURE, airport, hour)


def arrival_key(airport: str, date: str, hour: int) -> DelayKey:
    return DelayKey(DelayKind.ARRIVAL, airport, hour, date)


DelayPair = Tuple[DelayKey, float]


def extract_delays(flight: Flight) -> List[DelayPair]:
    """Return the departure and arrival observations contributed by ``flight``."""
    return [
        (
            departure_key(flight.from_airport, flight.dep_hour),
            flight.departure_delay + flight.taxi_out_time,
        ),
        (
            arrival_key(flight.to_airport, flight.date, flight.arr_hour),
            flight.arrival_delay,
        ),
    ]


class DelayAccumulator:
    """Running (sum, count) per key; not thread-safe, one per worker."""

    def __init__(self) -> None:
        self._sums: Dict[DelayKey, float] = {}
        self._counts: Dict[DelayKey, int] = {}

    def __len__(self) -> int:
        return len(self._counts)

    def add(self, key: DelayKey, value: float) -> None:
        self._sums[key] = self._sums.get(key, 0.0) + value
        self._counts[key] = self._counts.get(key, 0) + 1

    def add_all(self, pairs: Iterable[DelayPair]) -> "DelayAccumulator":
        for key, value in pairs:
            self.add(key, value)
        return self

    def merge(self, other: "DelayAccumulator") -> "DelayAccumulator":
        for key, count in other._counts.items():
            self._sums[key] = self._sums.get(key, 0.0) + other._sums[key]
            self._counts[key] = self._counts.get(key, 0) + count
        return self

    def means(self) -> "DelayMeanMap":
        return DelayMeanMap(
            {key: self._sums[key] / count for key, count in self._counts.items()}
        )


class DelayMeanMap(Mapping[DelayKey, float]):
    """Immutable key -> mean delay mapping, safe to share across threads."""

    def __init__(self, means: Mapping[DelayKey, float]) -> None:
        self._means = MappingProxyType(dict(means))

    def __getitem__(self, key: DelayKey) -> float:
        return self._means[key]

    def __iter__(self) -> Iterator[DelayKey]:
        return iter(self._means)

    def __len__(self) -> int:
        return len(self._means)

    def __repr__(self) -> str:
        return f"DelayMeanMap({len(self)} keys)"

    def lookup(self, key: DelayKey, default: float = 0.0) -> float:
        value: Optional[float] = self._means.get(key)
        return default if value is None else value

    def of_kind(self, kind: DelayKind) -> List[Tuple[DelayKey, float]]:
        """Entries of one key family, sorted by key."""
        return sorted((k, v) for k, v in self._means.items() if k.kind is kind)


def summarize_flights(flights: Iterable[Flight]) -> DelayAccumulator:
    """Accumulate both delay families for a batch of flights."""
    accumulator = DelayAccumulator()
    for flight in flights:
        accumulator.add_all(extract_delays(flight))
    return accumulator


def mean_per_key(pairs: Iterable[DelayPair]) -> DelayMeanMap:
    """Arithmetic mean of the values observed for each distinct key."""
    return DelayAccumulator().add_all(pairs).means()


def merge_partials(partials: Iterable[DelayAccumulator]) -> DelayMeanMap:
    """Combine per-chunk accumulators, in order, into the final mean map."""
    total = DelayAccumulator()
    chunks = 0
    for partial in partials:
        total.merge(partial)
        chunks += 1
    means = total.means()
    LOGGER.info("Computed means for %s delay keys from %s chunks", len(means), chunks)
    return means


__all__ = [
    "DelayAccumulator",
    "DelayKey",
    "DelayKind",
    "DelayMeanMap",
    "arrival_key",
    "departure_key",
    "extract_delays",
    "mean_per_key",
    "merge_partials",
    "summarize_flights",
]
