"""Load the set of dates eligible for the training dataset."""

import logging
from typing import FrozenSet, Iterable, Optional

LOGGER = logging.getLogger(__name__)

TRAIN_DAY_TOKEN = "True"


def parse_trainday(line: str) -> Optional[str]:
    """Return the date of a ``date,flag`` row flagged as a training day."""
    fields = line.split(",")
    if len(fields) > 1 and fields[1] == TRAIN_DAY_TOKEN:
        return fields[0]
    return None


def load_traindays(lines: Iterable[str]) -> FrozenSet[str]:
    """Materialize every training-day date from ``lines``.

    Only rows whose flag is exactly ``True`` are kept; headers, ``False`` rows
    and rows without a flag are ignored.
    """
    days = set()
    rows = 0
    for line in lines:
        rows += 1
        day = parse_trainday(line)
        if day is not None:
            days.add(day)
    LOGGER.info("Loaded %s train days from %s rows", len(days), rows)
    return frozenset(days)


__all__ = ["TRAIN_DAY_TOKEN", "load_traindays", "parse_trainday"]
