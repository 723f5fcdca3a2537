"""Parsing helpers for raw flight and train-day records."""

from flight_training.transform.flights import Flight, parse_flight, parse_flights
from flight_training.transform.traindays import load_traindays

__all__ = ["Flight", "load_traindays", "parse_flight", "parse_flights"]
