"""Build the flight-delay training dataset from raw on-time performance records."""

__version__ = "0.1.0"
