#!/usr/bin/env python
"""CLI wrapper to build the training dataset from raw flight records."""

from flight_training.jobs.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
