"""Pipeline orchestration for training-dataset runs."""

from flight_training.jobs.runner import RunConfig, RunSummary, run_job

__all__ = ["RunConfig", "RunSummary", "run_job"]
