"""Job runner helpers."""

from .jobs import async_job, job, run_job

__all__ = ["async_job", "job", "run_job"]
