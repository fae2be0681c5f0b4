"""Job schedulers with different concurrency strategies."""

from .serial import run_jobs as serial_run_jobs
from .multithread import run_jobs as multithread_run_jobs

SCHEDULERS = {
    "serial": serial_run_jobs,
    "threaded": multithread_run_jobs,
}

__all__ = [
    "serial_run_jobs",
    "multithread_run_jobs",
    "SCHEDULERS",
]
