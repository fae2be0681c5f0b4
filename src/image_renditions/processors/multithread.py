"""Multithreaded scheduler - one thread per size job."""

from typing import List
from concurrent.futures import ThreadPoolExecutor, as_completed

from ..core import JobOutcome, SizeSpec
from ..core.protocols import SizeJobRunner
from .common import failed_outcome


def run_jobs(
    runner: SizeJobRunner, bucket: str, key: str, sizes: List[SizeSpec]
) -> List[JobOutcome]:
    """
    Run one job per size concurrently and wait for all of them.

    Every job reaches a terminal state before this returns; nothing is
    cancelled when one fails.

    Args:
        runner: Job runner producing one rendition (shared between threads)
        bucket: Source bucket
        key: Source key
        sizes: Size specs to render

    Returns:
        One outcome per size, in completion order
    """
    if not sizes:
        return []

    outcomes: List[JobOutcome] = []

    with ThreadPoolExecutor(max_workers=len(sizes)) as executor:
        future_to_size = {
            executor.submit(runner.run, bucket, key, size): size for size in sizes
        }

        for future in as_completed(future_to_size):
            try:
                outcomes.append(future.result())
            except Exception as e:
                outcomes.append(failed_outcome(future_to_size[future], e))

    return outcomes
