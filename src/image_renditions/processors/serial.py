"""Serial scheduler - runs size jobs one by one and stops at the first failure."""

from typing import List

from ..core import JobOutcome, SizeSpec, get_logger
from ..core.protocols import SizeJobRunner
from .common import failed_outcome


def run_jobs(
    runner: SizeJobRunner, bucket: str, key: str, sizes: List[SizeSpec]
) -> List[JobOutcome]:
    """
    Runs the jobs in configuration order in the current thread.

    No further job is scheduled once one has failed, so the returned list can
    be shorter than ``sizes``.

    Args:
        runner: Job runner producing one rendition
        bucket: Source bucket
        key: Source key
        sizes: Size specs to render

    Returns:
        Outcomes of the jobs that ran, in order
    """
    logger = get_logger("image-renditions.processor")
    outcomes: List[JobOutcome] = []

    for index, size in enumerate(sizes):
        try:
            outcome = runner.run(bucket, key, size)
        except Exception as e:  # noqa: BLE001
            outcome = failed_outcome(size, e)
        outcomes.append(outcome)

        if not outcome.succeeded:
            remaining = len(sizes) - index - 1
            if remaining:
                logger.warning(
                    f"Size '{size.name}' failed; not scheduling {remaining} remaining job(s)"
                )
            break

    return outcomes
