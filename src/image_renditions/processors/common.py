"""Common functions shared across all job schedulers."""

from ..core import JobOutcome, JobState, JobStatus, SizeSpec, get_logger


def failed_outcome(size: SizeSpec, error: BaseException) -> JobOutcome:
    """Outcome for a job that raised instead of reporting."""
    logger = get_logger("image-renditions.processor")
    logger.error(f"Job for size '{size.name}' raised unexpectedly: {error}", exc_info=error)
    return JobOutcome(
        size_name=size.name,
        status=JobStatus.FAILED,
        error=f"Unexpected error while creating '{size.name}': {error}",
        error_kind=type(error).__name__,
        failed_state=JobState.FAILED,
    )
