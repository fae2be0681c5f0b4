# src/image_renditions/core/error_handling.py

import functools
import logging
from typing import List, Optional, Type

from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import S3Error
from .models import JobOutcome

NOT_FOUND_CODES = ("NoSuchKey", "NoSuchBucket", "404", "NotFound")
ACCESS_DENIED_CODES = ("AccessDenied", "403", "Forbidden")


def describe_client_error(error: ClientError) -> str:
    """Short description of a botocore ClientError, naming not-found and denied cases."""
    code = str(error.response.get("Error", {}).get("Code", ""))
    message = error.response.get("Error", {}).get("Message", "") or str(error)
    if code in NOT_FOUND_CODES:
        return f"NotFound ({code}): {message}"
    if code in ACCESS_DENIED_CODES:
        return f"AccessDenied ({code}): {message}"
    return f"{code or 'ClientError'}: {message}"


def translate_s3_errors(error_cls: Type[S3Error]):
    """
    Decorator turning botocore failures into ``error_cls``.

    Other exceptions propagate unchanged.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(func.__module__ + "." + func.__name__)
            try:
                return func(*args, **kwargs)
            except ClientError as e:
                logger.debug(f"S3 call '{func.__name__}' failed: {e}")
                raise error_cls(describe_client_error(e)) from e
            except BotoCoreError as e:
                logger.debug(f"S3 call '{func.__name__}' failed: {e}")
                raise error_cls(str(e)) from e

        return wrapper

    return decorator


class OutcomeCollector:
    """
    Context manager collecting job outcomes of one invocation.

    The first failure by arrival order is kept as the overall error. Later
    failures are logged and then discarded.
    """

    def __init__(self, operation_name: str = "Rendition jobs"):
        self.operation_name = operation_name
        self.outcomes: List[JobOutcome] = []
        self.first_failure: Optional[JobOutcome] = None
        self.discarded: List[JobOutcome] = []
        self.logger = logging.getLogger(
            self.__class__.__module__ + "." + self.__class__.__name__
        )

    def __enter__(self):
        self.logger.debug(f"Starting {self.operation_name}.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.logger.error(
                f"{self.operation_name} failed due to an unhandled exception: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb),
            )
        elif self.first_failure is not None:
            self.logger.warning(
                f"{self.operation_name} completed with "
                f"{1 + len(self.discarded)} failure(s); reporting "
                f"'{self.first_failure.size_name}'."
            )
            for outcome in self.discarded:
                self.logger.error(
                    f"  Discarded error for size '{outcome.size_name}': {outcome.error}"
                )
        else:
            self.logger.info(f"{self.operation_name} completed successfully.")
        return False

    @property
    def failed(self) -> bool:
        return self.first_failure is not None

    def add(self, outcome: JobOutcome) -> None:
        """Record one outcome as it completes."""
        self.outcomes.append(outcome)
        if outcome.succeeded:
            return
        if self.first_failure is None:
            self.first_failure = outcome
        else:
            self.discarded.append(outcome)
