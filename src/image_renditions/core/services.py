"""Service implementations for the renditions pipeline."""

import time
from typing import Callable, List, Optional

from .config import RenditionConfig
from .error_handling import OutcomeCollector
from .exceptions import RenditionsError, TransformError
from .geometry import plan_geometry
from .image_utils import content_type_for_format, format_for_type
from .keys import detect_image_type, is_supported_type, resolve_destination
from .models import (
    JobOutcome,
    JobState,
    JobStatus,
    PipelineResult,
    SizeSpec,
    SourceImage,
)
from .observability import JobTiming, LogContext, MetricsCollector
from .protocols import (
    ImageTransformerProtocol,
    LoggerProtocol,
    ObjectStoreProtocol,
    SizeJobRunner,
)

# (runner, bucket, key, sizes) -> outcomes in completion order
RunJobsFunction = Callable[[SizeJobRunner, str, str, List[SizeSpec]], List[JobOutcome]]


class RenditionJob(SizeJobRunner):
    """
    Produces one rendition: resolve, fetch, plan, transform, store.

    ``run`` never raises for pipeline errors; every failure becomes a FAILED
    outcome carrying the error class name and the state it happened in. The
    source is decoded in PLANNING because the plan needs its real pixel
    size, so a DecodeError reports failed_state=PLANNING; TRANSFORMING only
    covers crop, resize and encode. The instance holds no per-job state and
    can be shared between threads.
    """

    def __init__(
        self,
        store: ObjectStoreProtocol,
        transformer: ImageTransformerProtocol,
        config: RenditionConfig,
        logger: LoggerProtocol,
        metrics_collector: Optional[MetricsCollector] = None,
    ):
        self._store = store
        self._transformer = transformer
        self._config = config
        self._logger = logger
        self._metrics_collector = metrics_collector

    def run(self, bucket: str, key: str, size: SizeSpec) -> JobOutcome:
        start_time = time.time()
        log_context = LogContext(
            correlation_id=f"{size.name}_{int(start_time * 1000)}",
            operation="rendition_job",
            component="rendition_job",
        ).with_metadata(size=size.name, source=f"{bucket}/{key}")

        outcome = JobOutcome(size_name=size.name)
        state = JobState.PENDING
        dest_bucket, dest_key = bucket, ""

        self._logger.info(f"Creating image for {size.name}", log_context)

        try:
            state = JobState.RESOLVING
            dest_bucket, dest_key = resolve_destination(bucket, key, size.name)
            outcome.destination_key = dest_key

            image_type = detect_image_type(key)
            if not is_supported_type(image_type, self._config.supported_types):
                outcome.status = JobStatus.SKIPPED
                outcome.message = (
                    f"{image_type} is not a resizeable image type. Nothing to do here."
                )
                self._logger.info(outcome.message, log_context)
                return outcome
            output_format = format_for_type(image_type)

            state = JobState.FETCHING
            self._logger.debug("Fetching source", log_context.with_operation("fetch"))
            body, content_type = self._store.fetch_object(bucket, key)
            source = SourceImage(
                bucket=bucket, key=key, body=body, content_type=content_type
            )

            state = JobState.PLANNING
            decoded = self._transformer.decode(source.body)
            source.width, source.height = decoded.width, decoded.height
            try:
                plan = plan_geometry(source.width, source.height, size)
            except ValueError as exc:
                raise TransformError(str(exc)) from exc
            self._logger.debug(
                "Planned geometry",
                log_context.with_operation("plan"),
                crop=plan.crop_box,
                output=plan.output_size,
            )

            state = JobState.TRANSFORMING
            rendition = self._transformer.render(decoded, plan, output_format)

            state = JobState.STORING
            self._store.store_object(
                dest_bucket,
                dest_key,
                rendition,
                source.content_type or content_type_for_format(output_format),
                self._config.acl,
            )

            outcome.status = JobStatus.SUCCEEDED
            outcome.message = (
                f"Successfully resized {bucket}/{key} and uploaded to "
                f"{dest_bucket}/{dest_key}"
            )
            self._logger.info(outcome.message, log_context)

        except RenditionsError as e:
            outcome.status = JobStatus.FAILED
            outcome.error_kind = type(e).__name__
            outcome.failed_state = state
            outcome.error = (
                f"Unable to resize {bucket}/{key} and upload to "
                f"{dest_bucket}/{dest_key} due to an error: {e}"
            )
            self._logger.error(
                outcome.error,
                log_context.with_metadata(error_kind=outcome.error_kind, state=state.value),
            )

        finally:
            outcome.processing_time = time.time() - start_time
            if self._metrics_collector is not None:
                self._metrics_collector.record_metric(
                    JobTiming(
                        operation="rendition_job",
                        start_time=start_time,
                        end_time=start_time + outcome.processing_time,
                        success=outcome.succeeded,
                        error_message=outcome.error or None,
                        metadata={"size": size.name, "status": outcome.status.value},
                    )
                )

        return outcome


class RenditionPipeline:
    """Runs one rendition job per configured size and aggregates the outcomes."""

    def __init__(
        self,
        job_runner: SizeJobRunner,
        run_jobs: RunJobsFunction,
        config: RenditionConfig,
        logger: LoggerProtocol,
    ):
        self._job_runner = job_runner
        self._run_jobs = run_jobs
        self._config = config
        self._logger = logger

    @property
    def config(self) -> RenditionConfig:
        return self._config

    def run(
        self, bucket: str, key: str, sizes: Optional[List[SizeSpec]] = None
    ) -> PipelineResult:
        """
        Create every rendition of ``bucket``/``key``.

        The overall result fails with the first failure by completion order.
        Other failures are logged and discarded, not aggregated.

        Args:
            bucket: Source bucket
            key: Decoded source key
            sizes: Size specs, defaults to the configured sizes

        Returns:
            PipelineResult with one outcome per job that ran
        """
        start_time = time.time()
        if sizes is None:
            sizes = self._config.sizes

        log_context = LogContext(operation="run_pipeline", component="pipeline").with_metadata(
            source=f"{bucket}/{key}", sizes=len(sizes)
        )
        self._logger.info("Creating renditions", log_context)

        result = PipelineResult(source_bucket=bucket, source_key=key)

        with OutcomeCollector(f"Renditions of {bucket}/{key}") as collector:
            for outcome in self._run_jobs(self._job_runner, bucket, key, sizes):
                collector.add(outcome)

        result.outcomes = collector.outcomes
        result.processing_time = time.time() - start_time

        if collector.failed:
            result.success = False
            result.error = collector.first_failure.error
            self._logger.error(
                f"Unable to resize image due to an error: {result.error}", log_context
            )
        else:
            result.success = True
            self._logger.info(
                "All files have been processed successfully",
                log_context,
                processing_time_ms=result.processing_time * 1000,
            )

        return result
