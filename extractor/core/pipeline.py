"""
One measurement run: collect, calculate, publish.

Every failure leaves this module as a PerfDataError tagged with the stage
that produced it.
"""
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from loguru import logger

from clients.metrics_client import MetricsClient, publish
from extractor.collectors.playwright_collector import PlaywrightCollector
from extractor.core.calculator import calculate
from extractor.interfaces.perf_source_interface import (
    IRawMetricsCollector,
    MetricsCalculationError,
    PerfDataError,
    PublicationError,
    RawMetricsCollectionError,
)
from utils.config.settings import MeasurementSettings


@dataclass
class MeasurementResult:
    """Outcome of a completed run."""
    metrics: Dict[str, float]
    time_stamp: int
    published_keys: List[str] = field(default_factory=list)

    @property
    def published(self) -> bool:
        return bool(self.published_keys)


def create_collector(settings: MeasurementSettings) -> IRawMetricsCollector:
    return PlaywrightCollector(
        accept_insecure_certs=settings.accept_insecure_certs,
        headless=settings.headless,
        wait_until=settings.wait_until,
        navigation_timeout_seconds=settings.navigation_timeout_seconds,
    )


def create_client(settings: MeasurementSettings) -> MetricsClient:
    return MetricsClient(
        accept_insecure_certs=settings.accept_insecure_certs,
        timeout_seconds=settings.publish_timeout_seconds,
    )


async def run_measurement(
    settings: MeasurementSettings,
    collector: Optional[IRawMetricsCollector] = None,
    client: Optional[MetricsClient] = None,
    time_func: Callable[[], float] = time.time,
) -> MeasurementResult:
    """
    Measure the target page once and publish the derived metrics.

    Args:
        settings: Validated measurement settings
        collector: Raw metrics collector, Playwright by default
        client: Metrics client, built from settings by default
        time_func: Source of the Unix timestamp stamped on every data point

    Returns:
        MeasurementResult with the derived metrics and published keys

    Raises:
        PerfDataError: Subclass matching the failed stage
    """
    collector = collector or create_collector(settings)

    # Collection
    try:
        raw = await collector.collect(settings.target_url)
    except PerfDataError:
        raise
    except Exception as e:
        raise RawMetricsCollectionError(
            f"Unexpected error collecting {settings.target_url}: {e}",
            url=settings.target_url,
            cause=e,
        ) from e

    time_stamp = int(time_func())

    # Calculation
    try:
        metrics = calculate(raw)
    except PerfDataError:
        raise
    except Exception as e:
        raise MetricsCalculationError(f"Unexpected error calculating metrics: {e}", cause=e) from e

    for key, value in metrics.items():
        logger.info(f"  {key}: {value}")

    result = MeasurementResult(metrics=metrics, time_stamp=time_stamp)

    if settings.dry_run:
        logger.info("Dry run, skipping publication")
        return result

    # Publication
    client = client or create_client(settings)
    try:
        async with client:
            result.published_keys = await publish(
                client, settings.collector_base_url, metrics, time_stamp
            )
    except PerfDataError:
        raise
    except Exception as e:
        raise PublicationError(f"Unexpected error publishing metrics: {e}", cause=e) from e

    return result
