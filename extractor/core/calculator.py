"""
Metrics calculator for raw browser timing data.

Turns one RawMetrics into the fixed set of named performance metrics that
get published. Pure and deterministic: no I/O, no state.
"""
from typing import Callable, Dict, Iterable, Optional

from loguru import logger

from extractor.interfaces.perf_source_interface import MissingNavigationEntryError
from extractor.models.timing_models import RawMetrics

# Published in this order
METRIC_KEYS = (
    "numberOfResources",
    "transferSizeInBytes",
    "encodedBodySizeInBytes",
    "decodedBodySizeInBytes",
    "timeToFirstByteInMilliSeconds",
    "timeToStartRenderInMilliSeconds",
    "timeToDomCompleteInMilliSeconds",
    "resourceDownloadTimeInMilliSeconds",
    "totalTaskTimeInSeconds",
    "dnsLookupTimeInMilliSeconds",
    "connectionSetupTimeInMilliSeconds",
    "requestSendPlusResponseLatencyInMilliSeconds",
    "tcpInitiationOverheadInMilliSeconds",
    "backendResponseTimeInMilliSeconds",
)

# Resource download time reported when the page fetched no sub-resources
EMPTY_RESOURCE_DOWNLOAD_TIME = 0.0


def _extreme(values: Iterable[float], pick: Callable[[Iterable[float]], float]) -> Optional[float]:
    """Apply min/max to values, returning None instead of failing on empty input."""
    values = list(values)
    if not values:
        return None
    return pick(values)


def calculate(raw: RawMetrics) -> Dict[str, float]:
    """
    Derive the published metric set from raw timing data.

    Differences are passed through unclamped, so inconsistent browser
    timings (cached resources reporting zeros) can yield negative values.

    Args:
        raw: Validated page metrics and performance timeline

    Returns:
        Mapping with exactly the keys of METRIC_KEYS, in that order

    Raises:
        MissingNavigationEntryError: When the timeline has no navigation entry
    """
    nav = raw.navigation_entry
    if nav is None:
        raise MissingNavigationEntryError(
            f"No navigation entry among {len(raw.entries)} performance entries"
        )

    resources = raw.resource_entries
    earliest_request_start = _extreme((r.requestStart for r in resources), min)
    latest_response_end = _extreme((r.responseEnd for r in resources), max)

    if earliest_request_start is None or latest_response_end is None:
        resource_download_time = EMPTY_RESOURCE_DOWNLOAD_TIME
    else:
        resource_download_time = latest_response_end - earliest_request_start

    metrics = {
        "numberOfResources": raw.page_metrics.documents,
        "transferSizeInBytes": sum(r.transferSize for r in resources),
        "encodedBodySizeInBytes": sum(r.encodedBodySize for r in resources),
        "decodedBodySizeInBytes": sum(r.decodedBodySize for r in resources),
        "timeToFirstByteInMilliSeconds": nav.responseStart - nav.startTime,
        "timeToStartRenderInMilliSeconds": nav.domContentLoadedEventStart - nav.startTime,
        "timeToDomCompleteInMilliSeconds": nav.domComplete - nav.startTime,
        "resourceDownloadTimeInMilliSeconds": resource_download_time,
        "totalTaskTimeInSeconds": raw.page_metrics.task_duration,
        "dnsLookupTimeInMilliSeconds": nav.domainLookupEnd - nav.domainLookupStart,
        "connectionSetupTimeInMilliSeconds": nav.connectEnd - nav.connectStart,
        "requestSendPlusResponseLatencyInMilliSeconds": nav.responseStart - nav.requestStart,
        "tcpInitiationOverheadInMilliSeconds": nav.requestStart - nav.startTime,
        "backendResponseTimeInMilliSeconds": nav.responseEnd - nav.responseStart,
    }

    logger.debug(f"Calculated {len(metrics)} metrics from {len(resources)} resource entries: {metrics}")
    return metrics
