# extractor/interfaces/perf_source_interface.py
"""
Core interfaces for the performance data extractor.
Defines the collector boundary and the stage-tagged exception hierarchy.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from extractor.models.timing_models import RawMetrics


class MeasurementStage(Enum):
    """Stages of a single measurement run."""
    CONFIGURATION = "configuration"
    COLLECTION = "collection"
    CALCULATION = "calculation"
    PUBLICATION = "publication"


class IRawMetricsCollector(ABC):
    """Interface for capabilities that load a page and report raw timing data."""

    @abstractmethod
    async def collect(self, url: str) -> "RawMetrics":
        """
        Navigate to a URL and return its raw metrics.

        Must return after the page reached a stable post-load state and
        before the browsing context is torn down.

        Raises:
            RawMetricsCollectionError: When navigation or evaluation fails
            InvalidRawMetricsError: When the browser reports malformed data
        """
        pass


# Exceptions

class PerfDataError(Exception):
    """Base exception for measurement runs."""

    stage = MeasurementStage.CONFIGURATION

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class InvalidConfigurationError(PerfDataError):
    """Raised when the target or collector URL (or another setting) is invalid."""
    stage = MeasurementStage.CONFIGURATION


class RawMetricsCollectionError(PerfDataError):
    """Raised when the page could not be loaded or measured."""
    stage = MeasurementStage.COLLECTION

    def __init__(self, message: str, url: str = "", cause: Optional[Exception] = None):
        super().__init__(message, cause)
        self.url = url


class InvalidRawMetricsError(RawMetricsCollectionError):
    """Raised when raw browser data does not match the expected shape."""
    pass


class MetricsCalculationError(PerfDataError):
    """Raised when raw metrics cannot be turned into derived metrics."""
    stage = MeasurementStage.CALCULATION


class MissingNavigationEntryError(MetricsCalculationError):
    """Raised when the timeline holds no navigation entry."""
    pass


class PublicationError(PerfDataError):
    """Raised when derived metrics could not be published."""
    stage = MeasurementStage.PUBLICATION


class MetricPublishError(PublicationError):
    """Raised when writing a single metric to the collector fails."""

    def __init__(self, message: str, metric_key: str, url: str = "",
                 cause: Optional[Exception] = None):
        super().__init__(message, cause)
        self.metric_key = metric_key
        self.url = url
