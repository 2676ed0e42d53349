# extractor/interfaces/__init__.py
"""
Interfaces package for the performance data extractor.
"""

from .perf_source_interface import (
    # Core interfaces
    IRawMetricsCollector,

    # Enums
    MeasurementStage,

    # Exceptions
    PerfDataError,
    InvalidConfigurationError,
    RawMetricsCollectionError,
    InvalidRawMetricsError,
    MetricsCalculationError,
    MissingNavigationEntryError,
    PublicationError,
    MetricPublishError
)

__all__ = [
    'IRawMetricsCollector',
    'MeasurementStage',
    'PerfDataError',
    'InvalidConfigurationError',
    'RawMetricsCollectionError',
    'InvalidRawMetricsError',
    'MetricsCalculationError',
    'MissingNavigationEntryError',
    'PublicationError',
    'MetricPublishError'
]
