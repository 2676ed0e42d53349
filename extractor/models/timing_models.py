# extractor/models/timing_models.py
"""
Data models for raw browser timing data.

Raw data reported by the browser is loosely shaped JSON. These models
validate it once at the collector boundary so the calculator only ever
sees well-typed values.
"""
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from extractor.interfaces.perf_source_interface import InvalidRawMetricsError


class EntryType(str, Enum):
    """Timeline entry types consumed by the calculator."""
    NAVIGATION = "navigation"
    RESOURCE = "resource"


class PerformanceEntry(BaseModel):
    """One recorded browser timeline event.

    Timing fields are milliseconds relative to navigation start. Fields the
    browser did not populate default to 0; fields the browser adds beyond
    these are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    entryType: str
    name: str = ""

    startTime: float = 0.0
    requestStart: float = 0.0
    responseStart: float = 0.0
    responseEnd: float = 0.0
    domainLookupStart: float = 0.0
    domainLookupEnd: float = 0.0
    connectStart: float = 0.0
    connectEnd: float = 0.0
    domContentLoadedEventStart: float = 0.0
    domComplete: float = 0.0

    transferSize: int = Field(default=0, ge=0)
    encodedBodySize: int = Field(default=0, ge=0)
    decodedBodySize: int = Field(default=0, ge=0)

    @property
    def is_navigation(self) -> bool:
        return self.entryType == EntryType.NAVIGATION.value

    @property
    def is_resource(self) -> bool:
        return self.entryType == EntryType.RESOURCE.value


class PageMetrics(BaseModel):
    """Engine-reported counters at measurement time."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    documents: int = Field(alias="Documents", ge=0)
    task_duration: float = Field(alias="TaskDuration", ge=0)


class RawMetrics(BaseModel):
    """Page metrics plus the full performance timeline of one page load."""

    model_config = ConfigDict(frozen=True)

    page_metrics: PageMetrics
    entries: Tuple[PerformanceEntry, ...] = ()

    @field_validator("entries")
    @classmethod
    def _at_most_one_navigation(cls, entries: Tuple[PerformanceEntry, ...]):
        navigations = sum(1 for entry in entries if entry.is_navigation)
        if navigations > 1:
            raise ValueError(f"Expected at most one navigation entry, got {navigations}")
        return entries

    @property
    def navigation_entry(self) -> Optional[PerformanceEntry]:
        """The navigation entry, or None when the timeline has none."""
        for entry in self.entries:
            if entry.is_navigation:
                return entry
        return None

    @property
    def resource_entries(self) -> Tuple[PerformanceEntry, ...]:
        return tuple(entry for entry in self.entries if entry.is_resource)

    @classmethod
    def from_browser(cls, page_metrics: Any, entries: Any) -> "RawMetrics":
        """
        Build validated raw metrics from browser output.

        Args:
            page_metrics: CDP ``Performance.getMetrics`` result, either
                ``{"metrics": [{"name": ..., "value": ...}]}`` or a flat
                name to value mapping
            entries: JSON list produced by ``performance.getEntries()``

        Raises:
            InvalidRawMetricsError: When either structure is malformed
        """
        if not isinstance(entries, (list, tuple)):
            raise InvalidRawMetricsError(
                f"Performance entries must be a list, got {type(entries).__name__}"
            )

        try:
            return cls(
                page_metrics=_flatten_page_metrics(page_metrics),
                entries=tuple(entries),
            )
        except ValidationError as e:
            raise InvalidRawMetricsError(
                f"Malformed raw metrics ({e.error_count()} validation errors): {e}",
                cause=e,
            ) from e


def _flatten_page_metrics(page_metrics: Any) -> Dict[str, Any]:
    """Turn the CDP metric list into a name to value mapping."""
    if isinstance(page_metrics, Mapping) and "metrics" in page_metrics:
        metrics = page_metrics["metrics"]
        if not isinstance(metrics, Iterable) or isinstance(metrics, (str, bytes)):
            raise InvalidRawMetricsError("Page metrics 'metrics' field must be a list")
        flattened = {}
        for metric in metrics:
            if not isinstance(metric, Mapping) or "name" not in metric or "value" not in metric:
                raise InvalidRawMetricsError(f"Malformed page metric: {metric!r}")
            flattened[metric["name"]] = metric["value"]
        return flattened

    if isinstance(page_metrics, Mapping):
        return dict(page_metrics)

    raise InvalidRawMetricsError(
        f"Page metrics must be a mapping, got {type(page_metrics).__name__}"
    )
