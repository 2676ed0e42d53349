"""
Data models for the performance data extractor.
"""

from .timing_models import EntryType, PerformanceEntry, PageMetrics, RawMetrics

__all__ = ['EntryType', 'PerformanceEntry', 'PageMetrics', 'RawMetrics']
