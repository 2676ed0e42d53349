"""
Shared test configuration and fixtures for the performance data extractor tests.

This module provides raw browser data, settings and mocks used across all test modules.
"""
import os
import sys
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from extractor.models.timing_models import PageMetrics, PerformanceEntry, RawMetrics
from utils.config.settings import MeasurementSettings


class TestConfig:
    """Test configuration and constants."""

    TARGET_URL = "https://localhost:8443"
    COLLECTOR_URL = "https://collector.local"
    TIME_STAMP = 1700000000


@pytest.fixture
def test_config():
    """Provide test configuration."""
    return TestConfig()


@pytest.fixture
def navigation_entry_data() -> Dict[str, Any]:
    """Navigation entry as the browser reports it, including fields we ignore."""
    return {
        'name': 'https://localhost:8443/',
        'entryType': 'navigation',
        'initiatorType': 'navigation',
        'duration': 95.3,
        'startTime': 0,
        'requestStart': 10,
        'responseStart': 30,
        'responseEnd': 50,
        'domainLookupStart': 1,
        'domainLookupEnd': 3,
        'connectStart': 3,
        'connectEnd': 8,
        'domContentLoadedEventStart': 60,
        'domComplete': 90,
        'transferSize': 1200,
        'encodedBodySize': 900,
        'decodedBodySize': 2400,
        'serverTiming': [],
    }


@pytest.fixture
def resource_entry_data() -> Dict[str, Any]:
    """A single sub-resource fetch."""
    return {
        'name': 'https://localhost:8443/static/app.js',
        'entryType': 'resource',
        'initiatorType': 'script',
        'transferSize': 100,
        'encodedBodySize': 80,
        'decodedBodySize': 200,
        'requestStart': 10,
        'responseEnd': 50,
    }


@pytest.fixture
def paint_entry_data() -> Dict[str, Any]:
    """An entry type the calculator does not consume."""
    return {'name': 'first-contentful-paint', 'entryType': 'paint', 'startTime': 70.5, 'duration': 0}


@pytest.fixture
def cdp_page_metrics() -> Dict[str, Any]:
    """Payload of the CDP Performance.getMetrics command."""
    return {
        'metrics': [
            {'name': 'Timestamp', 'value': 81234.56},
            {'name': 'Documents', 'value': 5},
            {'name': 'Frames', 'value': 1},
            {'name': 'TaskDuration', 'value': 0.25},
        ]
    }


@pytest.fixture
def page_metrics() -> PageMetrics:
    return PageMetrics(Documents=5, TaskDuration=0.25)


@pytest.fixture
def raw_metrics(page_metrics, navigation_entry_data, resource_entry_data) -> RawMetrics:
    """The reference scenario: one navigation entry, one resource entry."""
    return RawMetrics(
        page_metrics=page_metrics,
        entries=(
            PerformanceEntry(**navigation_entry_data),
            PerformanceEntry(**resource_entry_data),
        ),
    )


@pytest.fixture
def raw_metrics_without_resources(page_metrics, navigation_entry_data) -> RawMetrics:
    return RawMetrics(
        page_metrics=page_metrics,
        entries=(PerformanceEntry(**navigation_entry_data),),
    )


@pytest.fixture
def settings() -> MeasurementSettings:
    return MeasurementSettings(
        target_url=TestConfig.TARGET_URL,
        collector_base_url=TestConfig.COLLECTOR_URL,
    )


@pytest.fixture
def mock_collector(raw_metrics):
    """Collector returning the reference scenario."""
    collector = MagicMock()
    collector.collect = AsyncMock(return_value=raw_metrics)
    return collector


@pytest.fixture
def mock_metrics_client():
    """Metrics client acknowledging every write."""
    client = MagicMock()
    client.post_data_point = AsyncMock(return_value="Administered value")
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


@pytest.fixture
def clean_environment():
    """Remove PERF_* variables so tests do not depend on the caller's shell."""
    cleaned = {key: value for key, value in os.environ.items() if not key.startswith('PERF_')}
    with patch.dict(os.environ, cleaned, clear=True):
        yield


class ResourceEntryFactory:
    """Factory for generating resource entries."""

    @staticmethod
    def create_entry(index: int = 0, **overrides) -> Dict[str, Any]:
        entry = {
            'name': f'https://localhost:8443/static/asset-{index}.css',
            'entryType': 'resource',
            'transferSize': 100 + index,
            'encodedBodySize': 50 + index,
            'decodedBodySize': 150 + index,
            'requestStart': 10 + index,
            'responseEnd': 40 + 3 * index,
        }
        entry.update(overrides)
        return entry

    @staticmethod
    def create_entries(count: int = 3) -> List[Dict[str, Any]]:
        return [ResourceEntryFactory.create_entry(i) for i in range(count)]


@pytest.fixture
def resource_factory():
    """Provide resource entry factory for test data generation."""
    return ResourceEntryFactory()
