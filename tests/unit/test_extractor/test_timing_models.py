"""
Unit tests for raw timing data validation.
"""
import pytest
from pydantic import ValidationError

from extractor.interfaces import InvalidRawMetricsError, MeasurementStage, RawMetricsCollectionError
from extractor.models.timing_models import PageMetrics, PerformanceEntry, RawMetrics


class TestPerformanceEntry:

    @pytest.mark.unit
    def test_unknown_fields_ignored(self, navigation_entry_data):
        entry = PerformanceEntry(**navigation_entry_data)

        assert entry.is_navigation
        assert not entry.is_resource
        assert not hasattr(entry, 'serverTiming')

    @pytest.mark.unit
    def test_unpopulated_fields_default_to_zero(self, resource_entry_data):
        entry = PerformanceEntry(**resource_entry_data)

        assert entry.is_resource
        assert entry.domComplete == 0.0
        assert entry.startTime == 0.0

    @pytest.mark.unit
    def test_entry_type_required(self):
        with pytest.raises(ValidationError):
            PerformanceEntry(startTime=0)

    @pytest.mark.unit
    def test_wrong_type_rejected(self, resource_entry_data):
        resource_entry_data['transferSize'] = 'lots'
        with pytest.raises(ValidationError):
            PerformanceEntry(**resource_entry_data)

    @pytest.mark.unit
    def test_negative_size_rejected(self, resource_entry_data):
        resource_entry_data['decodedBodySize'] = -1
        with pytest.raises(ValidationError):
            PerformanceEntry(**resource_entry_data)

    @pytest.mark.unit
    def test_immutable(self, resource_entry_data):
        entry = PerformanceEntry(**resource_entry_data)
        with pytest.raises(ValidationError):
            entry.transferSize = 1


class TestRawMetrics:

    @pytest.mark.unit
    def test_partition(self, raw_metrics):
        assert raw_metrics.navigation_entry.entryType == 'navigation'
        assert len(raw_metrics.resource_entries) == 1

    @pytest.mark.unit
    def test_more_than_one_navigation_rejected(self, page_metrics, navigation_entry_data):
        nav = PerformanceEntry(**navigation_entry_data)
        with pytest.raises(ValidationError):
            RawMetrics(page_metrics=page_metrics, entries=(nav, nav))

    @pytest.mark.unit
    def test_no_navigation_entry(self, page_metrics, resource_entry_data):
        raw = RawMetrics(page_metrics=page_metrics, entries=(PerformanceEntry(**resource_entry_data),))
        assert raw.navigation_entry is None


class TestFromBrowser:

    @pytest.mark.unit
    def test_cdp_metric_list(self, cdp_page_metrics, navigation_entry_data, resource_entry_data, paint_entry_data):
        raw = RawMetrics.from_browser(
            cdp_page_metrics,
            [navigation_entry_data, resource_entry_data, paint_entry_data],
        )

        assert raw.page_metrics == PageMetrics(Documents=5, TaskDuration=0.25)
        assert len(raw.entries) == 3
        assert len(raw.resource_entries) == 1

    @pytest.mark.unit
    def test_flat_metric_mapping(self, navigation_entry_data):
        raw = RawMetrics.from_browser({'Documents': 2, 'TaskDuration': 0.1, 'Nodes': 40}, [navigation_entry_data])

        assert raw.page_metrics.documents == 2
        assert raw.page_metrics.task_duration == 0.1

    @pytest.mark.unit
    def test_missing_page_metric(self, navigation_entry_data):
        with pytest.raises(InvalidRawMetricsError) as exc_info:
            RawMetrics.from_browser({'metrics': [{'name': 'Documents', 'value': 1}]}, [navigation_entry_data])

        assert isinstance(exc_info.value.cause, ValidationError)
        assert exc_info.value.stage == MeasurementStage.COLLECTION

    @pytest.mark.unit
    @pytest.mark.parametrize("page_metrics", [
        None,
        "Documents=5",
        {'metrics': "not a list"},
        {'metrics': [{'name': 'Documents'}]},
    ])
    def test_malformed_page_metrics(self, page_metrics, navigation_entry_data):
        with pytest.raises(InvalidRawMetricsError):
            RawMetrics.from_browser(page_metrics, [navigation_entry_data])

    @pytest.mark.unit
    @pytest.mark.parametrize("entries", [None, {'entryType': 'navigation'}, "[]"])
    def test_entries_must_be_a_list(self, cdp_page_metrics, entries):
        with pytest.raises(InvalidRawMetricsError):
            RawMetrics.from_browser(cdp_page_metrics, entries)

    @pytest.mark.unit
    def test_malformed_entry(self, cdp_page_metrics, navigation_entry_data):
        with pytest.raises(InvalidRawMetricsError):
            RawMetrics.from_browser(cdp_page_metrics, [navigation_entry_data, "not an entry"])

    @pytest.mark.unit
    def test_is_a_collection_error(self, cdp_page_metrics):
        with pytest.raises(RawMetricsCollectionError):
            RawMetrics.from_browser(cdp_page_metrics, None)
