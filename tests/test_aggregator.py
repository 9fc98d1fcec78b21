"""Tests for metric aggregation."""

import pytest

from svccheck.core.aggregator import aggregate
from svccheck.errors import NoPerformanceDataError
from svccheck.models.runtime import PerformanceSample

MB = 1024 * 1024


class TestAggregate:
    def test_sums_selected(self):
        samples = [
            PerformanceSample(pid=1, working_set_bytes=100 * MB, cpu_percent=5),
            PerformanceSample(pid=2, working_set_bytes=50 * MB, cpu_percent=10),
            PerformanceSample(pid=3, working_set_bytes=999 * MB, cpu_percent=99),
        ]
        agg = aggregate({1, 2}, samples)
        assert agg.memory_mb == 150.0
        assert agg.cpu_percent == 15.0
        assert agg.sample_count == 2

    def test_fractional_megabytes(self):
        samples = [PerformanceSample(pid=1, working_set_bytes=MB // 2, cpu_percent=0)]
        assert aggregate({1}, samples).memory_mb == 0.5

    def test_order_independent(self):
        samples = [
            PerformanceSample(pid=1, working_set_bytes=123_456_789, cpu_percent=3),
            PerformanceSample(pid=2, working_set_bytes=987_654_321, cpu_percent=7),
            PerformanceSample(pid=3, working_set_bytes=55_555, cpu_percent=1),
        ]
        forward = aggregate({1, 2, 3}, samples)
        backward = aggregate({1, 2, 3}, list(reversed(samples)))
        assert forward == backward

    def test_duplicates_counted_twice(self):
        sample = PerformanceSample(pid=1, working_set_bytes=10 * MB, cpu_percent=4)
        agg = aggregate({1}, [sample, sample])
        assert agg.memory_mb == 20.0
        assert agg.cpu_percent == 8.0
        assert agg.sample_count == 2

    def test_zero_usage_is_not_missing(self):
        samples = [PerformanceSample(pid=1, working_set_bytes=0, cpu_percent=0)]
        agg = aggregate({1}, samples)
        assert agg.memory_mb == 0.0
        assert agg.sample_count == 1

    def test_no_matching_samples(self):
        samples = [PerformanceSample(pid=9, working_set_bytes=MB, cpu_percent=1)]
        with pytest.raises(NoPerformanceDataError) as exc_info:
            aggregate({1, 2}, samples)
        assert exc_info.value.pids == {1, 2}

    def test_no_samples(self):
        with pytest.raises(NoPerformanceDataError):
            aggregate({1}, [])
