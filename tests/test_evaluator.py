"""Tests for threshold evaluation."""

import pytest

from svccheck.core.evaluator import classify, evaluate, worst
from svccheck.errors import NoMetricSelectedError
from svccheck.models.enums import Severity
from svccheck.models.runtime import Thresholds


@pytest.fixture
def thresholds():
    return Thresholds(mem_warn=1024, mem_critical=2048, cpu_warn=50, cpu_critical=90)


class TestClassify:
    def test_ok(self):
        assert classify(10, 20, 30) is Severity.OK

    def test_warn_boundary_inclusive(self):
        assert classify(20, 20, 30) is Severity.WARNING

    def test_critical_boundary_inclusive(self):
        assert classify(30, 20, 30) is Severity.CRITICAL

    def test_critical_takes_precedence(self):
        assert classify(25, 25, 25) is Severity.CRITICAL

    def test_monotonic(self):
        ranks = [classify(v, 40, 80).rank for v in range(0, 120, 5)]
        assert ranks == sorted(ranks)


class TestWorst:
    def test_ordering(self):
        assert worst(Severity.OK, Severity.WARNING) is Severity.WARNING
        assert worst(Severity.CRITICAL, Severity.WARNING) is Severity.CRITICAL
        assert worst(Severity.OK) is Severity.OK


class TestMemOnly:
    def test_warning(self, thresholds):
        out = evaluate(1500, 75, True, False, thresholds)
        assert out.severity is Severity.WARNING
        assert out.memory.value == 1500
        assert (out.cpu.value, out.cpu.warn, out.cpu.critical) == (0, 0, 0)

    def test_exactly_warn(self, thresholds):
        assert evaluate(1024, 0, True, False, thresholds).severity is Severity.WARNING

    def test_exactly_critical(self, thresholds):
        assert evaluate(2048, 0, True, False, thresholds).severity is Severity.CRITICAL

    def test_ok(self, thresholds):
        out = evaluate(100, 99, True, False, thresholds)
        assert out.severity is Severity.OK
        assert "Memory usage 100MB" in out.summary


class TestCpuOnly:
    def test_critical(self, thresholds):
        out = evaluate(5000, 95, False, True, thresholds)
        assert out.severity is Severity.CRITICAL
        assert (out.memory.value, out.memory.warn, out.memory.critical) == (0, 0, 0)
        assert out.cpu.critical == 90

    def test_ok_ignores_memory(self, thresholds):
        assert evaluate(99999, 10, False, True, thresholds).severity is Severity.OK


class TestBoth:
    def test_worse_wins(self, thresholds):
        out = evaluate(1500, 95, True, True, thresholds)
        assert out.severity is Severity.CRITICAL
        assert out.exit_code == 2

    def test_both_ok(self, thresholds):
        out = evaluate(10, 10, True, True, thresholds)
        assert out.severity is Severity.OK
        assert out.memory.warn == 1024
        assert out.cpu.warn == 50

    @pytest.mark.parametrize(
        "mem,cpu",
        [(0, 0), (1500, 0), (3000, 0), (0, 60), (0, 95), (1500, 60), (3000, 60), (1500, 95)],
    )
    def test_max_of_single_modes(self, thresholds, mem, cpu):
        combined = evaluate(mem, cpu, True, True, thresholds).severity
        mem_only = evaluate(mem, 0, True, False, thresholds).severity
        cpu_only = evaluate(0, cpu, False, True, thresholds).severity
        assert combined is worst(mem_only, cpu_only)


class TestNeither:
    def test_raises(self, thresholds):
        with pytest.raises(NoMetricSelectedError):
            evaluate(1500, 95, False, False, thresholds)

    def test_never_unknown_from_thresholds(self, thresholds):
        for mem in (0, 1024, 5000):
            for cpu in (0, 50, 100):
                out = evaluate(mem, cpu, True, True, thresholds)
                assert out.severity is not Severity.UNKNOWN
