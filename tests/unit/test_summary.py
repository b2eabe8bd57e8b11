"""Tests for summary building."""

import pytest

from run_notifier.summary import rank_slow_tests, success_rate
from run_notifier.testing.factories import TestCaseResultFactory


@pytest.mark.parametrize(
    ("passed", "total", "expected"),
    [
        (0, 0, 0.0),
        (8, 10, 80.0),
        (10, 10, 100.0),
        (0, 3, 0.0),
        (1, 3, 1 / 3 * 100),
    ],
)
def test_success_rate(passed: int, total: int, expected: float) -> None:
    """Success rate is a percentage, 0 for an empty run."""
    assert success_rate(passed, total) == expected


def test_slow_tests_sorted_by_duration_descending() -> None:
    """Slowest passed tests come first."""
    results = [
        TestCaseResultFactory.build(title=f"t{duration}", duration=float(duration))
        for duration in (3, 9, 1, 7, 5, 2, 8)
    ]

    ranked = rank_slow_tests(results)

    assert [slow.title for slow in ranked] == ["t9", "t8", "t7", "t5", "t3"]
    assert [slow.duration for slow in ranked] == [9.0, 8.0, 7.0, 5.0, 3.0]


def test_slow_tests_only_rank_passed_results() -> None:
    """Failed, timed out and skipped results are never ranked."""
    results = [
        TestCaseResultFactory.build(title="fast", status="passed", duration=1.0),
        TestCaseResultFactory.build(title="failed", status="failed", duration=99.0),
        TestCaseResultFactory.build(title="slow", status="timed_out", duration=60.0),
        TestCaseResultFactory.build(title="skip", status="skipped", duration=50.0),
    ]

    ranked = rank_slow_tests(results)

    assert [slow.title for slow in ranked] == ["fast"]


def test_slow_tests_ties_keep_reporting_order() -> None:
    """Equal durations keep the order in which they were reported."""
    results = [
        TestCaseResultFactory.build(title=name, duration=2.0)
        for name in ("first", "second", "third")
    ]

    ranked = rank_slow_tests(results)

    assert [slow.title for slow in ranked] == ["first", "second", "third"]


def test_slow_tests_respects_limit() -> None:
    """At most the requested number of entries is returned."""
    results = TestCaseResultFactory.batch(10)

    assert len(rank_slow_tests(results)) == 5
    assert len(rank_slow_tests(results, limit=2)) == 2
