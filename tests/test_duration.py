"""
Tests for discharge duration phrases.
"""

from datetime import timedelta

import pytest

from hydro_reports.domain.duration import format_duration


@pytest.mark.parametrize(
    "span, expected",
    [
        (timedelta(0), "0 минут"),
        (timedelta(minutes=90), "1 соат, 30 минут"),
        (timedelta(minutes=1500), "1 кун, 1 соат"),
        (timedelta(hours=14), "14 соат"),
        (timedelta(days=1), "1 кун"),
        (timedelta(days=2, hours=3, minutes=4), "2 кун, 3 соат, 4 минут"),
        (timedelta(days=3, minutes=5), "3 кун, 5 минут"),
    ],
)
def test_format_duration(span, expected):
    assert format_duration(span) == expected


def test_seconds_are_truncated():
    assert format_duration(timedelta(seconds=59)) == "0 минут"
    assert format_duration(timedelta(minutes=1, seconds=59)) == "1 минут"


def test_negative_span_renders_as_zero():
    assert format_duration(timedelta(minutes=-30)) == "0 минут"
