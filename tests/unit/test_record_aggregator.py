"""
Unit Tests for DayBucketSeries and RecordAggregator
"""

import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

from app.domain.models import RawRecord
from app.domain.services.date_interval import DateInterval
from app.domain.services.day_buckets import DayBucketSeries
from app.domain.services.record_aggregator import RecordAggregator, safe_divide


D1 = date(2024, 1, 5)
D2 = date(2024, 1, 6)
D3 = date(2024, 1, 7)


def _at(day: date, hour: int = 12) -> datetime:
    return datetime(day.year, day.month, day.day, hour)


# ---------------------------------------------------------------
# DayBucketSeries
# ---------------------------------------------------------------

def test_series_has_one_zero_bucket_per_day():
    series = DayBucketSeries(DateInterval(D1, D3))

    buckets = series.buckets()

    assert [b.date for b in buckets] == [D1, D2, D3]
    assert all(b.metric == Decimal("0") for b in buckets)


def test_series_add_matches_by_calendar_date():
    series = DayBucketSeries(DateInterval(D1, D3))

    assert series.add(_at(D2, 0), Decimal("1"))
    assert series.add(_at(D2, 23), Decimal("2"))

    assert [b.metric for b in series.buckets()] == [0, 3, 0]


def test_series_add_outside_interval_is_rejected():
    series = DayBucketSeries(DateInterval(D1, D2))

    assert series.add(_at(D3), Decimal("5")) is False
    assert all(b.metric == 0 for b in series.buckets())
    assert len(series) == 2


def test_series_converts_aware_timestamps_to_local_day():
    tokyo = ZoneInfo("Asia/Tokyo")
    series = DayBucketSeries(DateInterval(D1, D2), tz=tokyo)

    # 20:00 UTC on D1 is already D2 in Tokyo
    series.add(datetime(2024, 1, 5, 20, 0, tzinfo=timezone.utc), Decimal("1"))

    assert [(b.date, b.metric) for b in series.buckets()] == [(D1, 0), (D2, 1)]


@pytest.mark.parametrize("days", [1, 2, 31, 366])
def test_series_buckets_strictly_ascending_and_unique(days):
    interval = DateInterval(D1, D1 + timedelta(days=days - 1))
    buckets = DayBucketSeries(interval).buckets()

    dates = [b.date for b in buckets]
    assert len(dates) == days
    assert len(set(dates)) == days
    assert all(a < b for a, b in zip(dates, dates[1:]))


# ---------------------------------------------------------------
# RecordAggregator
# ---------------------------------------------------------------

def test_three_day_order_scenario():
    aggregator = RecordAggregator()
    records = [
        RawRecord(_at(D1, 9), Decimal(500) / 100),
        RawRecord(_at(D1, 17), Decimal(300) / 100),
        RawRecord(_at(D3, 8), Decimal(1000) / 100),
    ]

    summary = aggregator.aggregate(records, DateInterval(D1, D3))

    assert [(b.date, b.metric) for b in summary.series] == [
        (D1, Decimal("8.00")),
        (D2, Decimal("0")),
        (D3, Decimal("10.00")),
    ]
    assert summary.total == Decimal("18.00")
    assert summary.count == 3
    assert summary.average == Decimal("6")


def test_records_in_any_order_produce_same_series():
    aggregator = RecordAggregator()
    records = [
        RawRecord(_at(D3), Decimal("1")),
        RawRecord(_at(D1), Decimal("2")),
        RawRecord(_at(D2), Decimal("3")),
    ]

    forward = aggregator.aggregate(records, DateInterval(D1, D3))
    backward = aggregator.aggregate(list(reversed(records)), DateInterval(D1, D3))

    assert forward == backward


def test_series_total_equals_scalar_total_when_all_records_inside():
    records = [RawRecord(_at(D1), Decimal("4.25")), RawRecord(_at(D2), Decimal("1.75"))]

    summary = RecordAggregator().aggregate(records, DateInterval(D1, D3))

    assert sum(b.metric for b in summary.series) == summary.total


def test_out_of_interval_records_dropped_from_series_but_kept_in_total():
    records = [
        RawRecord(_at(D1), Decimal("5")),
        RawRecord(_at(D3 + timedelta(days=1)), Decimal("7")),
    ]

    summary = RecordAggregator().aggregate(records, DateInterval(D1, D3))

    assert sum(b.metric for b in summary.series) == Decimal("5")
    assert summary.total == Decimal("12")
    assert summary.count == 2
    assert sum(b.metric for b in summary.series) <= summary.total


def test_empty_records_give_zero_series_and_zero_average():
    summary = RecordAggregator().aggregate([], DateInterval(D1, D3))

    assert len(summary.series) == 3
    assert all(b.metric == 0 for b in summary.series)
    assert summary.total == Decimal("0")
    assert summary.count == 0
    assert summary.average == Decimal("0")


def test_aggregate_does_not_mutate_records():
    records = [RawRecord(_at(D1), Decimal("1"))]
    snapshot = list(records)

    RecordAggregator().aggregate(records, DateInterval(D1, D1))

    assert records == snapshot


def test_aggregate_accepts_generators():
    records = (RawRecord(_at(D1), Decimal("2")) for _ in range(3))

    summary = RecordAggregator().aggregate(records, DateInterval(D1, D1))

    assert summary.count == 3
    assert summary.series[0].metric == Decimal("6")


def test_safe_divide_guards_zero():
    assert safe_divide(Decimal("10"), 0) == Decimal("0")
    assert safe_divide(Decimal("10"), 4) == Decimal("2.5")
