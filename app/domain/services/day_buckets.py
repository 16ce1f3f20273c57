"""
Day bucket series: one zeroed accumulator per calendar day of an interval,
keyed by the date itself so bucket construction and lookup share one key.
"""

from datetime import date, datetime, tzinfo
from decimal import Decimal
from typing import Optional

from app.domain.models import DayBucket
from app.domain.services.date_interval import DateInterval
from app.utils.time import to_local_date


class DayBucketSeries:
    """Dense, ascending per-day accumulators covering a DateInterval"""

    def __init__(self, interval: DateInterval, tz: Optional[tzinfo] = None):
        self.interval = interval
        self._tz = tz
        # dict preserves the ascending order produced by the interval
        self._metrics: dict[date, Decimal] = {
            day: Decimal("0") for day in interval.enumerate_days()
        }

    def __len__(self) -> int:
        return len(self._metrics)

    def add(self, timestamp: datetime | date, value: Decimal) -> bool:
        """
        Add value to the bucket for the timestamp's calendar day.

        Returns:
            False if the day is outside the interval (nothing is added)
        """
        key = to_local_date(timestamp, self._tz)
        if key not in self._metrics:
            return False
        self._metrics[key] += value
        return True

    def buckets(self) -> list[DayBucket]:
        return [DayBucket(date=day, metric=metric) for day, metric in self._metrics.items()]
