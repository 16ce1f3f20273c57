"""
RECORD AGGREGATOR
Folds timestamped records into a dense daily series plus scalar totals.

RULES:
- Series and scalar totals are computed independently
- A record outside the interval is dropped from the series only;
  it still counts toward total / count
- Average never divides by zero
"""

import logging
from datetime import tzinfo
from decimal import Decimal
from typing import Iterable, Optional

from app.domain.models import AggregateSummary, RawRecord
from app.domain.services.date_interval import DateInterval
from app.domain.services.day_buckets import DayBucketSeries

logger = logging.getLogger(__name__)


def safe_divide(numerator, denominator) -> Decimal:
    """numerator / denominator, or 0 when the denominator is 0"""
    if not denominator:
        return Decimal("0")
    return Decimal(numerator) / Decimal(denominator)


class RecordAggregator:
    """Stateless aggregator; one instance can serve any number of requests"""

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz

    def aggregate(
        self,
        records: Iterable[RawRecord],
        interval: DateInterval,
    ) -> AggregateSummary:
        """
        Aggregate records over an interval

        Args:
            records: Records to fold (any order, never mutated)
            interval: Days the series must cover

        Returns:
            AggregateSummary with one bucket per interval day
        """
        records = list(records)
        series = DayBucketSeries(interval, tz=self.tz)

        dropped = 0
        for record in records:
            if not series.add(record.timestamp, record.value):
                dropped += 1

        if dropped:
            logger.debug(
                f"{dropped} of {len(records)} records fall outside "
                f"{interval.start}..{interval.end}; excluded from series only"
            )

        total = sum((record.value for record in records), Decimal("0"))
        count = len(records)

        return AggregateSummary(
            series=series.buckets(),
            total=total,
            count=count,
            average=safe_divide(total, count),
        )
