"""
DATE INTERVAL
Closed range of local calendar days used to lay out a daily series.

RULES:
- start <= end, always
- Days are calendar dates (time of day stripped), not elapsed 24h spans
- An open lower bound defaults to the earliest record's day
- An open upper bound defaults to "now", or the latest record day if later
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Iterator, Literal, Optional

from app.config import settings
from app.domain.errors import EmptyDatasetError, InvalidIntervalError
from app.domain.models import RawRecord
from app.utils.time import now_local_naive, to_local_date

EmptyRangePolicy = Literal["today", "error"]


@dataclass(frozen=True)
class DateInterval:
    """Inclusive calendar-day range - Immutable"""
    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidIntervalError(
                f"Interval start {self.start} is after end {self.end}"
            )

    @classmethod
    def covering(
        cls,
        records: Iterable[RawRecord],
        lower: Optional[datetime | date] = None,
        upper: Optional[datetime | date] = None,
        now: Optional[datetime] = None,
        empty_policy: Optional[EmptyRangePolicy] = None,
        tz: Optional[tzinfo] = None,
    ) -> "DateInterval":
        """
        Resolve an interval from optional bounds and the records to chart.

        Args:
            records: Records being summarized (any order)
            lower: Explicit lower bound, or None to use the earliest record
            upper: Explicit upper bound, or None to use `now` (or the
                latest record day, whichever is later)
            now: Clock value for this request (default: current local time)
            empty_policy: "today" or "error" when lower is None and there
                are no records (default: settings.EMPTY_RANGE_POLICY)
            tz: Calendar timezone for aware timestamps

        Returns:
            DateInterval

        Raises:
            EmptyDatasetError: No lower bound, no records and policy "error"
            InvalidIntervalError: Resolved start is after resolved end
        """
        now = now or now_local_naive()
        days = [to_local_date(record.timestamp, tz) for record in records]

        if lower is not None:
            start = to_local_date(lower, tz)
        elif days:
            start = min(days)
        elif (empty_policy or settings.EMPTY_RANGE_POLICY) == "error":
            raise EmptyDatasetError(
                "Cannot default the interval start: no records and no lower bound"
            )
        else:
            start = to_local_date(now, tz)

        if upper is not None:
            end = to_local_date(upper, tz)
        else:
            # Records stamped after "now" (clock skew) stay on the chart
            end = max([to_local_date(now, tz), *days])
        return cls(start=start, end=end)

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def __iter__(self) -> Iterator[date]:
        for offset in range(len(self)):
            yield self.start + timedelta(days=offset)

    def enumerate_days(self) -> list[date]:
        """Every calendar day from start to end, inclusive and ascending"""
        return list(self)
