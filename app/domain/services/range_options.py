"""
Dashboard range presets
Each chart picks its own range: a named preset, or a custom from/to pair.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from app.config import settings
from app.domain.models import DateRangeFilter
from app.utils.formatters import format_date
from app.utils.time import end_of_day, now_local_naive, start_of_day


@dataclass(frozen=True)
class RangeOption:
    key: str
    label: str
    start_date: Optional[datetime]
    end_date: Optional[datetime]

    def to_filter(self) -> DateRangeFilter:
        return DateRangeFilter(after=self.start_date, before=self.end_date)


# key -> (label, days back from today; None = unbounded)
_PRESETS: dict[str, tuple[str, Optional[int]]] = {
    "last_7_days": ("Last 7 Days", 6),
    "last_30_days": ("Last 30 Days", 29),
    "last_90_days": ("Last 90 Days", 89),
    "last_365_days": ("Last 365 Days", 364),
    "all_time": ("All Time", None),
}


def range_options(today: Optional[date] = None) -> dict[str, RangeOption]:
    """Presets anchored on `today` (default: current local date)"""
    today = today or now_local_naive().date()
    options = {}
    for key, (label, days_back) in _PRESETS.items():
        start = None if days_back is None else start_of_day(today - timedelta(days=days_back))
        options[key] = RangeOption(key=key, label=label, start_date=start, end_date=None)
    return options


def get_range_option(
    range_key: Optional[str] = None,
    from_: Optional[date] = None,
    to: Optional[date] = None,
    today: Optional[date] = None,
) -> RangeOption:
    """
    Resolve the range a chart should use

    Args:
        range_key: Preset key, takes precedence over from_/to
        from_: Custom range first day, or None for no lower bound
        to: Custom range last day, or None for no upper bound
        today: Anchor for presets

    Returns:
        RangeOption

    Raises:
        ValueError: Unknown preset, or custom range with from_ after to
    """
    options = range_options(today)

    if range_key is None:
        if from_ is not None or to is not None:
            return _custom_option(from_, to)
        range_key = settings.DEFAULT_RANGE

    option = options.get(range_key)
    if option is None:
        raise ValueError(
            f"Unknown range '{range_key}'. Valid: {', '.join(options)}"
        )
    return option


def _custom_option(from_: Optional[date], to: Optional[date]) -> RangeOption:
    """Custom range; either bound may be left open"""
    if from_ is not None and to is not None:
        if from_ > to:
            raise ValueError(f"Range start {from_} is after range end {to}")
        label = f"{format_date(from_)} - {format_date(to)}"
    elif from_ is not None:
        label = f"Since {format_date(from_)}"
    else:
        label = f"Until {format_date(to)}"

    return RangeOption(
        key="custom",
        label=label,
        start_date=start_of_day(from_) if from_ is not None else None,
        end_date=end_of_day(to) if to is not None else None,
    )
