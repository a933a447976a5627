"""Resolve coarse time-range presets into concrete analysis windows."""

from datetime import datetime, timezone
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from ..exceptions import InvalidTimeRangeError
from .models import TimeRangeConfig, TimeRangePreset

# Calendar-aware offsets: "1m" back from March 31 lands on Feb 28/29.
_OFFSETS: dict[TimeRangePreset, relativedelta] = {
    TimeRangePreset.TWO_WEEKS: relativedelta(days=14),
    TimeRangePreset.ONE_MONTH: relativedelta(months=1),
    TimeRangePreset.THREE_MONTHS: relativedelta(months=3),
    TimeRangePreset.SIX_MONTHS: relativedelta(months=6),
    TimeRangePreset.ONE_YEAR: relativedelta(years=1),
}

LABELS: dict[TimeRangePreset, str] = {
    TimeRangePreset.TWO_WEEKS: "Last 2 weeks",
    TimeRangePreset.ONE_MONTH: "Last Month",
    TimeRangePreset.THREE_MONTHS: "Last Quarter",
    TimeRangePreset.SIX_MONTHS: "Last 6 Months",
    TimeRangePreset.ONE_YEAR: "Last Year",
}


def parse_time_range_preset(value: Union[str, TimeRangePreset]) -> TimeRangePreset:
    """Convert user input into a preset, rejecting anything unsupported."""
    if isinstance(value, TimeRangePreset):
        return value
    try:
        return TimeRangePreset(value)
    except ValueError:
        raise InvalidTimeRangeError(value, [p.value for p in TimeRangePreset]) from None


def resolve_time_range(
    preset: TimeRangePreset, now: Optional[datetime] = None
) -> TimeRangeConfig:
    """Build the window ending at *now* for *preset*.

    ``now`` defaults to the current UTC time; naive datetimes are treated as
    UTC. The midpoint is the exact arithmetic mean of start and end.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    end_date = now
    start_date = now - _OFFSETS[preset]
    midpoint = start_date + (end_date - start_date) / 2

    return TimeRangeConfig(
        start_date=start_date,
        end_date=end_date,
        midpoint=midpoint,
        label=LABELS[preset],
        preset=preset,
    )
