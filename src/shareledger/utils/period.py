"""Period and timestamp parsing utilities."""

import re
from datetime import date, datetime, time, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIOD_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")

# The month after the last supported period must still be a valid date
MAX_PERIOD_YEAR = 9998


class PeriodOutOfRangeError(ValueError):
    """Well-formed period whose month window cannot be represented."""


def parse_period(period: str) -> date:
    """Parse a ``YYYY-MM`` period label into the first day of that month.

    Args:
        period: Period label, exactly seven characters

    Returns:
        Date of the first day of the month

    Raises:
        PeriodOutOfRangeError: If the year is after MAX_PERIOD_YEAR
        ValueError: If the label is not a calendar month in YYYY-MM form
    """
    if not isinstance(period, str) or len(period) != 7:
        raise ValueError(f"Invalid period '{period}'")
    match = PERIOD_PATTERN.match(period)
    if match is None:
        raise ValueError(f"Invalid period '{period}'")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise ValueError(f"Invalid period '{period}'")
    if year > MAX_PERIOD_YEAR:
        raise PeriodOutOfRangeError(f"Period '{period}' is after {MAX_PERIOD_YEAR}-12")
    return date(year, month, 1)


def month_window(period: str) -> tuple[datetime, datetime]:
    """Get the half-open [start, end) window covering a ``YYYY-MM`` period.

    Raises:
        ValueError: If the label is malformed
    """
    first_day = parse_period(period)
    start = datetime.combine(first_day, time.min)
    return start, start + relativedelta(months=1)


def parse_timestamp(value: str) -> datetime:
    """Parse a timestamp string (absolute, or 'today'/'yesterday').

    Raises:
        ValueError: If the string cannot be parsed
    """
    value = value.strip().lower()
    today = datetime.combine(date.today(), time.min)
    if value == "now":
        return datetime.now().replace(microsecond=0)
    if value == "today":
        return today
    if value == "yesterday":
        return today - timedelta(days=1)

    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}")


def parse_window_end(value: str) -> datetime:
    """Parse the end of a window given on the command line.

    A bare date means the whole day is included, so the exclusive end is the
    following midnight.
    """
    parsed = parse_timestamp(value)
    if parsed.time() == time.min and len(value.strip()) <= 10:
        return parsed + timedelta(days=1)
    return parsed
