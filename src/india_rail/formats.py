"""Normalizers for the ad-hoc text encodings used in API responses.

The API sends clock times as ``HH:MM`` with no date, calendar dates in one of
three layouts depending on the endpoint, elapsed durations as ``H:MM`` and
flags as ``Y``/``N``. Every function here is pure and tolerates absence: a
blank (or, for times and durations, wrongly sized) value yields ``None``
rather than an error. Only a present value in the wrong shape raises
:class:`~india_rail.errors.FormatError`.
"""

from __future__ import annotations

import datetime as dt
import re
from enum import Enum
from typing import Optional, Union

from .errors import FormatError

_CLOCK_TIME = re.compile(r"^(\d{2}):(\d{2})$")
_DURATION = re.compile(r"^([+-]?)(\d+)h(\d+)m$")

_MONTHS = {
    name: index
    for index, name in enumerate(
        ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"],
        start=1,
    )
}


class DateLayout(Enum):
    """Calendar date layouts used across endpoints."""

    # "5 Apr 2018": live status, route and cancelled train dates.
    NAMED_MONTH = ("D Mon YYYY", re.compile(r"^(\d{1,2}) ([A-Za-z]{3}) (\d{4})$"))
    # "05-04-2018": PNR journey dates and rescheduled dates.
    NUMERIC = ("DD-MM-YYYY", re.compile(r"^(\d{2})-(\d{2})-(\d{4})$"))
    # "5-4-2018": seat and fare availability dates.
    SHORT_NUMERIC = ("D-M-YYYY", re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$"))

    def __init__(self, label: str, pattern: re.Pattern[str]) -> None:
        self.label = label
        self.pattern = pattern


def parse_clock_time(
    value: str, *, field: Optional[str] = None, key: Optional[str] = None
) -> Optional[dt.time]:
    """Parse an ``HH:MM`` 24-hour clock time.

    Values that are not exactly five characters long are treated as absent.
    """

    if len(value) != 5:
        return None

    match = _CLOCK_TIME.match(value)
    if not match:
        raise FormatError(value, "HH:MM", field=field, key=key)

    hour, minute = (int(part) for part in match.groups())
    try:
        return dt.time(hour, minute)
    except ValueError as exc:
        raise FormatError(value, "HH:MM", field=field, key=key) from exc


def parse_calendar_date(
    value: str,
    layout: DateLayout,
    *,
    field: Optional[str] = None,
    key: Optional[str] = None,
) -> Optional[dt.date]:
    """Parse a calendar date using the layout the calling decoder expects."""

    if value == "":
        return None

    match = layout.pattern.match(value)
    if not match:
        raise FormatError(value, layout.label, field=field, key=key)

    day, month, year = match.groups()
    if layout is DateLayout.NAMED_MONTH:
        month_number = _MONTHS.get(month.lower())
        if month_number is None:
            raise FormatError(value, layout.label, field=field, key=key)
    else:
        month_number = int(month)

    try:
        return dt.date(int(year), month_number, int(day))
    except ValueError as exc:
        raise FormatError(value, layout.label, field=field, key=key) from exc


def parse_duration(
    value: str, *, field: Optional[str] = None, key: Optional[str] = None
) -> Optional[dt.timedelta]:
    """Parse an ``H:MM`` elapsed duration such as a journey time.

    The colon is read as an hour marker and a minute marker is appended, so
    ``"02:30"`` is read as ``2h30m``. A leading sign applies to the whole
    value and minutes are not range checked.
    """

    if len(value) != 5:
        return None

    match = _DURATION.match(value.replace(":", "h") + "m")
    if not match:
        raise FormatError(value, "H:MM", field=field, key=key)

    sign, hours, minutes = match.groups()
    duration = dt.timedelta(hours=int(hours), minutes=int(minutes))
    return -duration if sign == "-" else duration


def parse_yes_no(value: str) -> bool:
    return value == "Y"


def format_request_date(value: Union[dt.date, dt.datetime]) -> str:
    """Render a date the way request paths expect it (``DD-MM-YYYY``)."""

    return value.strftime("%d-%m-%Y")
