import calendar
import re
from datetime import date as dt_date
from typing import Any, FrozenSet, List

from utils.constants import SATURDAY, SUNDAY, WEEKDAY_LABELS


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month (month is 1-12)."""
    return calendar.monthrange(year, month)[1]


def weekday_of(year: int, month: int, day: int) -> int:
    """Weekday index of a day of the month, 0=Sunday..6=Saturday."""
    # date.weekday() is 0=Monday
    return (dt_date(year, month, day).weekday() + 1) % 7


def is_weekend_weekday(weekday: int) -> bool:
    return weekday in (SATURDAY, SUNDAY)


def weekday_label(weekday: int) -> str:
    return WEEKDAY_LABELS[weekday]


def month_weekdays(year: int, month: int) -> List[int]:
    """Weekday index for every day of the month; position 0 is day 1."""
    return [weekday_of(year, month, d) for d in range(1, days_in_month(year, month) + 1)]


def parse_day_list(raw: Any) -> FrozenSet[int]:
    """
    Parse a day list as found in spreadsheets and JSON payloads.

    Accepts an int, a float (Excel numeric cells), an iterable of ints, or a
    string such as "1, 2,15" or "3;4". Blank and non-numeric tokens are ignored.
    """
    if raw is None:
        return frozenset()
    if isinstance(raw, bool):
        return frozenset()
    if isinstance(raw, (int, float)):
        if raw != raw:  # NaN from pandas
            return frozenset()
        return frozenset({int(raw)})
    if isinstance(raw, str):
        tokens = re.split(r"[,;\s]+", raw.strip())
        return frozenset(int(t) for t in tokens if t.isdigit())
    return frozenset(int(d) for d in raw)
