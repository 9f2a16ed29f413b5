import datetime as dt
import re

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
_MONTH_RE = re.compile(MONTH_PATTERN)


def utcnow() -> dt.datetime:
    """Naive UTC timestamp, the way the database stores them."""
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


def today() -> dt.date:
    return utcnow().date()


def month_of(value: dt.date | str) -> str:
    """Month bucket of a calendar day: the YYYY-MM prefix of its ISO form."""
    if isinstance(value, dt.date):
        value = value.isoformat()
    return value[:7]


def current_month() -> str:
    return month_of(today())


def is_valid_month(value: str) -> bool:
    return bool(_MONTH_RE.match(value or ""))


def month_bounds(month: str) -> tuple[dt.date, dt.date]:
    """First day of the month and first day of the following month."""
    year, mon = (int(part) for part in month.split("-"))
    start = dt.date(year, mon, 1)
    if mon == 12:
        end = dt.date(year + 1, 1, 1)
    else:
        end = dt.date(year, mon + 1, 1)
    return start, end
