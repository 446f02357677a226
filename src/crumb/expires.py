"""Expiry coercion and the ``Expires`` wire date format.

``resolve_expires`` turns anything a caller may pass as an expiry into a
non-negative Unix timestamp (``0`` meaning a session cookie):

- ``None``, ``""``, ``"0"`` and ``0`` are a session cookie
- ``int`` and numeric strings are absolute timestamps
- ``datetime`` / ``date`` are converted to their timestamp (naive values are UTC)
- any other string is a relative expression (``"+1 day"``, ``"2 weeks ago"``,
  ``"tomorrow"``) or a calendar date (``"Wed, 21 Oct 2015 07:28:00 GMT"``)

Relative expressions are applied with ``dateutil.relativedelta``; calendar
dates go through ``dateutil.parser``.
"""

import logging
import re
from datetime import UTC, date, datetime, time, timedelta

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from crumb._internal import clock
from crumb.errors import ValidationError

logger = logging.getLogger("crumb.expires")

type ExpiresLike = int | str | datetime | date | None

# 9999-12-31 23:59:59 UTC, the last second a cookie date can carry
MAX_TIMESTAMP = 253402300799

_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# Optional sign, decimals, exponent
_NUMERIC_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")

_RELATIVE_RE = re.compile(r"^(?:[+-]?\s*\d+\s*[a-z]+\s*)+(?:ago)?$")
_TERM_RE = re.compile(r"([+-]?)\s*(\d+)\s*([a-z]+)")

_UNITS: dict[str, tuple[str, int]] = {
    "sec": ("seconds", 1),
    "second": ("seconds", 1),
    "min": ("minutes", 1),
    "minute": ("minutes", 1),
    "hour": ("hours", 1),
    "day": ("days", 1),
    "week": ("weeks", 1),
    "fortnight": ("weeks", 2),
    "month": ("months", 1),
    "year": ("years", 1),
}

_KEYWORDS: dict[str, timedelta | None] = {
    "now": None,
    "today": timedelta(0),
    "midnight": timedelta(0),
    "tomorrow": timedelta(days=1),
    "yesterday": timedelta(days=-1),
}


def resolve_expires(expires: ExpiresLike, *, now: int | None = None) -> int:
    """Coerce *expires* to a non-negative Unix timestamp.

    Raises ``ValidationError`` for unsupported types (``bool`` and ``float``
    included), for strings that are neither numeric, relative, nor a
    recognizable date, and for moments after ``MAX_TIMESTAMP``.
    """
    if isinstance(expires, bool) or not isinstance(expires, int | str | date | None):
        msg = (
            "The cookie expire time is not valid; must be None, str, int, "
            f"date or datetime; received `{type(expires).__name__}`."
        )
        raise ValidationError(msg, attribute="expires", value=expires)

    if expires is None or expires in ("", "0", 0):
        return 0

    if isinstance(expires, int):
        timestamp = expires
    elif isinstance(expires, datetime):
        timestamp = _datetime_to_timestamp(expires)
    elif isinstance(expires, date):
        timestamp = _datetime_to_timestamp(datetime.combine(expires, time(), tzinfo=UTC))
    else:
        timestamp = _parse_string(expires, clock.now() if now is None else now)

    if timestamp > MAX_TIMESTAMP:
        msg = f"The cookie expire time `{expires}` is beyond 9999-12-31 23:59:59 GMT."
        raise ValidationError(msg, attribute="expires", value=expires)
    return timestamp if timestamp > 0 else 0


def format_expires(timestamp: int) -> str:
    """Format *timestamp* as a cookie date: ``Wed, 21-Oct-2015 07:28:00 GMT``."""
    moment = datetime.fromtimestamp(timestamp, tz=UTC)
    return (
        f"{_DAYS[moment.weekday()]}, {moment.day:02d}-{_MONTHS[moment.month - 1]}-"
        f"{moment.year:04d} {moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} GMT"
    )


def _datetime_to_timestamp(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return int(moment.timestamp())


def _parse_string(text: str, now: int) -> int:
    stripped = text.strip()
    if not stripped:
        return 0
    try:
        return _string_to_timestamp(stripped, now)
    except (ValueError, OverflowError) as exc:
        msg = f"The string representation of the cookie expire time `{text}` is not valid."
        raise ValidationError(msg, attribute="expires", value=text) from exc


def _string_to_timestamp(text: str, now: int) -> int:
    """Numeric, relative, then calendar parsing; raises ValueError or OverflowError."""
    if _NUMERIC_RE.match(text):
        try:
            return int(text)
        except ValueError:
            return int(float(text))

    base = datetime.fromtimestamp(now, tz=UTC)
    relative = _parse_relative(text.lower(), base)
    if relative is not None:
        logger.debug("Resolved relative expiry %r to %s", text, relative.isoformat())
        return int(relative.timestamp())

    midnight = base.replace(hour=0, minute=0, second=0, microsecond=0)
    return _datetime_to_timestamp(date_parser.parse(text, default=midnight))


def _parse_relative(text: str, base: datetime) -> datetime | None:
    """Apply a relative expression to *base*, or return None if *text* is not one."""
    if text in _KEYWORDS:
        offset = _KEYWORDS[text]
        if offset is None:
            return base
        return base.replace(hour=0, minute=0, second=0, microsecond=0) + offset

    if not _RELATIVE_RE.match(text):
        return None

    sign = -1 if text.endswith("ago") else 1
    delta = relativedelta()
    for prefix, amount, unit in _TERM_RE.findall(text):
        unit_info = _UNITS.get(unit.removesuffix("s"))
        if unit_info is None:
            return None
        field, factor = unit_info
        count = int(amount) * factor * (-1 if prefix == "-" else 1)
        delta += relativedelta(**{field: count})
    return base + sign * delta
