"""Render timestamps in the IMAP INTERNALDATE format.

What:
  Produce ``DD-Mon-YYYY HH:MM:SS +ZZZZ`` strings and convert stored date
  values (ISO 8601 or RFC 2822 text) into datetimes.

Why:
  INTERNALDATE is compared and sorted by clients. Every component, the UTC
  offset included, has to come from the same point of reference or the
  rendered instant drifts by the offset.

How:
  Resolve the datetime to an aware value once (naive values are taken as
  system local time via :meth:`datetime.astimezone`), then read the calendar
  fields and ``utcoffset`` from that single object. Month names come from a
  fixed English table so the host locale cannot leak in.

Interfaces:
  :func:`format_internal_date`, :func:`to_timestamp`.

Invariants & Safety:
  - Aware datetimes keep their own offset; they are never shifted to the host
    timezone.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from email.utils import parsedate_to_datetime
from typing import Optional, Union


MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _format_offset(offset: Optional[timedelta]) -> str:
    total_minutes = int((offset or timedelta(0)).total_seconds() // 60)
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}{minutes:02d}"


def format_internal_date(date: datetime) -> str:
    """Render ``date`` as an IMAP INTERNALDATE string.

    Args:
      date: Aware or naive datetime; naive values are interpreted as local time.

    Returns:
      Text such as ``05-Jan-2024 10:30:45 +0000``.
    """

    moment = date if date.tzinfo is not None else date.astimezone()
    return (
        f"{moment.day:02d}-{MONTHS[moment.month - 1]}-{moment.year:04d} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} "
        f"{_format_offset(moment.utcoffset())}"
    )


def to_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Best-effort conversion of a stored date value to a datetime.

    Accepts datetimes unchanged, ISO 8601 text (a trailing ``Z`` included) and
    RFC 2822 header dates. Returns ``None`` for absent or unparseable input.
    """

    if value is None or isinstance(value, datetime):
        return value
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
