"""IMAP quoted-string and NIL rendering shared by the FETCH formatters."""
from __future__ import annotations

from typing import Optional


NIL = "NIL"


def escape(value: str) -> str:
    """Escape double quotes as ``\\"`` for use inside an IMAP quoted string."""

    return value.replace('"', '\\"')


def quote(value: str) -> str:
    return f'"{escape(value)}"'


def nil_or_quote(value: Optional[str], *, escaped: bool = True) -> str:
    """Render ``value`` as a quoted string, or ``NIL`` when absent.

    Args:
      value: Field value; ``None`` and ``""`` both render as ``NIL``.
      escaped: When ``False`` the value is quoted verbatim.
    """

    if not value:
        return NIL
    if escaped:
        return quote(value)
    return f'"{value}"'
