"""Derive IMAP system flags from a mail's boolean state.

What:
  Map the ``read``, ``saved``, ``deleted``, ``draft``, and ``answered``
  attributes onto ``\\Seen``, ``\\Flagged``, ``\\Deleted``, ``\\Draft``, and
  ``\\Answered``.

Why:
  Flags are not stored as such; they are recomputed on every FETCH. Clients
  compare flag lists between responses, so the output order is fixed no matter
  how the record was built.

How:
  Walk :data:`FLAG_ORDER` and emit the token for every attribute that is
  truthy.

Interfaces:
  :data:`FLAG_ORDER`, :func:`format_flags`, :func:`format_flag_list`.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Tuple, Union

from ..core.model import Mail, coerce_mail


FLAG_ORDER: Tuple[Tuple[str, str], ...] = (
    ("read", "\\Seen"),
    ("saved", "\\Flagged"),
    ("deleted", "\\Deleted"),
    ("draft", "\\Draft"),
    ("answered", "\\Answered"),
)


def format_flags(mail: Union[Mail, Mapping[str, Any]]) -> List[str]:
    """Return the ordered flag tokens set on ``mail``.

    Unset or false attributes contribute nothing; an all-false record yields
    an empty list, never ``NIL``.
    """

    record = coerce_mail(mail)
    return [token for attribute, token in FLAG_ORDER if getattr(record, attribute)]


def format_flag_list(mail: Union[Mail, Mapping[str, Any]]) -> str:
    """Render the parenthesized FETCH ``FLAGS`` value, e.g. ``(\\Seen)``."""

    return f"({' '.join(format_flags(mail))})"
