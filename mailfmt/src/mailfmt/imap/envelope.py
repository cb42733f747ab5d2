"""Compose the IMAP ENVELOPE structure for a mail record.

What:
  Render the fixed ten-slot parenthesized list ``(date subject from sender
  reply-to to cc bcc in-reply-to message-id)``.

Why:
  Clients build message lists from ENVELOPE alone, and they read it by
  position. Every absent slot must still be present as ``NIL`` so the
  following slots keep their meaning.

How:
  Quote the date and message id verbatim, quote the subject with escaping,
  and delegate each address slot to :func:`format_address_list`. The store
  does not track ``Sender``, ``Reply-To``, or ``In-Reply-To``; sender and
  reply-to fall back to the author as the protocol prescribes, and
  in-reply-to is always ``NIL``.

Interfaces:
  :func:`format_envelope`, :func:`format_envelope_date`.
"""
from __future__ import annotations

from datetime import datetime
from email.utils import format_datetime
from typing import Any, List, Mapping, Optional, Union

from ..core.model import AddressField, Mail, MailAddress, coerce_mail
from .address import format_address_list
from .quoting import NIL, nil_or_quote


def format_envelope_date(date: Union[str, datetime, None]) -> str:
    """Render the ENVELOPE date slot.

    Stored strings are quoted verbatim. Datetime values are rendered as an
    RFC 2822 ``Date`` header value, which is what the slot carries on the wire.
    """

    if isinstance(date, datetime):
        return nil_or_quote(format_datetime(date), escaped=False)
    return nil_or_quote(date, escaped=False)


def _addresses(field: Optional[AddressField]) -> List[MailAddress]:
    return list(field.value) if field is not None else []


def format_envelope(mail: Union[Mail, Mapping[str, Any]]) -> str:
    """Render the IMAP ENVELOPE for ``mail``.

    Args:
      mail: :class:`Mail` or mapping; every field may be absent.

    Returns:
      The parenthesized ENVELOPE list.
    """

    record = coerce_mail(mail)
    author = format_address_list(_addresses(record.from_))
    slots = [
        format_envelope_date(record.date),
        nil_or_quote(record.subject),
        author,
        author,
        author,
        format_address_list(_addresses(record.to)),
        format_address_list(_addresses(record.cc)),
        format_address_list(_addresses(record.bcc)),
        NIL,
        nil_or_quote(record.message_id, escaped=False),
    ]
    return f"({' '.join(slots)})"
