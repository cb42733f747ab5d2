"""Generate the RFC 822 header block for exported messages.

What:
  Render ``Date``, ``From``, ``To``, ``Cc``, ``Message-ID``, ``Subject``,
  ``MIME-Version``, and ``Content-Type`` lines (plus
  ``Content-Transfer-Encoding`` for single-part bodies), each terminated by
  CRLF.

Why:
  The delivery and export path reassembles stored mail into raw message text.
  Its ``Content-Type`` has to announce the same layout and boundary the body
  renderer writes, and the same layout BODYSTRUCTURE describes.

How:
  Pick the content type through :func:`mailfmt.mime.shape.classify`, derive
  the boundary from the caller's document id (or a content-derived token when
  none is given), and write header values raw. Line breaks inside values are
  flattened to spaces so no bare LF can reach the wire.

Interfaces:
  :func:`format_headers`, :func:`format_mailbox`, :func:`resolve_boundary`,
  :func:`header_line`.

Invariants & Safety:
  - ``MIME-Version: 1.0`` is always present.
  - Every line ends with ``\\r\\n``.
"""
from __future__ import annotations

import re
from datetime import datetime
from email.header import Header
from email.utils import format_datetime, formataddr
from typing import Any, List, Mapping, Optional, Union

from ..config.schema import MimeConfig
from ..core.model import AddressField, Mail, MailAddress, coerce_mail
from ..imap.address import split_address
from ..utils.encoding import CRLF
from ..utils.ids import mail_token
from ..utils.logging import get_logger
from .shape import BodyShape, classify


LOGGER = get_logger("mailfmt.mime.headers")

_LINE_BREAKS = re.compile(r"[\r\n]+")

TEXT_CONTENT_TYPES = {
    BodyShape.PLAIN: "text/plain; charset=utf-8",
    BodyShape.HTML: "text/html; charset=utf-8",
}


def header_line(name: str, value: str) -> str:
    return f"{name}: {_LINE_BREAKS.sub(' ', value)}{CRLF}"


def resolve_boundary(
    mail: Mail,
    doc_id: Optional[str] = None,
    config: Optional[MimeConfig] = None,
) -> str:
    """Return the multipart boundary for ``mail``.

    ``doc_id`` is embedded verbatim when given. Otherwise a token derived from
    the mail content is used, so separate header and body calls still agree.
    """

    prefix = (config or MimeConfig()).boundary_prefix
    if doc_id is None:
        doc_id = mail_token(mail)
        LOGGER.debug("Generated boundary token", token=doc_id)
    return f"{prefix}{doc_id}"


def format_mailbox(entry: MailAddress) -> Optional[str]:
    """Render one ``name <address>`` mailbox, or ``None`` for an invalid address.

    Validity follows :func:`mailfmt.imap.address.split_address`, the rule the
    ENVELOPE uses. Non-ASCII display names become RFC 2047 encoded words;
    internationalized addresses are written as UTF-8 (RFC 6532).
    """

    if split_address(entry.address) is None:
        LOGGER.debug("Dropping invalid address from header", address=entry.address)
        return None
    if entry.address.isascii():
        return formataddr((entry.name, entry.address))
    if not entry.name:
        return entry.address
    return f"{Header(entry.name, 'utf-8').encode()} <{entry.address}>"


def _format_address_header(field: Optional[AddressField]) -> Optional[str]:
    if field is None:
        return None
    rendered = [mailbox for mailbox in map(format_mailbox, field.value) if mailbox]
    return ", ".join(rendered) or None


def _date_value(date: Union[str, datetime, None]) -> Optional[str]:
    if isinstance(date, datetime):
        return format_datetime(date)
    return date or None


def format_headers(
    mail: Union[Mail, Mapping[str, Any]],
    doc_id: Optional[str] = None,
    *,
    config: Optional[MimeConfig] = None,
) -> str:
    """Render the header block of the exported message.

    What:
      Emits optional identity headers, then ``MIME-Version: 1.0`` and the
      ``Content-Type`` that matches the message shape.

    Why:
      Paired with :func:`mailfmt.mime.body.format_body` for the same
      ``(mail, doc_id)`` this yields a complete, self-consistent message.

    Args:
      mail: :class:`Mail` or mapping.
      doc_id: Storage identifier embedded in ``boundary_<doc_id>``.
      config: Optional MIME settings (boundary prefix).

    Returns:
      CRLF-terminated header lines, without the blank separator line.
    """

    record = coerce_mail(mail)
    lines: List[str] = []
    optional = [
        ("Date", _date_value(record.date)),
        ("From", _format_address_header(record.from_)),
        ("To", _format_address_header(record.to)),
        ("Cc", _format_address_header(record.cc)),
        ("Message-ID", record.message_id),
        ("Subject", record.subject),
    ]
    for name, value in optional:
        if value:
            lines.append(header_line(name, value))
    lines.append(header_line("MIME-Version", "1.0"))

    shape = classify(record)
    if shape in (BodyShape.MIXED, BodyShape.ALTERNATIVE):
        boundary = resolve_boundary(record, doc_id, config)
        lines.append(header_line("Content-Type", f'multipart/{shape.value}; boundary="{boundary}"'))
    else:
        lines.append(header_line("Content-Type", TEXT_CONTENT_TYPES[shape]))
        lines.append(header_line("Content-Transfer-Encoding", "base64"))
    return "".join(lines)
