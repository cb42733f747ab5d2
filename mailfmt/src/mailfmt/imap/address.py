"""Render mail addresses into the IMAP ADDRESS list syntax.

What:
  Turn a sequence of :class:`~mailfmt.core.model.MailAddress` entries into the
  space-separated ``("name" NIL "local" "domain")`` structures used inside an
  ENVELOPE, or ``NIL`` when nothing renderable remains.

Why:
  IMAP clients parse these structures positionally. A malformed entry (for
  example an address without a domain) would corrupt the whole envelope, so
  invalid addresses are filtered out instead of being rendered or reported.

How:
  Split each address on the first ``@``, keep only entries with a non-empty
  local part and domain, escape quotes in the display name, and join the
  rendered entries with single spaces in input order.

Interfaces:
  :func:`split_address`, :func:`format_address`, :func:`format_address_list`.

Invariants & Safety:
  - The source-route slot is always ``NIL``.
  - An empty, missing, or all-invalid list renders as ``NIL``.
"""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from ..core.model import MailAddress
from ..utils.logging import get_logger
from .quoting import NIL, quote


LOGGER = get_logger("mailfmt.imap.address")


def split_address(address: str) -> Optional[Tuple[str, str]]:
    """Return ``(local, domain)`` for a well-formed address, else ``None``.

    The split happens on the first ``@``; both halves must be non-empty.
    """

    local, sep, domain = address.partition("@")
    if not sep or not local or not domain:
        return None
    return local, domain


def format_address(entry: MailAddress) -> Optional[str]:
    parts = split_address(entry.address)
    if parts is None:
        return None
    local, domain = parts
    return f"({quote(entry.name)} {NIL} {quote(local)} {quote(domain)})"


def format_address_list(addresses: Optional[Iterable[MailAddress]] = None) -> str:
    """Render ``addresses`` as an IMAP ADDRESS list.

    What:
      Produces ``NIL`` or one ``("name" NIL "local" "domain")`` group per valid
      address, separated by single spaces.

    Why:
      Used four to six times per ENVELOPE (from, sender, reply-to, to, cc,
      bcc); keeping the validity rules here means every slot filters the same
      way.

    Args:
      addresses: Address entries in header order, or ``None``.

    Returns:
      Wire-format ADDRESS list text.
    """

    if not addresses:
        return NIL
    rendered = []
    dropped = 0
    for entry in addresses:
        formatted = format_address(entry)
        if formatted is None:
            dropped += 1
            continue
        rendered.append(formatted)
    if dropped:
        LOGGER.debug("Dropped invalid addresses", dropped=dropped, kept=len(rendered))
    if not rendered:
        return NIL
    return " ".join(rendered)
