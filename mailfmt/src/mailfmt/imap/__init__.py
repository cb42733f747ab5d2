"""Facade for the IMAP FETCH formatters.

What:
  Surface the functions that render ADDRESS, ENVELOPE, BODYSTRUCTURE, FLAGS,
  and INTERNALDATE values, plus the account/mailbox name mapping.

Why:
  The FETCH handler should depend on one import surface rather than on the
  individual modules, so the internals can be reorganised freely.

Interfaces:
  ``format_address_list``, ``format_envelope``, ``format_body_structure``,
  ``format_flags``, ``format_flag_list``, ``format_internal_date``,
  ``to_timestamp``, ``account_to_box``, ``box_to_account``.

Invariants & Safety:
  - Every function here is pure and total over its input record.
"""

from .address import format_address_list
from .bodystructure import format_body_structure
from .dates import format_internal_date, to_timestamp
from .envelope import format_envelope
from .flags import format_flag_list, format_flags
from .mailbox import account_to_box, box_to_account

__all__ = [
    "format_address_list",
    "format_body_structure",
    "format_envelope",
    "format_flags",
    "format_flag_list",
    "format_internal_date",
    "to_timestamp",
    "account_to_box",
    "box_to_account",
]
