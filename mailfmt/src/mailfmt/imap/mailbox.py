"""Map between account addresses and IMAP mailbox names.

What:
  Convert an account address to the mailbox name it is exposed under, and a
  mailbox path back to the account address it stands for.

Why:
  Each receiving address is presented to IMAP clients as its own folder,
  optionally nested under a special folder such as ``INBOX`` or
  ``Sent Messages``. The handler needs both directions; the domain part comes
  from configuration so the transform stays pure.

How:
  :func:`account_to_box` keeps everything before the first ``@``.
  :func:`box_to_account` strips one leading special-folder segment listed in
  :class:`AccountConfig` and appends the user's domain: the bare suffix for the
  admin user, ``<username>.<suffix>`` for everyone else.

Interfaces:
  :func:`account_to_box`, :func:`box_to_account`, :func:`user_domain`.

Invariants & Safety:
  - No lookup is performed; the resulting account may not exist.
  - ``INBOX`` is matched case-insensitively (RFC 3501 reserves it in any
    case); other special folders match exactly.
"""
from __future__ import annotations

from ..config.schema import AccountConfig


INBOX = "INBOX"


def account_to_box(email: str) -> str:
    """Return the local part of ``email``; dots and ``+tag`` are kept as-is."""

    return email.split("@", 1)[0]


def user_domain(username: str, config: AccountConfig) -> str:
    if username == config.admin_user:
        return config.domain_suffix
    return f"{username}.{config.domain_suffix}"


def _strip_special_folder(mailbox_path: str, special_folders: list[str]) -> str:
    head, sep, rest = mailbox_path.partition("/")
    if not sep:
        return mailbox_path
    for folder in special_folders:
        if head == folder or (folder.upper() == INBOX and head.upper() == INBOX):
            return rest
    return mailbox_path


def box_to_account(username: str, mailbox_path: str, config: AccountConfig) -> str:
    """Return the account address a mailbox path refers to.

    Args:
      username: Authenticated IMAP user; selects the account domain.
      mailbox_path: Mailbox name as sent by the client, e.g.
        ``"INBOX/support"``.
      config: Domain suffix, admin user, and accepted special folders.

    Returns:
      Address such as ``support@mydomain`` or ``support@alice.mydomain``.
    """

    local = _strip_special_folder(mailbox_path, config.special_folders)
    return f"{local}@{user_domain(username, config)}"
