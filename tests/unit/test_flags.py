"""
Module: tests/unit/test_flags.py

What:
    Validate the derivation of IMAP system flags from boolean mail state.

Why:
    Clients diff flag lists between FETCH responses, so the canonical order
    must not depend on how the record was built.

How:
    Call ``format_flags`` with mappings and models covering single, multiple,
    and reordered attributes.

Interfaces:
    test_unset_flags_empty, test_single_flags, test_multiple_flags,
    test_all_flags, test_order_independent_of_input, test_flag_list
"""

import pytest

from mailfmt.core.model import Mail
from mailfmt.imap.flags import format_flag_list, format_flags


def test_unset_flags_empty():
    assert format_flags({}) == []
    assert format_flags({"read": False, "deleted": False}) == []


@pytest.mark.parametrize(
    "attribute, token",
    [
        ("read", "\\Seen"),
        ("saved", "\\Flagged"),
        ("deleted", "\\Deleted"),
        ("draft", "\\Draft"),
        ("answered", "\\Answered"),
    ],
)
def test_single_flags(attribute, token):
    assert format_flags({attribute: True}) == [token]


def test_multiple_flags():
    assert format_flags({"read": True, "saved": True, "answered": True}) == [
        "\\Seen",
        "\\Flagged",
        "\\Answered",
    ]


def test_all_flags():
    mail = Mail(read=True, saved=True, deleted=True, draft=True, answered=True)
    assert format_flags(mail) == ["\\Seen", "\\Flagged", "\\Deleted", "\\Draft", "\\Answered"]


def test_order_independent_of_input():
    """
    What:
        Field order in the input mapping never changes the token order.

    Returns:
        None
    """
    reordered = {"answered": True, "draft": True, "read": True}
    assert format_flags(reordered) == ["\\Seen", "\\Draft", "\\Answered"]


def test_flag_list():
    assert format_flag_list({}) == "()"
    assert format_flag_list({"read": True, "saved": True}) == "(\\Seen \\Flagged)"
