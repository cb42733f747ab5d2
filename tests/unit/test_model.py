"""
Module: tests/unit/test_model.py

What:
    Validate coercion of stored mail documents into the read-only ``Mail``
    model.

Why:
    Stored records use camelCase keys and the reserved word ``from``; the
    formatters rely on the model to normalise them and to keep absent fields
    distinguishable from empty ones.

How:
    Validate representative mappings and inspect the resulting attributes.

Interfaces:
    test_aliases_accepted, test_absent_fields_are_none, test_date_kept_verbatim,
    test_null_address_parts, test_models_are_frozen, test_non_mapping_rejected
"""

from datetime import datetime

import pydantic
import pytest

from mailfmt.core.model import Mail, coerce_mail


def test_aliases_accepted():
    mail = coerce_mail(
        {
            "messageId": "<a@b>",
            "from": {"text": "A <a@b.c>", "value": [{"name": "A", "address": "a@b.c"}]},
            "attachments": [{"id": "1", "filename": "f", "size": 2, "contentType": "image/png"}],
            "storageOnly": "ignored",
        }
    )
    assert mail.message_id == "<a@b>"
    assert mail.from_.value[0].address == "a@b.c"
    assert mail.attachments[0].content_type == "image/png"


def test_absent_fields_are_none():
    mail = coerce_mail({})
    assert mail.subject is None
    assert mail.text is None
    assert mail.attachments == []
    assert mail.read is None


def test_date_kept_verbatim():
    """
    What:
        String dates stay strings; only datetimes are stored as datetimes.

    Returns:
        None
    """
    assert coerce_mail({"date": "2024-01-15T10:30:00Z"}).date == "2024-01-15T10:30:00Z"
    moment = datetime(2024, 1, 15, 10, 30)
    assert coerce_mail({"date": moment}).date == moment


def test_null_address_parts():
    mail = coerce_mail({"to": {"value": [{"name": None, "address": "x@y.z"}]}, "attachments": [{"size": None}]})
    assert mail.to.value[0].name == ""
    assert mail.attachments[0].size == 0


def test_models_are_frozen():
    mail = Mail(subject="s")
    with pytest.raises(pydantic.ValidationError):
        mail.subject = "changed"
    assert coerce_mail(mail) is mail


def test_non_mapping_rejected():
    with pytest.raises(pydantic.ValidationError):
        coerce_mail(["not", "a", "mail"])
