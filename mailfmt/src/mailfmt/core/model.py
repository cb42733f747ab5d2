"""Pydantic models describing the mail records consumed by the formatters.

What:
  Define :class:`Mail`, :class:`AddressField`, :class:`MailAddress`, and
  :class:`Attachment` as frozen, all-optional records, plus :func:`coerce_mail`
  which accepts either a model instance or a plain mapping.

Why:
  Callers hand the formatters partial snapshots (a FETCH of ``FLAGS`` only
  needs the boolean state, an ENVELOPE only needs headers). Modelling every
  field as optional keeps each formatter total over such partial input, and the
  camelCase aliases let stored JSON documents be passed through unchanged.

How:
  Use pydantic v2 models with ``populate_by_name`` so both ``message_id`` and
  ``messageId`` are accepted, ``extra="ignore"`` so storage-only fields do not
  break validation, and ``frozen=True`` so formatters cannot mutate input.

Interfaces:
  :class:`Mail`, :class:`AddressField`, :class:`MailAddress`,
  :class:`Attachment`, :func:`coerce_mail`.

Invariants & Safety:
  - Absent fields stay ``None`` so formatters can tell "missing" apart from
    "empty string".
  - ``date`` keeps string input verbatim; only real datetimes are stored as
    :class:`~datetime.datetime`.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


_RECORD_CONFIG = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class MailAddress(BaseModel):
    """One correspondent: display name plus ``local@domain`` address."""

    model_config = _RECORD_CONFIG

    name: str = ""
    address: str = ""

    @field_validator("name", "address", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class AddressField(BaseModel):
    """Address header value; only ``value`` is consumed by the formatters."""

    model_config = _RECORD_CONFIG

    text: str = ""
    value: List[MailAddress] = Field(default_factory=list)


class Attachment(BaseModel):
    """Attachment metadata as stored alongside the mail."""

    model_config = _RECORD_CONFIG

    id: Optional[str] = None
    filename: Optional[str] = None
    size: int = 0
    content_type: Optional[str] = Field(default=None, alias="contentType")

    @field_validator("size", mode="before")
    @classmethod
    def _none_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class Mail(BaseModel):
    """Read-only snapshot of a stored message.

    ``from`` is a reserved word in Python, so the field is exposed as
    ``from_`` and populated from the ``from`` key of mapping input.
    """

    model_config = _RECORD_CONFIG

    subject: Optional[str] = None
    date: Optional[Union[str, datetime]] = Field(default=None, union_mode="left_to_right")
    message_id: Optional[str] = Field(default=None, alias="messageId")
    from_: Optional[AddressField] = Field(default=None, alias="from")
    to: Optional[AddressField] = None
    cc: Optional[AddressField] = None
    bcc: Optional[AddressField] = None
    text: Optional[str] = None
    html: Optional[str] = None
    attachments: List[Attachment] = Field(default_factory=list)
    read: Optional[bool] = None
    saved: Optional[bool] = None
    deleted: Optional[bool] = None
    draft: Optional[bool] = None
    answered: Optional[bool] = None


def coerce_mail(mail: Union[Mail, Mapping[str, Any]]) -> Mail:
    """Return ``mail`` as a :class:`Mail`, validating mappings on the way in.

    Raises:
      pydantic.ValidationError: If ``mail`` is neither a :class:`Mail` nor a
        mapping that fits the model.
    """

    if isinstance(mail, Mail):
        return mail
    return Mail.model_validate(mail)
