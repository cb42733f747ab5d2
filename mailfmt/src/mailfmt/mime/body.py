"""Render the MIME body of an exported message and assemble full messages.

What:
  Produce the body text that goes with :func:`mailfmt.mime.headers.format_headers`
  for the same ``(mail, doc_id)`` pair, and join both into a raw message.

Why:
  Delivery and export need real RFC 822 text. Its part order and boundaries
  must agree with the headers and with BODYSTRUCTURE, otherwise clients
  fetching ``BODY[1]`` receive something other than what was described.

How:
  Single-part bodies are the base64 payload wrapped at the configured line
  length. Multipart bodies are built as a :class:`email.message.MIMEPart` tree
  whose containers carry fixed boundaries: ``boundary_<docId>`` outside and
  ``alt_boundary_<docId>`` for an alternative section nested inside a mixed
  message (never prefixed by the outer boundary, so parsers cannot mistake
  it). The tree is serialised with an SMTP policy and the container's own
  header block is dropped, since :func:`format_headers` owns the top-level
  headers. Attachment payloads come from an optional ``attachment_loader``
  because the record only carries metadata.

Interfaces:
  :func:`format_body`, :func:`format_message`, :func:`message_size`.

Invariants & Safety:
  - Every line ends with CRLF.
  - Part order is text before html, text portion before attachments,
    attachments in record order.
"""
from __future__ import annotations

from email.message import MIMEPart
from email.policy import SMTP, Policy
from typing import Any, Callable, Mapping, Optional, Union

from ..config.schema import MimeConfig
from ..core.model import Attachment, Mail, coerce_mail
from ..utils.encoding import CRLF, encode_text, wrap_base64
from ..utils.logging import get_logger
from .headers import format_headers, resolve_boundary
from .shape import BodyShape, classify, inner_shape, split_content_type


LOGGER = get_logger("mailfmt.mime.body")

AttachmentLoader = Callable[[Attachment], bytes]

NESTED_PREFIX = "alt_"


def _policy(settings: MimeConfig) -> Policy:
    return SMTP.clone(max_line_length=settings.line_length)


def _container(subtype: str, boundary: str, policy: Policy) -> MIMEPart:
    part = MIMEPart(policy=policy)
    part["Content-Type"] = f"multipart/{subtype}"
    part.set_boundary(boundary)
    return part


def _text_part(content: Optional[str], subtype: str, policy: Policy) -> MIMEPart:
    # Bytes keep the stored text exact; a str payload would be re-terminated.
    part = MIMEPart(policy=policy)
    part.set_content(
        (content or "").encode("utf-8"),
        "text",
        subtype,
        cte="base64",
        params={"charset": "utf-8"},
    )
    return part


def _alternative(mail: Mail, boundary: str, policy: Policy) -> MIMEPart:
    container = _container("alternative", boundary, policy)
    container.attach(_text_part(mail.text, "plain", policy))
    container.attach(_text_part(mail.html, "html", policy))
    return container


def _attachment_part(
    attachment: Attachment,
    loader: Optional[AttachmentLoader],
    policy: Policy,
) -> MIMEPart:
    maintype, subtype = split_content_type(attachment.content_type)
    payload = loader(attachment) if loader is not None else b""
    if attachment.size and payload and len(payload) != attachment.size:
        LOGGER.warning(
            "Attachment payload size differs from declared size",
            attachment_id=attachment.id,
            declared=attachment.size,
            actual=len(payload),
        )
    part = MIMEPart(policy=policy)
    part.set_content(
        payload,
        maintype,
        subtype,
        cte="base64",
        disposition="attachment",
        filename=attachment.filename or None,
        params={"name": attachment.filename} if attachment.filename else None,
    )
    return part


def _serialise_body(container: MIMEPart) -> str:
    raw = container.as_string()
    _, _, body = raw.partition(CRLF + CRLF)
    return body


def format_body(
    mail: Union[Mail, Mapping[str, Any]],
    doc_id: Optional[str] = None,
    *,
    attachment_loader: Optional[AttachmentLoader] = None,
    config: Optional[MimeConfig] = None,
) -> str:
    """Render the message body matching :func:`format_headers`.

    Args:
      mail: :class:`Mail` or mapping.
      doc_id: Storage identifier; must be the one passed to the headers.
      attachment_loader: Callable returning the raw bytes of an attachment.
        Attachments render with an empty payload when omitted.
      config: Optional MIME settings (boundary prefix, line length).

    Returns:
      CRLF-terminated body text.
    """

    record = coerce_mail(mail)
    settings = config or MimeConfig()
    shape = classify(record)

    if shape is BodyShape.PLAIN:
        return wrap_base64(encode_text(record.text), settings.line_length)
    if shape is BodyShape.HTML:
        return wrap_base64(encode_text(record.html), settings.line_length)

    policy = _policy(settings)
    boundary = resolve_boundary(record, doc_id, settings)
    if shape is BodyShape.ALTERNATIVE:
        return _serialise_body(_alternative(record, boundary, policy))

    container = _container("mixed", boundary, policy)
    text_shape = inner_shape(record)
    if text_shape is BodyShape.ALTERNATIVE:
        container.attach(_alternative(record, f"{NESTED_PREFIX}{boundary}", policy))
    elif text_shape is BodyShape.HTML:
        container.attach(_text_part(record.html, "html", policy))
    else:
        container.attach(_text_part(record.text, "plain", policy))
    for attachment in record.attachments:
        container.attach(_attachment_part(attachment, attachment_loader, policy))
    return _serialise_body(container)


def format_message(
    mail: Union[Mail, Mapping[str, Any]],
    doc_id: Optional[str] = None,
    *,
    attachment_loader: Optional[AttachmentLoader] = None,
    config: Optional[MimeConfig] = None,
) -> str:
    """Return the complete raw message: headers, blank line, body."""

    record = coerce_mail(mail)
    headers = format_headers(record, doc_id, config=config)
    body = format_body(record, doc_id, attachment_loader=attachment_loader, config=config)
    return headers + CRLF + body


def message_size(
    mail: Union[Mail, Mapping[str, Any]],
    doc_id: Optional[str] = None,
    *,
    attachment_loader: Optional[AttachmentLoader] = None,
    config: Optional[MimeConfig] = None,
) -> int:
    """Byte length of :func:`format_message` output, as reported by ``RFC822.SIZE``."""

    raw = format_message(mail, doc_id, attachment_loader=attachment_loader, config=config)
    return len(raw.encode("utf-8"))
