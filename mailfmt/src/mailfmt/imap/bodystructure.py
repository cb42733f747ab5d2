"""Describe a mail's MIME tree in the IMAP BODYSTRUCTURE syntax.

What:
  Render one of four layouts: a ``multipart/mixed`` wrapper around the text
  portion plus one descriptor per attachment, a two-part
  ``multipart/alternative``, a single ``TEXT``/``HTML`` leaf, or a single
  ``TEXT``/``PLAIN`` leaf.

Why:
  Clients decide which sections to download from BODYSTRUCTURE alone. The
  described tree must match the exported message part for part, so the shape
  comes from :func:`mailfmt.mime.shape.classify` and text sizes are the length
  of the same base64 encoding the exporter writes.

How:
  Build leaf descriptors with the ``BASE64`` transfer encoding, wrap them in
  multipart descriptors (parts concatenated, subtype appended as a quoted
  string), and append RFC 3501 style single-part descriptors for attachments
  carrying an ``ATTACHMENT`` disposition with a ``FILENAME`` parameter.

Interfaces:
  :func:`format_body_structure`, :func:`format_text_part`,
  :func:`format_attachment_part`.

Invariants & Safety:
  - Nesting never goes deeper than mixed -> alternative -> leaf.
  - A malformed attachment degrades to empty subtype or filename fields rather
    than failing the whole structure.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Union

from ..core.model import Attachment, Mail, coerce_mail
from ..mime.shape import BodyShape, classify, inner_shape, split_content_type
from ..utils.encoding import encode_text
from .quoting import NIL, quote


TRANSFER_ENCODING = "BASE64"


def format_text_part(subtype: str, content: str) -> str:
    """Render a text leaf, e.g. ``("TEXT" "PLAIN" NIL NIL NIL "BASE64" 8 NIL)``.

    Args:
      subtype: ``"PLAIN"`` or ``"HTML"``.
      content: Unencoded body text; its base64 length is the reported size.
    """

    size = len(encode_text(content))
    return f'("TEXT" "{subtype}" {NIL} {NIL} {NIL} "{TRANSFER_ENCODING}" {size} {NIL})'


def format_multipart(parts: List[str], subtype: str) -> str:
    return f"({''.join(parts)} {quote(subtype)})"


def format_attachment_part(attachment: Attachment) -> str:
    """Render the single-part descriptor for ``attachment``.

    The layout follows RFC 3501 ``body-type-basic``: type, subtype, a ``NAME``
    parameter, id, description, encoding, and the declared size, followed by
    the extension data (md5, disposition, language). ``text/*`` attachments
    carry the extra lines slot that ``body-type-text`` requires, left ``NIL``
    as it is on the text leaves.
    """

    maintype, subtype = split_content_type(attachment.content_type)
    filename = quote(attachment.filename or "")
    fields = [
        quote(maintype),
        quote(subtype),
        f'("NAME" {filename})',
        NIL,
        NIL,
        f'"{TRANSFER_ENCODING}"',
        str(attachment.size),
    ]
    if maintype == "text":
        fields.append(NIL)
    fields.extend([NIL, f'("ATTACHMENT" ("FILENAME" {filename}))', NIL])
    return f"({' '.join(fields)})"


def _text_portion(mail: Mail) -> str:
    shape = inner_shape(mail)
    if shape is BodyShape.ALTERNATIVE:
        return format_multipart(
            [format_text_part("PLAIN", mail.text or ""), format_text_part("HTML", mail.html or "")],
            BodyShape.ALTERNATIVE.value,
        )
    if shape is BodyShape.HTML:
        return format_text_part("HTML", mail.html or "")
    return format_text_part("PLAIN", mail.text or "")


def format_body_structure(mail: Union[Mail, Mapping[str, Any]]) -> str:
    """Render the IMAP BODYSTRUCTURE of ``mail``.

    Args:
      mail: :class:`Mail` or mapping; a record without any content renders as
        an empty ``TEXT``/``PLAIN`` leaf.

    Returns:
      BODYSTRUCTURE text without the leading ``BODYSTRUCTURE`` keyword.
    """

    record = coerce_mail(mail)
    if classify(record) is BodyShape.MIXED:
        parts = [_text_portion(record)]
        parts.extend(format_attachment_part(attachment) for attachment in record.attachments)
        return format_multipart(parts, BodyShape.MIXED.value)
    return _text_portion(record)
