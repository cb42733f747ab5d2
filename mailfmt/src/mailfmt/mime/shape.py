"""Classify a mail's content into one of the four supported MIME shapes.

What:
  Decide whether a mail renders as ``multipart/mixed``, ``multipart/alternative``,
  a single ``text/html`` part, or a single ``text/plain`` part.

Why:
  BODYSTRUCTURE, the exported headers, and the exported body must describe the
  same tree. Routing all three through one classifier keeps them in step.

How:
  Check attachments first, then text plus html, then html alone; everything
  else (no content included) is plain text.

Interfaces:
  :class:`BodyShape`, :func:`classify`, :func:`inner_shape`, :func:`has_content`,
  :func:`split_content_type`.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from ..core.model import Mail
from ..utils.logging import get_logger


LOGGER = get_logger("mailfmt.mime.shape")


class BodyShape(str, Enum):
    """Top-level MIME layout of a rendered message."""

    MIXED = "mixed"
    ALTERNATIVE = "alternative"
    HTML = "html"
    PLAIN = "plain"


def has_content(value: Optional[str]) -> bool:
    return bool(value)


def inner_shape(mail: Mail) -> BodyShape:
    """Return the shape of the text portion alone, ignoring attachments."""

    if has_content(mail.text) and has_content(mail.html):
        return BodyShape.ALTERNATIVE
    if has_content(mail.html):
        return BodyShape.HTML
    return BodyShape.PLAIN


def classify(mail: Mail) -> BodyShape:
    if mail.attachments:
        return BodyShape.MIXED
    return inner_shape(mail)


DEFAULT_ATTACHMENT_TYPE = ("application", "octet-stream")


def split_content_type(content_type: Optional[str]) -> Tuple[str, str]:
    """Return the lower-cased ``(type, subtype)`` of an attachment.

    A missing content type falls back to ``application/octet-stream``. A value
    without ``/`` keeps its type and gets an empty subtype so one malformed
    attachment never stops the rest of the message from rendering. Parameters
    after ``;`` are discarded.
    """

    if not content_type or not content_type.strip():
        return DEFAULT_ATTACHMENT_TYPE
    media = content_type.split(";", 1)[0].strip().lower()
    maintype, sep, subtype = media.partition("/")
    if not sep or not subtype:
        LOGGER.warning("Malformed attachment content type", content_type=content_type)
    return maintype, subtype
