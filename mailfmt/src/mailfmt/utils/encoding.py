"""Base64 helpers for MIME-safe transport of mail bodies.

What:
  Encode unicode text or raw bytes to standard padded base64 and wrap encoded
  output into CRLF-terminated lines for MIME bodies.

Why:
  Every text leaf emitted by the body structure and raw export paths uses the
  ``BASE64`` transfer encoding. The BODYSTRUCTURE size of a leaf is the length
  of this encoded form, so both paths must go through the same primitive.

How:
  Wrap :mod:`base64` with UTF-8 encoding for text. Wrapping is a separate step
  because the BODYSTRUCTURE size counts the unwrapped encoding.

Interfaces:
  :func:`encode_text`, :func:`encode_bytes`, :func:`wrap_base64`.

Invariants & Safety:
  - Empty input yields an empty string, never a padded block.
  - :func:`encode_text` and :func:`encode_bytes` never insert line breaks.
"""
from __future__ import annotations

import base64
from typing import Optional


CRLF = "\r\n"
DEFAULT_LINE_LENGTH = 76
"""RFC 2045 upper bound for base64 body lines."""


def encode_text(text: Optional[str]) -> str:
    """Return the standard base64 encoding of ``text`` encoded as UTF-8.

    Args:
      text: Unicode text; ``None`` is treated like the empty string.

    Returns:
      Padded base64 string without line breaks.
    """

    if not text:
        return ""
    return encode_bytes(text.encode("utf-8"))


def encode_bytes(data: Optional[bytes]) -> str:
    """Return the standard base64 encoding of ``data`` as ASCII text."""

    if not data:
        return ""
    return base64.b64encode(data).decode("ascii")


def wrap_base64(encoded: str, line_length: int = DEFAULT_LINE_LENGTH) -> str:
    """Split an encoded payload into CRLF-terminated lines.

    What:
      Chops ``encoded`` into chunks of at most ``line_length`` characters and
      terminates each chunk with CRLF.

    Why:
      MIME bodies must not carry lines longer than 76 characters, while the
      encoder itself stays line-free so sizes can be computed on the raw form.

    Args:
      encoded: Output of :func:`encode_text` or :func:`encode_bytes`.
      line_length: Maximum characters per line.

    Returns:
      Wrapped payload, or the empty string for empty input.
    """

    if line_length <= 0:
        raise ValueError("line_length must be positive")
    chunks = [encoded[idx : idx + line_length] for idx in range(0, len(encoded), line_length)]
    return "".join(f"{chunk}{CRLF}" for chunk in chunks)
