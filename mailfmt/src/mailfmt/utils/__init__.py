"""Expose the public utility surface for mailfmt.

What:
  Re-export the encoding, identifier, and logging helpers that other packages
  import without knowing the underlying module layout.

Interfaces:
  ``encode_text``, ``encode_bytes``, ``wrap_base64``, ``checksum``,
  ``mail_token``, and ``get_logger``.

Invariants & Safety:
  - The module only re-exports side-effect-free callables to keep import order
    predictable.
"""

from .encoding import encode_bytes, encode_text, wrap_base64
from .ids import checksum, mail_token
from .logging import get_logger

__all__ = [
    "encode_text",
    "encode_bytes",
    "wrap_base64",
    "checksum",
    "mail_token",
    "get_logger",
]
