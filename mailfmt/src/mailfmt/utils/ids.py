"""Stable checksums and boundary identifiers for mailfmt output.

What:
  Provide a namespaced SHA-256 checksum helper and derive a deterministic token
  from a mail record for use in multipart boundaries.

Why:
  Multipart headers and bodies are rendered by separate calls. When the caller
  does not pass a document identifier, both calls must still agree on the
  boundary, so the fallback token is a function of the mail content rather
  than of time or randomness.

How:
  Hash the canonical JSON dump of the mail (sorted keys, by alias) and keep a
  short hex prefix.

Interfaces:
  :func:`checksum` and :func:`mail_token`.

Invariants & Safety:
  - Checksums are namespaced with ``sha256:`` so future algorithms can coexist.
  - Equal mails always produce equal tokens.
"""
from __future__ import annotations

import hashlib
import json

from ..core.model import Mail


TOKEN_LENGTH = 16


def checksum(data: bytes) -> str:
    """Compute a namespaced SHA-256 digest for ``data``.

    Args:
      data: Bytes to hash.

    Returns:
      Hex-encoded digest string prefixed with ``sha256:``.
    """

    return f"sha256:{hashlib.sha256(data).hexdigest()}"


def mail_token(mail: Mail) -> str:
    """Return a deterministic identifier for ``mail``.

    What:
      Produces the first :data:`TOKEN_LENGTH` hex characters of the SHA-256
      digest of the mail's canonical JSON form.

    Why:
      Used as the ``<docId>`` part of ``boundary_<docId>`` when no storage
      identifier is available, keeping headers and body consistent.

    Args:
      mail: Record to fingerprint.

    Returns:
      Lower-case hex token safe for use inside a MIME boundary.
    """

    canonical = json.dumps(
        mail.model_dump(mode="json", by_alias=True),
        sort_keys=True,
        separators=(",", ":"),
    )
    return checksum(canonical.encode("utf-8")).split(":", 1)[1][:TOKEN_LENGTH]
