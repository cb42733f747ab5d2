"""
Module: mailfmt.__init__

What:
  Aggregate package exports for the mailfmt wire-format renderer and expose
  the primary namespace segments (configuration, mail model, IMAP fetch
  formatters, MIME export, and utilities).

Why:
  IMAP FETCH handlers and the export/delivery path both import from here. A
  stable namespace lets the internal layout evolve without touching callers.

How:
  Provide an explicit ``__all__`` declaration that enumerates the public
  subpackages.

Interfaces:
  - config: Formatter configuration schema and YAML loader.
  - core: Read-only mail record models.
  - imap: ADDRESS, ENVELOPE, BODYSTRUCTURE, FLAGS, and INTERNALDATE rendering.
  - mime: Raw RFC 822 header and multipart body rendering.
  - utils: Base64 encoding, identifiers, and structured logging.

Invariants:
  - Every exported formatter is a pure function of its input record.
"""

__all__ = [
    "config",
    "core",
    "imap",
    "mime",
    "utils",
]
