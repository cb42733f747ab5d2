"""Raw RFC 822 rendering for the export and delivery path.

What:
  Re-export the header, body, and whole-message renderers together with the
  shape classifier they share with BODYSTRUCTURE.

Interfaces:
  ``format_headers``, ``format_body``, ``format_message``, ``message_size``,
  ``BodyShape``, ``classify``.
"""

from .body import format_body, format_message, message_size
from .headers import format_headers
from .shape import BodyShape, classify

__all__ = [
    "format_headers",
    "format_body",
    "format_message",
    "message_size",
    "BodyShape",
    "classify",
]
