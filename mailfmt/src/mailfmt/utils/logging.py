"""mailfmt logging helpers with deterministic JSON emission and redaction safeguards.

What:
  Offer a tiny facade over Python streams so every mailfmt component can emit
  JSON log lines with consistent fields and automatic removal of message
  content.

Why:
  Formatters handle subjects, bodies, and correspondents' addresses. Diagnostic
  output must be greppable without leaking any of them, and it must never end
  up on stdout where the CLI writes wire-format output.

How:
  Provide a :class:`JsonLogger` dataclass that accepts a target stream, a
  component label, and a minimum severity. ``extra`` dictionaries are scrubbed
  via a recursive redaction helper before being serialised with ``json.dump``.

Interfaces:
  :class:`JsonLogger`, :func:`get_logger`.

Invariants & Safety:
  - The emitted payload always includes an ISO8601 timestamp, severity, and
    component name.
  - Known content keys (``subject``, ``text``, ``html``, ``body``, ``name``,
    ``address``, ``filename``) are replaced with ``[redacted]`` even inside
    nested dictionaries.
  - Streams are flushed after every write.
"""
from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


REDACTED = "[redacted]"

SENSITIVE_KEYS = frozenset({"subject", "text", "html", "body", "name", "address", "filename"})

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}


@dataclass
class JsonLogger:
    """Structured JSON logger with automatic redaction.

    What:
      Emits single-line JSON log entries that include timestamps, severity, a
      component tag, and optional supplemental fields.

    Why:
      Centralising structured logging avoids duplicating the redaction logic and
      guarantees a uniform schema for tests and log collectors.

    How:
      Stores the destination stream, component label, and threshold, then
      exposes :meth:`debug`, :meth:`info`, :meth:`warning`, and :meth:`error`
      which funnel through :meth:`log`.
    """

    stream: Any = field(default_factory=lambda: sys.stderr)
    component: str = "mailfmt"
    min_level: str = "INFO"

    def enabled(self, level: str) -> bool:
        """Return ``True`` when ``level`` meets the configured threshold."""

        threshold = _LEVELS.get(self.min_level.upper(), _LEVELS["INFO"])
        return _LEVELS.get(level.upper(), _LEVELS["INFO"]) >= threshold

    def log(self, level: str, message: str, *, extra: Optional[Dict[str, Any]] = None) -> None:
        """Emit a structured JSON log entry.

        What:
          Serialises ``message`` and ``extra`` metadata to the configured stream
          using the log schema (``ts``, ``lvl``, ``msg``, ``component``).

        How:
          Drops entries below ``min_level``, builds the core payload, merges a
          redacted copy of ``extra``, writes one JSON line, and flushes.

        Args:
          level: Severity name (``DEBUG``, ``INFO``, ``WARN``, ``ERROR``).
          message: Core log message.
          extra: Optional context dictionary that will be redacted recursively.
        """

        if not self.enabled(level):
            return
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "lvl": level.upper(),
            "msg": message,
            "component": self.component,
        }
        if extra:
            payload.update(self._redact(extra))
        json.dump(payload, self.stream, separators=(",", ":"), default=str)
        self.stream.write("\n")
        self.stream.flush()

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a diagnostic message that is dropped at the default threshold.

        What:
          Convenience wrapper for :meth:`log` that sets the severity to ``DEBUG``.

        Why:
          Formatters report dropped addresses and generated boundaries without
          touching their output; operators opt in via ``min_level``.

        Args:
          message: Human-readable description of the event.
          **kwargs: Structured fields to attach to the log payload.
        """

        self.log("DEBUG", message, extra=kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log an informational message with structured context.

        What:
          Convenience wrapper for :meth:`log` that sets the severity to ``INFO``.

        How:
          Forwards ``message`` and keyword arguments to :meth:`log`, storing the
          kwargs as ``extra`` context so they pass through redaction.

        Args:
          message: Human-readable description of the event.
          **kwargs: Structured fields to attach to the log payload.
        """

        self.log("INFO", message, extra=kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning message while enforcing redaction.

        What:
          Emits a ``WARN`` level entry, e.g. for malformed attachment metadata.

        Args:
          message: Description of the warning condition.
          **kwargs: Structured metadata describing the context.
        """

        self.log("WARN", message, extra=kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error entry suitable for alerting.

        What:
          Emits an ``ERROR`` level entry; the CLI uses it before exiting with
          status ``1``.

        Args:
          message: Summary of the failure condition.
          **kwargs: Additional fields for troubleshooting.
        """

        self.log("ERROR", message, extra=kwargs)

    @staticmethod
    def _redact(data: Dict[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``data`` with content-bearing keys masked.

        Walks the dictionary, applying the sentinel to :data:`SENSITIVE_KEYS`
        and recursing into nested dictionaries so structure is preserved.
        """

        result: Dict[str, Any] = {}
        for key, value in data.items():
            if key in SENSITIVE_KEYS:
                result[key] = REDACTED
            elif isinstance(value, dict):
                result[key] = JsonLogger._redact(value)
            else:
                result[key] = value
        return result


def get_logger(component: str, *, min_level: str = "INFO") -> JsonLogger:
    """Construct a :class:`JsonLogger` for the requested component.

    Call sites should avoid instantiating :class:`JsonLogger` directly so the
    shared invariants (redaction keys, default stream) can evolve centrally.

    Args:
      component: Logical subsystem name to include in log payloads.
      min_level: Lowest severity that is written.

    Returns:
      Configured :class:`JsonLogger` instance bound to ``stderr``.
    """

    return JsonLogger(component=component, min_level=min_level)
