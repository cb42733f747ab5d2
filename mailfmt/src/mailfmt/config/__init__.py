"""mailfmt configuration package.

What:
  Provide a cohesive import surface for configuration loading and the pydantic
  schema classes.

Interfaces:
  - load_formatter_config / get_formatter_config / reset_formatter_config:
    Resolve ``mailfmt.yaml`` and expose a cached configuration object.
  - load_mail: Read a YAML/JSON mail record document.
  - FormatterConfig / AccountConfig / MimeConfig / ValidationError: Schema
    models and the semantic validation error type.
  - ConfigLoadError / FormatterConfigError: Loader failure types.

Invariants:
  - Formatters never import this package implicitly; callers pass the typed
    sections in.
"""

from .loader import (
    ConfigLoadError,
    FormatterConfigError,
    get_formatter_config,
    load_formatter_config,
    load_mail,
    reset_formatter_config,
)
from .schema import AccountConfig, FormatterConfig, MimeConfig, ValidationError

__all__ = [
    "load_formatter_config",
    "get_formatter_config",
    "reset_formatter_config",
    "load_mail",
    "ConfigLoadError",
    "FormatterConfigError",
    "AccountConfig",
    "FormatterConfig",
    "MimeConfig",
    "ValidationError",
]
