"""Strict loaders for mailfmt configuration and mail record documents.

What:
  Locate, parse, validate, and cache ``mailfmt.yaml``, and read mail records
  stored as YAML or JSON files for the command-line front end.

Why:
  Configuration lives outside the package and can be malformed. Centralising
  the parsing enforces consistent validation and error messages so the
  formatters only ever see typed settings passed in explicitly.

How:
  Resolve candidate file locations from an explicit argument, the
  ``MAILFMT_CONFIG_PATH`` environment variable, and defaults. Parse YAML with
  :func:`yaml.safe_load` (JSON is a subset, so both formats work) and validate
  through the pydantic schema models.

Interfaces:
  - :func:`load_formatter_config` / :func:`get_formatter_config` /
    :func:`reset_formatter_config`: Manage configuration discovery and caching.
  - :func:`load_mail`: Read a mail record document into a :class:`Mail`.

Invariants:
  - All external payloads pass pydantic validation before they are returned.
  - The cache respects explicit reload requests and candidate precedence.

Safety/Performance:
  - OS, YAML, and validation errors are converted into typed exceptions that
    include path context.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple

import yaml
from pydantic import ValidationError as _PydanticValidationError

from ..core.model import Mail
from .schema import FormatterConfig


class ConfigLoadError(Exception):
    """Base error for document parsing or validation failures."""


class FormatterConfigError(ConfigLoadError):
    """Error raised when ``mailfmt.yaml`` cannot be located or validated.

    Subclasses :class:`ConfigLoadError` so callers can catch either the broad
    category or the configuration-specific variant.
    """


_CONFIG_ENV = "MAILFMT_CONFIG_PATH"
_DEFAULT_LOCATIONS: Tuple[Path, ...] = (
    Path("mailfmt.yaml"),
    Path("/etc/mailfmt/config.yaml"),
)
_CONFIG_CACHE: Optional[Tuple[Path, FormatterConfig]] = None


def _candidate_paths(path: Optional[Path]) -> Iterable[Path]:
    """Yield configuration file locations in priority order.

    The explicit argument wins, then ``MAILFMT_CONFIG_PATH``, then the default
    locations. Duplicates are skipped while preserving order.
    """

    seen: set[Path] = set()
    candidates = []
    if path is not None:
        candidates.append(path)
    env_path = os.environ.get(_CONFIG_ENV)
    if env_path:
        candidates.append(Path(env_path))
    candidates.extend(_DEFAULT_LOCATIONS)
    for candidate in candidates:
        candidate = candidate.expanduser()
        if candidate not in seen:
            seen.add(candidate)
            yield candidate


def _read_mapping(path: Path, error_cls: type[ConfigLoadError]) -> dict[str, Any]:
    """Read ``path`` and return its top-level YAML/JSON mapping.

    Raises:
      ConfigLoadError: ``error_cls`` when the file is missing, unreadable,
        unparsable, or does not hold a mapping.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise error_cls(f"File missing: {path}") from exc
    except OSError as exc:  # pragma: no cover - filesystem surface
        raise error_cls(f"Unable to read {path}: {exc}") from exc
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise error_cls(f"Invalid YAML in {path}: {exc}") from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise error_cls(f"{path} must contain a mapping at the top-level")
    return payload


def _load_config_from_path(path: Path) -> FormatterConfig:
    payload = _read_mapping(path, FormatterConfigError)
    try:
        return FormatterConfig.model_validate(payload)
    except _PydanticValidationError as exc:
        raise FormatterConfigError(f"Invalid configuration in {path}: {exc}") from exc


def load_formatter_config(
    path: Optional[Path | str] = None,
    *,
    reload: bool = False,
) -> FormatterConfig:
    """Resolve, parse, and cache the formatter configuration.

    What:
      Locate ``mailfmt.yaml`` using the precedence chain, parse it, and return
      a validated :class:`FormatterConfig`.

    Why:
      The CLI and embedding services resolve configuration once and then pass
      the typed sections (``account``, ``mime``) into the pure formatters.

    How:
      Consult the module cache unless ``reload`` is requested or a different
      path is asked for, then try each candidate until an existing file is
      found and store the result.

    Args:
      path: Optional explicit location of the configuration file.
      reload: When ``True`` forces a fresh load bypassing the cache.

    Returns:
      The validated configuration.

    Raises:
      FormatterConfigError: If no candidate exists or validation fails.
    """

    global _CONFIG_CACHE

    requested_path = Path(path).expanduser() if isinstance(path, (str, Path)) else None
    if not reload and _CONFIG_CACHE is not None:
        cached_path, cached_config = _CONFIG_CACHE
        if requested_path is None or cached_path == requested_path:
            return cached_config

    searched: list[str] = []
    for candidate in _candidate_paths(requested_path):
        if not candidate.exists():
            searched.append(str(candidate))
            continue
        config = _load_config_from_path(candidate)
        _CONFIG_CACHE = (candidate, config)
        return config

    raise FormatterConfigError(f"Unable to locate mailfmt.yaml (searched: {', '.join(searched)})")


def get_formatter_config() -> FormatterConfig:
    """Return the cached configuration, loading it on demand."""

    return load_formatter_config()


def reset_formatter_config() -> None:
    """Clear the configuration cache so the next access reloads from disk."""

    global _CONFIG_CACHE
    _CONFIG_CACHE = None


def load_mail(path: Path | str) -> Mail:
    """Read a stored mail record from a YAML or JSON document.

    Args:
      path: File holding one mail record mapping (camelCase keys accepted).

    Returns:
      The validated :class:`Mail`.

    Raises:
      ConfigLoadError: If the file cannot be read, parsed, or validated.
    """

    source = Path(path).expanduser()
    payload = _read_mapping(source, ConfigLoadError)
    try:
        return Mail.model_validate(payload)
    except _PydanticValidationError as exc:
        raise ConfigLoadError(f"Invalid mail record in {source}: {exc}") from exc
