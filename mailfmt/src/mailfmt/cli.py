"""mailfmt command-line interface for rendering stored mail records.

What:
  Provide a Typer-based entry point that prints IMAP FETCH item values and raw
  MIME exports for a mail record stored as YAML or JSON, and exposes the
  account/mailbox name mapping.

Why:
  Operators debugging client interoperability need to see the exact wire text
  the server would send for a given record without running a full IMAP
  session. Wiring the CLI straight to the library formatters guarantees the
  output is the same text the FETCH handler emits.

How:
  Load the record through :func:`mailfmt.config.loader.load_mail`, dispatch to
  the requested formatter, and write the result to stdout. Configuration and
  input errors are logged through :class:`~mailfmt.utils.logging.JsonLogger`
  on stderr and mapped to exit code ``1``.

Interfaces:
  ``app`` (Typer application), ``fetch``, ``export``, ``account``,
  ``mailbox``.

Invariants & Safety:
  - Exit codes follow shell expectations (``0`` success, ``1`` failure).
  - stdout carries only formatter output; diagnostics go to stderr.
"""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import NoReturn, Optional

import typer

from .config.loader import ConfigLoadError, load_formatter_config, load_mail
from .config.schema import FormatterConfig, MimeConfig
from .core.model import Attachment, Mail
from .imap import (
    account_to_box,
    box_to_account,
    format_body_structure,
    format_envelope,
    format_flag_list,
    format_internal_date,
    to_timestamp,
)
from .mime import format_message, message_size
from .utils.logging import get_logger


app = typer.Typer(help="Render stored mail records as IMAP and MIME wire text")

LOGGER = get_logger("mailfmt.cli")


class FetchItem(str, Enum):
    """FETCH data items the CLI can render."""

    flags = "flags"
    internaldate = "internaldate"
    envelope = "envelope"
    bodystructure = "bodystructure"
    size = "size"


def _fail(message: str, **context: object) -> NoReturn:
    LOGGER.error(message, **context)
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=1)


def _settings(config: Optional[Path]) -> FormatterConfig:
    try:
        return load_formatter_config(config)
    except ConfigLoadError as exc:
        _fail(str(exc))


def _load(path: Path) -> Mail:
    try:
        return load_mail(path)
    except ConfigLoadError as exc:
        _fail(str(exc), path=str(path))


def _directory_loader(directory: Optional[Path]):
    """Return an attachment loader reading ``<directory>/<id or filename>``.

    Names that resolve outside ``directory`` are ignored.
    """

    if directory is None:
        return None
    root = directory.resolve()

    def _read(attachment: Attachment) -> bytes:
        for name in (attachment.id, attachment.filename):
            if not name:
                continue
            candidate = (root / name).resolve()
            if not candidate.is_relative_to(root):
                LOGGER.warning("Attachment name escapes the attachments directory", attachment_id=attachment.id)
                continue
            if candidate.is_file():
                return candidate.read_bytes()
        LOGGER.warning("Attachment payload not found", attachment_id=attachment.id)
        return b""

    return _read


def render_item(
    mail: Mail,
    item: FetchItem,
    doc_id: Optional[str] = None,
    mime: Optional[MimeConfig] = None,
) -> str:
    """Return the FETCH value of ``item`` for ``mail``.

    Raises:
      ValueError: When ``internaldate`` is requested for a record without a
        usable date.
    """

    if item is FetchItem.flags:
        return format_flag_list(mail)
    if item is FetchItem.envelope:
        return format_envelope(mail)
    if item is FetchItem.bodystructure:
        return format_body_structure(mail)
    if item is FetchItem.size:
        return str(message_size(mail, doc_id, config=mime))
    timestamp = to_timestamp(mail.date)
    if timestamp is None:
        raise ValueError("mail record has no usable date")
    return f'"{format_internal_date(timestamp)}"'


@app.command()
def fetch(
    mail_path: Path = typer.Argument(..., help="YAML or JSON mail record"),
    item: FetchItem = typer.Option(FetchItem.envelope, "--item", "-i", help="FETCH item to render"),
    doc_id: Optional[str] = typer.Option(None, "--doc-id", help="Document id used for boundaries"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to mailfmt.yaml"),
) -> None:
    """Print one IMAP FETCH item for a stored mail record."""

    mail = _load(mail_path)
    # Only RFC822.SIZE depends on the MIME settings.
    mime = _settings(config).mime if item is FetchItem.size else None
    try:
        value = render_item(mail, item, doc_id, mime)
    except ValueError as exc:
        _fail(str(exc), path=str(mail_path), item=item.value)
    typer.echo(value)


@app.command()
def export(
    mail_path: Path = typer.Argument(..., help="YAML or JSON mail record"),
    doc_id: Optional[str] = typer.Option(None, "--doc-id", help="Document id used for boundaries"),
    attachments_dir: Optional[Path] = typer.Option(
        None, "--attachments-dir", help="Directory holding attachment payloads by id or filename"
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to mailfmt.yaml"),
) -> None:
    """Print the raw MIME message for a stored mail record."""

    mail = _load(mail_path)
    settings = _settings(config)
    raw = format_message(
        mail,
        doc_id,
        attachment_loader=_directory_loader(attachments_dir),
        config=settings.mime,
    )
    typer.echo(raw, nl=False)


@app.command()
def account(email: str = typer.Argument(..., help="Account address")) -> None:
    """Print the mailbox name an account address is exposed under."""

    typer.echo(account_to_box(email))


@app.command()
def mailbox(
    username: str = typer.Argument(..., help="Authenticated IMAP user"),
    path: str = typer.Argument(..., help="Mailbox path, e.g. INBOX/support"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to mailfmt.yaml"),
) -> None:
    """Print the account address a mailbox path refers to."""

    settings = _settings(config)
    typer.echo(box_to_account(username, path, settings.account))


if __name__ == "__main__":  # pragma: no cover
    app()
