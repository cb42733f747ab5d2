"""
Module: tests/unit/test_config_loader.py

What:
    Validate the configuration loader helpers and the mail record loader by
    exercising happy paths, precedence, caching, and error signalling.

Why:
    The CLI and embedding services rely on typed configuration; malformed
    files must fail loudly with path context instead of yielding partial
    settings.

How:
    Write YAML payloads to temporary files, point the loader at them
    explicitly or through ``MAILFMT_CONFIG_PATH``, and assert on the resulting
    models and raised exceptions.

Interfaces:
    test_load_from_environment, test_explicit_path_wins, test_cache_and_reset,
    test_missing_config_raises, test_invalid_yaml_raises,
    test_schema_violations_raise, test_load_mail_yaml_and_json,
    test_load_mail_rejects_non_mapping

Invariants & Safety Rules:
    - The autouse fixture in ``tests/conftest.py`` resets the cache around
      each test.
"""

from pathlib import Path

import pytest

from mailfmt.config.loader import (
    ConfigLoadError,
    FormatterConfigError,
    get_formatter_config,
    load_formatter_config,
    load_mail,
    reset_formatter_config,
)


DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def _write(tmp_path, text, name="mailfmt.yaml"):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_load_from_environment():
    """
    What:
        With no explicit path, ``MAILFMT_CONFIG_PATH`` selects the file.

    Returns:
        None
    """
    config = get_formatter_config()
    assert config.account.domain_suffix == "mydomain"
    assert config.account.special_folders == ["INBOX", "Sent Messages"]
    assert config.mime.line_length == 76


def test_explicit_path_wins(tmp_path):
    path = _write(tmp_path, "account:\n  domain_suffix: example.org\n")
    config = load_formatter_config(path)
    assert config.account.domain_suffix == "example.org"
    assert config.account.admin_user == "admin"
    assert config.mime.boundary_prefix == "boundary_"


def test_cache_and_reset(tmp_path, monkeypatch):
    """
    What:
        Loaded configuration is cached until reset or reload.

    How:
        Load once, rewrite the file, observe the cached value, then reload.

    Returns:
        None
    """
    path = _write(tmp_path, "account:\n  domain_suffix: one.test\n")
    monkeypatch.setenv("MAILFMT_CONFIG_PATH", str(path))
    reset_formatter_config()
    assert get_formatter_config().account.domain_suffix == "one.test"
    path.write_text("account:\n  domain_suffix: two.test\n")
    assert get_formatter_config().account.domain_suffix == "one.test"
    assert load_formatter_config(reload=True).account.domain_suffix == "two.test"
    reset_formatter_config()
    assert get_formatter_config().account.domain_suffix == "two.test"


def test_missing_config_raises(tmp_path, monkeypatch):
    monkeypatch.setenv("MAILFMT_CONFIG_PATH", str(tmp_path / "absent.yaml"))
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FormatterConfigError):
        load_formatter_config(reload=True)


def test_invalid_yaml_raises(tmp_path):
    path = _write(tmp_path, "account: [unclosed\n")
    with pytest.raises(FormatterConfigError):
        load_formatter_config(path)


@pytest.mark.parametrize(
    "payload",
    [
        "account:\n  domain_suffix: ''\n",
        "account:\n  domain_suffix: a@b\n",
        "account:\n  domain_suffix: x\n  special_folders: ['INBOX/sub']\n",
        "account:\n  domain_suffix: x\nmime:\n  line_length: 0\n",
        "account:\n  domain_suffix: x\nmime:\n  line_length: 3\n",
        "account:\n  domain_suffix: x\nmime:\n  boundary_prefix: 'has space'\n",
        "version: 2\naccount:\n  domain_suffix: x\n",
        "account:\n  domain_suffix: x\nunknown: 1\n",
        "- just\n- a list\n",
    ],
)
def test_schema_violations_raise(tmp_path, payload):
    path = _write(tmp_path, payload)
    with pytest.raises(FormatterConfigError):
        load_formatter_config(path)


def test_load_mail_yaml_and_json():
    yaml_mail = load_mail(DATA_DIR / "mail_alternative.yaml")
    assert yaml_mail.subject == 'Quarterly "numbers"'
    assert yaml_mail.date == "2024-01-15T10:30:45Z"
    json_mail = load_mail(DATA_DIR / "mail_attachment.json")
    assert json_mail.attachments[0].filename == "invoice.pdf"
    assert json_mail.saved is True


def test_load_mail_rejects_non_mapping(tmp_path):
    path = _write(tmp_path, "plain text\n", name="mail.yaml")
    with pytest.raises(ConfigLoadError):
        load_mail(path)
    with pytest.raises(ConfigLoadError):
        load_mail(tmp_path / "missing.yaml")
