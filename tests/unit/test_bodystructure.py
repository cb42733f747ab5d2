"""
Module: tests/unit/test_bodystructure.py

What:
    Validate BODYSTRUCTURE rendering for the four supported content shapes and
    for malformed attachment metadata.

Why:
    Clients choose which body sections to download from BODYSTRUCTURE alone;
    sizes and nesting must agree with the exported message.

How:
    Render records of each shape and compare with exact wire text. Text sizes
    are the length of the base64-encoded body (``"Hello"`` -> 8,
    ``"<p>Hello</p>"`` -> 16).

Interfaces:
    test_text_only, test_html_only, test_alternative, test_mixed_with_text,
    test_mixed_with_alternative, test_default_empty_text,
    test_malformed_attachment_metadata
"""

from mailfmt.core.model import Attachment
from mailfmt.imap.bodystructure import format_attachment_part, format_body_structure


PLAIN_HELLO = '("TEXT" "PLAIN" NIL NIL NIL "BASE64" 8 NIL)'
HTML_HELLO = '("TEXT" "HTML" NIL NIL NIL "BASE64" 16 NIL)'
PDF = {"id": "att1", "filename": "document.pdf", "size": 1024, "contentType": "application/pdf"}
PDF_PART = (
    '("application" "pdf" ("NAME" "document.pdf") NIL NIL "BASE64" 1024 '
    'NIL ("ATTACHMENT" ("FILENAME" "document.pdf")) NIL)'
)


def test_text_only():
    result = format_body_structure({"text": "Hello, World!"})
    assert result == '("TEXT" "PLAIN" NIL NIL NIL "BASE64" 20 NIL)'


def test_html_only():
    assert format_body_structure({"html": "<p>Hello</p>"}) == HTML_HELLO


def test_alternative():
    result = format_body_structure({"text": "Hello", "html": "<p>Hello</p>"})
    assert result == f'({PLAIN_HELLO}{HTML_HELLO} "alternative")'


def test_mixed_with_text():
    """
    What:
        A text body plus one attachment renders as ``multipart/mixed`` with the
        text leaf first and the attachment descriptor after it.

    Returns:
        None
    """
    result = format_body_structure({"text": "Hello", "attachments": [PDF]})
    assert result == f'({PLAIN_HELLO}{PDF_PART} "mixed")'
    assert '"ATTACHMENT"' in result
    assert '"FILENAME" "document.pdf"' in result


def test_mixed_with_alternative():
    mail = {"text": "Hello", "html": "<p>Hello</p>", "attachments": [PDF, PDF]}
    assert format_body_structure(mail) == (
        f'(({PLAIN_HELLO}{HTML_HELLO} "alternative"){PDF_PART}{PDF_PART} "mixed")'
    )


def test_mixed_with_html_only():
    mail = {"html": "<p>Hello</p>", "attachments": [PDF]}
    assert format_body_structure(mail) == f'({HTML_HELLO}{PDF_PART} "mixed")'


def test_default_empty_text():
    assert format_body_structure({}) == '("TEXT" "PLAIN" NIL NIL NIL "BASE64" 0 NIL)'


def test_content_type_lowercased_and_text_lines_slot():
    part = format_attachment_part(
        Attachment(filename="notes.txt", size=3, content_type="Text/Plain; charset=utf-8")
    )
    assert part == (
        '("text" "plain" ("NAME" "notes.txt") NIL NIL "BASE64" 3 NIL '
        'NIL ("ATTACHMENT" ("FILENAME" "notes.txt")) NIL)'
    )


def test_malformed_attachment_metadata():
    """
    What:
        A content type without ``/`` and a missing filename still yield a
        descriptor with empty fields.

    Why:
        One bad attachment must not stop the rest of the structure from
        rendering.

    Returns:
        None
    """
    mail = {"text": "Hello", "attachments": [{"size": 7, "contentType": "weird"}, PDF]}
    result = format_body_structure(mail)
    assert '("weird" "" ("NAME" "") NIL NIL "BASE64" 7 NIL ("ATTACHMENT" ("FILENAME" "")) NIL)' in result
    assert result.endswith(f'{PDF_PART} "mixed")')


def test_missing_content_type_defaults_to_octet_stream():
    part = format_attachment_part(Attachment(filename='a"b.bin', size=1))
    assert part.startswith('("application" "octet-stream" ("NAME" "a\\"b.bin")')
