"""Read-only mail record models shared by every formatter."""

from .model import AddressField, Attachment, Mail, MailAddress, coerce_mail

__all__ = [
    "AddressField",
    "Attachment",
    "Mail",
    "MailAddress",
    "coerce_mail",
]
