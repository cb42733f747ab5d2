"""Pydantic models describing mailfmt configuration documents."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic import field_validator, model_validator


class ValidationError(ValueError):
    """Raised when configuration data does not satisfy the schema."""


class AccountConfig(BaseModel):
    """Mailbox-to-account mapping settings."""

    model_config = ConfigDict(extra="forbid")

    domain_suffix: str
    admin_user: str = "admin"
    special_folders: List[str] = Field(default_factory=lambda: ["INBOX", "Sent Messages"])

    @field_validator("domain_suffix")
    @classmethod
    def _validate_domain(cls, value: str) -> str:
        value = value.strip().strip(".")
        if not value:
            raise ValidationError("domain_suffix must not be empty")
        if "@" in value:
            raise ValidationError("domain_suffix must be a domain, not an address")
        return value

    @field_validator("special_folders")
    @classmethod
    def _validate_folders(cls, value: List[str]) -> List[str]:
        for folder in value:
            if not folder or "/" in folder:
                raise ValidationError(f"special folder '{folder}' must be a single path segment")
        return value


class MimeConfig(BaseModel):
    """Raw message rendering settings."""

    model_config = ConfigDict(extra="forbid")

    boundary_prefix: str = "boundary_"
    line_length: int = Field(default=76, ge=4, le=998)

    @model_validator(mode="after")
    def _validate_prefix(self) -> "MimeConfig":
        if not self.boundary_prefix or any(char in self.boundary_prefix for char in '"\r\n '):
            raise ValidationError("boundary_prefix must be non-empty without quotes or whitespace")
        return self


class FormatterConfig(BaseModel):
    """Root configuration loaded from ``mailfmt.yaml``."""

    model_config = ConfigDict(extra="forbid")

    version: int = 1
    account: AccountConfig
    mime: MimeConfig = Field(default_factory=MimeConfig)

    @field_validator("version")
    @classmethod
    def _validate_version(cls, value: int) -> int:
        if value != 1:
            raise ValidationError("version must be 1")
        return value
