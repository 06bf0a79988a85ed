"""Pydantic models for SCM heads, revisions, sources and credentials."""

from __future__ import annotations

import re
from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

# user@host:owner/repo.git
_SCP_REMOTE = re.compile(r"^[\w.-]+@[\w.-]+:[\w./~-]+$")


class Principal(BaseModel):
    """Identity a credential lookup runs as."""

    model_config = ConfigDict(frozen=True)

    name: str
    elevated: bool = False


# Background evaluation never runs as the invoking user.
SYSTEM = Principal(name="SYSTEM", elevated=True)


class HeadReference(BaseModel):
    """A named pointer to a line of revisions (branch, tag, change request)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    kind: Literal["branch", "tag", "change-request"] = "branch"

    @property
    def is_branch(self) -> bool:
        return self.kind == "branch"


class Revision(BaseModel):
    """An immutable snapshot of a head, e.g. a commit."""

    model_config = ConfigDict(frozen=True)

    head: HeadReference
    hash: str = Field(min_length=1)


class Credential(BaseModel):
    """A stored secret used to authenticate against a remote."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    secret: SecretStr
    description: str = ""
    scope: Literal["system", "user"] = "system"
    domain: str | None = None


class SourceDescriptor(BaseModel):
    """The remote a head was discovered on and the credential configured for it."""

    source_id: str = ""
    remote: str
    credentials_id: str | None = None

    @field_validator("remote")
    @classmethod
    def validate_remote(cls, v: str) -> str:
        if _SCP_REMOTE.match(v):
            return v
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https", "ssh", "git"):
            raise ValueError(
                f"remote must use http, https, ssh or git scheme, got {parsed.scheme!r}"
            )
        if not parsed.netloc:
            raise ValueError("remote must have a valid host")
        return v


class TimestampLookupError(Exception):
    """Wraps provider-specific failures of a timestamp lookup with context."""

    def __init__(
        self, provider: str, operation: str, cause: Exception, retryable: bool = False
    ) -> None:
        self.provider = provider
        self.operation = operation
        self.retryable = retryable
        super().__init__(f"{provider} {operation} failed: {cause}")
        self.__cause__ = cause
