from pydantic import BaseModel, Field
from typing import Literal


class StalenessConfig(BaseModel):
    # Whole days as typed by a human; blank or absent disables the filter
    max_age_days: str | None = None


class VCSConfig(BaseModel):
    provider: Literal["github"] = "github"
    base_url: str | None = None


class CredentialEntry(BaseModel):
    id: str = Field(min_length=1)
    token_env: str = "GITHUB_TOKEN"
    description: str = ""
    scope: Literal["system", "user"] = "system"
    domain: str | None = None


class StalebranchConfig(BaseModel):
    staleness: StalenessConfig = Field(default_factory=StalenessConfig)
    vcs: VCSConfig = Field(default_factory=VCSConfig)
    credentials: list[CredentialEntry] = Field(default_factory=list)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
