"""SCM collaborators for stalebranch."""

from stalebranch.config.models import VCSConfig
from stalebranch.scm.base import CredentialResolver, RevisionTimestampProvider
from stalebranch.scm.github import GitHubTimestampProvider, parse_repo_id
from stalebranch.scm.models import (
    SYSTEM,
    Credential,
    HeadReference,
    Principal,
    Revision,
    SourceDescriptor,
    TimestampLookupError,
)


def create_timestamp_provider(config: VCSConfig) -> RevisionTimestampProvider:
    """Create a timestamp provider from config."""
    return GitHubTimestampProvider(base_url=config.base_url)


__all__ = [
    "SYSTEM",
    "Credential",
    "CredentialResolver",
    "GitHubTimestampProvider",
    "HeadReference",
    "Principal",
    "Revision",
    "RevisionTimestampProvider",
    "SourceDescriptor",
    "TimestampLookupError",
    "create_timestamp_provider",
    "parse_repo_id",
]
