"""stalebranch - skip automatic builds of branches whose last commit is too old."""

from stalebranch.config import StalebranchConfig, load_config
from stalebranch.credentials import InMemoryCredentialStore
from stalebranch.policy import StalenessDecision, StalenessPolicy, TimeUnit, create_policy
from stalebranch.scm import (
    SYSTEM,
    Credential,
    CredentialResolver,
    GitHubTimestampProvider,
    HeadReference,
    Revision,
    RevisionTimestampProvider,
    SourceDescriptor,
    TimestampLookupError,
)

__version__ = "0.1.0"

__all__ = [
    "SYSTEM",
    "Credential",
    "CredentialResolver",
    "GitHubTimestampProvider",
    "HeadReference",
    "InMemoryCredentialStore",
    "Revision",
    "RevisionTimestampProvider",
    "SourceDescriptor",
    "StalebranchConfig",
    "StalenessDecision",
    "StalenessPolicy",
    "TimeUnit",
    "TimestampLookupError",
    "create_policy",
    "load_config",
]
