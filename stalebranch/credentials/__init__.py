"""Credential storage and lookup."""

from stalebranch.credentials.store import InMemoryCredentialStore, credentials_from_config

__all__ = ["InMemoryCredentialStore", "credentials_from_config"]
