"""Shared test fixtures for stalebranch."""

import pytest
from unittest.mock import MagicMock

from pydantic import SecretStr

from stalebranch.config.models import StalebranchConfig
from stalebranch.scm.base import CredentialResolver, RevisionTimestampProvider
from stalebranch.scm.models import Credential, HeadReference, Revision, SourceDescriptor

HOUR_MS = 3_600_000

# 2026-01-15T12:00:00Z
NOW_MS = 1_768_478_400_000


@pytest.fixture
def fixed_clock():
    return lambda: NOW_MS


@pytest.fixture
def branch_head():
    return HeadReference(name="main", kind="branch")


@pytest.fixture
def tag_head():
    return HeadReference(name="v1.2.0", kind="tag")


@pytest.fixture
def current_revision(branch_head):
    return Revision(head=branch_head, hash="a1b2c3d")


@pytest.fixture
def sample_source():
    return SourceDescriptor(
        source_id="widget-api",
        remote="https://github.com/acme/widget-api.git",
        credentials_id="cred-A",
    )


@pytest.fixture
def cred_a():
    return Credential(id="cred-A", secret=SecretStr("token-a"), description="deploy bot")


@pytest.fixture
def cred_b():
    return Credential(id="cred-B", secret=SecretStr("token-b"))


@pytest.fixture
def mock_resolver(cred_a, cred_b):
    resolver = MagicMock(spec=CredentialResolver)
    resolver.lookup.return_value = [cred_b, cred_a]
    return resolver


@pytest.fixture
def mock_timestamps():
    provider = MagicMock(spec=RevisionTimestampProvider)
    provider.get_timestamp.return_value = NOW_MS - HOUR_MS
    return provider


@pytest.fixture
def sample_config():
    return StalebranchConfig()
