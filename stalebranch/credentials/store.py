"""In-memory credential store backing the CredentialResolver contract."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence

from pydantic import SecretStr

from stalebranch.config.models import CredentialEntry
from stalebranch.scm.base import CredentialResolver
from stalebranch.scm.models import Credential, Principal

logger = logging.getLogger(__name__)


class InMemoryCredentialStore(CredentialResolver):
    """Ordered credential store.

    Elevated principals see every credential. Other principals only see
    user-scoped ones. Domain filters, when given, keep credentials whose
    domain is unset or listed.
    """

    def __init__(self, credentials: Iterable[Credential] = ()) -> None:
        self._credentials: list[Credential] = list(credentials)

    def __len__(self) -> int:
        return len(self._credentials)

    def add(self, credential: Credential) -> None:
        self._credentials.append(credential)

    def remove(self, credential_id: str) -> bool:
        """Remove every credential with this id. Returns True if any was removed."""
        before = len(self._credentials)
        self._credentials = [c for c in self._credentials if c.id != credential_id]
        return len(self._credentials) != before

    def lookup(
        self, principal: Principal, domain_filters: Sequence[str] = ()
    ) -> list[Credential]:
        visible = [
            c for c in self._credentials
            if principal.elevated or c.scope == "user"
        ]
        if domain_filters:
            allowed = set(domain_filters)
            visible = [c for c in visible if c.domain is None or c.domain in allowed]
        logger.debug(
            "%d credential(s) visible to %s", len(visible), principal.name
        )
        return visible


def credentials_from_config(entries: Iterable[CredentialEntry]) -> list[Credential]:
    """Build credentials from config entries, reading secrets from the environment.

    Entries whose token variable is unset are skipped.
    """
    result: list[Credential] = []
    for entry in entries:
        token = os.environ.get(entry.token_env, "")
        if not token:
            logger.warning(
                "Skipping credential %s: %s is not set", entry.id, entry.token_env
            )
            continue
        result.append(
            Credential(
                id=entry.id,
                secret=SecretStr(token),
                description=entry.description,
                scope=entry.scope,
                domain=entry.domain,
            )
        )
    return result
